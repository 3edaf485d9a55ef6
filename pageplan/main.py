import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pageplan.models.config import SiteConfig
from pageplan.routers.plan import limiter, router as plan_router

_VERSION = "1.0.0"

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "jsonline": {
                "format": (
                    '{"ts": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
                    '"func": "%(funcName)s", "msg": "%(message)s"}'
                ),
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "jsonline",
            },
        },
        "loggers": {
            "pageplan": {"level": "INFO"},
        },
        "root": {"level": "WARNING", "handlers": ["stderr"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="pageplan",
    description=(
        "Build-time page planner for a statically generated blog. Submit the "
        "front-matter of every post and get back the paginated listing, post "
        "and tag routes the renderer has to produce."
    ),
    version=_VERSION,
    openapi_tags=[{"name": "plan", "description": "Route plan generation."}],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def unhandled_planner_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Planning failed unexpectedly for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "The page plan could not be built."})


app.include_router(plan_router, tags=["plan"])


@app.get("/", summary="Health check")
async def health() -> dict:
    """Report liveness together with the defaults a bare ``/plan`` call would use."""
    defaults = SiteConfig()
    return {
        "status": "ok",
        "service": "pageplan",
        "version": _VERSION,
        "defaults": {
            "page_size": defaults.page_size,
            "index_path": defaults.index_path,
            "page_suffix": defaults.page_suffix,
            "tag_path": defaults.tag_path,
        },
    }
