import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from pageplan.errors import InvalidArgument, RoutePlanError
from pageplan.models.plan_request import PlanRequest
from pageplan.models.plan_response import PlanResponse
from pageplan.services.planner import build_route_plan

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/plan",
    response_model=PlanResponse,
    summary="Plan the pages of a content build",
    description=(
        "Normalises the submitted front-matter records, drops drafts and broken "
        "records, and returns every route the renderer must build: paginated "
        "listings, one page per post, and paginated listings per tag."
    ),
)
@limiter.limit("30/minute")
async def plan(request: Request, body: PlanRequest) -> PlanResponse:
    """Build the route plan for *records* with the given site configuration."""
    logger.info(
        "Plan request received",
        extra={"records": len(body.records), "page_size": body.config.page_size},
    )

    try:
        result = build_route_plan(body.records, body.config)
    except InvalidArgument as exc:
        logger.warning("Invalid pagination settings: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except RoutePlanError as exc:
        logger.error("Inconsistent route plan: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc))

    return PlanResponse(
        routes_count=len(result.routes),
        items_indexed=result.items_indexed,
        routes=result.routes,
        warnings=result.warnings,
        popular_tags=result.popular_tags,
        feed=result.feed,
    )
