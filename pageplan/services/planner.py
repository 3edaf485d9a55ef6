"""Route plan generation.

Wires the stages together: raw records go through the index builder, the
sorted items are paginated for the main listing and for every tag, and each
post gets its own route.  The result is a flat list of :class:`Route` objects
for the page renderer.

Any two routes sharing a path, ignoring case, abort the build with
:class:`RoutePlanError`.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pageplan.errors import UNKNOWN_SLUG, RoutePlanError
from pageplan.models.config import SiteConfig
from pageplan.models.content import ContentItem
from pageplan.models.page import Neighbors, Route, RouteKind
from pageplan.models.plan import BuildWarning, RoutePlan
from pageplan.services.feed import build_feed_entries
from pageplan.services.indexer import RecordLike, build_index
from pageplan.services.normalizer import slugify
from pageplan.services.paginator import neighbors, page_window, paginate, route_for_page
from pageplan.services.tags import index_by_tag, popular_tags, tag_root

logger = logging.getLogger(__name__)


def build_route_plan(
    records: Sequence[RecordLike], config: Optional[SiteConfig] = None
) -> RoutePlan:
    """Build every route of the site from the raw content *records*.

    Raises:
        RoutePlanError: two generated routes share a path.
        InvalidArgument: the pagination settings in *config* are unusable.
    """
    config = config or SiteConfig()
    items, warnings = build_index(records)
    config = config.model_copy(
        update={"popular_posts_slugs": resolve_popular_posts(items, config, warnings)}
    )
    groups = index_by_tag(items)

    routes: List[Route] = []
    routes.extend(listing_routes(items, config, root=config.index_path))
    routes.extend(post_routes(items, config))
    for tag_slug, group in groups.items():
        routes.extend(
            listing_routes(
                group.items,
                config,
                root=tag_root(tag_slug, config),
                kind="tag",
                extra={"tag": group.display_name, "tag_slug": tag_slug},
            )
        )
    routes.append(
        Route(
            path=config.all_posts_path,
            kind="all_posts",
            context={"slugs": [item.slug for item in items]},
        )
    )

    _check_unique_paths(routes)
    logger.info(
        "Route plan built",
        extra={"routes": len(routes), "tags": len(groups), "items": len(items)},
    )
    return RoutePlan(
        routes=routes,
        warnings=warnings,
        items_indexed=len(items),
        popular_tags=popular_tags(groups, config.popular_tags_limit),
        feed=build_feed_entries(items, config),
    )


def resolve_popular_posts(
    items: Sequence[ContentItem], config: SiteConfig, warnings: List[BuildWarning]
) -> List[str]:
    """Featured slugs from *config* that point at an indexed post.

    Unknown slugs (drafts, typos, removed posts) are dropped and reported.
    """
    known = {item.slug for item in items}
    resolved: List[str] = []
    for declared in config.popular_posts_slugs:
        slug = slugify(declared)
        if slug in known:
            if slug not in resolved:
                resolved.append(slug)
            continue
        message = f"Popular post '{declared}' is not an indexed post; dropped."
        logger.warning(message)
        warnings.append(
            BuildWarning(kind=UNKNOWN_SLUG, message=message, records=[{"slug": declared}])
        )
    return resolved


def listing_routes(
    items: Sequence[ContentItem],
    config: SiteConfig,
    root: str,
    kind: RouteKind = "listing",
    extra: Optional[Dict[str, Any]] = None,
) -> List[Route]:
    """One route per page of *items*, rooted at *root*."""
    routes: List[Route] = []
    for page in paginate(items, config.page_size):
        number, total = page.page_number, page.total_pages
        links = neighbors(number, total, root, config.page_suffix)
        path = route_for_page(number, root, config.page_suffix, total_pages=total)
        context: Dict[str, Any] = {
            **(extra or {}),
            "current_page": number,
            "pages_sum": total,
            "skip": (number - 1) * config.page_size,
            "limit": config.page_size,
            "slugs": [item.slug for item in page.items],
            "prev": links.prev,
            "next": links.next,
            "pager": page_window(number, total, config.paginator_max_displayed),
            "popular_posts_slugs": list(config.popular_posts_slugs),
            "meta": page_meta(path, links, config),
        }
        routes.append(Route(path=path, kind=kind, context=context))
    return routes


def post_routes(items: Sequence[ContentItem], config: SiteConfig) -> List[Route]:
    """One route per post; ``previous`` is the older neighbour, ``next`` the newer."""
    routes: List[Route] = []
    for index, item in enumerate(items):
        previous = items[index + 1].slug if index + 1 < len(items) else None
        newer = items[index - 1].slug if index > 0 else None
        routes.append(
            Route(
                path=config.post_path.format(slug=item.slug),
                kind="post",
                context={
                    "slug": item.slug,
                    "previous": previous,
                    "next": newer,
                    "recommended": list(item.recommended),
                    "popular_posts_slugs": list(config.popular_posts_slugs),
                },
            )
        )
    return routes


def page_meta(path: str, links: Neighbors, config: SiteConfig) -> Dict[str, Optional[str]]:
    """Absolute canonical / rel=prev / rel=next URLs for a listing page."""
    return {
        "canonical": absolute_url(path, config),
        "prev": absolute_url(links.prev, config),
        "next": absolute_url(links.next, config),
    }


def absolute_url(path: Optional[str], config: SiteConfig) -> Optional[str]:
    if path is None:
        return None
    return config.site_url.rstrip("/") + path


def _check_unique_paths(routes: List[Route]) -> None:
    seen: Dict[str, Route] = {}
    for route in routes:
        key = route.path.lower()
        other = seen.get(key)
        if other is not None:
            raise RoutePlanError(
                f"Path {route.path!r} is produced by both a {other.kind} route "
                f"and a {route.kind} route."
            )
        seen[key] = route
