"""RSS feed entries for the newest posts."""

from typing import List, Optional, Sequence

from pageplan.models.config import SiteConfig
from pageplan.models.content import ContentItem
from pageplan.models.plan import FeedEntry

_FEED_LIMIT = 1000


def post_url(slug: str, config: SiteConfig) -> str:
    """Absolute URL of a post, e.g. ``https://example.com/my-post/``."""
    return config.site_url.rstrip("/") + config.post_path.format(slug=slug)


def build_feed_entries(
    items: Sequence[ContentItem],
    config: SiteConfig,
    limit: Optional[int] = _FEED_LIMIT,
) -> List[FeedEntry]:
    """Serialise *items* (already newest first) into feed entries."""
    selected = items if limit is None else items[:limit]
    entries: List[FeedEntry] = []
    for item in selected:
        url = post_url(item.slug, config)
        entries.append(
            FeedEntry(
                title=item.title,
                description=item.description,
                url=url,
                guid=url,
                date=item.published_at,
                categories=list(item.tags),
                author=config.author_name or None,
            )
        )
    return entries
