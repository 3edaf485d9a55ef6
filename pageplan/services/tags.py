"""Grouping of content items by tag.

Tags are free-form strings.  Two spellings that slugify to the same value
("JavaScript", "javascript ") are the same tag for routing.  The group keeps
the spelling it met first while walking the items in listing order.
"""

import logging
from typing import Dict, List, Optional, Sequence

from pageplan.models.config import SiteConfig
from pageplan.models.content import ContentItem
from pageplan.models.page import PopularTag, TagGroup
from pageplan.services.normalizer import slugify

logger = logging.getLogger(__name__)


def index_by_tag(items: Sequence[ContentItem]) -> Dict[str, TagGroup]:
    """Map each tag slug to its display name and the items carrying it.

    *items* must already be in listing order; each group preserves it.  An
    item declaring two spellings of one tag appears in that group once.
    """
    names: Dict[str, str] = {}
    members: Dict[str, List[ContentItem]] = {}

    for item in items:
        seen = set()
        for tag in item.tags:
            tag_slug = slugify(tag)
            if not tag_slug:
                logger.warning("Ignoring tag %r of '%s': empty slug", tag, item.slug)
                continue
            if tag_slug in seen:
                continue
            seen.add(tag_slug)
            names.setdefault(tag_slug, tag)
            members.setdefault(tag_slug, []).append(item)

    return {
        tag_slug: TagGroup(slug=tag_slug, display_name=names[tag_slug], items=members[tag_slug])
        for tag_slug in names
    }


def popular_tags(
    groups: Dict[str, TagGroup], limit: Optional[int] = None
) -> List[PopularTag]:
    """Rank tag groups by item count, most used first, ties by slug."""
    ranked = sorted(groups.values(), key=lambda group: (-len(group.items), group.slug))
    if limit is not None:
        ranked = ranked[:limit]
    return [
        PopularTag(slug=group.slug, name=group.display_name, count=len(group.items))
        for group in ranked
    ]


def tag_root(tag_slug: str, config: SiteConfig) -> str:
    """Path of page 1 of the listing for *tag_slug*."""
    return config.tag_path.format(slug=tag_slug)
