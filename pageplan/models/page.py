from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from pageplan.models.content import ContentItem

RouteKind = Literal["listing", "post", "tag", "all_posts"]


class Page(BaseModel):
    """A contiguous window over a sorted list of content items."""

    page_number: int = Field(ge=1)
    items: List[ContentItem]
    total_pages: int = Field(ge=1)


class Neighbors(BaseModel):
    """Link targets for rel=prev / rel=next. ``None`` at either end."""

    prev: Optional[str] = None
    next: Optional[str] = None


class Route(BaseModel):
    """A URL path plus the data the page renderer needs to build it."""

    path: str
    kind: RouteKind
    context: Dict[str, Any] = Field(default_factory=dict)


class TagGroup(BaseModel):
    slug: str
    display_name: str
    items: List[ContentItem]


class PopularTag(BaseModel):
    slug: str
    name: str
    count: int
