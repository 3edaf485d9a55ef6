from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from pageplan.errors import WarningKind
from pageplan.models.page import PopularTag, Route


class BuildWarning(BaseModel):
    """A recoverable problem found while building the content index.

    The offending record was excluded (or one of two duplicates was dropped)
    and the build carried on.
    """

    kind: WarningKind
    message: str
    records: List[Dict[str, Any]] = Field(default_factory=list)
    """Identifying fields (position, slug, title, published) of each record involved."""


class FeedEntry(BaseModel):
    title: str
    description: str
    url: str
    guid: str
    date: datetime
    categories: List[str]
    author: Optional[str] = None


class RoutePlan(BaseModel):
    """Everything a renderer needs to emit the site for one build."""

    routes: List[Route]
    warnings: List[BuildWarning]
    items_indexed: int
    popular_tags: List[PopularTag]
    feed: List[FeedEntry]
