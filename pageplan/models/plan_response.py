from typing import List

from pydantic import BaseModel

from pageplan.models.page import PopularTag, Route
from pageplan.models.plan import BuildWarning, FeedEntry


class PlanResponse(BaseModel):
    routes_count: int
    items_indexed: int
    routes: List[Route]
    warnings: List[BuildWarning]
    popular_tags: List[PopularTag]
    feed: List[FeedEntry]
