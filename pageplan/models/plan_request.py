from typing import Any, Dict, List

from pydantic import BaseModel, Field

from pageplan.models.config import SiteConfig


class PlanRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(
        default_factory=list,
        max_length=5000,
        description="Front-matter of every content file, as parsed by the content loader.",
    )
    config: SiteConfig = Field(default_factory=SiteConfig)
