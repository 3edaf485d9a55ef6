from datetime import date, datetime
from typing import Any, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RawRecord(BaseModel):
    """Front-matter of one content file, as handed over by the content loader.

    Every field is optional here; the index builder decides which records are
    complete enough to become a :class:`ContentItem`.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    slug: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    published: Union[datetime, date, str, None] = Field(
        default=None,
        validation_alias=AliasChoices("published", "publishedAt", "published_at", "date"),
    )
    modified: Union[datetime, date, str, None] = Field(
        default=None,
        validation_alias=AliasChoices("modified", "modifiedAt", "modified_at"),
    )
    tags: List[str] = Field(default_factory=list)
    draft: bool = False
    recommended: List[str] = Field(default_factory=list)
    type: Optional[str] = None

    @field_validator("slug", "title", "description", "type", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tags", "recommended", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        # Front-matter may declare `tags: a, b` instead of a YAML list.
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return [str(v).strip() for v in value if v is not None and str(v).strip()]
        return value

    @field_validator("draft", mode="before")
    @classmethod
    def _none_is_not_draft(cls, value: Any) -> Any:
        return False if value is None else value


class ContentItem(BaseModel):
    """One published post, normalised and immutable."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str = ""
    description: str = ""
    published_at: datetime
    modified_at: Optional[datetime] = None
    tags: Tuple[str, ...] = ()  # declaration order, no duplicates
    draft: bool = False
    recommended: Tuple[str, ...] = ()
