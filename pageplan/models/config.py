from typing import List

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 5
DEFAULT_INDEX_PATH = "/"
DEFAULT_PAGE_SUFFIX = "/page/{page}"
DEFAULT_TAG_PATH = "/tag/{slug}"
DEFAULT_POST_PATH = "/{slug}/"
DEFAULT_ALL_POSTS_PATH = "/all-posts/"


class SiteConfig(BaseModel):
    """Build-time settings shared by the index builder, paginator and tag indexer.

    One instance is created per build and passed explicitly to every stage.
    """

    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        description="Number of items on each listing page.",
    )
    index_path: str = Field(
        default=DEFAULT_INDEX_PATH,
        description="Canonical root of the main listing. Page 1 is served here.",
    )
    page_suffix: str = Field(
        default=DEFAULT_PAGE_SUFFIX,
        description="Suffix appended to a listing root for pages 2 and above.",
        examples=["/page/{page}"],
    )
    tag_path: str = Field(
        default=DEFAULT_TAG_PATH,
        description="Root of a tag listing; ``{slug}`` is the tag slug.",
    )
    post_path: str = Field(
        default=DEFAULT_POST_PATH,
        description="Route of a single post; ``{slug}`` is the post slug.",
    )
    all_posts_path: str = DEFAULT_ALL_POSTS_PATH
    site_url: str = Field(
        default="",
        description="Absolute site origin used for feed URLs and rel=prev/next links.",
        examples=["https://example.com"],
    )
    author_name: str = ""
    popular_posts_slugs: List[str] = Field(default_factory=list)
    popular_tags_limit: int = Field(default=10, ge=0)
    paginator_max_displayed: int = Field(
        default=5,
        ge=3,
        description="How many page numbers the pager widget shows at most.",
    )
