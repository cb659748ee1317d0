"""
Pydantic schema definitions for the catalog module.

``FilterState`` holds the search, filter, sort and page values that
drive the catalogue query. It is immutable: the filter store replaces
it with a new instance on every change. ``PaginatedBlogs`` bundles a
page of blogs with pagination metadata so that clients know how many
pages of results are available.
"""

from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Literal

from ..models import Blog

SortBy = Literal["date", "title"]
SortOrder = Literal["asc", "desc"]

DEFAULT_SORT_BY: SortBy = "date"
DEFAULT_SORT_ORDER: SortOrder = "desc"


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    q: str = ""
    category_ids: List[str] = Field(default_factory=list)
    tag_ids: List[str] = Field(default_factory=list)
    author_id: Optional[str] = None
    sort_by: SortBy = DEFAULT_SORT_BY
    sort_order: SortOrder = DEFAULT_SORT_ORDER
    page: int = Field(default=1, ge=1)


class QueryResult(NamedTuple):
    page_items: List[Blog]
    total: int


class PaginatedBlogs(BaseModel):
    """A wrapper for paginated results returned from ``/blogs`` endpoint."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: List[Blog]


class CatalogStats(BaseModel):
    total_blogs: int
    total_authors: int
    recent_blogs: int
