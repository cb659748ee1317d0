"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET /blogs  : filtered, sorted and paginated blogs
- GET /stats  : blog and author counts

``/blogs`` takes the same query parameters the browser URL carries
(``q``, ``categories``, ``tags``, ``author``, ``sort``, ``order``,
``page``), so a catalogue URL can be forwarded to it unchanged.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..blogs import BlogService
from ..router import get_author_service, get_blog_service
from ..taxonomy import AuthorService
from .query import catalog_stats, page_count, query_blogs
from .schemas import CatalogStats, PaginatedBlogs
from .sync import filter_state_from_params

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/blogs", response_model=PaginatedBlogs)
def list_catalog(
    request: Request,
    q: Optional[str] = Query(default=None, description="Search text matched against title and content"),
    categories: Optional[str] = Query(default=None, description="Comma separated category IDs"),
    tags: Optional[str] = Query(default=None, description="Comma separated tag IDs"),
    author: Optional[str] = Query(default=None, description="Author ID"),
    sort: Optional[str] = Query(default=None, description="Sort field: date or title"),
    order: Optional[str] = Query(default=None, description="Sort order: asc or desc"),
    page: Optional[str] = Query(default=None, description="Page number (1-indexed)"),
    blogs: BlogService = Depends(get_blog_service),
) -> PaginatedBlogs:
    """
    Returns a paginated list of blogs.

    The page is not clamped: asking for a page past the end returns no
    items together with the true total.
    """
    raw = {
        "q": q,
        "categories": categories,
        "tags": tags,
        "author": author,
        "sort": sort,
        "order": order,
        "page": page,
    }
    params = {k: v for k, v in raw.items() if v is not None}
    state = filter_state_from_params(params)

    page_size = request.app.state.settings.page_size
    page_items, total = query_blogs(blogs.list_all(), state, page_size=page_size)
    return PaginatedBlogs(
        page=state.page,
        page_size=page_size,
        total=total,
        total_pages=page_count(total, page_size),
        items=page_items,
    )


@router.get("/stats", response_model=CatalogStats)
def stats(
    blogs: BlogService = Depends(get_blog_service),
    authors: AuthorService = Depends(get_author_service),
) -> CatalogStats:
    return catalog_stats(blogs.list_all(), authors.list_all())
