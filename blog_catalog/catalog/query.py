"""
Catalogue query engine.

``query_blogs`` is a pure function over an in-memory list of blogs and
a ``FilterState``. It performs simple full-text matching on the title
and content, applies the category/tag/author filters, sorts the
result and slices out the requested page.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from ..models import Author, Blog
from ..text import strip_diacritics
from .schemas import CatalogStats, FilterState, QueryResult

PAGE_SIZE = 6
PAGE_WINDOW = 5


def _title_key(title: str):
    # Collation key: accents and case ignored first, raw title breaks ties
    return (strip_diacritics(title).casefold(), title)


def _matches(blog: Blog, state: FilterState, needle: str) -> bool:
    if needle:
        blob = f"{blog.title} {blog.content}".lower()
        if needle not in blob:
            return False
    if state.category_ids and not set(blog.category_ids).intersection(state.category_ids):
        return False
    if state.tag_ids and not set(blog.tag_ids).intersection(state.tag_ids):
        return False
    if state.author_id and blog.author_id != state.author_id:
        return False
    return True


def query_blogs(
    blogs: Sequence[Blog],
    state: FilterState,
    page_size: int = PAGE_SIZE,
) -> QueryResult:
    """Filter, sort and paginate ``blogs`` according to ``state``.

    Parameters
    ----------
    blogs : Sequence[Blog]
        The full blog list. It is not modified.
    state : FilterState
        Search text, category/tag/author filters, sort and page.
        Filters combine conjunctively; within the category or tag
        filter a blog matches when it shares at least one ID.
    page_size : int
        Number of blogs per page.

    Returns
    -------
    QueryResult
        The blogs of the requested page and the number of blogs that
        matched before pagination. A page past the end is empty but
        still reports the true total; the page is never clamped here.
    """
    needle = state.q.strip().lower()
    items = [b for b in blogs if _matches(b, state, needle)]

    # list.sort is stable, reverse=True included
    reverse = state.sort_order == "desc"
    if state.sort_by == "title":
        items.sort(key=lambda b: _title_key(b.title), reverse=reverse)
    else:
        items.sort(key=lambda b: b.created_at, reverse=reverse)

    start = (state.page - 1) * page_size
    return QueryResult(items[start:start + page_size], len(items))


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, -(-total // page_size))


def page_window(page: int, pages: int, size: int = PAGE_WINDOW) -> List[int]:
    """Page numbers to display around ``page`` in a pager of ``size`` buttons."""
    start = max(1, page - size // 2)
    end = min(pages, start + size - 1)
    return list(range(start, end + 1))


def _parse_timestamp(value: str) -> Optional[datetime]:
    # Naive timestamps are taken as UTC; unparseable ones are skipped
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def catalog_stats(
    blogs: Sequence[Blog],
    authors: Sequence[Author],
    now: Optional[datetime] = None,
) -> CatalogStats:
    """Count blogs, authors and blogs created during the last seven days."""
    now = now or datetime.now(timezone.utc)
    week_ago = now - timedelta(days=7)
    recent = 0
    for b in blogs:
        created = _parse_timestamp(b.created_at)
        if created is not None and created > week_ago:
            recent += 1
    return CatalogStats(total_blogs=len(blogs), total_authors=len(authors), recent_blogs=recent)
