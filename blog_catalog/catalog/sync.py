"""
Two-way mapping between the filter state and a URL query string.

The synchronizer starts ``PENDING``. The first time it sees the URL's
query parameters it copies them into the filter store in one update
and moves to ``SYNCED``; that happens once per page load, however often
the query parameters change afterwards. From then on the filter state
is the source of truth and every change to it is written back to the
URL, but only when the resulting query string actually differs.

Query parameters::

    q           search text, omitted when empty
    categories  comma separated category IDs, omitted when empty
    tags        comma separated tag IDs, omitted when empty
    author      author ID, omitted when unset
    sort        ``date`` or ``title``, always written
    order       ``asc`` or ``desc``, always written
    page        page number, omitted when 1
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl, urlencode

from typing_extensions import Protocol

from .filters import FilterStore
from .schemas import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, FilterState


logger = logging.getLogger(__name__)

QueryParams = Mapping[str, Union[str, Sequence[str]]]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_query_string(query_string: str) -> Dict[str, Union[str, List[str]]]:
    """Decode a query string; keys given more than once map to a list."""
    params: Dict[str, Union[str, List[str]]] = {}
    for key, value in parse_qsl(query_string.lstrip("?"), keep_blank_values=True):
        if key not in params:
            params[key] = value
        else:
            prev = params[key]
            params[key] = (prev if isinstance(prev, list) else [prev]) + [value]
    return params


def _single(params: QueryParams, key: str) -> Optional[str]:
    # Repeated keys arrive as lists and are ignored
    value = params.get(key)
    return value if isinstance(value, str) else None


def _parse_page(raw: Optional[str]) -> Optional[int]:
    m = _LEADING_INT.match(raw if raw is not None else "1")
    return int(m.group(1)) if m else None


def filter_state_from_params(
    params: QueryParams,
    base: Optional[FilterState] = None,
) -> FilterState:
    """Overlay the URL query parameters on ``base``.

    Fields absent from the URL keep their value from ``base``, except
    sort, order and page which always fall back to ``date``, ``desc``
    and 1. The page is clamped to at least 1.
    """
    state = base or FilterState()
    changes: Dict[str, object] = {}

    q = _single(params, "q")
    if q is not None:
        changes["q"] = q
    categories = _single(params, "categories")
    if categories:
        changes["category_ids"] = categories.split(",")
    tags = _single(params, "tags")
    if tags:
        changes["tag_ids"] = tags.split(",")
    author = _single(params, "author")
    if author:
        changes["author_id"] = author

    changes["sort_by"] = "title" if _single(params, "sort") == "title" else DEFAULT_SORT_BY
    changes["sort_order"] = "asc" if _single(params, "order") == "asc" else DEFAULT_SORT_ORDER

    page = _parse_page(_single(params, "page"))
    changes["page"] = max(1, page) if page is not None else 1
    return state.model_copy(update=changes)


def params_from_filter_state(state: FilterState) -> Dict[str, str]:
    """Project the state onto query parameters, skipping defaults."""
    query: Dict[str, str] = {}
    if state.q:
        query["q"] = state.q
    if state.category_ids:
        query["categories"] = ",".join(state.category_ids)
    if state.tag_ids:
        query["tags"] = ",".join(state.tag_ids)
    if state.author_id:
        query["author"] = state.author_id
    query["sort"] = state.sort_by
    query["order"] = state.sort_order
    if state.page != 1:
        query["page"] = str(state.page)
    return query


def to_query_string(state: FilterState) -> str:
    return urlencode(params_from_filter_state(state))


class Location(Protocol):
    """The URL being kept in sync: its query string and a way to replace it."""

    @property
    def query_string(self) -> str: ...

    def replace(self, query_string: str) -> None: ...


class MemoryLocation:
    """An in-memory URL, recording every replacement made through it."""

    def __init__(self, path: str = "/blogs", query_string: str = ""):
        self.path = path
        self.query_string = query_string.lstrip("?")
        self.replacements: List[str] = []

    def navigate(self, query_string: str) -> None:
        """Change the URL from outside the synchronizer."""
        self.query_string = query_string.lstrip("?")

    def replace(self, query_string: str) -> None:
        self.query_string = query_string
        self.replacements.append(query_string)

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query_string}" if self.query_string else self.path


class SyncStatus(enum.Enum):
    PENDING = "pending"
    SYNCED = "synced"


class FilterSynchronizer:
    def __init__(self, store: FilterStore, location: Location):
        self.store = store
        self.location = location
        self.status = SyncStatus.PENDING
        self._unsubscribe: Callable[[], None] = store.subscribe(self._mirror)

    def on_query_change(self, params: Optional[QueryParams] = None) -> bool:
        """Handle the URL's query parameters, as on mount or after navigation.

        Only the first call hydrates the filter store; later calls are
        ignored. ``params`` defaults to the location's current query
        string. Returns whether hydration happened.
        """
        if self.status is SyncStatus.SYNCED:
            return False
        if params is None:
            params = parse_query_string(self.location.query_string)
        state = filter_state_from_params(params, self.store.state)
        self.status = SyncStatus.SYNCED
        logger.debug("Hydrating filters from URL: %s", state)
        self.store.replace(state)
        return True

    def _mirror(self, state: FilterState) -> None:
        if self.status is not SyncStatus.SYNCED:
            return
        target = to_query_string(state)
        if target != self.location.query_string:
            self.location.replace(target)

    def close(self) -> None:
        self._unsubscribe()
