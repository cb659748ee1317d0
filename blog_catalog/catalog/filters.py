"""
Filter store: owns the current ``FilterState``.

Every reducer replaces the state with a new immutable instance and then
notifies the subscribed listeners. Changing the search text, a filter
or the sort order sends the user back to page 1.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .schemas import FilterState, SortBy, SortOrder

Listener = Callable[[FilterState], None]


class FilterStore:
    def __init__(self, state: Optional[FilterState] = None):
        self._state = state or FilterState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> FilterState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, state: FilterState) -> None:
        """Install ``state`` in a single update."""
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _update(self, **changes) -> None:
        self.replace(self._state.model_copy(update=changes))

    def set_query(self, q: str) -> None:
        self._update(q=q, page=1)

    def set_category_ids(self, ids: Sequence[str]) -> None:
        self._update(category_ids=list(ids), page=1)

    def set_tag_ids(self, ids: Sequence[str]) -> None:
        self._update(tag_ids=list(ids), page=1)

    def set_author_id(self, author_id: Optional[str]) -> None:
        self._update(author_id=author_id, page=1)

    def set_sort(self, sort_by: SortBy, sort_order: SortOrder) -> None:
        self._update(sort_by=sort_by, sort_order=sort_order, page=1)

    def set_page(self, page: int) -> None:
        self._update(page=max(1, page))

    def reset(self) -> None:
        self.replace(FilterState())
