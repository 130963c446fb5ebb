# app/services/pagination.py
"""
Windowed listing shared by the food, user, order and invoice endpoints.

A listing is two independent reads over the same filter: the window
(skip/limit) and the total count. Both take the very same filter mapping
so the reported total always describes the universe the window was cut
from.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from app.db.deadline import Deadline
from app.db.store import Document, EntityStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_RECORD_PER_PAGE = 10

# keeps skip = (page - 1) * record_per_page inside a signed 64-bit integer
MAX_PAGE = 2**31 - 1
MAX_RECORD_PER_PAGE = 2**31 - 1


@dataclass(frozen=True)
class PageWindow:
    page: int
    record_per_page: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.record_per_page

    @property
    def limit(self) -> int:
        return self.record_per_page


@dataclass
class ListingPage:
    page: int
    record_per_page: int
    total_count: int
    items: List[Document]

    @property
    def has_next(self) -> bool:
        return self.page * self.record_per_page < self.total_count


def _positive_int(value: Any, default: int, maximum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    return min(number, maximum)


def paginate(
    page: Any = None,
    record_per_page: Any = None,
    default_page: int = DEFAULT_PAGE,
    default_record_per_page: int = DEFAULT_RECORD_PER_PAGE,
) -> PageWindow:
    """
    Turn raw page / recordPerPage values into a window.

    Anything missing, unparsable or below 1 falls back to the default;
    values past MAX_PAGE / MAX_RECORD_PER_PAGE are clamped to them.
    """
    return PageWindow(
        page=_positive_int(page, default_page, MAX_PAGE),
        record_per_page=_positive_int(
            record_per_page, default_record_per_page, MAX_RECORD_PER_PAGE
        ),
    )


class ListingService:
    def __init__(self, store: EntityStore, timeout_seconds: float) -> None:
        self._store = store
        self._timeout = timeout_seconds

    def list_page(
        self,
        collection: str,
        window: PageWindow,
        filters: Optional[Mapping[str, Any]] = None,
        deadline: Optional[Deadline] = None,
    ) -> ListingPage:
        deadline = deadline or Deadline(self._timeout)
        filters = dict(filters or {})

        items = self._store.find_many(
            collection,
            filters,
            skip=window.skip,
            limit=window.limit,
            deadline=deadline,
        )
        total_count = self._store.count(collection, filters, deadline=deadline)

        logger.debug(
            "Listed %s page %s (%s per page): %s of %s",
            collection, window.page, window.record_per_page, len(items), total_count,
        )

        return ListingPage(
            page=window.page,
            record_per_page=window.record_per_page,
            total_count=total_count,
            items=items,
        )
