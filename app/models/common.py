# app/models/common.py

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    page: int
    record_per_page: int
    total_count: int
    items: List[T]


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # naive datetimes from clients (and from SQLite) are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
