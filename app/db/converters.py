"""
Conversion between calendar dates and the store's native DATE column.

The pair `date_to_storage` / `date_from_storage` is pure and satisfies

    date_from_storage(date_to_storage(d)) == d

for every `datetime.date` between `date.min` and `date.max`, with `None`
mapping to `None` in both directions. `CalendarDate` plugs the pair into
SQLAlchemy so the value lands in a queryable DATE column.
"""

from datetime import date, datetime
from typing import Any, Optional, Union

from sqlalchemy import Date
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

DateLike = Union[date, datetime]


def date_to_storage(value: Optional[DateLike]) -> Optional[date]:
    """
    Map a domain calendar date to the native DATE value.

    A datetime keeps its own year/month/day; no timezone conversion is
    applied, so an aware value never shifts across a day boundary.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date, got {type(value).__name__}")


def date_from_storage(value: Any) -> Optional[date]:
    """Map a value read from a DATE column back to a calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # SQLite drivers may hand back the ISO text form
        return date.fromisoformat(value[:10])
    raise TypeError(f"Cannot read a calendar date from {type(value).__name__}")


class CalendarDate(TypeDecorator):
    """DATE column holding a calendar date (no time-of-day, no timezone)."""

    impl = Date
    cache_ok = True

    @property
    def python_type(self) -> type:
        return date

    def process_bind_param(self, value: Any, dialect: Dialect) -> Optional[date]:
        return date_to_storage(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Optional[date]:
        return date_from_storage(value)


__all__ = ["date_to_storage", "date_from_storage", "CalendarDate"]
