"""Tests for calendar date conversion to and from the DATE column."""
from datetime import date, datetime, timedelta, timezone

import pytest

from app.db.converters import CalendarDate, date_from_storage, date_to_storage

REPRESENTATIVE_DATES = [
    date.min,
    date(1942, 12, 11),
    date(1972, 5, 5),
    date(2000, 2, 29),
    date(2024, 12, 31),
    date.max,
]


class TestRoundTrip:
    @pytest.mark.parametrize("value", REPRESENTATIVE_DATES)
    def test_round_trip_preserves_date(self, value):
        assert date_from_storage(date_to_storage(value)) == value

    def test_none_round_trips(self):
        assert date_to_storage(None) is None
        assert date_from_storage(None) is None


class TestToStorage:
    def test_aware_datetime_keeps_its_own_calendar_day(self):
        """A late-evening time in UTC-5 is already the next day in UTC; no shift allowed."""
        value = datetime(1972, 5, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert date_to_storage(value) == date(1972, 5, 5)

    def test_naive_datetime_drops_time_of_day(self):
        assert date_to_storage(datetime(1973, 6, 6, 0, 0, 1)) == date(1973, 6, 6)

    def test_rejects_non_dates(self):
        with pytest.raises(TypeError):
            date_to_storage("1972-05-05")  # type: ignore[arg-type]


class TestFromStorage:
    def test_reads_iso_text(self):
        assert date_from_storage("1972-05-05") == date(1972, 5, 5)

    def test_reads_datetime(self):
        assert date_from_storage(datetime(1972, 5, 5, 12, 0)) == date(1972, 5, 5)

    def test_rejects_unknown_types(self):
        with pytest.raises(TypeError):
            date_from_storage(19720505)


class TestCalendarDateType:
    def test_bind_and_result_use_conversion(self):
        column_type = CalendarDate()
        assert column_type.process_bind_param(date(1972, 5, 5), dialect=None) == date(1972, 5, 5)
        assert column_type.process_result_value("1973-06-06", dialect=None) == date(1973, 6, 6)
        assert column_type.python_type is date
