from datetime import datetime

from src.field_service.field_service.common.formatting import (
    format_call_duration,
    format_clock_duration,
    format_hours_minutes,
    format_minutes_hhmm,
    format_money,
    format_phone_number,
)
from src.field_service.field_service.common.datetime_utils import parse_iso_datetime, to_iso_utc


def test_phone_number_is_formatted_only_for_ten_digits():
    assert format_phone_number("5551234567") == "(555) 123-4567"
    assert format_phone_number("555-123-4567") == "(555) 123-4567"
    assert format_phone_number("+44 20 7946 0958") == "+44 20 7946 0958"


def test_call_duration():
    assert format_call_duration(95) == "1:35"
    assert format_call_duration(5) == "0:05"
    assert format_call_duration(0) == "0:00"


def test_clock_duration_switches_to_hours():
    start = datetime(2025, 1, 6, 8, 0, 0)

    assert format_clock_duration(start, now=datetime(2025, 1, 6, 8, 4, 7)) == "4:07"
    assert format_clock_duration(start, now=datetime(2025, 1, 6, 9, 2, 3)) == "1:02:03"


def test_hours_minutes_and_hhmm():
    start = datetime(2025, 1, 6, 8, 0)

    assert format_hours_minutes(start, datetime(2025, 1, 6, 16, 45)) == "8h 45m"
    assert format_minutes_hhmm(485) == "08:05"


def test_money():
    assert format_money(1234.5) == "$1,234.50"
    assert format_money(None) == "$0.00"


def test_iso_helpers():
    assert parse_iso_datetime("2025-01-06T08:30:00") == datetime(2025, 1, 6, 8, 30)
    assert parse_iso_datetime("") is None
    assert to_iso_utc(datetime(2025, 3, 1).date()) == "2025-03-01T00:00:00Z"
