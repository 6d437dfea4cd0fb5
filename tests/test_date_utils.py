"""Unit tests for date parsing / formatting helpers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime
from app.utils.date_utils import calculate_duration, format_date, safe_parse_date, safe_parse_instant


class TestParsing:
    def test_date_becomes_midnight(self):
        assert safe_parse_instant(date(2025, 1, 10)) == datetime(2025, 1, 10)

    def test_garbage_returns_none(self):
        assert safe_parse_instant("not-a-date") is None
        assert safe_parse_instant(12345) is None
        assert safe_parse_instant(None) is None

    def test_datetime_string_to_date(self):
        assert safe_parse_date("2025-02-05T10:30:00") == date(2025, 2, 5)


class TestFormatting:
    def test_format_date(self):
        assert format_date("2025-01-10") == "Jan 10, 2025"
        assert format_date(datetime(2025, 12, 3, 9, 0)) == "Dec 3, 2025"

    def test_format_missing(self):
        assert format_date(None) == "N/A"

    def test_duration(self):
        assert calculate_duration("2025-01-10", "2025-01-20") == "10 days"
        assert calculate_duration("2025-01-10T08:00", "2025-01-10T20:00") == "1 day"
        assert calculate_duration("2025-01-10", None) == "Ongoing"
        assert calculate_duration(None, "2025-01-10") == "N/A"
