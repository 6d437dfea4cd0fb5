# app/utils/date_utils.py
"""
Helpers for parsing and formatting schedule dates.
Rows may arrive as datetime/date objects (ORM) or ISO strings (API payloads, fixtures).
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[datetime, date, str]


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are shifted to UTC and stripped; naive ones are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def safe_parse_instant(value: Optional[DateLike]) -> Optional[datetime]:
    """Parse a datetime, date or ISO string into a naive UTC datetime. Returns None on error."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        try:
            return to_naive_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def safe_parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Parse into a calendar date. Datetimes keep their (UTC) date part. Returns None on error."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    instant = safe_parse_instant(value)
    return instant.date() if instant else None


def format_date(value: Optional[DateLike]) -> str:
    """'Jan 10, 2025' style, or 'N/A' when missing/unparseable."""
    parsed = safe_parse_date(value)
    if parsed is None:
        return "N/A"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def calculate_duration(start: Optional[DateLike], end: Optional[DateLike]) -> str:
    """Human duration between two instants, rounded up to whole days."""
    start_dt = safe_parse_instant(start)
    if start_dt is None:
        return "N/A"
    end_dt = safe_parse_instant(end)
    if end_dt is None:
        return "Ongoing"

    seconds = abs((end_dt - start_dt).total_seconds())
    days = int(-(-seconds // 86400))
    return f"{days} day{'s' if days != 1 else ''}"
