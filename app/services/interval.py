# app/services/interval.py
"""
Time-range model shared by the conflict evaluator and the calendar projector.

An Interval is closed: [start, end]. A missing end means the range never
finishes and is compared as UNBOUNDED (datetime.max, year 9999).
Blocked periods are date-granular and cover their whole end date.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from app.utils.date_utils import DateLike, safe_parse_date, safe_parse_instant

UNBOUNDED = datetime.max


class InvalidIntervalError(ValueError):
    """Raised for unparseable bounds or a start that falls after its end."""


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.end is not None and self.start > self.end:
            raise InvalidIntervalError(
                f"Interval start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @property
    def is_open_ended(self) -> bool:
        return self.end is None

    @property
    def normalized_end(self) -> datetime:
        return self.end if self.end is not None else UNBOUNDED

    def overlaps(self, other: "Interval") -> bool:
        return self.start <= other.normalized_end and self.normalized_end >= other.start

    def contains_day(self, day: date) -> bool:
        return self.overlaps(Interval.for_day(day))

    @classmethod
    def from_instants(cls, start: DateLike, end: Optional[DateLike] = None) -> "Interval":
        start_dt = safe_parse_instant(start)
        if start_dt is None:
            raise InvalidIntervalError(f"Unparseable start: {start!r}")
        end_dt = None
        if end is not None and end != "":
            end_dt = safe_parse_instant(end)
            if end_dt is None:
                raise InvalidIntervalError(f"Unparseable end: {end!r}")
        return cls(start_dt, end_dt)

    @classmethod
    def from_dates(cls, start_date: DateLike, end_date: DateLike) -> "Interval":
        first = safe_parse_date(start_date)
        last = safe_parse_date(end_date)
        if first is None or last is None:
            raise InvalidIntervalError(f"Unparseable date range: {start_date!r} .. {end_date!r}")
        return cls(datetime.combine(first, time.min), datetime.combine(last, time.max))

    @classmethod
    def for_day(cls, day: date) -> "Interval":
        return cls(datetime.combine(day, time.min), datetime.combine(day, time.max))


def assignment_interval(assignment) -> Interval:
    """Interval of a VehicleAssignment-like row (start_time, end_time)."""
    return Interval.from_instants(assignment.start_time, assignment.end_time)


def blocked_period_interval(block) -> Interval:
    """Interval of a VehicleBlockedPeriod-like row (start_date, end_date, inclusive)."""
    return Interval.from_dates(block.start_date, block.end_date)
