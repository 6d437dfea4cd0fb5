# app/services/calendar_service.py
"""
Calendar projection: which assignments / blocked periods touch a given day.

Pure functions over already-fetched rows. The month view calls events_for_day
once per (vehicle x visible day), so project_month groups rows by vehicle first.
Driver names come from an explicit read-only mapping, never module state.
"""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional

from app.config import settings
from app.services.interval import assignment_interval, blocked_period_interval
from app.utils.logger import get_logger

logger = get_logger(__name__)

PRIORITY_BLOCK = 2
PRIORITY_ASSIGNMENT = 1
HIDDEN_ASSIGNMENT_STATUSES = {"cancelled", "rejected"}


@dataclass(frozen=True)
class CalendarEvent:
    kind: str          # block | assignment
    color: str
    priority: int
    title: str
    source_id: str


def _assignment_event(assignment, drivers: Mapping[str, str]) -> CalendarEvent:
    color = (settings.COLOR_TEMPORARY_ASSIGNMENT if assignment.is_temporary
             else settings.COLOR_PERMANENT_ASSIGNMENT)
    driver_name = drivers.get(assignment.driver_id) or "Unknown"
    return CalendarEvent("assignment", color, PRIORITY_ASSIGNMENT,
                         f"Assigned: {driver_name}", str(assignment.id))


def _block_event(block) -> CalendarEvent:
    return CalendarEvent("block", settings.COLOR_BLOCKED, PRIORITY_BLOCK,
                         f"Blocked: {block.reason or 'No reason given'}", str(block.id))


def events_for_day(
    vehicle_id: str,
    day: date,
    assignments: Iterable,
    blocked_periods: Iterable,
    drivers: Optional[Mapping[str, str]] = None,
) -> List[CalendarEvent]:
    """Events of one vehicle touching `day`, blocked periods first."""
    drivers = drivers or {}
    events: List[CalendarEvent] = []

    for assignment in assignments:
        if assignment.vehicle_id != vehicle_id or assignment.status in HIDDEN_ASSIGNMENT_STATUSES:
            continue
        if assignment_interval(assignment).contains_day(day):
            events.append(_assignment_event(assignment, drivers))

    for block in blocked_periods:
        if block.vehicle_id != vehicle_id:
            continue
        if blocked_period_interval(block).contains_day(day):
            events.append(_block_event(block))

    # sorted() is stable: ties keep input order
    return sorted(events, key=lambda e: e.priority, reverse=True)


def month_grid(year: int, month: int) -> List[Optional[date]]:
    """Leading None cells for the weekdays before the 1st, then every date of the month."""
    leading = (date(year, month, 1).weekday() + 1) % 7   # Sunday = 0
    days_in_month = calendar.monthrange(year, month)[1]
    return [None] * leading + [date(year, month, d) for d in range(1, days_in_month + 1)]


def month_bounds(year: int, month: int):
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def _group_by_vehicle(rows: Iterable) -> Dict[str, list]:
    grouped = defaultdict(list)
    for row in rows:
        grouped[row.vehicle_id].append(row)
    return grouped


def project_days(
    vehicle_ids: Iterable[str],
    days: Iterable[date],
    assignments: Iterable,
    blocked_periods: Iterable,
    drivers: Optional[Mapping[str, str]] = None,
) -> Dict[str, Dict[date, List[CalendarEvent]]]:
    """{vehicle_id: {day: [events]}} for every vehicle and day given."""
    days = list(days)
    assignments_by_vehicle = _group_by_vehicle(assignments)
    blocks_by_vehicle = _group_by_vehicle(blocked_periods)

    projection = {}
    for vehicle_id in vehicle_ids:
        vehicle_assignments = assignments_by_vehicle.get(vehicle_id, [])
        vehicle_blocks = blocks_by_vehicle.get(vehicle_id, [])
        projection[vehicle_id] = {
            day: events_for_day(vehicle_id, day, vehicle_assignments, vehicle_blocks, drivers)
            for day in days
        }
    return projection


def project_month(vehicle_ids, year: int, month: int, assignments, blocked_periods, drivers=None):
    vehicle_ids = list(vehicle_ids)
    first, last = month_bounds(year, month)
    days = [first + timedelta(days=i) for i in range((last - first).days + 1)]
    logger.debug(f"[Calendar] projecting {year}-{month:02d} for {len(vehicle_ids)} vehicles")
    return project_days(vehicle_ids, days, assignments, blocked_periods, drivers)


def project_week(vehicle_id: str, week_start: date, assignments, blocked_periods, drivers=None):
    days = [week_start + timedelta(days=i) for i in range(7)]
    return project_days([vehicle_id], days, assignments, blocked_periods, drivers)[vehicle_id]
