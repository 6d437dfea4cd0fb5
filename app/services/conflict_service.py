# app/services/conflict_service.py
"""
Scheduling conflict detection for vehicle assignments.

Given a candidate (vehicle + start + optional end), reports every blocked period
and every approved assignment of that vehicle whose range overlaps it.

The check is advisory: conflicts are returned as data and nothing here refuses
or rolls back a write. An admin may approve a request knowing it overlaps.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from app.services.interval import Interval, InvalidIntervalError, assignment_interval, blocked_period_interval
from app.services.schedule_repository import ScheduleSource
from app.utils.date_utils import DateLike, format_date
from app.utils.logger import get_logger

logger = get_logger(__name__)

KIND_BLOCK = "block"
KIND_ASSIGNMENT = "assignment"


@dataclass(frozen=True)
class ScheduleCandidate:
    vehicle_id: str
    start: DateLike
    end: Optional[DateLike] = None

    @classmethod
    def from_assignment(cls, assignment) -> "ScheduleCandidate":
        return cls(assignment.vehicle_id, assignment.start_time, assignment.end_time)

    def interval(self) -> Interval:
        return Interval.from_instants(self.start, self.end)


@dataclass(frozen=True)
class Conflict:
    kind: str          # block | assignment
    reason: str
    source_id: str


def _block_reason(block) -> str:
    return f"Vehicle is blocked from {format_date(block.start_date)} to {format_date(block.end_date)}"


def _assignment_reason(assignment) -> str:
    until = format_date(assignment.end_time) if assignment.end_time else "indefinitely"
    return f"Vehicle is already assigned from {format_date(assignment.start_time)} to {until}"


def _stored_interval(build, row, skip_malformed: bool) -> Optional[Interval]:
    try:
        return build(row)
    except InvalidIntervalError as e:
        if not skip_malformed:
            raise
        logger.warning(f"[Conflicts] skipping malformed {type(row).__name__} {row.id}: {e}")
        return None


def find_conflicts(
    candidate: ScheduleCandidate,
    blocked_periods: Iterable,
    approved_assignments: Iterable,
    exclude_assignment_id: Optional[str] = None,
    skip_malformed: bool = False,
) -> List[Conflict]:
    """
    Every overlapping blocked period, then every overlapping approved assignment,
    each in input order. Rows for other vehicles are ignored; assignments whose
    status is not approved are ignored too.
    Raises InvalidIntervalError when the candidate is malformed. A malformed stored
    row raises too, unless skip_malformed is set: then it is logged and left out.
    """
    wanted = candidate.interval()
    conflicts: List[Conflict] = []

    for block in blocked_periods:
        if block.vehicle_id != candidate.vehicle_id:
            continue
        existing = _stored_interval(blocked_period_interval, block, skip_malformed)
        if existing is not None and wanted.overlaps(existing):
            conflicts.append(Conflict(KIND_BLOCK, _block_reason(block), str(block.id)))

    for assignment in approved_assignments:
        if assignment.vehicle_id != candidate.vehicle_id or assignment.status != "approved":
            continue
        if exclude_assignment_id is not None and str(assignment.id) == str(exclude_assignment_id):
            continue
        existing = _stored_interval(assignment_interval, assignment, skip_malformed)
        if existing is not None and wanted.overlaps(existing):
            conflicts.append(Conflict(KIND_ASSIGNMENT, _assignment_reason(assignment), str(assignment.id)))

    if conflicts:
        logger.info(f"[Conflicts] vehicle={candidate.vehicle_id} found {len(conflicts)} overlapping entries")
    return conflicts


def check_conflicts(
    source: ScheduleSource,
    candidate: ScheduleCandidate,
    exclude_assignment_id: Optional[str] = None,
    skip_malformed: bool = False,
) -> List[Conflict]:
    """Fetch the vehicle's blocked periods and approved assignments from source, then compare."""
    return find_conflicts(
        candidate,
        source.list_blocked_periods(candidate.vehicle_id),
        source.list_approved_assignments(candidate.vehicle_id),
        exclude_assignment_id=exclude_assignment_id,
        skip_malformed=skip_malformed,
    )


def has_conflicts_at(source: ScheduleSource, vehicle_id: str, instant: datetime) -> bool:
    """True when the vehicle is blocked or already assigned at that instant."""
    return bool(check_conflicts(source, ScheduleCandidate(vehicle_id, instant, instant)))
