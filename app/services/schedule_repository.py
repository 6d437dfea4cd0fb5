# app/services/schedule_repository.py
"""
Data access for the scheduling core.

The conflict evaluator only needs two lists per vehicle, already materialized.
DatabaseScheduleSource reads them from SQLAlchemy; InMemoryScheduleSource wraps
rows a caller has already fetched (e.g. one calendar month).
"""

from datetime import date, datetime, time
from typing import Iterable, List, Optional, Protocol, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.vehicle_assignment import VehicleAssignment
from app.models.vehicle_blocked_period import VehicleBlockedPeriod
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ScheduleSource(Protocol):
    def list_blocked_periods(self, vehicle_id: str) -> List[VehicleBlockedPeriod]: ...

    def list_approved_assignments(self, vehicle_id: str) -> List[VehicleAssignment]: ...


class DatabaseScheduleSource:
    def __init__(self, db: Session):
        self.db = db

    def list_blocked_periods(self, vehicle_id: str) -> List[VehicleBlockedPeriod]:
        return (
            self.db.query(VehicleBlockedPeriod)
            .filter(VehicleBlockedPeriod.vehicle_id == vehicle_id)
            .all()
        )

    def list_approved_assignments(self, vehicle_id: str) -> List[VehicleAssignment]:
        return (
            self.db.query(VehicleAssignment)
            .filter(VehicleAssignment.vehicle_id == vehicle_id, VehicleAssignment.status == "approved")
            .all()
        )


class InMemoryScheduleSource:
    def __init__(self, blocked_periods: Iterable = (), assignments: Iterable = ()):
        self._blocked_periods = list(blocked_periods)
        self._assignments = list(assignments)

    def list_blocked_periods(self, vehicle_id: str) -> list:
        return [b for b in self._blocked_periods if b.vehicle_id == vehicle_id]

    def list_approved_assignments(self, vehicle_id: str) -> list:
        return [
            a for a in self._assignments
            if a.vehicle_id == vehicle_id and a.status == "approved"
        ]


def list_calendar_rows(
    db: Session, first_day: date, last_day: date, vehicle_id: Optional[str] = None
) -> Tuple[List[VehicleAssignment], List[VehicleBlockedPeriod]]:
    """Assignments and blocked periods that touch [first_day, last_day]."""
    window_start = datetime.combine(first_day, time.min)
    window_end = datetime.combine(last_day, time.max)

    assignment_q = db.query(VehicleAssignment).filter(
        VehicleAssignment.start_time <= window_end,
        or_(VehicleAssignment.end_time == None, VehicleAssignment.end_time >= window_start),  # noqa: E711
        VehicleAssignment.status.notin_(("cancelled", "rejected")),
    )
    block_q = db.query(VehicleBlockedPeriod).filter(
        VehicleBlockedPeriod.start_date <= last_day,
        VehicleBlockedPeriod.end_date >= first_day,
    )
    if vehicle_id:
        assignment_q = assignment_q.filter(VehicleAssignment.vehicle_id == vehicle_id)
        block_q = block_q.filter(VehicleBlockedPeriod.vehicle_id == vehicle_id)

    assignments = assignment_q.order_by(VehicleAssignment.start_time.asc()).all()
    blocks = block_q.order_by(VehicleBlockedPeriod.start_date.asc()).all()
    logger.debug(f"[Calendar] {first_day}..{last_day}: {len(assignments)} assignments, {len(blocks)} blocks")
    return assignments, blocks
