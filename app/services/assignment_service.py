# app/services/assignment_service.py
"""
Vehicle assignment request workflow.

  create  → pending
  pending → approved   (conflict check runs first; conflicts are returned, never enforced)
  pending → rejected   (admin notes required)
  pending | approved → cancelled

Each transition commits immediately, like every other write in this backend.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.vehicle_assignment import VehicleAssignment
from app.services.conflict_service import Conflict, ScheduleCandidate, check_conflicts
from app.services.interval import Interval, assignment_interval
from app.services.schedule_repository import DatabaseScheduleSource
from app.utils.logger import get_logger

logger = get_logger(__name__)


class AssignmentWorkflowError(Exception):
    """Raised when a transition is not allowed from the assignment's current status."""


def get_assignment(db: Session, assignment_id: str) -> Optional[VehicleAssignment]:
    return db.query(VehicleAssignment).filter(VehicleAssignment.id == assignment_id).first()


def create_request(
    db: Session,
    vehicle_id: str,
    driver_id: str,
    start_time,
    end_time=None,
    notes: Optional[str] = None,
    is_temporary: bool = True,
    created_by: Optional[str] = None,
) -> VehicleAssignment:
    """Record a new assignment request. Status is always pending."""
    interval = Interval.from_instants(start_time, end_time)   # raises InvalidIntervalError

    assignment = VehicleAssignment(
        vehicle_id=vehicle_id,
        driver_id=driver_id,
        start_time=interval.start,
        end_time=interval.end,
        notes=notes,
        is_temporary=is_temporary,
        status="pending",
        created_by=created_by,
        created_at=datetime.utcnow(),
    )
    db.add(assignment)
    db.commit()
    logger.info(f"[Assignments] Request created vehicle={vehicle_id} driver={driver_id} from {interval.start}")
    return assignment


def _require_status(assignment: VehicleAssignment, allowed: Tuple[str, ...], action: str):
    if assignment.status not in allowed:
        raise AssignmentWorkflowError(
            f"Cannot {action} assignment {assignment.id}: status is {assignment.status}"
        )


def approve_request(
    db: Session,
    assignment: VehicleAssignment,
    admin_notes: Optional[str] = None,
    approved_by: Optional[str] = None,
) -> List[Conflict]:
    """
    Approve a pending request and return the conflicts it causes.
    Approval goes through whether or not conflicts were found. Malformed stored
    rows for the vehicle are skipped; only the request itself must be valid.
    """
    _require_status(assignment, ("pending",), "approve")

    conflicts = check_conflicts(
        DatabaseScheduleSource(db),
        ScheduleCandidate.from_assignment(assignment),
        exclude_assignment_id=assignment.id,
        skip_malformed=True,
    )
    if conflicts:
        logger.warning(
            f"[Assignments] Approving {assignment.id} despite {len(conflicts)} conflict(s): "
            + "; ".join(c.reason for c in conflicts)
        )

    assignment.status = "approved"
    assignment.admin_notes = admin_notes
    assignment.approved_by = approved_by
    db.commit()
    logger.info(f"[Assignments] Approved {assignment.id}")
    return conflicts


def reject_request(db: Session, assignment: VehicleAssignment, admin_notes: Optional[str]):
    _require_status(assignment, ("pending",), "reject")
    if not admin_notes or not admin_notes.strip():
        raise AssignmentWorkflowError("Please provide a reason for rejection")

    assignment.status = "rejected"
    assignment.admin_notes = admin_notes
    db.commit()
    logger.info(f"[Assignments] Rejected {assignment.id}")


def cancel_assignment(db: Session, assignment: VehicleAssignment):
    _require_status(assignment, ("pending", "approved"), "cancel")
    assignment.status = "cancelled"
    db.commit()
    logger.info(f"[Assignments] Cancelled {assignment.id}")


def count_pending(db: Session) -> int:
    return db.query(VehicleAssignment).filter(VehicleAssignment.status == "pending").count()


def assignment_phase(assignment, now: Optional[datetime] = None) -> Optional[str]:
    """active | upcoming | completed for approved assignments, None otherwise."""
    if assignment.status != "approved":
        return None
    now = now or datetime.utcnow()
    interval = assignment_interval(assignment)
    if interval.start > now:
        return "upcoming"
    if interval.normalized_end < now:
        return "completed"
    return "active"
