"""
Vehicle assignment requests + advisory conflict checks.
POST /assignments                — new request (always pending)
POST /assignments/check-conflicts — what a candidate range would overlap
POST /assignments/{id}/approve    — approves and reports conflicts; never refuses because of them
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.vehicle_assignment import VehicleAssignment
from app.schemas.assignment import (
    ApprovalOut, AssignmentCreate, AssignmentDecision, AssignmentOut, ConflictCheck, ConflictOut,
)
from app.services import assignment_service
from app.services.conflict_service import ScheduleCandidate, check_conflicts
from app.services.schedule_repository import DatabaseScheduleSource
from app.utils.date_utils import calculate_duration

router = APIRouter()


def _to_out(assignment: VehicleAssignment) -> AssignmentOut:
    out = AssignmentOut.model_validate(assignment)
    out.phase = assignment_service.assignment_phase(assignment)
    out.duration = calculate_duration(assignment.start_time, assignment.end_time)
    return out


def _get_or_404(db: Session, assignment_id: str) -> VehicleAssignment:
    assignment = assignment_service.get_assignment(db, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return assignment


@router.get("/assignments", response_model=list[AssignmentOut], summary="List assignments")
def list_assignments(status: Optional[str] = None, vehicle_id: Optional[str] = None,
                     limit: int = 100, db: Session = Depends(get_db)):
    q = db.query(VehicleAssignment)
    if status:
        q = q.filter(VehicleAssignment.status == status)
    if vehicle_id:
        q = q.filter(VehicleAssignment.vehicle_id == vehicle_id)
    rows = q.order_by(VehicleAssignment.start_time.desc()).limit(limit).all()
    return [_to_out(a) for a in rows]


@router.get("/assignments/pending/count", summary="Pending request badge count")
def pending_count(db: Session = Depends(get_db)):
    return {"pending": assignment_service.count_pending(db)}


@router.post("/assignments", response_model=AssignmentOut, summary="Request a vehicle assignment")
def create_assignment(body: AssignmentCreate, db: Session = Depends(get_db)):
    assignment = assignment_service.create_request(
        db,
        vehicle_id=body.vehicle_id,
        driver_id=body.driver_id,
        start_time=body.start_time,
        end_time=body.end_time,
        notes=body.notes,
        is_temporary=body.is_temporary,
        created_by=body.created_by,
    )
    return _to_out(assignment)


@router.post("/assignments/check-conflicts", response_model=list[ConflictOut],
             summary="Advisory overlap check for a candidate range")
def check_assignment_conflicts(body: ConflictCheck, db: Session = Depends(get_db)):
    candidate = ScheduleCandidate(body.vehicle_id, body.start_time, body.end_time)
    conflicts = check_conflicts(DatabaseScheduleSource(db), candidate, body.exclude_assignment_id)
    return [ConflictOut.model_validate(c) for c in conflicts]


@router.post("/assignments/{assignment_id}/approve", response_model=ApprovalOut, summary="Approve a request")
def approve_assignment(assignment_id: str, body: AssignmentDecision, db: Session = Depends(get_db)):
    assignment = _get_or_404(db, assignment_id)
    conflicts = assignment_service.approve_request(db, assignment, body.admin_notes, body.approved_by)
    return ApprovalOut(
        assignment=_to_out(assignment),
        conflicts=[ConflictOut.model_validate(c) for c in conflicts],
    )


@router.post("/assignments/{assignment_id}/reject", response_model=AssignmentOut, summary="Reject a request")
def reject_assignment(assignment_id: str, body: AssignmentDecision, db: Session = Depends(get_db)):
    assignment = _get_or_404(db, assignment_id)
    assignment_service.reject_request(db, assignment, body.admin_notes)
    return _to_out(assignment)


@router.post("/assignments/{assignment_id}/cancel", response_model=AssignmentOut, summary="Cancel an assignment")
def cancel_assignment(assignment_id: str, db: Session = Depends(get_db)):
    assignment = _get_or_404(db, assignment_id)
    assignment_service.cancel_assignment(db, assignment)
    return _to_out(assignment)
