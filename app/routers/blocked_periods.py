"""Vehicle blocked periods — maintenance / unavailability windows"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.vehicle_blocked_period import VehicleBlockedPeriod
from app.schemas.blocked_period import BlockedPeriodCreate, BlockedPeriodOut, BlockedPeriodUpdate
from app.services import blocked_period_service

router = APIRouter()


def _to_out(block: VehicleBlockedPeriod) -> BlockedPeriodOut:
    out = BlockedPeriodOut.model_validate(block)
    out.phase = blocked_period_service.block_phase(block)
    return out


def _get_or_404(db: Session, block_id: str) -> VehicleBlockedPeriod:
    block = db.query(VehicleBlockedPeriod).filter(VehicleBlockedPeriod.id == block_id).first()
    if not block:
        raise HTTPException(status_code=404, detail="Blocked period not found")
    return block


@router.get("/blocked-periods", response_model=list[BlockedPeriodOut], summary="List blocked periods")
def list_blocked_periods(vehicle_id: Optional[str] = None, phase: Optional[str] = None,
                         db: Session = Depends(get_db)):
    """Filter by vehicle, and by phase (active | upcoming | past) after loading."""
    q = db.query(VehicleBlockedPeriod)
    if vehicle_id:
        q = q.filter(VehicleBlockedPeriod.vehicle_id == vehicle_id)
    blocks = [_to_out(b) for b in q.order_by(VehicleBlockedPeriod.start_date.desc()).all()]
    if phase:
        blocks = [b for b in blocks if b.phase == phase]
    return blocks


@router.post("/blocked-periods", response_model=BlockedPeriodOut, summary="Block a vehicle")
def create_blocked_period(body: BlockedPeriodCreate, db: Session = Depends(get_db)):
    block = blocked_period_service.block_vehicle(
        db, body.vehicle_id, body.start_date, body.end_date, body.reason, body.created_by
    )
    return _to_out(block)


@router.put("/blocked-periods/{block_id}", response_model=BlockedPeriodOut, summary="Edit a blocked period")
def update_blocked_period(block_id: str, body: BlockedPeriodUpdate, db: Session = Depends(get_db)):
    block = _get_or_404(db, block_id)
    blocked_period_service.update_block(db, block, body.start_date, body.end_date, body.reason)
    return _to_out(block)


@router.delete("/blocked-periods/{block_id}", summary="Unblock a vehicle")
def delete_blocked_period(block_id: str, db: Session = Depends(get_db)):
    block = _get_or_404(db, block_id)
    blocked_period_service.unblock(db, block)
    return {"status": "removed", "block_id": block_id}
