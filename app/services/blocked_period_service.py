# app/services/blocked_period_service.py
"""
Vehicle blocked periods: create / update / delete and active-upcoming-past grouping.
Dates are validated through the interval model before anything is written.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.vehicle_blocked_period import VehicleBlockedPeriod
from app.services.interval import Interval
from app.utils.logger import get_logger

logger = get_logger(__name__)


class BlockValidationError(ValueError):
    """Raised when a block request is missing required fields."""


def _validated_range(start_date, end_date, reason):
    if not reason or not str(reason).strip():
        raise BlockValidationError("A reason is required to block a vehicle")
    interval = Interval.from_dates(start_date, end_date)   # raises on start > end
    return interval.start.date(), interval.end.date()


def block_vehicle(
    db: Session,
    vehicle_id: str,
    start_date,
    end_date,
    reason: str,
    created_by: Optional[str] = None,
) -> VehicleBlockedPeriod:
    first, last = _validated_range(start_date, end_date, reason)
    block = VehicleBlockedPeriod(
        vehicle_id=vehicle_id,
        start_date=first,
        end_date=last,
        reason=reason,
        created_by=created_by,
        created_at=datetime.utcnow(),
    )
    db.add(block)
    db.commit()
    logger.info(f"[Blocks] vehicle={vehicle_id} blocked {first}..{last}: {reason}")
    return block


def update_block(db: Session, block: VehicleBlockedPeriod, start_date, end_date, reason: str):
    first, last = _validated_range(start_date, end_date, reason)
    block.start_date = first
    block.end_date = last
    block.reason = reason
    db.commit()
    logger.info(f"[Blocks] {block.id} updated to {first}..{last}")
    return block


def unblock(db: Session, block: VehicleBlockedPeriod):
    db.delete(block)
    db.commit()
    logger.info(f"[Blocks] {block.id} removed (vehicle={block.vehicle_id})")


def block_phase(block, today: Optional[date] = None) -> str:
    """active | upcoming | past relative to today."""
    today = today or date.today()
    interval = Interval.from_dates(block.start_date, block.end_date)
    if interval.start.date() > today:
        return "upcoming"
    if interval.end.date() < today:
        return "past"
    return "active"
