# app/services/vehicle_service.py
"""
Vehicle and driver lookup helpers.
Used by the vehicles, drivers, assignments and calendar routers.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.user import User
from app.models.vehicle import Vehicle
from app.services.conflict_service import has_conflicts_at
from app.services.schedule_repository import DatabaseScheduleSource
from app.utils.logger import get_logger

logger = get_logger(__name__)

ASSIGNABLE_STATUSES = ("available", "spare")


def lookup_vehicle_by_registration(db: Session, registration_number: str):
    """Find a vehicle by registration number. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.registration_number == registration_number).first()


def list_available_vehicles(db: Session, at: Optional[datetime] = None) -> List[Vehicle]:
    """
    Vehicles whose status allows a new assignment.
    With `at`, vehicles blocked or already assigned at that instant are dropped too.
    """
    vehicles = db.query(Vehicle).filter(Vehicle.status.in_(ASSIGNABLE_STATUSES)).all()
    if at is None:
        return vehicles

    source = DatabaseScheduleSource(db)
    free = [v for v in vehicles if not has_conflicts_at(source, v.id, at)]
    logger.debug(f"[Vehicles] {len(free)}/{len(vehicles)} assignable vehicles free at {at}")
    return free


def driver_name_lookup(db: Session) -> Dict[str, str]:
    """id → full name for every user, handed to the calendar projector as a read-only map."""
    return {user.id: user.full_name for user in db.query(User).all()}
