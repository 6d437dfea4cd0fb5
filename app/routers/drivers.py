"""
Drivers.
GET /drivers — users with role driver, optionally filtered by status, sorted by name
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User
from app.schemas.user import DriverOut
from typing import Optional

router = APIRouter()


@router.get("/drivers", response_model=list[DriverOut], summary="Drivers — filterable by status")
def list_drivers(status: Optional[str] = None, db: Session = Depends(get_db)):
    q = db.query(User).filter(User.role == "driver")
    if status:
        q = q.filter(User.status == status)
    return q.order_by(User.full_name).all()
