# app/schemas/vehicle.py
from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional

VehicleStatus = Literal["available", "assigned", "spare", "maintenance", "inactive"]


class VehicleCreate(BaseModel):
    registration_number: str
    make: str
    model: str
    year: Optional[int] = None
    status: VehicleStatus = "available"
    assigned_driver_id: Optional[str] = None
    notes: Optional[str] = None


class VehicleUpdate(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    status: Optional[VehicleStatus] = None
    assigned_driver_id: Optional[str] = None
    notes: Optional[str] = None


class VehicleOut(BaseModel):
    id: str
    registration_number: str
    make: str
    model: str
    year: Optional[int]
    status: str
    assigned_driver_id: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
