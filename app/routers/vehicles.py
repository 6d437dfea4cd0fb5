"""Fleet vehicles — CRUD plus the assignable-vehicles listing"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.vehicle import Vehicle
from app.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from app.services.vehicle_service import list_available_vehicles, lookup_vehicle_by_registration

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(status: str = None, db: Session = Depends(get_db)):
    q = db.query(Vehicle)
    if status:
        q = q.filter(Vehicle.status == status)
    return q.order_by(Vehicle.registration_number).all()


@router.get("/vehicles/available", response_model=list[VehicleOut], summary="Vehicles open for assignment")
def available_vehicles(at: Optional[datetime] = None, db: Session = Depends(get_db)):
    """Status available or spare. Pass `at` to also drop vehicles blocked or assigned at that instant."""
    return list_available_vehicles(db, at)


@router.post("/vehicles", response_model=VehicleOut, summary="Add a vehicle")
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db)):
    if lookup_vehicle_by_registration(db, body.registration_number):
        raise HTTPException(status_code=400, detail=f"Registration {body.registration_number} already exists")
    vehicle = Vehicle(**body.model_dump(), created_at=datetime.utcnow())
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return vehicle


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Edit a vehicle")
def update_vehicle(vehicle_id: str, body: VehicleUpdate, db: Session = Depends(get_db)):
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(vehicle, field, value)
    db.commit()
    db.refresh(vehicle)
    return vehicle


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle")
def remove_vehicle(vehicle_id: str, db: Session = Depends(get_db)):
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    db.delete(vehicle)
    db.commit()
    return {"status": "removed", "vehicle_id": vehicle_id}
