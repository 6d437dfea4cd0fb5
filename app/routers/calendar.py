"""
Vehicle calendar.
GET /calendar/day   — events of one vehicle on one day
GET /calendar/month — Sunday-first grid plus events per vehicle per day
"""

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.vehicle import Vehicle
from app.schemas.calendar import DayEventsOut, MonthCalendarOut
from app.services.calendar_service import events_for_day, month_bounds, month_grid, project_month
from app.services.schedule_repository import list_calendar_rows
from app.services.vehicle_service import driver_name_lookup

router = APIRouter()


@router.get("/calendar/day", response_model=DayEventsOut, summary="Events for one vehicle on one day")
def calendar_day(vehicle_id: str, day: date, db: Session = Depends(get_db)):
    assignments, blocks = list_calendar_rows(db, day, day, vehicle_id)
    events = events_for_day(vehicle_id, day, assignments, blocks, driver_name_lookup(db))
    return {"vehicle_id": vehicle_id, "day": day, "events": [asdict(e) for e in events]}


@router.get("/calendar/month", response_model=MonthCalendarOut, summary="Month view for all or one vehicle")
def calendar_month(year: int = Query(..., ge=1, le=9999), month: int = Query(..., ge=1, le=12),
                   vehicle_id: Optional[str] = None, db: Session = Depends(get_db)):
    first, last = month_bounds(year, month)
    assignments, blocks = list_calendar_rows(db, first, last, vehicle_id)

    if vehicle_id:
        vehicle_ids = [vehicle_id]
    else:
        vehicle_ids = [v.id for v in db.query(Vehicle).order_by(Vehicle.registration_number).all()]

    projection = project_month(vehicle_ids, year, month, assignments, blocks, driver_name_lookup(db))
    vehicles = {
        vid: {day: [asdict(e) for e in events] for day, events in days.items()}
        for vid, days in projection.items()
    }
    return {"year": year, "month": month, "grid": month_grid(year, month), "vehicles": vehicles}
