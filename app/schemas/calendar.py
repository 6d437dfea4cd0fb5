# app/schemas/calendar.py
from pydantic import BaseModel
from datetime import date
from typing import Dict, List, Optional


class CalendarEventOut(BaseModel):
    kind: str          # block | assignment
    color: str
    priority: int
    title: str
    source_id: str

    class Config:
        from_attributes = True


class DayEventsOut(BaseModel):
    vehicle_id: str
    day: date
    events: List[CalendarEventOut]


class MonthCalendarOut(BaseModel):
    year: int
    month: int
    grid: List[Optional[date]]
    vehicles: Dict[str, Dict[date, List[CalendarEventOut]]]
