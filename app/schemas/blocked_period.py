# app/schemas/blocked_period.py
from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class BlockedPeriodCreate(BaseModel):
    vehicle_id: str
    start_date: date
    end_date: date
    reason: str
    created_by: Optional[str] = None


class BlockedPeriodUpdate(BaseModel):
    start_date: date
    end_date: date
    reason: str


class BlockedPeriodOut(BaseModel):
    id: str
    vehicle_id: str
    start_date: date
    end_date: date
    reason: str
    created_by: Optional[str]
    created_at: Optional[datetime]
    phase: Optional[str] = None        # active | upcoming | past

    class Config:
        from_attributes = True
