# app/schemas/assignment.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class AssignmentCreate(BaseModel):
    vehicle_id: str
    driver_id: str
    start_time: datetime
    end_time: Optional[datetime] = None     # omit for an open-ended assignment
    notes: Optional[str] = None
    is_temporary: bool = True
    created_by: Optional[str] = None


class AssignmentDecision(BaseModel):
    admin_notes: Optional[str] = None
    approved_by: Optional[str] = None


class ConflictCheck(BaseModel):
    vehicle_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    exclude_assignment_id: Optional[str] = None


class ConflictOut(BaseModel):
    kind: str          # block | assignment
    reason: str
    source_id: str

    class Config:
        from_attributes = True


class AssignmentOut(BaseModel):
    id: str
    vehicle_id: str
    driver_id: str
    start_time: datetime
    end_time: Optional[datetime]
    is_temporary: bool
    status: str
    notes: Optional[str]
    created_by: Optional[str]
    admin_notes: Optional[str]
    approved_by: Optional[str]
    created_at: Optional[datetime]
    phase: Optional[str] = None        # active | upcoming | completed (approved only)
    duration: Optional[str] = None

    class Config:
        from_attributes = True


class ApprovalOut(BaseModel):
    assignment: AssignmentOut
    conflicts: List[ConflictOut]
