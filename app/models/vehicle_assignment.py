# app/models/vehicle_assignment.py
"""
Vehicle assignments table.
Links one driver to one vehicle for [start_time, end_time]; end_time NULL means open-ended.
Requests start as pending and move through the approval workflow in assignment_service.
Overlap between approved rows is checked and warned about, never prevented.
"""

from sqlalchemy import Boolean, Column, String, DateTime, Text
from app.database import Base, new_id


class VehicleAssignment(Base):
    __tablename__ = "vehicle_assignments"

    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), nullable=False, index=True)
    driver_id = Column(String(36), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime)                 # NULL = indefinite
    is_temporary = Column(Boolean, default=True, nullable=False)
    status = Column(String(20), default="pending", nullable=False, index=True)  # pending | approved | rejected | cancelled
    notes = Column(Text)
    created_by = Column(String(36))
    admin_notes = Column(Text)
    approved_by = Column(String(36))
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<VehicleAssignment {self.id} vehicle={self.vehicle_id} status={self.status}>"
