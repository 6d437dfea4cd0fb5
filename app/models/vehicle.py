# app/models/vehicle.py
"""
Fleet vehicles table.
Status: available | assigned | spare | maintenance | inactive. Any status may follow any other.
Referenced by vehicle_assignments and vehicle_blocked_periods.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base, new_id


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(36), primary_key=True, default=new_id)
    registration_number = Column(String(50), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer)
    status = Column(String(20), default="available", nullable=False, index=True)
    assigned_driver_id = Column(String(36))   # users.id (nullable, not enforced)
    notes = Column(Text)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Vehicle {self.registration_number} {self.make} {self.model} status={self.status}>"
