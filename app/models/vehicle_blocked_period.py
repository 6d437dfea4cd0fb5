# app/models/vehicle_blocked_period.py
"""
Vehicle unavailability windows (maintenance, inspection, ...).
start_date and end_date are both inclusive, date-only.
"""

from sqlalchemy import Column, Date, String, DateTime, Text
from app.database import Base, new_id


class VehicleBlockedPeriod(Base):
    __tablename__ = "vehicle_blocked_periods"

    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    reason = Column(Text, nullable=False)
    created_by = Column(String(36))
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<VehicleBlockedPeriod {self.id} vehicle={self.vehicle_id} {self.start_date}..{self.end_date}>"
