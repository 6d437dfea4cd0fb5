# app/models/user.py
"""
Users table — drivers and admins share one table, split by role.
"""

from sqlalchemy import Column, String, DateTime
from app.database import Base, new_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    phone = Column(String(50))
    role = Column(String(20), default="driver", nullable=False, index=True)  # driver | admin
    status = Column(String(20), default="active", nullable=False)            # active | inactive
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<User {self.full_name} role={self.role}>"
