# app/schemas/user.py
from pydantic import BaseModel
from typing import Optional


class DriverOut(BaseModel):
    id: str
    full_name: str
    email: str
    phone: Optional[str]
    role: str
    status: str

    class Config:
        from_attributes = True
