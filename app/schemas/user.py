"""User Pydantic Schemas"""

from datetime import date, datetime
from uuid import UUID

from app.schemas.responses import CamelModel


class UserResponse(CamelModel):
    """Public profile; the password hash is never part of it"""
    id: UUID
    name: str
    id_number: str
    phone: str
    dl_number: str
    dl_expire_date: date
    email: str
    created_at: datetime


class PayerDetails(CamelModel):
    name: str
    id_number: str
    email: str
