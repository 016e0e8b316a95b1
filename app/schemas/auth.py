from typing import Optional
from datetime import date
from pydantic import BaseModel

from app.schemas.responses import CamelModel
from app.schemas.user import UserResponse


class RegisterRequest(CamelModel):
    """Every field is checked by the service so missing ones get one clear message."""
    name: Optional[str] = None
    id_number: Optional[str] = None
    phone: Optional[str] = None
    dl_number: Optional[str] = None
    dl_expire_date: Optional[date] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    id_number: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    data: Optional[UserResponse] = None
