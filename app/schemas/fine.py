"""Fine Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from app.models.enums import FineStatus, PaymentMethod, PaymentStatus
from app.schemas.responses import CamelModel


class FineSummary(CamelModel):
    id: UUID
    fine_number: str
    amount: float
    reason: str
    date: datetime


class LinkedPayment(CamelModel):
    """Payment fields shown alongside a fine"""
    id: UUID
    amount: float
    payment_date: datetime
    payment_method: PaymentMethod
    reference_id: str
    status: PaymentStatus


class FineResponse(FineSummary):
    user_id: UUID
    location: str
    due_date: datetime
    status: FineStatus
    payment_id: Optional[UUID] = None
    payment: Optional[LinkedPayment] = None
    created_at: datetime


class FineStatusUpdate(CamelModel):
    """Only "Disputed" is accepted; the service reports anything else."""
    status: Optional[str] = None
