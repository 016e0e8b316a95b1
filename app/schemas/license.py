"""License Pydantic Schemas"""

from datetime import datetime
from typing import List
from uuid import UUID

from app.models.enums import LicenseStatus, RenewalRequestStatus
from app.schemas.responses import CamelModel


class LicenseSummary(CamelModel):
    id: UUID
    license_number: str
    category: str


class LicenseResponse(LicenseSummary):
    user_id: UUID
    issued_date: datetime
    expiry_date: datetime
    status: LicenseStatus
    restrictions: List[str] = []
    created_at: datetime


class LicenseStatusResponse(CamelModel):
    """Display status; may read Expired while the stored status is still Active"""
    license_number: str
    category: str
    status: LicenseStatus
    expiry_date: datetime
    days_until_expiry: int
    message: str = ""


class RenewalAcknowledgement(CamelModel):
    license: str
    request_date: datetime
    status: RenewalRequestStatus = RenewalRequestStatus.PENDING
