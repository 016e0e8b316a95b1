"""Payment Pydantic Schemas"""

from datetime import datetime
from typing import Optional, Literal, Union
from uuid import UUID

from app.models.enums import PaymentMethod, PaymentStatus, PaymentType
from app.schemas.fine import FineResponse, FineSummary
from app.schemas.license import LicenseSummary
from app.schemas.responses import CamelModel
from app.schemas.user import PayerDetails

class PayFineRequest(CamelModel):
    payment_method: Optional[str] = None

class PaymentResponse(CamelModel):
    id: UUID
    user_id: UUID
    amount: float
    payment_date: datetime
    payment_method: PaymentMethod
    payment_type: PaymentType
    reference_id: str
    status: PaymentStatus
    related_fine_id: Optional[UUID] = None
    related_license_id: Optional[UUID] = None
    created_at: datetime

class PaymentHistoryItem(PaymentResponse):
    related_fine: Optional[FineSummary] = None
    related_license: Optional[LicenseSummary] = None

class FinePaymentResult(CamelModel):
    payment: PaymentResponse
    fine: FineResponse

class FinePaymentDetails(CamelModel):
    type: Literal["Fine"] = "Fine"
    fine_number: str
    reason: str
    issue_date: datetime

class LicensePaymentDetails(CamelModel):
    type: Literal["License"] = "License"
    license_number: str
    category: str

class OtherPaymentDetails(CamelModel):
    type: Literal["Other"] = "Other"

PaymentDetails = Union[FinePaymentDetails, LicensePaymentDetails, OtherPaymentDetails]

class ReceiptResponse(CamelModel):
    receipt_number: str
    payment_date: datetime
    payment_method: PaymentMethod
    amount: float
    status: PaymentStatus
    payer_details: PayerDetails
    payment_type: PaymentType
    payment_details: PaymentDetails
