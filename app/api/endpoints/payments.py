from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.services.payment_service import PaymentService
from app.schemas.fine import FineResponse
from app.schemas.payment import (
    FinePaymentResult, PayFineRequest, PaymentHistoryItem, PaymentResponse, ReceiptResponse
)
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[PaymentHistoryItem]], response_model_exclude_none=True)
async def get_payment_history(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Payment history, newest first.
    """
    payments = await PaymentService.list_payment_history(db, user_id)
    return SuccessResponse(data=[PaymentHistoryItem.model_validate(p) for p in payments], count=len(payments))


@router.post(
    "/fines/{fine_id}",
    response_model=SuccessResponse[FinePaymentResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def pay_fine(
    fine_id: str,
    pay_in: Optional[PayFineRequest] = None,
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Pay a fine in full. Records a completed payment and marks the fine Paid.
    """
    payment, fine = await PaymentService.pay_fine(
        db,
        user_id,
        deps.parse_resource_id(fine_id, "Fine not found"),
        pay_in.payment_method if pay_in else None,
    )
    return SuccessResponse(
        data=FinePaymentResult(
            payment=PaymentResponse.model_validate(payment),
            fine=FineResponse.model_validate(fine),
        ),
        message="Payment successful",
    )


@router.get("/{payment_id}/receipt", response_model=SuccessResponse[ReceiptResponse], response_model_exclude_none=True)
async def get_payment_receipt(
    payment_id: str,
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    receipt = await PaymentService.get_receipt(
        db, user_id, deps.parse_resource_id(payment_id, "Payment not found")
    )
    return SuccessResponse(data=receipt)
