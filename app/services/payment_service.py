"""Payment Service - fine payments, history and receipts"""

import logging
import secrets
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.enums import FineStatus, PaymentMethod, PaymentStatus, PaymentType
from app.models.fine import Fine
from app.models.payment import Payment
from app.schemas.payment import (
    FinePaymentDetails,
    LicensePaymentDetails,
    OtherPaymentDetails,
    ReceiptResponse,
)
from app.schemas.user import PayerDetails
from app.services.fine_service import FineService
from app.utils.time import epoch_millis, get_utc_now

logger = logging.getLogger(__name__)

ALREADY_PAID = "This fine has already been paid"


def generate_reference_id(prefix: Optional[str] = None) -> str:
    """Reference like FINE-1718000000000-042: epoch millis plus a random suffix."""
    prefix = prefix or settings.PAYMENT_REFERENCE_PREFIX
    return f"{prefix}-{epoch_millis()}-{secrets.randbelow(1000):03d}"


def parse_payment_method(value: Optional[str]) -> PaymentMethod:
    if not value:
        raise ValidationError("Please provide payment method")
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(method.value for method in PaymentMethod)
        raise ValidationError(f"Invalid payment method. Use one of: {allowed}")


class PaymentService:
    """Service layer for Payment operations"""

    @staticmethod
    async def list_payment_history(db: AsyncSession, user_id: UUID) -> List[Payment]:
        """Payments of a user, newest first, with related fine and license."""
        result = await db.execute(
            select(Payment)
            .options(
                selectinload(Payment.related_fine),
                selectinload(Payment.related_license),
            )
            .where(Payment.user_id == user_id)
            .order_by(Payment.payment_date.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def reference_exists(db: AsyncSession, reference_id: str) -> bool:
        result = await db.execute(
            select(Payment.id).where(Payment.reference_id == reference_id)
        )
        return result.first() is not None

    @staticmethod
    async def _new_reference_id(db: AsyncSession, attempts: int = 5) -> str:
        for _ in range(attempts):
            reference_id = generate_reference_id()
            if not await PaymentService.reference_exists(db, reference_id):
                return reference_id
        # Fall back to a wider random part rather than fail the payment
        return f"{generate_reference_id()}-{secrets.token_hex(4).upper()}"

    @staticmethod
    async def pay_fine(
        db: AsyncSession,
        user_id: UUID,
        fine_id: UUID,
        payment_method: Optional[str],
    ) -> tuple:
        """
        Record a completed payment for a fine and mark the fine Paid.

        The fine is claimed with a conditional UPDATE (status still not Paid)
        before the payment row is written, all inside the caller's
        transaction, so two concurrent requests cannot both pay one fine.

        Returns:
            (payment, fine) with the fine's payment relationship loaded

        Raises:
            ValidationError: missing or unsupported payment method
            NotFoundError: unknown fine
            ForbiddenError: fine owned by another user
            ConflictError: fine already paid
        """
        method = parse_payment_method(payment_method)
        fine = await FineService.get_owned_fine(db, user_id, fine_id, action="pay")

        if fine.status == FineStatus.PAID:
            raise ConflictError(ALREADY_PAID)

        claimed = await db.execute(
            update(Fine)
            .where(Fine.id == fine.id, Fine.status != FineStatus.PAID)
            .values(status=FineStatus.PAID, updated_at=get_utc_now())
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            logger.warning("Concurrent payment detected", extra={"fine_id": str(fine_id)})
            raise ConflictError(ALREADY_PAID)

        payment = Payment(
            user_id=user_id,
            amount=fine.amount,
            payment_date=get_utc_now(),
            payment_method=method,
            payment_type=PaymentType.FINE_PAYMENT,
            reference_id=await PaymentService._new_reference_id(db),
            status=PaymentStatus.COMPLETED,
            related_fine_id=fine.id,
        )
        db.add(payment)
        await db.flush()

        await db.execute(
            update(Fine)
            .where(Fine.id == fine.id)
            .values(payment_id=payment.id)
            .execution_options(synchronize_session=False)
        )
        await db.refresh(payment)

        logger.info(
            "Fine paid",
            extra={
                "user_id": str(user_id),
                "fine_id": str(fine_id),
                "payment_id": str(payment.id),
                "reference_id": payment.reference_id,
            },
        )
        return payment, await FineService.get_fine_by_id(db, fine.id)

    @staticmethod
    async def get_payment_by_id(db: AsyncSession, payment_id: UUID) -> Optional[Payment]:
        result = await db.execute(
            select(Payment)
            .options(
                selectinload(Payment.user),
                selectinload(Payment.related_fine),
                selectinload(Payment.related_license),
            )
            .where(Payment.id == payment_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_receipt(db: AsyncSession, user_id: UUID, payment_id: UUID) -> ReceiptResponse:
        """Receipt projection of a payment owned by ``user_id``."""
        payment = await PaymentService.get_payment_by_id(db, payment_id)
        if not payment:
            raise NotFoundError("Payment not found")
        if not payment.is_owned_by(user_id):
            logger.warning(
                "Receipt ownership check failed",
                extra={"user_id": str(user_id), "payment_id": str(payment_id)},
            )
            raise ForbiddenError("Not authorized to access this receipt")

        if payment.related_fine is not None:
            details = FinePaymentDetails(
                fine_number=payment.related_fine.fine_number,
                reason=payment.related_fine.reason,
                issue_date=payment.related_fine.date,
            )
        elif payment.related_license is not None:
            details = LicensePaymentDetails(
                license_number=payment.related_license.license_number,
                category=payment.related_license.category,
            )
        else:
            details = OtherPaymentDetails()

        return ReceiptResponse(
            receipt_number=payment.reference_id,
            payment_date=payment.payment_date,
            payment_method=payment.payment_method,
            amount=payment.amount,
            status=payment.status,
            payer_details=PayerDetails.model_validate(payment.user),
            payment_type=payment.payment_type,
            payment_details=details,
        )
