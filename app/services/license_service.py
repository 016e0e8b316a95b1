"""License Service - lookups and display status"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import NotFoundError
from app.models.enums import LicenseStatus
from app.models.license import License
from app.schemas.license import LicenseStatusResponse, RenewalAcknowledgement
from app.utils.time import days_until, get_utc_now

logger = logging.getLogger(__name__)


def derive_license_status(
    stored_status: LicenseStatus,
    expiry_date: datetime,
    now: Optional[datetime] = None,
) -> tuple:
    """
    Compute the status shown to the driver.

    Returns:
        (status, days_until_expiry, message). Only an Active license is
        re-evaluated against its expiry date; other statuses pass through.
    """
    remaining = days_until(expiry_date, now)
    status = stored_status
    message = ""

    if stored_status == LicenseStatus.ACTIVE:
        if remaining <= 0:
            status = LicenseStatus.EXPIRED
            message = "Your license has expired."
        elif remaining <= settings.LICENSE_EXPIRY_WARNING_DAYS:
            message = f"Your license will expire in {remaining} days."
        else:
            message = "Your license is active."

    return status, remaining, message


class LicenseService:
    """Service layer for License operations"""

    @staticmethod
    async def get_user_license(db: AsyncSession, user_id: UUID) -> License:
        result = await db.execute(select(License).where(License.user_id == user_id))
        license_ = result.scalar_one_or_none()
        if not license_:
            raise NotFoundError("No license found for this user")
        return license_

    @staticmethod
    async def get_license_status(
        db: AsyncSession,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> LicenseStatusResponse:
        """Derived, read-only status; the stored record is never updated here."""
        license_ = await LicenseService.get_user_license(db, user_id)
        status, remaining, message = derive_license_status(license_.status, license_.expiry_date, now)

        return LicenseStatusResponse(
            license_number=license_.license_number,
            category=license_.category,
            status=status,
            expiry_date=license_.expiry_date,
            days_until_expiry=remaining,
            message=message,
        )

    @staticmethod
    async def request_renewal(db: AsyncSession, user_id: UUID) -> RenewalAcknowledgement:
        """
        Acknowledge a renewal request.

        Renewal requests are not stored yet; the caller only gets a receipt.
        """
        license_ = await LicenseService.get_user_license(db, user_id)
        logger.info(
            "License renewal requested",
            extra={"user_id": str(user_id), "license_number": license_.license_number},
        )
        return RenewalAcknowledgement(
            license=license_.license_number,
            request_date=get_utc_now(),
        )
