from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.services.license_service import LicenseService
from app.schemas.license import LicenseResponse, LicenseStatusResponse, RenewalAcknowledgement
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[LicenseResponse], response_model_exclude_none=True)
async def get_user_license(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    License details of the authenticated user.
    """
    license_ = await LicenseService.get_user_license(db, user_id)
    return SuccessResponse(data=LicenseResponse.model_validate(license_))


@router.get("/status", response_model=SuccessResponse[LicenseStatusResponse], response_model_exclude_none=True)
async def get_license_status(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Display status, days until expiry and a short message.
    """
    result = await LicenseService.get_license_status(db, user_id)
    return SuccessResponse(data=result)


@router.post("/renewal-request", response_model=SuccessResponse[RenewalAcknowledgement], response_model_exclude_none=True)
async def request_renewal(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Submit a renewal request (acknowledged, not stored).
    """
    ack = await LicenseService.request_renewal(db, user_id)
    return SuccessResponse(data=ack, message="Renewal request submitted successfully")
