from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.services.fine_service import FineService
from app.schemas.fine import FineResponse, FineStatusUpdate
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[FineResponse]], response_model_exclude_none=True)
async def get_user_fines(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    All fines of the authenticated user, newest first.
    """
    fines = await FineService.list_user_fines(db, user_id)
    return SuccessResponse(data=[FineResponse.model_validate(f) for f in fines], count=len(fines))


@router.get("/outstanding", response_model=SuccessResponse[List[FineResponse]], response_model_exclude_none=True)
async def get_outstanding_fines(
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Unpaid and overdue fines, earliest due date first.
    """
    fines = await FineService.list_outstanding(db, user_id)
    return SuccessResponse(data=[FineResponse.model_validate(f) for f in fines], count=len(fines))


@router.get("/{fine_id}", response_model=SuccessResponse[FineResponse], response_model_exclude_none=True)
async def get_fine(
    fine_id: str,
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    fine = await FineService.get_fine(db, user_id, deps.parse_resource_id(fine_id, "Fine not found"))
    return SuccessResponse(data=FineResponse.model_validate(fine))


@router.put("/{fine_id}", response_model=SuccessResponse[FineResponse], response_model_exclude_none=True)
async def update_fine_status(
    fine_id: str,
    update_in: Optional[FineStatusUpdate] = None,
    user_id: UUID = Depends(deps.get_current_user_id),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Dispute a fine. The body may omit status; only "Disputed" is accepted.
    """
    fine = await FineService.dispute_fine(
        db,
        user_id,
        deps.parse_resource_id(fine_id, "Fine not found"),
        update_in.status if update_in else None,
    )
    return SuccessResponse(data=FineResponse.model_validate(fine))
