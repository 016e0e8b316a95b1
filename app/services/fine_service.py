"""Fine Service - listing, detail and disputes"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.models.enums import FineStatus, OUTSTANDING_FINE_STATUSES
from app.models.fine import Fine

logger = logging.getLogger(__name__)


class FineService:
    """Service layer for Fine operations"""

    @staticmethod
    async def get_fine_by_id(db: AsyncSession, fine_id: UUID) -> Optional[Fine]:
        """Fine with its linked payment loaded, or None."""
        result = await db.execute(
            select(Fine)
            .options(selectinload(Fine.payment))
            .where(Fine.id == fine_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_owned_fine(
        db: AsyncSession,
        user_id: UUID,
        fine_id: UUID,
        action: str = "access",
    ) -> Fine:
        """
        Load a fine and check that ``user_id`` owns it.

        Raises:
            NotFoundError: no fine with that id
            ForbiddenError: the fine belongs to someone else
        """
        fine = await FineService.get_fine_by_id(db, fine_id)
        if not fine:
            raise NotFoundError("Fine not found")
        if not fine.is_owned_by(user_id):
            logger.warning(
                "Fine ownership check failed",
                extra={"user_id": str(user_id), "fine_id": str(fine_id), "action": action},
            )
            raise ForbiddenError(f"Not authorized to {action} this fine")
        return fine

    @staticmethod
    async def list_user_fines(db: AsyncSession, user_id: UUID) -> List[Fine]:
        """All fines of a user, newest first, with linked payments."""
        result = await db.execute(
            select(Fine)
            .options(selectinload(Fine.payment))
            .where(Fine.user_id == user_id)
            .order_by(Fine.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_outstanding(db: AsyncSession, user_id: UUID) -> List[Fine]:
        """Unpaid and overdue fines, earliest due date first."""
        result = await db.execute(
            select(Fine)
            .options(selectinload(Fine.payment))
            .where(
                Fine.user_id == user_id,
                Fine.status.in_(OUTSTANDING_FINE_STATUSES),
            )
            .order_by(Fine.due_date.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_fine(db: AsyncSession, user_id: UUID, fine_id: UUID) -> Fine:
        return await FineService.get_owned_fine(db, user_id, fine_id)

    @staticmethod
    async def dispute_fine(
        db: AsyncSession,
        user_id: UUID,
        fine_id: UUID,
        requested_status: Optional[str] = None,
    ) -> Fine:
        """
        Mark a fine as Disputed.

        ``requested_status`` may be omitted; any value other than "Disputed"
        is rejected. The current status is not checked.
        """
        fine = await FineService.get_owned_fine(db, user_id, fine_id, action="update")

        if requested_status and requested_status != FineStatus.DISPUTED.value:
            raise ValidationError("You can only mark a fine as disputed")

        fine.status = FineStatus.DISPUTED
        await db.flush()

        logger.info("Fine disputed", extra={"user_id": str(user_id), "fine_id": str(fine_id)})
        return await FineService.get_fine_by_id(db, fine_id)
