"""Base Models and Mixins shared by the domain tables"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import declared_attr

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class UserOwnedMixin:
    """
    Mixin for records that belong to exactly one user.

    Provides:
    - user_id foreign key, used by every ownership check
    """

    @declared_attr
    def user_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check whether ``user_id`` is the recorded owner"""
        return self.user_id == user_id
