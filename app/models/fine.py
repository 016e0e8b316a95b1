"""Traffic Fine Model"""

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, UserOwnedMixin
from app.models.enums import FineStatus, enum_values
from app.utils.time import get_utc_now


class Fine(BaseModel, UserOwnedMixin):
    """
    A monetary penalty issued against a user.
    Becomes Paid only when a payment is recorded against it.
    """
    __tablename__ = "fines"

    fine_number = Column(String(64), unique=True, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    reason = Column(String(500), nullable=False)
    location = Column(String(255), nullable=False)
    date = Column(DateTime, default=get_utc_now, nullable=False)
    due_date = Column(DateTime, nullable=False)
    status = Column(
        Enum(FineStatus, name="fine_status", values_callable=enum_values),
        default=FineStatus.UNPAID,
        nullable=False,
        index=True,
    )
    # fines <-> payments reference each other
    payment_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("payments.id", use_alter=True, name="fk_fines_payment_id", ondelete="SET NULL"),
        nullable=True,
    )

    user = relationship("User", back_populates="fines")
    payment = relationship("Payment", foreign_keys=[payment_id], post_update=True)

    def __repr__(self) -> str:
        return f"<Fine {self.fine_number} {self.amount} ({self.status})>"
