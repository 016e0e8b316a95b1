"""Payment Model"""

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, UserOwnedMixin
from app.models.enums import PaymentMethod, PaymentStatus, PaymentType, enum_values
from app.utils.time import get_utc_now


class Payment(BaseModel, UserOwnedMixin):
    """A recorded payment. Immutable after creation apart from status."""
    __tablename__ = "payments"

    amount = Column(Float, nullable=False)
    payment_date = Column(DateTime, default=get_utc_now, nullable=False, index=True)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", values_callable=enum_values),
        nullable=False,
    )
    payment_type = Column(
        Enum(PaymentType, name="payment_type", values_callable=enum_values),
        nullable=False,
    )
    reference_id = Column(String(64), unique=True, nullable=False, index=True)
    status = Column(
        Enum(PaymentStatus, name="payment_status", values_callable=enum_values),
        default=PaymentStatus.PENDING,
        nullable=False,
    )

    related_fine_id = Column(Uuid(as_uuid=True), ForeignKey("fines.id", ondelete="SET NULL"), nullable=True)
    related_license_id = Column(Uuid(as_uuid=True), ForeignKey("licenses.id", ondelete="SET NULL"), nullable=True)

    user = relationship("User", back_populates="payments")
    related_fine = relationship("Fine", foreign_keys=[related_fine_id])
    related_license = relationship("License", foreign_keys=[related_license_id])

    def __repr__(self) -> str:
        return f"<Payment {self.reference_id} {self.amount} ({self.status})>"
