"""License Model"""

from sqlalchemy import Column, DateTime, Enum, JSON, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, UserOwnedMixin
from app.models.enums import LicenseStatus, enum_values


class License(BaseModel, UserOwnedMixin):
    """One driving license per user. Created out of band (seed/admin tooling)."""
    __tablename__ = "licenses"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_licenses_user_id"),
    )

    license_number = Column(String(64), unique=True, nullable=False, index=True)
    issued_date = Column(DateTime, nullable=False)
    expiry_date = Column(DateTime, nullable=False)
    category = Column(String(32), nullable=False)
    status = Column(
        Enum(LicenseStatus, name="license_status", values_callable=enum_values),
        default=LicenseStatus.ACTIVE,
        nullable=False,
    )
    restrictions = Column(JSON, default=list, nullable=False)

    user = relationship("User", back_populates="license")

    def __repr__(self) -> str:
        return f"<License {self.license_number} ({self.status})>"
