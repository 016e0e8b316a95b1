"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, UserOwnedMixin
from app.models.enums import *
from app.models.user import User
from app.models.license import License
from app.models.fine import Fine
from app.models.payment import Payment


__all__ = [
    # Base classes
    "BaseModel",
    "UserOwnedMixin",

    # Identity
    "User",

    # Resources
    "License",
    "Fine",
    "Payment",

    # Enums
    "LicenseStatus",
    "FineStatus",
    "PaymentMethod",
    "PaymentType",
    "PaymentStatus",
    "RenewalRequestStatus",
]
