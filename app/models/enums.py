"""Centralized Enum Definitions"""

import enum


def enum_values(enum_cls) -> list:
    """Persist the display value ("Active"), not the member name ("ACTIVE")"""
    return [member.value for member in enum_cls]


# Licenses
class LicenseStatus(str, enum.Enum):
    """Persisted license status"""
    ACTIVE = "Active"
    EXPIRED = "Expired"
    SUSPENDED = "Suspended"
    REVOKED = "Revoked"


# Fines
class FineStatus(str, enum.Enum):
    """Traffic fine lifecycle"""
    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"
    DISPUTED = "Disputed"
    CANCELLED = "Cancelled"


OUTSTANDING_FINE_STATUSES = (FineStatus.UNPAID, FineStatus.OVERDUE)


# Payments
class PaymentMethod(str, enum.Enum):
    """Accepted payment instruments"""
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    BANK_TRANSFER = "Bank Transfer"
    CASH = "Cash"
    MOBILE_MONEY = "Mobile Money"


class PaymentType(str, enum.Enum):
    """What a payment settles"""
    FINE_PAYMENT = "Fine Payment"
    LICENSE_RENEWAL = "License Renewal"
    OTHER = "Other"


class PaymentStatus(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class RenewalRequestStatus(str, enum.Enum):
    PENDING = "Pending"
