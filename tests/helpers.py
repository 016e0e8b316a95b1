"""Test data builders shared by fixtures and test modules."""

from datetime import date, timedelta

PASSWORD = "TestPassword123!"


def registration_payload(suffix: str, **overrides) -> dict:
    payload = {
        "name": f"Driver {suffix}",
        "idNumber": f"ID{suffix}",
        "phone": "+94771234567",
        "dlNumber": f"DL{suffix}",
        "dlExpireDate": (date.today() + timedelta(days=365)).isoformat(),
        "email": f"driver_{suffix}@example.com",
        "password": PASSWORD,
    }
    payload.update(overrides)
    return payload
