"""Shared pytest fixtures for unit and integration tests."""

import os
import tempfile
import uuid
from datetime import timedelta
from pathlib import Path

import pytest

# Point the app at a throwaway SQLite file before anything imports settings
_TEST_DB_DIR = tempfile.mkdtemp(prefix="driveme-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'test.db'}"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTH_RATE_LIMIT"] = "10/minute"
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from httpx import ASGITransport, AsyncClient

from app.main import app
from app.config import settings
from app.database import AsyncSessionLocal, close_db, drop_db, init_db
from app.models import (
    Fine, FineStatus, License, LicenseStatus, Payment, PaymentMethod, PaymentStatus, PaymentType
)
from app.utils.time import get_utc_now
from tests.helpers import PASSWORD, registration_payload


@pytest.fixture
async def database():
    """Fresh schema per test."""
    await init_db()
    yield
    await drop_db()
    await close_db()


@pytest.fixture
async def db_session(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_PREFIX}"


@pytest.fixture
async def async_client(database, api_base: str):
    """Async HTTP client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


async def _register(client: AsyncClient, api_base: str, suffix: str) -> dict:
    payload = registration_payload(suffix)
    resp = await client.post(f"{api_base}/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {
        "user_id": uuid.UUID(body["data"]["id"]),
        "id_number": payload["idNumber"],
        "email": payload["email"],
        "name": payload["name"],
        "password": PASSWORD,
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
async def registered_user(async_client: AsyncClient, api_base: str, unique_suffix: str) -> dict:
    """Register a driver and return ids, credentials and auth headers."""
    return await _register(async_client, api_base, unique_suffix)


@pytest.fixture
async def other_user(async_client: AsyncClient, api_base: str) -> dict:
    """A second driver, for ownership checks."""
    return await _register(async_client, api_base, str(uuid.uuid4())[:8])


@pytest.fixture
def create_license(database):
    """Insert a license the way the issuing authority's feed would."""

    async def _create(user_id: uuid.UUID, **overrides) -> License:
        now = get_utc_now()
        values = dict(
            user_id=user_id,
            license_number=f"LIC-{uuid.uuid4().hex[:10]}",
            issued_date=now - timedelta(days=3 * 365),
            expiry_date=now + timedelta(days=365),
            category="B",
            status=LicenseStatus.ACTIVE,
            restrictions=[],
        )
        values.update(overrides)
        license_ = License(**values)
        async with AsyncSessionLocal() as session:
            session.add(license_)
            await session.commit()
        return license_

    return _create


@pytest.fixture
def create_fine(database):
    """Insert a fine issued against a user."""

    async def _create(user_id: uuid.UUID, **overrides) -> Fine:
        now = get_utc_now()
        values = dict(
            user_id=user_id,
            fine_number=f"FN-{uuid.uuid4().hex[:10]}",
            amount=1500.0,
            reason="Speeding",
            location="Main Street",
            date=now - timedelta(days=3),
            due_date=now + timedelta(days=14),
            status=FineStatus.UNPAID,
        )
        values.update(overrides)
        fine = Fine(**values)
        async with AsyncSessionLocal() as session:
            session.add(fine)
            await session.commit()
        return fine

    return _create


@pytest.fixture
def create_payment(database):
    """Insert a payment directly (license renewals, manual entries)."""

    async def _create(user_id: uuid.UUID, **overrides) -> Payment:
        values = dict(
            user_id=user_id,
            amount=500.0,
            payment_date=get_utc_now(),
            payment_method=PaymentMethod.CASH,
            payment_type=PaymentType.OTHER,
            reference_id=f"MAN-{uuid.uuid4().hex[:12]}",
            status=PaymentStatus.COMPLETED,
        )
        values.update(overrides)
        payment = Payment(**values)
        async with AsyncSessionLocal() as session:
            session.add(payment)
            await session.commit()
        return payment

    return _create
