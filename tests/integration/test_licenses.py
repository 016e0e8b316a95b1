"""Integration tests: License endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.database import AsyncSessionLocal
from app.models import License, LicenseStatus
from app.utils.time import get_utc_now


@pytest.mark.asyncio
async def test_no_license(async_client: AsyncClient, api_base: str, registered_user: dict):
    for path in ("/licenses", "/licenses/status"):
        resp = await async_client.get(f"{api_base}{path}", headers=registered_user["headers"])
        assert resp.status_code == 404
        assert resp.json()["message"] == "No license found for this user"

    resp = await async_client.post(
        f"{api_base}/licenses/renewal-request", headers=registered_user["headers"]
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_get_license(async_client: AsyncClient, api_base: str, registered_user: dict, create_license):
    license_ = await create_license(registered_user["user_id"], restrictions=["Automatic only"])
    resp = await async_client.get(f"{api_base}/licenses", headers=registered_user["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["licenseNumber"] == license_.license_number
    assert data["status"] == "Active"
    assert data["restrictions"] == ["Automatic only"]


@pytest.mark.asyncio
async def test_status_expired_yesterday(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_license
):
    license_ = await create_license(
        registered_user["user_id"], expiry_date=get_utc_now() - timedelta(days=1)
    )
    resp = await async_client.get(f"{api_base}/licenses/status", headers=registered_user["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "Expired"
    assert data["message"] == "Your license has expired."
    assert data["daysUntilExpiry"] <= 0

    # Derived only; the stored record keeps its status
    async with AsyncSessionLocal() as session:
        stored = await session.scalar(select(License).where(License.id == license_.id))
        assert stored.status == LicenseStatus.ACTIVE


@pytest.mark.asyncio
async def test_status_expiring_in_fifteen_days(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_license
):
    await create_license(registered_user["user_id"], expiry_date=get_utc_now() + timedelta(days=15))
    resp = await async_client.get(f"{api_base}/licenses/status", headers=registered_user["headers"])
    data = resp.json()["data"]
    assert data["status"] == "Active"
    assert data["daysUntilExpiry"] == 15
    assert "15 days" in data["message"]


@pytest.mark.asyncio
async def test_status_active(async_client: AsyncClient, api_base: str, registered_user: dict, create_license):
    await create_license(registered_user["user_id"], expiry_date=get_utc_now() + timedelta(days=200))
    resp = await async_client.get(f"{api_base}/licenses/status", headers=registered_user["headers"])
    data = resp.json()["data"]
    assert data["status"] == "Active"
    assert data["message"] == "Your license is active."


@pytest.mark.asyncio
async def test_status_suspended_passes_through(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_license
):
    await create_license(
        registered_user["user_id"],
        status=LicenseStatus.SUSPENDED,
        expiry_date=get_utc_now() - timedelta(days=3),
    )
    resp = await async_client.get(f"{api_base}/licenses/status", headers=registered_user["headers"])
    data = resp.json()["data"]
    assert data["status"] == "Suspended"
    assert data["message"] == ""


@pytest.mark.asyncio
async def test_renewal_request_acknowledged(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_license
):
    license_ = await create_license(registered_user["user_id"])
    resp = await async_client.post(
        f"{api_base}/licenses/renewal-request", headers=registered_user["headers"]
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Renewal request submitted successfully"
    assert body["data"]["license"] == license_.license_number
    assert body["data"]["status"] == "Pending"
    assert body["data"]["requestDate"]
