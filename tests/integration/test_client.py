"""Integration tests: DriveMeClient against the ASGI app."""

import httpx
import pytest
from httpx import ASGITransport

from app.client import DriveMeClient, MemoryTokenStore
from app.main import app
from tests.helpers import PASSWORD, registration_payload


@pytest.fixture
async def client(database, api_base: str):
    async with DriveMeClient(
        base_url=api_base,
        token_store=MemoryTokenStore(),
        transport=ASGITransport(app=app),
    ) as driveme:
        yield driveme


@pytest.mark.asyncio
async def test_register_stores_token(client: DriveMeClient, unique_suffix: str):
    assert not client.is_authenticated
    body = await client.register(registration_payload(unique_suffix))
    assert body["success"] is True
    assert client.is_authenticated

    me = await client.get_current_user()
    assert me["data"]["idNumber"] == f"ID{unique_suffix}"


@pytest.mark.asyncio
async def test_login_then_browse(client: DriveMeClient, registered_user: dict, create_fine, create_license):
    await create_license(registered_user["user_id"])
    fine = await create_fine(registered_user["user_id"])

    await client.login(registered_user["id_number"], PASSWORD)
    assert client.is_authenticated

    fines = await client.get_all_fines()
    assert fines["count"] == 1
    outstanding = await client.get_outstanding_fines()
    assert outstanding["data"][0]["id"] == str(fine.id)

    status = await client.get_license_status()
    assert status["data"]["status"] == "Active"
    renewal = await client.request_renewal()
    assert renewal["data"]["status"] == "Pending"

    paid = await client.pay_fine(str(fine.id), "Debit Card")
    payment_id = paid["data"]["payment"]["id"]
    receipt = await client.get_payment_receipt(payment_id)
    assert receipt["data"]["paymentDetails"]["type"] == "Fine"

    history = await client.get_payment_history()
    assert history["count"] == 1


@pytest.mark.asyncio
async def test_dispute_through_client(client: DriveMeClient, registered_user: dict, create_fine):
    fine = await create_fine(registered_user["user_id"])
    await client.login(registered_user["id_number"], PASSWORD)
    body = await client.dispute_fine(str(fine.id))
    assert body["data"]["status"] == "Disputed"
    detail = await client.get_fine_details(str(fine.id))
    assert detail["data"]["status"] == "Disputed"


@pytest.mark.asyncio
async def test_logout_drops_credentials(client: DriveMeClient, registered_user: dict):
    await client.login(registered_user["id_number"], PASSWORD)
    client.logout()
    assert not client.is_authenticated

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await client.get_current_user()
    assert exc_info.value.response.status_code == 401


@pytest.mark.asyncio
async def test_bad_login_raises(client: DriveMeClient, registered_user: dict):
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await client.login(registered_user["id_number"], "wrong-password")
    assert exc_info.value.response.json()["message"] == "Invalid credentials"
    assert not client.is_authenticated


@pytest.mark.asyncio
async def test_server_connection(client: DriveMeClient):
    assert await client.test_server_connection() is True
