"""Integration tests: Fine endpoints."""

from datetime import timedelta
import logging
import uuid

import pytest
from httpx import AsyncClient

from app.core.logging import CorrelationIdFilter
from app.models import FineStatus
from app.utils.time import get_utc_now


@pytest.mark.asyncio
async def test_list_fines_newest_first(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine
):
    first = await create_fine(registered_user["user_id"])
    second = await create_fine(registered_user["user_id"], status=FineStatus.PAID)
    third = await create_fine(registered_user["user_id"], status=FineStatus.DISPUTED)

    resp = await async_client.get(f"{api_base}/fines", headers=registered_user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert [f["id"] for f in body["data"]] == [str(third.id), str(second.id), str(first.id)]


@pytest.mark.asyncio
async def test_list_fines_empty(async_client: AsyncClient, api_base: str, registered_user: dict):
    resp = await async_client.get(f"{api_base}/fines", headers=registered_user["headers"])
    assert resp.status_code == 200
    assert resp.json()["count"] == 0
    assert resp.json()["data"] == []


@pytest.mark.asyncio
async def test_list_fines_only_own(
    async_client: AsyncClient, api_base: str, registered_user: dict, other_user: dict, create_fine
):
    await create_fine(other_user["user_id"])
    resp = await async_client.get(f"{api_base}/fines", headers=registered_user["headers"])
    assert resp.json()["count"] == 0


@pytest.mark.asyncio
async def test_outstanding_filters_and_orders_by_due_date(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine
):
    now = get_utc_now()
    late = await create_fine(registered_user["user_id"], due_date=now + timedelta(days=20))
    overdue = await create_fine(
        registered_user["user_id"], status=FineStatus.OVERDUE, due_date=now - timedelta(days=5)
    )
    soon = await create_fine(registered_user["user_id"], due_date=now + timedelta(days=2))
    for status in (FineStatus.PAID, FineStatus.DISPUTED, FineStatus.CANCELLED):
        await create_fine(registered_user["user_id"], status=status, due_date=now)

    resp = await async_client.get(f"{api_base}/fines/outstanding", headers=registered_user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 3
    assert [f["id"] for f in body["data"]] == [str(overdue.id), str(soon.id), str(late.id)]
    assert {f["status"] for f in body["data"]} == {"Unpaid", "Overdue"}


@pytest.mark.asyncio
async def test_get_fine_detail(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine
):
    fine = await create_fine(registered_user["user_id"], amount=2500.0, reason="Red light")
    resp = await async_client.get(f"{api_base}/fines/{fine.id}", headers=registered_user["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["fineNumber"] == fine.fine_number
    assert data["amount"] == 2500.0
    assert data["reason"] == "Red light"
    assert data["status"] == "Unpaid"
    assert "payment" not in data


@pytest.mark.asyncio
async def test_get_fine_of_another_user(
    async_client: AsyncClient, api_base: str, registered_user: dict, other_user: dict, create_fine
):
    fine = await create_fine(other_user["user_id"])
    resp = await async_client.get(f"{api_base}/fines/{fine.id}", headers=registered_user["headers"])
    assert resp.status_code == 401
    assert resp.json()["message"] == "Not authorized to access this fine"


@pytest.mark.asyncio
async def test_get_unknown_fine(async_client: AsyncClient, api_base: str, registered_user: dict):
    resp = await async_client.get(f"{api_base}/fines/{uuid.uuid4()}", headers=registered_user["headers"])
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Fine not found"}


@pytest.mark.asyncio
async def test_get_fine_with_malformed_id(
    async_client: AsyncClient, api_base: str, registered_user: dict
):
    resp = await async_client.get(f"{api_base}/fines/not-a-uuid", headers=registered_user["headers"])
    assert resp.status_code == 404
    assert resp.json()["message"] == "Fine not found"


@pytest.mark.asyncio
async def test_dispute_fine(async_client: AsyncClient, api_base: str, registered_user: dict, create_fine):
    fine = await create_fine(registered_user["user_id"])
    resp = await async_client.put(
        f"{api_base}/fines/{fine.id}",
        json={"status": "Disputed"},
        headers=registered_user["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "Disputed"

    resp = await async_client.get(f"{api_base}/fines/{fine.id}", headers=registered_user["headers"])
    assert resp.json()["data"]["status"] == "Disputed"


@pytest.mark.asyncio
async def test_dispute_fine_without_body(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine
):
    fine = await create_fine(registered_user["user_id"])
    resp = await async_client.put(f"{api_base}/fines/{fine.id}", headers=registered_user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "Disputed"


@pytest.mark.asyncio
@pytest.mark.parametrize("requested", ["Cancelled", "Paid", "Unpaid"])
async def test_dispute_rejects_other_statuses(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine, requested: str
):
    fine = await create_fine(registered_user["user_id"])
    resp = await async_client.put(
        f"{api_base}/fines/{fine.id}",
        json={"status": requested},
        headers=registered_user["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "You can only mark a fine as disputed"

    resp = await async_client.get(f"{api_base}/fines/{fine.id}", headers=registered_user["headers"])
    assert resp.json()["data"]["status"] == "Unpaid"


@pytest.mark.asyncio
async def test_dispute_fine_of_another_user(
    async_client: AsyncClient, api_base: str, registered_user: dict, other_user: dict, create_fine
):
    fine = await create_fine(other_user["user_id"])
    resp = await async_client.put(
        f"{api_base}/fines/{fine.id}",
        json={"status": "Disputed"},
        headers=registered_user["headers"],
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Not authorized to update this fine"


class _RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.mark.asyncio
async def test_service_logs_carry_request_id(
    async_client: AsyncClient, api_base: str, registered_user: dict, create_fine, caplog
):
    fine = await create_fine(registered_user["user_id"])
    service_logger = logging.getLogger("app.services.fine_service")
    caplog.set_level(logging.INFO, logger=service_logger.name)
    collector = _RecordCollector()
    collector.addFilter(CorrelationIdFilter())
    service_logger.addHandler(collector)
    try:
        resp = await async_client.put(
            f"{api_base}/fines/{fine.id}",
            json={"status": "Disputed"},
            headers={**registered_user["headers"], "X-Request-ID": "dispute-req-1"},
        )
    finally:
        service_logger.removeHandler(collector)

    assert resp.status_code == 200
    disputed = [r for r in collector.records if r.getMessage() == "Fine disputed"]
    assert disputed
    assert disputed[0].correlation_id == "dispute-req-1"
