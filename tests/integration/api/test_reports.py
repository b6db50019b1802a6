import pytest
from httpx import AsyncClient

ACME_ID = "1c1d7a20-3b4e-4f50-8a61-2b2c3d4e0001"
GLOBEX_ID = "1c1d7a20-3b4e-4f50-8a61-2b2c3d4e0002"


@pytest.mark.asyncio
async def test_client_monthly_report(client: AsyncClient, login):
    customer_user = await login("client@acme.example")

    response = await client.get(
        "/reports/monthly", params={"month": "2025-03"}, headers=customer_user
    )

    assert response.status_code == 200
    report = response.json()
    assert report["service_provider_name"] == "FixIt Field Services"
    assert report["customer_name"] == "Acme Manufacturing"
    assert report["total"] == 1
    assert report["rows"][0]["asset_tag"] == "ACME-PUMP-01"
    assert report["rows"][0]["site_name"] == "Acme Plant 1"


@pytest.mark.asyncio
async def test_empty_month(client: AsyncClient, login):
    customer_user = await login("client@acme.example")

    response = await client.get(
        "/reports/monthly", params={"month": "2025-04"}, headers=customer_user
    )

    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_client_cannot_read_other_customer(client: AsyncClient, login):
    customer_user = await login("client@acme.example")

    response = await client.get(
        "/reports/monthly",
        params={"month": "2025-03", "customer_id": GLOBEX_ID},
        headers=customer_user,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_dispatcher_must_name_customer(client: AsyncClient, login):
    dispatcher = await login("dispatch@fixit.example")

    missing = await client.get(
        "/reports/monthly", params={"month": "2025-03"}, headers=dispatcher
    )
    assert missing.status_code == 400

    named = await client.get(
        "/reports/monthly",
        params={"month": "2025-03", "customer_id": ACME_ID},
        headers=dispatcher,
    )
    assert named.status_code == 200
    assert named.json()["total"] == 1


@pytest.mark.asyncio
async def test_technician_denied(client: AsyncClient, login):
    technician = await login("tech@fixit.example")

    response = await client.get(
        "/reports/monthly",
        params={"month": "2025-03", "customer_id": ACME_ID},
        headers=technician,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_bad_month(client: AsyncClient, login):
    customer_user = await login("client@acme.example")

    response = await client.get(
        "/reports/monthly", params={"month": "March"}, headers=customer_user
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
