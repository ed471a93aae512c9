import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_logs_newest_first(client: AsyncClient):
    """GET lists every log in store order with camelCase fields."""
    response = await client.get("/api/v1/logs/")
    assert response.status_code == 200, response.text
    data = response.json()
    assert [log["id"] for log in data] == ["1", "2", "3"]
    assert data[0]["abendCode"] == "ASRA"
    assert data[0]["logNumber"] == "0001"
    assert data[0]["createdBy"] == "John Doe"
    assert data[0]["timestamp"].startswith("2024-12-15T14:30:00")


@pytest.mark.asyncio
async def test_list_logs_filtered(client: AsyncClient):
    """Global query and column filters combine."""
    response = await client.get("/api/v1/logs/", params={"q": "prod", "subsystem": "db"})
    assert [log["id"] for log in response.json()] == ["3"]

    response = await client.get("/api/v1/logs/", params={"date": "1214", "createdBy": "jane"})
    assert [log["id"] for log in response.json()] == ["2"]

    response = await client.get("/api/v1/logs/", params={"abendCode": "s0c"})
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_log(client: AsyncClient):
    response = await client.get("/api/v1/logs/3")
    assert response.status_code == 200
    assert response.json()["program"] == "INVMGMT"

    response = await client.get("/api/v1/logs/nope")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_needs_confirmation(client: AsyncClient):
    """DELETE without confirm returns the prompt and keeps the log."""
    response = await client.delete("/api/v1/logs/2")
    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["confirmed"] is False
    assert "IM-PAYROLL-U0100-0002" in detail["prompt"]

    assert (await client.get("/api/v1/logs/2")).status_code == 200


@pytest.mark.asyncio
async def test_confirmed_delete(client: AsyncClient):
    response = await client.delete("/api/v1/logs/2", params={"confirm": "true"})
    assert response.status_code == 204
    assert (await client.get("/api/v1/logs/2")).status_code == 404

    # Deleting again is a no-op
    response = await client.delete("/api/v1/logs/2", params={"confirm": "true"})
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_open_log_closes_overlay(client: AsyncClient):
    await client.post("/api/v1/view/select/1")
    await client.delete("/api/v1/logs/1", params={"confirm": "true"})

    page = (await client.get("/api/v1/view/")).json()
    assert page["detail"]["visible"] is False


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    response = await client.get("/")
    assert response.json()["name"] == "Abend Log"


@pytest.mark.asyncio
async def test_correlation_id_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Correlation-ID": "corr-123"})
    assert response.headers["X-Correlation-ID"] == "corr-123"
    assert response.headers["X-Event-ID"]
