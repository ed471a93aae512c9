import pytest
from httpx import AsyncClient

VIEW = "/api/v1/view"


async def _fill_add_form(client: AsyncClient, values: dict):
    for field, value in values.items():
        response = await client.post(f"{VIEW}/add/input", json={"field": field, "value": value})
        assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_initial_page_is_landing(client: AsyncClient):
    response = await client.get(f"{VIEW}/")
    assert response.status_code == 200
    page = response.json()
    assert page["screen"] == "landing"
    assert page["landing"]["title"] == "Abend Log"
    assert page["detail"]["visible"] is False


@pytest.mark.asyncio
async def test_navigate(client: AsyncClient):
    page = (await client.post(f"{VIEW}/navigate", json={"screen": "scan"})).json()
    assert page["screen"] == "scan"
    assert page["scan_table"]["count"] == 3

    response = await client.post(f"{VIEW}/navigate", json={"screen": "reports"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_add_log_flow(client: AsyncClient, valid_draft: dict):
    """Inputs are normalized, submit creates the log and shows the scan table."""
    await client.post(f"{VIEW}/navigate", json={"screen": "add"})
    page = await _fill_add_form(client, {**valid_draft, "subsystem": "cics", "program": "ordentry"})
    fields = {f["name"]: f["value"] for f in page["add_form"]["fields"]}
    assert fields["subsystem"] == "CI"
    assert fields["program"] == "ORDENTRY"

    response = await client.post(f"{VIEW}/add/submit")
    assert response.status_code == 201, response.text
    page = response.json()
    assert page["screen"] == "scan"
    assert page["scan_table"]["count"] == 4
    assert page["scan_table"]["rows"][0]["cells"]["logNumber"] == "0042"


@pytest.mark.asyncio
async def test_submit_incomplete_form(client: AsyncClient):
    await client.post(f"{VIEW}/navigate", json={"screen": "add"})
    await client.post(f"{VIEW}/add/input", json={"field": "subsystem", "value": "ci"})

    response = await client.post(f"{VIEW}/add/submit")
    assert response.status_code == 422
    errors = response.json()["detail"]["errors"]
    assert "subsystem" not in errors
    assert errors["category"] == "Category is required"

    page = (await client.get(f"{VIEW}/")).json()
    assert page["screen"] == "add"
    jobname = next(f for f in page["add_form"]["fields"] if f["name"] == "jobname")
    assert jobname["error"] == "Job name is required (max 8 chars)"


@pytest.mark.asyncio
async def test_add_input_rejects_unknown_field(client: AsyncClient):
    response = await client.post(f"{VIEW}/add/input", json={"field": "id", "value": "x"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cancel_add(client: AsyncClient):
    await client.post(f"{VIEW}/navigate", json={"screen": "add"})
    page = (await client.post(f"{VIEW}/add/cancel")).json()
    assert page["screen"] == "landing"


@pytest.mark.asyncio
async def test_search_and_filters(client: AsyncClient):
    await client.post(f"{VIEW}/navigate", json={"screen": "scan"})
    page = (await client.put(f"{VIEW}/search", json={"query": "payroll"})).json()
    assert [r["id"] for r in page["scan_table"]["rows"]] == ["2"]

    page = (await client.put(f"{VIEW}/filters", json={"composite": "prod"})).json()
    assert page["scan_table"]["rows"] == []
    assert page["scan_table"]["empty_message"] == "No logs found matching your criteria."

    response = await client.put(f"{VIEW}/filters", json={"problem": "x"})
    assert response.status_code == 400

    page = (await client.delete(f"{VIEW}/filters")).json()
    assert page["scan_table"]["count"] == 3
    assert page["scan_table"]["query"] == ""


@pytest.mark.asyncio
async def test_detail_edit_and_save(client: AsyncClient):
    """Edits are saved in place without required-field checks."""
    response = await client.post(f"{VIEW}/edit")
    assert response.status_code == 409

    page = (await client.post(f"{VIEW}/select/2")).json()
    assert page["detail"]["breadcrumb"] == ["IM", "PAYROLL", "U0100", "#0002"]

    await client.post(f"{VIEW}/edit")
    await client.post(f"{VIEW}/detail/input", json={"field": "description", "value": ""})
    page = (await client.post(f"{VIEW}/detail/save")).json()
    assert page["detail"]["edit_mode"] is False
    fields = {f["name"]: f["value"] for f in page["detail"]["fields"]}
    assert fields["description"] == ""

    log = (await client.get("/api/v1/logs/2")).json()
    assert log["description"] == ""
    assert log["timestamp"].startswith("2024-12-14T09:15:00")


@pytest.mark.asyncio
async def test_detail_save_with_body(client: AsyncClient):
    await client.post(f"{VIEW}/select/1")
    page = (await client.post(f"{VIEW}/detail/save", json={"jobname": "batch0123"})).json()
    fields = {f["name"]: f["value"] for f in page["detail"]["fields"]}
    assert fields["jobname"] == "BATCH012"


@pytest.mark.asyncio
async def test_detail_input_outside_edit_mode(client: AsyncClient):
    await client.post(f"{VIEW}/select/1")
    response = await client.post(f"{VIEW}/detail/input", json={"field": "description", "value": "x"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_select_unknown_log(client: AsyncClient):
    response = await client.post(f"{VIEW}/select/missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_and_close(client: AsyncClient):
    await client.post(f"{VIEW}/select/1")
    await client.post(f"{VIEW}/edit")
    page = (await client.post(f"{VIEW}/detail/cancel")).json()
    assert page["detail"]["visible"] is True
    assert page["detail"]["edit_mode"] is False

    page = (await client.post(f"{VIEW}/close")).json()
    assert page["detail"]["visible"] is False


@pytest.mark.asyncio
async def test_copy_flow(client: AsyncClient):
    """Copy prefills the add form without a log number and saves a new log."""
    response = await client.post(f"{VIEW}/copy")
    assert response.status_code == 409

    await client.post(f"{VIEW}/select/3")
    page = (await client.post(f"{VIEW}/copy")).json()
    assert page["screen"] == "add"
    assert page["detail"]["visible"] is False
    assert page["add_form"]["title"] == "Copy Log Entry"
    fields = {f["name"]: f["value"] for f in page["add_form"]["fields"]}
    assert fields["program"] == "INVMGMT"
    assert fields["logNumber"] == ""

    await client.post(f"{VIEW}/add/input", json={"field": "logNumber", "value": "0004"})
    response = await client.post(f"{VIEW}/add/submit")
    assert response.status_code == 201

    logs = (await client.get("/api/v1/logs/", params={"program": "invmgmt"})).json()
    assert [log["logNumber"] for log in logs] == ["0004", "0003"]
    assert logs[0]["id"] != "3"


@pytest.mark.asyncio
async def test_copy_unknown_log(client: AsyncClient):
    response = await client.post(f"{VIEW}/copy", params={"log_id": "missing"})
    assert response.status_code == 404
