from __future__ import annotations

import json

import httpx
import pytest

from app.core.credentials import CredentialStore
from app.core.exceptions import ValidationError
from app.integrations.n8n import N8NClient
from app.services.dashboard import (
    DashboardService,
    execution_duration,
    execution_title,
    format_date,
    status_color,
    status_label,
)


class FakeN8N:
    """In-memory n8n API answering through httpx.MockTransport."""

    def __init__(self):
        self.workflows = [
            {"id": "1", "name": "Leads", "active": False, "updatedAt": "2024-01-01T00:00:00Z"},
            {"id": "2", "name": "Reports", "active": True, "updatedAt": "2024-02-01T10:30:00Z"},
        ]
        self.executions = [
            {"id": "90", "workflowId": "1", "status": "success",
             "startedAt": "2024-03-01T12:00:00Z", "stoppedAt": "2024-03-01T12:00:05Z"},
        ]
        self.fail_with: int | None = None
        self.calls: list[tuple[str, str]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        if self.fail_with:
            return httpx.Response(self.fail_with)
        path = request.url.path
        if request.method == "GET" and path == "/api/v1/workflows":
            return httpx.Response(200, json={"data": self.workflows})
        if request.method == "GET" and path == "/api/v1/executions":
            return httpx.Response(200, json={"data": self.executions})
        if request.method == "PATCH":
            body = json.loads(request.content)
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1], **body})
        if request.method == "POST" and path.endswith("/run"):
            return httpx.Response(200, json={})
        return httpx.Response(404)


@pytest.fixture
def server():
    return FakeN8N()


@pytest.fixture
def dashboard(server):
    store = CredentialStore()
    client = N8NClient(store, transport=httpx.MockTransport(server.handle))
    return DashboardService(store, client)


@pytest.mark.asyncio
async def test_connect_saves_credential_and_loads_workflows(dashboard, server):
    state = await dashboard.connect("https://n8n.example.com/", "key")
    assert dashboard.is_configured
    assert [w["id"] for w in state.workflows] == ["1", "2"]
    assert state.error == ""
    assert server.calls == [("GET", "/api/v1/workflows")]


@pytest.mark.asyncio
async def test_connect_with_blank_field_sets_form_error(dashboard, server):
    with pytest.raises(ValidationError):
        await dashboard.connect("https://n8n.example.com", "")
    assert dashboard.state.error == "Preencha todos os campos"
    assert not dashboard.is_configured
    assert server.calls == []


@pytest.mark.asyncio
async def test_toggle_reflects_new_state_after_success(dashboard):
    await dashboard.connect("https://n8n.example.com", "key")

    updated = await dashboard.toggle_workflow("1")

    assert updated["active"] is True
    assert dashboard.state.workflows[0]["active"] is True
    assert dashboard.take_toast() == "Leads ativado"
    assert dashboard.state.toast == ""


@pytest.mark.asyncio
async def test_toggle_failure_keeps_local_state(dashboard, server):
    await dashboard.connect("https://n8n.example.com", "key")
    server.fail_with = 401

    await dashboard.toggle_workflow("2")

    assert dashboard.state.workflows[1]["active"] is True
    assert dashboard.state.error == "Erro ao alterar: Erro 401: Unauthorized"
    assert dashboard.state.toast == ""


@pytest.mark.asyncio
async def test_execute_runs_then_reloads_workflows(dashboard, server):
    await dashboard.connect("https://n8n.example.com", "key")
    server.calls.clear()

    assert await dashboard.execute_workflow("2") is True

    assert server.calls == [("POST", "/api/v1/workflows/2/run"), ("GET", "/api/v1/workflows")]
    assert dashboard.state.toast == "Reports executado!"
    assert dashboard.state.loading is False


@pytest.mark.asyncio
async def test_failed_load_keeps_previous_list(dashboard, server):
    await dashboard.connect("https://n8n.example.com", "key")
    server.fail_with = 500

    workflows = await dashboard.load_workflows()

    assert len(workflows) == 2
    assert dashboard.state.error == "Falha ao carregar: Erro 500: Internal Server Error"


@pytest.mark.asyncio
async def test_view_workflow_executions_selects_workflow(dashboard, server):
    await dashboard.connect("https://n8n.example.com", "key")

    executions = await dashboard.view_workflow_executions("1")

    assert executions == server.executions
    assert dashboard.state.selected_workflow["name"] == "Leads"
    assert server.calls[-1] == ("GET", "/api/v1/executions")


@pytest.mark.asyncio
async def test_disconnect_resets_everything(dashboard):
    await dashboard.connect("https://n8n.example.com", "key")
    dashboard.disconnect()
    assert not dashboard.is_configured
    assert dashboard.state.workflows == []


def test_display_helpers():
    execution = {
        "id": "1",
        "workflowId": "5",
        "status": "running",
        "startedAt": "2024-03-01T12:00:00Z",
        "stoppedAt": None,
    }
    assert status_label("success") == "Sucesso"
    assert status_label("crashed") == "crashed"
    assert status_color("waiting") == "blue"
    assert status_color("crashed") == "red"
    assert format_date(None) == "-"
    assert format_date("2024-03-01T12:07:00Z") == "01/03 12:07"
    assert execution_duration(execution) is None
    assert execution_duration({**execution, "stoppedAt": "2024-03-01T12:00:04.600Z"}) == 5
    assert execution_duration({**execution, "stoppedAt": "2024-03-01T12:00:02.500Z"}) == 3
    assert execution_title(execution) == "Workflow #5"
    assert execution_title({**execution, "workflowData": {"name": "Leads"}}) == "Leads"
