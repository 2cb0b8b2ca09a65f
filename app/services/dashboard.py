"""
Dashboard view controller.

Sequences n8n client calls in response to operator actions and keeps the
state the mobile front end renders: workflow and execution lists, the
selected workflow, the loading flag, the error banner and the toast.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.credentials import CredentialStore
from app.core.exceptions import AppError, ValidationError
from app.integrations.n8n import N8NClient
from app.schemas.credential import Credential

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "success": "Sucesso",
    "running": "Executando",
    "waiting": "Aguardando",
    "error": "Erro",
}

STATUS_COLORS = {
    "success": "emerald",
    "running": "amber",
    "waiting": "blue",
}


def status_label(status: Optional[str]) -> str:
    return STATUS_LABELS.get(status or "", status or "")


def status_color(status: Optional[str]) -> str:
    return STATUS_COLORS.get(status or "", "red")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """Short day/month hour:minute rendering used on workflow and execution cards."""
    parsed = _parse_timestamp(value)
    if parsed is None:
        return "-"
    return parsed.strftime("%d/%m %H:%M")


def execution_duration(execution: Dict[str, Any]) -> Optional[int]:
    """Whole seconds between start and stop, or None while still running."""
    started = _parse_timestamp(execution.get("startedAt"))
    stopped = _parse_timestamp(execution.get("stoppedAt"))
    if started is None or stopped is None:
        return None
    return math.floor((stopped - started).total_seconds() + 0.5)


def execution_title(execution: Dict[str, Any]) -> str:
    workflow_data = execution.get("workflowData") or {}
    return workflow_data.get("name") or f"Workflow #{execution.get('workflowId')}"


@dataclass
class DashboardState:
    workflows: List[Dict[str, Any]] = field(default_factory=list)
    executions: List[Dict[str, Any]] = field(default_factory=list)
    selected_workflow: Optional[Dict[str, Any]] = None
    loading: bool = False
    error: str = ""
    toast: str = ""


class DashboardService:
    """Operator actions over one credential store and its n8n client."""

    def __init__(self, store: CredentialStore, client: Optional[N8NClient] = None):
        self.store = store
        self.client = client or N8NClient(store)
        self.state = DashboardState()

    @property
    def is_configured(self) -> bool:
        return self.store.is_configured

    def _find(self, workflow_id: str) -> Optional[Dict[str, Any]]:
        for workflow in self.state.workflows:
            if str(workflow.get("id")) == str(workflow_id):
                return workflow
        return None

    async def connect(self, url: str, api_key: str) -> DashboardState:
        try:
            self.store.save(Credential(base_url=url or "", api_key=api_key or ""))
        except ValidationError:
            self.state.error = "Preencha todos os campos"
            raise
        self.state.error = ""
        await self.load_workflows()
        return self.state

    def disconnect(self) -> None:
        self.store.clear()
        self.state = DashboardState()

    async def load_workflows(self) -> List[Dict[str, Any]]:
        self.state.loading = True
        self.state.error = ""
        try:
            self.state.workflows = await self.client.list_workflows()
        except AppError as exc:
            logger.warning("Loading workflows failed: %s", exc)
            self.state.error = f"Falha ao carregar: {exc}"
        finally:
            self.state.loading = False
        return self.state.workflows

    async def load_executions(self, workflow_id: Optional[str] = None) -> List[Dict[str, Any]]:
        self.state.loading = True
        self.state.error = ""
        try:
            self.state.executions = await self.client.list_executions(workflow_id)
        except AppError as exc:
            logger.warning("Loading executions failed: %s", exc)
            self.state.error = f"Falha ao carregar execuções: {exc}"
        finally:
            self.state.loading = False
        return self.state.executions

    async def toggle_workflow(self, workflow_id: str) -> Optional[Dict[str, Any]]:
        workflow = self._find(workflow_id)
        if workflow is None:
            await self.load_workflows()
            workflow = self._find(workflow_id)
        if workflow is None:
            self.state.error = self.state.error or f"Workflow {workflow_id} não encontrado"
            return None

        new_status = not workflow.get("active", False)
        try:
            await self.client.set_workflow_active(str(workflow["id"]), new_status)
        except AppError as exc:
            logger.warning("Toggling workflow %s failed: %s", workflow_id, exc)
            self.state.error = f"Erro ao alterar: {exc}"
            return workflow

        updated = {**workflow, "active": new_status}
        self.state.workflows = [
            updated if str(w.get("id")) == str(workflow_id) else w for w in self.state.workflows
        ]
        self.state.toast = f"{workflow.get('name')} {'ativado' if new_status else 'desativado'}"
        return updated

    async def execute_workflow(self, workflow_id: str) -> bool:
        workflow = self._find(workflow_id) or {"id": workflow_id, "name": workflow_id}
        self.state.loading = True
        try:
            await self.client.run_workflow(str(workflow["id"]))
        except AppError as exc:
            logger.warning("Running workflow %s failed: %s", workflow_id, exc)
            self.state.error = f"Erro ao executar: {exc}"
            self.state.loading = False
            return False

        self.state.toast = f"{workflow.get('name')} executado!"
        await self.load_workflows()
        return True

    async def view_workflow_executions(self, workflow_id: str) -> List[Dict[str, Any]]:
        self.state.selected_workflow = self._find(workflow_id) or {"id": workflow_id}
        return await self.load_executions(workflow_id)

    def take_toast(self) -> str:
        toast, self.state.toast = self.state.toast, ""
        return toast
