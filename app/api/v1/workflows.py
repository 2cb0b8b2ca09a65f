from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_configured_dashboard
from app.api.v1.executions import serialize_execution
from app.schemas.dashboard import (
    ExecutionListResponse,
    WorkflowActionResponse,
    WorkflowListResponse,
)
from app.services.dashboard import DashboardService

router = APIRouter()


@router.get("/", response_model=WorkflowListResponse)
async def get_workflows(dashboard: DashboardService = Depends(get_configured_dashboard)):
    workflows = await dashboard.load_workflows()
    return WorkflowListResponse(
        workflows=workflows,
        loading=dashboard.state.loading,
        error=dashboard.state.error or None,
    )


@router.post("/{workflow_id}/toggle", response_model=WorkflowActionResponse)
async def toggle_workflow(
    workflow_id: str,
    dashboard: DashboardService = Depends(get_configured_dashboard),
):
    dashboard.state.error = ""
    workflow = await dashboard.toggle_workflow(workflow_id)
    error = dashboard.state.error or None
    return WorkflowActionResponse(
        success=workflow is not None and error is None,
        workflow=workflow,
        error=error,
        toast=dashboard.take_toast() or None,
    )


@router.post("/{workflow_id}/run", response_model=WorkflowListResponse)
async def run_workflow(
    workflow_id: str,
    dashboard: DashboardService = Depends(get_configured_dashboard),
):
    """Trigger a manual run and return the refreshed workflow list."""
    dashboard.state.error = ""
    await dashboard.execute_workflow(workflow_id)
    return WorkflowListResponse(
        workflows=dashboard.state.workflows,
        loading=dashboard.state.loading,
        error=dashboard.state.error or None,
        toast=dashboard.take_toast() or None,
    )


@router.get("/{workflow_id}/executions", response_model=ExecutionListResponse)
async def workflow_executions(
    workflow_id: str,
    dashboard: DashboardService = Depends(get_configured_dashboard),
):
    executions = await dashboard.view_workflow_executions(workflow_id)
    return ExecutionListResponse(
        executions=[serialize_execution(e) for e in executions],
        workflow=dashboard.state.selected_workflow,
        loading=dashboard.state.loading,
        error=dashboard.state.error or None,
    )
