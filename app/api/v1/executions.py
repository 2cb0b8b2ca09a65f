from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.api.dependencies import get_configured_dashboard
from app.schemas.dashboard import ExecutionListResponse, ExecutionView
from app.services.dashboard import (
    DashboardService,
    execution_duration,
    execution_title,
    format_date,
    status_color,
    status_label,
)

router = APIRouter()


@router.get("/", response_model=ExecutionListResponse)
async def list_executions(dashboard: DashboardService = Depends(get_configured_dashboard)):
    executions = await dashboard.load_executions()
    return ExecutionListResponse(
        executions=[serialize_execution(e) for e in executions],
        loading=dashboard.state.loading,
        error=dashboard.state.error or None,
    )


def serialize_execution(execution: dict[str, Any]) -> ExecutionView:
    status = execution.get("status")
    return ExecutionView.model_validate(
        {
            **execution,
            "title": execution_title(execution),
            "status_label": status_label(status),
            "status_color": status_color(status),
            "started_display": format_date(execution.get("startedAt")),
            "duration_seconds": execution_duration(execution),
        }
    )
