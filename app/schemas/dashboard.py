from __future__ import annotations

from pydantic import BaseModel

from app.schemas.execution import ExecutionSchema
from app.schemas.workflow import WorkflowSchema


class ExecutionView(ExecutionSchema):
    title: str
    status_label: str
    status_color: str
    started_display: str
    duration_seconds: int | None = None


class WorkflowListResponse(BaseModel):
    workflows: list[WorkflowSchema]
    loading: bool = False
    error: str | None = None
    toast: str | None = None


class WorkflowActionResponse(BaseModel):
    success: bool
    workflow: WorkflowSchema | None = None
    error: str | None = None
    toast: str | None = None


class ExecutionListResponse(BaseModel):
    executions: list[ExecutionView]
    workflow: WorkflowSchema | None = None
    loading: bool = False
    error: str | None = None
