from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ExecutionStatus = Literal["success", "running", "waiting", "error"]


class ExecutionWorkflowData(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


class ExecutionSchema(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    workflow_id: str | None = Field(default=None, alias="workflowId")
    # n8n adds states over time (canceled, crashed, new); keep them readable.
    status: ExecutionStatus | str | None = None
    started_at: datetime | None = Field(default=None, alias="startedAt")
    stopped_at: datetime | None = Field(default=None, alias="stoppedAt")
    workflow_data: ExecutionWorkflowData | None = Field(default=None, alias="workflowData")
