from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WorkflowSchema(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: str = ""
    active: bool = False
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
