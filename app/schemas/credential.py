from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Server URL and API key for one n8n instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(alias="url")
    api_key: str = Field(alias="apiKey")


class ConnectionStatus(BaseModel):
    configured: bool
    url: str | None = None
