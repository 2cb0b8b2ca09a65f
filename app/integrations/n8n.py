from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.credentials import CredentialStore
from app.core.exceptions import HttpStatusError, TransportError

logger = logging.getLogger(__name__)

API_PATH = "/api/v1"
API_KEY_HEADER = "X-N8N-API-KEY"
WORKFLOW_EXECUTIONS_LIMIT = 20
RECENT_EXECUTIONS_LIMIT = 30


class N8NClient:
    """n8n public REST API client bound to the credential held by a store."""

    def __init__(
        self,
        store: CredentialStore,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.store = store
        self.transport = transport

    def _base_url(self, url: str) -> str:
        # Only one trailing slash is stripped.
        base = url[:-1] if url.endswith("/") else url
        return f"{base}{API_PATH}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        credential = self.store.require()
        url = f"{self._base_url(credential.base_url)}{path}"
        headers = {
            API_KEY_HEADER: credential.api_key,
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=headers,
                )
            except httpx.TransportError as exc:
                logger.error("n8n %s %s unreachable: %s", method, url, exc)
                raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.error("n8n %s %s failed: %s", method, url, response.status_code)
            raise HttpStatusError(response.status_code, response.reason_phrase)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("n8n %s %s returned a non-JSON body", method, url)
            return None

    @staticmethod
    def _data(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            return []
        return list(payload.get("data") or [])

    async def list_workflows(self) -> list[dict[str, Any]]:
        """Return every workflow on the server, verbatim."""
        return self._data(await self._request("GET", "/workflows"))

    async def list_executions(
        self,
        workflow_id: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return recent executions, optionally filtered to one workflow."""
        params: dict[str, Any] = {}
        if workflow_id:
            params["workflowId"] = workflow_id
            params["limit"] = limit if limit is not None else WORKFLOW_EXECUTIONS_LIMIT
        else:
            params["limit"] = limit if limit is not None else RECENT_EXECUTIONS_LIMIT
        return self._data(await self._request("GET", "/executions", params=params))

    async def set_workflow_active(self, workflow_id: str, active: bool) -> None:
        await self._request("PATCH", f"/workflows/{workflow_id}", json={"active": active})

    async def run_workflow(self, workflow_id: str) -> None:
        """Trigger a manual run. The outcome shows up later in the executions list."""
        await self._request("POST", f"/workflows/{workflow_id}/run", json={})
