from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_credential_store, get_dashboard
from app.core.credentials import CredentialStore
from app.schemas.credential import ConnectionStatus, Credential
from app.schemas.dashboard import WorkflowListResponse
from app.services.dashboard import DashboardService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=ConnectionStatus)
async def connection_status(store: CredentialStore = Depends(get_credential_store)):
    credential = store.credential
    return ConnectionStatus(
        configured=credential is not None,
        url=credential.base_url if credential else None,
    )


@router.post("/", response_model=WorkflowListResponse)
async def connect(payload: Credential, dashboard: DashboardService = Depends(get_dashboard)):
    """Save the credential and return the first workflow listing."""
    state = await dashboard.connect(payload.base_url, payload.api_key)
    return WorkflowListResponse(
        workflows=state.workflows,
        loading=state.loading,
        error=state.error or None,
    )


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def disconnect(dashboard: DashboardService = Depends(get_dashboard)) -> None:
    dashboard.disconnect()
