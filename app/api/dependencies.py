"""Shared API dependencies."""
from __future__ import annotations

from fastapi import HTTPException, Request, status

from app.core.credentials import CredentialStore
from app.services.dashboard import DashboardService


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_dashboard(request: Request) -> DashboardService:
    return request.app.state.dashboard


def get_configured_dashboard(request: Request) -> DashboardService:
    dashboard = get_dashboard(request)
    if not dashboard.is_configured:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="n8n connection is not configured",
        )
    return dashboard
