"""
Health API Routes
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_credential_store
from app.config import settings
from app.core.credentials import CredentialStore

router = APIRouter()


@router.get("/health")
async def health_check(store: CredentialStore = Depends(get_credential_store)) -> dict:
    """Application health and whether an n8n instance is connected."""
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "n8n_configured": store.is_configured,
    }
