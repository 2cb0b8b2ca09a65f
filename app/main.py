"""
n8n Manager - FastAPI Application
Backend for the mobile dashboard that operates one n8n instance
"""
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from datetime import datetime, timezone
import httpx
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import settings
from app.core.credentials import CredentialStore
from app.core.exceptions import NotConfiguredError, ValidationError
from app.integrations.n8n import N8NClient
from app.services.dashboard import DashboardService

from app.api.routes import health
from app.api.v1 import connection, executions, workflows

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    logger.info("Starting n8n Manager API...")
    store: CredentialStore = app.state.credential_store
    credential = store.load()
    if credential:
        logger.info("Restored n8n connection to %s", credential.base_url)
    else:
        logger.info("No n8n connection configured")
    logger.info(f"API running on {settings.app_env} environment")
    yield
    # Shutdown
    logger.info("Shutting down n8n Manager API...")


def create_app(
    store: CredentialStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Backend API for the n8n Manager dashboard",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.credential_store = store or CredentialStore()
    app.state.dashboard = DashboardService(
        app.state.credential_store,
        N8NClient(app.state.credential_store, transport=transport),
    )

    # Respect forwarded proto/host behind a proxy.
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotConfiguredError)
    async def not_configured_handler(request: Request, exc: NotConfiguredError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.get("/")
    async def root() -> dict:
        return {
            "name": settings.app_name,
            "environment": settings.app_env,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    prefix = settings.api_v1_prefix
    app.include_router(health.router, prefix=prefix, tags=["Health"])
    app.include_router(connection.router, prefix=f"{prefix}/connection", tags=["Connection"])
    app.include_router(workflows.router, prefix=f"{prefix}/workflows", tags=["Workflows"])
    app.include_router(executions.router, prefix=f"{prefix}/executions", tags=["Executions"])
    return app


app = create_app()
