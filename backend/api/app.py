"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import PortalError
from shared.log_utils import configure_logging

from .dependencies import reset_container
from .models.errors import error_response_for, status_code_for
from .routes import admin_auth, client_auth, health, sessions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.debug)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown: browsing contexts do not outlive the process
    reset_container()
    logger.info(f"Shutting down {settings.app_name}")


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    """Render portal exceptions as ErrorResponse bodies."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=error_response_for(exc).model_dump(),
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-role session coordination and admin OTP login",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(PortalError, portal_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(admin_auth.router, prefix="/api/admin/auth", tags=["admin-auth"])
    app.include_router(client_auth.router, prefix="/api/client/auth", tags=["client-auth"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])

    return app


# Application instance for uvicorn
app = create_app()
