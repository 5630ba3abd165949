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
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ErosError,
    NotFoundError,
    ValidationError,
)
from modules.auth.models import ProviderSettings
from modules.auth.provider import initialize_identity_provider, is_identity_provider_initialized
from modules.identity.routes import router as identity_router

from .dependencies import get_container
from .middleware.auth import UNAUTHENTICATED_DETAIL
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Fails fast on a blank signing secret or an unusable provider config.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    get_container().tokens
    if not is_identity_provider_initialized():
        initialize_identity_provider(ProviderSettings.from_settings(settings))
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def _error(status_code: int, error: str, exc: ErosError, detail: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail or exc.message, code=exc.code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    # Same body as the bearer dependencies, whatever the underlying reason
    logger.debug("Authentication failed on %s: %s", request.url.path, exc.code)
    return JSONResponse(
        status_code=401,
        content={"detail": UNAUTHENTICATED_DETAIL},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    return _error(403, "Forbidden", exc, detail="Insufficient permissions")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    body = ValidationErrorResponse(errors=exc.details["errors"])
    return JSONResponse(status_code=400, content=body.model_dump())


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(409, "Conflict", exc)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, "Not Found", exc)


async def eros_error_handler(request: Request, exc: ErosError) -> JSONResponse:
    logger.error(
        "Unhandled %s on %s: %s (code=%s, details=%s)",
        type(exc).__name__,
        request.url.path,
        exc.message,
        exc.code,
        exc.details,
        exc_info=exc,
    )
    return _error(500, "Internal Server Error", exc, detail="An internal error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Map the domain error hierarchy onto HTTP responses."""
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(ErosError, eros_error_handler)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Identity verification and session token API",
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

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(identity_router, prefix="/api/auth", tags=["auth"])

    return app


# Application instance for uvicorn
app = create_app()
