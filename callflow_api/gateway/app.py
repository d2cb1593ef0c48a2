# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
FastAPI Gateway Application

Main entry point for the Callflow Editor API. Editor routes are mounted
under the configurable API prefix; the virtual assistant read route is
mounted at the root.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from callflow_core.exceptions.hierarchy import CallflowError, NotFoundError

from ..core.async_base import Lifecycle
from ..core.profiles import ProfileResolver
from ..core.settings import Settings, get_settings
from ..data.connections import (
    close_store,
    close_store_registry,
    init_store,
    init_store_registry,
)
from ..observability import init_observability
from .callflow_routes import router as callflow_router
from .health import router as health_router
from .request_context import RequestContextMiddleware
from .resource_routes import router as resource_router
from .va_routes import router as va_router

logger = logging.getLogger(__name__)


# ============================================================
# LIFECYCLE
# ============================================================


def build_lifecycle(settings: Settings) -> Lifecycle:
    lifecycle = Lifecycle()

    @lifecycle.on_startup
    async def startup_observability():
        init_observability(
            environment=settings.environment,
            log_level=settings.observability.level,
            log_format=settings.observability.format,
        )
        logger.info("Observability initialized")

    @lifecycle.on_startup
    async def startup_store():
        await init_store(settings)
        logger.info("Document store initialized")

    @lifecycle.on_startup
    async def startup_store_registry():
        init_store_registry(settings)
        logger.info("Profile store registry initialized")

    @lifecycle.on_shutdown
    async def shutdown_store():
        await close_store()

    @lifecycle.on_shutdown
    async def shutdown_store_registry():
        await close_store_registry()

    return lifecycle


# ============================================================
# APPLICATION
# ============================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    lifecycle = build_lifecycle(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await lifecycle.startup()
        yield
        await lifecycle.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description="Call-flow, message group and tag records for the call-flow editor",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.profile_resolver = ProfileResolver.from_settings(settings)

    # --------------------------------------------------------
    # MIDDLEWARE
    # --------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware, header_name="X-Request-ID", log_requests=True)

    # --------------------------------------------------------
    # EXCEPTION HANDLERS
    # --------------------------------------------------------

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        content = dict(exc.detail) if isinstance(exc.detail, dict) else {"error": exc.detail}
        content["status_code"] = exc.status_code
        content["request_id"] = getattr(request.state, "request_id", None)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(CallflowError)
    async def callflow_error_handler(request: Request, exc: CallflowError):
        status_code = 404 if isinstance(exc, NotFoundError) else 500
        logger.error(f"Unmapped {type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.__class__.__name__,
                "details": exc.message,
                "status_code": status_code,
                "request_id": getattr(request.state, "request_id", None),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "status_code": 500,
                "request_id": getattr(request.state, "request_id", None),
            },
        )

    # --------------------------------------------------------
    # ROUTES
    # --------------------------------------------------------

    app.include_router(health_router, tags=["Health"])

    # Editor routes (prefixed), registered before the root-level
    # assistant route so they win when the prefix is empty
    app.include_router(callflow_router, prefix=settings.api_prefix)
    app.include_router(resource_router, prefix=settings.api_prefix)

    app.include_router(va_router)

    return app


__all__ = ["create_app", "build_lifecycle"]
