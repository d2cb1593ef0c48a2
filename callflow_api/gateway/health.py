# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Health Check Endpoints

Endpoints:
- /health/live - Liveness check (is the app running?)
- /health/ready - Readiness check (is the document store initialized?)
"""

import logging
import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from ..core.settings import Settings
from ..data.connections import is_store_ready
from .dependencies import get_app_settings

logger = logging.getLogger(__name__)

router = APIRouter()

# Track startup time for uptime calculation
_startup_time = time.time()


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


class ReadinessResponse(BaseModel):
    status: str
    version: str
    environment: str
    store_backend: str
    uptime_seconds: float


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Returns 200 if the application process is running."""
    return LivenessResponse(status="alive", timestamp=datetime.now(UTC).isoformat())


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response, settings: Settings = Depends(get_app_settings)):
    """Returns 200 only once the primary document store is initialized."""
    ready = is_store_ready()
    if not ready:
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        version=settings.app_version,
        environment=settings.environment,
        store_backend=settings.store.backend,
        uptime_seconds=round(time.time() - _startup_time, 2),
    )
