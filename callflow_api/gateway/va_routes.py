# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Virtual Assistant Routes

Tenant/environment-aware callflow reads. The `env` and `va` query
parameters select a connection profile; unknown pairs are rejected
before any store is opened.
"""

from fastapi import APIRouter, Depends, Query

from ..core.profiles import ProfileResolver
from ..data.connections import StoreRegistry
from ..observability.logging import get_logger
from .dependencies import get_profile_resolver, get_registry
from .errors import store_errors
from .request_context import set_profile_context

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["Virtual Assistants"])


@router.get("/callflows/{intent}")
async def get_va_callflow(
    intent: str,
    env: str | None = Query(default=None),
    va: str | None = Query(default=None),
    user: str = Query(default="anonymous"),
    command: str = Query(default="view"),
    resolver: ProfileResolver = Depends(get_profile_resolver),
    registry: StoreRegistry = Depends(get_registry),
):
    """
    Fetch a callflow from the database of one environment/assistant.

    The callflow document is stored under its intent as id. Omitted
    `env`/`va` fall back to the configured default profile; the envelope
    names the profile that actually served the read.
    """
    logger.info(
        f"GET callflow for intent: {intent} env={env}, va={va}",
        extra={"intent": intent, "user": user, "command": command},
    )

    with store_errors("Internal server error", not_found=f"Callflow for {intent} not found"):
        profile = resolver.resolve(env, va)
        set_profile_context(profile.environment.value, profile.tenant.value, user)

        store = registry.get(profile)
        flow = await store.get(profile.container, intent)

    return {
        "intent": intent,
        "env": profile.environment.value,
        "va": profile.tenant.value,
        "user": user,
        "command": command,
        "callflow": flow,
    }
