# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Callflow Routes

Editor endpoints for callflow scripts. Intent-keyed writes keep a single
canonical record per intent and remove duplicates on the way.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from ..data.repositories import CallflowRepository
from .dependencies import get_callflow_repository
from .errors import store_errors

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Callflows"])


@router.get("/callflows")
async def list_callflows(repo: CallflowRepository = Depends(get_callflow_repository)):
    """All callflows, newest first."""
    with store_errors("Failed to fetch callflows"):
        return await repo.list_all()


@router.get("/callflows/intent/{intent}")
async def get_callflow_by_intent(
    intent: str,
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    """Canonical callflow for an intent."""
    with store_errors("Failed to fetch callflow", not_found="Callflow not found"):
        return await repo.get_by_intent(intent)


@router.get("/callflows/{callflow_id}")
async def get_callflow(
    callflow_id: str,
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    with store_errors("Failed to fetch callflow", not_found="Callflow not found"):
        return await repo.get_by_id(callflow_id)


@router.get("/clear-duplicates/{intent}")
async def clear_duplicates(
    intent: str,
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    """Keep the canonical callflow for the intent and delete the others."""
    with store_errors("Failed to clear duplicates"):
        outcome = await repo.clear_duplicates(intent)

    if outcome.kept is None:
        return {"message": "No records found"}

    return {
        "success": True,
        "message": f"Kept ID {outcome.kept['id']}, deleted {len(outcome.removal.deleted)}",
        "kept": outcome.kept["id"],
        **outcome.removal.to_dict(),
    }


@router.post("/callflows")
async def create_callflow(
    payload: dict[str, Any] = Body(...),
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    """Create a callflow, or update the existing one with the same intent."""
    with store_errors("Failed to create callflow"):
        outcome = await repo.save(payload)

    if outcome.created:
        return outcome.record
    return {**outcome.record, "message": "Updated existing callflow"}


@router.put("/callflows/intent/{intent}")
async def save_callflow_by_intent(
    intent: str,
    payload: dict[str, Any] = Body(...),
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    """Upsert the canonical callflow for the intent, removing duplicates."""
    with store_errors("Failed to save callflow"):
        outcome = await repo.upsert_by_intent(intent, payload)
    return outcome.record


@router.delete("/callflows/intent/{intent}")
async def delete_callflows_by_intent(
    intent: str,
    repo: CallflowRepository = Depends(get_callflow_repository),
):
    """Delete every callflow with the intent."""
    with store_errors("Failed to delete callflow", not_found="Callflow not found"):
        result = await repo.delete_by_intent(intent)

    return {
        "success": True,
        "message": f"Deleted {len(result.deleted)} callflow(s)",
        **result.to_dict(),
    }
