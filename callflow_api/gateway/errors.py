# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Error mapping for route handlers.

Store and configuration failures become JSON error bodies of the form
{"error": <summary>, "details": <original message>}. Not-found maps to
404; every other failure maps to 500.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException

from callflow_core.exceptions.hierarchy import CallflowError, NotFoundError

logger = logging.getLogger(__name__)


def error_body(summary: str, details: str | None = None) -> dict[str, str]:
    body = {"error": summary}
    if details is not None:
        body["details"] = details
    return body


@contextmanager
def store_errors(summary: str, not_found: str | None = None) -> Iterator[None]:
    """
    Translate CallflowError raised inside the block into HTTPException.

    Usage:
        with store_errors("Failed to fetch callflow", not_found="Callflow not found"):
            return await repo.get_by_intent(intent)
    """
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(
            status_code=404,
            detail=error_body(not_found or summary, e.message),
        ) from e
    except CallflowError as e:
        logger.error(f"{summary}: {e.message}", extra={"error_details": e.details})
        raise HTTPException(status_code=500, detail=error_body(summary, e.message)) from e


__all__ = ["error_body", "store_errors"]
