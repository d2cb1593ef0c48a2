# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Exception Hierarchy

Structured exceptions shared by the store layer, the repositories and
the HTTP gateway. All exceptions include context via `details` dict.
"""

from typing import Any


class CallflowError(Exception):
    """
    Base exception for all Callflow Editor errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ============================================================
# CONFIGURATION ERRORS
# ============================================================


class ConfigurationError(CallflowError):
    """Configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        environment: str | None = None,
        tenant: str | None = None,
        **kwargs,
    ):
        details = kwargs.get("details", {})
        if environment is not None:
            details["environment"] = environment
        if tenant is not None:
            details["tenant"] = tenant
        super().__init__(message, details)


# ============================================================
# STORE ERRORS
# ============================================================


class StoreError(CallflowError):
    """Base class for document store errors."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        record_id: str | None = None,
        **kwargs,
    ):
        details = kwargs.get("details", {})
        if collection:
            details["collection"] = collection
        if record_id:
            details["record_id"] = record_id
        super().__init__(message, details)


class NotFoundError(StoreError):
    """No record matched the requested identifier or field."""

    pass


class ConflictError(StoreError):
    """A record with the same identifier already exists."""

    pass


class UpstreamError(StoreError):
    """Transport or store-side failure. The original message is kept verbatim."""

    def __init__(self, message: str, original_error: Exception | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if original_error is not None:
            self.details["original_error"] = type(original_error).__name__


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    # Base
    "CallflowError",
    # Configuration
    "ConfigurationError",
    # Store
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
