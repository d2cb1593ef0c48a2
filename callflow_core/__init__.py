# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Callflow Core - Shared Primitives

This package contains the pieces shared between the HTTP gateway and
the store layer of the Callflow Editor API.

Modules:
    exceptions: Structured exception hierarchy
"""

__version__ = "1.0.0"

from .exceptions.hierarchy import (
    CallflowError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    StoreError,
    UpstreamError,
)

__all__ = [
    "CallflowError",
    "ConfigurationError",
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
