# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Observability Module

- logging: structured logging with request/environment/tenant context
  and the audit trail for record writes
"""

from .logging import (
    AuditLogger,
    ContextLogger,
    HumanFormatter,
    JSONFormatter,
    audit_logger,
    clear_request_context,
    configure_logging,
    get_logger,
    get_request_context,
    mask_sensitive_data,
    set_request_context,
)


def init_observability(
    environment: str = "development",
    log_level: str = "INFO",
    log_format: str = "json",
):
    """Configure process logging. Colors only in development."""
    configure_logging(
        level=log_level,
        format=log_format,
        use_colors=(environment == "development"),
    )


__all__ = [
    "init_observability",
    "configure_logging",
    "get_logger",
    "ContextLogger",
    "JSONFormatter",
    "HumanFormatter",
    "AuditLogger",
    "audit_logger",
    "set_request_context",
    "clear_request_context",
    "get_request_context",
    "mask_sensitive_data",
]
