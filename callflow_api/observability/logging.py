# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Structured Logging

Every record carries the request id and, for tenant-aware reads, the
environment, virtual assistant and user it was served for. Output is
either one JSON object per line (deployed) or a single readable line
(local development). Record writes additionally go to the audit logger.
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# ============================================================
# CONTEXT VARIABLES
# ============================================================

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
environment_var: ContextVar[str | None] = ContextVar("environment", default=None)
tenant_var: ContextVar[str | None] = ContextVar("tenant", default=None)
user_var: ContextVar[str | None] = ContextVar("user", default=None)

_CONTEXT_VARS = {
    "request_id": request_id_var,
    "environment": environment_var,
    "tenant": tenant_var,
    "user": user_var,
}


def set_request_context(
    request_id: str | None = None,
    environment: str | None = None,
    tenant: str | None = None,
    user: str | None = None,
):
    """Set request context variables. Arguments left as None are not touched."""
    for name, value in zip(_CONTEXT_VARS, (request_id, environment, tenant, user), strict=True):
        if value:
            _CONTEXT_VARS[name].set(value)


def clear_request_context():
    for var in _CONTEXT_VARS.values():
        var.set(None)


def get_request_context() -> dict[str, str | None]:
    return {name: var.get() for name, var in _CONTEXT_VARS.items()}


# ============================================================
# SENSITIVE DATA MASKING
# ============================================================

# A field is masked when its name contains one of these
SENSITIVE_FIELDS = {
    "password",
    "secret",
    "token",
    "credential",
    "authorization",
    "account_key",
    "master_key",
    "access_key",
    "api_key",
    "apikey",
}

# ... or is exactly one of these (partition_key, cache_key stay visible)
SENSITIVE_EXACT = {"key", "auth"}

REDACTED = "[REDACTED]"


def _is_sensitive(name: str) -> bool:
    name = name.lower()
    return name in SENSITIVE_EXACT or any(s in name for s in SENSITIVE_FIELDS)


def mask_sensitive_data(data: Any, depth: int = 0, max_depth: int = 10) -> Any:
    """Copy of `data` with credential-like fields of nested dicts replaced."""
    if depth > max_depth:
        return "[MAX_DEPTH_EXCEEDED]"

    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            if _is_sensitive(str(key)):
                masked[key] = REDACTED
            else:
                masked[key] = mask_sensitive_data(value, depth + 1, max_depth)
        return masked

    if isinstance(data, list):
        return [mask_sensitive_data(item, depth + 1, max_depth) for item in data]

    return data


# ============================================================
# FORMATTERS
# ============================================================

# Present on every LogRecord; anything else arrived through `extra`
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line; empty context fields are left out."""

    def __init__(self, mask_sensitive: bool = True):
        super().__init__()
        self.mask_sensitive = mask_sensitive

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update({k: v for k, v in get_request_context().items() if v is not None})

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["error_type"] = exc_type.__name__
            entry["error_message"] = str(exc_value)
            entry["stack_trace"] = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = mask_sensitive_data(extra) if self.mask_sensitive else extra

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """
    `<time> <LEVEL> <logger>:<line> [req=.. env=.. va=..] <message>`

    The level is colored when `use_colors` is set.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    # (context variable, label, max length)
    _CONTEXT_LABELS = (("request_id", "req", 8), ("environment", "env", None), ("tenant", "va", None))

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def _context(self) -> str:
        ctx = get_request_context()
        parts = [
            f"{label}={ctx[name][:width] if width else ctx[name]}"
            for name, label, width in self._CONTEXT_LABELS
            if ctx[name]
        ]
        return f"[{' '.join(parts)}] " if parts else ""

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level}{self.RESET}"

        timestamp = datetime.now(UTC).strftime("%H:%M:%S.%f")[:-3]
        line = f"{timestamp} {level:8} {record.name}:{record.lineno} {self._context()}{record.getMessage()}"

        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return line


# ============================================================
# CONFIGURATION
# ============================================================

# Loggers that are too chatty at INFO
_QUIET_LOGGERS = (
    "azure",
    "azure.core.pipeline.policies.http_logging_policy",
    "httpx",
    "asyncio",
)


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    mask_sensitive: bool = True,
    use_colors: bool = True,
):
    """
    Route the root logger to stdout with the chosen formatter.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format: "json" or "human"
        mask_sensitive: Mask credentials in extra fields (json only)
        use_colors: Color the level name (human only)
    """
    if format == "json":
        formatter: logging.Formatter = JSONFormatter(mask_sensitive=mask_sensitive)
    else:
        formatter = HumanFormatter(use_colors=use_colors)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


# ============================================================
# LOGGER ADAPTER WITH CONTEXT
# ============================================================


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that snapshots the request context into each record.

    The non-empty context variables land in a `context` extra field at
    call time, so a record formatted later (or by another task) still
    names the request, environment and assistant it belongs to.

    Usage:
        logger = get_logger(__name__)
        logger.info("Fetching callflow", extra={"intent": "greeting"})
    """

    def __init__(self, logger: logging.Logger, extra: dict | None = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple:
        extra = {**self.extra, **kwargs.get("extra", {})}
        context = {k: v for k, v in get_request_context().items() if v is not None}
        if context:
            extra.setdefault("context", context)
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(logging.getLogger(name))


# ============================================================
# AUDIT LOGGING
# ============================================================


class AuditLogger:
    """
    Audit trail of record writes.

    Events are INFO records on the `audit` logger whose extra fields
    identify the action and the record.
    """

    def __init__(self, name: str = "audit"):
        self._logger = logging.getLogger(name)

    def log(
        self,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self._logger.info(
            f"AUDIT: {action} {resource_type}",
            extra={
                "audit_event": True,
                "action": action,
                "resource_type": resource_type,
                "resource_id": resource_id,
                "details": mask_sensitive_data(details) if details else None,
            },
        )

    def create(self, resource_type: str, resource_id: str, details: dict | None = None):
        self.log("create", resource_type, resource_id, details)

    def update(self, resource_type: str, resource_id: str, details: dict | None = None):
        self.log("update", resource_type, resource_id, details)

    def delete(self, resource_type: str, resource_id: str, details: dict | None = None):
        self.log("delete", resource_type, resource_id, details)


audit_logger = AuditLogger()


__all__ = [
    "set_request_context",
    "clear_request_context",
    "get_request_context",
    "configure_logging",
    "ContextLogger",
    "get_logger",
    "JSONFormatter",
    "HumanFormatter",
    "mask_sensitive_data",
    "AuditLogger",
    "audit_logger",
    "request_id_var",
    "environment_var",
    "tenant_var",
    "user_var",
]
