# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Document store interface.

Every store wraps a single database and exposes single round-trip
operations against named collections. Records are schemaless dicts
carrying an `id`; the store stamps `_ts` (seconds) on every write.
Errors are surfaced through the store error hierarchy:

- NotFoundError: no record with the identifier
- ConflictError: identifier collision on create
- UpstreamError: any transport or store-side failure
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

Record = dict[str, Any]

TIMESTAMP_FIELD = "_ts"

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_field_name(name: str) -> str:
    """Reject field names that cannot be used verbatim in a query."""
    if not _FIELD_NAME.match(name):
        raise ValueError(f"Invalid field name: {name!r}")
    return name


class DocumentStore(ABC):
    """Async read/write access to the collections of one database."""

    @abstractmethod
    async def get(self, collection: str, record_id: str, partition_key: Any = None) -> Record:
        """Read one record. Partition key defaults to the record id."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """Records whose fields equal `where`, newest modification first."""

    @abstractmethod
    async def create(self, collection: str, record: Record) -> Record:
        """Insert a new record. Raises ConflictError when the id exists."""

    @abstractmethod
    async def upsert(self, collection: str, record: Record) -> Record:
        """Replace the record with the same id, or create it."""

    @abstractmethod
    async def delete(self, collection: str, record_id: str, partition_key: Any = None) -> None:
        """Delete one record. Partition key defaults to the record id."""

    async def close(self) -> None:
        """Release the underlying connection."""
        return None


__all__ = ["DocumentStore", "Record", "TIMESTAMP_FIELD", "check_field_name"]
