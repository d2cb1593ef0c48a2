# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
In-process document store (development / tests).

Behaves like the managed store for everything the service relies on:
`_ts` stamping, newest-first query order, conflict on duplicate create
and not-found errors. Records are copied on the way in and out.
"""

import copy
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from callflow_core.exceptions.hierarchy import ConflictError, NotFoundError

from .store import TIMESTAMP_FIELD, DocumentStore, Record, check_field_name

logger = logging.getLogger(__name__)


def _wall_clock() -> int:
    return int(time.time())


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store keyed by collection then record id."""

    def __init__(self, clock: Callable[[], int] | None = None, name: str = "memory"):
        self.clock = clock or _wall_clock
        self.name = name
        self._collections: dict[str, dict[str, Record]] = {}
        self.closed = False

    def _collection(self, collection: str) -> dict[str, Record]:
        return self._collections.setdefault(collection, {})

    def _stamp(self, record: Record) -> Record:
        if not record.get("id"):
            raise ValueError("Record requires an 'id'")
        stored = copy.deepcopy(record)
        stored[TIMESTAMP_FIELD] = self.clock()
        return stored

    async def get(self, collection: str, record_id: str, partition_key: Any = None) -> Record:
        try:
            return copy.deepcopy(self._collection(collection)[record_id])
        except KeyError:
            raise NotFoundError(
                f"Entity with the specified id does not exist: {record_id}",
                collection=collection,
                record_id=record_id,
            ) from None

    async def query(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        conditions = {check_field_name(k): v for k, v in (where or {}).items()}
        matches = [
            record
            for record in self._collection(collection).values()
            if all(k in record and record[k] == v for k, v in conditions.items())
        ]
        matches.sort(key=lambda r: r.get(TIMESTAMP_FIELD, 0), reverse=True)
        return copy.deepcopy(matches)

    async def create(self, collection: str, record: Record) -> Record:
        records = self._collection(collection)
        if record.get("id") in records:
            raise ConflictError(
                f"Entity with the specified id already exists: {record['id']}",
                collection=collection,
                record_id=record["id"],
            )
        stored = self._stamp(record)
        records[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def upsert(self, collection: str, record: Record) -> Record:
        stored = self._stamp(record)
        self._collection(collection)[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def delete(self, collection: str, record_id: str, partition_key: Any = None) -> None:
        records = self._collection(collection)
        if record_id not in records:
            raise NotFoundError(
                f"Entity with the specified id does not exist: {record_id}",
                collection=collection,
                record_id=record_id,
            )
        del records[record_id]

    async def close(self) -> None:
        self.closed = True

    def count(self, collection: str) -> int:
        return len(self._collection(collection))


__all__ = ["MemoryDocumentStore"]
