# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Repository pattern for the record collections.

Every repository is constructed with a DocumentStore and the name of
its collection. Callflows additionally carry the "single canonical
record per intent" policy: the store does not enforce unique intents,
so every intent-keyed write repairs duplicates it finds.
"""

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from callflow_core.exceptions.hierarchy import NotFoundError, UpstreamError

from ..core.async_base import gather_settled
from ..observability.logging import audit_logger
from .store import TIMESTAMP_FIELD, DocumentStore, Record

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str, suffix: str | None = None) -> str:
    """`<prefix>-<epoch ms>` with an optional trailing `-<suffix>`."""
    if suffix is None:
        return f"{prefix}-{_now_ms()}"
    return f"{prefix}-{_now_ms()}-{suffix}"


def canonical_order(records: Iterable[Record]) -> list[Record]:
    """
    Order records so the canonical one comes first.

    Newest `_ts` first; equal timestamps fall back to the smallest id.
    """
    by_id = sorted(records, key=lambda r: str(r.get("id", "")))
    return sorted(by_id, key=lambda r: r.get(TIMESTAMP_FIELD, 0), reverse=True)


# ---------------------------------------------------------------------------
# Bulk delete
# ---------------------------------------------------------------------------


@dataclass
class BulkDeleteResult:
    """Outcome of a concurrent multi-record delete. Partial success is normal."""

    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {"deleted": list(self.deleted), "failed": dict(self.failed)}


async def delete_many(
    store: DocumentStore,
    collection: str,
    targets: Sequence[tuple[str, Any]],
) -> BulkDeleteResult:
    """Delete (id, partition key) pairs concurrently and wait for all to settle."""
    outcomes = await gather_settled(
        store.delete(collection, record_id, partition_key) for record_id, partition_key in targets
    )

    result = BulkDeleteResult()
    for (record_id, _), outcome in zip(targets, outcomes, strict=True):
        if isinstance(outcome, Exception):
            result.failed[record_id] = str(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            result.deleted.append(record_id)
    return result


# ---------------------------------------------------------------------------
# Generic record repository
# ---------------------------------------------------------------------------


class DocumentRepository:
    """CRUD for one collection with identifier-or-generated-id creates."""

    id_prefix = "doc"
    resource_type = "document"

    def __init__(self, store: DocumentStore, collection: str):
        self.store = store
        self.collection = collection

    def new_id(self, record: Record) -> str:
        return generate_id(self.id_prefix)

    async def list_all(self) -> list[Record]:
        return await self.store.query(self.collection)

    async def get(self, record_id: str) -> Record:
        return await self.store.get(self.collection, record_id)

    async def create(self, record: Record) -> Record:
        record = {**record, "id": record.get("id") or self.new_id(record)}
        created = await self.store.create(self.collection, record)
        audit_logger.create(self.resource_type, created["id"])
        return created

    async def replace(self, record_id: str, record: Record) -> Record:
        saved = await self.store.upsert(self.collection, {**record, "id": record_id})
        audit_logger.update(self.resource_type, record_id)
        return saved

    async def delete(self, record_id: str) -> None:
        await self.store.delete(self.collection, record_id)
        audit_logger.delete(self.resource_type, record_id)

    async def first_by(self, field_name: str, value: Any) -> Record:
        matches = await self.store.query(self.collection, {field_name: value})
        if not matches:
            raise NotFoundError(
                f"No {self.resource_type} with {field_name}={value!r}",
                collection=self.collection,
            )
        return matches[0]


class MessageGroupRepository(DocumentRepository):
    """Message groups. Creates overwrite an existing record with the same id."""

    id_prefix = "mg"
    resource_type = "message_group"

    async def create(self, record: Record) -> Record:
        record = {**record, "id": record.get("id") or self.new_id(record)}
        saved = await self.store.upsert(self.collection, record)
        audit_logger.create(self.resource_type, saved["id"])
        return saved


class TagListRepository(DocumentRepository):
    id_prefix = "tag"
    resource_type = "tag"


class CategoryMenuLinkRepository(DocumentRepository):
    id_prefix = "cml"
    resource_type = "categories_menu_link"

    async def first_by_tag(self, tag: str) -> Record:
        return await self.first_by("tag", tag)


# ---------------------------------------------------------------------------
# CallflowRepository
# ---------------------------------------------------------------------------


@dataclass
class UpsertOutcome:
    """Result of an intent-keyed write."""

    record: Record
    created: bool
    duplicates: BulkDeleteResult = field(default_factory=BulkDeleteResult)


@dataclass
class DedupOutcome:
    """Result of an explicit de-duplication pass for one intent."""

    intent: str
    kept: Record | None
    removal: BulkDeleteResult = field(default_factory=BulkDeleteResult)


class CallflowRepository(DocumentRepository):
    """
    Callflow scripts, keyed by intent.

    At most one record per intent is canonical: the first one in
    canonical_order(). Intent-keyed writes overwrite it in place and
    delete the other matches on a best-effort basis.
    """

    id_prefix = "cf"
    resource_type = "callflow"

    def __init__(self, store: DocumentStore, collection: str, partition_key: str = "id"):
        super().__init__(store, collection)
        self.partition_key = partition_key

    def new_id(self, record: Record) -> str:
        return generate_id(self.id_prefix, record.get("intent") or "unknown")

    def _partition_value(self, record: Record) -> Any:
        return record.get(self.partition_key, record["id"])

    async def get_by_id(self, record_id: str) -> Record:
        if self.partition_key == "id":
            return await self.store.get(self.collection, record_id)
        return await self.first_by("id", record_id)

    async def find_by_intent(self, intent: str) -> list[Record]:
        """All records with the intent, canonical first."""
        return canonical_order(await self.store.query(self.collection, {"intent": intent}))

    async def get_by_intent(self, intent: str) -> Record:
        matches = await self.find_by_intent(intent)
        if not matches:
            raise NotFoundError(f"Callflow not found: {intent}", collection=self.collection)
        if len(matches) > 1:
            logger.warning(f"Intent {intent!r} has {len(matches)} records; serving canonical")
        return matches[0]

    async def _remove_duplicates(self, intent: str, duplicates: Sequence[Record]) -> BulkDeleteResult:
        if not duplicates:
            return BulkDeleteResult()

        result = await delete_many(
            self.store,
            self.collection,
            [(r["id"], self._partition_value(r)) for r in duplicates],
        )
        for record_id in result.deleted:
            audit_logger.delete(self.resource_type, record_id, {"reason": "duplicate", "intent": intent})
        for record_id, error in result.failed.items():
            logger.warning(
                f"Could not delete duplicate callflow {record_id} for intent {intent!r}: {error}"
            )
        return result

    async def upsert_by_intent(self, intent: str, record: Record) -> UpsertOutcome:
        """
        Write the record as the single canonical callflow for the intent.

        No match: create it (supplied id or cf-<ms>-<intent>).
        Matches: the canonical record keeps its id and takes the new
        fields; all other matches are deleted best-effort first.
        """
        record = {**record}
        record.setdefault("intent", intent)
        matches = await self.find_by_intent(intent)

        if not matches:
            record["id"] = record.get("id") or generate_id(self.id_prefix, intent)
            created = await self.store.create(self.collection, record)
            audit_logger.create(self.resource_type, created["id"], {"intent": intent})
            return UpsertOutcome(record=created, created=True)

        canonical, duplicates = matches[0], matches[1:]
        removal = await self._remove_duplicates(intent, duplicates)

        record["id"] = canonical["id"]
        saved = await self.store.upsert(self.collection, record)
        audit_logger.update(self.resource_type, saved["id"], {"intent": intent})
        return UpsertOutcome(record=saved, created=False, duplicates=removal)

    async def save(self, record: Record) -> UpsertOutcome:
        """
        Create a callflow, or update in place when its intent already exists.
        """
        intent = record.get("intent")
        if intent:
            return await self.upsert_by_intent(intent, record)

        created = await self.create(record)
        return UpsertOutcome(record=created, created=True)

    async def clear_duplicates(self, intent: str) -> DedupOutcome:
        """Keep the canonical record untouched and delete the rest (best effort)."""
        matches = await self.find_by_intent(intent)
        if not matches:
            return DedupOutcome(intent=intent, kept=None)

        removal = await self._remove_duplicates(intent, matches[1:])
        logger.info(
            f"Cleared duplicates for intent {intent!r}: kept {matches[0]['id']}, "
            f"deleted {len(removal.deleted)}/{removal.attempted}"
        )
        return DedupOutcome(intent=intent, kept=matches[0], removal=removal)

    async def delete_by_intent(self, intent: str) -> BulkDeleteResult:
        """
        Delete every record with the intent.

        Raises:
            NotFoundError: no record has the intent
            UpstreamError: at least one delete failed
        """
        matches = await self.find_by_intent(intent)
        if not matches:
            raise NotFoundError(f"Callflow not found: {intent}", collection=self.collection)

        result = await delete_many(
            self.store,
            self.collection,
            [(r["id"], self._partition_value(r)) for r in matches],
        )
        for record_id in result.deleted:
            audit_logger.delete(self.resource_type, record_id, {"intent": intent})

        if not result.ok:
            first_error = next(iter(result.failed.values()))
            raise UpstreamError(
                first_error,
                collection=self.collection,
                details={"intent": intent, **result.to_dict()},
            )
        return result


__all__ = [
    "BulkDeleteResult",
    "UpsertOutcome",
    "DedupOutcome",
    "DocumentRepository",
    "CallflowRepository",
    "MessageGroupRepository",
    "TagListRepository",
    "CategoryMenuLinkRepository",
    "canonical_order",
    "delete_many",
    "generate_id",
]
