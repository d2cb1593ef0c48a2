# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Store connection management.

Supports:
- Azure Cosmos DB (production)
- In-process memory store (development / tests)

The active backend is determined by STORE_BACKEND in settings.

Two kinds of connections are kept for the process lifetime:
- the primary store behind the editor routes (init_store / get_store)
- one store per connection profile for tenant-aware reads (StoreRegistry)
"""

import logging

from callflow_core.exceptions.hierarchy import ConfigurationError

from ..core.profiles import ConnectionProfile
from ..core.settings import Settings
from .store import DocumentStore

logger = logging.getLogger(__name__)

# Module-level singletons
_store: DocumentStore | None = None
_registry: "StoreRegistry | None" = None


def _is_memory(settings: Settings) -> bool:
    return settings.store.backend == "memory"


def open_store(
    endpoint: str | None,
    key: str | None,
    database: str | None,
    backend: str = "cosmos",
) -> DocumentStore:
    """Create a store for one database on the configured backend."""
    if backend == "memory":
        from .memory import MemoryDocumentStore

        return MemoryDocumentStore(name=database or "memory")

    missing = [
        name
        for name, value in (("endpoint", endpoint), ("key", key), ("database", database))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Cosmos DB connection is missing: {', '.join(missing)}",
            details={"missing": missing},
        )

    from .cosmos import CosmosDocumentStore

    return CosmosDocumentStore(endpoint, key, database)


# ============================================================
# PRIMARY STORE
# ============================================================


async def init_store(settings: Settings) -> DocumentStore:
    """Create the primary store.

    Called once during application startup (lifespan). Missing
    connection settings abort startup with ConfigurationError.
    """
    global _store

    if _is_memory(settings):
        logger.info("Initializing in-memory document store")
    else:
        logger.info("Initializing Cosmos DB store: database=%s", settings.cosmos.database)

    _store = open_store(
        settings.cosmos.endpoint,
        settings.cosmos.key,
        settings.cosmos.database,
        backend=settings.store.backend,
    )
    return _store


async def close_store() -> None:
    """Close the primary store. Called during application shutdown."""
    global _store
    if _store is not None:
        await _store.close()
        logger.info("Document store closed")
    _store = None


def set_store(store: DocumentStore | None) -> None:
    """Install a ready-made store (tests, embedding)."""
    global _store
    _store = store


def get_store() -> DocumentStore:
    """Return the active primary store.

    Raises RuntimeError if init_store() hasn't been called.
    """
    if _store is None:
        raise RuntimeError("Document store not initialized. Call init_store() first.")
    return _store


def is_store_ready() -> bool:
    return _store is not None


# ============================================================
# PER-PROFILE STORES
# ============================================================


class StoreRegistry:
    """
    Lazily opened, long-lived stores keyed by connection profile.

    Profiles sharing an account and database share one store.
    """

    def __init__(self, backend: str = "cosmos"):
        self.backend = backend
        self._stores: dict[tuple[str, str, str], DocumentStore] = {}

    def get(self, profile: ConnectionProfile) -> DocumentStore:
        store = self._stores.get(profile.cache_key)
        if store is None:
            logger.info(
                "Opening store for %s/%s (database=%s)",
                profile.environment.value,
                profile.tenant.value,
                profile.database,
            )
            store = open_store(profile.endpoint, profile.key, profile.database, self.backend)
            self._stores[profile.cache_key] = store
        return store

    async def close(self) -> None:
        stores, self._stores = list(self._stores.values()), {}
        for store in stores:
            await store.close()

    def __len__(self) -> int:
        return len(self._stores)


def init_store_registry(settings: Settings) -> StoreRegistry:
    global _registry
    _registry = StoreRegistry(backend=settings.store.backend)
    return _registry


async def close_store_registry() -> None:
    global _registry
    if _registry is not None:
        await _registry.close()
        logger.info("Profile stores closed")
    _registry = None


def get_store_registry() -> StoreRegistry:
    if _registry is None:
        raise RuntimeError("Store registry not initialized. Call init_store_registry() first.")
    return _registry


__all__ = [
    "StoreRegistry",
    "open_store",
    "init_store",
    "close_store",
    "set_store",
    "get_store",
    "is_store_ready",
    "init_store_registry",
    "close_store_registry",
    "get_store_registry",
]
