# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Callflow Editor API Test Suite: Shared Fixtures
"""

import itertools
import sys
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Ensure the project is on the path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from callflow_api.core.settings import Settings, StoreSettings  # noqa: E402
from callflow_api.data.connections import StoreRegistry  # noqa: E402
from callflow_api.data.memory import MemoryDocumentStore  # noqa: E402
from callflow_api.gateway.app import create_app  # noqa: E402
from callflow_api.gateway.dependencies import get_document_store, get_registry  # noqa: E402
from callflow_core.exceptions.hierarchy import UpstreamError  # noqa: E402

CALLFLOWS = "Callflows"


def ticking_clock(start: int = 1_700_000_000):
    """Clock that advances one second per write, so every write has a distinct _ts."""
    ticks = itertools.count(start)
    return lambda: next(ticks)


class FlakyStore(MemoryDocumentStore):
    """Memory store whose deletes (or queries) fail for chosen ids / always."""

    def __init__(self, failing_deletes: set[str] | None = None, fail_queries: bool = False):
        super().__init__(clock=ticking_clock())
        self.failing_deletes = set(failing_deletes or ())
        self.fail_queries = fail_queries
        self.delete_calls: list[tuple[str, str, Any]] = []

    async def delete(self, collection, record_id, partition_key=None):
        self.delete_calls.append((collection, record_id, partition_key))
        if record_id in self.failing_deletes:
            raise UpstreamError(f"Request rate is large for {record_id}", collection=collection)
        await super().delete(collection, record_id, partition_key)

    async def query(self, collection, where=None):
        if self.fail_queries:
            raise UpstreamError("Service unavailable", collection=collection)
        return await super().query(collection, where)


@pytest.fixture
def store():
    return MemoryDocumentStore(clock=ticking_clock())


@pytest.fixture
def settings():
    return Settings(
        environment="development",
        api_prefix="/editcallflow",
        store=StoreSettings(backend="memory"),
    )


@pytest.fixture
def registry():
    return StoreRegistry(backend="memory")


@pytest.fixture
def app(settings, store, registry):
    app = create_app(settings)
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_registry] = lambda: registry
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
