# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Test Suite: Callflow Routes
===========================

HTTP behaviour of the editor callflow endpoints, mounted under the
API prefix.
"""

import asyncio
import re

import pytest

from callflow_api.gateway.dependencies import get_document_store
from conftest import CALLFLOWS, FlakyStore

API = "/editcallflow/api"


def seed(store, *records):
    async def _seed():
        for record in records:
            await store.create(CALLFLOWS, record)

    asyncio.run(_seed())


class TestListAndGet:

    def test_list_empty(self, client):
        response = client.get(f"{API}/callflows")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_newest_first(self, client, store):
        seed(store, {"id": "cf-1", "intent": "a"}, {"id": "cf-2", "intent": "b"})
        assert [r["id"] for r in client.get(f"{API}/callflows").json()] == ["cf-2", "cf-1"]

    def test_get_by_id(self, client, store):
        seed(store, {"id": "cf-1", "intent": "greeting"})
        response = client.get(f"{API}/callflows/cf-1")
        assert response.status_code == 200
        assert response.json()["intent"] == "greeting"

    def test_get_by_id_missing(self, client):
        response = client.get(f"{API}/callflows/cf-missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Callflow not found"

    def test_get_by_intent_serves_canonical(self, client, store):
        seed(
            store,
            {"id": "cf-1", "intent": "greeting", "v": 1},
            {"id": "cf-2", "intent": "greeting", "v": 2},
        )
        response = client.get(f"{API}/callflows/intent/greeting")
        assert response.status_code == 200
        assert response.json()["id"] == "cf-2"

    def test_get_by_intent_missing(self, client):
        response = client.get(f"{API}/callflows/intent/unknown")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Callflow not found"
        assert body["status_code"] == 404


class TestCreate:

    def test_post_creates(self, client):
        response = client.post(f"{API}/callflows", json={"intent": "greeting", "nodes": []})
        assert response.status_code == 200
        body = response.json()
        assert re.fullmatch(r"cf-\d+-greeting", body["id"])
        assert "message" not in body

    def test_post_twice_updates_same_record(self, client, store):
        first = client.post(f"{API}/callflows", json={"intent": "greeting", "nodes": [1]}).json()
        second = client.post(f"{API}/callflows", json={"intent": "greeting", "nodes": [2]}).json()

        assert second["id"] == first["id"]
        assert second["message"] == "Updated existing callflow"
        assert second["nodes"] == [2]
        assert store.count(CALLFLOWS) == 1

    def test_post_without_intent(self, client):
        body = client.post(f"{API}/callflows", json={"nodes": []}).json()
        assert re.fullmatch(r"cf-\d+-unknown", body["id"])

    def test_post_requires_json_object(self, client):
        response = client.post(f"{API}/callflows", json=["not", "an", "object"])
        assert response.status_code == 422


class TestSaveByIntent:

    def test_put_creates_then_updates(self, client, store):
        created = client.put(f"{API}/callflows/intent/greeting", json={"nodes": ["a"]}).json()
        updated = client.put(f"{API}/callflows/intent/greeting", json={"nodes": ["b"]}).json()

        assert created["intent"] == "greeting"
        assert updated["id"] == created["id"]
        assert updated["nodes"] == ["b"]
        assert store.count(CALLFLOWS) == 1

    def test_put_collapses_duplicates(self, client, store):
        seed(
            store,
            {"id": "cf-1", "intent": "greeting"},
            {"id": "cf-2", "intent": "greeting"},
            {"id": "cf-3", "intent": "greeting"},
        )

        body = client.put(f"{API}/callflows/intent/greeting", json={"nodes": ["final"]}).json()

        assert body["id"] == "cf-3"
        listed = client.get(f"{API}/callflows").json()
        assert [r["id"] for r in listed] == ["cf-3"]

    def test_put_survives_failed_duplicate_delete(self, app, client):
        flaky = FlakyStore(failing_deletes={"cf-1"})
        app.dependency_overrides[get_document_store] = lambda: flaky
        seed(flaky, {"id": "cf-1", "intent": "greeting"}, {"id": "cf-2", "intent": "greeting"})

        response = client.put(f"{API}/callflows/intent/greeting", json={"nodes": ["x"]})

        assert response.status_code == 200
        assert response.json()["id"] == "cf-2"


class TestClearDuplicates:

    def test_no_records(self, client):
        response = client.get(f"{API}/clear-duplicates/greeting")
        assert response.status_code == 200
        assert response.json() == {"message": "No records found"}

    def test_keeps_newest(self, client, store):
        seed(
            store,
            {"id": "cf-1", "intent": "greeting"},
            {"id": "cf-2", "intent": "greeting"},
            {"id": "cf-3", "intent": "greeting"},
        )

        body = client.get(f"{API}/clear-duplicates/greeting").json()

        assert body["success"] is True
        assert body["kept"] == "cf-3"
        assert body["message"] == "Kept ID cf-3, deleted 2"
        assert store.count(CALLFLOWS) == 1

    def test_single_record(self, client, store):
        seed(store, {"id": "cf-1", "intent": "greeting"})
        body = client.get(f"{API}/clear-duplicates/greeting").json()
        assert body["message"] == "Kept ID cf-1, deleted 0"


class TestDeleteByIntent:

    def test_deletes_all(self, client, store):
        seed(store, {"id": "cf-1", "intent": "greeting"}, {"id": "cf-2", "intent": "greeting"})

        response = client.delete(f"{API}/callflows/intent/greeting")

        assert response.status_code == 200
        assert response.json()["message"] == "Deleted 2 callflow(s)"
        assert client.get(f"{API}/callflows/intent/greeting").status_code == 404

    def test_missing(self, client):
        response = client.delete(f"{API}/callflows/intent/greeting")
        assert response.status_code == 404

    def test_partial_failure_is_500(self, app, client):
        flaky = FlakyStore(failing_deletes={"cf-1"})
        app.dependency_overrides[get_document_store] = lambda: flaky
        seed(flaky, {"id": "cf-1", "intent": "greeting"}, {"id": "cf-2", "intent": "greeting"})

        response = client.delete(f"{API}/callflows/intent/greeting")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to delete callflow"
        assert "Request rate is large" in body["details"]


class TestUpstreamFailures:

    @pytest.mark.parametrize(
        "method, path, summary",
        [
            ("get", "/callflows", "Failed to fetch callflows"),
            ("get", "/callflows/intent/greeting", "Failed to fetch callflow"),
            ("get", "/clear-duplicates/greeting", "Failed to clear duplicates"),
        ],
    )
    def test_store_failure_is_500(self, app, client, method, path, summary):
        app.dependency_overrides[get_document_store] = lambda: FlakyStore(fail_queries=True)

        response = getattr(client, method)(f"{API}{path}")

        assert response.status_code == 500
        assert response.json()["error"] == summary
        assert response.json()["details"] == "Service unavailable"

    def test_request_id_echoed(self, client):
        response = client.get(f"{API}/callflows", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
