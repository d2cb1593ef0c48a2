# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Test Suite: Virtual Assistant Routes
====================================

Environment/tenant-aware reads: profile resolution happens before any
store is opened, and the response names the profile that served it.
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from callflow_api.core.profiles import Environment, Tenant
from callflow_api.core.settings import ProfileSettings, Settings, StoreSettings
from callflow_api.gateway.app import create_app
from callflow_api.gateway.dependencies import get_registry


def seed_profile(app, registry, environment, tenant, record):
    profile = app.state.profile_resolver.resolve(environment, tenant)
    store = registry.get(profile)
    asyncio.run(store.upsert(profile.container, record))
    return store


class TestVaCallflow:

    def test_envelope(self, app, client, registry):
        seed_profile(app, registry, "Staging", "hrVA", {"id": "leave", "nodes": ["start"]})

        response = client.get(
            "/api/callflows/leave",
            params={"env": "Staging", "va": "hrVA", "user": "somchai", "command": "edit"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["intent"] == "leave"
        assert body["env"] == "Staging"
        assert body["va"] == "hrVA"
        assert body["user"] == "somchai"
        assert body["command"] == "edit"
        assert body["callflow"]["nodes"] == ["start"]

    def test_defaults(self, app, client, registry):
        seed_profile(app, registry, Environment.DEV, Tenant.INTERNAL, {"id": "greeting"})

        body = client.get("/api/callflows/greeting").json()

        assert (body["env"], body["va"], body["user"], body["command"]) == (
            "DEV",
            "internalVA",
            "anonymous",
            "view",
        )

    def test_tenants_are_isolated(self, app, client, registry):
        seed_profile(app, registry, "PROD", "promoVA", {"id": "sale"})

        assert client.get("/api/callflows/sale", params={"env": "PROD", "va": "promoVA"}).status_code == 200
        assert client.get("/api/callflows/sale", params={"env": "PROD", "va": "hrVA"}).status_code == 404

    def test_not_found(self, client):
        response = client.get("/api/callflows/missing", params={"env": "DEV", "va": "aunjaiVA"})

        assert response.status_code == 404
        assert response.json()["error"] == "Callflow for missing not found"

    def test_unknown_environment_never_opens_store(self, app, client):
        registry = MagicMock()
        app.dependency_overrides[get_registry] = lambda: registry

        response = client.get("/api/callflows/greeting", params={"env": "QA", "va": "internalVA"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["details"] == "Invalid env (QA) or va (internalVA)"
        registry.get.assert_not_called()

    def test_unknown_tenant(self, client):
        response = client.get("/api/callflows/greeting", params={"env": "DEV", "va": "salesVA"})
        assert response.status_code == 500

    def test_editor_routes_unaffected(self, client):
        # the prefixed editor route and the root assistant route do not collide
        assert client.get("/editcallflow/api/callflows/intent/greeting").status_code == 404
        assert client.get("/api/callflows/greeting").status_code == 404


class TestConfiguredDefaults:

    @pytest.fixture
    def staging_app(self, registry):
        settings = Settings(
            store=StoreSettings(backend="memory"),
            profiles=ProfileSettings(default_environment="Staging", default_tenant="internalVA"),
        )
        app = create_app(settings)
        app.dependency_overrides[get_registry] = lambda: registry
        return app

    def test_omitted_env_uses_configured_default(self, staging_app, registry):
        seed_profile(staging_app, registry, "Staging", "internalVA", {"id": "greeting", "tier": "stg"})

        with TestClient(staging_app) as client:
            response = client.get("/api/callflows/greeting")

        assert response.status_code == 200
        body = response.json()
        assert body["env"] == "Staging"
        assert body["va"] == "internalVA"
        assert body["callflow"]["tier"] == "stg"

    def test_explicit_env_overrides_default(self, staging_app, registry):
        seed_profile(staging_app, registry, "PROD", "internalVA", {"id": "greeting"})

        with TestClient(staging_app) as client:
            body = client.get("/api/callflows/greeting", params={"env": "PROD"}).json()

        assert body["env"] == "PROD"

    def test_empty_env_is_rejected(self, client):
        response = client.get("/api/callflows/greeting?env=&va=internalVA")

        assert response.status_code == 500
        assert response.json()["details"] == "Invalid env () or va (internalVA)"
