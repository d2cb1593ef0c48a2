# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Test Suite: Settings
====================

Environment variable names and fallbacks must match the deployed
configuration of the editor service.
"""

import pytest

from callflow_api.core.settings import CosmosSettings, Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "COSMOS_DB_CONTAINER",
        "COSMOS_DB_CONTAINER_CALLFLOWS",
        "COSMOS_DB_CONTAINER_TAGLIST",
        "API_PREFIX",
        "PORT",
        "STORE_BACKEND",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:

    def test_server_defaults(self):
        settings = Settings()
        assert settings.port == 5678
        assert settings.api_prefix == "/editcallflow"
        assert settings.cors_origins == ["*"]

    def test_collection_fallbacks(self):
        cosmos = CosmosSettings()
        assert cosmos.container_callflows == "Callflows"
        assert cosmos.container_messagegroup == "messagegroup"
        assert cosmos.container_taglist == "Taglist"
        assert cosmos.container_categories_menu_link == "categories_menu_link"
        assert cosmos.callflows_partition_key == "id"

    def test_store_backend_defaults_to_cosmos(self):
        assert Settings().store.backend == "cosmos"


class TestEnvironmentOverrides:

    def test_callflows_container(self, monkeypatch):
        monkeypatch.setenv("COSMOS_DB_CONTAINER_CALLFLOWS", "flows-v2")
        assert CosmosSettings().container_callflows == "flows-v2"

    def test_legacy_container_variable(self, monkeypatch):
        monkeypatch.setenv("COSMOS_DB_CONTAINER", "legacy-flows")
        assert CosmosSettings().container_callflows == "legacy-flows"

    def test_specific_variable_wins_over_legacy(self, monkeypatch):
        monkeypatch.setenv("COSMOS_DB_CONTAINER", "legacy-flows")
        monkeypatch.setenv("COSMOS_DB_CONTAINER_CALLFLOWS", "flows-v2")
        assert CosmosSettings().container_callflows == "flows-v2"

    def test_port_and_prefix(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("API_PREFIX", "/callflow-editor")
        settings = Settings()
        assert settings.port == 8080
        assert settings.api_prefix == "/callflow-editor"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestApiPrefix:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/editcallflow", "/editcallflow"),
            ("editcallflow", "/editcallflow"),
            ("/editcallflow/", "/editcallflow"),
            ("", ""),
            ("/", ""),
        ],
    )
    def test_normalized(self, raw, expected):
        assert Settings(api_prefix=raw).api_prefix == expected


class TestValidation:

    def test_unknown_backend_rejected(self):
        from pydantic import ValidationError

        from callflow_api.core.settings import StoreSettings

        with pytest.raises(ValidationError):
            StoreSettings(backend="mongo")
