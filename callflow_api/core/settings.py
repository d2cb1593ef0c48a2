# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Application Settings

Configuration management using pydantic-settings.
Supports environment variables and .env files.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hard-coded fallbacks for collection names
DEFAULT_CALLFLOWS_CONTAINER = "Callflows"
DEFAULT_MESSAGEGROUP_CONTAINER = "messagegroup"
DEFAULT_TAGLIST_CONTAINER = "Taglist"
DEFAULT_CATEGORIES_MENU_LINK_CONTAINER = "categories_menu_link"


class CosmosSettings(BaseSettings):
    """Primary document database used by the prefixed editor routes."""

    model_config = SettingsConfigDict(
        env_prefix="COSMOS_DB_", env_file=".env", extra="ignore", populate_by_name=True
    )

    endpoint: str | None = Field(default=None, description="Account URL")
    key: str | None = Field(default=None, description="Account access key", repr=False)
    database: str | None = Field(default=None, description="Database name")

    container_callflows: str = Field(
        default=DEFAULT_CALLFLOWS_CONTAINER,
        validation_alias=AliasChoices("COSMOS_DB_CONTAINER_CALLFLOWS", "COSMOS_DB_CONTAINER"),
    )
    container_messagegroup: str = Field(default=DEFAULT_MESSAGEGROUP_CONTAINER)
    container_taglist: str = Field(default=DEFAULT_TAGLIST_CONTAINER)
    container_categories_menu_link: str = Field(default=DEFAULT_CATEGORIES_MENU_LINK_CONTAINER)

    callflows_partition_key: str = Field(
        default="id",
        description="Record field whose value is the callflows partition key",
    )


class StoreSettings(BaseSettings):
    """Store backend selection."""

    model_config = SettingsConfigDict(env_prefix="STORE_", env_file=".env", extra="ignore")

    backend: str = Field(default="cosmos", pattern=r"^(cosmos|memory)$")


class ProfileSettings(BaseSettings):
    """Per-environment accounts behind the tenant-aware routes."""

    model_config = SettingsConfigDict(env_prefix="VA_", env_file=".env", extra="ignore")

    dev_endpoint: str = Field(default="https://dev-cosmos.documents.azure.com")
    dev_key: str = Field(default="DEV_KEY", repr=False)
    staging_endpoint: str = Field(default="https://stg-cosmos.documents.azure.com")
    staging_key: str = Field(default="STG_KEY", repr=False)
    prod_endpoint: str = Field(default="https://prod-cosmos.documents.azure.com")
    prod_key: str = Field(default="PROD_KEY", repr=False)

    container: str = Field(default=DEFAULT_CALLFLOWS_CONTAINER)

    default_environment: str = Field(default="DEV")
    default_tenant: str = Field(default="internalVA")


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = Field(default="INFO")
    format: str = Field(default="json", pattern=r"^(json|human)$")


class Settings(BaseSettings):
    """
    Main application settings.

    Usage:
        settings = get_settings()
        print(settings.cosmos.container_callflows)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Callflow Editor API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")  # development, staging, production

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5678)
    api_prefix: str = Field(default="/editcallflow")
    cors_origins: list[str] = Field(default=["*"])

    # Sub-settings
    cosmos: CosmosSettings = Field(default_factory=CosmosSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    profiles: ProfileSettings = Field(default_factory=ProfileSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for the application lifetime.
    """
    return Settings()


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "Settings",
    "CosmosSettings",
    "StoreSettings",
    "ProfileSettings",
    "ObservabilitySettings",
    "get_settings",
]
