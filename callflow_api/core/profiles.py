# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Connection Profiles

Environment/tenant aware store selection:
- Environment and tenant (virtual assistant) definitions
- Immutable (environment, tenant) -> connection profile table
- Resolver that fails fast on unknown pairs

Usage:
    from callflow_api.core.profiles import ProfileResolver, build_profile_table

    resolver = ProfileResolver(build_profile_table(settings))
    profile = resolver.resolve("Staging", "hrVA")
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from callflow_core.exceptions.hierarchy import ConfigurationError

from .settings import ProfileSettings, Settings

logger = logging.getLogger(__name__)


# ============================================================
# ENVIRONMENTS AND TENANTS
# ============================================================


class Environment(StrEnum):
    """Deployment tiers, lowest first."""

    DEV = "DEV"
    STAGING = "Staging"
    PROD = "PROD"


class Tenant(StrEnum):
    """Virtual assistants sharing an account but owning separate databases."""

    INTERNAL = "internalVA"
    AUNJAI = "aunjaiVA"
    PROMO = "promoVA"
    HR = "hrVA"


# Database name prefix per environment
_DATABASE_PREFIX: dict[Environment, str] = {
    Environment.DEV: "Dev",
    Environment.STAGING: "Stg",
    Environment.PROD: "Prod",
}


@dataclass(frozen=True)
class ConnectionProfile:
    """Resolved (address, credential, database) triple for one environment/tenant pair."""

    environment: Environment
    tenant: Tenant
    endpoint: str
    key: str = field(repr=False)
    database: str
    container: str

    @property
    def cache_key(self) -> tuple[str, str, str]:
        return (self.endpoint, self.database, self.container)

    def to_public_dict(self) -> dict[str, str]:
        """Profile without its credential, for logs and CLI output."""
        return {
            "environment": self.environment.value,
            "tenant": self.tenant.value,
            "endpoint": self.endpoint,
            "database": self.database,
            "container": self.container,
        }


ProfileTable = Mapping[tuple[Environment, Tenant], ConnectionProfile]


def database_name(environment: Environment, tenant: Tenant) -> str:
    """Dev_InternalVA, Stg_AunjaiVA, Prod_HrVA, ..."""
    name = tenant.value
    return f"{_DATABASE_PREFIX[environment]}_{name[0].upper()}{name[1:]}"


def build_profile_table(settings: Settings | ProfileSettings) -> ProfileTable:
    """
    Build the immutable profile table once, at startup.

    Accepts either the full settings or just the profile sub-settings.
    """
    profiles = settings.profiles if isinstance(settings, Settings) else settings
    accounts = {
        Environment.DEV: (profiles.dev_endpoint, profiles.dev_key),
        Environment.STAGING: (profiles.staging_endpoint, profiles.staging_key),
        Environment.PROD: (profiles.prod_endpoint, profiles.prod_key),
    }

    table: dict[tuple[Environment, Tenant], ConnectionProfile] = {}
    for environment, (endpoint, key) in accounts.items():
        for tenant in Tenant:
            table[(environment, tenant)] = ConnectionProfile(
                environment=environment,
                tenant=tenant,
                endpoint=endpoint,
                key=key,
                database=database_name(environment, tenant),
                container=profiles.container,
            )

    return MappingProxyType(table)


# ============================================================
# RESOLVER
# ============================================================


class ProfileResolver:
    """
    Maps (environment, tenant) to a connection profile.

    Pure lookup over the injected table, no I/O.
    """

    def __init__(
        self,
        table: ProfileTable,
        default_environment: str = Environment.DEV.value,
        default_tenant: str = Tenant.INTERNAL.value,
    ):
        self._table = table
        self.default_environment = default_environment
        self.default_tenant = default_tenant

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProfileResolver":
        return cls(
            build_profile_table(settings),
            default_environment=settings.profiles.default_environment,
            default_tenant=settings.profiles.default_tenant,
        )

    def resolve(
        self,
        environment: str | None = None,
        tenant: str | None = None,
    ) -> ConnectionProfile:
        """
        Resolve a connection profile. Only an omitted (None) argument
        takes the default; an empty string is an unknown value.

        Raises:
            ConfigurationError: the pair has no entry in the table
        """
        env_value = self.default_environment if environment is None else environment
        tenant_value = self.default_tenant if tenant is None else tenant

        try:
            key = (Environment(env_value), Tenant(tenant_value))
            return self._table[key]
        except (ValueError, KeyError):
            raise ConfigurationError(
                f"Invalid env ({env_value}) or va ({tenant_value})",
                environment=env_value,
                tenant=tenant_value,
            ) from None

    def __iter__(self) -> Iterator[ConnectionProfile]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)


__all__ = [
    "Environment",
    "Tenant",
    "ConnectionProfile",
    "ProfileTable",
    "ProfileResolver",
    "build_profile_table",
    "database_name",
]
