# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Azure Cosmos DB document store.

Uses the async SDK (azure.cosmos.aio). One client per database account;
container clients are created lazily and reused. Every driver error is
translated into the store error hierarchy with its message kept verbatim.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from azure.core.exceptions import AzureError
from azure.cosmos.aio import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError

from callflow_core.exceptions.hierarchy import (
    ConflictError,
    NotFoundError,
    UpstreamError,
)

from .store import TIMESTAMP_FIELD, DocumentStore, Record, check_field_name

logger = logging.getLogger(__name__)


def build_query(where: Mapping[str, Any] | None = None) -> tuple[str, list[dict[str, Any]]]:
    """
    Build a parameterised equality query, newest first.

    >>> build_query({"intent": "greeting"})
    ('SELECT * FROM c WHERE c.intent = @p0 ORDER BY c._ts DESC', [{'name': '@p0', 'value': 'greeting'}])
    """
    clauses = []
    parameters: list[dict[str, Any]] = []
    for index, (name, value) in enumerate((where or {}).items()):
        param = f"@p{index}"
        clauses.append(f"c.{check_field_name(name)} = {param}")
        parameters.append({"name": param, "value": value})

    query = "SELECT * FROM c"
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    query += f" ORDER BY c.{TIMESTAMP_FIELD} DESC"
    return query, parameters


def _message(error: AzureError) -> str:
    return getattr(error, "message", None) or str(error)


@contextmanager
def _translate_errors(collection: str, record_id: str | None = None) -> Iterator[None]:
    try:
        yield
    except CosmosResourceNotFoundError as e:
        raise NotFoundError(_message(e), collection=collection, record_id=record_id) from e
    except CosmosResourceExistsError as e:
        raise ConflictError(_message(e), collection=collection, record_id=record_id) from e
    except AzureError as e:
        raise UpstreamError(
            _message(e),
            original_error=e,
            collection=collection,
            record_id=record_id,
        ) from e


class CosmosDocumentStore(DocumentStore):
    """Document store backed by one Cosmos DB database."""

    def __init__(
        self,
        endpoint: str,
        key: str,
        database: str,
        client: CosmosClient | None = None,
    ):
        self.endpoint = endpoint
        self.database_name = database
        self._client = client or CosmosClient(endpoint, credential=key)
        self._database = self._client.get_database_client(database)
        self._containers: dict[str, ContainerProxy] = {}

    def __repr__(self) -> str:
        return f"CosmosDocumentStore(endpoint={self.endpoint!r}, database={self.database_name!r})"

    def _container(self, collection: str) -> ContainerProxy:
        container = self._containers.get(collection)
        if container is None:
            container = self._database.get_container_client(collection)
            self._containers[collection] = container
        return container

    async def get(self, collection: str, record_id: str, partition_key: Any = None) -> Record:
        with _translate_errors(collection, record_id):
            return await self._container(collection).read_item(
                item=record_id,
                partition_key=record_id if partition_key is None else partition_key,
            )

    async def query(
        self,
        collection: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[Record]:
        query, parameters = build_query(where)
        logger.debug("Cosmos query on %s: %s", collection, query)
        with _translate_errors(collection):
            items = self._container(collection).query_items(query=query, parameters=parameters)
            return [item async for item in items]

    async def create(self, collection: str, record: Record) -> Record:
        with _translate_errors(collection, record.get("id")):
            return await self._container(collection).create_item(body=record)

    async def upsert(self, collection: str, record: Record) -> Record:
        with _translate_errors(collection, record.get("id")):
            return await self._container(collection).upsert_item(body=record)

    async def delete(self, collection: str, record_id: str, partition_key: Any = None) -> None:
        with _translate_errors(collection, record_id):
            await self._container(collection).delete_item(
                item=record_id,
                partition_key=record_id if partition_key is None else partition_key,
            )

    async def close(self) -> None:
        await self._client.close()
        logger.info("Cosmos client closed (%s)", self.database_name)


__all__ = ["CosmosDocumentStore", "build_query"]
