# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
FastAPI dependencies wiring repositories to the active store.
"""

from fastapi import Depends, Request

from ..core.profiles import ProfileResolver
from ..core.settings import Settings
from ..data.connections import StoreRegistry, get_store, get_store_registry
from ..data.repositories import (
    CallflowRepository,
    CategoryMenuLinkRepository,
    MessageGroupRepository,
    TagListRepository,
)
from ..data.store import DocumentStore


def get_document_store() -> DocumentStore:
    return get_store()


def get_registry() -> StoreRegistry:
    return get_store_registry()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_profile_resolver(request: Request) -> ProfileResolver:
    return request.app.state.profile_resolver


def get_callflow_repository(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
) -> CallflowRepository:
    return CallflowRepository(
        store,
        settings.cosmos.container_callflows,
        partition_key=settings.cosmos.callflows_partition_key,
    )


def get_message_group_repository(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
) -> MessageGroupRepository:
    return MessageGroupRepository(store, settings.cosmos.container_messagegroup)


def get_tag_list_repository(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
) -> TagListRepository:
    return TagListRepository(store, settings.cosmos.container_taglist)


def get_category_menu_link_repository(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
) -> CategoryMenuLinkRepository:
    return CategoryMenuLinkRepository(store, settings.cosmos.container_categories_menu_link)
