# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Message Group, Tag List and Category Menu Link Routes

Plain CRUD over their collections.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from ..data.repositories import (
    CategoryMenuLinkRepository,
    MessageGroupRepository,
    TagListRepository,
)
from .dependencies import (
    get_category_menu_link_repository,
    get_message_group_repository,
    get_tag_list_repository,
)
from .errors import store_errors

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


# ============================================================
# MESSAGE GROUPS
# ============================================================


@router.get("/messagegroups", tags=["Message Groups"])
async def list_message_groups(
    repo: MessageGroupRepository = Depends(get_message_group_repository),
):
    with store_errors("Failed to fetch message groups"):
        return await repo.list_all()


@router.get("/messagegroups/{group_id}", tags=["Message Groups"])
async def get_message_group(
    group_id: str,
    repo: MessageGroupRepository = Depends(get_message_group_repository),
):
    with store_errors("Failed to fetch message group", not_found="Message group not found"):
        return await repo.get(group_id)


@router.post("/messagegroups", tags=["Message Groups"])
async def create_message_group(
    payload: dict[str, Any] = Body(...),
    repo: MessageGroupRepository = Depends(get_message_group_repository),
):
    with store_errors("Failed to create message group"):
        return await repo.create(payload)


@router.put("/messagegroups/{group_id}", tags=["Message Groups"])
async def update_message_group(
    group_id: str,
    payload: dict[str, Any] = Body(...),
    repo: MessageGroupRepository = Depends(get_message_group_repository),
):
    with store_errors("Failed to update message group"):
        return await repo.replace(group_id, payload)


@router.delete("/messagegroups/{group_id}", tags=["Message Groups"])
async def delete_message_group(
    group_id: str,
    repo: MessageGroupRepository = Depends(get_message_group_repository),
):
    with store_errors("Failed to delete message group", not_found="Message group not found"):
        await repo.delete(group_id)
    return {"success": True, "message": "Message group deleted"}


# ============================================================
# TAG LIST
# ============================================================


@router.get("/taglist", tags=["Tag List"])
async def list_tags(repo: TagListRepository = Depends(get_tag_list_repository)):
    with store_errors("Failed to fetch tag list"):
        return await repo.list_all()


@router.get("/taglist/{tag_id}", tags=["Tag List"])
async def get_tag(tag_id: str, repo: TagListRepository = Depends(get_tag_list_repository)):
    with store_errors("Failed to fetch tag", not_found="Tag not found"):
        return await repo.get(tag_id)


@router.post("/taglist", tags=["Tag List"])
async def create_tag(
    payload: dict[str, Any] = Body(...),
    repo: TagListRepository = Depends(get_tag_list_repository),
):
    with store_errors("Failed to create tag"):
        return await repo.create(payload)


@router.put("/taglist/{tag_id}", tags=["Tag List"])
async def update_tag(
    tag_id: str,
    payload: dict[str, Any] = Body(...),
    repo: TagListRepository = Depends(get_tag_list_repository),
):
    with store_errors("Failed to update tag"):
        return await repo.replace(tag_id, payload)


@router.delete("/taglist/{tag_id}", tags=["Tag List"])
async def delete_tag(tag_id: str, repo: TagListRepository = Depends(get_tag_list_repository)):
    with store_errors("Failed to delete tag", not_found="Tag not found"):
        await repo.delete(tag_id)
    return {"success": True, "message": "Tag deleted"}


# ============================================================
# CATEGORIES MENU LINK
# ============================================================


@router.get("/categories_menu_link/tag/{tag}", tags=["Categories Menu Link"])
async def get_category_menu_link_by_tag(
    tag: str,
    repo: CategoryMenuLinkRepository = Depends(get_category_menu_link_repository),
):
    """First category menu link carrying the tag."""
    with store_errors("Failed to fetch category menu link", not_found="Not Found"):
        return await repo.first_by_tag(tag)


@router.put("/categories_menu_link/{link_id}", tags=["Categories Menu Link"])
async def update_category_menu_link(
    link_id: str,
    payload: dict[str, Any] = Body(...),
    repo: CategoryMenuLinkRepository = Depends(get_category_menu_link_repository),
):
    with store_errors("Failed to update category menu link"):
        return await repo.replace(link_id, payload)
