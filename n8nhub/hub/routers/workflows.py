"""Workflow endpoints, proxied to the selected workspace."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from n8nhub.hub.deps import Workspace

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.get("/list")
async def list_workflows(
    ctx: Workspace,
    active: bool | None = None,
    limit: int | None = Query(default=None, ge=1, le=250),
    cursor: str | None = None,
) -> Any:
    return await ctx.client.list_workflows(active=active, limit=limit, cursor=cursor)


@router.get("/{workflow_id}/get")
async def get_workflow(workflow_id: str, ctx: Workspace) -> Any:
    return await ctx.client.get_workflow(workflow_id)


@router.post("/{workflow_id}/activate")
async def activate_workflow(workflow_id: str, ctx: Workspace) -> Any:
    return await ctx.client.activate_workflow(workflow_id)


@router.post("/{workflow_id}/deactivate")
async def deactivate_workflow(workflow_id: str, ctx: Workspace) -> Any:
    return await ctx.client.deactivate_workflow(workflow_id)
