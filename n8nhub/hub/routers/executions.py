"""Execution endpoints, proxied to the selected workspace."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from n8nhub.hub.deps import Workspace

router = APIRouter(prefix="/executions", tags=["executions"])


@router.get("/list")
async def list_executions(
    ctx: Workspace,
    workflow_id: str | None = None,
    status: str | None = Query(default=None, description="success, error, waiting, ..."),
    limit: int | None = Query(default=None, ge=1, le=250),
    cursor: str | None = None,
) -> Any:
    return await ctx.client.list_executions(workflow_id=workflow_id, status=status, limit=limit, cursor=cursor)


@router.get("/{execution_id}/get")
async def get_execution(execution_id: str, ctx: Workspace, include_data: bool = False) -> Any:
    return await ctx.client.get_execution(execution_id, include_data=include_data)
