"""Workspace introspection endpoints (read-only).

Workspaces come from the environment, so there is nothing to create or
update here; these routes expose what discovery found.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status

from n8nhub.hub.deps import Resolver, not_found_exception
from n8nhub.hub.models.api import WorkspaceListResponse, WorkspaceResponse
from n8nhub.hub.models.workspace import WorkspaceNotFound

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get("/list", response_model=WorkspaceListResponse)
async def list_workspaces(resolver: Resolver) -> WorkspaceListResponse:
    """List configured workspaces in discovery order."""
    config = resolver.registry.get()
    return WorkspaceListResponse(
        workspaces=[
            WorkspaceResponse.from_definition(d, default=config.default_workspace) for d in config.workspaces.values()
        ],
        default_workspace=config.default_workspace,
        multi_workspace=config.is_multi_workspace,
    )


@router.get("/selector")
async def workspace_selector(resolver: Resolver) -> dict[str, Any] | None:
    """JSON-schema fragment for a workspace parameter; ``null`` in single-workspace mode."""
    selector = resolver.workspace_selector()
    return selector.to_json_schema() if selector is not None else None


@router.get("/{name}/get", response_model=WorkspaceResponse)
async def get_workspace(name: str, resolver: Resolver) -> WorkspaceResponse:
    """Get a single workspace by name (case-insensitive)."""
    definition = resolver.get_definition(name)
    if definition is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=resolver.not_found_message(name))
    return WorkspaceResponse.from_definition(definition, default=resolver.default_name())


@router.get("/{name}/health")
async def workspace_health(name: str, resolver: Resolver) -> Any:
    """Probe the workspace's ``/healthz`` endpoint."""
    ctx = resolver.resolve(name)
    if isinstance(ctx, WorkspaceNotFound):
        raise not_found_exception(ctx)
    return await ctx.client.health_check()
