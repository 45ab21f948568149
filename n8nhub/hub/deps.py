"""FastAPI dependency injection for auth and workspace resolution.

Usage in route handlers::

    @router.get("/things")
    async def list_things(ctx: Workspace) -> dict:
        return await ctx.client.list_workflows()

Every workspace-scoped route accepts an optional ``workspace`` query
parameter.  When it is omitted the default workspace is used.
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status

from n8nhub.hub.models.workspace import ExecutionContext, NotFoundReason, WorkspaceNotFound
from n8nhub.hub.workspaces.resolver import WorkspaceResolver


def require_auth(request: Request) -> None:
    """Check ``Authorization: Bearer <token>`` when an auth token is configured."""
    expected: str | None = getattr(request.app.state, "auth_token", None)
    if not expected:
        return

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_resolver(request: Request) -> WorkspaceResolver:
    """Return the shared workspace resolver built during lifespan."""
    resolver: WorkspaceResolver | None = getattr(request.app.state, "workspaces", None)
    if resolver is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Workspace resolver not initialised.",
        )
    return resolver


def get_workspace(
    resolver: Annotated[WorkspaceResolver, Depends(get_resolver)],
    workspace: Annotated[str | None, Query(description="Workspace name; defaults to the default workspace.")] = None,
) -> ExecutionContext:
    """Resolve the ``workspace`` query parameter to an execution context."""
    result = resolver.resolve(workspace)
    if isinstance(result, WorkspaceNotFound):
        raise not_found_exception(result)
    return result


def not_found_exception(result: WorkspaceNotFound) -> HTTPException:
    """Translate a lookup miss: 503 when nothing is configured, 404 otherwise."""
    if result.reason == NotFoundReason.NO_WORKSPACE_CONFIGURED:
        return HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=result.message)


# -- Annotated type aliases for concise route signatures ---------------------

Resolver = Annotated[WorkspaceResolver, Depends(get_resolver)]
"""Annotated dependency: shared workspace resolver."""

Workspace = Annotated[ExecutionContext, Depends(get_workspace)]
"""Annotated dependency: execution context for the requested workspace."""
