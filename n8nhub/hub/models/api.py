"""API response schemas for the workspace endpoints.

Kept apart from ``workspace.py`` because they are the public shape: the
credential is never part of a response.
"""

from __future__ import annotations

from pydantic import BaseModel

from n8nhub.hub.models.workspace import WorkspaceDefinition


class WorkspaceResponse(BaseModel):
    """Serialized workspace returned to clients (no credential)."""

    name: str
    url: str
    url_env_var: str
    token_env_var: str
    is_default: bool = False

    @classmethod
    def from_definition(cls, definition: WorkspaceDefinition, *, default: str | None) -> WorkspaceResponse:
        return cls(
            name=definition.name,
            url=definition.url,
            url_env_var=definition.url_env_var,
            token_env_var=definition.token_env_var,
            is_default=definition.name == default,
        )


class WorkspaceListResponse(BaseModel):
    workspaces: list[WorkspaceResponse]
    default_workspace: str | None = None
    multi_workspace: bool = False
