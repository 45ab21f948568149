"""Workspace data models.

A workspace is one n8n instance addressed by this process, declared through
a pair of environment variables (URL + API key).  Definitions are immutable
once discovered; the registry snapshot (``WorkspaceConfig``) is rebuilt only
on an explicit reset.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class WorkspaceEnvKeys(BaseModel):
    """Environment variable layout scanned by discovery."""

    model_config = ConfigDict(frozen=True)

    url_prefix: str = "N8N_URL_"
    token_prefix: str = "N8N_TOKEN_"
    fallback_url: str = "N8N_API_URL"
    fallback_token: str = "N8N_API_KEY"
    default_selector: str = "N8N_DEFAULT_WORKSPACE"


class WorkspaceDefinition(BaseModel):
    """One discovered workspace."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Lower-cased unique identifier")
    url: str = Field(min_length=1)
    token: SecretStr
    url_env_var: str
    token_env_var: str


class WorkspaceConfig(BaseModel):
    """Discovered workspaces plus the resolved default.

    ``workspaces`` keeps discovery order; the first entry is the implicit
    default when no override applies.
    """

    model_config = ConfigDict(frozen=True)

    workspaces: dict[str, WorkspaceDefinition] = Field(default_factory=dict)
    default_workspace: str | None = None

    @property
    def names(self) -> list[str]:
        return list(self.workspaces)

    @property
    def is_multi_workspace(self) -> bool:
        return len(self.workspaces) > 1


class ExecutionContext(BaseModel):
    """Everything a downstream operation needs to address one workspace."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    workspace: str
    n8n_api_url: str
    n8n_api_key: SecretStr
    instance_id: str
    """Tenant identifier, ``workspace-<name>``; keys per-tenant caches."""

    client: Any = Field(default=None, exclude=True, repr=False)
    """Pooled API client bound to this workspace."""


class NotFoundReason(StrEnum):
    NO_WORKSPACE_CONFIGURED = "no_workspace_configured"
    WORKSPACE_NOT_FOUND = "workspace_not_found"


class WorkspaceNotFound(BaseModel):
    """Lookup miss returned (not raised) by the resolver."""

    model_config = ConfigDict(frozen=True)

    reason: NotFoundReason
    requested: str | None = None
    available: list[str] = Field(default_factory=list)
    message: str


class WorkspaceSelector(BaseModel):
    """String-enum parameter descriptor for choosing a workspace.

    Only produced in multi-workspace mode.  ``to_json_schema`` renders the
    fragment request surfaces embed in their own parameter schemas.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["string"] = "string"
    enum: list[str]
    default: str | None = None
    description: str

    def to_json_schema(self) -> dict:
        return self.model_dump(exclude_none=True)
