"""Data models for the n8n hub."""

from n8nhub.hub.models.api import WorkspaceListResponse, WorkspaceResponse
from n8nhub.hub.models.workspace import (
    ExecutionContext,
    NotFoundReason,
    WorkspaceConfig,
    WorkspaceDefinition,
    WorkspaceEnvKeys,
    WorkspaceNotFound,
    WorkspaceSelector,
)

__all__ = [
    "ExecutionContext",
    "NotFoundReason",
    "WorkspaceConfig",
    "WorkspaceDefinition",
    "WorkspaceEnvKeys",
    "WorkspaceListResponse",
    "WorkspaceNotFound",
    "WorkspaceResponse",
    "WorkspaceSelector",
]
