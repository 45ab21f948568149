"""Multi-workspace support: discovery, registry, client pool and resolver."""

from n8nhub.hub.workspaces.discovery import describe_workspace_config, scan
from n8nhub.hub.workspaces.pool import ClientPool
from n8nhub.hub.workspaces.registry import WorkspaceRegistry
from n8nhub.hub.workspaces.resolver import WorkspaceNotFoundError, WorkspaceResolver

__all__ = [
    "ClientPool",
    "WorkspaceNotFoundError",
    "WorkspaceRegistry",
    "WorkspaceResolver",
    "describe_workspace_config",
    "scan",
]
