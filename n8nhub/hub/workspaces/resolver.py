"""Workspace resolver -- maps an optional workspace name to an execution
context bound to a pooled API client.

Resolution order:

1. Explicit name from the caller (case-insensitive).
2. The registry's default workspace.
3. Nothing: ``WorkspaceNotFound(reason=no_workspace_configured)``.

Misses are returned as ``WorkspaceNotFound`` values, never raised, so that
callers decide how to present them.  ``require`` is the raising variant for
code paths that prefer exceptions (the REST dependencies).
"""

from __future__ import annotations

import threading
from typing import Any

from n8nhub.hub.models.workspace import (
    ExecutionContext,
    NotFoundReason,
    WorkspaceDefinition,
    WorkspaceNotFound,
    WorkspaceSelector,
)
from n8nhub.hub.workspaces.pool import ClientPool, close_clients
from n8nhub.hub.workspaces.registry import WorkspaceRegistry

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class WorkspaceNotFoundError(LookupError):
    """Raised by ``WorkspaceResolver.require`` on a lookup miss."""

    def __init__(self, result: WorkspaceNotFound) -> None:
        super().__init__(result.message)
        self.result = result


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class WorkspaceResolver:
    """Facade over the registry and the client pool.

    Both collaborators are injected.  The resolver's only state is a lock that
    keeps a definition and the client built from it on the same side of a
    reset.
    """

    def __init__(self, registry: WorkspaceRegistry, pool: ClientPool) -> None:
        self.registry = registry
        self.pool = pool
        self._lock = threading.RLock()

    # -- Lookup ----------------------------------------------------------------

    def get_definition(self, name: str | None = None) -> WorkspaceDefinition | None:
        """Return the definition for ``name`` (or the default), or ``None``."""
        config = self.registry.get()
        workspace_name = name.lower() if name else config.default_workspace
        if not workspace_name:
            return None
        return config.workspaces.get(workspace_name)

    def resolve(self, name: str | None = None) -> ExecutionContext | WorkspaceNotFound:
        """Resolve ``name`` (or the default) to an ``ExecutionContext``."""
        found = self._lookup(name)
        if found is None:
            return self.not_found(name)

        definition, client = found
        return ExecutionContext(
            workspace=definition.name,
            n8n_api_url=definition.url,
            n8n_api_key=definition.token,
            instance_id=f"workspace-{definition.name}",
            client=client,
        )

    def get_client(self, name: str | None = None) -> Any | WorkspaceNotFound:
        """Return the pooled client for ``name`` (or the default)."""
        found = self._lookup(name)
        if found is None:
            return self.not_found(name)
        return found[1]

    def _lookup(self, name: str | None) -> tuple[WorkspaceDefinition, Any] | None:
        # A reset may not land between reading the definition and pooling its client
        with self._lock:
            definition = self.get_definition(name)
            if definition is None:
                return None
            return definition, self.pool.get_or_create(definition)

    def require(self, name: str | None = None) -> ExecutionContext:
        """Like ``resolve`` but raises ``WorkspaceNotFoundError`` on a miss."""
        result = self.resolve(name)
        if isinstance(result, WorkspaceNotFound):
            raise WorkspaceNotFoundError(result)
        return result

    # -- Introspection ---------------------------------------------------------

    def is_multi_tenant(self) -> bool:
        return self.registry.get().is_multi_workspace

    def available_names(self) -> list[str]:
        return self.registry.get().names

    def default_name(self) -> str | None:
        return self.registry.get().default_workspace

    # -- Errors ----------------------------------------------------------------

    def not_found(self, name: str | None = None) -> WorkspaceNotFound:
        available = self.available_names()
        if name:
            return WorkspaceNotFound(
                reason=NotFoundReason.WORKSPACE_NOT_FOUND,
                requested=name,
                available=available,
                message=self.not_found_message(name),
            )
        return WorkspaceNotFound(
            reason=NotFoundReason.NO_WORKSPACE_CONFIGURED,
            available=available,
            message=self.not_found_message(),
        )

    def not_found_message(self, name: str | None = None) -> str:
        """Human-readable miss message, computed from the current registry."""
        if name:
            available = ", ".join(self.available_names()) or "none"
            return f"Workspace '{name}' not found. Available workspaces: {available}"

        keys = self.registry.keys
        return (
            "No n8n workspace configured. "
            f"Set {keys.url_prefix}* and {keys.token_prefix}* env vars, "
            f"or {keys.fallback_url} and {keys.fallback_token} for single-instance mode."
        )

    # -- Schema ----------------------------------------------------------------

    def workspace_selector(self) -> WorkspaceSelector | None:
        """Selector descriptor for request surfaces; ``None`` in single-workspace mode."""
        if not self.is_multi_tenant():
            return None

        names = self.available_names()
        default = self.default_name()
        description = f"Workspace to use. Available: {', '.join(names)}"
        if default:
            description += f". Default: {default}"
        return WorkspaceSelector(enum=names, default=default, description=description)

    # -- Lifecycle -------------------------------------------------------------

    def reset(self) -> None:
        """Drop discovered config and pooled clients; the next access rediscovers.

        Pooled clients are not closed.  Use ``areset()`` when they hold
        connections.
        """
        with self._lock:
            self.pool.reset()
            self.registry.reset()

    async def areset(self) -> None:
        """Close pooled clients, then drop discovered config."""
        with self._lock:
            clients = self.pool.detach()
            self.registry.reset()
        await close_clients(clients)
