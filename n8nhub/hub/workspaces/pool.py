"""Per-workspace API client pool.

One client per workspace name, created on first lookup and reused for the
lifetime of the pool.  A cached client is never rebuilt, even if the
definition it was built from has since changed; call ``aclose()`` (or
``reset()`` for handles that hold nothing open) for that.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from n8nhub.hub.models.workspace import WorkspaceDefinition

ClientFactory = Callable[[WorkspaceDefinition], Any]


class ClientPool:
    def __init__(self, factory: ClientFactory) -> None:
        self._factory = factory
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_or_create(self, definition: WorkspaceDefinition) -> Any:
        """Return the client for ``definition.name``, constructing it once."""
        name = definition.name
        if name in self._clients:
            return self._clients[name]

        with self._lock:
            if name not in self._clients:
                self._clients[name] = self._factory(definition)
                logger.debug("Created API client for workspace '{}'", name)
            return self._clients[name]

    def get(self, name: str) -> Any | None:
        return self._clients.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def detach(self) -> list[tuple[str, Any]]:
        """Empty the pool and hand back what it held, unclosed."""
        with self._lock:
            clients = list(self._clients.items())
            self._clients.clear()
        return clients

    def reset(self) -> None:
        """Drop all cached clients without closing them.

        Only safe for clients that hold no open resources; use ``aclose()``
        otherwise.
        """
        leaked = [name for name, client in self.detach() if hasattr(client, "aclose")]
        if leaked:
            logger.warning(
                "Dropped {} API client(s) without closing them ({}); use aclose() instead",
                len(leaked),
                ", ".join(leaked),
            )

    async def aclose(self) -> None:
        """Close every cached client that supports ``aclose`` and clear the pool."""
        await close_clients(self.detach())


async def close_clients(clients: list[tuple[str, Any]]) -> None:
    for name, client in clients:
        close = getattr(client, "aclose", None)
        if close is None:
            continue
        await close()
        logger.debug("Closed API client for workspace '{}'", name)
