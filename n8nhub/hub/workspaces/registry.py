"""Lazily-built workspace registry.

Holds the ``WorkspaceConfig`` produced by discovery.  The environment is read
on first access only; later changes to the process environment take effect
after ``reset()``.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable, Mapping

from loguru import logger

from n8nhub.hub.models.workspace import WorkspaceConfig, WorkspaceEnvKeys
from n8nhub.hub.workspaces.discovery import DEFAULT_ENV_KEYS, describe_workspace_config, scan

EnvironmentSource = Callable[[], Mapping[str, str]]


def _process_environ() -> Mapping[str, str]:
    return dict(os.environ)


class WorkspaceRegistry:
    """Thread-safe, discover-once holder of the workspace configuration.

    Discovery runs under a lock with a double check, so concurrent first
    accesses trigger exactly one scan.
    """

    def __init__(
        self,
        environ: EnvironmentSource = _process_environ,
        keys: WorkspaceEnvKeys = DEFAULT_ENV_KEYS,
    ) -> None:
        self._environ = environ
        self._keys = keys
        self._config: WorkspaceConfig | None = None
        self._lock = threading.Lock()

    @property
    def keys(self) -> WorkspaceEnvKeys:
        return self._keys

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def get(self) -> WorkspaceConfig:
        """Return the configuration, discovering it on first call."""
        config = self._config
        if config is not None:
            return config

        with self._lock:
            if self._config is None:
                self._config = scan(self._environ(), self._keys)
                logger.info(describe_workspace_config(self._config, self._keys))
            return self._config

    def reset(self) -> None:
        """Forget the discovered configuration; the next ``get`` rescans."""
        with self._lock:
            self._config = None
