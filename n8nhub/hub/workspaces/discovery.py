"""Workspace discovery from an environment snapshot.

Scans for paired ``N8N_URL_<NAME>`` / ``N8N_TOKEN_<NAME>`` variables:

- ``N8N_URL_PERSONAL`` + ``N8N_TOKEN_PERSONAL`` -> workspace ``personal``
- ``N8N_API_URL`` + ``N8N_API_KEY`` -> workspace ``default``, only when no
  prefixed pair was found (single-instance mode)
- ``N8N_DEFAULT_WORKSPACE`` picks the default; otherwise the first workspace
  found is used

``scan`` is pure: it reads only the mapping it is given.

Two variables that lower-case to the same name (``N8N_URL_Prod`` and
``N8N_URL_PROD``) collapse into one workspace.  The later one in iteration
order wins, and environment iteration order is platform-defined.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger
from pydantic import SecretStr

from n8nhub.hub.models.workspace import WorkspaceConfig, WorkspaceDefinition, WorkspaceEnvKeys

FALLBACK_WORKSPACE = "default"

DEFAULT_ENV_KEYS = WorkspaceEnvKeys()


def scan(environ: Mapping[str, str], keys: WorkspaceEnvKeys = DEFAULT_ENV_KEYS) -> WorkspaceConfig:
    """Build a ``WorkspaceConfig`` from ``environ``."""
    workspaces: dict[str, WorkspaceDefinition] = {}

    for env_var, url in environ.items():
        if not env_var.startswith(keys.url_prefix) or not url:
            continue

        suffix = env_var[len(keys.url_prefix) :]
        name = suffix.lower()
        token_env_var = f"{keys.token_prefix}{suffix}"
        token = environ.get(token_env_var)

        if not name:
            continue
        if not token:
            logger.warning("Workspace '{}' has URL but missing token ({}), skipping", name, token_env_var)
            continue

        workspaces[name] = WorkspaceDefinition(
            name=name,
            url=url,
            token=SecretStr(token),
            url_env_var=env_var,
            token_env_var=token_env_var,
        )

    if not workspaces:
        fallback_url = environ.get(keys.fallback_url)
        fallback_token = environ.get(keys.fallback_token)
        if fallback_url and fallback_token:
            workspaces[FALLBACK_WORKSPACE] = WorkspaceDefinition(
                name=FALLBACK_WORKSPACE,
                url=fallback_url,
                token=SecretStr(fallback_token),
                url_env_var=keys.fallback_url,
                token_env_var=keys.fallback_token,
            )

    return WorkspaceConfig(
        workspaces=workspaces,
        default_workspace=_pick_default(workspaces, environ.get(keys.default_selector)),
    )


def _pick_default(workspaces: Mapping[str, WorkspaceDefinition], selector: str | None) -> str | None:
    """Explicit selector if it names a workspace, else the first one, else None."""
    if selector and selector.lower() in workspaces:
        return selector.lower()
    return next(iter(workspaces), None)


def describe_workspace_config(config: WorkspaceConfig, keys: WorkspaceEnvKeys = DEFAULT_ENV_KEYS) -> str:
    """One-paragraph summary for startup logs and the CLI."""
    names = config.names

    if not names:
        return (
            "Workspace config: No workspaces configured "
            f"(missing {keys.url_prefix}* + {keys.token_prefix}* or "
            f"{keys.fallback_url} + {keys.fallback_token} env vars)"
        )

    if names == [FALLBACK_WORKSPACE] and config.workspaces[FALLBACK_WORKSPACE].url_env_var == keys.fallback_url:
        return f"Workspace config: Single workspace mode (using {keys.fallback_url} + {keys.fallback_token})"

    mode = "Multi-workspace mode" if config.is_multi_workspace else "Single workspace mode"
    return (
        f"Workspace config: {mode}\n"
        f"  Available: {', '.join(names)}\n"
        f"  Default: {config.default_workspace or 'none'}"
    )
