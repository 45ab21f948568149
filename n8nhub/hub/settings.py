"""Service configuration loaded from N8NHUB_* environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class HubSettings(BaseSettings):
    """n8nhub settings.

    All fields are read from environment variables with the ``N8NHUB_`` prefix.
    For example, ``N8NHUB_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    Workspace variables (``N8N_URL_*``, ``N8N_TOKEN_*``, ``N8N_API_URL``,
    ``N8N_API_KEY``, ``N8N_DEFAULT_WORKSPACE``) are **not** managed here --
    their names are dynamic, so they are scanned by workspace discovery.
    """

    model_config = SettingsConfigDict(
        env_prefix="N8NHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- n8n API ---------------------------------------------------------------
    request_timeout: float = 30.0
    """Per-request timeout (seconds) for every workspace API client."""

    # -- Auth ------------------------------------------------------------------
    auth_token: str | None = None
    """Bearer token for the REST API.  The API is open when unset."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


def get_settings() -> HubSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> HubSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return HubSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
