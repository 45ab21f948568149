"""Shared test fixtures.

Unit tests never read the real process environment: registries are built
over explicit dicts.  Settings are cached per process, so the cache is
cleared around every test.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from n8nhub.hub.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def multi_env() -> dict[str, str]:
    """Two workspaces with an explicit default."""
    return {
        "N8N_URL_A": "https://a.example.com",
        "N8N_TOKEN_A": "tok-a",
        "N8N_URL_B": "https://b.example.com",
        "N8N_TOKEN_B": "tok-b",
        "N8N_DEFAULT_WORKSPACE": "b",
    }


@pytest.fixture
def single_env() -> dict[str, str]:
    return {"N8N_URL_PERSONAL": "https://personal.example.com", "N8N_TOKEN_PERSONAL": "tok-p"}
