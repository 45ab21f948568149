"""Unit tests for the per-workspace client pool."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from loguru import logger
from pydantic import SecretStr

from n8nhub.hub.models.workspace import WorkspaceDefinition
from n8nhub.hub.workspaces.pool import ClientPool

def _definition(name: str = "a", url: str = "https://a", token: str = "tok") -> WorkspaceDefinition:
    return WorkspaceDefinition(
        name=name,
        url=url,
        token=SecretStr(token),
        url_env_var=f"N8N_URL_{name.upper()}",
        token_env_var=f"N8N_TOKEN_{name.upper()}",
    )

class FakeClient:
    def __init__(self, definition: WorkspaceDefinition) -> None:
        self.url = definition.url
        self.token = definition.token.get_secret_value()
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True

class CountingFactory:
    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.built: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, definition: WorkspaceDefinition) -> FakeClient:
        time.sleep(self.delay)
        with self._lock:
            self.built.append(definition.name)
        return FakeClient(definition)

def test_same_name_returns_same_client() -> None:
    factory = CountingFactory()
    pool = ClientPool(factory)

    first = pool.get_or_create(_definition())
    second = pool.get_or_create(_definition())

    assert first is second
    assert factory.built == ["a"]

def test_client_built_from_url_and_token() -> None:
    pool = ClientPool(FakeClient)
    client = pool.get_or_create(_definition(url="https://x", token="secret"))

    assert client.url == "https://x"
    assert client.token == "secret"

def test_changed_definition_does_not_rebuild() -> None:
    pool = ClientPool(FakeClient)
    first = pool.get_or_create(_definition(url="https://old"))
    second = pool.get_or_create(_definition(url="https://new"))

    assert second is first
    assert second.url == "https://old"

def test_distinct_names_get_distinct_clients() -> None:
    pool = ClientPool(FakeClient)
    a = pool.get_or_create(_definition("a"))
    b = pool.get_or_create(_definition("b"))

    assert a is not b
    assert len(pool) == 2
    assert "a" in pool
    assert pool.get("b") is b
    assert pool.get("c") is None

def test_concurrent_first_access_builds_once() -> None:
    factory = CountingFactory(delay=0.05)
    pool = ClientPool(factory)
    definition = _definition()

    with ThreadPoolExecutor(max_workers=8) as executor:
        clients = list(executor.map(lambda _: pool.get_or_create(definition), range(16)))

    assert factory.built == ["a"]
    assert all(c is clients[0] for c in clients)

def test_factory_returning_none_is_cached() -> None:
    built: list[str] = []

    def factory(definition: WorkspaceDefinition) -> None:
        built.append(definition.name)

    pool = ClientPool(factory)
    assert pool.get_or_create(_definition()) is None
    assert pool.get_or_create(_definition()) is None

    assert built == ["a"]
    assert "a" in pool

def test_reset_forces_rebuild() -> None:
    factory = CountingFactory()
    pool = ClientPool(factory)
    first = pool.get_or_create(_definition())

    pool.reset()
    assert len(pool) == 0

    second = pool.get_or_create(_definition())
    assert second is not first
    assert factory.built == ["a", "a"]

async def test_aclose_closes_and_clears() -> None:
    pool = ClientPool(FakeClient)
    a = pool.get_or_create(_definition("a"))
    b = pool.get_or_create(_definition("b"))

    await pool.aclose()

    assert a.closed is True
    assert b.closed is True
    assert len(pool) == 0

async def test_aclose_skips_clients_without_aclose() -> None:
    pool = ClientPool(lambda d: object())
    pool.get_or_create(_definition())

    await pool.aclose()
    assert len(pool) == 0

def test_reset_warns_when_dropping_closeable_clients() -> None:
    pool = ClientPool(FakeClient)
    client = pool.get_or_create(_definition("a"))
    pool.get_or_create(_definition("b"))

    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        pool.reset()
    finally:
        logger.remove(sink_id)

    assert client.closed is False
    assert len(messages) == 1
    assert "2 API client(s)" in messages[0]
    assert "a, b" in messages[0]

def test_reset_is_quiet_for_plain_handles() -> None:
    pool = ClientPool(lambda d: object())
    pool.get_or_create(_definition())

    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        pool.reset()
    finally:
        logger.remove(sink_id)

    assert messages == []
