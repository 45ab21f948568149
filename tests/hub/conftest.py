"""Shared fixtures for HTTP-level tests.

The app is driven through ``httpx.ASGITransport``; lifespan does NOT run
under it, so ``app.state`` is pre-set here.  Every workspace client talks to
an ``httpx.MockTransport`` that echoes which instance was hit.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from n8nhub.hub.app import app
from n8nhub.hub.client import N8nApiClient
from n8nhub.hub.models.workspace import WorkspaceDefinition
from n8nhub.hub.workspaces import ClientPool, WorkspaceRegistry, WorkspaceResolver


def echo_upstream(request: httpx.Request) -> httpx.Response:
    """Fake n8n: echo host, path and query; 404 for ids starting with ``missing``."""
    if request.url.path.rsplit("/", 1)[-1].startswith("missing"):
        return httpx.Response(404, json={"message": "Not Found"})
    body = request.content.decode() or None
    return httpx.Response(
        200,
        json={
            "host": request.url.host,
            "method": request.method,
            "path": request.url.path,
            "params": dict(request.url.params),
            "api_key": request.headers.get("X-N8N-API-KEY"),
            "body": body,
        },
    )


def mock_resolver(env: dict[str, str], handler: Callable = echo_upstream) -> WorkspaceResolver:
    def _factory(definition: WorkspaceDefinition) -> N8nApiClient:
        return N8nApiClient(
            definition.url,
            definition.token.get_secret_value(),
            transport=httpx.MockTransport(handler),
        )

    return WorkspaceResolver(WorkspaceRegistry(lambda: env), ClientPool(_factory))


@pytest.fixture
def make_client() -> Callable:
    """Factory: ``async with make_client(env) as ac`` -> client over a fresh resolver."""

    @asynccontextmanager
    async def _make(
        env: dict[str, str],
        *,
        auth_token: str | None = None,
        handler: Callable = echo_upstream,
    ) -> AsyncIterator[AsyncClient]:
        resolver = mock_resolver(env, handler)
        app.state.workspaces = resolver
        app.state.auth_token = auth_token

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

        await resolver.pool.aclose()
        app.state.workspaces = None
        app.state.auth_token = None

    return _make


@pytest.fixture
async def client(multi_env: dict[str, str], make_client) -> AsyncIterator[AsyncClient]:
    """Client over the two-workspace environment (``a``, ``b``; default ``b``)."""
    async with make_client(multi_env) as ac:
        yield ac
