"""Async client for the n8n public REST API.

One instance is bound to one workspace (base URL + API key) and owns a
pooled ``httpx.AsyncClient``.  Instances are created by the workspace
``ClientPool``; do not construct them per request.

Endpoints used::

    GET  {url}/healthz
    GET  {url}/api/v1/workflows
    GET  {url}/api/v1/workflows/{id}
    POST {url}/api/v1/workflows/{id}/activate
    POST {url}/api/v1/workflows/{id}/deactivate
    GET  {url}/api/v1/executions
    GET  {url}/api/v1/executions/{id}
    ANY  {url}/webhook/{path}          (or /webhook-test/{path})
"""

from __future__ import annotations

from typing import Any, Self

import httpx

API_KEY_HEADER = "X-N8N-API-KEY"
API_PATH = "/api/v1"


class N8nApiError(RuntimeError):
    """An n8n instance answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: Any, url: str) -> None:
        super().__init__(f"n8n API error {status_code} for {url}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.url = url


class N8nApiClient:
    """Thin async wrapper around one n8n instance."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={API_KEY_HEADER: api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    # -- Lifecycle -------------------------------------------------------------

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Health ----------------------------------------------------------------

    async def health_check(self) -> dict[str, Any]:
        return await self._request("GET", "/healthz")

    # -- Workflows -------------------------------------------------------------

    async def list_workflows(
        self,
        *,
        active: bool | None = None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        """List workflows.  Returns n8n's page envelope (``data`` + ``nextCursor``)."""
        params = _params(active=active, limit=limit, cursor=cursor)
        return await self._request("GET", f"{API_PATH}/workflows", params=params)

    async def get_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._request("GET", f"{API_PATH}/workflows/{workflow_id}")

    async def activate_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._request("POST", f"{API_PATH}/workflows/{workflow_id}/activate")

    async def deactivate_workflow(self, workflow_id: str) -> dict[str, Any]:
        return await self._request("POST", f"{API_PATH}/workflows/{workflow_id}/deactivate")

    # -- Executions ------------------------------------------------------------

    async def list_executions(
        self,
        *,
        workflow_id: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> dict[str, Any]:
        params = _params(workflowId=workflow_id, status=status, limit=limit, cursor=cursor)
        return await self._request("GET", f"{API_PATH}/executions", params=params)

    async def get_execution(self, execution_id: str, *, include_data: bool = False) -> dict[str, Any]:
        params = _params(includeData=include_data or None)
        return await self._request("GET", f"{API_PATH}/executions/{execution_id}", params=params)

    # -- Webhooks --------------------------------------------------------------

    async def trigger_webhook(
        self,
        path: str,
        payload: Any = None,
        *,
        method: str = "POST",
        test: bool = False,
    ) -> Any:
        """Call a workflow's webhook trigger.

        ``test=True`` targets ``/webhook-test/``, which only answers while the
        workflow is listening in the editor.  Returns parsed JSON when the
        response is JSON, otherwise the raw text.
        """
        prefix = "/webhook-test" if test else "/webhook"
        method = method.upper()
        url = f"{prefix}/{path.lstrip('/')}"
        if method == "GET":
            return await self._request(method, url, params=payload or None)
        return await self._request(method, url, json=payload)

    # -- Internal --------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        resp = await self._http.request(method, url, **kwargs)
        if resp.is_error:
            raise N8nApiError(resp.status_code, _body(resp), str(resp.request.url))
        return _body(resp)


def _params(**values: Any) -> dict[str, Any]:
    """Drop unset query parameters; render booleans the way n8n expects."""
    params: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        params[key] = str(value).lower() if isinstance(value, bool) else value
    return params


def _body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    if resp.headers.get("content-type", "").startswith("application/json"):
        return resp.json()
    return resp.text
