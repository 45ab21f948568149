from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from n8nhub.hub.client import N8nApiClient, N8nApiError
from n8nhub.hub.deps import require_auth
from n8nhub.hub.log import setup_logging
from n8nhub.hub.models.workspace import WorkspaceDefinition
from n8nhub.hub.settings import HubSettings, get_settings
from n8nhub.hub.workspaces import ClientPool, WorkspaceRegistry, WorkspaceResolver


def create_workspace_resolver(settings: HubSettings) -> WorkspaceResolver:
    """Build the resolver over the process environment with n8n API clients."""

    def _client_factory(definition: WorkspaceDefinition) -> N8nApiClient:
        return N8nApiClient(
            base_url=definition.url,
            api_key=definition.token.get_secret_value(),
            timeout=settings.request_timeout,
        )

    return WorkspaceResolver(WorkspaceRegistry(), ClientPool(_client_factory))


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level)

    _app.state.auth_token = settings.auth_token
    if not settings.auth_token:
        logger.warning("No N8NHUB_AUTH_TOKEN set -- API is unauthenticated")

    logger.info("n8nhub starting (host={}, port={})", settings.host, settings.port)

    # -- Workspaces ------------------------------------------------------------
    resolver = create_workspace_resolver(settings)
    resolver.registry.get()  # discover now so config problems show up at startup
    _app.state.workspaces = resolver

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("n8nhub shutting down (open_clients={})", len(resolver.pool))
    await resolver.areset()


app = FastAPI(title="n8nhub", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------


@app.exception_handler(N8nApiError)
async def n8n_api_error_handler(_request: Request, exc: N8nApiError) -> JSONResponse:
    logger.warning("n8n API error {} for {}", exc.status_code, exc.url)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.detail, "upstream_status": exc.status_code},
    )


@app.exception_handler(httpx.TransportError)
async def transport_error_handler(_request: Request, exc: httpx.TransportError) -> JSONResponse:
    logger.warning("n8n unreachable: {!r}", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": f"n8n instance unreachable: {exc.__class__.__name__}"},
    )


# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from n8nhub.hub.routers.executions import router as executions_router  # noqa: E402
from n8nhub.hub.routers.webhooks import router as webhooks_router  # noqa: E402
from n8nhub.hub.routers.workflows import router as workflows_router  # noqa: E402
from n8nhub.hub.routers.workspaces import router as workspaces_router  # noqa: E402

_protected = [Depends(require_auth)]
api.include_router(workspaces_router, dependencies=_protected)
api.include_router(workflows_router, dependencies=_protected)
api.include_router(executions_router, dependencies=_protected)
api.include_router(webhooks_router, dependencies=_protected)

app.include_router(api)
