"""Webhook trigger endpoint.

Forwards an arbitrary JSON body to ``{workspace url}/webhook/{path}`` and
returns whatever the workflow responds with.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body

from n8nhub.hub.deps import Workspace

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/{path:path}/trigger")
async def trigger_webhook(
    path: str,
    ctx: Workspace,
    payload: Any = Body(default=None),
    test: bool = False,
) -> Any:
    """Trigger a webhook workflow.  ``test=true`` targets ``/webhook-test/``."""
    return await ctx.client.trigger_webhook(path, payload, test=test)
