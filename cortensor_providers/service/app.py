"""FastAPI service exposing the adapter over HTTP.

Routes
------
- ``POST /v1/chat/completions`` and ``POST /chat/completions``: pass the raw
  request body to ``CortensorAdapter.handle`` and relay its status and JSON
  body unchanged. Each request gets its own cancellation token, cancelled
  when the client disconnects, so no further outbound call is started.
- ``GET /api/health``: liveness check.

The adapter is created lazily on first use so importing the module never
reads credentials; tests replace it with :func:`set_adapter`.
"""
from __future__ import annotations

import asyncio
import os
import threading
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from cortensor_providers.adapter import CortensorAdapter
from cortensor_providers.base.cancellation import CancellationToken
from cortensor_providers.config.defaults import CORTENSOR_SERVICE_CORS_DEFAULT_ORIGINS
from cortensor_providers.config.env import SERVICE_CORS_ENV


app = FastAPI(title="Cortensor Adapter Service", version="0.1.0")

_ADAPTER: Optional[CortensorAdapter] = None
_ADAPTER_LOCK = threading.Lock()


def get_adapter() -> CortensorAdapter:
    """Return the process adapter, creating it from the settings snapshot on first use."""
    global _ADAPTER  # noqa: PLW0603 - module-level service singleton
    if _ADAPTER is None:
        with _ADAPTER_LOCK:
            if _ADAPTER is None:
                _ADAPTER = CortensorAdapter()
    return _ADAPTER


def set_adapter(adapter: Optional[CortensorAdapter]) -> None:
    """Replace (or clear with ``None``) the process adapter."""
    global _ADAPTER  # noqa: PLW0603
    with _ADAPTER_LOCK:
        _ADAPTER = adapter


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

cors_origins_env = os.getenv(SERVICE_CORS_ENV, CORTENSOR_SERVICE_CORS_DEFAULT_ORIGINS)
allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health() -> Dict[str, Any]:
    """Return a simple response indicating the service is running."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Chat completions
# ---------------------------------------------------------------------------


DISCONNECT_POLL_SECONDS = 0.1


async def _cancel_on_disconnect(request: Request, token: CancellationToken) -> None:
    """Cancel ``token`` once the client goes away; stopped when the call ends."""
    while not token.cancelled:
        if await request.is_disconnected():
            token.cancel("client disconnected")
            return
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


async def _relay(request: Request) -> JSONResponse:
    raw = await request.body()
    token = CancellationToken()
    watcher = asyncio.create_task(_cancel_on_disconnect(request, token))
    try:
        result = await run_in_threadpool(get_adapter().handle, raw, cancel_token=token)
    finally:
        watcher.cancel()
    return JSONResponse(status_code=result.status_code, content=result.body)


@app.post("/v1/chat/completions")
async def chat_completions_v1(request: Request) -> JSONResponse:
    """OpenAI-compatible chat completions route."""
    return await _relay(request)


@app.post("/chat/completions")
async def chat_completions(request: Request) -> JSONResponse:
    """Alias of ``/v1/chat/completions`` for SDKs configured without ``/v1``."""
    return await _relay(request)


__all__ = ["app", "get_adapter", "set_adapter"]
