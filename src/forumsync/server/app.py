"""
FastAPI application exposing the sync trigger.

Endpoints:
- GET /          service status
- GET /health    health check
- POST /api/sync run one sync cycle (requires the x-api-key header)
"""

import logging
import os
import traceback
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Header, status
from fastapi.responses import JSONResponse

from forumsync import __version__
from forumsync.core.config.loader import load_config
from forumsync.core.config.models import ForumSyncConfig
from forumsync.core.factory import AppFactory

logger = logging.getLogger(__name__)

SERVICE_NAME = "forumsync"

app = FastAPI(
    title="forumsync",
    description="Triggers task sheet to forum thread synchronization",
    version=__version__,
)


def get_config() -> ForumSyncConfig:
    """Load configuration fresh for each request."""
    return load_config(use_cache=False)


def create_factory(config: ForumSyncConfig) -> AppFactory:
    """
    Build the dependency factory for one sync cycle.

    A new factory per request means every cycle reads current sheet rows.
    """
    return AppFactory(config)


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})


def _server_error(e: Exception, stack: str | None) -> JSONResponse:
    content: dict[str, Any] = {"status": "error", "message": str(e)}
    if stack is not None:
        content["stack"] = stack
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - service status."""
    return {"status": "ok", "service": SERVICE_NAME, "version": __version__}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/api/sync", response_model=None)
async def trigger_sync(
    x_api_key: str | None = Header(default=None),
) -> JSONResponse | dict[str, Any]:
    """
    Run one sync cycle and return its aggregate result.

    Responses:
        200: {"status": "success", "timestamp": ..., "result": SyncResult}
        401: {"error": "Unauthorized"}
        500: {"status": "error", "message": ..., "stack": ...}; the stack is
             omitted in production and when configuration fails to load
    """
    try:
        config = get_config()
    except Exception as e:
        # Without a config the key can only come from the raw environment.
        logger.error("Configuration could not be loaded: %s", e)
        expected_key = os.environ.get("API_KEY")
        if not expected_key or x_api_key != expected_key:
            return _unauthorized()
        return _server_error(e, None)

    expected = config.server.api_key
    if not expected or x_api_key != expected:
        return _unauthorized()

    logger.info("Received sync trigger")
    try:
        async with create_factory(config) as factory:
            result = await factory.create_orchestrator().run()
    except Exception as e:
        logger.error("Sync cycle could not run: %s\n%s", e, traceback.format_exc())
        return _server_error(e, None if config.server.production else traceback.format_exc())

    return {
        "status": "success",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "result": result.model_dump(mode="json", by_alias=True),
    }
