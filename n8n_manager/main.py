"""FastAPI application entry point."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes.executions import router as executions_router
from .routes.workflows import router as workflows_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    allowed_origins_env = os.getenv("ALLOWED_ORIGINS")
    if not allowed_origins_env:
        raise RuntimeError("ALLOWED_ORIGINS environment variable is required")
    allowed_origins = [origin.strip() for origin in allowed_origins_env.split(",") if origin.strip()]

    configure_logging()

    app = FastAPI(title="n8n Manager", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(workflows_router, prefix="/api/workflows")
    app.include_router(executions_router, prefix="/api/executions")
    return app
