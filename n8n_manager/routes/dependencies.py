"""Shared FastAPI dependencies for route modules."""

from __future__ import annotations

from dataclasses import replace

from fastapi import Header, HTTPException, status

from ..services.n8n_config import ConnectionConfig, connection_config_from_env
from ..services.n8n_errors import (
    AuthenticationRequiredError,
    MissingEndpointError,
    N8NError,
    UnsupportedEndpointError,
)


def get_connection_config(
    x_n8n_api_key: str | None = Header(None, alias="X-N8N-API-KEY"),
) -> ConnectionConfig:
    # Read per request so settings changes apply without a restart.
    config = connection_config_from_env()
    if x_n8n_api_key and x_n8n_api_key.strip():
        config = replace(config, credential=x_n8n_api_key.strip())
    return config


def n8n_http_exception(exc: N8NError) -> HTTPException:
    """Translate an n8n client error into the HTTP error returned to callers."""
    if isinstance(exc, MissingEndpointError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif isinstance(exc, AuthenticationRequiredError):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, UnsupportedEndpointError):
        code = status.HTTP_501_NOT_IMPLEMENTED
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=str(exc))
