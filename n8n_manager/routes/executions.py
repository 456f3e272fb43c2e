"""Execution listing route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..schemas.workflows import ExecutionListResponse
from ..services.n8n_client import list_executions
from ..services.n8n_config import ConnectionConfig
from ..services.n8n_errors import N8NError
from .dependencies import get_connection_config, n8n_http_exception
from .workflows import to_execution_info

router = APIRouter(tags=["executions"])


@router.get("", response_model=ExecutionListResponse)
async def get_executions(
    limit: int = Query(10, ge=1, le=250, description="Maximum number of executions"),
    config: ConnectionConfig = Depends(get_connection_config),
) -> ExecutionListResponse:
    """List recent executions across all workflows."""
    try:
        executions = await list_executions(config, limit=limit)
    except N8NError as exc:
        raise n8n_http_exception(exc) from exc

    return ExecutionListResponse(
        executions=[to_execution_info(execution) for execution in executions],
        total=len(executions),
        limit=limit,
    )
