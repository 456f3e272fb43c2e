"""Workflow-related HTTP routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..schemas.workflows import (
    ExecutionInfo,
    ExecutionListResponse,
    SetWorkflowActiveRequest,
    SetWorkflowActiveResponse,
    WorkflowInfo,
    WorkflowListResponse,
)
from ..services.n8n_client import list_executions, list_workflows, set_workflow_active
from ..services.n8n_config import ConnectionConfig
from ..services.n8n_errors import N8NError
from ..services.n8n_models import ExecutionSummary
from .dependencies import get_connection_config, n8n_http_exception

router = APIRouter(tags=["workflows"])


def to_execution_info(execution: ExecutionSummary) -> ExecutionInfo:
    return ExecutionInfo(
        id=execution.id,
        workflowId=execution.workflow_id,
        status=execution.status,
        startedAt=execution.started_at,
        stoppedAt=execution.stopped_at,
    )


@router.get("", response_model=WorkflowListResponse)
async def get_workflows(
    config: ConnectionConfig = Depends(get_connection_config),
) -> WorkflowListResponse:
    """List workflows sorted by name."""
    try:
        workflows = await list_workflows(config)
    except N8NError as exc:
        raise n8n_http_exception(exc) from exc

    ordered = sorted(workflows, key=lambda wf: wf.name or "")
    return WorkflowListResponse(
        workflows=[WorkflowInfo(id=wf.id, name=wf.name, active=wf.active) for wf in ordered],
        total=len(ordered),
    )


@router.post("/{workflow_id}/active", response_model=SetWorkflowActiveResponse)
async def update_workflow_active(
    workflow_id: int,
    payload: SetWorkflowActiveRequest,
    config: ConnectionConfig = Depends(get_connection_config),
) -> SetWorkflowActiveResponse:
    """Activate or deactivate a workflow."""
    try:
        await set_workflow_active(config, workflow_id, payload.active)
    except N8NError as exc:
        raise n8n_http_exception(exc) from exc

    return SetWorkflowActiveResponse(
        message="Workflow activated" if payload.active else "Workflow deactivated",
        workflowId=workflow_id,
        active=payload.active,
    )


@router.get("/{workflow_id}/executions", response_model=ExecutionListResponse)
async def get_workflow_executions(
    workflow_id: int,
    limit: int = Query(20, ge=1, le=250, description="Maximum number of executions"),
    config: ConnectionConfig = Depends(get_connection_config),
) -> ExecutionListResponse:
    """List recent executions of a single workflow."""
    try:
        executions = await list_executions(config, workflow_id=workflow_id, limit=limit)
    except N8NError as exc:
        raise n8n_http_exception(exc) from exc

    return ExecutionListResponse(
        executions=[to_execution_info(execution) for execution in executions],
        total=len(executions),
        limit=limit,
    )
