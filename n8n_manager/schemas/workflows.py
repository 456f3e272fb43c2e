"""Pydantic models for n8n payloads and the workflow endpoints."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkflowPayload(BaseModel):
    """Workflow object exactly as the n8n API is expected to send it."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: int
    name: Optional[str] = None
    active: Optional[bool] = None


class ExecutionPayload(BaseModel):
    """Execution object exactly as the n8n API is expected to send it."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: str
    workflowId: Optional[int] = None
    status: Optional[str] = None
    startedAt: Optional[str] = None
    stoppedAt: Optional[str] = None


class WorkflowInfo(BaseModel):
    id: int
    name: Optional[str] = None
    active: Optional[bool] = None


class WorkflowListResponse(BaseModel):
    workflows: List[WorkflowInfo]
    total: int


class SetWorkflowActiveRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    active: bool = Field(..., description="Desired activation state of the workflow")


class SetWorkflowActiveResponse(BaseModel):
    message: str
    workflowId: int
    active: bool


class ExecutionInfo(BaseModel):
    id: str
    workflowId: Optional[int] = None
    status: Optional[str] = None
    startedAt: Optional[str] = None
    stoppedAt: Optional[str] = None


class ExecutionListResponse(BaseModel):
    executions: List[ExecutionInfo]
    total: int
    limit: int
