"""Shared n8n service models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkflowSummary:
    """Workflow entry as listed by the n8n API."""

    id: int
    name: str | None = None
    active: bool | None = None


@dataclass(frozen=True)
class ExecutionSummary:
    """Execution entry; timestamps are kept as the server sent them."""

    id: str
    workflow_id: int | None = None
    status: str | None = None
    started_at: str | None = None
    stopped_at: str | None = None


@dataclass(frozen=True)
class RequestOutcome:
    payload: bytes
    status_code: int
    url: str
