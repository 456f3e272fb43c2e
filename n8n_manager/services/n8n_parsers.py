"""Parsing helpers for n8n list payloads.

Server variants wrap list results differently, so each payload goes through
an ordered chain of strategies: the exact array shape, then an envelope
object keyed by a known name, then best-effort extraction from untyped
records. The first strategy that succeeds wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from ..schemas.workflows import ExecutionPayload, WorkflowPayload
from .n8n_errors import N8NDecodingError
from .n8n_models import ExecutionSummary, WorkflowSummary

logger = logging.getLogger(__name__)

WORKFLOW_ENVELOPE_KEYS = ("workflows", "data")
EXECUTION_ENVELOPE_KEYS = ("executions", "data")

_workflow_list_adapter = TypeAdapter(list[WorkflowPayload])
_execution_list_adapter = TypeAdapter(list[ExecutionPayload])


@dataclass(frozen=True)
class Decoded:
    items: list


@dataclass(frozen=True)
class DecodeFailed:
    reason: str


DecodeResult = Union[Decoded, DecodeFailed]
Strategy = Callable[[Any], DecodeResult]


def _validate(adapter: TypeAdapter, data: Any, convert: Callable[[Any], Any]) -> DecodeResult:
    try:
        payloads = adapter.validate_python(data)
    except ValidationError as exc:
        return DecodeFailed(f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")
    return Decoded([convert(item) for item in payloads])


def _exact(adapter: TypeAdapter, convert: Callable[[Any], Any]) -> Strategy:
    def strategy(data: Any) -> DecodeResult:
        if not isinstance(data, list):
            return DecodeFailed("payload is not an array")
        return _validate(adapter, data, convert)

    return strategy


def _envelope_items(data: Any, keys: Sequence[str]) -> Any:
    if not isinstance(data, dict):
        return None
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _enveloped(adapter: TypeAdapter, convert: Callable[[Any], Any], keys: Sequence[str]) -> Strategy:
    def strategy(data: Any) -> DecodeResult:
        items = _envelope_items(data, keys)
        if items is None:
            return DecodeFailed(f"payload has none of the keys {', '.join(keys)}")
        if not isinstance(items, list):
            return DecodeFailed("enveloped value is not an array")
        return _validate(adapter, items, convert)

    return strategy


def _records(mapper: Callable[[dict], Any], keys: Sequence[str]) -> Strategy:
    def strategy(data: Any) -> DecodeResult:
        records = data if isinstance(data, list) else _envelope_items(data, keys)
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            return DecodeFailed("payload is not a list of records")
        mapped = [mapper(record) for record in records]
        return Decoded([item for item in mapped if item is not None])

    return strategy


def decode_list(data: Any, strategies: Sequence[Strategy]) -> list:
    """Run ``strategies`` in order and return the first decoded list."""
    reasons: list[str] = []
    for strategy in strategies:
        result = strategy(data)
        if isinstance(result, Decoded):
            return result.items
        reasons.append(result.reason)
    raise N8NDecodingError(ValueError("; ".join(reasons)))


def _load_json(payload: bytes | str) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise N8NDecodingError(exc) from exc


def coerce_int(value: Any) -> int | None:
    """Accept an integer expressed as a JSON number or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _optional(record: dict, key: str, kind: type) -> Any:
    value = record.get(key)
    return value if isinstance(value, kind) else None


def workflow_from_record(record: dict) -> WorkflowSummary | None:
    workflow_id = coerce_int(record.get("id"))
    if workflow_id is None:
        return None
    return WorkflowSummary(
        id=workflow_id,
        name=_optional(record, "name", str),
        active=_optional(record, "active", bool),
    )


def execution_from_record(record: dict) -> ExecutionSummary | None:
    raw_id = record.get("id")
    if isinstance(raw_id, str):
        execution_id = raw_id
    else:
        number = coerce_int(raw_id)
        if number is None:
            return None
        execution_id = str(number)
    return ExecutionSummary(
        id=execution_id,
        workflow_id=coerce_int(record.get("workflowId")),
        status=_optional(record, "status", str),
        started_at=_optional(record, "startedAt", str),
        stopped_at=_optional(record, "stoppedAt", str),
    )


def _workflow_from_payload(payload: WorkflowPayload) -> WorkflowSummary:
    return WorkflowSummary(id=payload.id, name=payload.name, active=payload.active)


def _execution_from_payload(payload: ExecutionPayload) -> ExecutionSummary:
    return ExecutionSummary(
        id=payload.id,
        workflow_id=payload.workflowId,
        status=payload.status,
        started_at=payload.startedAt,
        stopped_at=payload.stoppedAt,
    )


WORKFLOW_STRATEGIES: tuple[Strategy, ...] = (
    _exact(_workflow_list_adapter, _workflow_from_payload),
    _enveloped(_workflow_list_adapter, _workflow_from_payload, WORKFLOW_ENVELOPE_KEYS),
    _records(workflow_from_record, WORKFLOW_ENVELOPE_KEYS),
)

EXECUTION_STRATEGIES: tuple[Strategy, ...] = (
    _exact(_execution_list_adapter, _execution_from_payload),
    _enveloped(_execution_list_adapter, _execution_from_payload, EXECUTION_ENVELOPE_KEYS),
    _records(execution_from_record, EXECUTION_ENVELOPE_KEYS),
)


def parse_workflow_list_payload(payload: bytes | str) -> list[WorkflowSummary]:
    """Normalize an n8n workflow list response into workflow summaries."""
    workflows = decode_list(_load_json(payload), WORKFLOW_STRATEGIES)
    logger.debug("Decoded %d workflows", len(workflows))
    return workflows


def parse_execution_list_payload(payload: bytes | str) -> list[ExecutionSummary]:
    """Normalize an n8n execution list response into execution summaries."""
    executions = decode_list(_load_json(payload), EXECUTION_STRATEGIES)
    logger.debug("Decoded %d executions", len(executions))
    return executions
