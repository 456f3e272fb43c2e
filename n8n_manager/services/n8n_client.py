"""HTTP calls to the n8n REST API.

The API may live under different base paths depending on the server version
and configuration, so every call probes the candidate base paths in order
and falls back on 404/405.
"""

from __future__ import annotations

import json
import logging
import re

import httpx

from .n8n_config import ConnectionConfig, resolve_endpoint
from .n8n_errors import (
    AuthenticationRequiredError,
    N8NError,
    N8NServerError,
    N8NTransportError,
    UnsupportedEndpointError,
)
from .n8n_models import ExecutionSummary, RequestOutcome, WorkflowSummary
from .n8n_parsers import parse_execution_list_payload, parse_workflow_list_payload

logger = logging.getLogger(__name__)

# Most common layout first, then the public API, then the bare root.
CANDIDATE_BASE_PATHS = ("/rest", "/api/v1", "")

API_KEY_HEADER = "X-N8N-API-KEY"

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def _normalize_segment(segment: str) -> str:
    return _DUPLICATE_SLASHES.sub("/", segment).strip("/")


def candidate_base_paths() -> list[str]:
    """Base paths to probe, in priority order."""
    return list(CANDIDATE_BASE_PATHS)


def build_url(endpoint: str, base_path: str, path: str) -> str:
    """Join endpoint root, base path and relative path with single separators."""
    parts = [endpoint.rstrip("/")]
    for segment in (base_path, path):
        normalized = _normalize_segment(segment)
        if normalized:
            parts.append(normalized)
    return "/".join(parts)


def build_headers(config: ConnectionConfig, has_body: bool) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if has_body:
        headers["Content-Type"] = "application/json"
    if config.has_credential:
        headers[API_KEY_HEADER] = config.credential
    return headers


def _masked_headers(headers: dict[str, str]) -> dict[str, str]:
    """Mask sensitive headers before logging."""
    masked = dict(headers)
    if API_KEY_HEADER in masked:
        masked[API_KEY_HEADER] = "***"
    return masked


async def perform_request(
    config: ConnectionConfig,
    path: str,
    method: str = "GET",
    body: bytes | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RequestOutcome:
    """Send one logical request, probing each candidate base path in turn.

    A 401/403 stops probing at once. A 404/405 moves on to the next candidate,
    as does a transport failure. Any other non-success status is raised
    immediately as :class:`N8NServerError`.
    """
    endpoint = resolve_endpoint(config)
    headers = build_headers(config, body is not None)
    last_error: N8NError | None = None

    async with httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(config.timeout),
        follow_redirects=True,
    ) as client:
        for base_path in candidate_base_paths():
            url = build_url(endpoint, base_path, path)
            logger.info(
                "n8n request: method=%s url=%s headers=%s",
                method,
                url,
                _masked_headers(headers),
            )
            try:
                response = await client.request(method, url, headers=headers, content=body)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.warning("n8n transport failure: method=%s url=%s error=%s", method, url, exc)
                last_error = N8NTransportError(exc)
                continue

            status_code = response.status_code
            if status_code in (401, 403):
                logger.error("n8n authentication failed", extra={"status": status_code, "url": url})
                raise AuthenticationRequiredError()
            if 200 <= status_code <= 299:
                return RequestOutcome(payload=response.content, status_code=status_code, url=url)
            if status_code in (404, 405):
                logger.info("n8n base path rejected: status=%s url=%s", status_code, url)
                last_error = UnsupportedEndpointError(status_code, response.content)
                continue

            logger.error(
                "n8n API error",
                extra={"status": status_code, "url": url, "body": response.text},
            )
            raise N8NServerError(status_code, response.content)

    raise last_error or UnsupportedEndpointError()


async def list_workflows(
    config: ConnectionConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[WorkflowSummary]:
    """List workflows in the order the server returns them."""
    outcome = await perform_request(config, "workflows", transport=transport)
    workflows = parse_workflow_list_payload(outcome.payload)
    logger.info("Listed %d workflows from %s", len(workflows), outcome.url)
    return workflows


async def set_workflow_active(
    config: ConnectionConfig,
    workflow_id: int,
    active: bool,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Activate or deactivate a workflow.

    Tries ``POST workflows/{id}/activate|deactivate`` first, then
    ``PUT workflows/{id}`` and finally ``PATCH workflows/{id}`` with an
    ``{"active": ...}`` body. An authentication failure on the first attempt
    is raised without trying the others.
    """
    resolve_endpoint(config)

    action = "activate" if active else "deactivate"
    try:
        await perform_request(config, f"workflows/{workflow_id}/{action}", method="POST", transport=transport)
        return
    except AuthenticationRequiredError:
        raise
    except N8NError as exc:
        logger.info("POST %s failed for workflow %s, falling back to PUT: %s", action, workflow_id, exc)

    body = json.dumps({"active": active}).encode("utf-8")
    try:
        await perform_request(config, f"workflows/{workflow_id}", method="PUT", body=body, transport=transport)
        return
    except N8NError as exc:
        logger.info("PUT failed for workflow %s, falling back to PATCH: %s", workflow_id, exc)

    await perform_request(config, f"workflows/{workflow_id}", method="PATCH", body=body, transport=transport)


async def list_executions(
    config: ConnectionConfig,
    workflow_id: int | None = None,
    limit: int = 10,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ExecutionSummary]:
    """List recent executions, optionally for a single workflow."""
    resolve_endpoint(config)

    if workflow_id is not None:
        # This shape takes no limit parameter; the fallback query does.
        try:
            outcome = await perform_request(config, f"workflows/{workflow_id}/executions", transport=transport)
            return parse_execution_list_payload(outcome.payload)
        except N8NError as exc:
            logger.info("Workflow executions path failed for %s, using executions query: %s", workflow_id, exc)
        path = f"executions?workflowId={workflow_id}&limit={limit}"
    else:
        path = f"executions?limit={limit}"

    outcome = await perform_request(config, path, transport=transport)
    executions = parse_execution_list_payload(outcome.payload)
    logger.info("Listed %d executions from %s", len(executions), outcome.url)
    return executions
