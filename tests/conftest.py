"""Shared test fixtures and configuration."""
from __future__ import annotations

import os
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000,http://localhost:4200"
os.environ["N8N_HOST"] = "n8n.test"
os.environ["N8N_PORT"] = "5678"
os.environ["N8N_USE_HTTPS"] = "true"
os.environ["N8N_API_KEY"] = "test_api_key"

from n8n_manager.main import create_app
from n8n_manager.services.n8n_config import ConnectionConfig


class ScriptedServer:
    """Answers each request with the next scripted response and records it."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def app():
    """Create a FastAPI app instance for testing."""
    return create_app()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(host="n8n.test", port="5678", credential="secret-key")


@pytest.fixture
def scripted_server():
    """Build a scripted n8n server from a sequence of responses or exceptions."""
    def _create(*responses) -> ScriptedServer:
        return ScriptedServer(responses)
    return _create


@pytest.fixture
def sample_workflows_payload():
    return [
        {"id": 2, "name": "Invoice sync", "active": True},
        {"id": 1, "name": "Backup", "active": False},
    ]


@pytest.fixture
def sample_executions_payload():
    return [
        {
            "id": "101",
            "workflowId": 2,
            "status": "success",
            "startedAt": "2026-10-01T08:00:00.000Z",
            "stoppedAt": "2026-10-01T08:00:03.000Z",
        },
        {
            "id": "102",
            "workflowId": 2,
            "status": "error",
            "startedAt": "2026-10-01T09:00:00.000Z",
            "stoppedAt": None,
        },
    ]
