"""Connection settings for an n8n instance."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum

from .n8n_errors import MissingEndpointError

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/rest"
DEFAULT_TIMEOUT_SECONDS = 60.0


class Scheme(str, Enum):
    HTTPS = "https"
    HTTP = "http"


@dataclass(frozen=True)
class ConnectionConfig:
    """Immutable snapshot of the user's connection settings."""

    host: str
    port: str | int | None = None
    scheme: Scheme = Scheme.HTTPS
    credential: str | None = None
    base_path_preference: str = DEFAULT_BASE_PATH
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_credential(self) -> bool:
        return bool(self.credential and self.credential.strip())


def _parse_port(port: str | int | None) -> int | None:
    if port is None or isinstance(port, bool):
        return None
    if isinstance(port, int):
        return port if port > 0 else None
    try:
        value = int(port.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_endpoint(config: ConnectionConfig) -> str:
    """Return ``scheme://host[:port]`` without any base path.

    Raises:
        MissingEndpointError: if the host is empty after trimming whitespace.
    """
    host = config.host.strip() if config.host else ""
    if not host:
        raise MissingEndpointError()

    endpoint = f"{Scheme(config.scheme).value}://{host}"
    port = _parse_port(config.port)
    if port is not None:
        endpoint += f":{port}"
    return endpoint


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def connection_config_from_fields(
    host: str,
    port: str | None = None,
    use_https: bool = True,
    api_key: str | None = None,
    base_path: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ConnectionConfig:
    """Build a config from the raw values entered on the settings screen."""
    return ConnectionConfig(
        host=(host or "").strip(),
        port=port.strip() if port else None,
        scheme=Scheme.HTTPS if use_https else Scheme.HTTP,
        credential=api_key or None,
        base_path_preference=base_path or DEFAULT_BASE_PATH,
        timeout=timeout,
    )


def connection_config_from_env() -> ConnectionConfig:
    """Read the connection settings from ``N8N_*`` environment variables."""
    raw_timeout = os.getenv("N8N_HTTP_TIMEOUT")
    timeout = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            logger.warning("Ignoring invalid N8N_HTTP_TIMEOUT value: %s", raw_timeout)

    return connection_config_from_fields(
        host=os.getenv("N8N_HOST", ""),
        port=os.getenv("N8N_PORT"),
        use_https=_parse_bool(os.getenv("N8N_USE_HTTPS"), default=True),
        api_key=os.getenv("N8N_API_KEY"),
        base_path=os.getenv("N8N_BASE_PATH"),
        timeout=timeout,
    )
