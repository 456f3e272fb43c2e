"""Error types for n8n client operations."""

from __future__ import annotations


class N8NError(RuntimeError):
    """Base class for failures surfaced by the n8n client."""


class MissingEndpointError(N8NError):
    """Raised when no host is configured, before any network call."""

    def __init__(self) -> None:
        super().__init__("Base URL not configured.")


class AuthenticationRequiredError(N8NError):
    """Raised when the server answers 401 or 403."""

    def __init__(self) -> None:
        super().__init__("Authentication required (401/403). Check API key or login.")


class N8NServerError(N8NError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, status_code: int | None, body: bytes = b"", message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Server returned HTTP {status_code}.")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class UnsupportedEndpointError(N8NServerError):
    """Raised when every candidate base path answered 404 or 405."""

    def __init__(self, status_code: int | None = None, body: bytes = b"") -> None:
        super().__init__(status_code, body, "Endpoint not available on this server variant.")


class N8NDecodingError(N8NError):
    """Raised when a payload matches none of the decoding strategies."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Decoding failed: {cause}")


class N8NTransportError(N8NError):
    """Raised when the transport fails to produce an HTTP response."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)
