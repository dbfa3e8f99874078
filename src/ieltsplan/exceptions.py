"""Custom exception hierarchy for ieltsplan."""

from __future__ import annotations


class IeltsPlanError(Exception):
    """Base exception for all ieltsplan errors."""


class ConfigError(IeltsPlanError):
    """Invalid or missing configuration."""


class InvalidRequestError(IeltsPlanError):
    """Malformed request (bad JSON, non-object body, wrong method)."""

    def __init__(self, message: str, *, status: int = 400) -> None:
        self.status = status
        super().__init__(message)


class InvalidPayloadError(InvalidRequestError):
    """Well-formed JSON object that matches no known region shape.

    The message is deliberately generic so callers learn nothing about
    the shape-matching rules.
    """

    def __init__(self, message: str = "Invalid data format") -> None:
        super().__init__(message, status=400)


class StorageUnavailableError(IeltsPlanError):
    """Key-value backend read/write failure or timeout."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class UpstreamError(IeltsPlanError):
    """Completion upstream returned an error or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class SyncClientError(IeltsPlanError):
    """Sync endpoint returned a non-200 response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class SyncRejectedError(SyncClientError):
    """Sync endpoint rejected the payload (HTTP 400).

    Local state should be kept; the server does not reflect it.
    """


class SyncServerError(SyncClientError):
    """Sync endpoint failed to persist (HTTP 5xx) or was unreachable."""
