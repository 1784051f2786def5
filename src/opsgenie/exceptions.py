"""Exception hierarchy for the OpsGenie alert API client."""

from __future__ import annotations


class OpsgenieError(Exception):
    """Base exception for all OpsGenie client errors."""


class OpsgenieConnectionError(OpsgenieError):
    """Request could not be completed (network failure or timeout)."""


class OpsgenieApiError(OpsgenieError):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code


class OpsgenieRateLimitError(OpsgenieApiError):
    """Rate limited by the API (HTTP 429)."""


class OpsgenieResponseError(OpsgenieError):
    """The API answered with a body that could not be parsed."""
