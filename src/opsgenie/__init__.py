"""OpsGenie v2 alert API client."""

from src.opsgenie.client import API_URL, API_URL_EU, OpsgenieClient, resolve_api_url
from src.opsgenie.exceptions import (
    OpsgenieApiError,
    OpsgenieConnectionError,
    OpsgenieError,
    OpsgenieRateLimitError,
    OpsgenieResponseError,
)
from src.opsgenie.types import (
    Alert,
    CloseAlertRequest,
    CreateAlertRequest,
    IdentifierType,
    Priority,
    RequestResult,
    Responder,
    ResponderType,
)

__all__ = [
    "API_URL",
    "API_URL_EU",
    "Alert",
    "CloseAlertRequest",
    "CreateAlertRequest",
    "IdentifierType",
    "OpsgenieApiError",
    "OpsgenieClient",
    "OpsgenieConnectionError",
    "OpsgenieError",
    "OpsgenieRateLimitError",
    "OpsgenieResponseError",
    "Priority",
    "RequestResult",
    "Responder",
    "ResponderType",
    "resolve_api_url",
]
