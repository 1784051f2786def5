"""Async client for the OpsGenie v2 alert API (create / get / close)."""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from src.opsgenie.exceptions import (
    OpsgenieApiError,
    OpsgenieConnectionError,
    OpsgenieRateLimitError,
    OpsgenieResponseError,
)
from src.opsgenie.types import (
    Alert,
    CloseAlertRequest,
    CreateAlertRequest,
    IdentifierType,
    RequestResult,
)

logger = structlog.stdlib.get_logger()

API_URL = "https://api.opsgenie.com"
API_URL_EU = "https://api.eu.opsgenie.com"

DEFAULT_TIMEOUT_SECS = 10.0

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def resolve_api_url(region: str, api_url: str = "") -> str:
    """Pick the API base URL.

    An explicit *api_url* wins (``https://`` is prepended when it has no
    scheme). Otherwise region ``eu`` selects the EU instance and anything
    else the US one.
    """
    if api_url:
        if "://" not in api_url:
            api_url = f"https://{api_url}"
        return api_url.rstrip("/")
    if region.lower() == "eu":
        return API_URL_EU
    return API_URL


class OpsgenieClient:
    """Thin async wrapper over the alert endpoints.

    Every call, body included, must finish within the client timeout;
    nothing is retried.

    Usage::

        async with OpsgenieClient(api_key, API_URL) as client:
            result = await client.create_alert(request)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    async def connect(self) -> None:
        """Create the httpx async client."""
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"GenieKey {self._api_key}"},
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the httpx async client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> OpsgenieClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ── Alert endpoints ─────────────────────────────────────────

    async def create_alert(self, request: CreateAlertRequest) -> RequestResult:
        """Create an alert. OpsGenie deduplicates open alerts by alias."""
        body = await self._request("POST", "/v2/alerts", json=request.to_payload())
        return self._parse(RequestResult, body)

    async def get_alert(
        self,
        identifier: str,
        identifier_type: IdentifierType = IdentifierType.ALIAS,
    ) -> Alert:
        """Fetch one alert by id, alias or tiny id."""
        body = await self._request(
            "GET",
            f"/v2/alerts/{quote(identifier, safe='')}",
            params={"identifierType": identifier_type.value},
        )
        data = body.get("data")
        if not isinstance(data, dict):
            raise OpsgenieResponseError("alert response has no data object")
        return self._parse(Alert, data)

    async def close_alert(self, request: CloseAlertRequest) -> RequestResult:
        """Close an alert."""
        body = await self._request(
            "POST",
            f"/v2/alerts/{quote(request.identifier, safe='')}/close",
            params={"identifierType": request.identifier_type.value},
            json=request.to_payload(),
        )
        return self._parse(RequestResult, body)

    # ── Internal ────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if self._http is None:
            raise OpsgenieConnectionError("HTTP client not connected")

        try:
            async with asyncio.timeout(self._timeout):
                response = await self._http.request(
                    method, path, params=params, json=json
                )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = _error_message(exc.response)
            logger.warning("opsgenie_http_error", method=method, path=path, status=status)
            if status == 429:
                raise OpsgenieRateLimitError(message, status_code=status) from exc
            raise OpsgenieApiError(message, status_code=status) from exc
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise OpsgenieConnectionError(
                f"OpsGenie request timed out after {self._timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise OpsgenieConnectionError(f"OpsGenie request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise OpsgenieResponseError("OpsGenie returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise OpsgenieResponseError("OpsGenie returned a non-object body")
        return body

    @staticmethod
    def _parse(model: type[_ModelT], data: dict[str, Any]) -> _ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise OpsgenieResponseError(f"unexpected response shape: {exc}") from exc


def _error_message(response: httpx.Response) -> str:
    """Extract the API error text, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return f"{body['message']} (status {response.status_code})"
    return f"OpsGenie API returned {response.status_code}: {response.text[:200]}"
