"""Alert synchronizer — mirrors one event's state into OpsGenie.

- status != 0 → create (always; OpsGenie deduplicates by alias).
- status == 0 → look the alert up by alias; close it when found, else no-op.

Create failures propagate to the caller. Lookup failures count as "not
found". Close failures are logged and reported in the result only.
"""

from __future__ import annotations

from enum import StrEnum

import structlog
from pydantic import BaseModel

from src.core.config import HandlerConfig
from src.handler.mapper import (
    build_alias,
    build_description,
    build_details,
    build_note,
    parse_event_key_tags,
)
from src.handler.priority import event_priority
from src.opsgenie.client import OpsgenieClient
from src.opsgenie.exceptions import OpsgenieError
from src.opsgenie.types import (
    CloseAlertRequest,
    CreateAlertRequest,
    IdentifierType,
    Responder,
    ResponderType,
)
from src.sensu.types import Event

logger = structlog.get_logger(__name__)

SOURCE = "Sensu Go"
CLOSE_NOTE = "Closed Automatically"


class SyncAction(StrEnum):
    CREATED = "created"
    CLOSED = "closed"
    CLOSE_FAILED = "close_failed"
    SKIPPED = "skipped"


class SyncResult(BaseModel):
    """What the synchronizer did for one event."""

    action: SyncAction
    alias: str
    request_id: str = ""
    alert_id: str = ""
    error: str = ""


def team_responders(team: str) -> list[Responder]:
    """Escalation and schedule responders, both naming *team*.

    OpsGenie resolves each responder type separately; keep both entries.
    """
    return [
        Responder(type=ResponderType.ESCALATION, name=team),
        Responder(type=ResponderType.SCHEDULE, name=team),
    ]


def build_create_request(event: Event, config: HandlerConfig) -> CreateAlertRequest:
    """Assemble the alert-create request for a problem event."""
    note = build_note(event) if config.include_event_in_note else ""
    title, alias, tags = parse_event_key_tags(event, config)
    return CreateAlertRequest(
        message=title,
        alias=alias,
        description=build_description(event, config),
        responders=team_responders(config.team),
        actions=list(config.actions),
        tags=tags,
        details=build_details(event, config),
        entity=event.entity.name,
        source=SOURCE,
        priority=event_priority(event, config),
        note=note,
    )


class AlertSynchronizer:
    """Creates or closes the OpsGenie alert matching an event."""

    def __init__(self, client: OpsgenieClient, config: HandlerConfig) -> None:
        self._client = client
        self._config = config

    async def sync(self, event: Event) -> SyncResult:
        if not event.is_resolution:
            return await self.create_alert(event)

        alias = build_alias(event)
        alert_id = await self.lookup_alert(alias)
        if alert_id is None:
            logger.info("alert_not_found", alias=alias)
            return SyncResult(action=SyncAction.SKIPPED, alias=alias)
        return await self.close_alert(alias, alert_id)

    async def create_alert(self, event: Event) -> SyncResult:
        """Create an alert for a problem event.

        Raises:
            OpsgenieError: the create call failed.
            NoteSerializationError: the event note could not be built.
        """
        request = build_create_request(event, self._config)
        try:
            result = await self._client.create_alert(request)
        except OpsgenieError as exc:
            logger.error("alert_create_failed", alias=request.alias, error=str(exc))
            raise

        logger.info(
            "alert_created",
            alias=request.alias,
            priority=request.priority.value,
            request_id=result.request_id,
        )
        return SyncResult(
            action=SyncAction.CREATED,
            alias=request.alias,
            request_id=result.request_id,
        )

    async def lookup_alert(self, alias: str) -> str | None:
        """Return the alert id for *alias*, or None if it cannot be found."""
        try:
            alert = await self._client.get_alert(alias, IdentifierType.ALIAS)
        except OpsgenieError as exc:
            logger.info("alert_lookup_failed", alias=alias, error=str(exc))
            return None

        logger.info(
            "alert_found",
            alias=alias,
            alert_id=alert.id,
            message=alert.message,
            count=alert.count,
        )
        return alert.id

    async def close_alert(self, alias: str, alert_id: str) -> SyncResult:
        request = CloseAlertRequest(
            identifier=alert_id,
            identifier_type=IdentifierType.ID,
            source=SOURCE,
            note=CLOSE_NOTE,
        )
        try:
            result = await self._client.close_alert(request)
        except OpsgenieError as exc:
            logger.error("alert_close_failed", alias=alias, alert_id=alert_id, error=str(exc))
            return SyncResult(
                action=SyncAction.CLOSE_FAILED,
                alias=alias,
                alert_id=alert_id,
                error=str(exc),
            )

        logger.info("alert_closed", alias=alias, alert_id=alert_id, request_id=result.request_id)
        return SyncResult(
            action=SyncAction.CLOSED,
            alias=alias,
            alert_id=alert_id,
            request_id=result.request_id,
        )
