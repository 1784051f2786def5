"""Event intake — parse and validate the event JSON from the pipeline."""

from __future__ import annotations

import json
from typing import IO, Any

import structlog
from pydantic import ValidationError

from src.sensu.exceptions import EventParseError, EventValidationError
from src.sensu.types import Event

logger = structlog.stdlib.get_logger()


def parse_event(raw: str | bytes | dict[str, Any]) -> Event:
    """Parse a raw event payload (JSON text or decoded dict) into an Event."""
    if isinstance(raw, dict):
        data: Any = raw
    else:
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise EventParseError(f"failed to unmarshal event JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise EventParseError("event JSON must be an object")

    try:
        return Event.model_validate(data)
    except ValidationError as exc:
        raise EventParseError(f"event does not match schema: {exc}") from exc


def validate_event(event: Event) -> None:
    """Reject events that cannot be correlated to an alert.

    Raises:
        EventValidationError: entity or check has no name.
    """
    if not event.entity.name:
        raise EventValidationError("entity name must not be empty")
    if not event.check.name:
        raise EventValidationError("check name must not be empty")


def read_event(stream: IO[str]) -> Event:
    """Read the whole stream, parse it and validate the result."""
    raw = stream.read()
    if not raw.strip():
        raise EventParseError("no event data on input")

    event = parse_event(raw)
    validate_event(event)
    logger.debug(
        "event_read",
        entity=event.entity.name,
        check=event.check.name,
        status=event.check.status,
    )
    return event
