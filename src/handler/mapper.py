"""Pure functions that map a Sensu event onto OpsGenie alert fields."""

from __future__ import annotations

from pydantic_core import PydanticSerializationError

from src.core.config import HandlerConfig
from src.handler.exceptions import NoteSerializationError
from src.handler.options import KEYSPACE
from src.handler.templates import render_template
from src.sensu.types import Event

NOTE_HEADER = "Event data update:\n\n"


def trim(s: str, n: int) -> str:
    """Return the first *n* bytes of *s* (UTF-8), or *s* when it fits.

    A multi-byte character cut by the limit is dropped whole: a ``str``
    cannot hold part of a character, so the result may be a few bytes
    shorter than *n* but is always valid text.
    """
    raw = s.encode("utf-8")
    if len(raw) <= n:
        return s
    return raw[: max(n, 0)].decode("utf-8", errors="ignore")


def build_alias(event: Event) -> str:
    """Correlation key shared by a problem alert and its later resolution."""
    return f"{event.entity.name}/{event.check.name}"


def build_title(event: Event, config: HandlerConfig) -> str:
    result = render_template("title", config.message_template, event)
    return trim(result.unwrap_or(""), config.message_limit)


def build_tags(event: Event, config: HandlerConfig) -> list[str]:
    """One tag per tag template; a single failing template empties the list."""
    tags: list[str] = []
    for source in config.tag_templates:
        result = render_template("tags", source, event)
        if not result.ok:
            return []
        tags.append(result.unwrap_or(""))
    return tags


def parse_event_key_tags(
    event: Event, config: HandlerConfig
) -> tuple[str, str, list[str]]:
    """Return (title, alias, tags) for an event."""
    return build_title(event, config), build_alias(event), build_tags(event, config)


def build_description(event: Event, config: HandlerConfig) -> str:
    result = render_template("description", config.description_template, event)
    # Literal "\n" sequences in the template output become real newlines.
    description = result.unwrap_or("").replace("\\n", "\n")
    return trim(description, config.description_limit)


def _list_value(items: list[str]) -> str:
    return "[" + " ".join(items) + "]"


def build_details(event: Event, config: HandlerConfig) -> dict[str, str]:
    """Build the alert's key/value details from check and entity data.

    Base check fields are always present; extended fields, annotations,
    labels and the dashboard link are controlled by config toggles.
    """
    check = event.check
    entity = event.entity

    details: dict[str, str] = {
        "output": check.output,
        "command": check.command,
        "proxy_entity_name": check.proxy_entity_name,
        "state": check.state,
        "status": str(check.status),
        "occurrences": str(check.occurrences),
        "occurrences_watermark": str(check.occurrences_watermark),
    }

    if config.full_details:
        details["ttl"] = str(check.ttl)
        details["interval"] = str(check.interval)
        details["subscriptions"] = _list_value(check.subscriptions)
        details["handlers"] = _list_value(check.handlers)

        if entity.entity_class == "agent":
            details["arch"] = entity.system.arch
            details["os"] = entity.system.os
            details["platform"] = entity.system.platform
            details["platform_family"] = entity.system.platform_family
            details["platform_version"] = entity.system.platform_version

    if config.with_annotations:
        for scope, annotations in (
            ("check", check.annotations),
            ("entity", entity.annotations),
        ):
            for key in sorted(annotations):
                # Handler configuration overrides stay out of the alert.
                if KEYSPACE in key:
                    continue
                details[f"{scope}_annotation_{key}"] = annotations[key]

    if config.with_labels:
        for scope, labels in (("check", check.labels), ("entity", entity.labels)):
            for key in sorted(labels):
                details[f"{scope}_label_{key}"] = labels[key]

    if config.sensu_dashboard:
        details["sensuDashboard"] = (
            f"source: {config.sensu_dashboard}/{entity.namespace}"
            f"/events/{entity.name}/{check.name} \n"
        )

    return details


def build_note(event: Event) -> str:
    """Full event as JSON under a fixed header, for reading in the alert UI."""
    try:
        event_json = event.model_dump_json()
    except PydanticSerializationError as exc:
        raise NoteSerializationError(f"failed to serialize event: {exc}") from exc
    return NOTE_HEADER + event_json
