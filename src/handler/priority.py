"""Alert priority resolution.

Two mutually exclusive policies, chosen by ``HandlerConfig.priority_policy``:

- ``config`` (default): the configured ``priority`` value.
- ``annotation`` (legacy): the ``opsgenie_priority`` annotation on the event,
  check annotation taking precedence over the entity one, falling back to
  the configured value when neither carries it.
"""

from __future__ import annotations

from src.core.config import HandlerConfig, PriorityPolicy
from src.opsgenie.types import Priority
from src.sensu.types import Event

DEFAULT_PRIORITY = Priority.P3
PRIORITY_ANNOTATION = "opsgenie_priority"

_PRIORITIES: dict[str, Priority] = {p.value: p for p in Priority}


def resolve_priority(value: str) -> Priority:
    """Map "P1".."P5" to a Priority; anything else is the default (P3)."""
    return _PRIORITIES.get(value, DEFAULT_PRIORITY)


def annotation_priority(event: Event) -> str | None:
    """Raw priority annotation, check level overriding entity level."""
    for annotations in (event.check.annotations, event.entity.annotations):
        value = annotations.get(PRIORITY_ANNOTATION)
        if value:
            return value
    return None


def event_priority(event: Event, config: HandlerConfig) -> Priority:
    """Priority for the alert created from *event*."""
    if config.priority_policy == PriorityPolicy.ANNOTATION:
        value = annotation_priority(event)
        if value is not None:
            return resolve_priority(value)
    return resolve_priority(config.priority)
