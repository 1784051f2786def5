"""Sensu event models and intake."""

from src.sensu.exceptions import EventParseError, EventValidationError, SensuEventError
from src.sensu.reader import parse_event, read_event, validate_event
from src.sensu.types import Check, Entity, Event, ObjectMeta, System

__all__ = [
    "Check",
    "Entity",
    "Event",
    "EventParseError",
    "EventValidationError",
    "ObjectMeta",
    "SensuEventError",
    "System",
    "parse_event",
    "read_event",
    "validate_event",
]
