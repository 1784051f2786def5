"""Exception hierarchy for Sensu event intake."""

from __future__ import annotations


class SensuEventError(Exception):
    """Base exception for all event intake errors."""


class EventParseError(SensuEventError):
    """The event payload is not valid JSON or does not match the schema."""


class EventValidationError(SensuEventError):
    """The event parsed but lacks a named entity or check."""
