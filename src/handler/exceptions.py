"""Exception hierarchy for the OpsGenie handler."""

from __future__ import annotations


class HandlerError(Exception):
    """Base exception for all handler errors."""


class ConfigurationError(HandlerError):
    """Missing credentials or an option value that cannot be used."""


class NoteSerializationError(HandlerError):
    """The event could not be rendered into the alert note."""
