"""Sensu → OpsGenie handler: event mapping, priority and alert sync."""

from src.handler.exceptions import ConfigurationError, HandlerError, NoteSerializationError
from src.handler.mapper import (
    build_alias,
    build_description,
    build_details,
    build_note,
    build_tags,
    build_title,
    parse_event_key_tags,
    trim,
)
from src.handler.options import (
    KEYSPACE,
    OPTIONS,
    PLUGIN_NAME,
    build_parser,
    check_args,
    resolve_config,
)
from src.handler.priority import event_priority, resolve_priority
from src.handler.synchronizer import AlertSynchronizer, SyncAction, SyncResult
from src.handler.templates import TemplateResult, render_template

__all__ = [
    "AlertSynchronizer",
    "ConfigurationError",
    "HandlerError",
    "KEYSPACE",
    "NoteSerializationError",
    "OPTIONS",
    "PLUGIN_NAME",
    "SyncAction",
    "SyncResult",
    "TemplateResult",
    "build_alias",
    "build_description",
    "build_details",
    "build_note",
    "build_parser",
    "build_tags",
    "build_title",
    "check_args",
    "event_priority",
    "parse_event_key_tags",
    "render_template",
    "resolve_config",
    "resolve_priority",
    "trim",
]
