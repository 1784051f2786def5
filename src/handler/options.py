"""Handler options — flags, environment variables and annotation overrides.

Every option is declared once in ``OPTIONS``; the argument parser, the
environment lookup and the per-event annotation overrides are all derived
from that table. Later sources win::

    defaults < YAML settings < environment < flags < entity annotations
             < check annotations

Annotation keys live under ``KEYSPACE`` (``<KEYSPACE>/<path>``). Secret
options and the API URL are never read from annotations.
"""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog
from pydantic import ValidationError

from src.core.config import HandlerConfig
from src.handler.exceptions import ConfigurationError
from src.sensu.types import Event

logger = structlog.stdlib.get_logger()

PLUGIN_NAME = "sensu-opsgenie-handler"
PLUGIN_DESCRIPTION = "The Sensu Go OpsGenie handler for incident management"
KEYSPACE = f"sensu.io/plugins/{PLUGIN_NAME}/config"


class OptionKind(StrEnum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    LIST = "list"


@dataclass(frozen=True)
class PluginOption:
    """One configurable handler setting and the places it can come from."""

    field: str
    path: str
    flags: tuple[str, ...]
    usage: str
    env: str = ""
    kind: OptionKind = OptionKind.STRING
    secret: bool = False
    annotatable: bool = True


OPTIONS: tuple[PluginOption, ...] = (
    PluginOption(
        field="api_region",
        path="region",
        flags=("-r", "--region"),
        env="OPSGENIE_REGION",
        usage="The OpsGenie API Region (us or eu)",
    ),
    PluginOption(
        field="api_url",
        path="apiUrl",
        flags=("-U", "--api-url", "--apiUrl"),
        env="OPSGENIE_APIURL",
        annotatable=False,
        usage="The OpsGenie API URL, overrides the region",
    ),
    PluginOption(
        field="auth_token",
        path="auth",
        flags=("-a", "--auth"),
        env="OPSGENIE_AUTHTOKEN",
        secret=True,
        usage="The OpsGenie V2 API authentication token",
    ),
    PluginOption(
        field="team",
        path="team",
        flags=("-t", "--team"),
        env="OPSGENIE_TEAM",
        usage="The OpsGenie V2 API Team",
    ),
    PluginOption(
        field="sensu_dashboard",
        path="sensuDashboard",
        flags=("-s", "--sensu-dashboard", "--sensuDashboard"),
        env="OPSGENIE_SENSU_DASHBOARD",
        usage=(
            "Sensu dashboard base URL used to link the event from the alert. "
            "Example: http://sensu-dashboard.example.local/c/~/n"
        ),
    ),
    PluginOption(
        field="message_template",
        path="messageTemplate",
        flags=("-m", "--message-template", "--messageTemplate"),
        env="OPSGENIE_MESSAGE_TEMPLATE",
        usage="The template for the message to be sent",
    ),
    PluginOption(
        field="message_limit",
        path="messageLimit",
        flags=("-l", "--message-limit", "--messageLimit"),
        env="OPSGENIE_MESSAGE_LIMIT",
        kind=OptionKind.INT,
        usage="The maximum length of the message field, in bytes",
    ),
    PluginOption(
        field="description_template",
        path="descriptionTemplate",
        flags=("-d", "--description-template", "--descriptionTemplate"),
        env="OPSGENIE_DESCRIPTION_TEMPLATE",
        usage="The template for the description to be sent",
    ),
    PluginOption(
        field="description_limit",
        path="descriptionLimit",
        flags=("-L", "--description-limit", "--descriptionLimit"),
        env="OPSGENIE_DESCRIPTION_LIMIT",
        kind=OptionKind.INT,
        usage="The maximum length of the description field, in bytes",
    ),
    PluginOption(
        field="include_event_in_note",
        path="includeEventInNote",
        flags=("-i", "--include-event-in-note", "--includeEventInNote"),
        kind=OptionKind.BOOL,
        usage="Include the event JSON in the note of the created alert",
    ),
    PluginOption(
        field="priority",
        path="priority",
        flags=("-p", "--priority"),
        env="OPSGENIE_PRIORITY",
        usage="The OpsGenie Alert Priority (P1-P5)",
    ),
    PluginOption(
        field="priority_policy",
        path="priorityPolicy",
        flags=("--priority-policy",),
        env="OPSGENIE_PRIORITY_POLICY",
        usage=(
            "Where the priority comes from: 'config' (the priority option) "
            "or 'annotation' (the opsgenie_priority event annotation)"
        ),
    ),
    PluginOption(
        field="actions",
        path="actions",
        flags=("-A", "--actions"),
        kind=OptionKind.LIST,
        usage="An OpsGenie custom action to assign to the alert (repeatable)",
    ),
    PluginOption(
        field="with_annotations",
        path="withAnnotations",
        flags=("-w", "--with-annotations", "--withAnnotations"),
        kind=OptionKind.BOOL,
        usage="Include the event annotations in the alert details",
    ),
    PluginOption(
        field="with_labels",
        path="withLabels",
        flags=("-W", "--with-labels", "--withLabels"),
        kind=OptionKind.BOOL,
        usage="Include the event labels in the alert details",
    ),
    PluginOption(
        field="full_details",
        path="fullDetails",
        flags=("-F", "--full-details", "--fullDetails"),
        kind=OptionKind.BOOL,
        usage=(
            "Include more details in the alert: ttl, interval, subscriptions, "
            "handlers and agent arch/os/platform"
        ),
    ),
    PluginOption(
        field="tag_templates",
        path="tagTemplate",
        flags=("-T", "--tag-template", "--tagTemplate"),
        kind=OptionKind.LIST,
        usage="A template for one alert tag (repeatable)",
    ),
)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for every option plus the run-level flags."""
    parser = argparse.ArgumentParser(prog=PLUGIN_NAME, description=PLUGIN_DESCRIPTION)
    for opt in OPTIONS:
        help_text = f"{opt.usage} (env: {opt.env})" if opt.env else opt.usage
        if opt.kind == OptionKind.BOOL:
            parser.add_argument(
                *opt.flags, dest=opt.field, action="store_true", default=None,
                help=help_text,
            )
        elif opt.kind == OptionKind.LIST:
            parser.add_argument(
                *opt.flags, dest=opt.field, action="append", default=None,
                help=help_text,
            )
        elif opt.kind == OptionKind.INT:
            parser.add_argument(
                *opt.flags, dest=opt.field, type=int, default=None, help=help_text,
            )
        else:
            parser.add_argument(*opt.flags, dest=opt.field, default=None, help=help_text)

    parser.add_argument(
        "--config", default=None, help="Path to a YAML settings file",
    )
    parser.add_argument(
        "--event-file", default=None,
        help="Read the event from this file instead of standard input",
    )
    parser.add_argument(
        "--log-level", default=None, help="Override log level (DEBUG, INFO, ...)",
    )
    parser.add_argument(
        "--log-format", default=None, choices=["json", "console"],
        help="Override log renderer",
    )
    return parser


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Option values set through environment variables."""
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for opt in OPTIONS:
        if opt.env and env.get(opt.env):
            values[opt.field] = env[opt.env]
    return values


def flag_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Option values given explicitly on the command line."""
    values: dict[str, Any] = {}
    for opt in OPTIONS:
        value = getattr(args, opt.field, None)
        if value is not None:
            values[opt.field] = value
    return values


def _annotation_value(opt: PluginOption, raw: str) -> Any:
    if opt.kind != OptionKind.LIST:
        return raw
    if raw.lstrip().startswith("["):
        try:
            parsed = json.loads(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"annotation {KEYSPACE}/{opt.path} is not a valid JSON list"
            ) from exc
        if not isinstance(parsed, list):
            raise ConfigurationError(f"annotation {KEYSPACE}/{opt.path} must be a list")
        return [str(item) for item in parsed]
    return [raw]


def annotation_overrides(event: Event) -> dict[str, Any]:
    """Option values carried by the event's entity and check annotations.

    Check annotations are applied after entity annotations and so win.
    """
    values: dict[str, Any] = {}
    for annotations in (event.entity.annotations, event.check.annotations):
        for opt in OPTIONS:
            if opt.secret or not opt.annotatable:
                continue
            raw = annotations.get(f"{KEYSPACE}/{opt.path}")
            if raw is not None:
                values[opt.field] = _annotation_value(opt, raw)
    if values:
        logger.debug("annotation_overrides", options=sorted(values))
    return values


def resolve_config(
    args: argparse.Namespace,
    event: Event,
    base: HandlerConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> HandlerConfig:
    """Merge every configuration source into one immutable HandlerConfig.

    Raises:
        ConfigurationError: a supplied value has the wrong type or is invalid.
    """
    data: dict[str, Any] = (base or HandlerConfig()).model_dump()
    data.update(env_overrides(environ))
    data.update(flag_overrides(args))
    data.update(annotation_overrides(event))
    try:
        return HandlerConfig(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid handler configuration: {exc}") from exc


def check_args(config: HandlerConfig) -> None:
    """Fail before any network call when credentials or team are missing."""
    if not config.auth_token.get_secret_value():
        raise ConfigurationError("authentication token is empty")
    if not config.team:
        raise ConfigurationError("team is empty")
