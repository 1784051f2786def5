"""Handler entrypoint — one event in, at most one alert change out.

Usage::

    # Event JSON on stdin, credentials from the environment
    OPSGENIE_AUTHTOKEN=... OPSGENIE_TEAM=ops sensu-opsgenie-handler

    # Options on the command line, settings file for the rest
    sensu-opsgenie-handler --team ops --priority P2 --config handler.yaml

Exit status is 0 on success (including a failed auto-close) and 1 when the
event cannot be read, the configuration is invalid or the alert could not
be created.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Mapping
from typing import IO

import httpx
import structlog
import yaml
from pydantic import ValidationError

from src.core.config import HandlerConfig, load_settings
from src.core.logging import setup_logging
from src.handler.exceptions import ConfigurationError, HandlerError
from src.handler.options import build_parser, check_args, resolve_config
from src.handler.synchronizer import AlertSynchronizer, SyncAction, SyncResult
from src.opsgenie.client import OpsgenieClient, resolve_api_url
from src.opsgenie.exceptions import OpsgenieError
from src.sensu.exceptions import SensuEventError
from src.sensu.reader import read_event
from src.sensu.types import Event

logger = structlog.get_logger(__name__)


async def execute_handler(
    event: Event,
    config: HandlerConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SyncResult:
    """Synchronize *event* with OpsGenie using a client built from *config*."""
    base_url = resolve_api_url(config.api_region, config.api_url)
    client = OpsgenieClient(
        api_key=config.auth_token.get_secret_value(),
        base_url=base_url,
        transport=transport,
    )
    async with client:
        return await AlertSynchronizer(client, config).sync(event)


def report(result: SyncResult, out: IO[str] | None = None) -> None:
    """Print the human-readable status line for a sync result."""
    stream = out or sys.stdout
    if result.action == SyncAction.CREATED:
        print(f"Create request ID: {result.request_id}", file=stream)
    elif result.action == SyncAction.CLOSED:
        print(
            f"Close request ID: {result.request_id} for alert {result.alert_id}",
            file=stream,
        )
    elif result.action == SyncAction.CLOSE_FAILED:
        print(f"[ERROR] Not Closed: {result.error}", file=stream)


async def run(
    args: argparse.Namespace,
    stdin: IO[str] | None = None,
    environ: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Read, validate and forward one event. Returns the exit status."""
    try:
        settings = load_settings(args.config)
    except (ValidationError, yaml.YAMLError, OSError) as exc:
        setup_logging(level=args.log_level, fmt=args.log_format)
        logger.error("settings_invalid", path=args.config, error=str(exc))
        print(f"error validating input: {exc}", file=sys.stderr)
        return 1
    setup_logging(settings.logging, level=args.log_level, fmt=args.log_format)

    try:
        if args.event_file:
            with open(args.event_file, encoding="utf-8") as f:
                event = read_event(f)
        else:
            event = read_event(stdin or sys.stdin)
    except (SensuEventError, OSError, UnicodeDecodeError) as exc:
        logger.error("event_read_failed", error=str(exc))
        print(f"error reading event: {exc}", file=sys.stderr)
        return 1

    try:
        config = resolve_config(args, event, base=settings.handler, environ=environ)
        check_args(config)
    except ConfigurationError as exc:
        logger.error("config_invalid", error=str(exc))
        print(f"error validating input: {exc}", file=sys.stderr)
        return 1

    try:
        result = await execute_handler(event, config, transport=transport)
    except (OpsgenieError, HandlerError) as exc:
        logger.error("handler_failed", error=str(exc))
        print(f"error executing handler: {exc}", file=sys.stderr)
        return 1

    report(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
