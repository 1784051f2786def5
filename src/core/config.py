"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

DEFAULT_MESSAGE_TEMPLATE = "{{ entity.name }}/{{ check.name }}"
DEFAULT_DESCRIPTION_TEMPLATE = "{{ check.output }}"
DEFAULT_TAG_TEMPLATES = [
    "{{ entity.name }}",
    "{{ check.name }}",
    "{{ entity.namespace }}",
    "{{ entity.entity_class }}",
]


class PriorityPolicy(StrEnum):
    """Where the alert priority is read from."""

    CONFIG = "config"
    ANNOTATION = "annotation"  # legacy: per-event opsgenie_priority annotation


class HandlerConfig(BaseModel):
    """OpsGenie handler configuration — immutable for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    api_region: str = "us"
    api_url: str = ""
    auth_token: SecretStr = SecretStr("")
    team: str = ""
    sensu_dashboard: str = ""
    message_template: str = DEFAULT_MESSAGE_TEMPLATE
    message_limit: int = 130
    description_template: str = DEFAULT_DESCRIPTION_TEMPLATE
    description_limit: int = 15000
    include_event_in_note: bool = False
    priority: str = "P3"
    priority_policy: PriorityPolicy = PriorityPolicy.CONFIG
    actions: list[str] = Field(default_factory=list)
    with_annotations: bool = False
    with_labels: bool = False
    full_details: bool = False
    tag_templates: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TAG_TEMPLATES),
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """Root settings container."""

    handler: HandlerConfig = HandlerConfig()
    logging: LoggingConfig = LoggingConfig()


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file.

    A missing path (or file) yields the defaults. The result is returned to
    the caller rather than cached, so each run builds its own value.

    Args:
        path: Path to YAML config.

    Returns:
        Parsed Settings instance.
    """
    data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if config_path.exists():
            with open(config_path) as f:
                raw = yaml.safe_load(f)
                if isinstance(raw, dict):
                    data = raw

    return Settings(**data)
