"""Typed view of the Sensu Go event JSON handed to handlers on stdin."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _SensuModel(BaseModel):
    """Keeps unknown fields and treats JSON nulls as "use the default"."""

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ObjectMeta(_SensuModel):
    """Name, namespace, labels and annotations shared by entities and checks."""

    name: str = ""
    namespace: str = "default"
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class System(_SensuModel):
    """Host facts reported by an agent entity."""

    hostname: str = ""
    os: str = ""
    platform: str = ""
    platform_family: str = ""
    platform_version: str = ""
    arch: str = ""


class _Resource(_SensuModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations


class Entity(_Resource):
    """The monitored resource (host, service) that produced the check result."""

    entity_class: str = ""
    system: System = Field(default_factory=System)
    subscriptions: list[str] = Field(default_factory=list)


class Check(_Resource):
    """A single check execution result."""

    command: str = ""
    output: str = ""
    state: str = ""
    status: int = 0
    ttl: int = 0
    interval: int = 0
    occurrences: int = 0
    occurrences_watermark: int = 0
    proxy_entity_name: str = ""
    subscriptions: list[str] = Field(default_factory=list)
    handlers: list[str] = Field(default_factory=list)


class Event(_SensuModel):
    """A Sensu event: one check result for one entity."""

    entity: Entity
    check: Check
    timestamp: int = 0
    id: str = ""

    @property
    def is_resolution(self) -> bool:
        """True when the check reports OK (status 0)."""
        return self.check.status == 0
