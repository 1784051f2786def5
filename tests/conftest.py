"""Shared fixtures — Sensu events shaped like the ones handlers receive."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from src.sensu.types import Event

EventFactory = Callable[..., Event]


def event_payload(
    entity: str = "entity1",
    check: str = "check1",
    status: int = 0,
    **check_fields: Any,
) -> dict[str, Any]:
    """Raw event JSON (as a dict) for an agent entity and one check."""
    check_data: dict[str, Any] = {
        "metadata": {"name": check, "namespace": "default"},
        "command": "check-cpu.sh -w 75 -c 90",
        "output": "CPU OK",
        "state": "passing",
        "status": status,
        "interval": 60,
        "ttl": 0,
        "occurrences": 1,
        "occurrences_watermark": 1,
        "proxy_entity_name": "",
        "subscriptions": ["linux"],
        "handlers": ["opsgenie"],
    }
    check_data.update(check_fields)
    return {
        "entity": {
            "metadata": {"name": entity, "namespace": "default"},
            "entity_class": "agent",
            "subscriptions": ["linux", f"entity:{entity}"],
            "system": {
                "hostname": entity,
                "os": "linux",
                "platform": "ubuntu",
                "platform_family": "debian",
                "platform_version": "22.04",
                "arch": "amd64",
            },
        },
        "check": check_data,
        "timestamp": 1700000000,
        "id": "3a5a2b4c-3f1e-4c2b-9c39-6b0d6d2f0a11",
    }


@pytest.fixture
def make_event() -> EventFactory:
    """Factory building validated Event models from event_payload()."""

    def _make(
        entity: str = "entity1",
        check: str = "check1",
        status: int = 0,
        **check_fields: Any,
    ) -> Event:
        return Event.model_validate(event_payload(entity, check, status, **check_fields))

    return _make


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw event dicts, for tests that go through JSON parsing."""
    return event_payload
