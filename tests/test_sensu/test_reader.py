"""Tests for Sensu event intake — parsing, null handling, validation."""

from __future__ import annotations

import io
import json
from typing import Any, Callable

import pytest

from src.sensu.exceptions import EventParseError, EventValidationError
from src.sensu.reader import parse_event, read_event, validate_event
from src.sensu.types import Event

PayloadFactory = Callable[..., dict[str, Any]]


# ── parse_event ─────────────────────────────────────────────────


class TestParseEvent:
    def test_parse_json_text(self, make_payload: PayloadFactory) -> None:
        event = parse_event(json.dumps(make_payload("web01", "http", status=2)))
        assert event.entity.name == "web01"
        assert event.check.name == "http"
        assert event.check.status == 2
        assert event.entity.system.arch == "amd64"

    def test_parse_bytes(self, make_payload: PayloadFactory) -> None:
        event = parse_event(json.dumps(make_payload()).encode())
        assert event.entity.name == "entity1"

    def test_parse_dict(self, make_payload: PayloadFactory) -> None:
        event = parse_event(make_payload())
        assert event.check.output == "CPU OK"

    def test_invalid_json(self) -> None:
        with pytest.raises(EventParseError, match="unmarshal"):
            parse_event("{not json")

    def test_non_object_json(self) -> None:
        with pytest.raises(EventParseError, match="object"):
            parse_event("[1, 2, 3]")

    def test_missing_check(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        del payload["check"]
        with pytest.raises(EventParseError, match="schema"):
            parse_event(payload)

    def test_null_entity(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        payload["entity"] = None
        with pytest.raises(EventParseError):
            parse_event(payload)

    def test_wrong_status_type(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        payload["check"]["status"] = "critical"
        with pytest.raises(EventParseError):
            parse_event(payload)

    def test_nulls_fall_back_to_defaults(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        payload["check"]["subscriptions"] = None
        payload["check"]["handlers"] = None
        payload["entity"]["metadata"]["labels"] = None
        event = parse_event(payload)
        assert event.check.subscriptions == []
        assert event.check.handlers == []
        assert event.entity.labels == {}

    def test_unknown_fields_preserved(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        payload["check"]["executed"] = 1700000000
        payload["metrics"] = {"points": []}
        event = parse_event(payload)
        dumped = json.loads(event.model_dump_json())
        assert dumped["check"]["executed"] == 1700000000
        assert dumped["metrics"] == {"points": []}

    def test_namespace_defaults(self) -> None:
        event = parse_event({
            "entity": {"metadata": {"name": "e"}},
            "check": {"metadata": {"name": "c"}},
        })
        assert event.entity.namespace == "default"
        assert event.check.status == 0
        assert event.is_resolution


# ── Event model ────────────────────────────────────────────────


class TestEventModel:
    def test_convenience_properties(self, make_payload: PayloadFactory) -> None:
        payload = make_payload()
        payload["entity"]["metadata"]["labels"] = {"region": "eu"}
        payload["check"]["metadata"]["annotations"] = {"runbook": "http://wiki"}
        event = Event.model_validate(payload)
        assert event.entity.labels == {"region": "eu"}
        assert event.check.annotations == {"runbook": "http://wiki"}
        assert event.check.namespace == "default"

    def test_is_resolution(self, make_event: Callable[..., Event]) -> None:
        assert make_event(status=0).is_resolution
        assert not make_event(status=1).is_resolution
        assert not make_event(status=2).is_resolution
        assert not make_event(status=127).is_resolution


# ── validate_event ─────────────────────────────────────────────


class TestValidateEvent:
    def test_valid_event(self, make_event: Callable[..., Event]) -> None:
        validate_event(make_event())  # should not raise

    def test_empty_entity_name(self, make_event: Callable[..., Event]) -> None:
        with pytest.raises(EventValidationError, match="entity"):
            validate_event(make_event(entity=""))

    def test_empty_check_name(self, make_event: Callable[..., Event]) -> None:
        with pytest.raises(EventValidationError, match="check"):
            validate_event(make_event(check=""))


# ── read_event ─────────────────────────────────────────────────


class TestReadEvent:
    def test_read_from_stream(self, make_payload: PayloadFactory) -> None:
        stream = io.StringIO(json.dumps(make_payload("db01", "disk", status=1)))
        event = read_event(stream)
        assert event.entity.name == "db01"
        assert event.check.name == "disk"

    def test_empty_stream(self) -> None:
        with pytest.raises(EventParseError, match="no event data"):
            read_event(io.StringIO("  \n"))

    def test_stream_with_unnamed_check(self, make_payload: PayloadFactory) -> None:
        stream = io.StringIO(json.dumps(make_payload(check="")))
        with pytest.raises(EventValidationError):
            read_event(stream)
