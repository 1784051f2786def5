"""Tests for src/core/config.py — YAML loading, defaults, SecretStr, immutability."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.core.config import (
    DEFAULT_TAG_TEMPLATES,
    HandlerConfig,
    LoggingConfig,
    PriorityPolicy,
    Settings,
    load_settings,
)


class TestDefaults:
    """Settings should have sensible defaults when no YAML is provided."""

    def test_default_handler_config(self) -> None:
        cfg = HandlerConfig()
        assert cfg.api_region == "us"
        assert cfg.api_url == ""
        assert cfg.auth_token.get_secret_value() == ""
        assert cfg.team == ""
        assert cfg.message_limit == 130
        assert cfg.description_limit == 15000
        assert cfg.priority == "P3"
        assert cfg.priority_policy == PriorityPolicy.CONFIG
        assert cfg.actions == []
        assert not cfg.include_event_in_note
        assert not cfg.full_details
        assert not cfg.with_annotations
        assert not cfg.with_labels

    def test_default_templates(self) -> None:
        cfg = HandlerConfig()
        assert cfg.message_template == "{{ entity.name }}/{{ check.name }}"
        assert cfg.description_template == "{{ check.output }}"
        assert cfg.tag_templates == DEFAULT_TAG_TEMPLATES
        assert len(cfg.tag_templates) == 4

    def test_tag_templates_not_shared_between_instances(self) -> None:
        a = HandlerConfig()
        b = HandlerConfig()
        assert a.tag_templates is not b.tag_templates
        assert a.tag_templates is not DEFAULT_TAG_TEMPLATES

    def test_default_logging_config(self) -> None:
        cfg = LoggingConfig()
        assert cfg.level == "INFO"
        assert cfg.format == "json"

    def test_default_settings(self) -> None:
        s = Settings()
        assert s.handler.message_limit == 130
        assert s.logging.level == "INFO"


class TestYamlLoading:
    """Settings should load correctly from YAML files."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        config_data = {
            "handler": {
                "api_region": "eu",
                "auth_token": "test-token",
                "team": "ops",
                "priority": "P1",
                "priority_policy": "annotation",
                "message_limit": 80,
                "actions": ["ping", "restart"],
                "full_details": True,
            },
            "logging": {
                "level": "DEBUG",
                "format": "console",
            },
        }
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(config_data))

        settings = load_settings(config_file)

        assert settings.handler.api_region == "eu"
        assert settings.handler.auth_token.get_secret_value() == "test-token"
        assert settings.handler.team == "ops"
        assert settings.handler.priority == "P1"
        assert settings.handler.priority_policy == PriorityPolicy.ANNOTATION
        assert settings.handler.message_limit == 80
        assert settings.handler.actions == ["ping", "restart"]
        assert settings.handler.full_details is True
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "console"

    def test_load_without_path_uses_defaults(self) -> None:
        settings = load_settings()
        assert settings.handler.message_limit == 130

    def test_load_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.handler.description_limit == 15000

    def test_load_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        settings = load_settings(config_file)
        assert settings.handler.priority == "P3"

    def test_partial_yaml_merges_with_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump({"handler": {"team": "db"}}))

        settings = load_settings(config_file)
        assert settings.handler.team == "db"
        # Other defaults still intact
        assert settings.handler.message_limit == 130
        assert settings.logging.format == "json"

    def test_each_load_returns_fresh_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump({"handler": {"team": "db"}}))
        assert load_settings(config_file) is not load_settings(config_file)

    def test_invalid_priority_policy_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump({"handler": {"priority_policy": "dice"}}))
        with pytest.raises(ValidationError):
            load_settings(config_file)


class TestSecretStr:
    """The auth token should use SecretStr to prevent leaking."""

    def test_secret_str_repr_does_not_leak(self) -> None:
        cfg = HandlerConfig(auth_token="super-secret")  # type: ignore[arg-type]
        repr_str = repr(cfg)
        assert "super-secret" not in repr_str
        assert "**********" in repr_str

    def test_secret_str_get_value(self) -> None:
        cfg = HandlerConfig(auth_token="my-secret")  # type: ignore[arg-type]
        assert cfg.auth_token.get_secret_value() == "my-secret"


class TestImmutability:
    def test_handler_config_is_frozen(self) -> None:
        cfg = HandlerConfig(team="ops")
        with pytest.raises(ValidationError):
            cfg.team = "other"  # type: ignore[misc]
