"""Tests for configuration models and YAML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from handoff.core.config import (
    Config,
    QueueConfig,
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
    merge_configs,
)


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "handoff.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_defaults_for_empty_file(self, tmp_path: Path):
        """An empty file yields default settings."""
        config = load_config(write_config(tmp_path, ""))

        assert config.queue.name == "queue"
        assert config.queue.default_timeout_ms is None
        assert config.logging.level == "INFO"
        assert config.logging.file_logging is False

    def test_values_loaded(self, tmp_path: Path):
        path = write_config(
            tmp_path,
            "logging:\n  level: debug\nqueue:\n  name: jobs\n  default_timeout_ms: 500\n",
        )

        config = load_config(path)

        assert config.logging.level == "DEBUG"
        assert config.queue == QueueConfig(name="jobs", default_timeout_ms=500)

    def test_env_vars_expanded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HANDOFF_QUEUE_NAME", "events")
        path = write_config(tmp_path, "queue:\n  name: ${HANDOFF_QUEUE_NAME}\n")

        assert load_config(path).queue.name == "events"

    def test_unresolved_env_var_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("HANDOFF_MISSING", raising=False)
        path = write_config(tmp_path, "queue:\n  name: ${HANDOFF_MISSING}\n")

        with pytest.raises(ValueError, match="HANDOFF_MISSING"):
            load_config(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_overrides_merged(self, tmp_path: Path):
        """Override mappings win over file values without dropping siblings."""
        path = write_config(tmp_path, "queue:\n  name: jobs\n  default_timeout_ms: 500\n")

        config = load_config(path, overrides={"queue": {"default_timeout_ms": 0}})

        assert config.queue.name == "jobs"
        assert config.queue.default_timeout_ms == 0

    def test_extra_keys_allowed(self, tmp_path: Path):
        config = load_config(write_config(tmp_path, "service: worker\n"))
        assert config.model_extra == {"service": "worker"}


class TestModels:
    def test_negative_timeout_rejected(self):
        with pytest.raises(ValidationError, match="default_timeout_ms"):
            QueueConfig(default_timeout_ms=-1)

    def test_invalid_logging_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid logging level"):
            Config(logging={"level": "LOUD"})


class TestHelpers:
    def test_expand_env_vars(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HANDOFF_TEST_VAR", "value")
        assert expand_env_vars("x-${HANDOFF_TEST_VAR}-y") == "x-value-y"

    def test_expand_env_vars_leaves_unknown(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("HANDOFF_UNKNOWN", raising=False)
        assert expand_env_vars("${HANDOFF_UNKNOWN}") == "${HANDOFF_UNKNOWN}"

    def test_expand_env_vars_recursive(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HANDOFF_TEST_VAR", "v")
        data = {"a": ["${HANDOFF_TEST_VAR}", 1], "b": {"c": "${HANDOFF_TEST_VAR}"}, "d": None}

        assert expand_env_vars_recursive(data) == {"a": ["v", 1], "b": {"c": "v"}, "d": None}

    def test_merge_configs_does_not_mutate(self):
        base = {"queue": {"name": "a", "default_timeout_ms": 50}}
        override = {"queue": {"name": "b"}}

        merged = merge_configs(base, override)

        assert merged == {"queue": {"name": "b", "default_timeout_ms": 50}}
        assert base["queue"]["name"] == "a"

    def test_check_unexpanded_vars_reports_all(self):
        data = {"a": "${VAR_A}", "b": ["${VAR_B}"]}

        with pytest.raises(ValueError, match="VAR_A") as exc_info:
            check_unexpanded_vars(data, source="test.yaml")
        assert "VAR_B" in str(exc_info.value)
        assert "test.yaml" in str(exc_info.value)

    def test_check_unexpanded_vars_passes_clean_data(self):
        check_unexpanded_vars({"port": 8080, "enabled": True, "name": "ok"}, source="test.yaml")
