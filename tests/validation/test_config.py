"""
Tests for CorrespondingReferenceConfig and validate_config helper.

Tests defaults, boolean coercion, log level validation, environment
variable fallback and error handling.
"""

import pytest

from validation.config import CorrespondingReferenceConfig, validate_config


class TestCorrespondingReferenceConfig:
    """Tests for CorrespondingReferenceConfig model."""

    # =========================================================================
    # Defaults
    # =========================================================================

    def test_defaults(self):
        config = CorrespondingReferenceConfig()
        assert config.enabled is True
        assert config.notify is True
        assert config.log_level == "info"
        assert config.json_logs is False
        assert config.definitions_path == "corresponding_reference.yml"

    # =========================================================================
    # Boolean coercion
    # =========================================================================

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("True", True), ("1", True), ("yes", True),
        ("false", False), ("0", False), ("no", False),
        (True, True), (False, False),
    ])
    def test_boolean_strings(self, value, expected):
        config, error = validate_config({"enabled": value})
        assert error is None
        assert config.enabled is expected

    def test_invalid_boolean_string(self):
        config, error = validate_config({"notify": "sometimes"})
        assert config is None
        assert "notify" in error

    def test_non_boolean_type_rejected(self):
        config, error = validate_config({"json_logs": 3})
        assert config is None
        assert "json_logs" in error

    # =========================================================================
    # Log level / paths
    # =========================================================================

    def test_log_level_lowercased(self):
        config, _ = validate_config({"log_level": "DEBUG"})
        assert config.log_level == "debug"

    def test_trace_level_accepted(self):
        config, _ = validate_config({"log_level": "trace"})
        assert config.log_level == "trace"

    def test_invalid_log_level(self):
        config, error = validate_config({"log_level": "verbose"})
        assert config is None
        assert "log_level" in error

    def test_empty_path_rejected(self):
        config, error = validate_config({"definitions_path": "  "})
        assert config is None
        assert "definitions_path" in error

    def test_path_stripped(self):
        config, _ = validate_config({"entities_path": " /data/entities.json "})
        assert config.entities_path == "/data/entities.json"

    # =========================================================================
    # Environment
    # =========================================================================

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("CR_ENABLED", "false")
        monkeypatch.setenv("CR_DEFINITIONS_PATH", "/etc/cr/defs.yml")
        config, error = validate_config({})
        assert error is None
        assert config.enabled is False
        assert config.definitions_path == "/etc/cr/defs.yml"

    def test_explicit_value_beats_env(self, monkeypatch):
        monkeypatch.setenv("CR_LOG_LEVEL", "error")
        config, _ = validate_config({"log_level": "debug"})
        assert config.log_level == "debug"

    def test_unknown_keys_ignored(self):
        config, error = validate_config({"legacy_setting": "ignored"})
        assert error is None
        assert config is not None

    def test_log_config_does_not_raise(self):
        CorrespondingReferenceConfig(enabled=False).log_config()
