"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from idiomguard.config import (
    CONFIG_ENV_VAR,
    ConfigLoader,
    ConfigurationError,
    IdiomguardConfig,
    LogLevel,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
)

pytestmark = pytest.mark.config


@pytest.fixture
def full_config_dict():
    """Configuration dictionary with every section."""
    return {
        "guard_clause": {
            "unannotated_is_reference": False,
            "exercise_generators": True,
            "await_coroutines": False,
            "include_private": True,
            "include_inherited": False,
        },
        "constructor": {
            "case_sensitive": True,
            "max_distinct_attempts": 25,
        },
        "equality": {"successive_calls": 5},
        "value_source": {"repeat_count": 4, "string_prefix": "probe-"},
        "logging": {"level": "debug"},
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a dictionary to a YAML file and return its path."""

    def _write(data, name: str = "idiomguard.yaml") -> Path:
        path = tmp_path / name
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path

    return _write


class TestConfigLoader:
    """Tests for ConfigLoader class."""

    def test_defaults_without_file(self):
        config = ConfigLoader().load()

        assert isinstance(config, IdiomguardConfig)
        assert config.guard_clause.unannotated_is_reference is True
        assert config.constructor.max_distinct_attempts == 10
        assert config.equality.successive_calls == 3
        assert config.value_source.repeat_count == 3
        assert config.logging.level == LogLevel.WARNING

    def test_load_full_config(self, write_config, full_config_dict):
        loader = ConfigLoader(write_config(full_config_dict))
        config = loader.load()

        assert config.guard_clause.include_private is True
        assert config.guard_clause.await_coroutines is False
        assert config.constructor.case_sensitive is True
        assert config.equality.successive_calls == 5
        assert config.value_source.string_prefix == "probe-"
        assert config.logging.level == LogLevel.DEBUG
        assert loader.loaded_from_path == loader.config_path

    def test_partial_config_keeps_defaults(self, write_config):
        config = ConfigLoader(write_config({"equality": {"successive_calls": 7}})).load()

        assert config.equality.successive_calls == 7
        assert config.value_source.repeat_count == 3

    def test_empty_sections_use_defaults(self, tmp_path):
        path = tmp_path / "idiomguard.yaml"
        path.write_text("guard_clause:\nequality:\n")

        config = ConfigLoader(path).load()
        assert config.equality.successive_calls == 3

    def test_load_nonexistent_file(self):
        with pytest.raises(FileNotFoundError):
            ConfigLoader("/nonexistent/idiomguard.yaml").load()

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "idiomguard.yaml"
        path.write_text("invalid: yaml: content: ][")

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "idiomguard.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(path).load()
        assert "mapping" in str(exc_info.value)

    def test_validation_errors_are_reported(self, write_config):
        path = write_config({"equality": {"successive_calls": 1}})

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(path).load()

        error = exc_info.value
        assert error.path == path
        assert "equality.successive_calls" in str(error)

    def test_save_round_trip(self, write_config, full_config_dict, tmp_path):
        loader = ConfigLoader(write_config(full_config_dict))
        original = loader.load()

        saved = tmp_path / "saved.yaml"
        loader.save(saved)

        assert ConfigLoader(saved).load() == original

    def test_save_without_config(self, tmp_path):
        with pytest.raises(ValueError):
            ConfigLoader().save(tmp_path / "out.yaml")


class TestEnvironmentVariables:
    """Tests for ${VAR} substitution and IDIOMGUARD_* overrides."""

    def test_substitution(self, write_config, monkeypatch):
        monkeypatch.setenv("GUARD_REPEAT", "6")
        config = ConfigLoader(
            write_config({"value_source": {"repeat_count": "${GUARD_REPEAT}"}})
        ).load()

        assert config.value_source.repeat_count == 6

    def test_substitution_default(self, write_config, monkeypatch):
        monkeypatch.delenv("GUARD_PRIVATE", raising=False)
        config = ConfigLoader(
            write_config({"guard_clause": {"include_private": "${GUARD_PRIVATE:-yes}"}})
        ).load()

        assert config.guard_clause.include_private is True

    def test_embedded_substitution(self, write_config, monkeypatch):
        monkeypatch.setenv("GUARD_ENV", "ci")
        config = ConfigLoader(
            write_config({"value_source": {"string_prefix": "${GUARD_ENV}-run-"}})
        ).load()

        assert config.value_source.string_prefix == "ci-run-"

    def test_override_beats_file(self, write_config, full_config_dict, monkeypatch):
        monkeypatch.setenv("IDIOMGUARD_SUCCESSIVE_CALLS", "9")
        monkeypatch.setenv("IDIOMGUARD_LOG_LEVEL", "error")

        config = ConfigLoader(write_config(full_config_dict)).load()

        assert config.equality.successive_calls == 9
        assert config.logging.level == LogLevel.ERROR

    def test_override_without_file(self, monkeypatch):
        monkeypatch.setenv("IDIOMGUARD_INCLUDE_INHERITED", "true")
        assert ConfigLoader().load().guard_clause.include_inherited is True

    def test_load_from_env_path(self, write_config, monkeypatch):
        path = write_config({"value_source": {"repeat_count": 2}}, name="custom.yaml")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert ConfigLoader().load_from_env().value_source.repeat_count == 2

    def test_load_from_env_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))

        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_from_env()

    def test_load_from_default_location(self, write_config, monkeypatch, tmp_path):
        write_config({"equality": {"successive_calls": 8}}, name=".idiomguard.yml")
        monkeypatch.chdir(tmp_path)

        assert ConfigLoader().load_from_env().equality.successive_calls == 8

    def test_load_from_env_falls_back_to_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader().load_from_env() == IdiomguardConfig()


class TestGlobalConfig:
    """Tests for the cached global configuration."""

    def test_get_config_loads_once(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        first = get_config()

        assert get_config() is first

    def test_load_config_replaces_cache(self, write_config):
        config = load_config(write_config({"equality": {"successive_calls": 4}}))
        assert get_config() is config

    def test_reset_config(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        first = load_config_from_env()
        reset_config()

        assert get_config() is not first
