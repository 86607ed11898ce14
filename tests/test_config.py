"""Tests for configuration loading."""

import pytest
import yaml

from filelog.config import Config, load_config, load_yaml_config
from filelog.levels import Level

ENV_KEYS = ("LOG_PATH", "MAX_ENTRIES", "LOG_FORMAT", "LOG_LEVEL",
            "LOG_ENCODING", "TRUNCATE_EVERY", "WRITE_INTERVAL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfigDefaults:
    def test_default_values(self):
        cfg = Config()
        assert cfg.log_path == "./logs/application.log"
        assert cfg.max_entries == 2000
        assert cfg.log_format == "text"
        assert cfg.threshold is Level.INFO
        assert cfg.truncate_every == 500

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(AttributeError):
            cfg.max_entries = 1

    @pytest.mark.parametrize("overrides", [
        {"max_entries": 0},
        {"truncate_every": 0},
        {"log_format": "xml"},
        {"level": "loud"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            Config(**overrides)


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yml")) == {}

    def test_reads_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({"max_entries": 10, "log_format": "json"}))
        assert load_yaml_config(str(path)) == {"max_entries": 10, "log_format": "json"}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_yaml_config(str(path))


class TestLoadConfig:
    def test_defaults_without_env(self):
        assert load_config() == Config()

    def test_yaml_overrides_defaults(self):
        cfg = load_config({"max_entries": 10, "level": "debug"})
        assert cfg.max_entries == 10
        assert cfg.threshold is Level.DEBUG
        assert cfg.log_format == "text"

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("MAX_ENTRIES", "7")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("WRITE_INTERVAL", "0.5")
        cfg = load_config({"max_entries": 10, "log_path": "/tmp/app.log"})
        assert cfg.max_entries == 7
        assert cfg.log_format == "json"
        assert cfg.write_interval == 0.5
        assert cfg.log_path == "/tmp/app.log"

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("MAX_ENTRIES", "lots")
        with pytest.raises(ValueError):
            load_config()
