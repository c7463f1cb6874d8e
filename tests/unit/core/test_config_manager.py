"""Tests for the config manager (load_config + write_default_config)."""

import json

import pytest

from status_leds.config.config_manager import load_config, write_default_config
from status_leds.core.exceptions import ConfigurationError
from status_leds.core.models.config import StatusLedsConfig

VALID_YAML = """
services:
  - name: network.target
    states_map:
      active: 00ff5500
  - name: minecraft.service
    states_map:
      active: 00ff9900
  - name: multi-user.target
  - name: local-exporter.service
  - name: node-exporter.service
strip:
  spidev: "0.0"
  channels: 4
  length: 5
  hertz: 1200
  colours:
    active: 00ff0000
    inactive: 01010101
    reloading: 11551100
    failed: 55002200
    activating: 00442200
    deactivating: 22440000
"""


class TestLoadConfig:
    def test_load_shipped_config(self):
        """The bundled status_leds_config.json should load without errors."""
        cfg = load_config()
        assert isinstance(cfg, StatusLedsConfig)
        assert len(cfg.services) <= cfg.strip.length

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(VALID_YAML)
        cfg = load_config(path)
        assert len(cfg.services) == 5
        assert cfg.services[0].name == "network.target"
        assert cfg.services[0].states_map == {"active": "00ff5500"}
        assert cfg.strip.spidev == "0.0"
        assert cfg.strip.hertz == 1200
        assert cfg.strip.colours["inactive"] == "01010101"
        assert cfg.strip.colours["failed"] == "55002200"

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"services": [{"name": "a.service"}], "strip": {"length": 3}}))
        cfg = load_config(path)
        assert cfg.strip.length == 3

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.json")

    def test_env_config_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yml"
        path.write_text(VALID_YAML)
        monkeypatch.setenv("STATUS_LEDS_CONFIG_FILE", str(path))
        assert load_config().services[1].name == "minecraft.service"

    def test_invalid_json_syntax(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"services": [,]}')
        with pytest.raises(ConfigurationError, match="invalid syntax"):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_invalid_colour_names_value(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({
            "services": [{"name": "service1"}],
            "strip": {"colours": {"active": "invalid_color"}},
        }))
        with pytest.raises(ConfigurationError, match="invalid_color"):
            load_config(path)

    def test_too_many_services(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({
            "services": [{"name": f"service{i}"} for i in range(6)],
            "strip": {"length": 5},
        }))
        with pytest.raises(ConfigurationError, match="More services"):
            load_config(path)


class TestEnvOverrides:
    @pytest.fixture
    def cfg_file(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"services": [{"name": "a.service"}]}))
        return path

    def test_log_level(self, cfg_file, monkeypatch):
        monkeypatch.setenv("STATUS_LEDS_LOG_LEVEL", "DEBUG")
        assert load_config(cfg_file).system.log_level == "DEBUG"

    def test_dev_mode(self, cfg_file, monkeypatch):
        monkeypatch.setenv("STATUS_LEDS_DEV_MODE", "1")
        assert load_config(cfg_file).system.dev_mode is True

    def test_spidev_and_hertz(self, cfg_file, monkeypatch):
        monkeypatch.setenv("STATUS_LEDS_SPIDEV", "1.0")
        monkeypatch.setenv("STATUS_LEDS_HERTZ", "25")
        cfg = load_config(cfg_file)
        assert cfg.strip.device_path == "/dev/spidev1.0"
        assert cfg.strip.hertz == 25

    def test_bad_hertz(self, cfg_file, monkeypatch):
        monkeypatch.setenv("STATUS_LEDS_HERTZ", "fast")
        with pytest.raises(ConfigurationError, match="STATUS_LEDS_HERTZ"):
            load_config(cfg_file)


class TestWriteDefaultConfig:
    def test_round_trips_through_loader(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        written = write_default_config(path)
        loaded = load_config(path)
        assert loaded.services == written.services
        assert loaded.strip == written.strip
        assert not list(path.parent.glob("*.tmp"))
