"""Tests for laplace.config module."""

from __future__ import annotations

import pytest

from laplace.config import (
    CONFIG_FILENAME,
    DEFAULT_TIMEOUT,
    ConfigError,
    HarvestConfig,
    find_config_file,
)


# ---------------------------------------------------------------------------
# find_config_file
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    def test_in_start_dir(self, tmp_path):
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("[harvest]\n")
        assert find_config_file(tmp_path) == cfg

    def test_in_ancestor(self, tmp_path):
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("[harvest]\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == cfg

    def test_nearest_wins(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[harvest]\n")
        nested = tmp_path / "project"
        nested.mkdir()
        inner = nested / CONFIG_FILENAME
        inner.write_text("[harvest]\n")
        assert find_config_file(nested) == inner


# ---------------------------------------------------------------------------
# HarvestConfig
# ---------------------------------------------------------------------------


class TestHarvestConfig:
    def test_defaults(self):
        config = HarvestConfig()
        assert config.timeout == DEFAULT_TIMEOUT == 3.0
        assert config.latitude == 13.72
        assert config.longitude == 100.52
        assert config.user_agent is None

    def test_from_dict(self):
        config = HarvestConfig.from_dict({"timeout": 1.5, "latitude": 51.5})
        assert config.timeout == 1.5
        assert config.latitude == 51.5
        assert config.longitude == 100.52

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown harvest setting"):
            HarvestConfig.from_dict({"timeuot": 1})

    @pytest.mark.parametrize("timeout", [0, -1, "3", True])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ConfigError):
            HarvestConfig(timeout=timeout)

    def test_invalid_coordinate(self):
        with pytest.raises(ConfigError):
            HarvestConfig(latitude="north")

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_to_dict_roundtrip(self):
        config = HarvestConfig(timeout=2.0, user_agent="ua")
        assert HarvestConfig.from_dict(config.to_dict()) == config

    def test_frozen(self):
        config = HarvestConfig()
        with pytest.raises(AttributeError):
            config.timeout = 9.0


class TestLoad:
    def test_load_from_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            '[harvest]\ntimeout = 0.5\nuser_agent = "probe/1.0"\n'
        )
        config = HarvestConfig.load(tmp_path)
        assert config.timeout == 0.5
        assert config.user_agent == "probe/1.0"

    def test_file_without_harvest_table(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('[other]\nkey = "value"\n')
        assert HarvestConfig.load(tmp_path) == HarvestConfig()

    def test_invalid_value_in_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[harvest]\ntimeout = -2\n")
        with pytest.raises(ConfigError):
            HarvestConfig.load(tmp_path)

    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr("laplace.config.find_config_file", lambda start_dir=None: None)
        assert HarvestConfig.load(tmp_path) == HarvestConfig()
