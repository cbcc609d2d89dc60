"""Tests for PPST parameters and YAML config loading."""

from pathlib import Path

import pytest

from ppst.config import PPSTParams, config_section, load_config, params_from_config

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "ppst.yaml"
    path.write_text(
        "ppst:\n"
        "  pivot_period: 3\n"
        "  atr_factor: 5.0\n"
        "  atr_period: 14\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    return path


class TestPPSTParams:
    def test_defaults(self):
        params = PPSTParams()
        assert params.pivot_period == 2
        assert params.atr_factor == 3.0
        assert params.atr_period == 10

    @pytest.mark.parametrize("kwargs", [
        {"pivot_period": 0},
        {"pivot_period": -1},
        {"atr_period": 0},
        {"atr_factor": 0.0},
        {"atr_factor": float("inf")},
        {"pivot_period": 1.5},
        {"atr_period": 2.0},
        {"pivot_period": True},
        {"atr_period": "10"},
        {"atr_factor": "3"},
        {"atr_factor": True},
        {"atr_factor": None},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            PPSTParams(**kwargs)


class TestLoadConfig:
    def test_load(self, config_file):
        config = load_config(config_file)
        assert config["ppst"]["atr_period"] == 14
        assert config["logging"]["level"] == "DEBUG"

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_repo_default_config(self):
        params = params_from_config(load_config(REPO_CONFIG))
        assert params == PPSTParams(pivot_period=2, atr_factor=3.0, atr_period=10)


class TestParamsFromConfig:
    def test_from_file_values(self, config_file):
        params = params_from_config(load_config(config_file))
        assert params == PPSTParams(pivot_period=3, atr_factor=5.0, atr_period=14)

    def test_overrides_win(self, config_file):
        params = params_from_config(load_config(config_file), atr_factor=2.5, atr_period=7)
        assert params == PPSTParams(pivot_period=3, atr_factor=2.5, atr_period=7)

    def test_missing_section_uses_defaults(self):
        assert params_from_config({}) == PPSTParams()

    def test_invalid_value_in_file(self):
        with pytest.raises(ValueError):
            params_from_config({"ppst": {"atr_period": 0}})

    def test_empty_sections_use_defaults(self, tmp_path):
        path = tmp_path / "empty_sections.yaml"
        path.write_text("ppst:\nlogging:\n")
        config = load_config(path)
        assert params_from_config(config) == PPSTParams()
        assert config_section(config, "logging") == {}

    def test_section_must_be_mapping(self):
        with pytest.raises(ValueError, match="ppst"):
            params_from_config({"ppst": 5})

    def test_fractional_period_in_file(self):
        with pytest.raises(ValueError, match="pivot_period"):
            params_from_config({"ppst": {"pivot_period": 1.5}})
