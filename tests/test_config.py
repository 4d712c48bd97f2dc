"""Tests for settings file loading."""

import json
import pytest

from sphereglow.config import ConfigError, load_settings, parse_settings
from sphereglow.integrator import TraceSettings
from sphereglow.renderer import RenderSettings


class TestParseSettings:
    """Test building settings from dictionaries."""

    def test_empty_gives_defaults(self):
        trace, render = parse_settings({})
        assert trace == TraceSettings()
        assert render == RenderSettings()

    def test_sections(self):
        trace, render = parse_settings({
            "trace": {"n_bounces": 3, "enable_russian_roulette": True},
            "render": {"width": 64, "height": 32, "seed": 5},
        })
        assert trace.n_bounces == 3
        assert trace.enable_russian_roulette is True
        assert trace.exposure == 0.5
        assert (render.width, render.height, render.seed) == (64, 32, 5)

    def test_unknown_section(self):
        with pytest.raises(ConfigError, match="Unknown section"):
            parse_settings({"camera": {}})

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="bounces"):
            parse_settings({"trace": {"bounces": 3}})

    def test_invalid_value(self):
        with pytest.raises(ConfigError, match="Invalid trace settings") as excinfo:
            parse_settings({"trace": {"exposure": -1}})
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError):
            parse_settings({"render": [1, 2]})


class TestLoadSettings:
    """Test reading settings files."""

    def test_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"trace": {"exposure": 1.5}, "render": {"samples_per_pixel": 2}}))
        trace, render = load_settings(str(path))
        assert trace.exposure == 1.5
        assert render.samples_per_pixel == 2

    def test_yaml(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "settings.yaml"
        path.write_text("trace:\n  n_bounces: 2\nrender:\n  enable_aa: false\n")
        trace, render = load_settings(str(path))
        assert trace.n_bounces == 2
        assert render.enable_aa is False

    def test_empty_yaml(self, tmp_path):
        pytest.importorskip("yaml")
        path = tmp_path / "settings.yml"
        path.write_text("")
        assert load_settings(str(path)) == (TraceSettings(), RenderSettings())

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_settings(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(str(path))

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_settings(str(path))

    def test_directory_is_unreadable(self, tmp_path):
        path = tmp_path / "settings.json"
        path.mkdir()
        with pytest.raises(ConfigError, match="Cannot read") as excinfo:
            load_settings(str(path))
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_bytes(b"\xff\xfe{")
        with pytest.raises(ConfigError, match="Cannot read") as excinfo:
            load_settings(str(path))
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)

    def test_quoted_boolean_rejected(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"render": {"enable_aa": "false"}}))
        with pytest.raises(ConfigError, match="enable_aa"):
            load_settings(str(path))

    def test_negative_seed_rejected(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"render": {"seed": -1}}))
        with pytest.raises(ConfigError, match="seed"):
            load_settings(str(path))
