"""Tests for application settings."""

import json
import logging

import pytest

from physcalc.core.config import (
    AppSettings,
    ColorConfig,
    load_settings_json,
    save_settings_json,
    settings_from_dict,
)


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.canvas_width == 1200
        assert settings.canvas_height == 600
        assert settings.particle_count == 100
        assert settings.history_limit == 50
        assert settings.seed is None
        assert settings.colors == ColorConfig()

    def test_frame_interval(self):
        assert AppSettings(frame_rate=50.0).frame_interval == pytest.approx(0.02)
        assert AppSettings(frame_rate=0.0).frame_interval == pytest.approx(1 / 60)

    def test_colors_are_immutable(self):
        colors = ColorConfig()
        with pytest.raises(AttributeError):
            colors.primary = "#000000"


class TestSettingsFromDict:
    def test_partial(self):
        settings = settings_from_dict({"particle_count": 10, "colors": {"accent": "#00ff00"}})
        assert settings.particle_count == 10
        assert settings.canvas_width == 1200
        assert settings.colors.accent == "#00ff00"
        assert settings.colors.primary == ColorConfig().primary

    def test_unknown_keys_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="physcalc.core.config"):
            settings = settings_from_dict({"theme": "dark", "colors": {"glow": "#fff"}})
        assert settings == AppSettings()
        assert "theme" in caplog.text
        assert "glow" in caplog.text


    @pytest.mark.parametrize(
        "key, value",
        [
            ("canvas_width", 160),
            ("canvas_height", -1),
            ("canvas_width", "wide"),
            ("particle_count", -1),
            ("particle_count", 2.5),
            ("history_limit", 0),
            ("frame_rate", "fast"),
            ("seed", -7),
        ],
    )
    def test_invalid_value_takes_default(self, caplog, key, value):
        with caplog.at_level(logging.WARNING, logger="physcalc.core.config"):
            settings = settings_from_dict({key: value})
        assert getattr(settings, key) == getattr(AppSettings(), key)
        assert key in caplog.text

    def test_valid_values_kept(self):
        settings = settings_from_dict({"canvas_width": 161, "particle_count": 0, "frame_rate": 30, "seed": 0})
        assert settings.canvas_width == 161
        assert settings.particle_count == 0
        assert settings.seed == 0


class TestJsonPersistence:
    def test_save_and_load(self, tmp_path):
        settings = AppSettings(
            canvas_width=800,
            particle_count=25,
            seed=7,
            colors=ColorConfig(primary="#112233"),
        )
        path = tmp_path / "settings.json"
        save_settings_json(settings, path)

        loaded = load_settings_json(path)
        assert loaded == settings

    def test_file_is_plain_json(self, tmp_path):
        path = tmp_path / "settings.json"
        save_settings_json(AppSettings(), path)
        with open(path) as f:
            data = json.load(f)
        assert data["colors"]["primary"] == "#6366f1"
        assert "history_limit" in data
