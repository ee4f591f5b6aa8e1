"""
Tests for Settings
==================
"""

from datetime import timedelta

import pytest

from solar_watch.config import Settings, default_config_path, load_settings


class TestSettings:
    """Defaults and validation."""

    def test_defaults(self):
        """Test defaults."""
        settings = Settings()
        assert settings.earth_directed_max_longitude == 30.0
        assert settings.min_cme_speed == 100.0
        assert settings.refresh_interval == 300.0
        assert settings.summary_window == timedelta(hours=24)
        assert settings.flare_alert_min_flux == 5e-6
        assert settings.reference_latitude == -42.45

    def test_integers_become_floats(self):
        """Test integers become floats."""
        assert Settings(refresh_interval=60).refresh_interval == 60.0

    @pytest.mark.parametrize("kwargs", [
        {'earth_directed_max_longitude': 0},
        {'earth_directed_max_longitude': 200},
        {'min_cme_speed': -1},
        {'refresh_interval': 0},
        {'summary_window_hours': -24},
        {'reference_latitude': 95},
        {'refresh_interval': '300'},
        {'min_cme_speed': True},
    ])
    def test_invalid_values(self, kwargs):
        """Test invalid values."""
        with pytest.raises(ValueError):
            Settings(**kwargs)

    def test_with_overrides_ignores_none(self):
        """Test with_overrides() ignores None."""
        settings = Settings().with_overrides(refresh_interval=None, min_cme_speed=250)
        assert settings.refresh_interval == 300.0
        assert settings.min_cme_speed == 250.0

    def test_frozen(self):
        """Test settings are frozen."""
        with pytest.raises(AttributeError):
            Settings().min_cme_speed = 10


class TestLoadSettings:
    """TOML settings file."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test missing file gives defaults."""
        assert load_settings(tmp_path / 'absent.toml') == Settings()

    def test_reads_values(self, tmp_path):
        """Test reads values."""
        path = tmp_path / 'config.toml'
        path.write_text(
            'earth_directed_max_longitude = 45\n'
            'summary_window_hours = 12\n'
            'reference_latitude = 51.5\n',
            encoding='utf-8',
        )
        settings = load_settings(path)
        assert settings.earth_directed_max_longitude == 45.0
        assert settings.summary_window == timedelta(hours=12)
        assert settings.reference_latitude == 51.5
        assert settings.min_cme_speed == 100.0

    def test_unknown_key(self, tmp_path):
        """Test unknown key."""
        path = tmp_path / 'config.toml'
        path.write_text('refresh = 10\n', encoding='utf-8')
        with pytest.raises(ValueError, match="unknown settings: refresh"):
            load_settings(path)

    def test_invalid_toml(self, tmp_path):
        """Test invalid TOML."""
        path = tmp_path / 'config.toml'
        path.write_text('min_cme_speed = = 3\n', encoding='utf-8')
        with pytest.raises(ValueError, match="invalid TOML"):
            load_settings(path)

    def test_wrong_type(self, tmp_path):
        """Test wrong type."""
        path = tmp_path / 'config.toml'
        path.write_text('min_cme_speed = "fast"\n', encoding='utf-8')
        with pytest.raises(ValueError, match="must be a number"):
            load_settings(path)

    def test_default_path(self):
        """Test default path."""
        path = default_config_path()
        assert path.name == 'config.toml'
        assert path.parent.name == 'solar-watch'
