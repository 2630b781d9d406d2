# tests/config/test_settings.py
import pytest
from pydantic import ValidationError


class TestSettings:
    def test_load_settings_from_yaml(self, tmp_path):
        config_content = """
system:
  name: "Test System"

analytics:
  timezone: "America/New_York"
  daily_pnl_days: 10

biases:
  min_trades: 8
  window_size: 30

report:
  recent_trades_limit: 5
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        from src.config.settings import Settings
        settings = Settings.from_yaml(config_file)

        assert settings.system.name == "Test System"
        assert settings.analytics.timezone == "America/New_York"
        assert settings.analytics.daily_pnl_days == 10
        assert settings.biases.min_trades == 8
        assert settings.biases.window_size == 30
        assert settings.report.recent_trades_limit == 5

    def test_settings_defaults(self, tmp_path):
        config_content = """
system:
  name: "Minimal"
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        from src.config.settings import Settings
        settings = Settings.from_yaml(config_file)

        assert settings.analytics.timezone == "UTC"
        assert settings.biases.min_trades == 5
        assert settings.biases.window_size == 20
        assert settings.report.recent_trades_limit == 15
        assert settings.runtime.log_level == "INFO"

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")

        from src.config.settings import Settings
        settings = Settings.from_yaml(config_file)

        assert settings.system.version == "1.0.0"

    def test_env_override(self, tmp_path, monkeypatch):
        config_content = """
analytics:
  timezone: "UTC"
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        monkeypatch.setenv("TRADE_ANALYTICS_TIMEZONE", "Europe/London")
        monkeypatch.setenv("TRADE_ANALYTICS_LOG_LEVEL", "DEBUG")

        from src.config.settings import Settings
        settings = Settings.from_yaml(config_file)

        assert settings.analytics.timezone == "Europe/London"
        assert settings.runtime.timezone == "Europe/London"
        assert settings.runtime.log_level == "DEBUG"

    def test_invalid_threshold_rejected(self, tmp_path):
        config_content = """
analytics:
  scalp_max_minutes: 600
  swing_max_minutes: 60
"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(config_content)

        from src.config.settings import Settings
        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_invalid_timezone_from_env(self, monkeypatch):
        monkeypatch.setenv("TRADE_ANALYTICS_TIMEZONE", "Nowhere/Special")

        from src.config.settings import Settings
        with pytest.raises(ValidationError):
            Settings.from_dict({})


class TestBiasEngineSettings:
    def test_defaults(self):
        from src.biases.settings import BiasEngineSettings
        settings = BiasEngineSettings()

        assert settings.pair_window == 5
        assert settings.reentry_minutes == 5.0
        assert settings.realtime_reentry_minutes == 15.0
        assert settings.overall_points_per_bias == 25

    def test_ratio_bounds(self):
        from src.biases.settings import BiasEngineSettings
        with pytest.raises(ValidationError):
            BiasEngineSettings(size_after_loss_ratio=0.9)
