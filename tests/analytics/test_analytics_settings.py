# tests/analytics/test_analytics_settings.py
"""Tests for AnalyticsSettings."""
import pytest
from pydantic import ValidationError

from src.analytics.settings import AnalyticsSettings


class TestAnalyticsSettings:
    """Tests for AnalyticsSettings."""

    def test_defaults(self) -> None:
        settings = AnalyticsSettings()

        assert settings.timezone == "UTC"
        assert settings.annualization_days == 252
        assert settings.profit_factor_cap == 99.0
        assert settings.big_win_fraction == 0.02
        assert settings.big_loss_fraction == 0.015
        assert settings.scalp_max_minutes == 60
        assert settings.swing_max_minutes == 1440
        assert settings.pattern_min_trades == 3
        assert settings.morning_min_trades == 10

    def test_unknown_timezone_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnalyticsSettings(timezone="Mars/Olympus_Mons")

    def test_swing_must_exceed_scalp(self) -> None:
        """Swing bound at or below the scalp bound is rejected."""
        with pytest.raises(ValidationError):
            AnalyticsSettings(scalp_max_minutes=120, swing_max_minutes=60)

    def test_risk_aversion_ratio_below_one(self) -> None:
        with pytest.raises(ValidationError):
            AnalyticsSettings(risk_aversion_size_ratio=1.2)

    def test_frozen(self) -> None:
        settings = AnalyticsSettings()

        with pytest.raises(ValidationError):
            settings.timezone = "Europe/London"
