# src/analytics/settings.py
"""Settings for the trade analytics components."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalyticsSettings(BaseModel):
    """Thresholds for statistics, categorization, heatmaps and patterns.

    Attributes:
        timezone: IANA zone used for every hour/weekday/date bucket.
        annualization_days: Trading days used to annualize the Sharpe ratio.
        profit_factor_cap: Profit factor reported when there are no losses.
        big_win_fraction: Profit above this fraction of size is a big win.
        big_loss_fraction: Loss beyond this fraction of size is a big loss.
        scalp_max_minutes: Durations below this are scalps.
        swing_max_minutes: Durations below this (and not scalps) are swings.
        pattern_min_trades: Minimum trades before any pattern is reported.
        streak_window: Number of recent trades inspected for streaks and sizing.
        streak_min_length: Minimum consistent outcomes for a streak.
        martingale_size_ratio: Post-loss size multiple counted as martingale.
        risk_aversion_size_ratio: Post-win size multiple counted as shrinking.
        sizing_min_occurrences: Sizing occurrences needed to report a pattern.
        morning_start_hour: First hour of the morning session (inclusive).
        morning_end_hour: Last hour of the morning session (inclusive).
        morning_window: Number of recent trades inspected for morning focus.
        morning_ratio: Fraction of morning trades that marks a specialist.
        morning_min_trades: Trades required (exclusive) before checking.
        daily_pnl_days: Number of most recent dates kept in the daily series.
    """

    model_config = ConfigDict(frozen=True)

    timezone: str = "UTC"

    annualization_days: int = Field(default=252, ge=1)
    profit_factor_cap: float = Field(default=99.0, gt=0)

    big_win_fraction: float = Field(default=0.02, gt=0)
    big_loss_fraction: float = Field(default=0.015, gt=0)
    scalp_max_minutes: int = Field(default=60, ge=1)
    swing_max_minutes: int = Field(default=1440, ge=1)

    pattern_min_trades: int = Field(default=3, ge=1)
    streak_window: int = Field(default=5, ge=2)
    streak_min_length: int = Field(default=3, ge=2)
    martingale_size_ratio: float = Field(default=1.5, gt=1.0)
    risk_aversion_size_ratio: float = Field(default=0.7, gt=0.0, lt=1.0)
    sizing_min_occurrences: int = Field(default=2, ge=1)

    morning_start_hour: int = Field(default=9, ge=0, le=23)
    morning_end_hour: int = Field(default=11, ge=0, le=23)
    morning_window: int = Field(default=10, ge=1)
    morning_ratio: float = Field(default=0.7, gt=0.0, le=1.0)
    morning_min_trades: int = Field(default=10, ge=0)

    daily_pnl_days: int = Field(default=30, ge=1, le=3650)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("swing_max_minutes")
    @classmethod
    def validate_swing_bound(cls, v: int, info) -> int:
        """Swing upper bound must sit above the scalp bound."""
        scalp = info.data.get("scalp_max_minutes")
        if scalp is not None and v <= scalp:
            raise ValueError("swing_max_minutes must be greater than scalp_max_minutes")
        return v
