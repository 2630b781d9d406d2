# src/biases/settings.py
"""Settings for the behavioral bias engine."""
from pydantic import BaseModel, ConfigDict, Field


class BiasEngineSettings(BaseModel):
    """Thresholds for every bias rule.

    The engine reads these values and keeps no state of its own, so one
    settings object can be shared by any number of engines.

    Attributes:
        min_trades: Trades required before any bias analysis runs.
        window_size: Number of most recent trades analyzed.
        pair_window: Recent trades whose consecutive pairs are inspected.
        overall_points_per_bias: Normalization points per detected bias.
    """

    model_config = ConfigDict(frozen=True)

    min_trades: int = Field(default=5, ge=1)
    window_size: int = Field(default=20, ge=1)
    pair_window: int = Field(default=5, ge=2)
    overall_points_per_bias: int = Field(default=25, gt=0)

    # Loss aversion
    loss_aversion_min_each: int = Field(default=3, ge=1)
    duration_ratio: float = Field(default=1.5, gt=1.0)
    duration_ratio_high: float = Field(default=2.0, gt=1.0)
    loss_to_win_percent_ratio: float = Field(default=2.0, gt=1.0)
    breakeven_loss_percent: float = Field(default=5.0, gt=0)
    breakeven_profit_fraction: float = Field(default=0.001, gt=0)
    breakeven_share: float = Field(default=0.5, gt=0, le=1.0)

    # Overconfidence
    overconfidence_min_trades: int = Field(default=5, ge=1)
    win_streak_min: int = Field(default=3, ge=2)
    win_streak_high: int = Field(default=5, ge=2)
    size_after_win_ratio: float = Field(default=1.3, gt=1.0)
    stop_usage_window: int = Field(default=5, ge=1)
    stop_usage_drop_ratio: float = Field(default=0.5, gt=0, lt=1.0)

    # Revenge trading
    revenge_min_trades: int = Field(default=3, ge=1)
    reentry_minutes: float = Field(default=5.0, gt=0)
    size_after_loss_ratio: float = Field(default=1.5, gt=1.0)
    loss_period_trades: int = Field(default=5, ge=2)
    loss_period_frequency_ratio: float = Field(default=1.5, gt=1.0)
    min_elapsed_hours: float = Field(default=1 / 60, gt=0)

    # Confirmation bias
    confirmation_min_trades: int = Field(default=10, ge=1)
    confirmation_window: int = Field(default=10, ge=1)
    one_sided_ratio: float = Field(default=0.8, gt=0.5, le=1.0)
    against_trend_ratio: float = Field(default=0.7, gt=0, le=1.0)

    # Anchoring
    anchoring_max_move: float = Field(default=0.01, gt=0)
    anchoring_min_hours: float = Field(default=2.0, gt=0)
    anchoring_min_trades: int = Field(default=2, ge=0)

    # Pre-trade checks
    realtime_reentry_minutes: float = Field(default=15.0, gt=0)
    realtime_lookback: int = Field(default=3, ge=1)
    realtime_min_wins: int = Field(default=2, ge=1)
    realtime_size_ratio: float = Field(default=1.2, gt=1.0)
