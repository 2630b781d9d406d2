# src/analytics/models.py
"""Result models for trade analytics."""
from dataclasses import dataclass
from datetime import date
from enum import Enum

from src.models.trade_record import TradeRecord


@dataclass
class StatsResult:
    """Aggregate performance metrics over a trade sequence."""

    total_trades: int
    winning_trades: int
    losing_trades: int

    win_rate: float
    total_profit: float
    avg_profit: float
    avg_loss: float
    profit_factor: float

    max_drawdown: float
    sharpe_ratio: float
    expectancy: float

    best_trade: float | None
    worst_trade: float | None


@dataclass
class PeriodComparison:
    """Stats for the trailing week, trailing month and the full history."""

    weekly: StatsResult
    monthly: StatsResult
    all_time: StatsResult


@dataclass(frozen=True)
class CategoryFlags:
    """Independent classification flags for one trade.

    The duration flags (scalp, swing, long term) are mutually exclusive;
    every other combination is allowed.
    """

    is_win: bool
    is_big_win: bool
    is_big_loss: bool
    is_scalp: bool
    is_swing: bool
    is_long_term: bool


@dataclass(frozen=True)
class CategorizedTrade:
    """A trade decorated with its category flags."""

    trade: TradeRecord
    category: CategoryFlags


@dataclass
class CategorySummary:
    """Counts of categorized trades by outcome and holding period."""

    wins: int = 0
    losses: int = 0
    breakeven: int = 0
    big_wins: int = 0
    big_losses: int = 0
    scalps: int = 0
    swings: int = 0
    long_term: int = 0


@dataclass
class SymbolPerformance:
    """Profit aggregate for a single symbol."""

    symbol: str
    profit: float
    trade_count: int
    win_rate: float


@dataclass
class HeatmapResult:
    """Profit aggregated by hour of day, weekday and symbol.

    Attributes:
        hourly: 24 profit sums indexed by hour (0-23).
        daily: 7 profit sums indexed by weekday (0=Sunday, 6=Saturday).
        symbols: Per-symbol aggregates sorted by descending profit.
        timezone: Zone the hour and weekday buckets were computed in.
    """

    hourly: list[float]
    daily: list[float]
    symbols: list[SymbolPerformance]
    timezone: str = "UTC"


@dataclass
class DailyPnL:
    """Realized profit for one calendar date plus the running total."""

    date: date
    profit: float
    cumulative: float


class PatternType(str, Enum):
    """Mechanical patterns recognised in recent trade sequences."""

    WINNING_STREAK = "winningStreak"
    LOSING_STREAK = "losingStreak"
    MARTINGALE_PATTERN = "martingalePattern"
    RISK_AVERSION_AFTER_WIN = "riskAversionAfterWin"
    MORNING_SPECIALIST = "morningSpecialist"


@dataclass
class PatternFinding:
    """A detected pattern with its fixed rule confidence."""

    type: PatternType
    confidence: int
    description: str
    implication: str

