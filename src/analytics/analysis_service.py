# src/analytics/analysis_service.py
"""Service that runs every analytics component over one trade snapshot."""
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from src.analytics.heatmap_aggregator import HeatmapAggregator
from src.analytics.models import (
    CategorySummary,
    DailyPnL,
    HeatmapResult,
    PatternFinding,
    PeriodComparison,
    StatsResult,
)
from src.analytics.pattern_detector import PatternDetector
from src.analytics.settings import AnalyticsSettings
from src.analytics.stats_calculator import StatsCalculator
from src.analytics.trade_categorizer import TradeCategorizer
from src.biases.bias_engine import BiasEngine, ContextInput
from src.biases.models import BiasReport
from src.biases.settings import BiasEngineSettings
from src.models.trade_record import TradeInput, TradeRecord, normalize_trades

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Merged output of every component for one snapshot.

    Attributes:
        stats: All-time statistics.
        periods: Weekly, monthly and all-time statistics.
        patterns: Mechanical pattern findings.
        categories: Counts by outcome and holding period.
        heatmap: Profit by hour, weekday and symbol.
        daily_pnl: Per-date profit series with cumulative totals.
        biases: Behavioral bias report.
        recent_trades: The most recent trades, newest first.
        rejected_trades: Validation messages for records that were dropped.
    """

    stats: StatsResult
    periods: PeriodComparison
    patterns: list[PatternFinding]
    categories: CategorySummary
    heatmap: HeatmapResult
    daily_pnl: list[DailyPnL]
    biases: BiasReport
    recent_trades: list[TradeRecord] = field(default_factory=list)
    rejected_trades: list[str] = field(default_factory=list)


class TradeAnalysisService:
    """Runs statistics, categorization, heatmaps, patterns and biases.

    The components never call each other; this service only feeds them the
    same validated snapshot and collects their results.
    """

    def __init__(
        self,
        analytics_settings: AnalyticsSettings | None = None,
        bias_settings: BiasEngineSettings | None = None,
        recent_trades_limit: int = 15,
    ) -> None:
        """Initialize the service and its components.

        Args:
            analytics_settings: Thresholds for stats, categories, heatmaps and patterns.
            bias_settings: Thresholds for the bias engine.
            recent_trades_limit: Number of newest trades echoed in the report.
        """
        analytics_settings = analytics_settings or AnalyticsSettings()
        self._stats_calculator = StatsCalculator(analytics_settings)
        self._categorizer = TradeCategorizer(analytics_settings)
        self._heatmap_aggregator = HeatmapAggregator(analytics_settings)
        self._pattern_detector = PatternDetector(analytics_settings)
        self._bias_engine = BiasEngine(bias_settings)
        self._recent_trades_limit = recent_trades_limit

    def analyze(
        self,
        records: Iterable[TradeInput],
        market_context: ContextInput = None,
        as_of: datetime | None = None,
    ) -> AnalysisReport:
        """Validate the records and run every component.

        Malformed records are dropped and reported; they never abort the
        analysis of the remaining trades.

        Args:
            records: Trades or raw trade mappings, newest first.
            market_context: Optional market hints for the bias engine.
            as_of: Reference instant for the weekly and monthly stats.

        Returns:
            AnalysisReport combining every component's result.
        """
        normalized = normalize_trades(records)
        trades = normalized.trades

        if normalized.errors:
            logger.warning(
                f"Dropped {len(normalized.errors)} malformed trades, analyzing {len(trades)}"
            )

        categorized = self._categorizer.categorize(trades)

        return AnalysisReport(
            stats=self._stats_calculator.compute_stats(trades),
            periods=self._stats_calculator.compute_period_stats(trades, as_of=as_of),
            patterns=self._pattern_detector.detect_patterns(trades),
            categories=self._categorizer.summarize(categorized),
            heatmap=self._heatmap_aggregator.build_heatmap(trades),
            daily_pnl=self._heatmap_aggregator.build_daily_pnl(trades),
            biases=self._bias_engine.analyze(trades, market_context),
            recent_trades=trades[: self._recent_trades_limit],
            rejected_trades=[str(e) for e in normalized.errors],
        )
