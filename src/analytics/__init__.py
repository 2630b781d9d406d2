"""Analytics for executed trade histories."""

from .analysis_service import AnalysisReport, TradeAnalysisService
from .heatmap_aggregator import HeatmapAggregator
from .models import (
    CategorizedTrade,
    CategoryFlags,
    CategorySummary,
    DailyPnL,
    HeatmapResult,
    PatternFinding,
    PatternType,
    PeriodComparison,
    StatsResult,
    SymbolPerformance,
)
from .pattern_detector import PatternDetector
from .settings import AnalyticsSettings
from .stats_calculator import StatsCalculator
from .trade_categorizer import TradeCategorizer

__all__ = [
    "AnalysisReport",
    "AnalyticsSettings",
    "CategorizedTrade",
    "CategoryFlags",
    "CategorySummary",
    "DailyPnL",
    "HeatmapAggregator",
    "HeatmapResult",
    "PatternDetector",
    "PatternFinding",
    "PatternType",
    "PeriodComparison",
    "StatsCalculator",
    "StatsResult",
    "SymbolPerformance",
    "TradeAnalysisService",
    "TradeCategorizer",
]
