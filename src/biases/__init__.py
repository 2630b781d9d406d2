"""Behavioral bias detection for trade histories."""

from .bias_engine import BiasEngine, analysis_confidence
from .models import (
    BiasCheckResult,
    BiasFinding,
    BiasReport,
    BiasType,
    MarketContext,
    MarketTrend,
    Severity,
    SubCheckHit,
)
from .recommendations import get_recommendation
from .rules import BIAS_RULES, BiasRule
from .settings import BiasEngineSettings

__all__ = [
    "BIAS_RULES",
    "BiasCheckResult",
    "BiasEngine",
    "BiasEngineSettings",
    "BiasFinding",
    "BiasReport",
    "BiasRule",
    "BiasType",
    "MarketContext",
    "MarketTrend",
    "Severity",
    "SubCheckHit",
    "analysis_confidence",
    "get_recommendation",
]
