# src/biases/bias_engine.py
"""Behavioral bias engine driving the rule registry."""
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Union

from src.biases.models import (
    BiasCheckResult,
    BiasFinding,
    BiasReport,
    BiasType,
    MarketContext,
    Severity,
)
from src.biases.recommendations import (
    BIAS_DESCRIPTIONS,
    BIAS_NAMES,
    INSUFFICIENT_DATA_RECOMMENDATION,
    REALTIME_OVERCONFIDENCE_RECOMMENDATION,
    REALTIME_REVENGE_RECOMMENDATION,
    build_overall_recommendations,
    get_recommendation,
)
from src.biases.rules import BIAS_RULES, BiasRule
from src.biases.settings import BiasEngineSettings
from src.models.trade_record import CandidateTrade, TradeInput, TradeRecord, ensure_trades

logger = logging.getLogger(__name__)

ContextInput = Union[MarketContext, Mapping[str, Any], None]


def _as_context(market_context: ContextInput) -> MarketContext:
    if market_context is None:
        return MarketContext()
    if isinstance(market_context, MarketContext):
        return market_context
    return MarketContext.model_validate(dict(market_context))


def analysis_confidence(trade_count: int) -> int:
    """Confidence in the analysis for a given sample size.

    Args:
        trade_count: Number of trades analyzed.

    Returns:
        95 for 20+ trades, 85 for 10+, 70 for 5+, otherwise 50.
    """
    if trade_count >= 20:
        return 95
    if trade_count >= 10:
        return 85
    if trade_count >= 5:
        return 70
    return 50


class BiasEngine:
    """Diagnoses psychological trading biases from recent trades.

    The engine holds only its settings and rule registry; every call works on
    the trades and context passed in, so one engine can serve any number of
    callers concurrently.
    """

    def __init__(
        self,
        settings: BiasEngineSettings | None = None,
        rules: Sequence[BiasRule] = BIAS_RULES,
    ) -> None:
        self._settings = settings or BiasEngineSettings()
        self._rules = tuple(rules)

    @property
    def settings(self) -> BiasEngineSettings:
        return self._settings

    def analyze(
        self,
        trades: Iterable[TradeInput],
        market_context: ContextInput = None,
    ) -> BiasReport:
        """Run every registered bias rule over the most recent trades.

        Args:
            trades: Trades, newest first.
            market_context: Optional hints such as the market trend.

        Returns:
            BiasReport with detected biases, risk score and recommendations.
        """
        trades = ensure_trades(trades)
        context = _as_context(market_context)
        settings = self._settings

        if len(trades) < settings.min_trades:
            logger.debug(f"Bias analysis skipped: {len(trades)} trades, need {settings.min_trades}")
            return BiasReport(
                recommendations=[
                    INSUFFICIENT_DATA_RECOMMENDATION.format(min_trades=settings.min_trades)
                ],
                analyzed_trades=len(trades),
            )

        window = trades[: settings.window_size]
        findings: list[BiasFinding] = []

        for rule in self._rules:
            result = self.check_bias(rule, window, context)
            if not result.detected:
                continue
            findings.append(
                BiasFinding(
                    bias_type=rule.bias_type,
                    name=BIAS_NAMES.get(rule.bias_type, rule.bias_type.value),
                    confidence=result.confidence,
                    severity=result.severity,
                    evidence=result.evidence,
                    risk_score=result.risk_score,
                    recommendation=get_recommendation(rule.bias_type, result.severity),
                    description=BIAS_DESCRIPTIONS.get(rule.bias_type, ""),
                )
            )

        overall_risk_score = self._overall_risk_score(findings)

        if findings:
            logger.info(
                f"Detected {len(findings)} biases in {len(window)} trades "
                f"(risk score {overall_risk_score})"
            )

        return BiasReport(
            biases=findings,
            overall_risk_score=overall_risk_score,
            confidence=analysis_confidence(len(window)),
            recommendations=build_overall_recommendations(findings, overall_risk_score),
            analyzed_trades=len(window),
        )

    def check_bias(
        self,
        rule: BiasRule,
        trades: list[TradeRecord],
        context: MarketContext,
    ) -> BiasCheckResult:
        """Evaluate one rule: add up its sub-check hits.

        Confidence accumulates across hits and is capped at 100; severity is
        the highest any hit raised it to; evidence clauses are joined in order.
        """
        if not rule.applies(trades, self._settings):
            return BiasCheckResult.not_detected()

        confidence = 0
        severity = Severity.LOW
        evidence: list[str] = []

        for sub_check in rule.sub_checks:
            hit = sub_check(trades, context, self._settings)
            if hit is None:
                continue
            if hit.additive:
                confidence += hit.confidence
            else:
                confidence = max(confidence, hit.confidence)
            severity = severity.escalate(hit.severity)
            evidence.append(hit.evidence)

        if not evidence:
            return BiasCheckResult.not_detected()

        return BiasCheckResult(
            detected=True,
            confidence=min(100, confidence),
            risk_score=severity.risk_score,
            evidence="; ".join(evidence),
            severity=severity,
        )

    def _overall_risk_score(self, findings: list[BiasFinding]) -> int:
        if not findings:
            return 0
        max_score = len(findings) * self._settings.overall_points_per_bias
        total = sum(f.risk_score for f in findings)
        return min(100, round(total / max_score * 100))

    def detect_real_time_bias(
        self,
        candidate: Union[CandidateTrade, TradeRecord, Mapping[str, Any]],
        preceding_trades: Iterable[TradeInput],
        market_context: ContextInput = None,
    ) -> list[BiasFinding]:
        """Warn about biases in a trade that has not been placed yet.

        Only the quick re-entry after a loss and the oversizing after wins
        rules apply here.

        Args:
            candidate: The trade about to be placed.
            preceding_trades: Committed trades, newest first.
            market_context: Optional hints. Neither pre-trade rule uses them yet.

        Returns:
            List of BiasFinding, possibly empty.
        """
        if isinstance(candidate, Mapping):
            candidate = CandidateTrade.model_validate(dict(candidate))
        preceding = ensure_trades(preceding_trades)
        settings = self._settings
        findings: list[BiasFinding] = []

        if preceding and preceding[0].profit < 0:
            gap_minutes = (candidate.timestamp - preceding[0].timestamp).total_seconds() / 60
            if 0 <= gap_minutes < settings.realtime_reentry_minutes:
                findings.append(
                    BiasFinding(
                        bias_type=BiasType.REVENGE_TRADING,
                        name=BIAS_NAMES[BiasType.REVENGE_TRADING],
                        confidence=70,
                        severity=Severity.HIGH,
                        evidence=f"Trade entered {gap_minutes:.0f} minutes after loss",
                        risk_score=Severity.HIGH.risk_score,
                        recommendation=REALTIME_REVENGE_RECOMMENDATION,
                        description=BIAS_DESCRIPTIONS[BiasType.REVENGE_TRADING],
                    )
                )

        lookback = preceding[: settings.realtime_lookback]
        recent_wins = sum(1 for t in lookback if t.profit > 0)
        if lookback and recent_wins >= settings.realtime_min_wins:
            avg_size = sum(t.position_size for t in lookback) / len(lookback)
            if candidate.position_size > avg_size * settings.realtime_size_ratio:
                growth = (candidate.position_size / avg_size - 1) * 100
                findings.append(
                    BiasFinding(
                        bias_type=BiasType.OVERCONFIDENCE,
                        name=BIAS_NAMES[BiasType.OVERCONFIDENCE],
                        confidence=60,
                        severity=Severity.MEDIUM,
                        evidence=f"Position size increased by {growth:.0f}% after {recent_wins} wins",
                        risk_score=Severity.MEDIUM.risk_score,
                        recommendation=REALTIME_OVERCONFIDENCE_RECOMMENDATION,
                        description=BIAS_DESCRIPTIONS[BiasType.OVERCONFIDENCE],
                    )
                )

        if findings:
            logger.info(f"Pre-trade warning: {', '.join(f.bias_type.value for f in findings)}")

        return findings


def analyze(trades: Iterable[TradeInput], market_context: ContextInput = None) -> BiasReport:
    """Analyze biases with default settings."""
    return BiasEngine().analyze(trades, market_context)
