# src/analytics/pattern_detector.py
"""Detector for mechanical patterns in recent trade sequences."""
import logging
from collections.abc import Iterable
from zoneinfo import ZoneInfo

from src.analytics.models import PatternFinding, PatternType
from src.analytics.settings import AnalyticsSettings
from src.models.trade_record import TradeInput, TradeRecord, ensure_trades

logger = logging.getLogger(__name__)

# Fixed confidence per rule
WINNING_STREAK_CONFIDENCE = 85
LOSING_STREAK_CONFIDENCE = 90
MARTINGALE_CONFIDENCE = 75
RISK_AVERSION_CONFIDENCE = 70
MORNING_SPECIALIST_CONFIDENCE = 80


class PatternDetector:
    """Finds streaks, outcome-driven sizing changes and session focus.

    Trades are expected newest first: index 0 is the most recent trade and
    index i + 1 is the trade that came just before index i.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()
        self._zone = ZoneInfo(self._settings.timezone)

    def detect_patterns(self, trades: Iterable[TradeInput]) -> list[PatternFinding]:
        """Detect every pattern present in the trade sequence.

        Args:
            trades: Trades to inspect, newest first.

        Returns:
            List of PatternFinding, empty when fewer than the minimum
            number of trades are available.
        """
        trades = ensure_trades(trades)

        if len(trades) < self._settings.pattern_min_trades:
            logger.debug(
                f"Pattern detection skipped: {len(trades)} trades, "
                f"need {self._settings.pattern_min_trades}"
            )
            return []

        recent = trades[: self._settings.streak_window]

        patterns: list[PatternFinding] = []
        patterns.extend(self._detect_streaks(recent))
        patterns.extend(self._detect_sizing(recent))

        morning = self._detect_morning_focus(trades)
        if morning is not None:
            patterns.append(morning)

        return patterns

    def _detect_streaks(self, recent: list[TradeRecord]) -> list[PatternFinding]:
        """Report a streak when the whole recent window shares one outcome."""
        if len(recent) < self._settings.streak_min_length:
            return []

        if all(t.profit > 0 for t in recent):
            return [
                PatternFinding(
                    type=PatternType.WINNING_STREAK,
                    confidence=WINNING_STREAK_CONFIDENCE,
                    description=f"{len(recent)} consecutive winning trades",
                    implication="Risk of overconfidence bias",
                )
            ]

        if all(t.profit <= 0 for t in recent):
            return [
                PatternFinding(
                    type=PatternType.LOSING_STREAK,
                    confidence=LOSING_STREAK_CONFIDENCE,
                    description=f"{len(recent)} consecutive losing trades",
                    implication="Possible tilt/revenge trading",
                )
            ]

        return []

    def _detect_sizing(self, recent: list[TradeRecord]) -> list[PatternFinding]:
        """Count size jumps after losses and size cuts after wins.

        Each consecutive pair compares a trade with the one placed just
        before it.
        """
        settings = self._settings
        increases_after_loss = 0
        decreases_after_win = 0

        for i in range(1, len(recent)):
            current, previous = recent[i - 1], recent[i]

            if previous.profit < 0 and (
                current.position_size > previous.position_size * settings.martingale_size_ratio
            ):
                increases_after_loss += 1

            if previous.profit > 0 and (
                current.position_size < previous.position_size * settings.risk_aversion_size_ratio
            ):
                decreases_after_win += 1

        patterns: list[PatternFinding] = []

        if increases_after_loss >= settings.sizing_min_occurrences:
            patterns.append(
                PatternFinding(
                    type=PatternType.MARTINGALE_PATTERN,
                    confidence=MARTINGALE_CONFIDENCE,
                    description="Increasing position size after losses",
                    implication="Potential revenge trading behavior",
                )
            )

        if decreases_after_win >= settings.sizing_min_occurrences:
            patterns.append(
                PatternFinding(
                    type=PatternType.RISK_AVERSION_AFTER_WIN,
                    confidence=RISK_AVERSION_CONFIDENCE,
                    description="Reducing position size after wins",
                    implication="Missing profit opportunities due to fear",
                )
            )

        return patterns

    def _detect_morning_focus(self, trades: list[TradeRecord]) -> PatternFinding | None:
        """Report a morning specialist when recent trades cluster in the morning."""
        settings = self._settings

        if len(trades) <= settings.morning_min_trades:
            return None

        window = trades[: settings.morning_window]
        morning_trades = sum(
            1
            for t in window
            if settings.morning_start_hour <= t.local_time(self._zone).hour <= settings.morning_end_hour
        )

        if morning_trades / len(window) <= settings.morning_ratio:
            return None

        return PatternFinding(
            type=PatternType.MORNING_SPECIALIST,
            confidence=MORNING_SPECIALIST_CONFIDENCE,
            description=(
                f"Most recent trades placed in morning hours "
                f"({settings.morning_start_hour:02d}:00-{settings.morning_end_hour:02d}:59 "
                f"{settings.timezone})"
            ),
            implication="Consider focusing on morning sessions",
        )


def detect_patterns(trades: Iterable[TradeInput]) -> list[PatternFinding]:
    """Detect patterns with default settings."""
    return PatternDetector().detect_patterns(trades)
