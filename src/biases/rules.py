# src/biases/rules.py
"""Registry of bias rules and their sub-check predicates.

Every sub-check is a pure function of the trade window (newest first), the
market context and the engine settings. It returns a SubCheckHit when it
fires and None otherwise. The engine driver combines the hits of one rule
into a single BiasCheckResult.
"""
from collections.abc import Callable
from dataclasses import dataclass

from src.biases.models import BiasType, MarketContext, MarketTrend, Severity, SubCheckHit
from src.biases.settings import BiasEngineSettings
from src.models.trade_record import TradeRecord, TradeSide

SubCheck = Callable[[list[TradeRecord], MarketContext, BiasEngineSettings], SubCheckHit | None]
Precondition = Callable[[list[TradeRecord], BiasEngineSettings], bool]


@dataclass(frozen=True)
class BiasRule:
    """A bias, the sample it needs, and the sub-checks that can reveal it."""

    bias_type: BiasType
    applies: Precondition
    sub_checks: tuple[SubCheck, ...]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _winners(trades: list[TradeRecord]) -> list[TradeRecord]:
    return [t for t in trades if t.profit > 0]


def _losers(trades: list[TradeRecord]) -> list[TradeRecord]:
    return [t for t in trades if t.profit < 0]


def _recent_pairs(
    trades: list[TradeRecord], settings: BiasEngineSettings
) -> list[tuple[TradeRecord, TradeRecord]]:
    """Return (trade, trade placed just before it) for the recent window."""
    recent = trades[: settings.pair_window]
    return [(recent[i - 1], recent[i]) for i in range(1, len(recent))]


def _growth_percent(current: float, previous: float) -> float:
    return (current / previous - 1) * 100


# Loss aversion


def _has_both_outcomes(trades: list[TradeRecord], settings: BiasEngineSettings) -> bool:
    minimum = settings.loss_aversion_min_each
    return len(_winners(trades)) >= minimum and len(_losers(trades)) >= minimum


def check_duration_disparity(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Losing trades held much longer than winning trades."""
    avg_win_duration = _mean([t.duration_minutes for t in _winners(trades)])
    avg_loss_duration = _mean([t.duration_minutes for t in _losers(trades)])

    if avg_loss_duration <= avg_win_duration * settings.duration_ratio:
        return None

    # Winners closed instantly: no ratio, always the top tier
    if avg_win_duration == 0:
        return SubCheckHit(
            30,
            Severity.HIGH,
            f"Holding losses {avg_loss_duration:.0f} minutes while wins close instantly",
        )

    ratio = avg_loss_duration / avg_win_duration

    severity = Severity.HIGH if ratio > settings.duration_ratio_high else Severity.MEDIUM
    return SubCheckHit(30, severity, f"Holding losses {ratio:.1f}x longer than wins")


def check_loss_size_disparity(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Average percentage loss more than double the average percentage win."""
    avg_win_percent = _mean([t.return_percent for t in _winners(trades)])
    avg_loss_percent = abs(_mean([t.return_percent for t in _losers(trades)]))

    if avg_loss_percent <= avg_win_percent * settings.loss_to_win_percent_ratio:
        return None

    return SubCheckHit(
        40,
        Severity.HIGH,
        f"Average loss ({avg_loss_percent:.1f}%) more than double "
        f"average win ({avg_win_percent:.1f}%)",
    )


def check_breakeven_syndrome(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Most losers were deep in the red yet closed near breakeven."""
    losers = _losers(trades)
    held_to_breakeven = [
        t
        for t in losers
        if abs(t.return_percent) > settings.breakeven_loss_percent
        and abs(t.profit) < t.position_size * settings.breakeven_profit_fraction
    ]

    if len(held_to_breakeven) <= len(losers) * settings.breakeven_share:
        return None

    return SubCheckHit(
        20,
        Severity.MEDIUM,
        f"{len(held_to_breakeven)} losing trades held until nearly breakeven",
    )


# Overconfidence


def current_win_streak(trades: list[TradeRecord]) -> int:
    """Count wins from the most recent trade back to the first non-win."""
    streak = 0
    for trade in trades:
        if trade.profit <= 0:
            break
        streak += 1
    return streak


def check_win_streak(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    streak = current_win_streak(trades)
    if streak < settings.win_streak_min:
        return None

    severity = Severity.HIGH if streak >= settings.win_streak_high else Severity.MEDIUM
    return SubCheckHit(30, severity, f"{streak} consecutive winning trades")


def check_size_after_win(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """A trade sized well above the win that preceded it."""
    for current, previous in _recent_pairs(trades, settings):
        if previous.profit > 0 and (
            current.position_size > previous.position_size * settings.size_after_win_ratio
        ):
            growth = _growth_percent(current.position_size, previous.position_size)
            return SubCheckHit(40, Severity.HIGH, f"Position size increased by {growth:.0f}% after win")
    return None


def _uses_stop(trade: TradeRecord) -> bool:
    return bool(trade.stop_loss)


def check_stop_loss_usage(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Stop losses set far less often than in the previous block of trades."""
    size = settings.stop_usage_window
    recent_with_stop = sum(1 for t in trades[:size] if _uses_stop(t))
    older_with_stop = sum(1 for t in trades[size : size * 2] if _uses_stop(t))

    if older_with_stop == 0:
        return None
    if recent_with_stop >= older_with_stop * settings.stop_usage_drop_ratio:
        return None

    reduction = (1 - recent_with_stop / older_with_stop) * 100
    return SubCheckHit(30, Severity.MEDIUM, f"Stop loss usage reduced by {reduction:.0f}%")


# Revenge trading


def check_quick_reentry(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """A trade entered within minutes of a losing trade."""
    for current, previous in _recent_pairs(trades, settings):
        if previous.profit >= 0:
            continue
        gap_minutes = (current.timestamp - previous.timestamp).total_seconds() / 60
        if 0 <= gap_minutes < settings.reentry_minutes:
            return SubCheckHit(
                50, Severity.HIGH, f"New trade entered {gap_minutes:.0f} minutes after loss"
            )
    return None


def check_size_after_loss(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """A trade sized well above the loss that preceded it."""
    for current, previous in _recent_pairs(trades, settings):
        if previous.profit < 0 and (
            current.position_size > previous.position_size * settings.size_after_loss_ratio
        ):
            growth = _growth_percent(current.position_size, previous.position_size)
            return SubCheckHit(40, Severity.HIGH, f"Position size increased by {growth:.0f}% after loss")
    return None


def _elapsed_hours(a: TradeRecord, b: TradeRecord, settings: BiasEngineSettings) -> float:
    hours = abs((a.timestamp - b.timestamp).total_seconds()) / 3600
    return max(hours, settings.min_elapsed_hours)


def loss_period_frequencies(trades: list[TradeRecord], settings: BiasEngineSettings) -> list[float]:
    """Trade frequency (trades per hour) of each loss period, most recent first.

    A period opens at a losing trade and stays open through further losses;
    it closes at the first non-losing trade once it spans at least
    ``loss_period_trades`` trades. Its frequency is the trade count over the
    hours elapsed between its first and last trade.
    """
    frequencies: list[float] = []
    start: TradeRecord | None = None
    count = 0

    for trade in trades:
        if start is None:
            if trade.profit >= 0:
                continue
            start = trade
        count += 1
        if trade.profit >= 0 and count >= settings.loss_period_trades:
            frequencies.append(count / _elapsed_hours(start, trade, settings))
            start = None
            count = 0

    return frequencies


def average_frequency(trades: list[TradeRecord], settings: BiasEngineSettings) -> float:
    """Trades per hour across the whole window."""
    if len(trades) < 2:
        return 0.0
    return len(trades) / _elapsed_hours(trades[0], trades[-1], settings)


def check_loss_period_frequency(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Trading noticeably faster during the latest run of losses."""
    periods = loss_period_frequencies(trades, settings)
    average = average_frequency(trades, settings)

    if not periods or average == 0:
        return None

    latest = periods[0]
    if latest <= average * settings.loss_period_frequency_ratio:
        return None

    increase = _growth_percent(latest, average)
    return SubCheckHit(
        30, Severity.MEDIUM, f"Trade frequency increased by {increase:.0f}% after losses"
    )


# Confirmation bias


def check_one_sided(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Nearly every recent trade taken in the same direction."""
    recent = trades[: settings.confirmation_window]
    long_ratio = sum(1 for t in recent if t.side == TradeSide.LONG) / len(recent)
    short_ratio = sum(1 for t in recent if t.side == TradeSide.SHORT) / len(recent)

    if max(long_ratio, short_ratio) <= settings.one_sided_ratio:
        return None

    direction = "long" if long_ratio > short_ratio else "short"
    return SubCheckHit(
        60,
        Severity.MEDIUM,
        f"Heavily biased toward {direction} positions "
        f"({max(long_ratio, short_ratio) * 100:.0f}% of recent trades)",
    )


def check_against_trend(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Most recent trades fight the supplied market trend.

    Without a trend hint there is nothing to compare against and the check
    does not fire.
    """
    if context.trend is None:
        return None

    recent = trades[: settings.confirmation_window]
    opposing_side = TradeSide.SHORT if context.trend == MarketTrend.BULLISH else TradeSide.LONG
    against = sum(1 for t in recent if t.side == opposing_side)

    if against / len(recent) <= settings.against_trend_ratio:
        return None

    return SubCheckHit(
        70,
        Severity.HIGH,
        f"{against} of {len(recent)} recent trades against market trend",
        additive=False,
    )


# Anchoring


def check_anchored_holds(
    trades: list[TradeRecord], context: MarketContext, settings: BiasEngineSettings
) -> SubCheckHit | None:
    """Several trades held for hours while price barely moved."""
    anchored = sum(
        1
        for t in trades
        if t.price_move_percent < settings.anchoring_max_move
        and t.duration_minutes / 60 > settings.anchoring_min_hours
    )

    if anchored <= settings.anchoring_min_trades:
        return None

    return SubCheckHit(50, Severity.MEDIUM, f"{anchored} trades held with minimal price movement")


def _min_trades(attribute: str) -> Precondition:
    return lambda trades, settings: len(trades) >= getattr(settings, attribute)


BIAS_RULES: tuple[BiasRule, ...] = (
    BiasRule(
        bias_type=BiasType.LOSS_AVERSION,
        applies=_has_both_outcomes,
        sub_checks=(check_duration_disparity, check_loss_size_disparity, check_breakeven_syndrome),
    ),
    BiasRule(
        bias_type=BiasType.OVERCONFIDENCE,
        applies=_min_trades("overconfidence_min_trades"),
        sub_checks=(check_win_streak, check_size_after_win, check_stop_loss_usage),
    ),
    BiasRule(
        bias_type=BiasType.REVENGE_TRADING,
        applies=_min_trades("revenge_min_trades"),
        sub_checks=(check_quick_reentry, check_size_after_loss, check_loss_period_frequency),
    ),
    BiasRule(
        bias_type=BiasType.CONFIRMATION_BIAS,
        applies=_min_trades("confirmation_min_trades"),
        sub_checks=(check_one_sided, check_against_trend),
    ),
    BiasRule(
        bias_type=BiasType.ANCHORING,
        applies=lambda trades, settings: bool(trades),
        sub_checks=(check_anchored_holds,),
    ),
)
