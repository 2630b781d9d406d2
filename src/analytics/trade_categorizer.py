# src/analytics/trade_categorizer.py
"""Tags trades with outcome, size and holding-period flags."""
from collections.abc import Iterable

from src.analytics.models import CategorizedTrade, CategoryFlags, CategorySummary
from src.analytics.settings import AnalyticsSettings
from src.models.trade_record import TradeInput, TradeRecord, ensure_trades


class TradeCategorizer:
    """Decorates trades with independent category flags."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def categorize(self, trades: Iterable[TradeInput]) -> list[CategorizedTrade]:
        """Return one categorized copy per trade, in input order."""
        return [
            CategorizedTrade(trade=trade, category=self.flags_for(trade))
            for trade in ensure_trades(trades)
        ]

    def flags_for(self, trade: TradeRecord) -> CategoryFlags:
        settings = self._settings
        duration = trade.duration_minutes

        return CategoryFlags(
            is_win=trade.profit > 0,
            is_big_win=trade.profit > trade.position_size * settings.big_win_fraction,
            is_big_loss=trade.profit < -trade.position_size * settings.big_loss_fraction,
            is_scalp=duration < settings.scalp_max_minutes,
            is_swing=settings.scalp_max_minutes <= duration < settings.swing_max_minutes,
            is_long_term=duration >= settings.swing_max_minutes,
        )

    def summarize(self, categorized: Iterable[CategorizedTrade]) -> CategorySummary:
        """Count categorized trades by outcome and holding period.

        Breakeven trades are counted on their own here, unlike the
        win/loss split used for aggregate statistics.
        """
        summary = CategorySummary()

        for item in categorized:
            flags = item.category
            if flags.is_win:
                summary.wins += 1
            elif item.trade.profit < 0:
                summary.losses += 1
            else:
                summary.breakeven += 1

            summary.big_wins += flags.is_big_win
            summary.big_losses += flags.is_big_loss
            summary.scalps += flags.is_scalp
            summary.swings += flags.is_swing
            summary.long_term += flags.is_long_term

        return summary


def categorize(trades: Iterable[TradeInput]) -> list[CategorizedTrade]:
    """Categorize trades with default thresholds."""
    return TradeCategorizer().categorize(trades)
