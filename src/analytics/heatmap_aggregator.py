# src/analytics/heatmap_aggregator.py
"""Aggregates profit by hour of day, weekday, symbol and date."""
from collections import defaultdict
from collections.abc import Iterable
from zoneinfo import ZoneInfo

from src.analytics.models import DailyPnL, HeatmapResult, SymbolPerformance
from src.analytics.settings import AnalyticsSettings
from src.models.trade_record import TradeInput, ensure_trades


class HeatmapAggregator:
    """Buckets realized profit by time and symbol.

    Every timestamp is converted to the configured zone (UTC by default)
    before its hour, weekday or calendar date is taken.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()
        self._zone = ZoneInfo(self._settings.timezone)

    def build_heatmap(self, trades: Iterable[TradeInput]) -> HeatmapResult:
        """Aggregate profit into hourly, weekday and symbol buckets.

        Args:
            trades: Trades to aggregate.

        Returns:
            HeatmapResult with symbols sorted by descending profit.
        """
        hourly = [0.0] * 24
        daily = [0.0] * 7
        symbol_profit: dict[str, float] = defaultdict(float)
        symbol_trades: dict[str, int] = defaultdict(int)
        symbol_wins: dict[str, int] = defaultdict(int)

        for trade in ensure_trades(trades):
            local = trade.local_time(self._zone)
            hourly[local.hour] += trade.profit
            daily[local.isoweekday() % 7] += trade.profit

            symbol_profit[trade.symbol] += trade.profit
            symbol_trades[trade.symbol] += 1
            if trade.profit > 0:
                symbol_wins[trade.symbol] += 1

        symbols = [
            SymbolPerformance(
                symbol=symbol,
                profit=round(profit, 2),
                trade_count=symbol_trades[symbol],
                win_rate=round(symbol_wins[symbol] / symbol_trades[symbol] * 100, 1),
            )
            for symbol, profit in symbol_profit.items()
        ]
        symbols.sort(key=lambda s: s.profit, reverse=True)

        return HeatmapResult(
            hourly=[round(p, 2) for p in hourly],
            daily=[round(p, 2) for p in daily],
            symbols=symbols,
            timezone=self._settings.timezone,
        )

    def build_daily_pnl(
        self,
        trades: Iterable[TradeInput],
        days: int | None = None,
    ) -> list[DailyPnL]:
        """Build a per-date profit series with a running cumulative total.

        Args:
            trades: Trades to aggregate.
            days: Number of most recent dates to keep. Defaults to
                ``daily_pnl_days`` from settings.

        Returns:
            DailyPnL entries in ascending date order. The cumulative total
            starts at the first kept date.
        """
        limit = days if days is not None else self._settings.daily_pnl_days
        date_pnl: dict = defaultdict(float)

        for trade in ensure_trades(trades):
            date_pnl[trade.local_time(self._zone).date()] += trade.profit

        kept = sorted(date_pnl.items())[-limit:] if limit > 0 else []

        series: list[DailyPnL] = []
        cumulative = 0.0
        for day, profit in kept:
            cumulative += profit
            series.append(DailyPnL(date=day, profit=round(profit, 2), cumulative=round(cumulative, 2)))

        return series


def build_heatmap(trades: Iterable[TradeInput]) -> HeatmapResult:
    """Build a heatmap in UTC with default settings."""
    return HeatmapAggregator().build_heatmap(trades)
