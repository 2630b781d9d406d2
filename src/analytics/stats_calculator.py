# src/analytics/stats_calculator.py
"""Calculator for trading performance statistics."""
import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from src.analytics.models import PeriodComparison, StatsResult
from src.analytics.settings import AnalyticsSettings
from src.models.trade_record import TradeInput, TradeRecord, ensure_trades


class StatsCalculator:
    """Calculates aggregate performance metrics from executed trades."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def compute_stats(self, trades: Iterable[TradeInput]) -> StatsResult:
        """Calculate statistics for a trade sequence.

        Wins are trades with profit > 0; everything else counts as a loss.
        Drawdown and Sharpe are computed over the trades in the order given.

        Args:
            trades: Trades to analyze.

        Returns:
            StatsResult with all calculated values.
        """
        trades = ensure_trades(trades)

        if not trades:
            return self._empty_stats()

        winners = [t for t in trades if t.profit > 0]
        losers = [t for t in trades if t.profit <= 0]

        total_trades = len(trades)
        win_rate = len(winners) / total_trades * 100

        total_profit = sum(t.profit for t in trades)
        gross_profit = sum(t.profit for t in winners)
        gross_loss = abs(sum(t.profit for t in losers))

        if gross_loss == 0:
            profit_factor = self._settings.profit_factor_cap
        else:
            profit_factor = gross_profit / gross_loss

        avg_profit = gross_profit / len(winners) if winners else 0.0
        avg_loss = gross_loss / len(losers) if losers else 0.0

        expectancy = (win_rate / 100 * avg_profit) - ((1 - win_rate / 100) * avg_loss)

        balances = self._cumulative_balances(trades)
        max_drawdown = self._calculate_max_drawdown(balances)
        sharpe_ratio = self._calculate_sharpe_ratio(balances)

        profits = [t.profit for t in trades]

        return StatsResult(
            total_trades=total_trades,
            winning_trades=len(winners),
            losing_trades=len(losers),
            win_rate=round(win_rate, 1),
            total_profit=round(total_profit, 2),
            avg_profit=round(avg_profit, 2),
            avg_loss=round(avg_loss, 2),
            profit_factor=round(profit_factor, 2),
            max_drawdown=round(max_drawdown, 2),
            sharpe_ratio=round(sharpe_ratio, 2),
            expectancy=round(expectancy, 2),
            best_trade=max(profits),
            worst_trade=min(profits),
        )

    def compute_period_stats(
        self,
        trades: Iterable[TradeInput],
        as_of: datetime | None = None,
    ) -> PeriodComparison:
        """Calculate stats for the trailing 7 and 30 days plus all time.

        Args:
            trades: Trades to analyze, newest first.
            as_of: Reference instant for the trailing windows. Defaults to
                the newest trade's timestamp so results stay reproducible.

        Returns:
            PeriodComparison with weekly, monthly and all-time stats.
        """
        trades = ensure_trades(trades)

        if as_of is None:
            as_of = max((t.timestamp for t in trades), default=datetime.now(timezone.utc))
        elif as_of.tzinfo is None:
            as_of = as_of.replace(tzinfo=timezone.utc)

        weekly = [t for t in trades if t.timestamp >= as_of - timedelta(days=7)]
        monthly = [t for t in trades if t.timestamp >= as_of - timedelta(days=30)]

        return PeriodComparison(
            weekly=self.compute_stats(weekly),
            monthly=self.compute_stats(monthly),
            all_time=self.compute_stats(trades),
        )

    def _empty_stats(self) -> StatsResult:
        """Return zero-valued stats for an empty trade list."""
        return StatsResult(
            total_trades=0,
            winning_trades=0,
            losing_trades=0,
            win_rate=0.0,
            total_profit=0.0,
            avg_profit=0.0,
            avg_loss=0.0,
            profit_factor=0.0,
            max_drawdown=0.0,
            sharpe_ratio=0.0,
            expectancy=0.0,
            best_trade=None,
            worst_trade=None,
        )

    @staticmethod
    def _cumulative_balances(trades: list[TradeRecord]) -> list[float]:
        balances: list[float] = []
        running = 0.0
        for trade in trades:
            running += trade.profit
            balances.append(running)
        return balances

    def _calculate_max_drawdown(self, balances: list[float]) -> float:
        """Calculate the largest peak-to-trough drop of the balance curve.

        The peak starts at zero, so an opening loss counts as drawdown.

        Args:
            balances: Running cumulative profit after each trade.

        Returns:
            Maximum drawdown in currency units (always >= 0).
        """
        peak = 0.0
        max_drawdown = 0.0

        for balance in balances:
            if balance > peak:
                peak = balance
            drawdown = peak - balance
            if drawdown > max_drawdown:
                max_drawdown = drawdown

        return max_drawdown

    def _calculate_sharpe_ratio(self, balances: list[float]) -> float:
        """Calculate the annualized Sharpe ratio of balance changes.

        The mean and standard deviation are taken over the step-to-step
        deltas; the variance divides by max(1, n - 1).

        Args:
            balances: Running cumulative profit after each trade.

        Returns:
            Annualized Sharpe ratio, 0 when the deviation is 0.
        """
        if len(balances) < 2:
            return 0.0

        steps = len(balances) - 1
        deltas = [balances[i] - balances[i - 1] for i in range(1, len(balances))]
        avg_delta = sum(deltas) / steps

        variance = sum((d - avg_delta) ** 2 for d in deltas) / max(1, steps)
        std_dev = math.sqrt(variance)

        if std_dev == 0:
            return 0.0

        annualization_factor = math.sqrt(self._settings.annualization_days)
        return (avg_delta / std_dev) * annualization_factor


def compute_stats(trades: Iterable[TradeInput]) -> StatsResult:
    """Compute stats with default settings."""
    return StatsCalculator().compute_stats(trades)
