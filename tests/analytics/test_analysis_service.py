# tests/analytics/test_analysis_service.py
"""Tests for TradeAnalysisService."""
from datetime import datetime, timedelta, timezone

from src.analytics.analysis_service import TradeAnalysisService
from src.biases.models import BiasType

NEWEST = datetime(2026, 1, 16, 15, 0, tzinfo=timezone.utc)


def make_raw(index: int, profit: float, side: str = "buy") -> dict:
    """Create a raw camelCase record placed ``index`` days before NEWEST."""
    return {
        "id": f"trade_{index}",
        "symbol": "AAPL",
        "type": side,
        "entryPrice": 100.0,
        "exitPrice": 101.0,
        "positionSize": 10.0,
        "profit": profit,
        "duration": 30,
        "timestamp": (NEWEST - timedelta(days=index)).isoformat(),
    }


class TestTradeAnalysisService:
    """Tests for TradeAnalysisService."""

    def test_drops_malformed_records(self) -> None:
        """A malformed record is reported while the rest are analyzed."""
        bad = make_raw(1, 5.0)
        del bad["timestamp"]
        records = [make_raw(0, 10.0), bad, make_raw(2, -4.0)]

        report = TradeAnalysisService().analyze(records)

        assert report.stats.total_trades == 2
        assert report.stats.total_profit == 6.0
        assert len(report.rejected_trades) == 1
        assert "trade_1" in report.rejected_trades[0]
        assert [t.trade_id for t in report.recent_trades] == ["trade_0", "trade_2"]

    def test_small_history_has_insufficient_bias_data(self) -> None:
        report = TradeAnalysisService().analyze([make_raw(i, 1.0) for i in range(3)])

        assert report.biases.biases == []
        assert report.biases.confidence == 0
        assert report.biases.analyzed_trades == 3
        assert report.patterns[0].type.value == "winningStreak"

    def test_full_report(self) -> None:
        """Every component contributes to the report."""
        records = [make_raw(i, 5.0 if i % 2 else -2.0) for i in range(12)]

        report = TradeAnalysisService(recent_trades_limit=5).analyze(
            records, market_context={"trend": "bearish"}
        )

        assert report.stats.total_trades == 12
        assert report.periods.weekly.total_trades == 8
        assert report.categories.wins == 6
        assert report.categories.losses == 6
        assert sum(report.heatmap.hourly) == report.stats.total_profit
        assert len(report.daily_pnl) == 12
        assert len(report.recent_trades) == 5
        assert report.rejected_trades == []
        bias_types = {b.bias_type for b in report.biases.biases}
        assert BiasType.CONFIRMATION_BIAS in bias_types
