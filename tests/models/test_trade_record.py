# tests/models/test_trade_record.py
"""Tests for TradeRecord validation and normalization."""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.models.trade_record import (
    CandidateTrade,
    TradeOutcome,
    TradeRecord,
    TradeSide,
    TradeValidationError,
    ensure_trades,
    normalize_trades,
)


def make_raw(**overrides) -> dict:
    """Create a raw camelCase trade record as an upstream store would."""
    raw = {
        "id": "trade_1",
        "symbol": "AAPL",
        "type": "buy",
        "entryPrice": 100.0,
        "exitPrice": 105.0,
        "positionSize": 10.0,
        "profit": 50.0,
        "duration": 45,
        "timestamp": "2026-01-12T14:30:00Z",
        "notes": "breakout",
    }
    raw.update(overrides)
    return raw


class TestTradeRecord:
    """Tests for TradeRecord."""

    def test_from_raw_camel_case(self) -> None:
        """from_raw should accept camelCase keys and derive side from type."""
        trade = TradeRecord.from_raw(make_raw())

        assert trade.trade_id == "trade_1"
        assert trade.side == TradeSide.LONG
        assert trade.entry_price == 100.0
        assert trade.position_size == 10.0
        assert trade.duration_minutes == 45
        assert trade.timestamp == datetime(2026, 1, 12, 14, 30, tzinfo=timezone.utc)

    def test_sell_maps_to_short(self) -> None:
        """A sell order type should become a short trade."""
        trade = TradeRecord.from_raw(make_raw(type="sell"))

        assert trade.side == TradeSide.SHORT

    def test_naive_timestamp_is_utc(self) -> None:
        """Naive timestamps should be interpreted as UTC."""
        trade = TradeRecord.from_raw(make_raw(timestamp="2026-01-12T14:30:00"))

        assert trade.timestamp.tzinfo is not None
        assert trade.timestamp.utcoffset() == timedelta(0)
        assert trade.timestamp.hour == 14

    def test_aware_timestamp_converted_to_utc(self) -> None:
        """Offset timestamps should be converted to UTC."""
        trade = TradeRecord.from_raw(make_raw(timestamp="2026-01-12T09:30:00-05:00"))

        assert trade.timestamp.hour == 14

    def test_duration_defaults_to_zero(self) -> None:
        """duration_minutes should default to 0 when absent."""
        raw = make_raw()
        del raw["duration"]

        assert TradeRecord.from_raw(raw).duration_minutes == 0

    def test_outcome_folds_breakeven_into_loss(self) -> None:
        """Zero profit should count as a loss outcome."""
        win = TradeRecord.from_raw(make_raw(profit=1.0))
        flat = TradeRecord.from_raw(make_raw(profit=0.0))

        assert win.outcome == TradeOutcome.WIN
        assert flat.outcome == TradeOutcome.LOSS
        assert flat.is_breakeven is True

    def test_derived_percentages(self) -> None:
        """return_percent and price_move_percent use the entry notional."""
        trade = TradeRecord.from_raw(make_raw())

        assert trade.notional == 1000.0
        assert trade.return_percent == pytest.approx(5.0)
        assert trade.price_move_percent == pytest.approx(0.05)

    def test_missing_timestamp_identifies_field_and_record(self) -> None:
        """A missing timestamp should fail fast naming field and record."""
        raw = make_raw(id="trade_42")
        del raw["timestamp"]

        with pytest.raises(TradeValidationError) as exc_info:
            TradeRecord.from_raw(raw)

        assert exc_info.value.field == "timestamp"
        assert exc_info.value.trade_id == "trade_42"
        assert "trade_42" in str(exc_info.value)

    def test_missing_profit_rejected(self) -> None:
        """Profit is never defaulted."""
        raw = make_raw()
        del raw["profit"]

        with pytest.raises(TradeValidationError) as exc_info:
            TradeRecord.from_raw(raw)

        assert exc_info.value.field == "profit"

    def test_non_positive_position_size_rejected(self) -> None:
        """Position size must be positive."""
        with pytest.raises(TradeValidationError) as exc_info:
            TradeRecord.from_raw(make_raw(positionSize=0))

        assert exc_info.value.field in ("position_size", "positionSize")

    def test_record_without_id_uses_position(self) -> None:
        """Records without an id are identified by their batch position."""
        raw = make_raw()
        del raw["id"]
        del raw["profit"]

        with pytest.raises(TradeValidationError) as exc_info:
            TradeRecord.from_raw(raw, position=3)

        assert exc_info.value.trade_id == "#3"

    def test_record_is_immutable(self) -> None:
        """Trades cannot be mutated once built."""
        trade = TradeRecord.from_raw(make_raw())

        with pytest.raises(ValidationError):
            trade.profit = 0.0

    def test_local_time(self) -> None:
        """local_time should convert to the requested zone."""
        trade = TradeRecord.from_raw(make_raw(timestamp="2026-01-12T14:30:00Z"))

        assert trade.local_time("America/New_York").hour == 9
        assert trade.local_time().hour == 14


class TestCandidateTrade:
    """Tests for CandidateTrade."""

    def test_accepts_camel_case(self) -> None:
        candidate = CandidateTrade.model_validate(
            {"symbol": "AAPL", "positionSize": 2.0, "timestamp": "2026-01-12T14:30:00"}
        )

        assert candidate.position_size == 2.0
        assert candidate.timestamp.tzinfo is not None


class TestNormalizeTrades:
    """Tests for normalize_trades."""

    def test_skips_malformed_records(self) -> None:
        """Malformed records should be reported without dropping valid ones."""
        bad = make_raw(id="bad")
        del bad["positionSize"]
        records = [make_raw(id="a"), bad, make_raw(id="b")]

        result = normalize_trades(records)

        assert [t.trade_id for t in result.trades] == ["a", "b"]
        assert len(result.errors) == 1
        assert result.errors[0].trade_id == "bad"

    def test_strict_raises_first_error(self) -> None:
        """Strict mode should raise instead of skipping."""
        bad = make_raw(id="bad")
        del bad["profit"]

        with pytest.raises(TradeValidationError):
            normalize_trades([make_raw(), bad], strict=True)

    def test_non_mapping_record(self) -> None:
        """Values that are not mappings are rejected."""
        result = normalize_trades([make_raw(), "not a trade"])

        assert len(result.trades) == 1
        assert result.errors[0].field == "record"

    def test_ensure_trades_passes_records_through(self) -> None:
        """ensure_trades should keep existing TradeRecords as they are."""
        trade = TradeRecord.from_raw(make_raw())

        assert ensure_trades([trade]) == [trade]
        assert ensure_trades([make_raw(), trade])[1] is trade
