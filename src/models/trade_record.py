# src/models/trade_record.py
"""Canonical trade representation and input normalization."""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


class TradeSide(str, Enum):
    """Direction of an executed trade."""

    LONG = "long"
    SHORT = "short"


class TradeOutcome(str, Enum):
    """Aggregate outcome of a trade. Breakeven folds into LOSS."""

    WIN = "win"
    LOSS = "loss"


# Order types accepted from upstream records
_TYPE_TO_SIDE = {
    "buy": TradeSide.LONG,
    "sell": TradeSide.SHORT,
    "long": TradeSide.LONG,
    "short": TradeSide.SHORT,
}


class TradeValidationError(ValueError):
    """Raised when a trade record is missing or has an invalid field.

    Attributes:
        trade_id: Identifier of the offending record (or its position).
        field: Name of the first invalid field.
        reason: Human-readable validation message.
    """

    def __init__(self, trade_id: str, field: str, reason: str) -> None:
        self.trade_id = trade_id
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid trade {trade_id!r}: field '{field}' {reason}")


class TradeRecord(BaseModel):
    """A single executed trade.

    Records are immutable once built. Naive timestamps are read as UTC so that
    every time-of-day calculation downstream works on the same clock.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trade_id: str = Field(default="", validation_alias=AliasChoices("trade_id", "id"))
    symbol: str = Field(min_length=1)
    side: TradeSide
    entry_price: float = Field(gt=0, validation_alias=AliasChoices("entry_price", "entryPrice"))
    exit_price: float = Field(gt=0, validation_alias=AliasChoices("exit_price", "exitPrice"))
    position_size: float = Field(
        gt=0, validation_alias=AliasChoices("position_size", "positionSize")
    )
    profit: float
    duration_minutes: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("duration_minutes", "durationMinutes", "duration"),
    )
    timestamp: datetime
    stop_loss: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("stop_loss", "stopLoss")
    )
    take_profit: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("take_profit", "takeProfit")
    )
    notes: str = ""

    @model_validator(mode="before")
    @classmethod
    def derive_side(cls, data: Any) -> Any:
        """Derive side from a buy/sell ``type`` when no side is given."""
        if isinstance(data, Mapping) and "side" not in data and "type" in data:
            data = dict(data)
            data["side"] = data.pop("type")
        if isinstance(data, Mapping) and isinstance(data.get("side"), str):
            side = _TYPE_TO_SIDE.get(data["side"].lower())
            if side is not None:
                data = dict(data)
                data["side"] = side
        return data

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        """Attach UTC to naive timestamps and convert aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def outcome(self) -> TradeOutcome:
        return TradeOutcome.WIN if self.profit > 0 else TradeOutcome.LOSS

    @property
    def is_win(self) -> bool:
        return self.profit > 0

    @property
    def is_breakeven(self) -> bool:
        return self.profit == 0

    @property
    def notional(self) -> float:
        """Entry value of the position (entry price times size)."""
        return self.entry_price * self.position_size

    @property
    def return_percent(self) -> float:
        """Profit as a percentage of the entry notional."""
        return self.profit / self.notional * 100

    @property
    def price_move_percent(self) -> float:
        """Absolute exit-versus-entry move as a fraction of entry price."""
        return abs(self.exit_price - self.entry_price) / self.entry_price

    def local_time(self, zone: Union[str, ZoneInfo] = "UTC") -> datetime:
        """Return the timestamp converted to the given zone."""
        tz = ZoneInfo(zone) if isinstance(zone, str) else zone
        return self.timestamp.astimezone(tz)

    @classmethod
    def from_raw(cls, data: Mapping[str, Any], position: int | None = None) -> "TradeRecord":
        """Build a TradeRecord from an upstream mapping.

        Args:
            data: Raw record, snake_case or camelCase keys.
            position: Index of the record in its batch, used to identify
                records that carry no id.

        Returns:
            Validated TradeRecord.

        Raises:
            TradeValidationError: If a required field is missing or invalid.
        """
        trade_id = str(data.get("trade_id") or data.get("id") or "")
        if not trade_id:
            trade_id = f"#{position}" if position is not None else "<unknown>"

        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            first = e.errors()[0]
            loc = first.get("loc") or ("record",)
            raise TradeValidationError(trade_id, str(loc[0]), first.get("msg", "is invalid")) from e


class CandidateTrade(BaseModel):
    """A trade that is about to be placed, used for pre-trade warnings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str = ""
    side: Optional[TradeSide] = None
    position_size: float = Field(
        gt=0, validation_alias=AliasChoices("position_size", "positionSize")
    )
    timestamp: datetime
    entry_price: Optional[float] = Field(
        default=None, gt=0, validation_alias=AliasChoices("entry_price", "entryPrice")
    )

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


@dataclass
class NormalizationResult:
    """Valid trades plus the errors for every record that was dropped."""

    trades: list[TradeRecord] = field(default_factory=list)
    errors: list[TradeValidationError] = field(default_factory=list)


TradeInput = Union[TradeRecord, Mapping[str, Any]]


def normalize_trades(records: Iterable[TradeInput], strict: bool = False) -> NormalizationResult:
    """Validate a batch of records, preserving order.

    Args:
        records: TradeRecord instances or raw mappings, newest first.
        strict: Raise on the first malformed record instead of skipping it.

    Returns:
        NormalizationResult with the valid trades and collected errors.

    Raises:
        TradeValidationError: In strict mode, for the first malformed record.
    """
    result = NormalizationResult()

    for position, record in enumerate(records):
        if isinstance(record, TradeRecord):
            result.trades.append(record)
            continue
        if not isinstance(record, Mapping):
            error = TradeValidationError(f"#{position}", "record", "is not a mapping")
        else:
            try:
                result.trades.append(TradeRecord.from_raw(record, position))
                continue
            except TradeValidationError as e:
                error = e

        if strict:
            raise error
        logger.warning(f"Skipping malformed trade: {error}")
        result.errors.append(error)

    return result


def ensure_trades(trades: Iterable[TradeInput]) -> list[TradeRecord]:
    """Return trades as TradeRecords, dropping malformed raw records."""
    trades = list(trades)
    if all(isinstance(t, TradeRecord) for t in trades):
        return trades
    return normalize_trades(trades).trades
