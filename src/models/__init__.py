"""Trade models shared by every analytics component."""

from src.models.trade_record import (
    CandidateTrade,
    NormalizationResult,
    TradeOutcome,
    TradeRecord,
    TradeSide,
    TradeValidationError,
    ensure_trades,
    normalize_trades,
)

__all__ = [
    "CandidateTrade",
    "NormalizationResult",
    "TradeOutcome",
    "TradeRecord",
    "TradeSide",
    "TradeValidationError",
    "ensure_trades",
    "normalize_trades",
]
