# src/biases/models.py
"""Data models for behavioral bias detection."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BiasType(str, Enum):
    """Psychological biases the engine can diagnose."""

    LOSS_AVERSION = "lossAversion"
    OVERCONFIDENCE = "overconfidence"
    REVENGE_TRADING = "revengeTrading"
    CONFIRMATION_BIAS = "confirmationBias"
    ANCHORING = "anchoring"


class Severity(str, Enum):
    """Severity tier of a detected bias."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def risk_score(self) -> int:
        """Fixed risk points for this tier.

        Returns:
            15 for LOW, 30 for MEDIUM, 50 for HIGH.
        """
        return _SEVERITY_RISK[self]

    def escalate(self, other: "Severity") -> "Severity":
        """Return the more severe of the two tiers."""
        return other if other.rank > self.rank else self


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}
_SEVERITY_RISK = {Severity.LOW: 15, Severity.MEDIUM: 30, Severity.HIGH: 50}


class MarketTrend(str, Enum):
    """Prevailing market direction supplied by the caller."""

    BULLISH = "bullish"
    BEARISH = "bearish"


class MarketContext(BaseModel):
    """Optional market hints passed alongside the trades."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    trend: Optional[MarketTrend] = None


@dataclass(frozen=True)
class SubCheckHit:
    """Contribution of one triggered sub-check to a bias.

    Attributes:
        confidence: Points contributed to the bias confidence.
        severity: Severity this sub-check raises the bias to.
        evidence: Human-readable clause describing what was seen.
        additive: Add confidence when True; otherwise raise the running
            confidence to at least this value.
    """

    confidence: int
    severity: Severity
    evidence: str
    additive: bool = True


@dataclass
class BiasCheckResult:
    """Outcome of running every sub-check of one bias."""

    detected: bool
    confidence: int = 0
    risk_score: int = 0
    evidence: str = ""
    severity: Severity = Severity.LOW

    @classmethod
    def not_detected(cls) -> "BiasCheckResult":
        return cls(detected=False)


@dataclass
class BiasFinding:
    """A detected bias with its score and recommended action.

    description is the fixed one-line explanation of the bias type.
    """

    bias_type: BiasType
    name: str
    confidence: int
    severity: Severity
    evidence: str
    risk_score: int
    recommendation: str
    description: str = ""


@dataclass
class BiasReport:
    """All biases detected in a trade window plus overall guidance.

    Attributes:
        biases: Detected biases, in registry order.
        overall_risk_score: Aggregate risk from 0 to 100.
        confidence: Confidence in the analysis given the sample size.
        recommendations: Banner, per-bias actions and general practices.
        analyzed_trades: Number of trades in the analysis window.
    """

    biases: list[BiasFinding] = field(default_factory=list)
    overall_risk_score: int = 0
    confidence: int = 0
    recommendations: list[str] = field(default_factory=list)
    analyzed_trades: int = 0
