# src/biases/recommendations.py
"""Recommendation text for detected biases."""
from src.biases.models import BiasFinding, BiasType, Severity

FALLBACK_RECOMMENDATION = "Review trading psychology principles."

INSUFFICIENT_DATA_RECOMMENDATION = (
    "Need more trade data for analysis (insufficient data: at least {min_trades} trades required)"
)

BIAS_NAMES: dict[BiasType, str] = {
    BiasType.LOSS_AVERSION: "Loss Aversion",
    BiasType.OVERCONFIDENCE: "Overconfidence",
    BiasType.REVENGE_TRADING: "Revenge Trading",
    BiasType.CONFIRMATION_BIAS: "Confirmation Bias",
    BiasType.ANCHORING: "Anchoring",
}

BIAS_DESCRIPTIONS: dict[BiasType, str] = {
    BiasType.LOSS_AVERSION: "Tendency to prefer avoiding losses rather than acquiring equivalent gains",
    BiasType.OVERCONFIDENCE: "Overestimation of one's own trading abilities and underestimation of risk",
    BiasType.REVENGE_TRADING: "Making impulsive trades to recover losses quickly",
    BiasType.CONFIRMATION_BIAS: (
        "Seeking information that confirms existing beliefs while ignoring contradictory evidence"
    ),
    BiasType.ANCHORING: "Relying too heavily on the first piece of information encountered",
}

RECOMMENDATIONS: dict[tuple[BiasType, Severity], str] = {
    (BiasType.LOSS_AVERSION, Severity.LOW): (
        "Consider setting stricter stop losses based on technical levels, not emotions."
    ),
    (BiasType.LOSS_AVERSION, Severity.MEDIUM): (
        "Implement a trailing stop strategy. Review losing trades to identify exit patterns."
    ),
    (BiasType.LOSS_AVERSION, Severity.HIGH): (
        "Use automated stop losses. Practice letting go of losing positions. "
        "Consider reducing position sizes."
    ),
    (BiasType.OVERCONFIDENCE, Severity.LOW): (
        "Stick to your trading plan. Avoid changing strategies during winning streaks."
    ),
    (BiasType.OVERCONFIDENCE, Severity.MEDIUM): (
        "Reduce position sizes by 25% after 3 consecutive wins. "
        "Document your reasoning for each trade."
    ),
    (BiasType.OVERCONFIDENCE, Severity.HIGH): (
        "Take a 24-hour break from trading. Reset with 50% smaller positions. "
        "Review risk management rules."
    ),
    (BiasType.REVENGE_TRADING, Severity.LOW): (
        "Wait at least 1 hour after a loss before taking another trade."
    ),
    (BiasType.REVENGE_TRADING, Severity.MEDIUM): (
        "Implement a daily loss limit. Stop trading for the day if reached."
    ),
    (BiasType.REVENGE_TRADING, Severity.HIGH): (
        "Take a minimum 4-hour break after any loss. Reduce position size by 50% for next 5 trades."
    ),
    (BiasType.CONFIRMATION_BIAS, Severity.LOW): (
        "Always look for counter-evidence before entering a trade."
    ),
    (BiasType.CONFIRMATION_BIAS, Severity.MEDIUM): (
        "Write down 3 reasons why your trade might fail before entering."
    ),
    (BiasType.CONFIRMATION_BIAS, Severity.HIGH): (
        "Implement a \"devil's advocate\" checklist. "
        "Consider taking the opposite position with a small size."
    ),
    (BiasType.ANCHORING, Severity.LOW): (
        "Use dynamic price targets based on market structure, not entry price."
    ),
    (BiasType.ANCHORING, Severity.MEDIUM): (
        "Implement time-based exits. If trade doesn't move in your favor within X time, exit."
    ),
    (BiasType.ANCHORING, Severity.HIGH): (
        "Use bracket orders with both stop loss and take profit set immediately after entry."
    ),
}

GENERAL_PRACTICES = [
    "Journal every trade with emotions noted",
    "Stick to predefined position sizing",
    "Take regular breaks during trading sessions",
    "Review trading performance weekly",
]

REALTIME_REVENGE_RECOMMENDATION = "Wait at least 1 hour after a loss before next trade"
REALTIME_OVERCONFIDENCE_RECOMMENDATION = (
    "Maintain consistent position sizing regardless of recent performance"
)


def get_recommendation(bias_type: BiasType | str, severity: Severity | str) -> str:
    """Look up the action text for a bias at a severity tier.

    Args:
        bias_type: Bias type or its string value.
        severity: Severity tier or its string value.

    Returns:
        Recommendation text, or a generic fallback for unknown combinations.
    """
    try:
        key = (BiasType(bias_type), Severity(severity))
    except ValueError:
        return FALLBACK_RECOMMENDATION
    return RECOMMENDATIONS.get(key, FALLBACK_RECOMMENDATION)


def build_overall_recommendations(findings: list[BiasFinding], risk_score: int) -> list[str]:
    """Combine a risk banner, per-bias actions and general practices.

    Args:
        findings: Detected biases.
        risk_score: Overall risk score (0-100).

    Returns:
        Ordered list of recommendation lines.
    """
    lines: list[str] = []

    if risk_score > 70:
        lines.append("HIGH RISK DETECTED: Consider taking a break from trading for 24-48 hours.")
        lines.append("Review and adjust your risk management rules immediately.")
        lines.append("Consider paper trading until emotional control improves.")
    elif risk_score > 40:
        lines.append("Moderate risk detected. Focus on disciplined execution of your trading plan.")
        lines.append("Reduce position sizes by 25% until biases are under control.")
    elif risk_score > 20:
        lines.append("Low risk level. Maintain current discipline and continue journaling.")

    if findings:
        lines.append("Specific actions:")
        lines.extend(f"• {f.name}: {f.recommendation}" for f in findings)

    lines.append("General best practices:")
    lines.extend(f"• {practice}" for practice in GENERAL_PRACTICES)

    return lines
