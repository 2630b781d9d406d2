# tests/biases/test_recommendations.py
"""Tests for recommendation lookup and assembly."""
from src.biases.models import BiasFinding, BiasType, Severity
from src.biases.recommendations import (
    FALLBACK_RECOMMENDATION,
    GENERAL_PRACTICES,
    RECOMMENDATIONS,
    build_overall_recommendations,
    get_recommendation,
)


def make_finding(bias_type: BiasType = BiasType.OVERCONFIDENCE) -> BiasFinding:
    """Create a finding for testing."""
    return BiasFinding(
        bias_type=bias_type,
        name="Overconfidence",
        confidence=30,
        severity=Severity.MEDIUM,
        evidence="4 consecutive winning trades",
        risk_score=30,
        recommendation=get_recommendation(bias_type, Severity.MEDIUM),
    )


class TestGetRecommendation:
    """Tests for get_recommendation."""

    def test_every_combination_has_text(self) -> None:
        for bias_type in BiasType:
            for severity in Severity:
                assert (bias_type, severity) in RECOMMENDATIONS

    def test_lookup(self) -> None:
        text = get_recommendation(BiasType.LOSS_AVERSION, Severity.HIGH)

        assert text.startswith("Use automated stop losses.")

    def test_accepts_string_values(self) -> None:
        assert get_recommendation("anchoring", "low") == RECOMMENDATIONS[
            (BiasType.ANCHORING, Severity.LOW)
        ]

    def test_unknown_combination_falls_back(self) -> None:
        assert get_recommendation("greed", Severity.HIGH) == FALLBACK_RECOMMENDATION
        assert get_recommendation(BiasType.ANCHORING, "extreme") == FALLBACK_RECOMMENDATION


class TestBuildOverallRecommendations:
    """Tests for build_overall_recommendations."""

    def test_high_risk_banner(self) -> None:
        lines = build_overall_recommendations([make_finding()], 80)

        assert lines[0].startswith("HIGH RISK DETECTED:")
        assert lines[3] == "Specific actions:"
        assert lines[4].startswith("• Overconfidence: Reduce position sizes by 25%")

    def test_moderate_risk_banner(self) -> None:
        lines = build_overall_recommendations([make_finding()], 50)

        assert lines[0].startswith("Moderate risk detected.")
        assert lines[2] == "Specific actions:"

    def test_low_risk_banner(self) -> None:
        lines = build_overall_recommendations([make_finding()], 30)

        assert lines[0].startswith("Low risk level.")
        assert lines[1] == "Specific actions:"

    def test_no_findings(self) -> None:
        """Only general practices remain without findings or risk."""
        lines = build_overall_recommendations([], 0)

        assert lines == ["General best practices:"] + [f"• {p}" for p in GENERAL_PRACTICES]

    def test_banner_thresholds_exclusive(self) -> None:
        assert build_overall_recommendations([], 70)[0].startswith("Moderate")
        assert build_overall_recommendations([], 40)[0].startswith("Low")
        assert build_overall_recommendations([], 20)[0] == "General best practices:"
