"""
Unit Tests for Rule-Based Risk Scoring
"""
import pytest

from medrisk.core.inference.risk_scoring import (
    RiskLevel, RiskBands, RiskScorer, Direction,
    ThresholdRule, Tier, EqualsRule, OutsideRangeRule, ScaledRule,
)


@pytest.fixture
def glucose_rule() -> ThresholdRule:
    return ThresholdRule("glucose", (
        Tier(140, 35, "High fasting glucose level", inclusive=True),
        Tier(100, 20, "Elevated fasting glucose", inclusive=True),
        Tier(70, 5, inclusive=True),
    ))


class TestRiskBands:
    """Tests for per-disease risk bands."""

    def test_classify(self):
        """Test boundaries are inclusive lower bounds."""
        bands = RiskBands(moderate=35, high=60)
        assert bands.classify(34) == RiskLevel.LOW
        assert bands.classify(35) == RiskLevel.MODERATE
        assert bands.classify(59) == RiskLevel.MODERATE
        assert bands.classify(60) == RiskLevel.HIGH

    def test_invalid_bands(self):
        """Test moderate above high is rejected."""
        with pytest.raises(ValueError):
            RiskBands(moderate=70, high=60)


class TestRules:
    """Tests for individual rule kinds."""

    def test_inclusive_threshold_tiers(self, glucose_rule):
        """Test first matching tier wins at inclusive boundaries."""
        assert glucose_rule.evaluate(140).points == 35
        assert glucose_rule.evaluate(139.9).points == 20
        assert glucose_rule.evaluate(100).points == 20
        assert glucose_rule.evaluate(70).points == 5
        assert not glucose_rule.evaluate(69).triggered

    def test_tier_without_factor(self, glucose_rule):
        """Test a tier can add points without a factor text."""
        outcome = glucose_rule.evaluate(80)
        assert outcome.points == 5
        assert outcome.factor is None

    def test_strict_threshold(self):
        """Test strict comparison falls through to the next tier."""
        rule = ThresholdRule("age", (Tier(45, 10, "Age over 45"), Tier(35, 5)))
        assert rule.evaluate(45).points == 5
        assert rule.evaluate(46).factor == "Age over 45"

    def test_below_direction(self):
        """Test low values carry risk for BELOW rules."""
        rule = ThresholdRule("hemoglobin", (
            Tier(10, 15, "Low hemoglobin (anemia)"),
            Tier(12, 8),
        ), direction=Direction.BELOW)
        assert rule.evaluate(9).points == 15
        assert rule.evaluate(11).points == 8
        assert not rule.evaluate(12).triggered

    def test_equals_rule(self):
        """Test binary flag rule."""
        rule = EqualsRule("sex", 1, 10, "Male gender has higher risk")
        assert rule.evaluate(1).points == 10
        assert not rule.evaluate(0).triggered

    def test_outside_range_rule(self):
        """Test both sides of an outside-range rule."""
        rule = OutsideRangeRule("total_proteins", 6, 8.3, 10, factor_below="Low total proteins")
        assert rule.evaluate(5).factor == "Low total proteins"
        assert rule.evaluate(9).points == 10
        assert rule.evaluate(9).factor is None
        assert not rule.evaluate(7).triggered

    def test_scaled_rule(self):
        """Test linear points with an optional factor threshold."""
        rule = ScaledRule("st_depression", 10, "Significant ST depression", factor_above=2)
        assert rule.evaluate(1.5).points == pytest.approx(15)
        assert rule.evaluate(1.5).factor is None
        assert rule.evaluate(2.3).factor == "Significant ST depression"
        assert not rule.evaluate(0).triggered


class TestRiskScorer:
    """Tests for score accumulation."""

    def test_sums_and_orders_factors(self, glucose_rule):
        """Test points sum and factors keep rule order."""
        scorer = RiskScorer([
            glucose_rule,
            EqualsRule("smoker", 1, 20, "Smoker"),
        ], RiskBands(30, 60))

        result = scorer.score({"glucose": 150, "smoker": 1})

        assert result.score == 55
        assert result.level == RiskLevel.MODERATE
        assert result.factors == ["High fasting glucose level", "Smoker"]
        assert result.contributions == {"glucose": 35, "smoker": 20}

    def test_clamped_high(self):
        """Test extreme inputs clamp to 100."""
        scorer = RiskScorer([ScaledRule("x", 10)], RiskBands(35, 60))
        result = scorer.score({"x": 1000})
        assert result.score == 100
        assert result.level == RiskLevel.HIGH

    def test_clamped_low(self):
        """Test negative totals clamp to 0."""
        scorer = RiskScorer([ScaledRule("x", 8)], RiskBands(35, 60))
        assert scorer.score({"x": -5}).score == 0

    def test_fractional_total_rounds_half_up(self):
        """Test fractional point totals round half-up."""
        scorer = RiskScorer([ScaledRule("x", 1)], RiskBands(35, 60))
        assert scorer.score({"x": 12.5}).score == 13

    def test_to_dict(self, glucose_rule):
        """Test serialization uses the level literal."""
        data = RiskScorer([glucose_rule], RiskBands(30, 60)).score({"glucose": 50}).to_dict()
        assert data["level"] == "Low"
        assert data["score"] == 0
        assert data["factors"] == []
