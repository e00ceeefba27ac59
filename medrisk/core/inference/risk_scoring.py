"""
Risk Scoring Module

Deterministic, explainable rule-based scoring over raw clinical values.
Independent of the distance classifier: each disease declares an ordered
table of rules whose point contributions are summed and clamped to 0-100.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, List, Mapping, Optional, Sequence, Tuple
from enum import Enum

from medrisk.utils import get_logger, clamp_percent

logger = get_logger(__name__)


class RiskLevel(str, Enum):
    """Qualitative risk level; UNKNOWN is reserved for insufficient data."""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    UNKNOWN = "Unknown"


class Direction(str, Enum):
    """Which side of a threshold carries risk."""
    ABOVE = "above"
    BELOW = "below"


@dataclass(frozen=True)
class RiskBands:
    """Per-disease score boundaries for Moderate and High."""
    moderate: int
    high: int

    def __post_init__(self):
        if not 0 <= self.moderate <= self.high <= 100:
            raise ValueError(f"Invalid risk bands: moderate={self.moderate}, high={self.high}")

    def classify(self, score: int) -> RiskLevel:
        """Convert a 0-100 score to a risk level."""
        if score >= self.high:
            return RiskLevel.HIGH
        elif score >= self.moderate:
            return RiskLevel.MODERATE
        return RiskLevel.LOW


@dataclass(frozen=True)
class RuleOutcome:
    """Contribution of one rule for one value."""
    points: float = 0.0
    factor: Optional[str] = None

    @property
    def triggered(self) -> bool:
        return self.points != 0 or self.factor is not None


NO_CONTRIBUTION = RuleOutcome()


class ScoringRule(ABC):
    """A rule reads one raw feature and yields a point contribution."""

    feature: str

    @abstractmethod
    def evaluate(self, value: float) -> RuleOutcome:
        """Score a single raw feature value."""


@dataclass(frozen=True)
class Tier:
    """One step of a threshold rule."""
    threshold: float
    points: float
    factor: Optional[str] = None
    inclusive: bool = False  # >= / <= instead of > / <


@dataclass(frozen=True)
class ThresholdRule(ScoringRule):
    """
    Ordered tiers, most severe first; the first matching tier wins.

    Example: glucose >= 140 -> 35, >= 100 -> 20, >= 70 -> 5.
    """
    feature: str
    tiers: Tuple[Tier, ...]
    direction: Direction = Direction.ABOVE

    def evaluate(self, value: float) -> RuleOutcome:
        for tier in self.tiers:
            if self._hits(value, tier):
                return RuleOutcome(tier.points, tier.factor)
        return NO_CONTRIBUTION

    def _hits(self, value: float, tier: Tier) -> bool:
        if self.direction == Direction.ABOVE:
            return value >= tier.threshold if tier.inclusive else value > tier.threshold
        return value <= tier.threshold if tier.inclusive else value < tier.threshold


@dataclass(frozen=True)
class EqualsRule(ScoringRule):
    """Binary flag rule, e.g. exercise-induced angina == 1."""
    feature: str
    target: float
    points: float
    factor: Optional[str] = None

    def evaluate(self, value: float) -> RuleOutcome:
        if value == self.target:
            return RuleOutcome(self.points, self.factor)
        return NO_CONTRIBUTION


@dataclass(frozen=True)
class OutsideRangeRule(ScoringRule):
    """Points when the value leaves [low, high]."""
    feature: str
    low: float
    high: float
    points: float
    factor_below: Optional[str] = None
    factor_above: Optional[str] = None

    def evaluate(self, value: float) -> RuleOutcome:
        if value < self.low:
            return RuleOutcome(self.points, self.factor_below)
        if value > self.high:
            return RuleOutcome(self.points, self.factor_above)
        return NO_CONTRIBUTION


@dataclass(frozen=True)
class ScaledRule(ScoringRule):
    """Linear contribution (points per unit), optionally reported past a threshold."""
    feature: str
    points_per_unit: float
    factor: Optional[str] = None
    factor_above: Optional[float] = None

    def evaluate(self, value: float) -> RuleOutcome:
        points = value * self.points_per_unit
        factor = None
        if self.factor is not None and self.factor_above is not None and value > self.factor_above:
            factor = self.factor
        return RuleOutcome(points, factor)


@dataclass
class RiskAssessment:
    """Rule-based risk outcome for one query."""
    score: int  # 0-100
    level: RiskLevel
    factors: List[str] = field(default_factory=list)
    contributions: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "factors": self.factors,
            "contributions": {k: round(v, 2) for k, v in self.contributions.items()},
        }


class RiskScorer:
    """
    Evaluates a disease's rule table against raw feature values.

    Contributions are summed, rounded half-up and clamped into [0, 100].
    Factor texts from triggered rules are reported in rule order.
    """

    def __init__(self, rules: Sequence[ScoringRule], bands: RiskBands):
        self.rules = tuple(rules)
        self.bands = bands

    def score(self, values: Mapping[str, float]) -> RiskAssessment:
        """
        Score a named feature mapping.

        Args:
            values: Raw (unnormalized) feature values keyed by feature name

        Returns:
            RiskAssessment with clamped score, level and factors
        """
        total = 0.0
        factors: List[str] = []
        contributions: Dict[str, float] = {}

        for rule in self.rules:
            outcome = rule.evaluate(float(values[rule.feature]))
            if not outcome.triggered:
                continue
            total += outcome.points
            contributions[rule.feature] = contributions.get(rule.feature, 0.0) + outcome.points
            if outcome.factor:
                factors.append(outcome.factor)

        score = clamp_percent(total)
        logger.debug(f"Rule score {total:.1f} -> {score} ({len(factors)} factors)")

        return RiskAssessment(
            score=score,
            level=self.bands.classify(score),
            factors=factors,
            contributions=contributions,
        )
