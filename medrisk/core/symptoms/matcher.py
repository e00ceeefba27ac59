"""
Symptom Matcher

Ranks knowledge-base diseases by overlap with a reported symptom set.
Each disease is scored independently (no renormalization across diseases),
adjusted by optional age-band and gender modifiers, and triaged into an
urgency tier.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from enum import Enum
import math
import numbers

from medrisk.exceptions import MalformedInputError
from medrisk.utils import get_logger, round_half_up
from .knowledge_base import KnowledgeBase, DiseaseDefinition, SeverityTier, default_knowledge_base

logger = get_logger(__name__)


DEFAULT_DISCLAIMER = (
    "This is an AI-based prediction tool for educational purposes only. "
    "Always consult healthcare professionals."
)


class UrgencyTier(str, Enum):
    EMERGENCY = "emergency"
    URGENT = "urgent"
    SOON = "soon"
    ROUTINE = "routine"


def classify_urgency(severity: SeverityTier, matched_count: int) -> UrgencyTier:
    """
    Triage a match.

    serious with 3+ matches -> emergency; serious or 4+ matches -> urgent;
    moderate -> soon; anything else -> routine.
    """
    if severity == SeverityTier.SERIOUS and matched_count >= 3:
        return UrgencyTier.EMERGENCY
    elif severity == SeverityTier.SERIOUS or matched_count >= 4:
        return UrgencyTier.URGENT
    elif severity == SeverityTier.MODERATE:
        return UrgencyTier.SOON
    return UrgencyTier.ROUTINE


@dataclass(frozen=True)
class Demographics:
    """Optional patient context for confidence modifiers."""
    age: Optional[float] = None
    gender: Optional[str] = None

    def __post_init__(self):
        if self.age is not None and (
            isinstance(self.age, bool)
            or not isinstance(self.age, numbers.Real)
            or not math.isfinite(self.age)
            or self.age < 0
        ):
            raise MalformedInputError(f"Invalid age: {self.age}")
        if self.gender is not None:
            if not isinstance(self.gender, str):
                raise MalformedInputError(f"Gender must be a string, got {type(self.gender).__name__}")
            object.__setattr__(self, "gender", self.gender.strip().lower() or None)


@dataclass
class MultiDiseaseMatch:
    """One ranked disease candidate; built fresh per request."""
    disease_name: str
    confidence: int  # 0-100
    matched_symptom_count: int
    total_symptom_count: int
    match_percentage: int
    matched_symptoms: List[str]
    severity_tier: SeverityTier
    urgency_tier: UrgencyTier
    specialization: str
    recommendations: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "disease_name": self.disease_name,
            "confidence": self.confidence,
            "matched_symptom_count": self.matched_symptom_count,
            "total_symptom_count": self.total_symptom_count,
            "match_percentage": self.match_percentage,
            "matched_symptoms": self.matched_symptoms,
            "severity_tier": self.severity_tier.value,
            "urgency_tier": self.urgency_tier.value,
            "specialization": self.specialization,
            "recommendations": self.recommendations,
            "description": self.description,
        }


@dataclass
class SymptomAnalysis:
    """Ranked matches for one symptom query."""
    matches: List[MultiDiseaseMatch]
    selected_symptom_count: int
    unknown_symptoms: List[str]
    total_diseases: int
    disclaimer: str = DEFAULT_DISCLAIMER
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_matches(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "total_matches": self.total_matches,
            "selected_symptom_count": self.selected_symptom_count,
            "unknown_symptoms": self.unknown_symptoms,
            "total_diseases": self.total_diseases,
            "disclaimer": self.disclaimer,
            "timestamp": self.timestamp,
        }


class SymptomMatcher:
    """
    Overlap-based multi-disease matcher over an immutable knowledge base.

    Usage:
        matcher = SymptomMatcher()
        analysis = matcher.match(["chest_pain", "cold_sweat"], age=58)
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        top_n: int = 5,
        age_multiplier: float = 1.2,
        disclaimer: str = DEFAULT_DISCLAIMER
    ):
        if top_n < 1:
            raise ValueError(f"top_n must be >= 1, got {top_n}")
        self.knowledge_base = knowledge_base or default_knowledge_base()
        self.top_n = top_n
        self.age_multiplier = age_multiplier
        self.disclaimer = disclaimer

    def match(
        self,
        symptoms: Iterable[str],
        age: Optional[float] = None,
        gender: Optional[str] = None
    ) -> SymptomAnalysis:
        """
        Rank diseases against the reported symptoms.

        Args:
            symptoms: Symptom ids; duplicates are collapsed, unknown ids reported
            age: Optional age in years
            gender: Optional "male" / "female"

        Returns:
            SymptomAnalysis with at most top_n matches
        """
        selected, unknown = self._select(symptoms)
        demographics = Demographics(age=age, gender=gender)

        candidates: List[Tuple[int, MultiDiseaseMatch]] = []
        for index, disease in enumerate(self.knowledge_base.diseases):
            match = self._score(disease, selected, demographics)
            if match is not None:
                candidates.append((index, match))

        # Declaration order breaks confidence ties
        candidates.sort(key=lambda item: (-item[1].confidence, item[0]))
        ranked = [match for _, match in candidates[: self.top_n]]

        logger.debug(
            f"Symptom match: {len(selected)} selected, {len(unknown)} unknown, "
            f"{len(candidates)} candidates, returning {len(ranked)}"
        )

        return SymptomAnalysis(
            matches=ranked,
            selected_symptom_count=len(selected),
            unknown_symptoms=unknown,
            total_diseases=len(self.knowledge_base.diseases),
            disclaimer=self.disclaimer,
        )

    def _select(self, symptoms: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Deduplicate preserving order and split known from unknown ids."""
        if symptoms is None or isinstance(symptoms, str):
            raise MalformedInputError("Symptoms must be a list of symptom ids")

        seen = set()
        selected: List[str] = []
        unknown: List[str] = []
        for raw in symptoms:
            if not isinstance(raw, str):
                raise MalformedInputError(f"Symptom id must be a string, got {type(raw).__name__}")
            symptom_id = raw.strip().lower()
            if not symptom_id or symptom_id in seen:
                continue
            seen.add(symptom_id)
            if self.knowledge_base.has_symptom(symptom_id):
                selected.append(symptom_id)
            else:
                unknown.append(symptom_id)

        if not seen:
            raise MalformedInputError("Please select at least one symptom")
        if unknown:
            logger.info(f"Ignoring unknown symptom ids: {unknown}")
        return selected, unknown

    def _score(
        self,
        disease: DiseaseDefinition,
        selected: List[str],
        demographics: Demographics
    ) -> Optional[MultiDiseaseMatch]:
        disease_symptoms = set(disease.symptoms)
        matched = [s for s in selected if s in disease_symptoms]
        if not matched:
            return None

        total = len(disease.symptoms)
        match_percentage = len(matched) / total * 100
        confidence = match_percentage

        if demographics.age is not None and disease.age_band is not None:
            if disease.age_band.contains(demographics.age):
                confidence *= self.age_multiplier

        if demographics.gender is not None:
            modifier = disease.gender_modifier(demographics.gender)
            if modifier is not None:
                confidence *= modifier

        return MultiDiseaseMatch(
            disease_name=disease.name,
            confidence=min(round_half_up(confidence), 100),
            matched_symptom_count=len(matched),
            total_symptom_count=total,
            match_percentage=round_half_up(match_percentage),
            matched_symptoms=matched,
            severity_tier=disease.severity,
            urgency_tier=classify_urgency(disease.severity, len(matched)),
            specialization=disease.specialization,
            recommendations=list(disease.recommendations),
            description=disease.description,
        )
