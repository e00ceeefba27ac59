"""
Ensemble Voting Module

Combines several classifiers' verdicts on the same query into one verdict,
keeping every raw vote for transparency.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from medrisk.utils import get_logger, round_half_up

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModelVote:
    """One contributing model's raw verdict."""
    model: str
    prediction: int
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prediction": self.prediction,
            "confidence": self.confidence,
        }


@dataclass
class EnsembleVerdict:
    """Combined verdict with the per-model breakdown."""
    prediction: int
    confidence: int
    votes: List[ModelVote] = field(default_factory=list)
    agreement: int = 0  # voters on the winning side

    @property
    def unanimous(self) -> bool:
        return self.agreement == len(self.votes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prediction": self.prediction,
            "confidence": self.confidence,
            "agreement": self.agreement,
            "unanimous": self.unanimous,
            "votes": [v.to_dict() for v in self.votes],
        }


class EnsembleVoter:
    """
    Majority vote over binary predictions.

    - Strict majority: the majority side wins and the unified confidence is
      the mean confidence of the agreeing voters.
    - Split vote: the side holding the single most confident voter wins and
      that voter's confidence is used. A split with equal top confidences
      resolves to label 0.
    """

    def combine(self, votes: Sequence[ModelVote]) -> EnsembleVerdict:
        """
        Combine two or more votes.

        Args:
            votes: ModelVote per contributing classifier

        Returns:
            EnsembleVerdict
        """
        if len(votes) < 2:
            raise ValueError(f"Ensemble needs at least 2 votes, got {len(votes)}")

        positive = [v for v in votes if v.prediction == 1]
        negative = [v for v in votes if v.prediction != 1]

        if len(positive) != len(negative):
            winners = positive if len(positive) > len(negative) else negative
            confidence = round_half_up(sum(v.confidence for v in winners) / len(winners))
        else:
            top_positive = max(v.confidence for v in positive)
            top_negative = max(v.confidence for v in negative)
            winners = positive if top_positive > top_negative else negative
            confidence = max(top_positive, top_negative)
            logger.debug(f"Split ensemble vote resolved by confidence ({top_positive} vs {top_negative})")

        return EnsembleVerdict(
            prediction=1 if winners is positive else 0,
            confidence=confidence,
            votes=list(votes),
            agreement=len(winners),
        )
