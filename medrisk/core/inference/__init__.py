"""
Inference Module

Normalization, distance classification, rule-based risk scoring and
ensemble voting shared by every disease model.
"""
from .normalization import FeatureRange, normalize, normalize_vector, normalize_matrix
from .knn import DistanceClassifier, DistanceMetric, ClassifierVerdict
from .risk_scoring import (
    RiskLevel, RiskBands, RiskScorer, RiskAssessment,
    ScoringRule, ThresholdRule, Tier, EqualsRule, OutsideRangeRule, ScaledRule, Direction,
)
from .ensemble import EnsembleVoter, EnsembleVerdict, ModelVote
from .evaluation import ModelEvaluation

__all__ = [
    "FeatureRange",
    "normalize",
    "normalize_vector",
    "normalize_matrix",
    "DistanceClassifier",
    "DistanceMetric",
    "ClassifierVerdict",
    "RiskLevel",
    "RiskBands",
    "RiskScorer",
    "RiskAssessment",
    "ScoringRule",
    "ThresholdRule",
    "Tier",
    "EqualsRule",
    "OutsideRangeRule",
    "ScaledRule",
    "Direction",
    "EnsembleVoter",
    "EnsembleVerdict",
    "ModelVote",
    "ModelEvaluation",
]
