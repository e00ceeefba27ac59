"""
Disease Model Base

One generic engine parameterized by a per-disease configuration value object.
Each query flows through normalization and the distance classifier while the
raw values are independently scored by the rule table; the two are merged
into a single PredictionResult.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from enum import Enum
import collections.abc
import math
import numbers
import threading
import numpy as np

from medrisk.core.inference.normalization import FeatureRange, normalize_matrix, normalize_vector
from medrisk.core.inference.knn import DistanceClassifier, DistanceMetric, ClassifierVerdict
from medrisk.core.inference.risk_scoring import RiskBands, RiskLevel, RiskScorer, ScoringRule
from medrisk.core.inference.ensemble import EnsembleVoter, ModelVote
from medrisk.core.inference.evaluation import ModelEvaluation
from medrisk.exceptions import EngineError, MalformedInputError, ModelNotReadyError
from medrisk.utils import get_logger, round_half_up

logger = get_logger(__name__)


class DiseaseKey(str, Enum):
    """Supported single-condition models."""
    CARDIAC = "cardiac"
    METABOLIC = "metabolic"
    RENAL = "renal"
    ONCOLOGIC = "oncologic"
    HEPATIC = "hepatic"

    @classmethod
    def from_string(cls, name: str) -> "DiseaseKey":
        """Parse a disease identifier with common aliases."""
        name_lower = name.strip().lower().replace(" ", "_").replace("-", "_")

        mapping = {
            "cardiac": cls.CARDIAC,
            "heart": cls.CARDIAC,
            "heart_disease": cls.CARDIAC,
            "cardiovascular": cls.CARDIAC,
            "metabolic": cls.METABOLIC,
            "diabetes": cls.METABOLIC,
            "type_2_diabetes": cls.METABOLIC,
            "renal": cls.RENAL,
            "kidney": cls.RENAL,
            "kidney_disease": cls.RENAL,
            "ckd": cls.RENAL,
            "oncologic": cls.ONCOLOGIC,
            "oncology": cls.ONCOLOGIC,
            "breast_cancer": cls.ONCOLOGIC,
            "cancer": cls.ONCOLOGIC,
            "hepatic": cls.HEPATIC,
            "liver": cls.HEPATIC,
            "liver_disease": cls.HEPATIC,
        }

        if name_lower in mapping:
            return mapping[name_lower]
        raise MalformedInputError(f"Unknown disease model: {name}")


class ModelState(str, Enum):
    """Model lifecycle; a failed load returns to Uninitialized."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class FeatureSpec:
    """Named clinical field at a fixed vector position."""
    name: str
    range: FeatureRange
    label: str = ""
    unit: str = ""
    default: Optional[float] = None  # None means required

    @property
    def required(self) -> bool:
        return self.default is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label or self.name.replace("_", " ").title(),
            "unit": self.unit,
            "required": self.required,
            "default": self.default,
            "calibration_range": [self.range.min, self.range.max],
        }


@dataclass(frozen=True)
class RecommendationTiers:
    """Three fixed recommendation lists keyed only by risk score."""
    high: Tuple[str, ...]
    moderate: Tuple[str, ...]
    low: Tuple[str, ...]

    def select(self, score: int, bands: RiskBands) -> List[str]:
        if score >= bands.high:
            return list(self.high)
        elif score >= bands.moderate:
            return list(self.moderate)
        return list(self.low)


INSUFFICIENT_DATA_RECOMMENDATIONS: Tuple[str, ...] = (
    "The system needs training data to make predictions.",
    "Please ensure a valid training dataset is loaded for this model.",
    "Consult a healthcare professional for proper diagnosis.",
)


ProfileBuilder = Callable[[Mapping[str, float]], Dict[str, Any]]


@dataclass(frozen=True)
class DiseaseConfig:
    """
    Complete numeric policy for one condition.

    features, rules, risk bands, recommendation tiers and k are all data; the
    profile builder is a small pure function over the raw values.
    """
    key: DiseaseKey
    name: str
    features: Tuple[FeatureSpec, ...]
    rules: Tuple[ScoringRule, ...]
    bands: RiskBands
    recommendations: RecommendationTiers
    profile: ProfileBuilder
    k: int = 7
    positive_label: str = "Positive"
    negative_label: str = "Negative"
    specialization: str = "General Medicine"

    def __post_init__(self):
        names = self.feature_names
        if len(set(names)) != len(names):
            raise ValueError(f"{self.name}: duplicate feature names")
        unknown = [r.feature for r in self.rules if r.feature not in names]
        if unknown:
            raise ValueError(f"{self.name}: rules reference unknown features {unknown}")

    @property
    def feature_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.features)

    @property
    def ranges(self) -> Tuple[FeatureRange, ...]:
        return tuple(f.range for f in self.features)

    def ensemble_members(self) -> List[DistanceClassifier]:
        """Classifiers consulted when the ensemble is requested."""
        return [
            DistanceClassifier(self.k, DistanceMetric.EUCLIDEAN),
            DistanceClassifier(self.k, DistanceMetric.MANHATTAN),
            DistanceClassifier(self.k + 2, DistanceMetric.EUCLIDEAN),
        ]


@dataclass(frozen=True)
class TrainingRecord:
    """Labeled feature vector."""
    features: Tuple[float, ...]
    label: int


RecordLike = Union[TrainingRecord, Mapping[str, Any]]


def ingest_records(
    records: Iterable[RecordLike],
    n_features: int
) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Convert records into (features, labels) arrays.

    Rows that are not records, or that carry a non-finite value, the wrong
    length or a label other than exactly 0 or 1, are dropped rather than
    failing the load.

    Returns:
        Tuple of (feature matrix, label vector, dropped row count)
    """
    rows: List[List[float]] = []
    labels: List[int] = []
    dropped = 0

    for record in records:
        if isinstance(record, TrainingRecord):
            features, label = record.features, record.label
        elif isinstance(record, collections.abc.Mapping):
            features, label = record.get("features"), record.get("label")
        else:
            logger.warning(f"Dropping training row of type {type(record).__name__}")
            dropped += 1
            continue

        if not _is_binary_label(label) or features is None or isinstance(features, (str, bytes)):
            dropped += 1
            continue

        try:
            values = [float(v) for v in features]
        except (TypeError, ValueError):
            dropped += 1
            continue

        if len(values) != n_features:
            logger.warning(f"Dropping training row with {len(values)} features (expected {n_features})")
            dropped += 1
            continue
        if not all(math.isfinite(v) for v in values):
            dropped += 1
            continue

        rows.append(values)
        labels.append(int(label))

    matrix = np.array(rows, dtype=np.float64).reshape(len(rows), n_features)
    return matrix, np.array(labels, dtype=np.int64), dropped


def _is_binary_label(label: Any) -> bool:
    """Exactly 0 or 1; booleans, strings and fractions are rejected."""
    if isinstance(label, bool) or not isinstance(label, numbers.Real):
        return False
    return label == 0 or label == 1


@dataclass
class PredictionResult:
    """Merged classifier + rule-score outcome for one disease query."""
    disease_key: str
    disease_name: str
    binary_prediction: int
    prediction_label: str
    confidence: int  # 0-100, from the classifier
    risk_score: int  # 0-100, from the rule table
    risk_level: RiskLevel
    risk_factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    patient_profile: Dict[str, Any] = field(default_factory=dict)
    neighbors: int = 0
    model_votes: Optional[List[ModelVote]] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def has_disease_risk(self) -> bool:
        return self.binary_prediction == 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "disease_key": self.disease_key,
            "disease_name": self.disease_name,
            "binary_prediction": self.binary_prediction,
            "prediction_label": self.prediction_label,
            "has_disease_risk": self.has_disease_risk,
            "confidence": self.confidence,
            "risk_score": self.risk_score,
            "risk_level": self.risk_level.value,
            "risk_factors": self.risk_factors,
            "recommendations": self.recommendations,
            "patient_profile": self.patient_profile,
            "neighbors": self.neighbors,
            "model_votes": [v.to_dict() for v in self.model_votes] if self.model_votes is not None else None,
            "timestamp": self.timestamp,
        }


class DiseaseModel:
    """
    Generic single-condition risk model.

    The training set is ingested once by load() and is read-only afterwards,
    so concurrent predictions need no locking.
    """

    def __init__(self, config: DiseaseConfig):
        self.config = config
        self.classifier = DistanceClassifier(config.k)
        self.scorer = RiskScorer(config.rules, config.bands)
        self.voter = EnsembleVoter()

        self._state = ModelState.UNINITIALIZED
        self._lock = threading.Lock()
        self._features = np.empty((0, len(config.features)))
        self._labels = np.empty(0, dtype=np.int64)
        self._dropped = 0
        self._evaluation: Optional[ModelEvaluation] = None

    @property
    def key(self) -> DiseaseKey:
        return self.config.key

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == ModelState.READY

    @property
    def training_size(self) -> int:
        return int(self._labels.size)

    def load(self, records: Iterable[RecordLike]) -> int:
        """
        Ingest the training set and mark the model ready.

        Args:
            records: TrainingRecords or {"features", "label"} mappings

        Returns:
            Number of stored records
        """
        with self._lock:
            if self._state != ModelState.UNINITIALIZED:
                raise EngineError(f"{self.config.name} model cannot be loaded twice (state: {self._state.value})")
            self._state = ModelState.LOADING

        try:
            raw, labels, dropped = ingest_records(records, len(self.config.features))
        except Exception:
            # Back to Uninitialized so the load can be retried
            with self._lock:
                self._state = ModelState.UNINITIALIZED
            raise
        normalized = normalize_matrix(raw, self.config.ranges)
        normalized.flags.writeable = False
        labels.flags.writeable = False

        self._features = normalized
        self._labels = labels
        self._dropped = dropped

        with self._lock:
            self._state = ModelState.READY

        logger.info(
            f"{self.config.name} model ready: {labels.size} records"
            + (f" ({dropped} dropped)" if dropped else "")
        )
        return int(labels.size)

    def extract_features(self, fields: Mapping[str, Any]) -> Dict[str, float]:
        """
        Build the ordered raw feature mapping from named clinical fields.

        Raises:
            MalformedInputError: missing, unknown, non-numeric or non-finite fields
        """
        values: Dict[str, float] = {}
        errors: List[str] = []

        known = set(self.config.feature_names)
        for name in fields:
            if name not in known:
                errors.append(f"{name} is not a {self.config.name} field")

        for spec in self.config.features:
            raw = fields.get(spec.name)
            if raw is None or raw == "":
                if spec.required:
                    errors.append(f"{spec.name} is required")
                    continue
                raw = spec.default
            try:
                value = float(raw)
            except (TypeError, ValueError):
                errors.append(f"{spec.name} must be a number")
                continue
            if not math.isfinite(value):
                errors.append(f"{spec.name} must be a finite number")
                continue
            values[spec.name] = value

        if errors:
            raise MalformedInputError("Validation failed", details=errors)
        return values

    def predict(self, fields: Mapping[str, Any], use_ensemble: bool = False) -> PredictionResult:
        """
        Assess one query given as named clinical fields.

        Args:
            fields: Mapping of feature name to value
            use_ensemble: Combine several KNN variants instead of the single classifier

        Returns:
            PredictionResult (Insufficient Data sentinel when the training set is empty)
        """
        self._ensure_ready()
        if self.training_size == 0:
            return self._insufficient_data()
        return self._assess(self.extract_features(fields), use_ensemble)

    def predict_vector(self, vector: Sequence[float], use_ensemble: bool = False) -> PredictionResult:
        """Assess one query already laid out in calibration-table order."""
        self._ensure_ready()
        if self.training_size == 0:
            return self._insufficient_data()

        names = self.config.feature_names
        if len(vector) != len(names):
            raise MalformedInputError(f"Expected {len(names)} features, got {len(vector)}")
        return self._assess(self.extract_features(dict(zip(names, vector))), use_ensemble)

    def evaluate(self, records: Iterable[RecordLike], use_ensemble: bool = False) -> ModelEvaluation:
        """
        Score held-out records against the loaded training set.

        Records are taken in the order given and go through the same
        ingestion rules as training rows. The outcome is kept and reported
        by statistics().

        Args:
            records: Labeled rows that were not part of the training set
            use_ensemble: Evaluate the ensemble instead of the single classifier

        Returns:
            ModelEvaluation with the confusion matrix and derived percentages

        Raises:
            ModelNotReadyError: model has not finished loading
            MalformedInputError: no usable held-out rows
        """
        self._ensure_ready()
        raw, labels, dropped = ingest_records(records, len(self.config.features))
        if labels.size == 0:
            raise MalformedInputError(
                f"No usable evaluation records for {self.config.name}",
                details=[f"{dropped} rows dropped"] if dropped else None,
            )

        queries = normalize_matrix(raw, self.config.ranges)
        predictions = np.array([self._classify(query, use_ensemble)[0] for query in queries])
        evaluation = ModelEvaluation.from_predictions(predictions, labels, dropped)
        self._evaluation = evaluation

        logger.info(
            f"{self.config.name} evaluated on {evaluation.test_records} records: "
            f"accuracy={evaluation.accuracy}% f1={evaluation.f1_score}%"
        )
        return evaluation

    def statistics(self) -> Dict[str, Any]:
        """Training-set summary, plus the latest hold-out evaluation if any."""
        total = self.training_size
        positive = int(self._labels.sum()) if total else 0
        evaluation = self._evaluation
        return {
            "disease": self.config.name,
            "state": self._state.value,
            "total_records": total,
            "positive_count": positive,
            "negative_count": total - positive,
            "positive_percentage": round_half_up(positive / total * 100) if total else 0,
            "dropped_records": self._dropped,
            "test_records": evaluation.test_records if evaluation else 0,
            "model_accuracy": evaluation.to_dict() if evaluation else None,
        }

    def describe(self) -> Dict[str, Any]:
        """Static model description: fields, k and risk bands."""
        return {
            "key": self.config.key.value,
            "name": self.config.name,
            "specialization": self.config.specialization,
            "k": self.config.k,
            "risk_bands": {"moderate": self.config.bands.moderate, "high": self.config.bands.high},
            "features": [f.to_dict() for f in self.config.features],
        }

    def _ensure_ready(self) -> None:
        if self._state != ModelState.READY:
            raise ModelNotReadyError(self.config.name, self._state.value)

    def _classify(
        self,
        query: np.ndarray,
        use_ensemble: bool
    ) -> Tuple[int, int, int, Optional[List[ModelVote]]]:
        """Returns (prediction, confidence, neighbors, model votes) for a normalized query."""
        if not use_ensemble:
            verdict = self.classifier.predict(self._features, self._labels, query)
            return verdict.prediction, verdict.confidence, verdict.neighbors, None

        verdicts = [
            (member, member.predict(self._features, self._labels, query))
            for member in self.config.ensemble_members()
        ]
        model_votes = [self._vote(member, verdict) for member, verdict in verdicts]
        ensemble = self.voter.combine(model_votes)
        neighbors = max(verdict.neighbors for _, verdict in verdicts)
        return ensemble.prediction, ensemble.confidence, neighbors, model_votes

    def _assess(self, values: Dict[str, float], use_ensemble: bool) -> PredictionResult:
        query = normalize_vector(list(values.values()), self.config.ranges)
        prediction, confidence, neighbors, model_votes = self._classify(query, use_ensemble)

        assessment = self.scorer.score(values)

        return PredictionResult(
            disease_key=self.config.key.value,
            disease_name=self.config.name,
            binary_prediction=prediction,
            prediction_label=self.config.positive_label if prediction == 1 else self.config.negative_label,
            confidence=confidence,
            risk_score=assessment.score,
            risk_level=assessment.level,
            risk_factors=assessment.factors,
            recommendations=self.config.recommendations.select(assessment.score, self.config.bands),
            patient_profile=self.config.profile(values),
            neighbors=neighbors,
            model_votes=model_votes,
        )

    @staticmethod
    def _vote(member: DistanceClassifier, verdict: ClassifierVerdict) -> ModelVote:
        return ModelVote(model=member.name, prediction=verdict.prediction, confidence=verdict.confidence)

    def _insufficient_data(self) -> PredictionResult:
        logger.warning(f"{self.config.name} queried with an empty training set")
        return PredictionResult(
            disease_key=self.config.key.value,
            disease_name=self.config.name,
            binary_prediction=0,
            prediction_label="Insufficient Data",
            confidence=0,
            risk_score=0,
            risk_level=RiskLevel.UNKNOWN,
            risk_factors=["No training data available"],
            recommendations=list(INSUFFICIENT_DATA_RECOMMENDATIONS),
            patient_profile={},
            neighbors=0,
        )
