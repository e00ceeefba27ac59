"""
Distance Classifier Module

Generic k-nearest-neighbor binary classifier over normalized feature vectors.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum
import numpy as np
from scipy.spatial.distance import cdist

from medrisk.exceptions import MalformedInputError
from medrisk.utils import get_logger, round_half_up

logger = get_logger(__name__)


class DistanceMetric(str, Enum):
    """Supported distance functions."""
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"


@dataclass(frozen=True)
class ClassifierVerdict:
    """Majority-vote outcome for one query."""
    prediction: int
    confidence: int  # 0-100
    neighbors: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prediction": self.prediction,
            "confidence": self.confidence,
            "neighbors": self.neighbors,
        }


EMPTY_VERDICT = ClassifierVerdict(prediction=0, confidence=50, neighbors=0)


def compute_distances(
    training: np.ndarray,
    query: np.ndarray,
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN
) -> np.ndarray:
    """Distance from the query to every training row."""
    # cdist names Manhattan distance "cityblock"
    scipy_metric = "cityblock" if metric == DistanceMetric.MANHATTAN else "euclidean"
    return cdist(training, query.reshape(1, -1), metric=scipy_metric)[:, 0]


class DistanceClassifier:
    """
    KNN majority-vote classifier.

    Stateless between calls: the training matrix and labels are passed in on
    every prediction. Vote ties resolve to the lowest numeric label.
    """

    def __init__(
        self,
        k: int = 7,
        metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
        name: Optional[str] = None
    ):
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        self.k = k
        self.metric = DistanceMetric(metric)
        self.name = name or f"knn_{self.metric.value}_k{k}"

    def predict(
        self,
        training_features: np.ndarray,
        training_labels: np.ndarray,
        query: np.ndarray
    ) -> ClassifierVerdict:
        """
        Classify a normalized query vector.

        Args:
            training_features: (n_samples, n_features) normalized matrix
            training_labels: (n_samples,) integer labels
            query: (n_features,) normalized vector

        Returns:
            ClassifierVerdict with prediction, confidence and neighbor count
        """
        n_samples = len(training_labels)
        if n_samples == 0:
            return EMPTY_VERDICT

        query = np.asarray(query, dtype=np.float64)
        if query.shape != (training_features.shape[1],):
            raise MalformedInputError(
                f"Query has {query.size} features, training set has {training_features.shape[1]}"
            )

        k = min(self.k, n_samples)
        distances = compute_distances(training_features, query, self.metric)

        # Stable sort keeps training order among equidistant neighbors
        nearest = np.argsort(distances, kind="stable")[:k]

        # np.unique sorts labels ascending and argmax takes the first maximum,
        # so ties go to the lowest label
        labels, counts = np.unique(training_labels[nearest], return_counts=True)
        winner = int(np.argmax(counts))

        verdict = ClassifierVerdict(
            prediction=int(labels[winner]),
            confidence=round_half_up(counts[winner] / k * 100),
            neighbors=k,
        )
        logger.debug(f"{self.name}: {verdict.prediction} ({verdict.confidence}%) over {k} neighbors")
        return verdict
