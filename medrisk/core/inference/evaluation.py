"""
Hold-out Evaluation

Binary confusion matrix and the derived accuracy, precision, recall and F1
figures reported alongside training-set statistics.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

import numpy as np


@dataclass(frozen=True)
class ModelEvaluation:
    """Confusion counts over a set of held-out records."""
    tp: int
    tn: int
    fp: int
    fn: int
    dropped: int = 0

    @classmethod
    def from_predictions(cls, predictions: np.ndarray, labels: np.ndarray, dropped: int = 0) -> "ModelEvaluation":
        predictions = np.asarray(predictions)
        labels = np.asarray(labels)
        return cls(
            tp=int(np.sum((predictions == 1) & (labels == 1))),
            tn=int(np.sum((predictions == 0) & (labels == 0))),
            fp=int(np.sum((predictions == 1) & (labels == 0))),
            fn=int(np.sum((predictions == 0) & (labels == 1))),
            dropped=dropped,
        )

    @property
    def test_records(self) -> int:
        return self.tp + self.tn + self.fp + self.fn

    @property
    def accuracy(self) -> float:
        return _percent(self.tp + self.tn, self.test_records)

    @property
    def precision(self) -> float:
        return _percent(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        return _percent(self.tp, self.tp + self.fn)

    @property
    def f1_score(self) -> float:
        # Harmonic mean of the unrounded ratios
        denominator = 2 * self.tp + self.fp + self.fn
        return _percent(2 * self.tp, denominator)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
            "f1_score": self.f1_score,
            "confusion_matrix": {"tp": self.tp, "tn": self.tn, "fp": self.fp, "fn": self.fn},
            "test_records": self.test_records,
            "dropped_records": self.dropped,
        }


def _percent(numerator: int, denominator: int) -> float:
    """Percentage with two decimals; 0.0 when nothing was counted."""
    if denominator == 0:
        return 0.0
    return round(numerator / denominator * 100, 2)
