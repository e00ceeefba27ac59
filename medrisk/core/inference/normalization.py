"""
Feature Normalization Module

Maps raw clinical feature vectors into a comparable space using static,
hand-calibrated per-feature reference ranges.
"""
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from medrisk.exceptions import MalformedInputError


@dataclass(frozen=True)
class FeatureRange:
    """Calibrated reference range for one feature."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def normalize(value: float, min_value: float, max_value: float) -> float:
    """
    Min-max normalize a single value.

    Returns exactly 0 for a degenerate range (max == min). Out-of-range inputs
    are not clamped, so values may fall outside [0, 1].
    """
    if max_value == min_value:
        return 0.0
    return (value - min_value) / (max_value - min_value)


def range_arrays(ranges: Sequence[FeatureRange]) -> Tuple[np.ndarray, np.ndarray]:
    """Split a range table into (mins, spans) arrays."""
    mins = np.array([r.min for r in ranges], dtype=np.float64)
    spans = np.array([r.span for r in ranges], dtype=np.float64)
    return mins, spans


def normalize_vector(values: Sequence[float], ranges: Sequence[FeatureRange]) -> np.ndarray:
    """
    Normalize a feature vector elementwise against its range table.

    Args:
        values: Raw feature values in calibration-table order
        ranges: One FeatureRange per feature

    Returns:
        Normalized float64 vector (unclamped)
    """
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1 or vector.shape[0] != len(ranges):
        raise MalformedInputError(
            f"Expected {len(ranges)} features, got {vector.size}"
        )
    return _normalize(vector, *range_arrays(ranges))


def normalize_matrix(rows: np.ndarray, ranges: Sequence[FeatureRange]) -> np.ndarray:
    """Normalize every row of a (n_samples, n_features) matrix."""
    matrix = np.asarray(rows, dtype=np.float64)
    if matrix.size == 0:
        return matrix.reshape(0, len(ranges))
    if matrix.ndim != 2 or matrix.shape[1] != len(ranges):
        raise MalformedInputError(
            f"Expected rows of {len(ranges)} features, got shape {matrix.shape}"
        )
    return _normalize(matrix, *range_arrays(ranges))


def _normalize(values: np.ndarray, mins: np.ndarray, spans: np.ndarray) -> np.ndarray:
    # Degenerate spans map to 0 instead of dividing by zero
    safe_spans = np.where(spans == 0, 1.0, spans)
    normalized = (values - mins) / safe_spans
    return np.where(spans == 0, 0.0, normalized)
