"""Engine orchestration services."""
from .prediction import PredictionService

__all__ = ["PredictionService"]
