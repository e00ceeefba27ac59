"""
Disease Models Module

One generic DiseaseModel driven by a calibration table per condition.
"""
from typing import Dict

from .base import (
    DiseaseKey, ModelState, FeatureSpec, RecommendationTiers, DiseaseConfig,
    TrainingRecord, PredictionResult, DiseaseModel, ingest_records,
)
from . import cardiac, metabolic, renal, oncologic, hepatic
from .sample_data import sample_records, sample_training_sets

DISEASE_CONFIGS: Dict[DiseaseKey, DiseaseConfig] = {
    DiseaseKey.CARDIAC: cardiac.CONFIG,
    DiseaseKey.METABOLIC: metabolic.CONFIG,
    DiseaseKey.RENAL: renal.CONFIG,
    DiseaseKey.ONCOLOGIC: oncologic.CONFIG,
    DiseaseKey.HEPATIC: hepatic.CONFIG,
}

__all__ = [
    "DiseaseKey",
    "ModelState",
    "FeatureSpec",
    "RecommendationTiers",
    "DiseaseConfig",
    "TrainingRecord",
    "PredictionResult",
    "DiseaseModel",
    "ingest_records",
    "sample_records",
    "sample_training_sets",
    "DISEASE_CONFIGS",
]
