"""Boundary schemas for queries and results."""
from .prediction import (
    FeatureQuery, SymptomQuery, ModelVoteResponse, PredictionResponse,
    MultiDiseaseMatchResponse, SymptomAnalysisResponse,
    ModelStatusResponse, EngineStatusResponse, ErrorResponse,
)

__all__ = [
    "FeatureQuery",
    "SymptomQuery",
    "ModelVoteResponse",
    "PredictionResponse",
    "MultiDiseaseMatchResponse",
    "SymptomAnalysisResponse",
    "ModelStatusResponse",
    "EngineStatusResponse",
    "ErrorResponse",
]
