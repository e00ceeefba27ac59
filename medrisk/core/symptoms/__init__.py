"""
Symptom Analysis Module

Knowledge base of diseases and symptoms plus the overlap matcher.
"""
from .knowledge_base import (
    KnowledgeBase, DiseaseDefinition, SymptomDefinition, AgeBand,
    SeverityTier, SymptomSeverity, default_knowledge_base,
)
from .matcher import (
    SymptomMatcher, SymptomAnalysis, MultiDiseaseMatch, Demographics,
    UrgencyTier, classify_urgency,
)

__all__ = [
    "KnowledgeBase",
    "DiseaseDefinition",
    "SymptomDefinition",
    "AgeBand",
    "SeverityTier",
    "SymptomSeverity",
    "default_knowledge_base",
    "SymptomMatcher",
    "SymptomAnalysis",
    "MultiDiseaseMatch",
    "Demographics",
    "UrgencyTier",
    "classify_urgency",
]
