"""
Renal (Chronic Kidney Disease) calibration.

Categorical fields arrive pre-encoded: red blood cells 1 = abnormal,
hypertension / diabetes mellitus 1 = yes.
"""
from typing import Any, Dict, Mapping

from medrisk.core.inference.normalization import FeatureRange
from medrisk.core.inference.risk_scoring import (
    RiskBands, ThresholdRule, Tier, EqualsRule, Direction,
)
from .base import DiseaseConfig, DiseaseKey, FeatureSpec, RecommendationTiers


FEATURES = (
    FeatureSpec("age", FeatureRange(2, 90), "Age", "years"),
    FeatureSpec("blood_pressure", FeatureRange(50, 180), "Blood pressure", "mmHg"),
    FeatureSpec("specific_gravity", FeatureRange(1.005, 1.025), "Urine specific gravity"),
    FeatureSpec("albumin", FeatureRange(0, 5), "Urine albumin grade"),
    FeatureSpec("sugar", FeatureRange(0, 5), "Urine sugar grade"),
    FeatureSpec("red_blood_cells", FeatureRange(0, 1), "Red blood cells (1 = abnormal)"),
    FeatureSpec("blood_glucose_random", FeatureRange(22, 490), "Random blood glucose", "mg/dL"),
    FeatureSpec("blood_urea", FeatureRange(1.5, 391), "Blood urea", "mg/dL"),
    FeatureSpec("serum_creatinine", FeatureRange(0.4, 76), "Serum creatinine", "mg/dL"),
    FeatureSpec("hemoglobin", FeatureRange(3.1, 17.8), "Hemoglobin", "g/dL"),
    FeatureSpec("wbc_count", FeatureRange(2200, 26400), "White blood cell count", "cells/cumm"),
    FeatureSpec("hypertension", FeatureRange(0, 1), "Hypertension (1 = yes)"),
    FeatureSpec("diabetes_mellitus", FeatureRange(0, 1), "Diabetes mellitus (1 = yes)"),
)

RULES = (
    ThresholdRule("blood_urea", (
        Tier(40, 20, "Elevated blood urea"),
        Tier(20, 10),
    )),
    ThresholdRule("serum_creatinine", (
        Tier(1.4, 25, "High serum creatinine"),
        Tier(1.0, 12),
    )),
    ThresholdRule("hemoglobin", (
        Tier(10, 15, "Low hemoglobin (anemia)"),
        Tier(12, 8),
    ), direction=Direction.BELOW),
    ThresholdRule("albumin", (
        Tier(2, 15, "High albumin in urine"),
        Tier(0, 8),
    )),
    EqualsRule("hypertension", 1, 10, "Hypertension present"),
    EqualsRule("diabetes_mellitus", 1, 10, "Diabetes mellitus present"),
    ThresholdRule("age", (
        Tier(60, 10, "Age over 60"),
    )),
)

RECOMMENDATIONS = RecommendationTiers(
    high=(
        "URGENT: Consult a nephrologist immediately",
        "Get comprehensive kidney function tests",
        "Monitor blood pressure strictly",
        "Control blood sugar if diabetic",
        "Reduce protein intake as advised",
        "Limit salt consumption",
        "Stay well hydrated",
        "Avoid NSAIDs and nephrotoxic drugs",
        "Regular dialysis may be needed",
        "Consider kidney transplant evaluation",
    ),
    moderate=(
        "Consult a nephrologist for evaluation",
        "Regular kidney function monitoring",
        "Control blood pressure",
        "Manage diabetes if present",
        "Healthy diet low in protein and salt",
        "Stay hydrated",
        "Avoid nephrotoxic medications",
        "Regular checkups",
    ),
    low=(
        "Maintain healthy lifestyle",
        "Regular health checkups",
        "Stay hydrated",
        "Balanced diet",
        "Control blood pressure",
        "Regular exercise",
    ),
)


def build_profile(values: Mapping[str, float]) -> Dict[str, Any]:
    return {
        "age": values["age"],
        "blood_urea": values["blood_urea"],
        "serum_creatinine": values["serum_creatinine"],
        "hemoglobin": values["hemoglobin"],
    }


CONFIG = DiseaseConfig(
    key=DiseaseKey.RENAL,
    name="Chronic Kidney Disease (CKD)",
    features=FEATURES,
    rules=RULES,
    bands=RiskBands(moderate=35, high=60),
    recommendations=RECOMMENDATIONS,
    profile=build_profile,
    k=7,
    specialization="Nephrology",
)
