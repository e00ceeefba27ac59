"""
Oncologic (Breast Cancer) calibration.

Features are the mean cell-nucleus measurements of the Wisconsin diagnostic
layout. A positive classification is reported as Malignant.
"""
from typing import Any, Dict, Mapping

from medrisk.core.inference.normalization import FeatureRange
from medrisk.core.inference.risk_scoring import RiskBands, ThresholdRule, Tier
from .base import DiseaseConfig, DiseaseKey, FeatureSpec, RecommendationTiers


FEATURES = (
    FeatureSpec("radius_mean", FeatureRange(6.981, 28.11), "Mean radius"),
    FeatureSpec("texture_mean", FeatureRange(9.71, 39.28), "Mean texture"),
    FeatureSpec("perimeter_mean", FeatureRange(43.79, 188.5), "Mean perimeter"),
    FeatureSpec("area_mean", FeatureRange(143.5, 2501), "Mean area"),
    FeatureSpec("smoothness_mean", FeatureRange(0.05263, 0.1634), "Mean smoothness"),
    FeatureSpec("compactness_mean", FeatureRange(0.01938, 0.3454), "Mean compactness"),
    FeatureSpec("concavity_mean", FeatureRange(0.0, 0.4268), "Mean concavity"),
    FeatureSpec("concave_points_mean", FeatureRange(0.0, 0.2012), "Mean concave points"),
    FeatureSpec("symmetry_mean", FeatureRange(0.106, 0.304), "Mean symmetry"),
    FeatureSpec("fractal_dimension_mean", FeatureRange(0.04996, 0.09744), "Mean fractal dimension"),
)

RULES = (
    ThresholdRule("radius_mean", (
        Tier(17, 20, "Large tumor radius"),
        Tier(14, 10),
    )),
    ThresholdRule("perimeter_mean", (
        Tier(100, 15, "Large tumor perimeter"),
        Tier(80, 8),
    )),
    ThresholdRule("area_mean", (
        Tier(800, 15, "Large tumor area"),
        Tier(500, 8),
    )),
    ThresholdRule("compactness_mean", (
        Tier(0.15, 12, "High compactness"),
        Tier(0.1, 6),
    )),
    ThresholdRule("concavity_mean", (
        Tier(0.2, 15, "High concavity"),
        Tier(0.1, 8),
    )),
    ThresholdRule("concave_points_mean", (
        Tier(0.1, 15, "High concave points"),
        Tier(0.05, 8),
    )),
)

RECOMMENDATIONS = RecommendationTiers(
    high=(
        "URGENT: Consult an oncologist immediately",
        "Get comprehensive biopsy and pathology report",
        "Discuss treatment options (surgery, chemotherapy, radiation)",
        "Consider second opinion from cancer specialist",
        "Genetic testing for BRCA mutations",
        "Join cancer support groups",
        "Discuss fertility preservation if needed",
        "Mental health support is important",
        "Follow prescribed treatment plan strictly",
        "Regular follow-up appointments critical",
    ),
    moderate=(
        "Consult a breast specialist for detailed evaluation",
        "Regular mammogram screening",
        "Monthly self-breast examination",
        "Follow-up imaging as recommended",
        "Maintain healthy lifestyle",
        "Limit alcohol consumption",
        "Regular exercise",
        "Healthy diet rich in fruits and vegetables",
    ),
    low=(
        "Continue regular breast self-examinations",
        "Annual mammogram screening as recommended",
        "Maintain healthy weight",
        "Regular exercise",
        "Limit alcohol",
        "Healthy diet",
        "Know your family history",
    ),
)


def build_profile(values: Mapping[str, float]) -> Dict[str, Any]:
    """Tumor characteristics, rounded for display."""
    return {
        "radius": round(values["radius_mean"], 2),
        "area": round(values["area_mean"], 2),
        "perimeter": round(values["perimeter_mean"], 2),
        "compactness": round(values["compactness_mean"], 4),
    }


CONFIG = DiseaseConfig(
    key=DiseaseKey.ONCOLOGIC,
    name="Breast Cancer",
    features=FEATURES,
    rules=RULES,
    bands=RiskBands(moderate=35, high=60),
    recommendations=RECOMMENDATIONS,
    profile=build_profile,
    k=7,
    positive_label="Malignant",
    negative_label="Benign",
    specialization="Oncology",
)
