"""
Hepatic (Liver Disease) calibration.

Feature order follows the Indian Liver Patient records layout.
"""
from typing import Any, Dict, Mapping

from medrisk.core.inference.normalization import FeatureRange
from medrisk.core.inference.risk_scoring import (
    RiskBands, ThresholdRule, Tier, OutsideRangeRule, Direction,
)
from .base import DiseaseConfig, DiseaseKey, FeatureSpec, RecommendationTiers


FEATURES = (
    FeatureSpec("age", FeatureRange(4, 90), "Age", "years"),
    FeatureSpec("gender", FeatureRange(0, 1), "Gender (1 = male)"),
    FeatureSpec("total_bilirubin", FeatureRange(0.4, 75), "Total bilirubin", "mg/dL"),
    FeatureSpec("direct_bilirubin", FeatureRange(0.1, 19.7), "Direct bilirubin", "mg/dL"),
    FeatureSpec("alkaline_phosphatase", FeatureRange(63, 2110), "Alkaline phosphatase", "IU/L"),
    FeatureSpec("alt", FeatureRange(10, 2000), "Alanine aminotransferase (ALT)", "IU/L"),
    FeatureSpec("ast", FeatureRange(10, 4929), "Aspartate aminotransferase (AST)", "IU/L"),
    FeatureSpec("total_proteins", FeatureRange(2.7, 9.6), "Total proteins", "g/dL"),
    FeatureSpec("albumin", FeatureRange(0.9, 5.5), "Albumin", "g/dL"),
    FeatureSpec("albumin_globulin_ratio", FeatureRange(0.3, 2.8), "Albumin/globulin ratio"),
)

RULES = (
    ThresholdRule("total_bilirubin", (
        Tier(2, 20, "Elevated total bilirubin (jaundice)"),
        Tier(1.2, 10),
    )),
    ThresholdRule("direct_bilirubin", (
        Tier(0.8, 15, "High direct bilirubin"),
    )),
    ThresholdRule("alkaline_phosphatase", (
        Tier(300, 15, "Elevated alkaline phosphatase"),
        Tier(200, 8),
    )),
    ThresholdRule("alt", (
        Tier(100, 15, "High ALT levels (liver damage)"),
        Tier(50, 8),
    )),
    ThresholdRule("ast", (
        Tier(100, 15, "High AST levels (liver damage)"),
        Tier(50, 8),
    )),
    OutsideRangeRule(
        "total_proteins", low=6, high=8.3, points=10,
        factor_below="Low total proteins",
    ),
    ThresholdRule("albumin", (
        Tier(3.5, 10, "Low albumin (poor liver function)"),
    ), direction=Direction.BELOW),
    ThresholdRule("albumin_globulin_ratio", (
        Tier(1.0, 10, "Low A/G ratio"),
    ), direction=Direction.BELOW),
    ThresholdRule("age", (
        Tier(60, 5),
    )),
)

RECOMMENDATIONS = RecommendationTiers(
    high=(
        "URGENT: Consult a hepatologist immediately",
        "Get comprehensive liver function tests",
        "Ultrasound or CT scan of liver may be needed",
        "Avoid alcohol completely",
        "Stop hepatotoxic medications",
        "Rest and proper nutrition",
        "Monitor for jaundice, abdominal swelling",
        "Possible hospitalization may be required",
        "Vaccination for hepatitis A and B",
        "Regular liver monitoring",
    ),
    moderate=(
        "Consult a gastroenterologist for evaluation",
        "Get liver function tests",
        "Avoid alcohol",
        "Healthy diet rich in fruits and vegetables",
        "Maintain healthy weight",
        "Regular exercise",
        "Avoid unnecessary medications",
        "Follow-up tests in 3-6 months",
    ),
    low=(
        "Maintain healthy lifestyle",
        "Limit alcohol consumption",
        "Healthy balanced diet",
        "Regular exercise",
        "Annual health checkups",
        "Avoid hepatotoxic substances",
    ),
)


def build_profile(values: Mapping[str, float]) -> Dict[str, Any]:
    return {
        "age": values["age"],
        "total_bilirubin": values["total_bilirubin"],
        "alt": values["alt"],
        "ast": values["ast"],
        "albumin": values["albumin"],
    }


CONFIG = DiseaseConfig(
    key=DiseaseKey.HEPATIC,
    name="Liver Disease",
    features=FEATURES,
    rules=RULES,
    bands=RiskBands(moderate=35, high=60),
    recommendations=RECOMMENDATIONS,
    profile=build_profile,
    k=7,
    specialization="Hepatology",
)
