"""
Metabolic (Type 2 Diabetes) calibration.

Feature order follows the Pima Indians diabetes layout.
"""
from typing import Any, Dict, Mapping

from medrisk.core.inference.normalization import FeatureRange
from medrisk.core.inference.risk_scoring import (
    RiskBands, ThresholdRule, Tier, OutsideRangeRule,
)
from .base import DiseaseConfig, DiseaseKey, FeatureSpec, RecommendationTiers


FEATURES = (
    FeatureSpec("pregnancies", FeatureRange(0, 17), "Pregnancies", "count", default=0.0),
    FeatureSpec("glucose", FeatureRange(0, 199), "Plasma glucose", "mg/dL"),
    FeatureSpec("blood_pressure", FeatureRange(0, 122), "Diastolic blood pressure", "mmHg"),
    FeatureSpec("skin_thickness", FeatureRange(0, 99), "Triceps skin fold", "mm", default=0.0),
    FeatureSpec("insulin", FeatureRange(0, 846), "2-hour serum insulin", "mu U/ml", default=0.0),
    FeatureSpec("bmi", FeatureRange(0, 67.1), "Body mass index", "kg/m2"),
    FeatureSpec("diabetes_pedigree", FeatureRange(0.078, 2.42), "Diabetes pedigree function"),
    FeatureSpec("age", FeatureRange(21, 81), "Age", "years"),
)

RULES = (
    ThresholdRule("glucose", (
        Tier(140, 35, "High fasting glucose level", inclusive=True),
        Tier(100, 20, "Elevated fasting glucose (prediabetic range)", inclusive=True),
        Tier(70, 5, inclusive=True),
    )),
    ThresholdRule("bmi", (
        Tier(30, 20, "Obesity (BMI >= 30)", inclusive=True),
        Tier(25, 10, "Overweight (BMI >= 25)", inclusive=True),
    )),
    ThresholdRule("age", (
        Tier(45, 10, "Age over 45"),
        Tier(35, 5),
    )),
    ThresholdRule("blood_pressure", (
        Tier(80, 10, "Elevated blood pressure"),
        Tier(70, 5),
    )),
    OutsideRangeRule(
        "insulin", low=50, high=200, points=10,
        factor_below="Low insulin level", factor_above="High insulin level",
    ),
    ThresholdRule("diabetes_pedigree", (
        Tier(0.5, 15, "Strong family history of diabetes"),
    )),
    ThresholdRule("pregnancies", (
        Tier(5, 0, "Multiple pregnancies"),
    )),
)

RECOMMENDATIONS = RecommendationTiers(
    high=(
        "URGENT: Consult an endocrinologist immediately",
        "Get HbA1c test done",
        "Monitor blood glucose levels daily",
        "Follow a strict diabetic diet plan",
        "Start a supervised exercise program",
        "Weight loss if overweight (target BMI < 25)",
        "Regular eye and foot examinations",
        "Check blood pressure regularly",
        "Take prescribed medications strictly",
        "Carry diabetic emergency card",
    ),
    moderate=(
        "Consult a doctor for glucose tolerance test",
        "Adopt a low-sugar, balanced diet",
        "Exercise 30 minutes daily, 5 days/week",
        "Lose weight if overweight",
        "Monitor blood sugar monthly",
        "Reduce stress levels",
        "Avoid sugary drinks and processed foods",
        "Regular health checkups",
        "Stay hydrated",
    ),
    low=(
        "Maintain healthy lifestyle",
        "Continue balanced diet",
        "Regular exercise",
        "Annual health checkups",
        "Monitor weight",
        "Stay active",
    ),
)


def build_profile(values: Mapping[str, float]) -> Dict[str, Any]:
    return {
        "glucose": values["glucose"],
        "bmi": values["bmi"],
        "age": values["age"],
        "blood_pressure": values["blood_pressure"],
    }


CONFIG = DiseaseConfig(
    key=DiseaseKey.METABOLIC,
    name="Type 2 Diabetes",
    features=FEATURES,
    rules=RULES,
    bands=RiskBands(moderate=30, high=60),
    recommendations=RECOMMENDATIONS,
    profile=build_profile,
    k=9,
    specialization="Endocrinology",
)
