"""
Cardiac (Heart Disease) calibration.

Feature order follows the Cleveland heart disease layout. Chest pain type,
ST depression and major vessel count contribute linearly.
"""
from typing import Any, Dict, Mapping

from medrisk.core.inference.normalization import FeatureRange
from medrisk.core.inference.risk_scoring import (
    RiskBands, ThresholdRule, Tier, EqualsRule, ScaledRule, Direction,
)
from .base import DiseaseConfig, DiseaseKey, FeatureSpec, RecommendationTiers


FEATURES = (
    FeatureSpec("age", FeatureRange(29, 77), "Age", "years"),
    FeatureSpec("sex", FeatureRange(0, 1), "Sex (1 = male)"),
    FeatureSpec("chest_pain_type", FeatureRange(0, 3), "Chest pain type"),
    FeatureSpec("resting_bp", FeatureRange(94, 200), "Resting blood pressure", "mmHg"),
    FeatureSpec("cholesterol", FeatureRange(126, 564), "Serum cholesterol", "mg/dL"),
    FeatureSpec("fasting_blood_sugar", FeatureRange(0, 1), "Fasting blood sugar > 120 mg/dL"),
    FeatureSpec("resting_ecg", FeatureRange(0, 2), "Resting ECG result"),
    FeatureSpec("max_heart_rate", FeatureRange(71, 202), "Maximum heart rate achieved", "bpm"),
    FeatureSpec("exercise_angina", FeatureRange(0, 1), "Exercise-induced angina"),
    FeatureSpec("st_depression", FeatureRange(0, 6.2), "ST depression (oldpeak)"),
    FeatureSpec("st_slope", FeatureRange(0, 2), "Slope of peak exercise ST segment"),
    FeatureSpec("major_vessels", FeatureRange(0, 4), "Major vessels coloured by fluoroscopy"),
    FeatureSpec("thalassemia", FeatureRange(0, 3), "Thalassemia"),
)

RULES = (
    ThresholdRule("age", (
        Tier(55, 15, "Age over 55 increases risk"),
        Tier(45, 10),
    )),
    EqualsRule("sex", 1, 10, "Male gender has higher risk"),
    ScaledRule("chest_pain_type", 8),
    ThresholdRule("resting_bp", (
        Tier(140, 15, "High blood pressure detected"),
        Tier(120, 8),
    )),
    ThresholdRule("cholesterol", (
        Tier(240, 15, "High cholesterol level"),
        Tier(200, 8),
    )),
    EqualsRule("fasting_blood_sugar", 1, 10, "Elevated fasting blood sugar"),
    ThresholdRule("max_heart_rate", (
        Tier(100, 15, "Low maximum heart rate"),
    ), direction=Direction.BELOW),
    EqualsRule("exercise_angina", 1, 15, "Exercise-induced chest pain"),
    ScaledRule("st_depression", 10, "Significant ST depression", factor_above=2),
    ScaledRule("major_vessels", 8),
)

RECOMMENDATIONS = RecommendationTiers(
    high=(
        "URGENT: Consult a cardiologist immediately",
        "Get a complete cardiac evaluation including ECG and echocardiogram",
        "Do NOT engage in strenuous physical activity until cleared by doctor",
        "Monitor blood pressure and heart rate regularly",
        "Follow prescribed medication strictly",
        "Adopt a heart-healthy diet (low sodium, low fat)",
        "Quit smoking and limit alcohol consumption",
        "Manage stress through relaxation techniques",
        "Regular follow-up appointments are critical",
    ),
    moderate=(
        "Schedule an appointment with a cardiologist for evaluation",
        "Get regular cardiac checkups",
        "Monitor blood pressure weekly",
        "Adopt a heart-healthy lifestyle",
        "Exercise moderately (30 min/day, 5 days/week)",
        "Maintain healthy weight",
        "Reduce salt and saturated fat intake",
        "Manage stress effectively",
        "Annual cardiac screening recommended",
    ),
    low=(
        "Maintain current healthy lifestyle",
        "Continue regular exercise routine",
        "Eat a balanced, heart-healthy diet",
        "Annual health checkups",
        "Monitor blood pressure periodically",
        "Avoid smoking and excessive alcohol",
        "Manage stress through healthy activities",
        "Stay physically active",
    ),
)


def build_profile(values: Mapping[str, float]) -> Dict[str, Any]:
    return {
        "age": values["age"],
        "gender": "Male" if values["sex"] == 1 else "Female",
        "blood_pressure": values["resting_bp"],
        "cholesterol": values["cholesterol"],
        "max_heart_rate": values["max_heart_rate"],
    }


CONFIG = DiseaseConfig(
    key=DiseaseKey.CARDIAC,
    name="Heart Disease",
    features=FEATURES,
    rules=RULES,
    bands=RiskBands(moderate=35, high=60),
    recommendations=RECOMMENDATIONS,
    profile=build_profile,
    k=7,
    specialization="Cardiology",
)
