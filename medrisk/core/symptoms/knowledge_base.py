"""
Symptom Knowledge Base

Immutable catalogue of symptom definitions and the diseases described by
them. Built once, validated at construction and shared read-only by every
matcher call.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from enum import Enum

from medrisk.utils import get_logger, round_half_up

logger = get_logger(__name__)


class SeverityTier(str, Enum):
    """Disease-level severity used for urgency triage."""
    MILD = "mild"
    MODERATE = "moderate"
    SERIOUS = "serious"


class SymptomSeverity(str, Enum):
    """Symptom-level severity; critical marks red-flag symptoms."""
    MILD = "mild"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"


@dataclass(frozen=True)
class AgeBand:
    """Inclusive high-risk age interval."""
    min: float
    max: float

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"Invalid age band: {self.min} > {self.max}")

    def contains(self, age: float) -> bool:
        return self.min <= age <= self.max


@dataclass(frozen=True)
class SymptomDefinition:
    id: str
    label: str
    category: str
    severity: SymptomSeverity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "category": self.category,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class DiseaseDefinition:
    """A condition described by its characteristic symptom set."""
    name: str
    symptoms: Tuple[str, ...]
    severity: SeverityTier
    description: str
    specialization: str
    recommendations: Tuple[str, ...]
    age_band: Optional[AgeBand] = None
    gender_modifiers: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if not self.symptoms:
            raise ValueError(f"{self.name}: symptom set is empty")
        if len(set(self.symptoms)) != len(self.symptoms):
            raise ValueError(f"{self.name}: duplicate symptoms")
        object.__setattr__(self, "gender_modifiers", MappingProxyType(dict(self.gender_modifiers)))

    def gender_modifier(self, gender: str) -> Optional[float]:
        return self.gender_modifiers.get(gender.lower())

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "severity": self.severity.value,
            "description": self.description,
            "specialization": self.specialization,
            "symptom_count": len(self.symptoms),
        }


class KnowledgeBase:
    """
    Validated, read-only disease and symptom catalogue.

    Declaration order of diseases is significant: it is the tie-break order
    for ranked symptom matches.
    """

    def __init__(self, symptoms: Iterable[SymptomDefinition], diseases: Iterable[DiseaseDefinition]):
        self._symptoms: Tuple[SymptomDefinition, ...] = tuple(symptoms)
        self._diseases: Tuple[DiseaseDefinition, ...] = tuple(diseases)
        self._by_id: Mapping[str, SymptomDefinition] = MappingProxyType(
            {s.id: s for s in self._symptoms}
        )
        self._validate()
        logger.debug(
            f"Knowledge base built: {len(self._diseases)} diseases, {len(self._symptoms)} symptoms"
        )

    def _validate(self) -> None:
        if len(self._by_id) != len(self._symptoms):
            raise ValueError("Duplicate symptom ids in knowledge base")

        names = [d.name for d in self._diseases]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate disease names in knowledge base")

        for disease in self._diseases:
            undeclared = [s for s in disease.symptoms if s not in self._by_id]
            if undeclared:
                raise ValueError(f"{disease.name}: undeclared symptoms {undeclared}")

    @property
    def diseases(self) -> Tuple[DiseaseDefinition, ...]:
        return self._diseases

    @property
    def symptoms(self) -> Tuple[SymptomDefinition, ...]:
        return self._symptoms

    def has_symptom(self, symptom_id: str) -> bool:
        return symptom_id in self._by_id

    def symptom(self, symptom_id: str) -> SymptomDefinition:
        return self._by_id[symptom_id]

    def symptoms_by_category(self) -> Dict[str, List[Dict[str, Any]]]:
        """Symptom listing grouped by category, each group sorted by label."""
        grouped: Dict[str, List[SymptomDefinition]] = {}
        for symptom in self._symptoms:
            grouped.setdefault(symptom.category, []).append(symptom)

        return {
            category: [s.to_dict() for s in sorted(items, key=lambda s: s.label)]
            for category, items in sorted(grouped.items())
        }

    def disease_summaries(self) -> List[Dict[str, Any]]:
        return [d.summary() for d in self._diseases]

    def statistics(self) -> Dict[str, Any]:
        total = len(self._diseases)
        symptom_total = sum(len(d.symptoms) for d in self._diseases)
        distribution = {tier.value: 0 for tier in (SeverityTier.SERIOUS, SeverityTier.MODERATE, SeverityTier.MILD)}
        for disease in self._diseases:
            distribution[disease.severity.value] += 1

        return {
            "total_diseases": total,
            "total_symptoms": len(self._symptoms),
            "avg_symptoms_per_disease": round_half_up(symptom_total / total) if total else 0,
            "severity_distribution": distribution,
        }


def _symptom(symptom_id: str, label: str, category: str, severity: str) -> SymptomDefinition:
    return SymptomDefinition(symptom_id, label, category, SymptomSeverity(severity))


SYMPTOMS: Tuple[SymptomDefinition, ...] = (
    # Cardiac
    _symptom("chest_pain", "Chest Pain", "cardiac", "critical"),
    _symptom("shortness_of_breath", "Shortness of Breath", "respiratory", "serious"),
    _symptom("cold_sweat", "Cold Sweating", "general", "serious"),
    _symptom("nausea", "Nausea", "digestive", "mild"),
    _symptom("lightheadedness", "Lightheadedness/Dizziness", "neurological", "moderate"),
    _symptom("pain_radiating_arm", "Pain Radiating to Arm", "cardiac", "critical"),
    _symptom("jaw_pain", "Jaw Pain", "cardiac", "serious"),
    _symptom("extreme_fatigue", "Extreme Fatigue", "general", "moderate"),
    # Metabolic
    _symptom("increased_thirst", "Increased Thirst", "metabolic", "moderate"),
    _symptom("frequent_urination", "Frequent Urination", "urinary", "moderate"),
    _symptom("increased_hunger", "Increased Hunger", "metabolic", "mild"),
    _symptom("fatigue", "Fatigue/Tiredness", "general", "mild"),
    _symptom("blurred_vision", "Blurred Vision", "visual", "moderate"),
    _symptom("slow_healing", "Slow Healing Wounds", "skin", "moderate"),
    _symptom("tingling_hands", "Tingling in Hands/Feet", "neurological", "mild"),
    _symptom("unexplained_weight_loss", "Unexplained Weight Loss", "general", "serious"),
    # Renal
    _symptom("decreased_urine", "Decreased Urine Output", "urinary", "serious"),
    _symptom("swollen_ankles", "Swollen Ankles/Feet", "cardiovascular", "moderate"),
    _symptom("loss_of_appetite", "Loss of Appetite", "digestive", "mild"),
    _symptom("muscle_cramps", "Muscle Cramps", "musculoskeletal", "mild"),
    _symptom("difficulty_concentrating", "Difficulty Concentrating", "neurological", "mild"),
    _symptom("sleep_problems", "Sleep Problems", "general", "mild"),
    # Respiratory infection
    _symptom("high_fever", "High Fever (>101F)", "general", "serious"),
    _symptom("cough_with_phlegm", "Cough with Phlegm", "respiratory", "moderate"),
    _symptom("chills", "Chills", "general", "mild"),
    _symptom("rapid_breathing", "Rapid Breathing", "respiratory", "serious"),
    # Neurological
    _symptom("severe_headache", "Severe Headache", "neurological", "serious"),
    _symptom("vomiting", "Vomiting", "digestive", "moderate"),
    _symptom("light_sensitivity", "Sensitivity to Light", "neurological", "moderate"),
    _symptom("sound_sensitivity", "Sensitivity to Sound", "neurological", "moderate"),
    _symptom("vision_problems", "Vision Problems", "visual", "moderate"),
    _symptom("aura", "Visual Aura", "visual", "moderate"),
    _symptom("dizziness", "Dizziness", "neurological", "mild"),
    # Airway
    _symptom("chest_tightness", "Chest Tightness", "respiratory", "serious"),
    _symptom("wheezing", "Wheezing", "respiratory", "serious"),
    _symptom("dry_cough", "Dry Cough", "respiratory", "mild"),
    _symptom("difficulty_sleeping", "Difficulty Sleeping", "general", "mild"),
    # Digestive
    _symptom("heartburn", "Heartburn", "digestive", "mild"),
    _symptom("acid_regurgitation", "Acid Regurgitation", "digestive", "moderate"),
    _symptom("difficulty_swallowing", "Difficulty Swallowing", "digestive", "serious"),
    _symptom("chronic_cough", "Chronic Cough", "respiratory", "moderate"),
    _symptom("sore_throat", "Sore Throat", "respiratory", "mild"),
    _symptom("hoarse_voice", "Hoarse Voice", "respiratory", "mild"),
    _symptom("stomach_pain", "Stomach Pain", "digestive", "moderate"),
    _symptom("bloating", "Bloating", "digestive", "mild"),
    _symptom("indigestion", "Indigestion", "digestive", "mild"),
    _symptom("burning_sensation", "Burning Sensation in Stomach", "digestive", "moderate"),
    _symptom("hiccups", "Hiccups", "digestive", "mild"),
    # Urinary
    _symptom("burning_urination", "Burning During Urination", "urinary", "moderate"),
    _symptom("cloudy_urine", "Cloudy Urine", "urinary", "mild"),
    _symptom("pelvic_pain", "Pelvic Pain", "urinary", "moderate"),
    _symptom("strong_urine_odor", "Strong Urine Odor", "urinary", "mild"),
    _symptom("blood_in_urine", "Blood in Urine", "urinary", "serious"),
    # Vascular
    _symptom("headache", "Headache", "neurological", "mild"),
    _symptom("nosebleeds", "Nosebleeds", "general", "mild"),
    # Mental health
    _symptom("persistent_sadness", "Persistent Sadness", "mental", "serious"),
    _symptom("loss_of_interest", "Loss of Interest in Activities", "mental", "serious"),
    _symptom("appetite_changes", "Changes in Appetite", "digestive", "moderate"),
    _symptom("feelings_of_worthlessness", "Feelings of Worthlessness", "mental", "serious"),
    _symptom("excessive_worry", "Excessive Worry", "mental", "moderate"),
    _symptom("restlessness", "Restlessness", "mental", "mild"),
    _symptom("irritability", "Irritability", "mental", "mild"),
    _symptom("rapid_heartbeat", "Rapid Heartbeat", "cardiac", "moderate"),
    _symptom("sweating", "Sweating", "general", "mild"),
    _symptom("trembling", "Trembling", "neurological", "mild"),
    # Upper respiratory
    _symptom("body_aches", "Body Aches", "musculoskeletal", "mild"),
    _symptom("nasal_congestion", "Nasal Congestion", "respiratory", "mild"),
    _symptom("runny_nose", "Runny Nose", "respiratory", "mild"),
    _symptom("sneezing", "Sneezing", "respiratory", "mild"),
    _symptom("cough", "Cough", "respiratory", "mild"),
    _symptom("mild_fever", "Mild Fever", "general", "mild"),
    _symptom("mild_headache", "Mild Headache", "neurological", "mild"),
    _symptom("itchy_eyes", "Itchy Eyes", "visual", "mild"),
    _symptom("watery_eyes", "Watery Eyes", "visual", "mild"),
    _symptom("postnasal_drip", "Postnasal Drip", "respiratory", "mild"),
    _symptom("itchy_throat", "Itchy Throat", "respiratory", "mild"),
    _symptom("persistent_cough", "Persistent Cough", "respiratory", "moderate"),
    _symptom("mucus_production", "Mucus Production", "respiratory", "mild"),
    _symptom("chest_discomfort", "Chest Discomfort", "respiratory", "moderate"),
)


DISEASES: Tuple[DiseaseDefinition, ...] = (
    DiseaseDefinition(
        name="Acute Myocardial Infarction (Heart Attack)",
        symptoms=("chest_pain", "shortness_of_breath", "cold_sweat", "nausea",
                  "lightheadedness", "pain_radiating_arm", "jaw_pain", "extreme_fatigue"),
        severity=SeverityTier.SERIOUS,
        description="Life-threatening condition where blood flow to heart muscle is blocked",
        specialization="Emergency Cardiology",
        recommendations=(
            "Call emergency services immediately - this is a medical emergency",
            "Chew aspirin if available and not allergic",
            "Stay calm and sit down",
            "Do NOT drive yourself to hospital",
        ),
        age_band=AgeBand(45, 100),
    ),
    DiseaseDefinition(
        name="Type 2 Diabetes Mellitus",
        symptoms=("increased_thirst", "frequent_urination", "increased_hunger", "fatigue",
                  "blurred_vision", "slow_healing", "tingling_hands", "unexplained_weight_loss"),
        severity=SeverityTier.SERIOUS,
        description="Chronic metabolic disorder affecting blood sugar regulation",
        specialization="Endocrinology",
        recommendations=(
            "Consult endocrinologist within 1 week",
            "Get HbA1c and fasting glucose tests",
            "Monitor blood glucose levels",
            "Follow diabetic diet plan",
        ),
        age_band=AgeBand(45, 100),
    ),
    DiseaseDefinition(
        name="Chronic Kidney Disease",
        symptoms=("fatigue", "decreased_urine", "swollen_ankles", "nausea", "loss_of_appetite",
                  "muscle_cramps", "difficulty_concentrating", "sleep_problems"),
        severity=SeverityTier.SERIOUS,
        description="Progressive loss of kidney function over time",
        specialization="Nephrology",
        recommendations=(
            "Urgent nephrologist consultation",
            "Complete kidney function tests",
            "Monitor blood pressure daily",
            "Low-protein, low-sodium diet",
        ),
    ),
    DiseaseDefinition(
        name="Pneumonia",
        symptoms=("high_fever", "cough_with_phlegm", "chest_pain", "shortness_of_breath",
                  "chills", "rapid_breathing", "fatigue", "nausea"),
        severity=SeverityTier.SERIOUS,
        description="Infection causing inflammation in lung air sacs",
        specialization="Pulmonology",
        recommendations=(
            "Seek medical attention within 24 hours",
            "Chest X-ray required",
            "May need antibiotics",
            "Rest and hydration",
        ),
    ),
    DiseaseDefinition(
        name="Migraine",
        symptoms=("severe_headache", "nausea", "vomiting", "light_sensitivity",
                  "sound_sensitivity", "vision_problems", "aura", "dizziness"),
        severity=SeverityTier.MODERATE,
        description="Neurological condition causing intense headaches",
        specialization="Neurology",
        recommendations=(
            "Rest in dark, quiet room",
            "Apply cold compress",
            "Take prescribed migraine medication",
            "Identify triggers",
        ),
        gender_modifiers={"male": 0.8, "female": 1.3},
    ),
    DiseaseDefinition(
        name="Asthma",
        symptoms=("shortness_of_breath", "chest_tightness", "wheezing", "dry_cough",
                  "difficulty_sleeping", "rapid_breathing"),
        severity=SeverityTier.SERIOUS,
        description="Chronic inflammatory airway disease",
        specialization="Pulmonology",
        recommendations=(
            "Use rescue inhaler immediately",
            "Avoid triggers",
            "See pulmonologist",
            "Get asthma action plan",
        ),
    ),
    DiseaseDefinition(
        name="Gastroesophageal Reflux Disease (GERD)",
        symptoms=("heartburn", "acid_regurgitation", "chest_pain", "difficulty_swallowing",
                  "chronic_cough", "sore_throat", "hoarse_voice"),
        severity=SeverityTier.MODERATE,
        description="Chronic acid reflux from stomach into esophagus",
        specialization="Gastroenterology",
        recommendations=(
            "Avoid trigger foods",
            "Eat smaller meals",
            "Don't lie down after eating",
            "Elevate head of bed",
        ),
    ),
    DiseaseDefinition(
        name="Urinary Tract Infection (UTI)",
        symptoms=("frequent_urination", "burning_urination", "cloudy_urine", "pelvic_pain",
                  "strong_urine_odor", "blood_in_urine"),
        severity=SeverityTier.MODERATE,
        description="Bacterial infection in urinary system",
        specialization="Urology",
        recommendations=(
            "See doctor for antibiotics",
            "Drink plenty of water",
            "Urinate frequently",
            "Complete full antibiotic course",
        ),
    ),
    DiseaseDefinition(
        name="Hypertension (High Blood Pressure)",
        symptoms=("headache", "shortness_of_breath", "nosebleeds", "dizziness",
                  "chest_pain", "vision_problems"),
        severity=SeverityTier.SERIOUS,
        description="Chronically elevated blood pressure",
        specialization="Cardiology",
        recommendations=(
            "Monitor blood pressure daily",
            "Low-sodium diet",
            "Regular exercise",
            "Take medications as prescribed",
        ),
    ),
    DiseaseDefinition(
        name="Depression (Major Depressive Disorder)",
        symptoms=("persistent_sadness", "loss_of_interest", "fatigue", "sleep_problems",
                  "appetite_changes", "difficulty_concentrating", "feelings_of_worthlessness"),
        severity=SeverityTier.SERIOUS,
        description="Mental health disorder affecting mood and daily functioning",
        specialization="Psychiatry",
        recommendations=(
            "Seek mental health professional immediately",
            "Consider therapy/counseling",
            "Medication may help",
            "Build support network",
        ),
    ),
    DiseaseDefinition(
        name="Influenza (Flu)",
        symptoms=("high_fever", "body_aches", "chills", "dry_cough", "sore_throat",
                  "nasal_congestion", "headache", "extreme_fatigue"),
        severity=SeverityTier.MODERATE,
        description="Viral respiratory infection",
        specialization="General Medicine",
        recommendations=(
            "Rest and fluids",
            "Antiviral medication within 48 hours",
            "Fever reducers",
            "Stay home to avoid spreading",
        ),
    ),
    DiseaseDefinition(
        name="Gastritis",
        symptoms=("stomach_pain", "nausea", "vomiting", "bloating", "loss_of_appetite",
                  "indigestion", "burning_sensation", "hiccups"),
        severity=SeverityTier.MODERATE,
        description="Inflammation, irritation, or erosion of the stomach lining",
        specialization="Gastroenterology",
        recommendations=(
            "Avoid spicy and acidic foods",
            "Eat smaller, frequent meals",
            "Avoid alcohol and caffeine",
            "Consult a gastroenterologist if symptoms persist",
        ),
    ),
    DiseaseDefinition(
        name="Anxiety Disorder",
        symptoms=("excessive_worry", "restlessness", "fatigue", "difficulty_concentrating",
                  "irritability", "sleep_problems", "rapid_heartbeat", "sweating", "trembling"),
        severity=SeverityTier.MODERATE,
        description="A mental health condition causing excessive, persistent worry and fear",
        specialization="Psychiatry",
        recommendations=(
            "Practice relaxation techniques",
            "Exercise regularly",
            "Limit caffeine and alcohol",
            "Consult a mental health professional",
        ),
    ),
    DiseaseDefinition(
        name="Bronchitis",
        symptoms=("persistent_cough", "mucus_production", "fatigue", "shortness_of_breath",
                  "mild_fever", "chest_discomfort", "wheezing", "sore_throat"),
        severity=SeverityTier.MODERATE,
        description="Inflammation of the bronchial tubes carrying air to lungs",
        specialization="Pulmonology",
        recommendations=(
            "Get plenty of rest",
            "Use a humidifier",
            "Avoid lung irritants",
            "Consult doctor if symptoms worsen",
        ),
    ),
    DiseaseDefinition(
        name="Common Cold",
        symptoms=("runny_nose", "sneezing", "sore_throat", "cough", "mild_fever",
                  "nasal_congestion", "body_aches", "mild_headache"),
        severity=SeverityTier.MILD,
        description="A viral infection of the upper respiratory tract",
        specialization="General Medicine",
        recommendations=(
            "Get plenty of rest",
            "Drink lots of fluids",
            "Gargle with warm salt water",
            "Consult doctor if symptoms persist beyond 10 days",
        ),
    ),
    DiseaseDefinition(
        name="Allergic Rhinitis",
        symptoms=("sneezing", "runny_nose", "itchy_eyes", "nasal_congestion",
                  "postnasal_drip", "watery_eyes", "itchy_throat", "cough"),
        severity=SeverityTier.MILD,
        description="Allergic response affecting the nose and eyes",
        specialization="Allergy/Immunology",
        recommendations=(
            "Identify and avoid allergens",
            "Use antihistamines",
            "Consider allergy testing",
            "Keep windows closed during high pollen seasons",
        ),
    ),
)


@lru_cache()
def default_knowledge_base() -> KnowledgeBase:
    """Built-in catalogue, constructed once per process."""
    return KnowledgeBase(SYMPTOMS, DISEASES)
