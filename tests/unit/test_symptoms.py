"""
Unit Tests for Symptom Analysis

Tests for the knowledge base, urgency triage and the overlap matcher.
"""
import pytest

from medrisk.core.symptoms import (
    KnowledgeBase, DiseaseDefinition, SymptomDefinition, AgeBand,
    SeverityTier, SymptomSeverity, default_knowledge_base,
    SymptomMatcher, UrgencyTier, classify_urgency,
)
from medrisk.exceptions import MalformedInputError


AMI = "Acute Myocardial Infarction (Heart Attack)"
AMI_SYMPTOMS = [
    "chest_pain", "shortness_of_breath", "cold_sweat", "nausea",
    "lightheadedness", "pain_radiating_arm", "jaw_pain", "extreme_fatigue",
]


# Fixtures
@pytest.fixture
def matcher() -> SymptomMatcher:
    return SymptomMatcher()


@pytest.fixture
def tiny_kb() -> KnowledgeBase:
    """Two-disease knowledge base with identical symptom overlap."""
    symptoms = [
        SymptomDefinition("a", "Alpha", "general", SymptomSeverity.MILD),
        SymptomDefinition("b", "Bravo", "general", SymptomSeverity.MILD),
    ]
    diseases = [
        DiseaseDefinition("First", ("a", "b"), SeverityTier.MILD, "", "General", ()),
        DiseaseDefinition("Second", ("b", "a"), SeverityTier.MILD, "", "General", ()),
    ]
    return KnowledgeBase(symptoms, diseases)


def _by_name(analysis):
    return {m.disease_name: m for m in analysis.matches}


class TestKnowledgeBase:
    """Tests for knowledge base construction."""

    def test_default_is_valid(self):
        """Test the built-in catalogue validates and is cached."""
        kb = default_knowledge_base()
        assert kb is default_knowledge_base()
        assert len(kb.diseases) == 16

    def test_undeclared_symptom_rejected(self):
        """Test diseases may only use declared symptoms."""
        symptoms = [SymptomDefinition("a", "A", "general", SymptomSeverity.MILD)]
        diseases = [DiseaseDefinition("X", ("a", "zzz"), SeverityTier.MILD, "", "General", ())]
        with pytest.raises(ValueError):
            KnowledgeBase(symptoms, diseases)

    def test_duplicate_disease_names_rejected(self):
        """Test disease names must be unique."""
        symptoms = [SymptomDefinition("a", "A", "general", SymptomSeverity.MILD)]
        disease = DiseaseDefinition("X", ("a",), SeverityTier.MILD, "", "General", ())
        with pytest.raises(ValueError):
            KnowledgeBase(symptoms, [disease, disease])

    def test_duplicate_symptom_ids_rejected(self):
        """Test symptom ids must be unique."""
        symptom = SymptomDefinition("a", "A", "general", SymptomSeverity.MILD)
        with pytest.raises(ValueError):
            KnowledgeBase([symptom, symptom], [])

    def test_gender_modifiers_read_only(self):
        """Test disease modifiers cannot be mutated after construction."""
        migraine = next(d for d in default_knowledge_base().diseases if d.name == "Migraine")
        with pytest.raises(TypeError):
            migraine.gender_modifiers["female"] = 5.0

    def test_statistics(self):
        """Test catalogue statistics."""
        stats = default_knowledge_base().statistics()
        assert stats["total_diseases"] == 16
        assert stats["severity_distribution"] == {"serious": 7, "moderate": 7, "mild": 2}
        assert stats["total_symptoms"] == len(default_knowledge_base().symptoms)

    def test_symptoms_grouped_and_sorted(self):
        """Test listing is grouped by category and sorted by label."""
        grouped = default_knowledge_base().symptoms_by_category()
        assert "cardiac" in grouped
        for items in grouped.values():
            labels = [s["label"] for s in items]
            assert labels == sorted(labels)

    def test_age_band(self):
        """Test inclusive age band bounds."""
        band = AgeBand(45, 100)
        assert band.contains(45)
        assert band.contains(100)
        assert not band.contains(44.9)


class TestUrgency:
    """Tests for urgency triage."""

    @pytest.mark.parametrize("severity,matched,expected", [
        (SeverityTier.SERIOUS, 3, UrgencyTier.EMERGENCY),
        (SeverityTier.SERIOUS, 2, UrgencyTier.URGENT),
        (SeverityTier.MODERATE, 4, UrgencyTier.URGENT),
        (SeverityTier.MILD, 4, UrgencyTier.URGENT),
        (SeverityTier.MODERATE, 1, UrgencyTier.SOON),
        (SeverityTier.MILD, 3, UrgencyTier.ROUTINE),
    ])
    def test_classify_urgency(self, severity, matched, expected):
        """Test the urgency decision table."""
        assert classify_urgency(severity, matched) == expected


class TestSymptomMatcher:
    """Tests for ranked symptom matching."""

    def test_full_symptom_set_is_100(self, matcher):
        """Test selecting every symptom of a disease gives 100."""
        analysis = matcher.match(AMI_SYMPTOMS)
        top = analysis.matches[0]

        assert top.disease_name == AMI
        assert top.confidence == 100
        assert top.match_percentage == 100
        assert top.matched_symptom_count == 8
        assert top.urgency_tier == UrgencyTier.EMERGENCY

    def test_zero_overlap_excluded(self, matcher):
        """Test diseases without a matching symptom are left out."""
        analysis = matcher.match(["heartburn"])
        assert [m.disease_name for m in analysis.matches] == ["Gastroesophageal Reflux Disease (GERD)"]

    def test_ties_keep_declaration_order(self, matcher):
        """Test equal confidences rank in knowledge-base order."""
        analysis = matcher.match(["fatigue"])

        assert [(m.disease_name, m.confidence) for m in analysis.matches] == [
            ("Depression (Major Depressive Disorder)", 14),
            ("Type 2 Diabetes Mellitus", 13),
            ("Chronic Kidney Disease", 13),
            ("Pneumonia", 13),
            ("Bronchitis", 13),
        ]

    def test_tie_order_follows_kb_not_symptoms(self, tiny_kb):
        """Test tie-break uses disease declaration order."""
        analysis = SymptomMatcher(tiny_kb).match(["b"])
        assert [m.disease_name for m in analysis.matches] == ["First", "Second"]

    def test_truncates_to_top_n(self, matcher):
        """Test at most five matches by default."""
        analysis = matcher.match(["fatigue", "nausea", "chest_pain", "sore_throat"])
        assert analysis.total_matches == 5

    def test_top_n_configurable(self):
        """Test custom result count."""
        analysis = SymptomMatcher(top_n=2).match(["fatigue"])
        assert analysis.total_matches == 2

    def test_age_band_boost(self, matcher):
        """Test age inside the high-risk band multiplies by 1.2."""
        assert _by_name(matcher.match(["chest_pain"], age=50))[AMI].confidence == 15
        assert _by_name(matcher.match(["chest_pain"], age=30))[AMI].confidence == 13

    def test_gender_modifier(self, matcher):
        """Test gender modifiers raise and lower confidence."""
        symptoms = ["severe_headache", "nausea", "vomiting", "light_sensitivity"]
        assert _by_name(matcher.match(symptoms, gender="female"))["Migraine"].confidence == 65
        assert _by_name(matcher.match(symptoms, gender="male"))["Migraine"].confidence == 40
        assert _by_name(matcher.match(symptoms))["Migraine"].confidence == 50

    def test_confidence_capped(self, matcher):
        """Test modifiers never push confidence above 100."""
        symptoms = ["severe_headache", "nausea", "vomiting", "light_sensitivity",
                    "sound_sensitivity", "vision_problems", "aura", "dizziness"]
        match = _by_name(matcher.match(symptoms, gender="Female"))["Migraine"]
        assert match.confidence == 100
        assert match.urgency_tier == UrgencyTier.URGENT

    def test_no_cross_disease_normalization(self, matcher):
        """Test confidences are independent per disease."""
        analysis = matcher.match(AMI_SYMPTOMS)
        assert sum(m.confidence for m in analysis.matches) > 100

    def test_duplicates_collapsed(self, matcher):
        """Test repeated ids count once."""
        analysis = matcher.match(["chest_pain", "chest_pain", " Chest_Pain "])
        assert analysis.selected_symptom_count == 1
        assert _by_name(analysis)[AMI].matched_symptom_count == 1

    def test_unknown_ids_reported(self, matcher):
        """Test unknown ids are ignored and reported."""
        analysis = matcher.match(["chest_pain", "not_a_symptom"])
        assert analysis.unknown_symptoms == ["not_a_symptom"]
        assert analysis.selected_symptom_count == 1

    @pytest.mark.parametrize("symptoms", [[], ["", "  "], "chest_pain"])
    def test_empty_selection(self, matcher, symptoms):
        """Test an empty or malformed selection is rejected."""
        with pytest.raises(MalformedInputError):
            matcher.match(symptoms)

    @pytest.mark.parametrize("age", [-1, float("nan"), "50", True])
    def test_invalid_age(self, matcher, age):
        """Test negative, non-finite and non-numeric ages are rejected."""
        with pytest.raises(MalformedInputError):
            matcher.match(["chest_pain"], age=age)

    @pytest.mark.parametrize("gender", [1, ["female"]])
    def test_non_string_gender(self, matcher, gender):
        """Test a gender that is not text is malformed input."""
        with pytest.raises(MalformedInputError):
            matcher.match(["chest_pain"], gender=gender)

    def test_mild_routine(self, matcher):
        """Test mild diseases with few matches are routine."""
        analysis = matcher.match(["runny_nose", "sneezing", "cough"])
        cold = _by_name(analysis)["Common Cold"]
        assert cold.urgency_tier == UrgencyTier.ROUTINE
        assert analysis.matches[0].disease_name == "Common Cold"
        assert analysis.matches[1].disease_name == "Allergic Rhinitis"

    def test_results_are_fresh(self, matcher):
        """Test mutating a result does not leak into later requests."""
        first = matcher.match(AMI_SYMPTOMS)
        first.matches[0].recommendations.append("tampered")
        second = matcher.match(AMI_SYMPTOMS)
        assert "tampered" not in second.matches[0].recommendations

    def test_to_dict(self, matcher):
        """Test serialized analysis."""
        data = matcher.match(["wheezing"]).to_dict()
        assert data["total_matches"] == len(data["matches"])
        assert data["matches"][0]["severity_tier"] == "serious"
        assert data["total_diseases"] == 16
        assert "disclaimer" in data
