"""
Unit Tests for the Prediction Service

Tests for model lifecycle orchestration, query routing and introspection.
"""
import pytest

from medrisk.config import Settings
from medrisk.core.diseases import DiseaseKey, ModelState, TrainingRecord, sample_records
from medrisk.exceptions import MalformedInputError, ModelNotReadyError
from medrisk.models.prediction import FeatureQuery, SymptomQuery, PredictionResponse, SymptomAnalysisResponse
from medrisk.services import PredictionService


METABOLIC_EXAMPLE = {
    "glucose": 160,
    "bmi": 32,
    "age": 50,
    "blood_pressure": 85,
    "insulin": 0,
    "diabetes_pedigree": 0.6,
}


# Fixtures
@pytest.fixture
def settings() -> Settings:
    return Settings(concurrent_model_loading=False, use_ensemble_by_default=False)


@pytest.fixture
def service(settings) -> PredictionService:
    """Service with no models loaded."""
    return PredictionService(settings=settings)


@pytest.fixture
def ready_service(service) -> PredictionService:
    """Service loaded with the bundled rows."""
    service.initialize_with_samples()
    return service


class TestLifecycle:
    """Tests for model loading and readiness."""

    def test_starts_uninitialized(self, service):
        """Test every model starts Uninitialized."""
        status = service.status()
        assert status.all_ready is False
        assert {m.state for m in status.models} == {"uninitialized"}
        assert len(status.models) == 5

    def test_initialize_with_samples(self, service):
        """Test bundled rows make every model ready."""
        loaded = service.initialize_with_samples()

        assert loaded == {
            "cardiac": 30,
            "metabolic": 30,
            "renal": 15,
            "oncologic": 15,
            "hepatic": 15,
        }
        assert service.status().all_ready is True

    def test_concurrent_loading(self):
        """Test thread-pool loading reaches the same state."""
        service = PredictionService(settings=Settings(concurrent_model_loading=True, model_loading_workers=3))
        loaded = service.initialize_with_samples()
        assert len(loaded) == 5
        assert all(model.is_ready for model in service.models.values())

    def test_partial_initialization(self, service):
        """Test models absent from the training sets stay Uninitialized."""
        service.initialize({"heart": sample_records(DiseaseKey.CARDIAC)})

        assert service.model("cardiac").is_ready
        assert service.model(DiseaseKey.METABOLIC).state == ModelState.UNINITIALIZED
        with pytest.raises(ModelNotReadyError):
            service.predict("diabetes", METABOLIC_EXAMPLE)

    def test_load_failure_isolated(self, service):
        """Test one failing load leaves only that model not ready."""
        def broken_rows():
            yield TrainingRecord((1.0,) * 8, 1)
            raise RuntimeError("source unavailable")

        loaded = service.initialize({
            "diabetes": broken_rows(),
            "kidney": sample_records(DiseaseKey.RENAL),
        })

        assert loaded == {"renal": 15}
        assert service.model("renal").is_ready
        assert service.model("metabolic").state == ModelState.UNINITIALIZED
        with pytest.raises(ModelNotReadyError) as exc_info:
            service.predict("metabolic", METABOLIC_EXAMPLE)
        assert exc_info.value.state == "uninitialized"

    def test_reload_after_failure(self, service):
        """Test a failed model can be initialized again."""
        def broken_rows():
            raise RuntimeError("source unavailable")
            yield

        assert service.initialize({"diabetes": broken_rows()}) == {}
        assert service.initialize({"diabetes": sample_records(DiseaseKey.METABOLIC)}) == {"metabolic": 30}
        assert service.predict("diabetes", METABOLIC_EXAMPLE).risk_score == 100

    def test_plain_list_rows_do_not_block_loading(self, service):
        """Test rows that are not records are dropped and the model still loads."""
        loaded = service.initialize({"heart": iter([[1, 2, 3]])})

        assert loaded == {"cardiac": 0}
        assert service.model("heart").is_ready
        assert service.statistics()["models"]["cardiac"]["dropped_records"] == 1


class TestQueries:
    """Tests for prediction and symptom queries."""

    def test_predict_by_alias(self, ready_service):
        """Test aliases route to the right model."""
        result = ready_service.predict("diabetes", METABOLIC_EXAMPLE)
        assert result.disease_key == "metabolic"
        assert result.risk_score == 100
        assert result.model_votes is None

    def test_unknown_disease(self, ready_service):
        """Test unknown disease ids are malformed input."""
        with pytest.raises(MalformedInputError):
            ready_service.predict("gout", {})

    def test_ensemble_default_from_settings(self):
        """Test the configured ensemble default applies."""
        service = PredictionService(settings=Settings(concurrent_model_loading=False, use_ensemble_by_default=True))
        service.initialize_with_samples()

        assert len(service.predict("metabolic", METABOLIC_EXAMPLE).model_votes) == 3
        assert service.predict("metabolic", METABOLIC_EXAMPLE, use_ensemble=False).model_votes is None

    def test_predict_query(self, ready_service):
        """Test pydantic query in, pydantic response out."""
        query = FeatureQuery(disease="diabetes", features=METABOLIC_EXAMPLE, use_ensemble=True)
        response = ready_service.predict_query(query)

        assert isinstance(response, PredictionResponse)
        assert response.risk_level == "High"
        assert len(response.model_votes) == 3
        assert 0 <= response.confidence <= 100

    def test_analyze_query(self, ready_service):
        """Test symptom query round trip."""
        query = SymptomQuery(symptoms=["chest_pain", "cold_sweat", "jaw_pain"], age=60, gender="male")
        response = ready_service.analyze_query(query)

        assert isinstance(response, SymptomAnalysisResponse)
        assert response.matches[0].disease_name == "Acute Myocardial Infarction (Heart Attack)"
        assert response.matches[0].urgency_tier == "emergency"

    def test_symptoms_work_before_models_load(self, service):
        """Test the matcher does not depend on disease model readiness."""
        analysis = service.analyze_symptoms(["wheezing"])
        assert analysis.total_matches == 2

    def test_matcher_uses_settings(self):
        """Test top-N and disclaimer come from settings."""
        service = PredictionService(settings=Settings(symptom_top_n=1, disclaimer="Consult a doctor."))
        analysis = service.analyze_symptoms(["fatigue"])
        assert analysis.total_matches == 1
        assert analysis.disclaimer == "Consult a doctor."


class TestIntrospection:
    """Tests for statistics and listings."""

    def test_statistics(self, ready_service):
        """Test per-model and knowledge-base statistics."""
        stats = ready_service.statistics()
        assert stats["models"]["metabolic"]["total_records"] == 30
        assert stats["models"]["renal"]["state"] == "ready"
        assert stats["symptom_analysis"]["total_diseases"] == 16

    def test_evaluate(self, ready_service):
        """Test hold-out evaluation is returned and surfaced in statistics."""
        results = ready_service.evaluate({"diabetes": sample_records(DiseaseKey.METABOLIC)})

        assert set(results) == {"metabolic"}
        assert results["metabolic"]["test_records"] == 30
        matrix = results["metabolic"]["confusion_matrix"]
        assert sum(matrix.values()) == 30

        stats = ready_service.statistics()["models"]
        assert stats["metabolic"]["model_accuracy"] == results["metabolic"]
        assert stats["renal"]["model_accuracy"] is None

    def test_evaluate_skips_unready_models(self, service):
        """Test models that are not Ready are left out of evaluation."""
        assert service.evaluate({"heart": sample_records(DiseaseKey.CARDIAC)}) == {}

    def test_listings(self, service):
        """Test symptom and disease listings."""
        assert "respiratory" in service.symptoms()
        diseases = service.diseases()
        assert {m["key"] for m in diseases["models"]} == {k.value for k in DiseaseKey}
        assert len(diseases["symptom_diseases"]) == 16

    def test_error_response(self, service):
        """Test engine errors serialize to the error schema."""
        with pytest.raises(ModelNotReadyError) as exc_info:
            service.predict("heart", {})

        response = service.error_response(exc_info.value)
        assert response.error == "ModelNotReadyError"
        assert response.retryable is True
        assert response.model == "Heart Disease"
        assert response.state == "uninitialized"
