"""
Prediction Service - Engine Orchestration

Owns the knowledge base, the symptom matcher and one DiseaseModel per
condition. Tracks per-model readiness and exposes the query operations used
by the presentation layer.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from medrisk.config import Settings, get_settings
from medrisk.core.diseases import (
    DISEASE_CONFIGS, DiseaseKey, DiseaseModel, PredictionResult, sample_training_sets,
)
from medrisk.core.diseases.base import RecordLike
from medrisk.core.symptoms import KnowledgeBase, SymptomAnalysis, SymptomMatcher, default_knowledge_base
from medrisk.exceptions import EngineError, MalformedInputError
from medrisk.models.prediction import (
    EngineStatusResponse, ErrorResponse, FeatureQuery, ModelStatusResponse,
    PredictionResponse, SymptomAnalysisResponse, SymptomQuery,
)
from medrisk.utils import get_logger

logger = get_logger(__name__)

DiseaseId = Union[str, DiseaseKey]


class PredictionService:
    """
    Service class for disease risk predictions and symptom analysis.

    Models start Uninitialized; initialize() moves each one through Loading
    to Ready. Queries against a model that is not Ready raise
    ModelNotReadyError.
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.knowledge_base = knowledge_base or default_knowledge_base()
        self.matcher = SymptomMatcher(
            self.knowledge_base,
            top_n=self.settings.symptom_top_n,
            age_multiplier=self.settings.age_risk_multiplier,
            disclaimer=self.settings.disclaimer,
        )
        self.models: Dict[DiseaseKey, DiseaseModel] = {
            key: DiseaseModel(config) for key, config in DISEASE_CONFIGS.items()
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, training_sets: Mapping[DiseaseId, Iterable[RecordLike]]) -> Dict[str, int]:
        """
        Load training sets into their disease models.

        A failure while loading one model is logged and leaves only that
        model not Ready.

        Args:
            training_sets: Records keyed by disease key or alias

        Returns:
            Stored record count per successfully loaded model
        """
        resolved = {self._resolve(key): records for key, records in training_sets.items()}
        loaded: Dict[str, int] = {}

        logger.info(f"Loading {len(resolved)} disease models...")

        if self.settings.concurrent_model_loading and len(resolved) > 1:
            with ThreadPoolExecutor(max_workers=self.settings.model_loading_workers) as executor:
                futures = {
                    executor.submit(self.models[key].load, records): key
                    for key, records in resolved.items()
                }
                for future in as_completed(futures):
                    key = futures[future]
                    try:
                        loaded[key.value] = future.result()
                    except Exception as e:
                        logger.error(f"Failed to load {key.value} model: {e}", exc_info=True)
        else:
            for key, records in resolved.items():
                try:
                    loaded[key.value] = self.models[key].load(records)
                except Exception as e:
                    logger.error(f"Failed to load {key.value} model: {e}", exc_info=True)

        logger.info(f"Engine initialized: {len(loaded)}/{len(self.models)} models ready")
        return loaded

    def initialize_with_samples(self) -> Dict[str, int]:
        """Load the bundled reference rows into every model."""
        return self.initialize(sample_training_sets())

    def evaluate(
        self,
        holdout_sets: Mapping[DiseaseId, Iterable[RecordLike]],
        use_ensemble: Optional[bool] = None
    ) -> Dict[str, Dict[str, Any]]:
        """
        Score held-out records per disease model.

        Results are also reported by statistics(). A model that cannot be
        evaluated is logged and left out of the returned mapping.

        Returns:
            Serialized ModelEvaluation per evaluated model
        """
        ensemble = self.settings.use_ensemble_by_default if use_ensemble is None else use_ensemble
        results: Dict[str, Dict[str, Any]] = {}

        for disease, records in holdout_sets.items():
            key = self._resolve(disease)
            try:
                results[key.value] = self.models[key].evaluate(records, use_ensemble=ensemble).to_dict()
            except EngineError as e:
                logger.warning(f"Skipping {key.value} evaluation: {e}")

        return results

    def model(self, disease: DiseaseId) -> DiseaseModel:
        return self.models[self._resolve(disease)]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def predict(
        self,
        disease: DiseaseId,
        fields: Mapping[str, Any],
        use_ensemble: Optional[bool] = None
    ) -> PredictionResult:
        """
        Assess one disease from named clinical fields.

        Args:
            disease: Model key or alias (e.g. "heart", "diabetes")
            fields: Feature name -> value
            use_ensemble: None uses the configured default

        Raises:
            ModelNotReadyError: model has not finished loading
            MalformedInputError: unknown disease or invalid fields
        """
        key = self._resolve(disease)
        ensemble = self.settings.use_ensemble_by_default if use_ensemble is None else use_ensemble

        try:
            result = self.models[key].predict(fields, use_ensemble=ensemble)
        except EngineError as e:
            logger.warning(f"{key.value} prediction rejected: {e}")
            raise

        logger.debug(
            f"{key.value}: prediction={result.binary_prediction} confidence={result.confidence} "
            f"risk={result.risk_score} ({result.risk_level.value})"
        )
        return result

    def predict_query(self, query: FeatureQuery) -> PredictionResponse:
        result = self.predict(query.disease, query.features, query.use_ensemble)
        return PredictionResponse.model_validate(result.to_dict())

    def analyze_symptoms(
        self,
        symptoms: Iterable[str],
        age: Optional[float] = None,
        gender: Optional[str] = None
    ) -> SymptomAnalysis:
        """Rank knowledge-base diseases against reported symptoms."""
        analysis = self.matcher.match(symptoms, age=age, gender=gender)
        logger.info(
            f"Symptom analysis: {analysis.selected_symptom_count} symptoms -> "
            f"{analysis.total_matches} matches"
        )
        return analysis

    def analyze_query(self, query: SymptomQuery) -> SymptomAnalysisResponse:
        analysis = self.analyze_symptoms(query.symptoms, age=query.age, gender=query.gender)
        return SymptomAnalysisResponse.model_validate(analysis.to_dict())

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def status(self) -> EngineStatusResponse:
        models = [
            ModelStatusResponse(
                key=key.value,
                name=model.config.name,
                state=model.state.value,
                ready=model.is_ready,
                training_size=model.training_size,
            )
            for key, model in self.models.items()
        ]
        return EngineStatusResponse(
            app_name=self.settings.app_name,
            version=self.settings.app_version,
            all_ready=all(m.ready for m in models),
            models=models,
            timestamp=datetime.now().isoformat(),
        )

    def statistics(self) -> Dict[str, Any]:
        return {
            "models": {key.value: model.statistics() for key, model in self.models.items()},
            "symptom_analysis": self.knowledge_base.statistics(),
        }

    def symptoms(self) -> Dict[str, List[Dict[str, Any]]]:
        """Known symptoms grouped by category."""
        return self.knowledge_base.symptoms_by_category()

    def diseases(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "models": [model.describe() for model in self.models.values()],
            "symptom_diseases": self.knowledge_base.disease_summaries(),
        }

    @staticmethod
    def error_response(error: EngineError) -> ErrorResponse:
        return ErrorResponse.model_validate(error.to_dict())

    @staticmethod
    def _resolve(disease: DiseaseId) -> DiseaseKey:
        if isinstance(disease, DiseaseKey):
            return disease
        if not isinstance(disease, str):
            raise MalformedInputError(f"Unknown disease model: {disease!r}")
        return DiseaseKey.from_string(disease)
