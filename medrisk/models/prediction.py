"""
Prediction API Models

Query and result contract shared with the presentation layer.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Any, Dict, List, Literal, Optional

FiniteNumber = Annotated[float, Field(allow_inf_nan=False)]
Percent = Annotated[int, Field(ge=0, le=100)]


class FeatureQuery(BaseModel):
    """Named clinical fields for one disease model."""
    disease: str = Field(..., min_length=1, description="Model key or alias: cardiac, diabetes, kidney, ...")
    features: Dict[str, FiniteNumber] = Field(default_factory=dict)
    use_ensemble: Optional[bool] = Field(default=None, description="Override the configured ensemble default")


class SymptomQuery(BaseModel):
    """Reported symptoms with optional demographics."""
    symptoms: List[str] = Field(..., min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    gender: Optional[Literal["male", "female"]] = None

    @field_validator("gender", mode="before")
    @classmethod
    def _lower_gender(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value


class ModelVoteResponse(BaseModel):
    model: str
    prediction: int = Field(..., ge=0, le=1)
    confidence: Percent


class PredictionResponse(BaseModel):
    """Merged classifier and rule-score result."""
    model_config = ConfigDict(protected_namespaces=())

    disease_key: str
    disease_name: str
    binary_prediction: int = Field(..., ge=0, le=1)
    prediction_label: str
    has_disease_risk: bool
    confidence: Percent
    risk_score: Percent
    risk_level: Literal["Low", "Moderate", "High", "Unknown"]
    risk_factors: List[str] = []
    recommendations: List[str] = []
    patient_profile: Dict[str, Any] = {}
    neighbors: int = Field(default=0, ge=0)
    model_votes: Optional[List[ModelVoteResponse]] = None
    timestamp: str


class MultiDiseaseMatchResponse(BaseModel):
    disease_name: str
    confidence: Percent
    matched_symptom_count: int = Field(..., ge=1)
    total_symptom_count: int = Field(..., ge=1)
    match_percentage: Percent
    matched_symptoms: List[str]
    severity_tier: Literal["mild", "moderate", "serious"]
    urgency_tier: Literal["emergency", "urgent", "soon", "routine"]
    specialization: str
    recommendations: List[str] = []
    description: str = ""


class SymptomAnalysisResponse(BaseModel):
    """Ranked symptom matches."""
    matches: List[MultiDiseaseMatchResponse]
    total_matches: int
    selected_symptom_count: int
    unknown_symptoms: List[str] = []
    total_diseases: int
    disclaimer: str
    timestamp: str


class ModelStatusResponse(BaseModel):
    key: str
    name: str
    state: Literal["uninitialized", "loading", "ready"]
    ready: bool
    training_size: int = 0


class EngineStatusResponse(BaseModel):
    """Readiness of every disease model."""
    app_name: str
    version: str
    all_ready: bool
    models: List[ModelStatusResponse]
    timestamp: str


class ErrorResponse(BaseModel):
    """Serialized EngineError."""
    error: str
    message: str
    retryable: bool = False
    details: List[str] = []
    model: Optional[str] = None
    state: Optional[str] = None
