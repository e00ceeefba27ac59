"""
Configuration Management for the Disease Risk Engine

Environment-based configuration using Pydantic Settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env file
    )
    
    # Application
    app_name: str = "Disease Risk Engine"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level for medrisk loggers")
    
    # Symptom matcher
    symptom_top_n: int = Field(default=5, ge=1, description="Number of ranked matches returned")
    age_risk_multiplier: float = Field(default=1.2, gt=0, description="Confidence boost inside a disease's high-risk age band")
    
    # Model lifecycle
    concurrent_model_loading: bool = Field(default=True, description="Load disease models on a thread pool")
    model_loading_workers: int = Field(default=5, ge=1)
    load_bundled_samples: bool = Field(default=True, description="Seed models with bundled reference rows at startup")
    
    # Inference
    use_ensemble_by_default: bool = Field(default=False, description="Run the KNN ensemble instead of the single classifier")
    disclaimer: str = "This is an AI-based prediction tool for educational purposes only. Always consult healthcare professionals."


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
