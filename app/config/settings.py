"""Application configuration settings."""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator

class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Kindred Matching Service"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Kindred Backend"
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./kindred.db"
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    POSTGRESQL_CONNECTION_URI: Optional[str] = None

    # Storage backend used for profiles, interactions and success patterns
    STORAGE_BACKEND: str = "sql"  # sql, memory

    # Matching
    INTERACTION_HISTORY_LIMIT: int = 100
    SUCCESS_PATTERN_LIMIT: int = 50
    DEFAULT_DISTANCE_MILES: float = 50.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "allow"
    }

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Only the SQL and in-memory backends are supported."""
        v = v.lower()
        if v not in ("sql", "memory"):
            raise ValueError(f"Unsupported storage backend: {v}")
        return v

    @model_validator(mode='before')
    @classmethod
    def validate_database_url(cls, values):
        """Validate database URL configuration."""
        if isinstance(values, dict) and values.get("POSTGRESQL_CONNECTION_URI"):
            values["DATABASE_URL"] = values["POSTGRESQL_CONNECTION_URI"]
        return values

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
