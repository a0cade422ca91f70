import os
from functools import lru_cache
from typing import List, Optional
from pydantic import validator
from pydantic_settings import BaseSettings


DEFAULT_SEED_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "data", "seed.json"
)


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"  # Comma-separated list of origins

    # Environment name
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Content store
    CONTENT_SEED_PATH: Optional[str] = None

    # Search tuning
    SEARCH_DEFAULT_LIMIT: int = 10
    SUGGESTION_DEFAULT_LIMIT: int = 5
    MIN_QUERY_LENGTH: int = 2

    @validator("LOG_LEVEL")
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @validator("MIN_QUERY_LENGTH")
    def validate_min_query_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MIN_QUERY_LENGTH must be at least 1")
        return v

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def seed_path(self) -> str:
        return self.CONTENT_SEED_PATH or DEFAULT_SEED_PATH

    class Config:
        case_sensitive = True  # Variables are case-sensitive
        env_file = ".env"      # Load environment variables from .env file
        env_file_encoding = "utf-8" # Encoding for the .env file
        extra = "ignore"


@lru_cache() # Cache the settings object for performance
def get_settings() -> Settings:
    return Settings()
