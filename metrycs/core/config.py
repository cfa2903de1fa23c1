# metrycs/core/config.py
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    APP_NAME: str = "Event Metrycs API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: str = "INFO"
    AUDIT_LOG_ENABLED: bool = True

    # Sample data seeded into the in-memory catalogue on startup
    SEED_SAMPLE_EVENTS: bool = True
    SAMPLE_ORGANIZATION_ID: str = "org_avax_col"
    SAMPLE_CREATOR_ID: str = "user_demo"

    # Metrics synthesis
    RANDOM_SEED: Optional[int] = None  # Set for reproducible demo data
    MAX_WALLET_SAMPLE: int = 50

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("API_PREFIX")
    @classmethod
    def clean_api_prefix(cls, v: str) -> str:
        """Leading slash, no trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
