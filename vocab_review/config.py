"""Application configuration management."""
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    PROJECT_NAME: str = "Vocabulary Review"
    API_V1_STR: str = "/api/v1"

    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    STORE_BACKEND: Literal["rest", "sql"] = Field(
        "rest", description="Which repository backend serves vocabulary entries"
    )
    SUPABASE_URL: Optional[AnyUrl] = Field(
        None, description="Base URL of the hosted data store"
    )
    SUPABASE_ANON_KEY: Optional[str] = Field(
        None, description="Public API key sent with every store request"
    )
    DATABASE_URL: Optional[str] = Field(
        None, description="SQLAlchemy URL used by the direct SQL backend"
    )
    VOCAB_TABLE: str = Field("vocab_entries", description="Table holding the entries")
    REQUEST_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout for store HTTP calls")

    DISPLAY_TIMEZONE: str = Field(
        "UTC", description="Timezone in which a calendar day filter is interpreted"
    )
    SESSION_REGISTRY_LIMIT: int = Field(
        256, ge=1, description="Maximum number of open memorization sessions"
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


settings = get_settings()
