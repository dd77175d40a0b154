from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    app_name: str = "Neta News"
    log_level: str = "INFO"
    logs_dir: Path = Path("logs")

    # News source
    news_source: str = "newsdata"
    newsdata_api_key: str | None = None
    newsdata_country: str = "jp"
    newsdata_language: str = "en"
    batch_size: int = Field(default=5, ge=1, le=10)

    # LLM provider (one per deployment)
    llm_provider: str = "anthropic"
    llm_model: str | None = None
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    google_api_key: str | None = None

    # HTTP / completion limits
    http_timeout_seconds: float = 15.0
    completion_timeout_seconds: float = 60.0
    completion_max_tokens: int = 4096

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("news_source", "llm_provider")
    @classmethod
    def normalize_choice(cls, v: str) -> str:
        return v.strip().lower()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
