"""
Configuration settings for the fake-news analysis pipeline.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. The same settings class drives all
three stages; STAGE selects which one a process serves.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from fake_news_pipeline.models.enums import StageName


DEFAULT_PORTS = {
    StageName.GATEWAY: 4000,
    StageName.CLASSIFIER: 3000,
    StageName.SUMMARIZER: 3001,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Fake News Pipeline"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # === Stage selection ===
    STAGE: StageName = StageName.GATEWAY
    HOST: str = "0.0.0.0"
    PORT: Optional[int] = None  # None = default port of the selected stage

    # === Ollama Configuration ===
    OLLAMA_BASE_URL: str = "http://ollama:11434"
    OLLAMA_MODEL: str = "llama3.2:1b"

    # === Downstream stages ===
    CLASSIFIER_URL: str = "http://fake-news-classifier:3000"
    SUMMARIZER_URL: str = "http://news-summarizer:3001"
    DOWNSTREAM_TIMEOUT: float = 30.0  # seconds, applied to every outbound hop

    # === Rate limiting (gateway) ===
    RATE_LIMIT_WINDOW_SECONDS: float = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100
    TRUST_FORWARDED_FOR: bool = False  # Use X-Forwarded-For as client identity

    # === Output shaping ===
    EXCERPT_LENGTH: int = 200
    SUMMARY_MAX_WORDS: int = 50
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = templates shipped with the package

    # === HTTP ===
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    @property
    def port(self) -> int:
        """Listening port, falling back to the stage default."""
        return self.PORT if self.PORT is not None else DEFAULT_PORTS[self.STAGE]


# Global settings instance
settings = Settings()
