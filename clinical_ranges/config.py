"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file: check package dir first, then project root
_PACKAGE_DIR = Path(__file__).parent
_PROJECT_ROOT = _PACKAGE_DIR.parent
_ENV_FILE = _PACKAGE_DIR / ".env" if (_PACKAGE_DIR / ".env").exists() else _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Engine and API settings loaded from environment variables.

    Every variable is prefixed with ``CLINICAL_RANGES_`` (for example
    ``CLINICAL_RANGES_GRAPH_PADDING_RATIO=0.25``).
    """

    model_config = SettingsConfigDict(
        env_prefix="CLINICAL_RANGES_",
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Graph domain synthesis when no explicit graph range is given
    graph_padding_ratio: float = Field(default=0.5, gt=0)
    graph_fallback_span: float = Field(default=10.0, gt=0)

    # Comma-separated list of allowed CORS origins
    cors_origins: str = "http://localhost:3000"

    # Application
    debug: bool = False


settings = Settings()
