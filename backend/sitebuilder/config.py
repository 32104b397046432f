from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)

# Value shipped in the sample .env; treated the same as an empty key.
PEXELS_PLACEHOLDER_KEY = "YOUR_PEXELS_API_KEY"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "AI Website Builder API"
    app_version: str = "1.0.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./sitebuilder.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # OpenRouter configuration (copy generation)
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_app_name: str = "AI Website Builder"
    content_model: str = "meta-llama/llama-3.1-8b-instruct"
    content_temperature: float = 0.7
    content_max_tokens: int = 2000

    # Pexels configuration (stock photos)
    pexels_api_key: str = ""
    pexels_base_url: str = "https://api.pexels.com/v1"
    pexels_per_page: int = 15
    pexels_max_page: int = 10

    # Editor
    recent_projects_limit: int = 10
    panel_transition_ms: int = 300
    viewport_width: int = 1440
    viewport_height: int = 900

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # website generation pipeline
    log_level_openrouter: str = "INFO"       # OpenRouter chat client
    log_level_pexels: str = "INFO"           # Pexels image client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def pexels_configured(self) -> bool:
        key = self.pexels_api_key.strip()
        return bool(key) and key != PEXELS_PLACEHOLDER_KEY


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
