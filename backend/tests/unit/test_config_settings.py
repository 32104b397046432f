"""Unit tests for application settings configuration."""

from pathlib import Path

from sitebuilder.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_pexels_placeholder_key_counts_as_unconfigured():
    assert Settings(pexels_api_key="YOUR_PEXELS_API_KEY").pexels_configured is False
    assert Settings(pexels_api_key="  ").pexels_configured is False
    assert Settings(pexels_api_key="real-key").pexels_configured is True


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("RECENT_PROJECTS_LIMIT", "5")
    monkeypatch.setenv("CONTENT_MODEL", "openai/gpt-4o-mini")

    settings = Settings()

    assert settings.recent_projects_limit == 5
    assert settings.content_model == "openai/gpt-4o-mini"
