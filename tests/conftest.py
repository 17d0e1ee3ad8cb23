"""
Pytest configuration and fixtures for the content generation gateway tests.
"""

from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from genai_gateway.core.config import Settings
from genai_gateway.core.container import clear_container_cache

CREDENTIAL_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_LOCATION",
    "OPENAI_API_KEY",
    "CLI_VERSION",
)


@pytest.fixture(autouse=True)
def clear_caches() -> Generator[None, None, None]:
    """
    Clear all caches before and after each test.

    This ensures test isolation by resetting singleton state.
    """
    clear_container_cache()
    yield
    clear_container_cache()


@pytest.fixture(autouse=True)
def clean_credential_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove real credentials from the environment so tests only see synthetic ones."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_settings(**kwargs: Any) -> Settings:
    """Build Settings from explicit values only, ignoring any .env file."""
    return Settings(_env_file=None, **kwargs)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Factory building Settings that ignore any .env file."""
    return make_settings


@pytest.fixture
def settings() -> Settings:
    """Settings with no credentials and the availability probe disabled."""
    return make_settings(generation={"model_check_enabled": False})


@pytest.fixture
def full_credentials() -> Settings:
    """Settings with credentials for every key-based auth type."""
    return make_settings(
        gemini_api_key="gemini-test-key",
        google_api_key="google-test-key",
        google_cloud_project="test-project",
        google_cloud_location="us-central1",
        openai_api_key="sk-test-key",
        generation={"model_check_enabled": False},
    )


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """
    Create a temporary config.yaml file for testing.

    Args:
        tmp_path: Pytest tmp_path fixture.

    Returns:
        Path to the temporary config file.
    """
    config_content = """
generation:
  default_model: "gemini-2.5-pro"
  fallback_model: "gemini-2.5-flash"
  openai_default_model: "gpt-4o-mini"
  client_name: "TestClient"
  model_check_enabled: false
  model_check_timeout_seconds: 1.5
  model_check_endpoint: "https://example.test/v1beta/"
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path
