"""
Tests for the configuration loader.
"""

from pathlib import Path

import pytest

from genai_gateway.core.config import AuthType, GenerationSettings, Settings, get_settings
from genai_gateway.core.models import (
    DEFAULT_GEMINI_FLASH_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
)


class TestAuthType:
    """Tests for AuthType enum."""

    def test_values(self) -> None:
        """Test the wire values of each auth type."""
        assert AuthType.LOGIN_WITH_GOOGLE.value == "oauth-personal"
        assert AuthType.USE_GEMINI.value == "gemini-api-key"
        assert AuthType.USE_VERTEX_AI.value == "vertex-ai"
        assert AuthType.USE_OPENAI.value == "openai"

    def test_from_value_parses_strings(self) -> None:
        """Test parsing a known string value."""
        assert AuthType.from_value("vertex-ai") is AuthType.USE_VERTEX_AI
        assert AuthType.from_value(AuthType.USE_OPENAI) is AuthType.USE_OPENAI

    @pytest.mark.parametrize("value", [None, "", "api-key", "OPENAI"])
    def test_from_value_unknown_returns_none(self, value) -> None:
        """Test unknown or empty values are not guessed."""
        assert AuthType.from_value(value) is None


class TestGenerationSettings:
    """Tests for GenerationSettings model."""

    def test_default_values(self) -> None:
        """Test default generation configuration values."""
        config = GenerationSettings()
        assert config.default_model == DEFAULT_GEMINI_MODEL
        assert config.fallback_model == DEFAULT_GEMINI_FLASH_MODEL
        assert config.openai_default_model == DEFAULT_OPENAI_MODEL
        assert config.client_name == "GeminiCLI"
        assert config.model_check_enabled is True
        assert config.model_check_timeout_seconds == 2.0

    def test_timeout_validation(self) -> None:
        """Test probe timeout must be positive and bounded."""
        with pytest.raises(ValueError):
            GenerationSettings(model_check_timeout_seconds=0)
        with pytest.raises(ValueError):
            GenerationSettings(model_check_timeout_seconds=31)

    def test_endpoint_trailing_slash_stripped(self) -> None:
        """Test the probe endpoint is normalized."""
        config = GenerationSettings(model_check_endpoint="https://example.test/v1/")
        assert config.model_check_endpoint == "https://example.test/v1"


class TestSettings:
    """Tests for Settings model."""

    def test_default_settings(self, settings_factory) -> None:
        """Test default settings have no credentials."""
        settings = settings_factory()
        assert settings.gemini_api_key == ""
        assert settings.google_api_key == ""
        assert settings.openai_api_key == ""
        assert settings.cli_version is None
        assert isinstance(settings.generation, GenerationSettings)

    def test_credentials_from_environment(
        self, settings_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test credential fields are read from environment variables."""
        monkeypatch.setenv("GEMINI_API_KEY", "env-gemini")
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "env-project")
        monkeypatch.setenv("OPENAI_API_KEY", "env-openai")
        monkeypatch.setenv("CLI_VERSION", "9.9.9")

        settings = settings_factory()
        assert settings.gemini_api_key == "env-gemini"
        assert settings.google_cloud_project == "env-project"
        assert settings.openai_api_key == "env-openai"
        assert settings.cli_version == "9.9.9"

    def test_nested_generation_from_environment(
        self, settings_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test nested generation settings use the double underscore delimiter."""
        monkeypatch.setenv("GENERATION__CLIENT_NAME", "EnvClient")
        settings = settings_factory()
        assert settings.generation.client_name == "EnvClient"

    def test_none_credentials_treated_as_empty(self, settings_factory) -> None:
        """Test an explicit None credential is the same as unset."""
        settings = settings_factory(gemini_api_key=None)
        assert settings.gemini_api_key == ""

    def test_has_vertex_credentials_requires_all_three(self, settings_factory) -> None:
        """Test vertex credentials need key, project and location together."""
        complete = settings_factory(
            google_api_key="k", google_cloud_project="p", google_cloud_location="l"
        )
        assert complete.has_vertex_credentials is True

        for missing in ("google_api_key", "google_cloud_project", "google_cloud_location"):
            values = {
                "google_api_key": "k",
                "google_cloud_project": "p",
                "google_cloud_location": "l",
            }
            values[missing] = ""
            assert settings_factory(**values).has_vertex_credentials is False

    def test_load_from_yaml(self, temp_config_file: Path) -> None:
        """Test loading settings from YAML file."""
        settings = Settings.from_yaml(temp_config_file)

        assert settings.generation.openai_default_model == "gpt-4o-mini"
        assert settings.generation.client_name == "TestClient"
        assert settings.generation.model_check_enabled is False
        assert settings.generation.model_check_timeout_seconds == 1.5
        assert settings.generation.model_check_endpoint == "https://example.test/v1beta"

    def test_environment_overrides_yaml_generation(
        self, temp_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test nested environment values win over config.yaml."""
        monkeypatch.setenv("GENERATION__CLIENT_NAME", "EnvClient")

        settings = Settings.from_yaml(temp_config_file)

        assert settings.generation.client_name == "EnvClient"
        # Fields the environment does not set still come from the file.
        assert settings.generation.openai_default_model == "gpt-4o-mini"
        assert settings.generation.model_check_timeout_seconds == 1.5

    def test_environment_credentials_override_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a credential in config.yaml cannot shadow the environment."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text('openai_api_key: "from-yaml"\ngemini_api_key: "yaml-gemini"\n')
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")

        settings = Settings.from_yaml(config_path)

        assert settings.openai_api_key == "from-env"
        assert settings.gemini_api_key == "yaml-gemini"
        assert isinstance(settings, Settings)

    def test_load_from_missing_yaml_uses_defaults(self, tmp_path: Path) -> None:
        """Test a missing config file falls back to defaults."""
        settings = Settings.from_yaml(tmp_path / "missing.yaml")
        assert settings.generation.default_model == DEFAULT_GEMINI_MODEL

    def test_load_from_empty_yaml(self, tmp_path: Path) -> None:
        """Test an empty config file falls back to defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        settings = Settings.from_yaml(config_path)
        assert settings.generation.client_name == "GeminiCLI"


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_get_settings_is_cached(self) -> None:
        """Test settings are only loaded once."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test clearing the cache picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("OPENAI_API_KEY", "reloaded")
        get_settings.cache_clear()
        second = get_settings()

        assert first is not second
        assert second.openai_api_key == "reloaded"
