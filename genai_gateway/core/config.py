"""
Configuration loader for the content-generation gateway.

Loads configuration from environment variables and config.yaml using pydantic-settings.
Environment variables always win over config.yaml, so credential material (API keys,
cloud project/location) set in the environment cannot be shadowed by a stray YAML entry.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from genai_gateway.core.models import (
    DEFAULT_GEMINI_FLASH_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
)


class AuthType(str, Enum):
    """Supported authentication strategies. Exactly one is active per session."""

    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    USE_OPENAI = "openai"

    @classmethod
    def from_value(cls, value: "str | AuthType | None") -> "AuthType | None":
        """
        Parse an auth type from its string value.

        Returns None for unknown or empty values instead of raising, so that
        callers can pass the result straight to the factory and get an
        UnsupportedAuthTypeError there.
        """
        if value is None or value == "":
            return None
        if isinstance(value, AuthType):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class GenerationSettings(BaseModel):
    """
    Content generation configuration.

    Note: API keys should NOT be stored here.
    Use environment variables (GEMINI_API_KEY, GOOGLE_API_KEY, OPENAI_API_KEY).
    """

    default_model: str = Field(
        default=DEFAULT_GEMINI_MODEL,
        description="Model used when neither an override nor an explicit model is given",
    )
    fallback_model: str = Field(
        default=DEFAULT_GEMINI_FLASH_MODEL,
        description="Model adopted when the default model is throttled during the availability probe",
    )
    openai_default_model: str = Field(
        default=DEFAULT_OPENAI_MODEL,
        description="Chat-completion model used when the resolved config has no model",
    )
    client_name: str = Field(
        default="GeminiCLI",
        description="Client name sent in the User-Agent header",
    )
    model_check_enabled: bool = Field(
        default=True,
        description="Probe the default model for availability during credential resolution",
    )
    model_check_timeout_seconds: float = Field(
        default=2.0,
        gt=0.0,
        le=30.0,
        description="Timeout for the model availability probe",
    )
    model_check_endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language API used for the availability probe",
    )

    @field_validator("model_check_endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the endpoint so paths can be appended with a single slash."""
        return v.rstrip("/")


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables and config.yaml.

    Priority (highest to lowest):
    1. Environment variables (from .env file or system)
    2. config.yaml file
    3. Default values

    Secrets (loaded from the environment only - NEVER commit to git):
        - GEMINI_API_KEY: Gemini API key (gemini-api-key auth)
        - GOOGLE_API_KEY: Google Cloud API key (vertex-ai auth)
        - GOOGLE_CLOUD_PROJECT: Google Cloud project id (vertex-ai auth)
        - GOOGLE_CLOUD_LOCATION: Google Cloud location (vertex-ai auth)
        - OPENAI_API_KEY: OpenAI API key (openai auth)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        yaml_file=None,
        yaml_file_encoding="utf-8",
    )

    # Credential material (from environment)
    gemini_api_key: str = Field(
        default="",
        description="Gemini API key",
    )
    google_api_key: str = Field(
        default="",
        description="Google Cloud API key",
    )
    google_cloud_project: str = Field(
        default="",
        description="Google Cloud project identifier",
    )
    google_cloud_location: str = Field(
        default="",
        description="Google Cloud location identifier",
    )
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key",
    )

    cli_version: Optional[str] = Field(
        default=None,
        description="Version reported in the User-Agent header. Defaults to the interpreter version.",
    )

    # Configuration sections (from config.yaml)
    generation: GenerationSettings = Field(
        default_factory=GenerationSettings,
        description="Content generation configuration",
    )

    @field_validator(
        "gemini_api_key",
        "google_api_key",
        "google_cloud_project",
        "google_cloud_location",
        "openai_api_key",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v):
        """Treat an explicit null the same as an unset variable."""
        if v is None:
            return ""
        return v

    @property
    def has_vertex_credentials(self) -> bool:
        """True only when key, project and location are all present."""
        return bool(
            self.google_api_key
            and self.google_cloud_project
            and self.google_cloud_location
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # config.yaml ranks below the environment and .env.
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def from_yaml(cls, config_path: Path | str | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the current directory and project root.

        Returns:
            Settings instance with environment variables layered over the YAML values.
        """
        if config_path is None:
            search_paths = [
                Path.cwd() / "config.yaml",
                Path(__file__).parent.parent.parent / "config.yaml",
            ]
            config_path = next((path for path in search_paths if path.exists()), None)

        if config_path is None:
            return cls()

        class FileSettings(cls):
            model_config = SettingsConfigDict(yaml_file=Path(config_path))

        return FileSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings.from_yaml()
