"""
Content Generator Factory.

Creates a ContentGenerator for a resolved session config. The auth type is the
single discriminant:

- login: delegated to the code-assist collaborator
- Gemini / Vertex AI: the google-genai async models object, returned as-is
- OpenAI: OpenAIContentGenerator translating to chat completions

Every call builds a fresh backend client; generators are never shared between
sessions.
"""

import inspect
import logging
from typing import Awaitable, Callable, Protocol

from google import genai
from google.genai import types

from genai_gateway.core.config import AuthType, Settings, get_settings
from genai_gateway.providers.llm.base import (
    CodeAssistUnavailableError,
    ContentGenerator,
    ContentGeneratorConfig,
    UnsupportedAuthTypeError,
)
from genai_gateway.providers.llm.http_options import build_http_options
from genai_gateway.providers.llm.openai_adapter import OpenAIContentGenerator

logger = logging.getLogger(__name__)


class CodeAssistFactory(Protocol):
    """
    Builds the login-backed generator.

    May be a plain function or a coroutine function; the factory awaits the
    result when needed.
    """

    def __call__(
        self,
        http_options: types.HttpOptions,
        auth_type: AuthType,
        session_id: str | None = None,
    ) -> "ContentGenerator | Awaitable[ContentGenerator]": ...


Builder = Callable[
    ["ContentGeneratorFactory", ContentGeneratorConfig, types.HttpOptions, "str | None"],
    Awaitable[ContentGenerator],
]


class ContentGeneratorFactory:
    """
    Factory for creating ContentGenerator instances.

    Example:
        factory = ContentGeneratorFactory(settings, code_assist_factory=create_code_assist)
        generator = await factory.create(config, session_id="abc123")
        response = await generator.generate_content(model=config.model, contents="Hi")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        code_assist_factory: CodeAssistFactory | None = None,
    ) -> None:
        """
        Initialize the factory.

        Args:
            settings: Gateway settings. Defaults to the process settings.
            code_assist_factory: Collaborator creating login-backed generators
        """
        self._settings = settings or get_settings()
        self._code_assist_factory = code_assist_factory

    async def create(
        self,
        config: ContentGeneratorConfig,
        session_id: str | None = None,
    ) -> ContentGenerator:
        """
        Create a content generator for the config's auth type.

        Args:
            config: Resolved session config
            session_id: Optional session identifier forwarded to the code-assist service

        Returns:
            ContentGenerator for the selected backend

        Raises:
            UnsupportedAuthTypeError: If the auth type is unknown, or OpenAI is
                selected without an API key
            CodeAssistUnavailableError: If login auth is selected and no
                code-assist factory was supplied
        """
        builder = _BUILDERS.get(config.auth_type) if isinstance(config.auth_type, str) else None
        if builder is None:
            raise UnsupportedAuthTypeError(config.auth_type)

        http_options = build_http_options(self._settings)
        logger.debug(f"Creating content generator for auth type {config.auth_type!r}")
        return await builder(self, config, http_options, session_id)

    async def _create_code_assist(
        self,
        config: ContentGeneratorConfig,
        http_options: types.HttpOptions,
        session_id: str | None,
    ) -> ContentGenerator:
        if self._code_assist_factory is None:
            raise CodeAssistUnavailableError(
                f"Auth type '{AuthType.LOGIN_WITH_GOOGLE.value}' requires a code-assist factory",
                provider="code-assist",
            )

        generator = self._code_assist_factory(http_options, config.auth_type, session_id)
        if inspect.isawaitable(generator):
            generator = await generator
        return generator

    async def _create_genai(
        self,
        config: ContentGeneratorConfig,
        http_options: types.HttpOptions,
        session_id: str | None,
    ) -> ContentGenerator:
        client = genai.Client(
            api_key=config.api_key or None,
            vertexai=config.vertexai,
            http_options=http_options,
        )
        # The async models surface already matches ContentGenerator.
        return client.aio.models

    async def _create_openai(
        self,
        config: ContentGeneratorConfig,
        http_options: types.HttpOptions,
        session_id: str | None,
    ) -> ContentGenerator:
        if not config.api_key:
            raise UnsupportedAuthTypeError(config.auth_type, reason="missing OpenAI API key")
        return OpenAIContentGenerator.from_config(
            config,
            default_model=self._settings.generation.openai_default_model,
        )


# Order is dispatch order.
_BUILDERS: dict[AuthType, Builder] = {
    AuthType.LOGIN_WITH_GOOGLE: ContentGeneratorFactory._create_code_assist,
    AuthType.USE_GEMINI: ContentGeneratorFactory._create_genai,
    AuthType.USE_VERTEX_AI: ContentGeneratorFactory._create_genai,
    AuthType.USE_OPENAI: ContentGeneratorFactory._create_openai,
}


def get_supported_auth_types() -> list[str]:
    """
    Get list of supported auth type values.

    Returns:
        List of auth type strings in dispatch order
    """
    return [auth_type.value for auth_type in _BUILDERS]


async def create_content_generator(
    config: ContentGeneratorConfig,
    session_id: str | None = None,
    *,
    settings: Settings | None = None,
    code_assist_factory: CodeAssistFactory | None = None,
) -> ContentGenerator:
    """Create a content generator with a one-off factory."""
    factory = ContentGeneratorFactory(settings, code_assist_factory=code_assist_factory)
    return await factory.create(config, session_id)
