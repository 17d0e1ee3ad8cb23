"""
Dependency Injection Container for the content generation gateway.

Provides lazy initialization of shared resources using lru_cache.
Settings and the HTTP client used for model availability probes are shared;
content generators are created fresh for every session.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

import httpx

from genai_gateway.core.config import AuthType, Settings, get_settings

if TYPE_CHECKING:
    from genai_gateway.providers.llm.base import ContentGenerator, ContentGeneratorConfig
    from genai_gateway.providers.llm.credentials import ModelOverride
    from genai_gateway.providers.llm.factory import CodeAssistFactory, ContentGeneratorFactory
    from genai_gateway.providers.llm.model_check import ModelAvailabilityChecker


class Container:
    """
    Dependency Injection Container.

    Manages lifecycle of shared resources:
    - Settings (configuration and credential source)
    - HTTP Client (httpx.AsyncClient, used by the model availability probe)
    - Content generator factory (with the optional code-assist collaborator)

    Usage:
        container = get_container()
        config = await container.resolve_config(AuthType.USE_GEMINI)
        generator = await container.create_content_generator(
            AuthType.USE_GEMINI, session_id="abc123"
        )
    """

    def __init__(
        self,
        settings: Settings | None = None,
        code_assist_factory: "CodeAssistFactory | None" = None,
    ):
        """
        Initialize the container.

        Args:
            settings: Optional settings override. If None, loads from config.
            code_assist_factory: Collaborator creating login-backed generators
        """
        self._settings = settings
        self._code_assist_factory = code_assist_factory
        self._http_client: httpx.AsyncClient | None = None
        self._model_checker: "ModelAvailabilityChecker | None" = None
        self._factory: "ContentGeneratorFactory | None" = None

    @property
    def settings(self) -> Settings:
        """
        Get the gateway settings.

        Returns:
            Cached Settings instance.
        """
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def get_http_client(self) -> httpx.AsyncClient:
        """
        Get the HTTP client shared by model availability probes.

        Its timeout is the probe timeout from the generation settings, so a slow
        endpoint never holds up session setup for longer than that. Generators
        do not use this client; each backend SDK manages its own transport.

        Returns:
            Shared httpx.AsyncClient instance.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.generation.model_check_timeout_seconds),
                limits=httpx.Limits(max_connections=4, max_keepalive_connections=2),
            )
        return self._http_client

    async def close_http_client(self) -> None:
        """
        Close the probe client.

        The model checker holds a reference to the client, so it is dropped too
        and rebuilt around a fresh client on next use.
        """
        if self._http_client is None:
            return
        await self._http_client.aclose()
        self._http_client = None
        self._model_checker = None

    def get_model_checker(self) -> "ModelAvailabilityChecker":
        """
        Get or create the model availability checker.

        The checker shares the container's HTTP client.

        Returns:
            ModelAvailabilityChecker instance (singleton per container)
        """
        if self._model_checker is None:
            from genai_gateway.providers.llm.model_check import ModelAvailabilityChecker

            self._model_checker = ModelAvailabilityChecker(
                settings=self.settings,
                client=self.get_http_client(),
            )
        return self._model_checker

    def get_factory(self) -> "ContentGeneratorFactory":
        """
        Get or create the content generator factory.

        Returns:
            ContentGeneratorFactory instance (singleton per container)
        """
        if self._factory is None:
            from genai_gateway.providers.llm.factory import ContentGeneratorFactory

            self._factory = ContentGeneratorFactory(
                settings=self.settings,
                code_assist_factory=self._code_assist_factory,
            )
        return self._factory

    async def resolve_config(
        self,
        auth_type: AuthType | None,
        model: str | None = None,
        model_override: "ModelOverride | None" = None,
    ) -> "ContentGeneratorConfig":
        """
        Resolve the session config from the container's settings.

        Args:
            auth_type: Selected authentication strategy
            model: Requested model identifier
            model_override: Callable returning the runtime model, if any

        Returns:
            Immutable ContentGeneratorConfig
        """
        from genai_gateway.providers.llm.credentials import create_content_generator_config
        from genai_gateway.providers.llm.model_check import keep_requested_model

        if self.settings.generation.model_check_enabled:
            resolver = self.get_model_checker()
        else:
            resolver = keep_requested_model

        return await create_content_generator_config(
            model,
            auth_type,
            model_override=model_override,
            credentials=self.settings,
            model_resolver=resolver,
        )

    async def create_content_generator(
        self,
        auth_type: AuthType | None,
        model: str | None = None,
        session_id: str | None = None,
        model_override: "ModelOverride | None" = None,
    ) -> "ContentGenerator":
        """
        Resolve the session config and create a new content generator for it.

        A new generator is returned on every call; generators are owned by
        the session that requested them.

        Raises:
            UnsupportedAuthTypeError: If no backend exists for the auth type
            CodeAssistUnavailableError: If login auth has no code-assist factory
        """
        config = await self.resolve_config(auth_type, model, model_override)
        return await self.get_factory().create(config, session_id)

    async def startup(self) -> None:
        """
        Initialize resources on startup.

        Pre-initializes critical resources and validates configuration.
        """
        # Pre-initialize settings to catch config errors early
        _ = self.settings
        _ = self.get_http_client()

    async def shutdown(self) -> None:
        """Clean up resources on shutdown."""
        await self.close_http_client()


@lru_cache
def get_container() -> Container:
    """Process-wide container built from the cached settings."""
    return Container()


def clear_container_cache() -> None:
    """
    Forget the process-wide container and settings.

    The next get_container() re-reads the environment and config.yaml. An open
    probe client on the old container is not closed here; call its shutdown()
    first when it was started.
    """
    get_container.cache_clear()
    get_settings.cache_clear()
