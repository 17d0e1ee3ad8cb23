"""
Credential resolution.

Turns an explicit auth type selection plus whatever credentials are present in the
environment into an immutable ContentGeneratorConfig.
"""

import logging
from typing import Callable

from genai_gateway.core.config import AuthType, Settings, get_settings
from genai_gateway.providers.llm.base import ContentGeneratorConfig
from genai_gateway.providers.llm.model_check import (
    EffectiveModelResolver,
    ModelAvailabilityChecker,
    keep_requested_model,
)

logger = logging.getLogger(__name__)

ModelOverride = Callable[[], "str | None"]


def _default_resolver(settings: Settings) -> EffectiveModelResolver:
    if settings.generation.model_check_enabled:
        return ModelAvailabilityChecker(settings)
    return keep_requested_model


async def create_content_generator_config(
    model: str | None = None,
    auth_type: AuthType | None = None,
    *,
    model_override: ModelOverride | None = None,
    credentials: Settings | None = None,
    model_resolver: EffectiveModelResolver | None = None,
) -> ContentGeneratorConfig:
    """
    Resolve the generation config for a session.

    Model precedence (highest first): ``model_override()`` result, ``model``, the
    configured default model.

    Credentials are only consulted for the selected auth type. When the selected
    type's credentials are incomplete, the config is returned without an API key;
    the failure then surfaces when the generator is created or first used.

    Args:
        model: Requested model identifier
        auth_type: Selected authentication strategy
        model_override: Callable returning the runtime model, if any
        credentials: Credential source. Defaults to the process settings.
        model_resolver: Effective model resolver for the Gemini and Vertex AI
            auth types. Defaults to the availability probe.

    Returns:
        Immutable ContentGeneratorConfig
    """
    settings = credentials or get_settings()
    resolver = model_resolver or _default_resolver(settings)

    override = model_override() if model_override is not None else None
    effective_model = override or model or settings.generation.default_model

    if auth_type == AuthType.LOGIN_WITH_GOOGLE:
        # Identity is established by the code-assist login flow, nothing to validate.
        return ContentGeneratorConfig(model=effective_model, auth_type=auth_type)

    if auth_type == AuthType.USE_GEMINI and settings.gemini_api_key:
        api_key = settings.gemini_api_key
        return ContentGeneratorConfig(
            model=await resolver(api_key, effective_model),
            auth_type=auth_type,
            api_key=api_key,
        )

    if auth_type == AuthType.USE_VERTEX_AI and settings.has_vertex_credentials:
        api_key = settings.google_api_key
        return ContentGeneratorConfig(
            model=await resolver(api_key, effective_model),
            auth_type=auth_type,
            api_key=api_key,
            vertexai=True,
        )

    if auth_type == AuthType.USE_OPENAI and settings.openai_api_key:
        # The chat-completion backend does not support the availability probe.
        return ContentGeneratorConfig(
            model=effective_model,
            auth_type=auth_type,
            api_key=settings.openai_api_key,
        )

    logger.debug(
        f"No credentials found for auth type {auth_type!r}; "
        "returning config without an API key"
    )
    return ContentGeneratorConfig(model=effective_model, auth_type=auth_type)
