"""
Content generator base abstractions.

Defines the provider-agnostic ContentGenerator interface every backend satisfies,
the immutable per-session configuration, and the gateway's exception hierarchy.

The interface mirrors ``google.genai``'s async models surface (``client.aio.models``)
so that the Gemini and Vertex AI backends satisfy it without an adapter.
"""

from dataclasses import dataclass, replace as dataclass_replace
from typing import Any, AsyncIterator, Protocol, runtime_checkable

from google.genai import types

from genai_gateway.core.config import AuthType


@runtime_checkable
class ContentGenerator(Protocol):
    """
    Uniform interface for content generation backends.

    All four operations are coroutines. ``generate_content_stream`` is awaited to
    obtain the stream (the backend may open a connection first) and the result is
    then iterated with ``async for``. Streams are finite and cannot be restarted.

    Any operation may raise backend-native errors (authentication, quota, malformed
    request) or OperationNotSupportedError when the backend has no equivalent.

    Example:
        generator = await create_content_generator(config)
        response = await generator.generate_content(
            model=config.model,
            contents="Write a haiku about coding",
        )
        print(response.text)
    """

    async def generate_content(
        self,
        *,
        model: str,
        contents: Any,
        config: Any = None,
    ) -> types.GenerateContentResponse: ...

    async def generate_content_stream(
        self,
        *,
        model: str,
        contents: Any,
        config: Any = None,
    ) -> AsyncIterator[types.GenerateContentResponse]: ...

    async def count_tokens(
        self,
        *,
        model: str,
        contents: Any,
        config: Any = None,
    ) -> types.CountTokensResponse: ...

    async def embed_content(
        self,
        *,
        model: str,
        contents: Any,
        config: Any = None,
    ) -> types.EmbedContentResponse: ...


@dataclass(frozen=True)
class ContentGeneratorConfig:
    """
    Resolved per-session generation configuration.

    Produced once per session by create_content_generator_config() and never
    mutated afterwards; use replace() to derive a modified copy.

    Attributes:
        model: Effective model identifier
        auth_type: Selected authentication strategy (None if the caller gave none)
        api_key: Credential for key-based auth types. None when missing or for
            the login auth type.
        vertexai: True only for the Vertex AI auth type with complete cloud credentials
    """

    model: str
    auth_type: AuthType | None = None
    api_key: str | None = None
    vertexai: bool | None = None

    def __post_init__(self) -> None:
        """Normalize empty keys and validate the Vertex AI flag."""
        if self.api_key == "":
            object.__setattr__(self, "api_key", None)
        if self.vertexai and self.auth_type != AuthType.USE_VERTEX_AI:
            raise ValueError(
                f"vertexai can only be set for auth type "
                f"'{AuthType.USE_VERTEX_AI.value}', got {self.auth_type!r}"
            )

    @property
    def has_api_key(self) -> bool:
        """Whether a credential was resolved for this session."""
        return self.api_key is not None

    def replace(self, **changes: Any) -> "ContentGeneratorConfig":
        """Return a copy with the given fields replaced."""
        return dataclass_replace(self, **changes)

    def __repr__(self) -> str:
        key = "***" if self.api_key else None
        return (
            f"ContentGeneratorConfig(model={self.model!r}, auth_type={self.auth_type!r}, "
            f"api_key={key!r}, vertexai={self.vertexai!r})"
        )


class ContentGeneratorError(Exception):
    """Base exception for content generator errors."""

    def __init__(self, message: str, provider: str | None = None):
        self.provider = provider
        super().__init__(message)


class UnsupportedAuthTypeError(ContentGeneratorError):
    """Raised when no backend can be created for the configured auth type."""

    def __init__(self, auth_type: Any, reason: str | None = None):
        self.auth_type = auth_type
        value = auth_type.value if isinstance(auth_type, AuthType) else auth_type
        message = f"Error creating content generator: Unsupported auth type: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class OperationNotSupportedError(ContentGeneratorError, NotImplementedError):
    """Raised when a backend has no equivalent for a ContentGenerator operation."""

    def __init__(self, operation: str, provider: str | None = None):
        self.operation = operation
        label = provider or "backend"
        super().__init__(f"{label} {operation} not implemented", provider)


class CodeAssistUnavailableError(ContentGeneratorError):
    """Raised when login auth is selected but no code-assist factory was supplied."""

    pass
