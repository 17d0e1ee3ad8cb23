"""
OpenAI Chat-Completion Content Generator.

Implements the ContentGenerator interface on top of the OpenAI chat completions API.
Structured multi-part contents are flattened into a single user message, and the
completion is re-wrapped into a google-genai GenerateContentResponse so callers see
the same response shape as with the Gemini backends.

Only single-shot generation is supported. Streaming, token counting and embedding
raise OperationNotSupportedError so callers can branch instead of being misled.

API Documentation: https://platform.openai.com/docs/api-reference/chat
"""

from collections.abc import Mapping
from typing import Any, AsyncIterator, NoReturn

from google.genai import types
from openai import AsyncOpenAI

from genai_gateway.core.models import DEFAULT_OPENAI_MODEL
from genai_gateway.providers.llm.base import (
    ContentGeneratorConfig,
    OperationNotSupportedError,
)

PROVIDER_NAME = "OpenAI"


def _field(item: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an attribute, None when absent."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _has_field(item: Any, name: str) -> bool:
    if isinstance(item, Mapping):
        return name in item
    return hasattr(item, name)


def _text_of(item: Any) -> str:
    """A string as-is, otherwise its ``text`` field (empty when missing or None)."""
    if isinstance(item, str):
        return item
    return _field(item, "text") or ""


def _flatten_item(item: Any) -> str:
    if isinstance(item, str):
        return item
    if _has_field(item, "text"):
        return _field(item, "text") or ""
    parts = _field(item, "parts")
    if isinstance(parts, (list, tuple)):
        return "\n".join(_text_of(part) for part in parts)
    return ""


def flatten_contents(contents: Any) -> str:
    """
    Flatten request contents into a single prompt string.

    Each item of a list contributes one line group, joined with newlines:
    - a string is used as-is
    - an object with a ``text`` field contributes that text
    - an object with a ``parts`` list contributes its parts' texts joined with newlines
    - anything else contributes an empty string

    A single non-list value is either a string or an object with a ``text`` field;
    any other shape yields an empty prompt.

    Example:
        >>> flatten_contents([{"text": "a"}, {"parts": [{"text": "b"}, "c"]}])
        'a\\nb\\nc'
    """
    if isinstance(contents, str):
        return contents
    if isinstance(contents, (list, tuple)):
        return "\n".join(_flatten_item(item) for item in contents)
    if contents is not None and _has_field(contents, "text"):
        return _field(contents, "text") or ""
    return ""


class OpenAIContentGenerator:
    """
    ContentGenerator backed by OpenAI chat completions.

    The request's model argument is ignored; the session's resolved model is used
    so that a session keeps one model for its lifetime.

    Attributes:
        _client: AsyncOpenAI client
        _model: Chat-completion model for every request

    Example:
        generator = OpenAIContentGenerator(api_key="sk-...", model="gpt-4o")
        response = await generator.generate_content(model="gpt-4o", contents="Hello")
        print(response.candidates[0].content.parts[0].text)
    """

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        default_model: str = DEFAULT_OPENAI_MODEL,
    ) -> None:
        """
        Initialize the OpenAI content generator.

        Args:
            api_key: OpenAI API key
            model: Model from the resolved session config
            default_model: Model used when ``model`` is empty

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("OpenAI API key is required")

        self._model = model or default_model
        self._client = AsyncOpenAI(api_key=api_key)

    @classmethod
    def from_config(
        cls,
        config: ContentGeneratorConfig,
        default_model: str = DEFAULT_OPENAI_MODEL,
    ) -> "OpenAIContentGenerator":
        """Create a generator from a resolved session config."""
        return cls(
            api_key=config.api_key or "",
            model=config.model,
            default_model=default_model,
        )

    @property
    def model(self) -> str:
        """Model sent with every chat completion request."""
        return self._model

    def _build_messages(self, prompt: str) -> list[dict[str, str]]:
        return [{"role": "user", "content": prompt}]

    async def generate_content(
        self,
        *,
        model: str | None = None,
        contents: Any,
        config: Any = None,
    ) -> types.GenerateContentResponse:
        """
        Generate a response using the chat completions API.

        Args:
            model: Ignored, the session model is used
            contents: Request contents in any google-genai accepted shape
            config: Ignored, the chat backend takes no generation config here

        Returns:
            Response with one candidate holding the completion text as a single part
        """
        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=self._build_messages(flatten_contents(contents)),
        )
        text = completion.choices[0].message.content

        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(parts=[types.Part(text=text)]),
                )
            ]
        )

    async def generate_content_stream(
        self,
        *,
        model: str | None = None,
        contents: Any = None,
        config: Any = None,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        raise OperationNotSupportedError("streaming", PROVIDER_NAME)

    async def count_tokens(
        self,
        *,
        model: str | None = None,
        contents: Any = None,
        config: Any = None,
    ) -> NoReturn:
        raise OperationNotSupportedError("token counting", PROVIDER_NAME)

    async def embed_content(
        self,
        *,
        model: str | None = None,
        contents: Any = None,
        config: Any = None,
    ) -> NoReturn:
        raise OperationNotSupportedError("embedding", PROVIDER_NAME)

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
