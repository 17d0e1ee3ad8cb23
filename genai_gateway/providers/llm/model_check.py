"""
Effective model resolution.

Before a Gemini or Vertex AI session starts, the default (pro) model is probed with
a one-token request. A 429 means the model is temporarily throttled for this key,
in which case the session is switched to the flash model. Every other outcome keeps
the requested model.
"""

import logging
from typing import Protocol

import httpx

from genai_gateway.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EffectiveModelResolver(Protocol):
    """Maps an API key and requested model to the model actually usable."""

    async def __call__(self, api_key: str, model: str) -> str: ...


async def keep_requested_model(api_key: str, model: str) -> str:
    """Resolver used when availability probing is disabled."""
    return model


def _probe_body() -> dict:
    return {
        "contents": [{"parts": [{"text": "test"}]}],
        "generationConfig": {
            "maxOutputTokens": 1,
            "temperature": 0,
            "topK": 1,
            "thinkingConfig": {"thinkingBudget": 0, "includeThoughts": False},
        },
    }


class ModelAvailabilityChecker:
    """
    Probes the Generative Language API to decide the effective model.

    Attributes:
        _settings: Gateway settings (probe endpoint, timeout, model names)
        _client: Optional shared HTTP client. A short-lived client is used per
            probe when None.

    Example:
        checker = ModelAvailabilityChecker(settings)
        model = await checker.get_effective_model(api_key, "gemini-2.5-pro")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    def _build_url(self, model: str) -> str:
        endpoint = self._settings.generation.model_check_endpoint
        return f"{endpoint}/models/{model}:generateContent"

    async def _post(self, client: httpx.AsyncClient, api_key: str, model: str) -> httpx.Response:
        return await client.post(
            self._build_url(model),
            params={"key": api_key},
            json=_probe_body(),
            timeout=self._settings.generation.model_check_timeout_seconds,
        )

    async def get_effective_model(self, api_key: str, model: str) -> str:
        """
        Resolve the model to use for a session.

        Args:
            api_key: Gemini or Google Cloud API key
            model: Requested model identifier

        Returns:
            The fallback model if the default model is throttled, otherwise ``model``
        """
        generation = self._settings.generation
        if model != generation.default_model:
            # Only the default model is probed; explicit choices are respected.
            return model

        try:
            if self._client is not None:
                response = await self._post(self._client, api_key, model)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, api_key, model)
        except httpx.HTTPError as e:
            # The request URL carries the key, so only the error type is logged.
            logger.debug(f"Model availability probe for {model} failed: {type(e).__name__}")
            return model

        if response.status_code == 429:
            logger.info(
                f"Your configured model ({model}) was temporarily unavailable. "
                f"Switched to {generation.fallback_model} for this session."
            )
            return generation.fallback_model

        return model

    async def __call__(self, api_key: str, model: str) -> str:
        return await self.get_effective_model(api_key, model)


async def get_effective_model(
    api_key: str,
    model: str,
    settings: Settings | None = None,
) -> str:
    """Convenience wrapper around ModelAvailabilityChecker with a one-off client."""
    return await ModelAvailabilityChecker(settings).get_effective_model(api_key, model)
