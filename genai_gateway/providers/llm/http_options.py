"""Caller-identifying HTTP options sent with every Gemini, Vertex AI and code-assist request."""

import platform
import sys

from google.genai import types

from genai_gateway.core.config import Settings, get_settings


def build_user_agent(settings: Settings | None = None) -> str:
    """
    Build the User-Agent header value.

    Format: ``{client_name}/{version} ({platform}; {arch})``. The version comes
    from CLI_VERSION when set, otherwise the running interpreter's version.
    """
    settings = settings or get_settings()
    version = settings.cli_version or platform.python_version()
    return (
        f"{settings.generation.client_name}/{version} "
        f"({sys.platform}; {platform.machine()})"
    )


def build_http_options(settings: Settings | None = None) -> types.HttpOptions:
    """Wrap the User-Agent header in google-genai HttpOptions."""
    return types.HttpOptions(headers={"User-Agent": build_user_agent(settings)})
