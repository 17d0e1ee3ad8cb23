"""
Content generator abstraction layer.

Provides a provider-agnostic ContentGenerator interface over Gemini, Vertex AI,
the code-assist login service and OpenAI chat completions.

Exports:
    - ContentGenerator: Interface every backend satisfies
    - ContentGeneratorConfig: Resolved per-session configuration
    - create_content_generator_config: Credential resolver
    - ContentGeneratorFactory / create_content_generator: Backend selection
    - OpenAIContentGenerator: Chat-completion translation adapter
    - ModelAvailabilityChecker / get_effective_model: Effective model resolution
    - Exceptions: ContentGeneratorError, UnsupportedAuthTypeError,
      OperationNotSupportedError, CodeAssistUnavailableError
"""

from genai_gateway.providers.llm.base import (
    CodeAssistUnavailableError,
    ContentGenerator,
    ContentGeneratorConfig,
    ContentGeneratorError,
    OperationNotSupportedError,
    UnsupportedAuthTypeError,
)
from genai_gateway.providers.llm.credentials import create_content_generator_config
from genai_gateway.providers.llm.factory import (
    CodeAssistFactory,
    ContentGeneratorFactory,
    create_content_generator,
    get_supported_auth_types,
)
from genai_gateway.providers.llm.http_options import build_http_options, build_user_agent
from genai_gateway.providers.llm.model_check import (
    EffectiveModelResolver,
    ModelAvailabilityChecker,
    get_effective_model,
)
from genai_gateway.providers.llm.openai_adapter import OpenAIContentGenerator, flatten_contents

__all__ = [
    # Core types
    "ContentGenerator",
    "ContentGeneratorConfig",
    # Resolution
    "create_content_generator_config",
    "EffectiveModelResolver",
    "ModelAvailabilityChecker",
    "get_effective_model",
    # Factory
    "CodeAssistFactory",
    "ContentGeneratorFactory",
    "create_content_generator",
    "get_supported_auth_types",
    "build_http_options",
    "build_user_agent",
    # Adapters
    "OpenAIContentGenerator",
    "flatten_contents",
    # Exceptions
    "ContentGeneratorError",
    "UnsupportedAuthTypeError",
    "OperationNotSupportedError",
    "CodeAssistUnavailableError",
]
