"""Model identifiers shared by the resolver, the availability probe and the adapters."""

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_GEMINI_FLASH_MODEL = "gemini-2.5-flash"

# Chat-completion backend
DEFAULT_OPENAI_MODEL = "o4-mini"
