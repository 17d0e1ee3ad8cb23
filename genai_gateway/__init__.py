"""
Provider-agnostic content generation gateway.

Resolves which model backend to use for a session and exposes a single
ContentGenerator interface over Gemini, Vertex AI, the code-assist login
service and OpenAI chat completions.
"""

__version__ = "0.1.0"
