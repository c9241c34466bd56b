"""LLM provider factory with key auto-detection."""

import os

from .base import LLMError, LLMProvider

# Checked in order when no explicit key is given
_GEMINI_ENV_KEYS = ["GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"]

SUPPORTED_PROVIDERS = {"auto", "gemini"}


def _detect_api_key() -> str | None:
    for env_var in _GEMINI_ENV_KEYS:
        val = os.getenv(env_var)
        if val:
            return val
    return None


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "gemini", "auto", or None (auto)
        api_key: Explicit API key (overrides env vars)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI

    Returns:
        LLMProvider instance
    """
    resolved = provider or "auto"
    if resolved not in SUPPORTED_PROVIDERS:
        raise LLMError(f"Unknown provider: {resolved}. Use: gemini")

    if not api_key and not client:
        api_key = _detect_api_key()
        if not api_key:
            raise LLMError(
                "No LLM API key found. Set one of: " + ", ".join(_GEMINI_ENV_KEYS)
            )

    from .providers.gemini import GeminiProvider

    return GeminiProvider(api_key=api_key, model=model, client=client)
