"""Base LLM provider abstraction."""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit hit."""


class LLMAuthError(LLMError):
    """Authentication failure."""


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
        response_schema: dict | None = None,
    ) -> str:
        """Generate a response from a conversation.

        Args:
            messages: List of {"role": "user" | "model", "content": ...} dicts,
                oldest first; the last one is the new turn
            system: Optional system instruction
            max_tokens: Max response tokens
            temperature: Sampling temperature (None = provider default)
            response_schema: JSON schema; when set the reply is a JSON document

        Returns:
            Generated text (JSON text when a schema was given)
        """
        ...
