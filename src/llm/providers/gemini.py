"""Google Gemini LLM provider using google-genai SDK."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError


def _handle_gemini_error(e: Exception):
    err_str = str(e).lower()
    if "api key" in err_str or "authentication" in err_str or "permission" in err_str:
        raise LLMAuthError(f"Gemini auth failed: {e}") from e
    if ("resource" in err_str and "exhausted" in err_str) or "rate" in err_str:
        raise LLMRateLimitError(f"Gemini rate limit: {e}") from e
    raise LLMError(f"Gemini API error: {e}") from e


class GeminiProvider(LLMProvider):
    """Google Gemini provider (google-genai SDK)."""

    provider_name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model_name = model or "gemini-2.5-flash"

        if client:
            self.client = client
            return

        try:
            from google import genai
        except ImportError:
            raise LLMError("google-genai package not installed. Run: pip install google-genai")

        self.client = genai.Client(api_key=api_key)

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float | None = None,
        response_schema: dict | None = None,
    ) -> str:
        if not messages:
            raise LLMError("No messages to send")

        from google.genai import types

        config = types.GenerateContentConfig(
            system_instruction=system,
            max_output_tokens=max_tokens,
            temperature=temperature,
        )
        if response_schema is not None:
            config.response_mime_type = "application/json"
            config.response_schema = response_schema

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=self._convert_messages(messages),
                config=config,
            )
        except Exception as e:
            _handle_gemini_error(e)
        return response.text or ""

    def _convert_messages(self, messages: list[dict]) -> list:
        """Generic {"role", "content"} dicts -> Gemini Content list."""
        from google.genai import types

        contents = []
        for msg in messages:
            role = "model" if msg.get("role") in ("model", "assistant") else "user"
            contents.append(
                types.Content(role=role, parts=[types.Part.from_text(text=msg["content"])])
            )
        return contents
