"""Text-generation service: one request in, text or JSON out, never raises."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

import structlog

from llm import LLMError, LLMProvider

logger = structlog.get_logger()

GENERATION_FAILED = "Error generating content. Please check your API key."

_JSON_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


@dataclass
class GenerationRequest:
    """Instruction (constraints + persona data), user content, output shape."""

    instruction: str
    content: str
    response_schema: dict | None = None
    history: list[dict] = field(default_factory=list)  # prior {"role", "content"} turns
    temperature: float | None = None


def parse_json_text(text: str) -> Any:
    """Parse a JSON reply, tolerating markdown fences and preambles."""
    text = text.strip()
    fenced = _JSON_BLOCK.search(text)
    if fenced:
        text = fenced.group(1)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    # Outermost object or array, whichever opens first
    starts = [i for i in (text.find("{"), text.find("[")) if i >= 0]
    if starts:
        start = min(starts)
        end = text.rfind("}" if text[start] == "{" else "]")
        if end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                pass
    raise ValueError("no JSON document in reply")


class TextGenerationService:
    """Wraps an LLM provider with the degrade-to-fallback contract."""

    def __init__(self, provider: LLMProvider, max_tokens: int = 4000, temperature: float | None = None):
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature

    def _call(self, request: GenerationRequest) -> str:
        messages = [*request.history, {"role": "user", "content": request.content}]
        temperature = request.temperature if request.temperature is not None else self.temperature
        return self.provider.generate(
            messages,
            system=request.instruction,
            max_tokens=self.max_tokens,
            temperature=temperature,
            response_schema=request.response_schema,
        )

    def generate(self, request: GenerationRequest, fallback: str = GENERATION_FAILED) -> str:
        """Free text, or `fallback` when the provider fails or says nothing."""
        try:
            text = self._call(request)
        except LLMError as e:
            logger.warning("generation.failed", error=str(e))
            return fallback
        if not text or not text.strip():
            logger.warning("generation.empty_response")
            return fallback
        return text

    def generate_json(self, request: GenerationRequest, default: Any) -> Any:
        """Parsed JSON document, or `default` on failure or unparseable output."""
        try:
            text = self._call(request)
        except LLMError as e:
            logger.warning("generation.failed", error=str(e))
            return default
        try:
            return parse_json_text(text or "")
        except ValueError as e:
            logger.warning("generation.bad_json", error=str(e), preview=(text or "")[:120])
            return default
