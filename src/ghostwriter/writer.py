"""Ghostwriter: product-level generation calls with fixed fallbacks."""

import json
import random
import re

import structlog

from shared_types import NARRATIVE_MEMORY_TYPES, Language, MemoryType
from store.models import ChatMessage, Memory, Product, UserProfile

from . import frameworks, prompts
from .frameworks import ContentFormat, Framework
from .service import GENERATION_FAILED, GenerationRequest, TextGenerationService

logger = structlog.get_logger()

CHAT_FAILED = "Sorry, I couldn't reach the writing model. Please try again."

_DRAFT_TAG = re.compile(r"<draft>(.*?)</draft>", re.DOTALL)

DEFAULT_ENRICHMENT = {
    "title": "New Memory",
    "type": MemoryType.STORY.value,
    "tags": ["memory"],
    "emotionalTone": "Neutral",
}


def extract_draft(text: str) -> str:
    """Content inside <draft> tags, or the whole reply when untagged."""
    match = _DRAFT_TAG.search(text)
    return match.group(1).strip() if match else text


class Ghostwriter:
    """Content generation built on the user's profile and memory bank."""

    def __init__(self, service: TextGenerationService, language: Language | str = Language.EN):
        self.service = service
        self.language = Language(language)

    def generate_content(
        self,
        profile: UserProfile,
        memories: list[Memory],
        topic: str,
        platform: str,
        focus_types: list[MemoryType] | None = None,
        source_material: str | None = None,
        style_reference: str | None = None,
        product: Product | None = None,
        persona: str | None = None,
        framework: Framework | None = None,
        content_format: ContentFormat | None = None,
    ) -> str:
        """Draft a post in the user's voice.

        A framework supplies the blueprint and, unless focus types are given,
        the memory types to favour. A format replaces the platform default
        with its structure rules.
        """
        if framework and not focus_types:
            focus_types = frameworks.focus_types_for(framework) or None
        instruction = prompts.content_instruction(
            profile,
            memories,
            platform,
            self.language,
            focus_types=focus_types,
            product=product,
            persona=persona,
            format_rules=frameworks.format_rules(content_format) if content_format else None,
        )
        blueprint = frameworks.framework_blueprint(framework) if framework else None
        request = GenerationRequest(
            instruction=instruction,
            content=prompts.content_prompt(topic, source_material, style_reference, blueprint),
            temperature=0.85,
        )
        text = self.service.generate(request)
        if text == GENERATION_FAILED:
            return text
        return extract_draft(text)

    def humanize(self, content: str, profile: UserProfile) -> str:
        """Rewrite in a human register; unchanged content on failure."""
        request = GenerationRequest(
            instruction=prompts.humanize_instruction(profile, self.language),
            content=f'INPUT TEXT:\n"""\n{content}\n"""',
        )
        return self.service.generate(request, fallback=content)

    def repurpose(
        self, content: str, source_platform: str, target_platform: str, profile: UserProfile
    ) -> str:
        return self.generate_content(
            profile,
            [],
            topic="Repurpose",
            platform=target_platform,
            source_material=prompts.repurpose_material(content, source_platform, target_platform),
        )

    def refine_carousel(self, content: str, mode: str) -> str:
        """Rework carousel text (spread, shorter or longer); input unchanged on failure."""
        request = GenerationRequest(
            instruction="You are an expert Instagram Carousel Editor.",
            content=prompts.carousel_refine_prompt(content, mode, self.language),
        )
        return self.service.generate(request, fallback=content)

    def enrich_memory(self, content: str) -> dict:
        """Suggested title, type, tags and emotional tone for a raw memory."""
        request = GenerationRequest(
            instruction=prompts.ENRICH_INSTRUCTION,
            content=content,
            response_schema=prompts.ENRICH_SCHEMA,
        )
        data = self.service.generate_json(request, default=None)
        if not isinstance(data, dict):
            return dict(DEFAULT_ENRICHMENT)
        result = {**DEFAULT_ENRICHMENT, **{k: v for k, v in data.items() if v}}
        try:
            result["type"] = MemoryType(str(result["type"]).upper()).value
        except ValueError:
            result["type"] = MemoryType.STORY.value
        return result

    def topic_suggestions(self, profile: UserProfile, memories: list[Memory]) -> list[str]:
        pool = [m for m in memories if m.type in NARRATIVE_MEMORY_TYPES]
        sample = random.sample(pool, k=min(5, len(pool)))
        snippet = " | ".join(m.content for m in sample)
        request = GenerationRequest(
            instruction="You are an expert content strategist.",
            content=prompts.topics_prompt(profile, snippet, self.language),
            response_schema={"type": "object", "properties": {"topics": {"type": "array", "items": {"type": "string"}}}},
        )
        data = self.service.generate_json(request, default={})
        topics = data.get("topics") if isinstance(data, dict) else None
        return [str(t) for t in topics] if isinstance(topics, list) else []

    def angles_from_memory(self, profile: UserProfile, memory_content: str) -> list[str]:
        request = GenerationRequest(
            instruction="You are an expert content strategist.",
            content=prompts.angles_prompt(profile, memory_content, self.language),
            response_schema={"type": "object", "properties": {"angles": {"type": "array", "items": {"type": "string"}}}},
        )
        data = self.service.generate_json(request, default={})
        angles = data.get("angles") if isinstance(data, dict) else None
        return [str(a) for a in angles] if isinstance(angles, list) else []

    def analyze_brain_dump(self, text: str) -> list[dict]:
        request = GenerationRequest(
            instruction="You are a viral content strategist.",
            content=prompts.brain_dump_prompt(text, self.language),
        )
        data = self.service.generate_json(request, default=[])
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict)]

    def persona_report(self, form: dict) -> str:
        """Persona report as a JSON string ("{}" on failure)."""
        request = GenerationRequest(
            instruction="You are an expert audience researcher and lead psychologist.",
            content=prompts.persona_prompt(form, self.language),
            response_schema=prompts.PERSONA_SCHEMA,
        )
        data = self.service.generate_json(request, default={})
        if not isinstance(data, dict):
            return "{}"
        return json.dumps(data, ensure_ascii=False)

    def chat_reply(
        self,
        history: list[ChatMessage],
        message: str,
        profile: UserProfile,
        memories: list[Memory],
        news_title: str | None = None,
    ) -> str:
        request = GenerationRequest(
            instruction=prompts.chat_instruction(profile, memories, self.language, news_title),
            content=message,
            history=[{"role": m.role.value, "content": m.text} for m in history],
        )
        return self.service.generate(request, fallback=CHAT_FAILED)
