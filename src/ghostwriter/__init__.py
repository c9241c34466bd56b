"""Ghostwriting: prompt assembly and the text-generation service contract."""

from .service import GENERATION_FAILED, GenerationRequest, TextGenerationService
from .writer import CHAT_FAILED, Ghostwriter, extract_draft

__all__ = [
    "CHAT_FAILED",
    "GENERATION_FAILED",
    "GenerationRequest",
    "Ghostwriter",
    "TextGenerationService",
    "extract_draft",
]
