"""Tests for prompt assembly helpers."""

from helpers import make_memory

from ghostwriter import prompts
from shared_types import Language, MemoryType


def test_prioritize_caps_and_orders():
    memories = [make_memory(f"s{i}") for i in range(40)] + [make_memory("f1", type=MemoryType.FAILURE)]
    result = prompts.prioritize_memories(memories, [MemoryType.FAILURE])
    assert result[0].id == "f1"
    assert len(result) == prompts.MAX_CONTEXT_MEMORIES


def test_prioritize_without_focus_is_identity():
    memories = [make_memory("a"), make_memory("b")]
    assert prompts.prioritize_memories(memories) == memories


def test_voice_dna_first_match_wins():
    memories = [
        make_memory("new", type=MemoryType.STYLE_REFERENCE, content="newest", tags=["voice_dna", "voice_sacred"]),
        make_memory("old", type=MemoryType.STYLE_REFERENCE, content="older", tags=["voice_dna", "voice_sacred"]),
        make_memory("story", content="not voice", tags=["voice_sacred"]),
    ]
    assert prompts.voice_dna(memories) == {"voice_sacred": "newest"}
    assert prompts.cadence_samples(memories) == []


def test_language_line():
    assert prompts.language_line(Language.EN) == "Write in English."
    assert "Brazilian Portuguese" in prompts.language_line("pt", "Respond")


def test_content_prompt_requests_draft_tags():
    text = prompts.content_prompt("focus", source_material="notes", blueprint="Custom task")
    assert "SOURCE MATERIAL / CONTEXT: notes" in text
    assert "Custom task" in text
    assert "<draft>" in text


def test_chat_instruction_caps_memories(sample_profile):
    memories = [make_memory(f"m{i}", title=f"T{i}") for i in range(30)]
    text = prompts.chat_instruction(sample_profile, memories, Language.EN)
    assert "T19" in text
    assert "T20:" not in text
