"""Derived actions built from repository calls (onboarding, drafts, voice DNA)."""

import time
import uuid
from datetime import datetime, timezone

import structlog

from shared_types import NARRATIVE_MEMORY_TYPES, DraftStatus, MemoryType

from .models import ContentDraft, Memory, UserProfile
from .repository import ContentRepository

logger = structlog.get_logger()

VOICE_DNA_TAG = "voice_dna"
VOICE_SETTINGS = {
    "voice_jargon": "Voice: Jargon",
    "voice_audience": "Voice: Audience Name",
    "voice_intensity": "Voice: Intensity",
    "voice_sacred": "Voice: Sacred Words",
}


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def complete_onboarding(repo: ContentRepository, profile: UserProfile) -> Memory:
    """Persist the finished profile and seed the memory bank with its values."""
    profile = profile.model_copy(update={"onboarding_complete": True})
    repo.store_profile(profile)

    content = f"I value {', '.join(profile.values)}."
    if profile.contrarian_views:
        content += f" I believe {profile.contrarian_views[0]}."
    memory = Memory(
        id=f"init-{_now_ms()}",
        type=MemoryType.BELIEF,
        title="My Core Values",
        content=content,
        tags=["core", "values"],
        created_at=now_iso(),
        emotional_tone="Determined",
    )
    repo.add_memory(memory)
    logger.info("onboarding.completed", memory_id=memory.id)
    return memory


def save_draft(repo: ContentRepository, draft: ContentDraft) -> list[ContentDraft]:
    """Replace the draft with the same id, else put it first."""
    drafts = repo.list_drafts()
    for i, existing in enumerate(drafts):
        if existing.id == draft.id:
            drafts[i] = draft
            break
    else:
        drafts.insert(0, draft)
    return repo.save_drafts(drafts)


def delete_draft(repo: ContentRepository, draft_id: str) -> list[ContentDraft]:
    return repo.save_drafts([d for d in repo.list_drafts() if d.id != draft_id])


def schedule_draft(repo: ContentRepository, draft_id: str, when: datetime) -> ContentDraft | None:
    """Mark a draft scheduled for `when`. Returns None for an unknown id."""
    drafts = repo.list_drafts()
    for i, draft in enumerate(drafts):
        if draft.id == draft_id:
            drafts[i] = draft.model_copy(
                update={
                    "status": DraftStatus.SCHEDULED,
                    "scheduled_date": when.isoformat(),
                    "date": now_iso(),
                }
            )
            repo.save_drafts(drafts)
            return drafts[i]
    return None


def save_voice_setting(repo: ContentRepository, tag: str, content: str) -> Memory:
    """Update-or-add the style reference holding one voice DNA setting."""
    if tag not in VOICE_SETTINGS:
        raise ValueError(f"Unknown voice setting: {tag}. Use one of {sorted(VOICE_SETTINGS)}")
    existing = next(
        (
            m
            for m in repo.list_memories()
            if m.type == MemoryType.STYLE_REFERENCE and tag in m.tags
        ),
        None,
    )
    if existing:
        memory = existing.model_copy(update={"content": content})
        repo.update_memory(memory)
        return memory

    memory = Memory(
        id=f"{tag}-{_now_ms()}",
        type=MemoryType.STYLE_REFERENCE,
        title=VOICE_SETTINGS[tag],
        content=content,
        tags=[VOICE_DNA_TAG, tag],
        created_at=now_iso(),
    )
    repo.add_memory(memory)
    return memory


def save_persona_report(repo: ContentRepository, report_json: str, name: str) -> Memory:
    memory = Memory(
        id=f"persona-{_now_ms()}",
        type=MemoryType.PERSONA,
        title=name or "Persona",
        content=report_json,
        tags=["persona"],
        created_at=now_iso(),
    )
    repo.add_memory(memory)
    return memory


def record_memory_usage(repo: ContentRepository, memory_ids: list[str]) -> list[Memory]:
    """Bump usage counters of memories that fed a generated piece."""
    wanted = set(memory_ids)
    touched = []
    for memory in repo.list_memories():
        if memory.id in wanted:
            bumped = memory.model_copy(update={"usage_count": (memory.usage_count or 0) + 1})
            repo.update_memory(bumped)
            touched.append(bumped)
    return touched


def memory_bank(memories: list[Memory]) -> list[Memory]:
    """Memories for the general listing (voice training types hidden)."""
    return [m for m in memories if m.type in NARRATIVE_MEMORY_TYPES]


def unused_memories(memories: list[Memory]) -> list[Memory]:
    return [m for m in memory_bank(memories) if not m.usage_count]
