"""Shared enums and types for AuthOS."""

from enum import StrEnum


class MemoryType(StrEnum):
    STORY = "STORY"
    BELIEF = "BELIEF"
    FAILURE = "FAILURE"
    LESSON = "LESSON"
    ANALOGY = "ANALOGY"
    EMOTION = "EMOTION"
    FACT = "FACT"
    STYLE_REFERENCE = "STYLE_REFERENCE"
    PERSONA = "PERSONA"


# Types shown in the general memory bank; the rest belong to voice training.
NARRATIVE_MEMORY_TYPES = frozenset(
    t for t in MemoryType if t not in (MemoryType.STYLE_REFERENCE, MemoryType.PERSONA)
)


class EmojiUsage(StrEnum):
    NONE = "none"
    MINIMAL = "minimal"
    HEAVY = "heavy"


class Platform(StrEnum):
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    BLOG = "blog"
    INSTAGRAM = "instagram"


class DraftStatus(StrEnum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


class ChatRole(StrEnum):
    USER = "user"
    MODEL = "model"


class Language(StrEnum):
    EN = "en"
    PT = "pt"
