"""Entity models: camelCase aliases are the on-device JSON naming."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared_types import ChatRole, DraftStatus, EmojiUsage, MemoryType, Platform


class Entity(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_local(self) -> dict:
        """Dict in local-blob naming (camelCase, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserProfile(Entity):
    name: str = ""
    niche: str = ""
    audience: str = ""
    tone: str = ""
    emoji_usage: EmojiUsage = EmojiUsage.MINIMAL
    values: list[str] = Field(default_factory=list)
    contrarian_views: list[str] = Field(default_factory=list)
    onboarding_complete: bool = False
    voice_analysis: Optional[str] = None

    def summary(self) -> str:
        """Profile block for LLM instructions."""
        parts = [f"Name: {self.name}"] if self.name else []
        if self.niche:
            parts.append(f"Niche: {self.niche}")
        if self.audience:
            parts.append(f"Audience: {self.audience}")
        if self.values:
            parts.append("Values: " + ", ".join(self.values))
        if self.contrarian_views:
            parts.append("Contrarian views: " + ", ".join(self.contrarian_views))
        parts.append(f"Emoji usage: {self.emoji_usage}")
        return "\n".join(parts)


class Memory(Entity):
    id: str
    type: MemoryType
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created_at: str  # ISO timestamp
    emotional_tone: Optional[str] = None
    source_audio: Optional[bool] = None
    usage_count: Optional[int] = None


class Product(Entity):
    id: str
    name: str
    persona: str = ""
    pain_points: str = ""
    solution: str = ""
    differentiators: str = ""
    testimonials: str = ""
    link: str = ""
    purpose: str = ""
    results: str = ""
    notes: str = ""


class ContentDraft(Entity):
    id: str
    title: str
    content: str
    platform: Platform
    status: DraftStatus = DraftStatus.DRAFT
    date: str  # creation or last edit
    scheduled_date: Optional[str] = None


class ChatMessage(Entity):
    role: ChatRole
    text: str
    timestamp: Optional[int] = None  # epoch ms
