"""Tests for entity <-> row mapping."""

from helpers import make_draft, make_memory, make_product

from shared_types import DraftStatus, EmojiUsage, MemoryType
from store.mappers import (
    draft_from_row,
    draft_to_row,
    memory_from_row,
    memory_to_row,
    memory_update_fields,
    product_from_row,
    product_to_row,
    product_update_fields,
    profile_from_row,
    profile_to_row,
)
from store.models import UserProfile


class TestRoundTrip:
    def test_profile(self, sample_profile):
        assert profile_from_row(profile_to_row(sample_profile)) == sample_profile

    def test_memory_all_fields(self):
        m = make_memory("m1", emotional_tone="Proud", source_audio=True, usage_count=3)
        assert memory_from_row(memory_to_row(m)) == m

    def test_product(self):
        p = make_product("p1", pain_points="slow", link="https://x.io")
        assert product_from_row(product_to_row(p)) == p

    def test_draft(self):
        d = make_draft("d1", status=DraftStatus.SCHEDULED, scheduled_date="2024-05-01T09:00:00")
        assert draft_from_row(draft_to_row(d)) == d

    def test_row_to_entity_to_row(self):
        row = {
            "id": "d1",
            "title": "t",
            "content": "c",
            "platform": "twitter",
            "status": "published",
            "date": "2024-01-01",
            "scheduled_date": "2024-01-02",
        }
        assert draft_to_row(draft_from_row(row)) == row


class TestColumns:
    def test_profile_uses_snake_case(self, sample_profile):
        row = profile_to_row(sample_profile, "user-1")
        assert row["user_id"] == "user-1"
        assert row["contrarian_views"] == ["funding is a distraction"]
        assert row["onboarding_complete"] is True
        assert row["emoji_usage"] == "minimal"
        assert "contrarianViews" not in row

    def test_memory_type_is_enum_value(self):
        row = memory_to_row(make_memory(type=MemoryType.STYLE_REFERENCE))
        assert row["type"] == "STYLE_REFERENCE"
        assert "user_id" not in row

    def test_null_columns_use_defaults(self):
        p = profile_from_row({"name": "A", "values": None, "emoji_usage": None, "user_id": "u"})
        assert p == UserProfile(name="A", emoji_usage=EmojiUsage.MINIMAL)

    def test_unknown_columns_ignored(self):
        row = draft_to_row(make_draft("d1"), "u")
        row["created_at"] = "2024-01-01"
        assert draft_from_row(row).id == "d1"


def test_memory_update_excludes_immutable_columns():
    fields = memory_update_fields(make_memory("m1", usage_count=2))
    assert set(fields) == {"title", "content", "tags", "emotional_tone", "usage_count"}
    assert fields["usage_count"] == 2


def test_product_update_excludes_id():
    fields = product_update_fields(make_product("p1"))
    assert "id" not in fields
    assert fields["name"] == "Product p1"
