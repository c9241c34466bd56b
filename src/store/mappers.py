"""Entity <-> Record Store row mapping.

Local blobs use the entities' camelCase aliases; Record Store columns are
snake_case. These tables are the only place the translation is defined.
"""

from typing import Optional, TypeVar

from .models import ContentDraft, Entity, Memory, Product, UserProfile

E = TypeVar("E", bound=Entity)

PROFILE_COLUMNS = {
    "name": "name",
    "niche": "niche",
    "audience": "audience",
    "tone": "tone",
    "emoji_usage": "emoji_usage",
    "values": "values",
    "contrarian_views": "contrarian_views",
    "onboarding_complete": "onboarding_complete",
    "voice_analysis": "voice_analysis",
}

MEMORY_COLUMNS = {
    "id": "id",
    "type": "type",
    "title": "title",
    "content": "content",
    "tags": "tags",
    "created_at": "created_at",
    "emotional_tone": "emotional_tone",
    "source_audio": "source_audio",
    "usage_count": "usage_count",
}

# id, type and created_at never change after creation
MEMORY_MUTABLE = ("title", "content", "tags", "emotional_tone", "usage_count")

PRODUCT_COLUMNS = {
    "id": "id",
    "name": "name",
    "persona": "persona",
    "pain_points": "pain_points",
    "solution": "solution",
    "differentiators": "differentiators",
    "testimonials": "testimonials",
    "link": "link",
    "purpose": "purpose",
    "results": "results",
    "notes": "notes",
}

DRAFT_COLUMNS = {
    "id": "id",
    "title": "title",
    "content": "content",
    "platform": "platform",
    "status": "status",
    "date": "date",
    "scheduled_date": "scheduled_date",
}


def _to_row(entity: Entity, columns: dict[str, str], user_id: Optional[str]) -> dict:
    data = entity.model_dump(mode="json")
    row = {column: data.get(attr) for attr, column in columns.items()}
    if user_id is not None:
        row["user_id"] = user_id
    return row


def _from_row(model: type[E], row: dict, columns: dict[str, str]) -> E:
    data = {attr: row[column] for attr, column in columns.items() if column in row}
    # NULL columns fall back to model defaults
    return model.model_validate({k: v for k, v in data.items() if v is not None})


def profile_to_row(profile: UserProfile, user_id: Optional[str] = None) -> dict:
    return _to_row(profile, PROFILE_COLUMNS, user_id)


def profile_from_row(row: dict) -> UserProfile:
    return _from_row(UserProfile, row, PROFILE_COLUMNS)


def memory_to_row(memory: Memory, user_id: Optional[str] = None) -> dict:
    return _to_row(memory, MEMORY_COLUMNS, user_id)


def memory_from_row(row: dict) -> Memory:
    return _from_row(Memory, row, MEMORY_COLUMNS)


def memory_update_fields(memory: Memory) -> dict:
    """Columns a remote update may touch."""
    row = memory_to_row(memory)
    return {MEMORY_COLUMNS[attr]: row[MEMORY_COLUMNS[attr]] for attr in MEMORY_MUTABLE}


def product_to_row(product: Product, user_id: Optional[str] = None) -> dict:
    return _to_row(product, PRODUCT_COLUMNS, user_id)


def product_from_row(row: dict) -> Product:
    return _from_row(Product, row, PRODUCT_COLUMNS)


def product_update_fields(product: Product) -> dict:
    row = product_to_row(product)
    row.pop(PRODUCT_COLUMNS["id"])
    return row


def draft_to_row(draft: ContentDraft, user_id: Optional[str] = None) -> dict:
    return _to_row(draft, DRAFT_COLUMNS, user_id)


def draft_from_row(row: dict) -> ContentDraft:
    return _from_row(ContentDraft, row, DRAFT_COLUMNS)
