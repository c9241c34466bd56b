"""Memory bank API routes."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from shared_types import MemoryType
from store import ContentRepository, Memory
from store.workflows import memory_bank, new_id, now_iso, unused_memories
from web.deps import get_repository, get_writer
from web.models import MemoryCreate, MemoryUpdate

router = APIRouter(prefix="/api/memories", tags=["memories"])


@router.get("")
async def list_memories(
    scope: str = "all",
    repo: ContentRepository = Depends(get_repository),
):
    """All memories; ``scope=bank`` hides voice training, ``scope=unused`` too."""
    memories = repo.list_memories()
    if scope == "bank":
        memories = memory_bank(memories)
    elif scope == "unused":
        memories = unused_memories(memories)
    elif scope != "all":
        raise HTTPException(status_code=400, detail=f"Unknown scope: {scope}")
    return [m.to_local() for m in memories]


@router.post("", status_code=201)
async def create_memory(body: MemoryCreate, repo: ContentRepository = Depends(get_repository)):
    suggested = {}
    if body.enrich:
        writer = get_writer()
        suggested = await asyncio.to_thread(writer.enrich_memory, body.content)

    memory = Memory(
        id=new_id("mem"),
        type=body.type or MemoryType(suggested.get("type", MemoryType.STORY)),
        title=body.title or suggested.get("title") or body.content[:40],
        content=body.content,
        tags=body.tags if body.tags is not None else suggested.get("tags", []),
        created_at=now_iso(),
        emotional_tone=body.emotional_tone or suggested.get("emotionalTone"),
        source_audio=body.source_audio,
    )
    repo.add_memory(memory)
    return memory.to_local()


@router.put("/{memory_id}")
async def update_memory(
    memory_id: str,
    body: MemoryUpdate,
    repo: ContentRepository = Depends(get_repository),
):
    existing = next((m for m in repo.list_memories() if m.id == memory_id), None)
    if existing is None:
        raise HTTPException(status_code=404, detail="Memory not found")

    updates = body.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    updated = existing.model_copy(update=updates)
    repo.update_memory(updated)
    return updated.to_local()


@router.delete("/{memory_id}")
async def delete_memory(memory_id: str, repo: ContentRepository = Depends(get_repository)):
    repo.delete_memory(memory_id)
    return {"ok": True}
