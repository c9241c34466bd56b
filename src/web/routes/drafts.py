"""Draft API routes."""

from fastapi import APIRouter, Depends

from store import ContentDraft, ContentRepository
from store.workflows import delete_draft, save_draft
from web.deps import get_repository

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


@router.get("")
async def list_drafts(repo: ContentRepository = Depends(get_repository)):
    return [d.to_local() for d in repo.list_drafts()]


@router.put("")
async def replace_drafts(body: list[ContentDraft], repo: ContentRepository = Depends(get_repository)):
    """Replace the whole collection; drafts missing from the body are deleted."""
    return [d.to_local() for d in repo.save_drafts(body)]


@router.post("")
async def upsert_draft(body: ContentDraft, repo: ContentRepository = Depends(get_repository)):
    return [d.to_local() for d in save_draft(repo, body)]


@router.delete("/{draft_id}")
async def remove_draft(draft_id: str, repo: ContentRepository = Depends(get_repository)):
    return [d.to_local() for d in delete_draft(repo, draft_id)]
