"""Chat API routes. History lives on this device only."""

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException

from ghostwriter import Ghostwriter
from shared_types import ChatRole
from store import ChatMessage, ContentRepository
from web.deps import get_repository, get_writer
from web.models import ChatRequest

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.get("")
async def get_history(repo: ContentRepository = Depends(get_repository)):
    return [m.to_local() for m in repo.load_chat_history()]


@router.post("")
async def send_message(
    body: ChatRequest,
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    profile = repo.load_profile()
    if profile is None:
        raise HTTPException(status_code=409, detail="Complete onboarding first")

    history = repo.load_chat_history()
    reply = await asyncio.to_thread(
        writer.chat_reply, history, body.message, profile, repo.list_memories(), body.news_title
    )

    now = int(time.time() * 1000)
    user_msg = ChatMessage(role=ChatRole.USER, text=body.message, timestamp=now)
    model_msg = ChatMessage(role=ChatRole.MODEL, text=reply, timestamp=now)
    repo.store_chat_history(history + [user_msg, model_msg])
    return model_msg.to_local()


@router.delete("")
async def clear_history(repo: ContentRepository = Depends(get_repository)):
    repo.clear_chat_history()
    return {"ok": True}
