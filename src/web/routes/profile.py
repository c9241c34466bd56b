"""Profile view/edit API routes."""

import structlog
from fastapi import APIRouter, Depends

from store import ContentRepository, UserProfile
from store.workflows import complete_onboarding
from web.deps import get_repository

logger = structlog.get_logger()

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(repo: ContentRepository = Depends(get_repository)):
    """Stored profile, or null when onboarding has not happened."""
    profile = repo.load_profile()
    return profile.to_local() if profile else None


@router.put("")
async def put_profile(body: UserProfile, repo: ContentRepository = Depends(get_repository)):
    repo.store_profile(body)
    return body.to_local()


@router.post("/onboarding")
async def finish_onboarding(body: UserProfile, repo: ContentRepository = Depends(get_repository)):
    memory = complete_onboarding(repo, body)
    logger.info("web.onboarding_completed")
    return {
        "profile": body.model_copy(update={"onboarding_complete": True}).to_local(),
        "memory": memory.to_local(),
    }
