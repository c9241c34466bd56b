"""Content generation API routes: posts, repurposing, ideas and personas.

Generation failures come back as the writer's fixed fallback text with a
200, never as an HTTP error; nothing is saved for a failed piece.
"""

import asyncio
from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends, HTTPException

from ghostwriter import GENERATION_FAILED, Ghostwriter, frameworks
from shared_types import MemoryType
from store import ContentDraft, ContentRepository
from store.workflows import (
    new_id,
    now_iso,
    record_memory_usage,
    save_draft,
    save_persona_report,
)
from web.deps import get_repository, get_writer
from web.models import (
    AnglesRequest,
    BrainDumpRequest,
    CarouselRefineRequest,
    GenerateRequest,
    GenerateResponse,
    PersonaRequest,
    RepurposeRequest,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/generate", tags=["generate"])


def _require_profile(repo: ContentRepository):
    profile = repo.load_profile()
    if profile is None:
        raise HTTPException(status_code=409, detail="Complete onboarding first")
    return profile


@router.post("", response_model=GenerateResponse)
async def generate(
    body: GenerateRequest,
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    profile = _require_profile(repo)
    memories = repo.list_memories()
    if body.memory_ids:
        wanted = set(body.memory_ids)
        memories = [m for m in memories if m.id in wanted] + [m for m in memories if m.id not in wanted]

    product = None
    if body.product_id:
        product = next((p for p in repo.list_products() if p.id == body.product_id), None)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")

    persona = None
    if body.persona_id:
        persona_memory = next(
            (m for m in memories if m.id == body.persona_id and m.type == MemoryType.PERSONA), None
        )
        if persona_memory is None:
            raise HTTPException(status_code=404, detail="Persona not found")
        persona = persona_memory.content

    try:
        framework = frameworks.get_framework(body.framework_id) if body.framework_id else None
        content_format = frameworks.get_format(body.format_id) if body.format_id else None
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown framework or format: {e}")

    content = await asyncio.to_thread(
        writer.generate_content,
        profile,
        memories,
        body.topic,
        body.platform.value,
        focus_types=body.focus_types or None,
        source_material=body.source_material,
        style_reference=body.style_reference,
        product=product,
        persona=persona,
        framework=framework,
        content_format=content_format,
    )
    if content == GENERATION_FAILED:
        logger.warning("web.generation_fallback", platform=body.platform.value)
        return GenerateResponse(content=content)

    if body.humanize:
        content = await asyncio.to_thread(writer.humanize, content, profile)

    if body.memory_ids:
        record_memory_usage(repo, body.memory_ids)

    draft_id = None
    if body.save:
        draft = ContentDraft(
            id=new_id("draft"),
            title=body.topic,
            content=content,
            platform=body.platform,
            date=now_iso(),
        )
        save_draft(repo, draft)
        draft_id = draft.id

    logger.info("web.generated", platform=body.platform.value, saved=body.save)
    return GenerateResponse(content=content, draft_id=draft_id)


@router.get("/frameworks")
async def list_frameworks():
    """The guided-creation catalog."""
    return {
        "intentions": [asdict(i) for i in frameworks.INTENTIONS],
        "formats": [asdict(f) for f in frameworks.FORMATS],
        "focusAreas": [asdict(f) for f in frameworks.FOCUS_AREAS],
        "frameworks": [asdict(f) for f in frameworks.FRAMEWORKS],
    }


@router.post("/repurpose", response_model=GenerateResponse)
async def repurpose(
    body: RepurposeRequest,
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    profile = _require_profile(repo)
    content = await asyncio.to_thread(
        writer.repurpose,
        body.content,
        body.source_platform.value,
        body.target_platform.value,
        profile,
    )
    return GenerateResponse(content=content)


@router.post("/refine-carousel", response_model=GenerateResponse)
async def refine_carousel(
    body: CarouselRefineRequest,
    writer: Ghostwriter = Depends(get_writer),
):
    content = await asyncio.to_thread(writer.refine_carousel, body.content, body.mode)
    return GenerateResponse(content=content)


@router.get("/topics")
async def topics(
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    profile = _require_profile(repo)
    return await asyncio.to_thread(writer.topic_suggestions, profile, repo.list_memories())


@router.post("/angles")
async def angles(
    body: AnglesRequest,
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    profile = _require_profile(repo)
    memory = next((m for m in repo.list_memories() if m.id == body.memory_id), None)
    if memory is None:
        raise HTTPException(status_code=404, detail="Memory not found")
    return await asyncio.to_thread(writer.angles_from_memory, profile, memory.content)


@router.post("/brain-dump")
async def brain_dump(
    body: BrainDumpRequest,
    writer: Ghostwriter = Depends(get_writer),
):
    return await asyncio.to_thread(writer.analyze_brain_dump, body.text)


@router.post("/persona")
async def persona(
    body: PersonaRequest,
    repo: ContentRepository = Depends(get_repository),
    writer: Ghostwriter = Depends(get_writer),
):
    """Build an audience persona report and keep it as a PERSONA memory.

    An empty report ("{}") is returned as is and not stored.
    """
    report = await asyncio.to_thread(writer.persona_report, body.form)
    if report == "{}":
        logger.warning("web.persona_fallback")
        return {"report": report, "memory": None}
    memory = save_persona_report(repo, report, body.name)
    logger.info("web.persona_saved", memory_id=memory.id)
    return {"report": report, "memory": memory.to_local()}
