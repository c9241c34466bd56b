"""Pydantic request schemas for the web API.

Bodies accept camelCase (what the browser client sends) or snake_case.
Responses are entities in their camelCase local form.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared_types import MemoryType, Platform


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Memories ---


class MemoryCreate(ApiModel):
    content: str = Field(..., min_length=1, max_length=20_000)
    title: Optional[str] = None
    type: Optional[MemoryType] = None
    tags: Optional[list[str]] = None
    emotional_tone: Optional[str] = None
    source_audio: Optional[bool] = None
    enrich: bool = False


class MemoryUpdate(ApiModel):
    title: Optional[str] = None
    content: Optional[str] = Field(None, max_length=20_000)
    tags: Optional[list[str]] = None
    emotional_tone: Optional[str] = None


# --- Products ---


class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    persona: str = ""
    pain_points: str = ""
    solution: str = ""
    differentiators: str = ""
    testimonials: str = ""
    link: str = ""
    purpose: str = ""
    results: str = ""
    notes: str = ""


# --- Chat ---


class ChatRequest(ApiModel):
    message: str = Field(..., min_length=1, max_length=5000)
    news_title: Optional[str] = None


# --- Generation ---


class GenerateRequest(ApiModel):
    topic: str = Field(..., min_length=1, max_length=2000)
    platform: Platform = Platform.LINKEDIN
    focus_types: list[MemoryType] = []
    memory_ids: list[str] = []
    product_id: Optional[str] = None
    source_material: Optional[str] = None
    style_reference: Optional[str] = None
    persona_id: Optional[str] = None
    framework_id: Optional[str] = None
    format_id: Optional[str] = None
    humanize: bool = False
    save: bool = False


class GenerateResponse(ApiModel):
    content: str
    draft_id: Optional[str] = None


class RepurposeRequest(ApiModel):
    content: str = Field(..., min_length=1, max_length=20_000)
    source_platform: Platform
    target_platform: Platform


class CarouselRefineRequest(ApiModel):
    content: str = Field(..., min_length=1, max_length=20_000)
    mode: Literal["spread", "shorter", "longer"]


class AnglesRequest(ApiModel):
    memory_id: str


class BrainDumpRequest(ApiModel):
    text: str = Field(..., min_length=1, max_length=20_000)


class PersonaRequest(ApiModel):
    name: str = Field("", max_length=200)
    form: dict[str, str] = {}
