"""Diary request/response schemas.

Wire format is camelCase (``sectionId``, ``isDraft``, ``createdAt``); JSON backups
use the same shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from reflectdiary.domains.diary.models.entry import INTENSITY_MAX, INTENSITY_MIN


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- requests ----


class SubtopicCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    section_id: int


class SubtopicUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class TagCreate(CamelModel):
    name: str = Field(min_length=1, max_length=128)
    color: Optional[str] = Field(default=None, max_length=32)


class TagUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    color: Optional[str] = Field(default=None, max_length=32)


class EntryPayload(CamelModel):
    """Body of both create and update; update replaces every field."""

    title: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(min_length=1)
    mood: Optional[str] = Field(default=None, max_length=64)
    intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    section_id: int
    subtopic_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None
    is_draft: bool = False


class EntryListFilter(CamelModel):
    section_id: Optional[int] = None
    subtopic_id: Optional[int] = None
    tag_id: Optional[int] = None
    mood: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)


class ImportTag(CamelModel):
    name: str = Field(min_length=1, max_length=128)
    color: Optional[str] = Field(default=None, max_length=32)


class ImportEntry(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(min_length=1)
    mood: Optional[str] = Field(default=None, max_length=64)
    intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)
    is_draft: Optional[bool] = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ImportSection(CamelModel):
    name: str
    entries: Optional[List[ImportEntry]] = None


class ImportData(CamelModel):
    sections: List[ImportSection]
    tags: Optional[List[ImportTag]] = None


# ---- responses ----


class EntryCount(BaseModel):
    entries: int = 0


class SectionRef(CamelModel):
    id: int
    name: str
    description: Optional[str]
    order: int
    created_at: str
    updated_at: str


class SubtopicResponse(CamelModel):
    id: int
    name: str
    description: Optional[str]
    section_id: int
    created_at: str
    updated_at: str


class SectionResponse(SectionRef):
    subtopics: List[SubtopicResponse] = []
    count: EntryCount = Field(default_factory=EntryCount, alias="_count")


class TagResponse(CamelModel):
    id: int
    name: str
    color: Optional[str]
    created_at: str
    updated_at: str


class TagWithCountResponse(TagResponse):
    count: EntryCount = Field(default_factory=EntryCount, alias="_count")


class EntryTagResponse(CamelModel):
    entry_id: int
    tag_id: int
    tag: TagResponse


class PromptResponse(CamelModel):
    id: int
    question: str
    category: Optional[str]
    is_active: bool
    created_at: str
    updated_at: str


class AnswerResponse(CamelModel):
    id: int
    content: str
    entry_id: int
    prompt_id: int
    created_at: str
    updated_at: str
    prompt: Optional[PromptResponse] = None


class EntryBase(CamelModel):
    id: int
    title: Optional[str]
    content: str
    mood: Optional[str]
    intensity: Optional[int]
    is_draft: bool
    section_id: int
    subtopic_id: Optional[int]
    created_at: str
    updated_at: str
    tags: List[EntryTagResponse] = []


class EntryResponse(EntryBase):
    section: Optional[SectionRef] = None
    subtopic: Optional[SubtopicResponse] = None


class EntryDetailResponse(EntryResponse):
    answers: List[AnswerResponse] = []


class ExportEntry(EntryBase):
    answers: List[AnswerResponse] = []


class ExportSection(SectionRef):
    subtopics: List[SubtopicResponse] = []
    entries: List[ExportEntry] = []


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
