"""Diary mappers for DTO responses."""

from __future__ import annotations

from typing import Iterable

from reflectdiary.core.utils.dates import isoformat_utc
from reflectdiary.domains.diary.models import Answer, Entry, EntryTag, Prompt, Section, Subtopic, Tag
from reflectdiary.domains.diary.schemas.diary_schemas import (
    AnswerResponse,
    EntryCount,
    EntryDetailResponse,
    EntryResponse,
    EntryTagResponse,
    ExportEntry,
    ExportSection,
    PromptResponse,
    SectionRef,
    SectionResponse,
    SubtopicResponse,
    TagResponse,
    TagWithCountResponse,
)


def _stamps(obj) -> dict:
    return {
        "created_at": isoformat_utc(obj.created_at) or "",
        "updated_at": isoformat_utc(obj.updated_at) or "",
    }


def _section_ref(section: Section) -> SectionRef:
    return SectionRef(
        id=section.id,
        name=section.name,
        description=section.description,
        order=section.order,
        **_stamps(section),
    )


def _subtopic(subtopic: Subtopic) -> SubtopicResponse:
    return SubtopicResponse(
        id=subtopic.id,
        name=subtopic.name,
        description=subtopic.description,
        section_id=subtopic.section_id,
        **_stamps(subtopic),
    )


def _tag(tag: Tag) -> TagResponse:
    return TagResponse(id=tag.id, name=tag.name, color=tag.color, **_stamps(tag))


def _entry_tags(links: Iterable[EntryTag]) -> list[EntryTagResponse]:
    return [EntryTagResponse(entry_id=link.entry_id, tag_id=link.tag_id, tag=_tag(link.tag)) for link in links]


def _prompt(prompt: Prompt) -> PromptResponse:
    return PromptResponse(
        id=prompt.id,
        question=prompt.question,
        category=prompt.category,
        is_active=prompt.is_active,
        **_stamps(prompt),
    )


def _answer(answer: Answer) -> AnswerResponse:
    return AnswerResponse(
        id=answer.id,
        content=answer.content,
        entry_id=answer.entry_id,
        prompt_id=answer.prompt_id,
        prompt=_prompt(answer.prompt) if answer.prompt else None,
        **_stamps(answer),
    )


def _entry_fields(entry: Entry) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "content": entry.content,
        "mood": entry.mood,
        "intensity": entry.intensity,
        "is_draft": bool(entry.is_draft),
        "section_id": entry.section_id,
        "subtopic_id": entry.subtopic_id,
        "tags": _entry_tags(entry.tag_links),
        **_stamps(entry),
    }


def map_subtopic(subtopic: Subtopic) -> dict:
    return _subtopic(subtopic).model_dump(by_alias=True)


def map_section(section: Section, entry_count: int = 0) -> dict:
    return SectionResponse(
        **_section_ref(section).model_dump(),
        subtopics=[_subtopic(s) for s in section.subtopics],
        count=EntryCount(entries=entry_count),
    ).model_dump(by_alias=True)


def map_tag(tag: Tag, entry_count: int | None = None) -> dict:
    if entry_count is None:
        return _tag(tag).model_dump(by_alias=True)
    return TagWithCountResponse(
        **_tag(tag).model_dump(), count=EntryCount(entries=entry_count)
    ).model_dump(by_alias=True)


def map_prompt(prompt: Prompt) -> dict:
    return _prompt(prompt).model_dump(by_alias=True)


def map_entry(entry: Entry) -> dict:
    return EntryResponse(
        **_entry_fields(entry),
        section=_section_ref(entry.section) if entry.section else None,
        subtopic=_subtopic(entry.subtopic) if entry.subtopic else None,
    ).model_dump(by_alias=True)


def map_entry_detail(entry: Entry) -> dict:
    return EntryDetailResponse(
        **_entry_fields(entry),
        section=_section_ref(entry.section) if entry.section else None,
        subtopic=_subtopic(entry.subtopic) if entry.subtopic else None,
        answers=[_answer(a) for a in entry.answers],
    ).model_dump(by_alias=True)


def map_export_section(section: Section, entries: Iterable[Entry]) -> dict:
    return ExportSection(
        **_section_ref(section).model_dump(),
        subtopics=[_subtopic(s) for s in section.subtopics],
        entries=[ExportEntry(**_entry_fields(e), answers=[_answer(a) for a in e.answers]) for e in entries],
    ).model_dump(by_alias=True)
