"""Entry services: filtered listing, CRUD and tag replacement."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy import func
from sqlalchemy.orm import selectinload

from reflectdiary.core.errors import InvalidInputError, NotFoundError
from reflectdiary.core.utils.pagination import paginate
from reflectdiary.domains.diary.models import Answer, Entry, EntryTag, Subtopic, Tag
from reflectdiary.domains.diary.models.entry import INTENSITY_MAX, INTENSITY_MIN
from reflectdiary.domains.diary.services.catalog_service import get_section, get_subtopic
from reflectdiary.extensions import db

logger = logging.getLogger(__name__)


def _with_relations(query):
    return query.options(
        selectinload(Entry.section),
        selectinload(Entry.subtopic),
        selectinload(Entry.tag_links).selectinload(EntryTag.tag),
    ).populate_existing()


def list_entries(
    *,
    section_id: Optional[int] = None,
    subtopic_id: Optional[int] = None,
    tag_id: Optional[int] = None,
    mood: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Dict[str, Any]:
    """Newest entries first; returns the ``paginate`` dict."""
    query = Entry.query
    if section_id is not None:
        query = query.filter(Entry.section_id == section_id)
    if subtopic_id is not None:
        query = query.filter(Entry.subtopic_id == subtopic_id)
    if tag_id is not None:
        query = query.filter(Entry.tag_links.any(EntryTag.tag_id == tag_id))
    if mood:
        query = query.filter(Entry.mood == mood)
    if search:
        sensitive = current_app.config.get("ENTRY_SEARCH_MODE") == "sensitive"
        query = query.filter(db.or_(_matches(Entry.title, search, sensitive), _matches(Entry.content, search, sensitive)))
    query = _with_relations(query).order_by(Entry.created_at.desc(), Entry.id.desc())
    return paginate(query, page=page, per_page=limit)


def _matches(column, text: str, sensitive: bool):
    if not sensitive:
        return column.icontains(text, autoescape=True)
    # SQLite LIKE ignores ASCII case; instr() compares bytes.
    if db.engine.dialect.name == "sqlite":
        return func.instr(column, text) > 0
    return column.contains(text, autoescape=True)


def get_entry(entry_id: int) -> Entry:
    entry = (
        _with_relations(Entry.query)
        .options(selectinload(Entry.answers).selectinload(Answer.prompt))
        .filter(Entry.id == entry_id)
        .first()
    )
    if not entry:
        raise NotFoundError(f"Entry {entry_id} not found")
    return entry


def create_entry(
    *,
    content: str,
    section_id: int,
    title: Optional[str] = None,
    mood: Optional[str] = None,
    intensity: Optional[int] = None,
    subtopic_id: Optional[int] = None,
    tag_ids: Optional[Iterable[int]] = None,
    is_draft: bool = False,
) -> Entry:
    """Insert the entry and its tag links in a single commit."""
    tags = _resolve_tags(tag_ids or [])
    entry = Entry()
    _apply_fields(
        entry,
        title=title,
        content=content,
        mood=mood,
        intensity=intensity,
        section_id=section_id,
        subtopic_id=subtopic_id,
        is_draft=is_draft,
    )
    db.session.add(entry)
    _replace_tags(entry, tags)
    db.session.commit()
    logger.info("Created entry %s in section %s", entry.id, entry.section_id)
    return entry


def update_entry(
    entry_id: int,
    *,
    content: str,
    section_id: int,
    title: Optional[str] = None,
    mood: Optional[str] = None,
    intensity: Optional[int] = None,
    subtopic_id: Optional[int] = None,
    tag_ids: Optional[Iterable[int]] = None,
    is_draft: bool = False,
) -> Entry:
    """Replace every field of an entry; tag links are replaced wholesale."""
    entry = get_entry(entry_id)
    tags = _resolve_tags(tag_ids or [])
    _apply_fields(
        entry,
        title=title,
        content=content,
        mood=mood,
        intensity=intensity,
        section_id=section_id,
        subtopic_id=subtopic_id,
        is_draft=is_draft,
    )
    _replace_tags(entry, tags)
    db.session.commit()
    return entry


def delete_entry(entry_id: int) -> None:
    entry = db.session.get(Entry, entry_id)
    if not entry:
        raise NotFoundError(f"Entry {entry_id} not found")
    db.session.expire(entry, ["tag_links", "answers"])
    db.session.delete(entry)
    db.session.commit()
    logger.info("Deleted entry %s", entry_id)


def _apply_fields(entry: Entry, *, title, content, mood, intensity, section_id, subtopic_id, is_draft) -> None:
    body = (content or "").strip()
    if not body:
        raise InvalidInputError("Content is required")
    if intensity is not None and not INTENSITY_MIN <= intensity <= INTENSITY_MAX:
        raise InvalidInputError(f"Intensity must be between {INTENSITY_MIN} and {INTENSITY_MAX}")
    subtopic: Optional[Subtopic] = get_subtopic(subtopic_id) if subtopic_id is not None else None
    entry.section = get_section(section_id)
    entry.subtopic = subtopic
    entry.title = (title or "").strip() or None
    entry.content = content
    entry.mood = (mood or "").strip() or None
    entry.intensity = intensity
    entry.is_draft = bool(is_draft)


def _resolve_tags(tag_ids: Iterable[int]) -> List[Tag]:
    wanted: List[int] = list(dict.fromkeys(tag_ids))
    if not wanted:
        return []
    found = {tag.id: tag for tag in Tag.query.filter(Tag.id.in_(wanted)).all()}
    for tag_id in wanted:
        if tag_id not in found:
            raise NotFoundError(f"Tag {tag_id} not found")
    return [found[tag_id] for tag_id in wanted]


def _replace_tags(entry: Entry, tags: List[Tag]) -> None:
    """Delete every existing link, then insert the new set."""
    if entry.tag_links:
        entry.tag_links.clear()
        db.session.flush()
    for tag in tags:
        entry.tag_links.append(EntryTag(tag=tag))
