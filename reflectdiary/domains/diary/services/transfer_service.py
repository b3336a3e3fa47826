"""JSON backup export and additive import."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy.orm import selectinload

from reflectdiary.core.utils.dates import isoformat_utc, to_naive_utc
from reflectdiary.domains.diary.mappers import map_export_section, map_prompt, map_tag
from reflectdiary.domains.diary.models import Answer, Entry, EntryTag, Prompt, Section, Tag
from reflectdiary.domains.diary.schemas.diary_schemas import ImportData
from reflectdiary.domains.diary.services.catalog_service import find_section_by_name
from reflectdiary.domains.diary.services.tag_service import upsert_tag
from reflectdiary.extensions import db

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"


def export_data(now: datetime | None = None) -> Dict[str, Any]:
    """Snapshot every section (with subtopics and entries), tag and prompt."""
    entries = (
        Entry.query.options(
            selectinload(Entry.tag_links).selectinload(EntryTag.tag),
            selectinload(Entry.answers).selectinload(Answer.prompt),
        )
        .populate_existing()
        .order_by(Entry.created_at.desc(), Entry.id.desc())
        .all()
    )
    by_section: Dict[int, List[Entry]] = defaultdict(list)
    for entry in entries:
        by_section[entry.section_id].append(entry)

    sections = (
        Section.query.options(selectinload(Section.subtopics))
        .populate_existing()
        .order_by(Section.order.asc(), Section.id.asc())
        .all()
    )
    return {
        "exportDate": isoformat_utc(now or datetime.utcnow()),
        "version": EXPORT_VERSION,
        "sections": [map_export_section(section, by_section.get(section.id, [])) for section in sections],
        "tags": [map_tag(tag) for tag in Tag.query.order_by(Tag.name.asc()).all()],
        "prompts": [map_prompt(prompt) for prompt in Prompt.query.order_by(Prompt.id.asc()).all()],
    }


def import_data(data: ImportData) -> Dict[str, int]:
    """Merge a backup into the existing diary.

    Tags are upserted by name. Entries are appended to sections that already
    exist by name, keeping their original timestamps; sections missing here are
    skipped. Nothing is deduplicated, so importing the same file twice doubles
    the entries. Subtopic and tag links of imported entries are not restored.
    """
    for tag in data.tags or []:
        upsert_tag(tag.name.strip(), tag.color)

    imported = 0
    skipped = 0
    for section_data in data.sections:
        section = find_section_by_name(section_data.name)
        if not section:
            skipped += 1
            continue
        for item in section_data.entries or []:
            entry = Entry(
                title=item.title,
                content=item.content,
                mood=item.mood,
                intensity=item.intensity,
                is_draft=bool(item.is_draft),
                section=section,
            )
            if item.created_at:
                entry.created_at = to_naive_utc(item.created_at)
            if item.updated_at:
                entry.updated_at = to_naive_utc(item.updated_at)
            db.session.add(entry)
            imported += 1
    db.session.commit()
    logger.info("Imported %s entries, skipped %s unknown sections", imported, skipped)
    return {"imported": imported, "skippedSections": skipped}
