"""Sections (seeded, read-only over HTTP) and their subtopics."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from reflectdiary.core.errors import NotFoundError
from reflectdiary.domains.diary.models import Entry, Section, Subtopic
from reflectdiary.domains.diary.seeds import DEFAULT_SECTIONS
from reflectdiary.extensions import db

logger = logging.getLogger(__name__)


def seed_sections() -> int:
    """Insert default sections missing by name; existing rows are left untouched."""
    existing = {name for (name,) in db.session.query(Section.name).all()}
    created = 0
    for defaults in DEFAULT_SECTIONS:
        if defaults["name"] in existing:
            continue
        db.session.add(Section(**defaults))
        created += 1
    db.session.commit()
    return created


def list_sections() -> List[Tuple[Section, int]]:
    """Sections by display order, each paired with its entry count."""
    counts = dict(
        db.session.query(Entry.section_id, func.count(Entry.id)).group_by(Entry.section_id).all()
    )
    sections = (
        Section.query.options(selectinload(Section.subtopics))
        .populate_existing()
        .order_by(Section.order.asc(), Section.id.asc())
        .all()
    )
    return [(section, counts.get(section.id, 0)) for section in sections]


def get_section(section_id: int) -> Section:
    section = db.session.get(Section, section_id)
    if not section:
        raise NotFoundError(f"Section {section_id} not found")
    return section


def find_section_by_name(name: str) -> Optional[Section]:
    return Section.query.filter_by(name=name).first()


def get_subtopic(subtopic_id: int) -> Subtopic:
    subtopic = db.session.get(Subtopic, subtopic_id)
    if not subtopic:
        raise NotFoundError(f"Subtopic {subtopic_id} not found")
    return subtopic


def create_subtopic(*, name: str, section_id: int, description: Optional[str] = None) -> Subtopic:
    section = get_section(section_id)
    subtopic = Subtopic(
        name=name.strip(),
        description=(description or "").strip() or None,
        section=section,
    )
    db.session.add(subtopic)
    db.session.commit()
    return subtopic


def update_subtopic(subtopic_id: int, **fields) -> Subtopic:
    subtopic = get_subtopic(subtopic_id)
    if fields.get("name") is not None:
        subtopic.name = fields["name"].strip()
    if "description" in fields:
        subtopic.description = (fields["description"] or "").strip() or None
    db.session.commit()
    return subtopic


def delete_subtopic(subtopic_id: int) -> int:
    """Delete a subtopic; its entries stay in the section with no subtopic.

    Returns the number of entries that were detached.
    """
    subtopic = get_subtopic(subtopic_id)
    # Reload the collection; entries may have moved since it was first loaded.
    db.session.expire(subtopic, ["entries"])
    detached = 0
    for entry in list(subtopic.entries):
        entry.subtopic = None
        detached += 1
    db.session.delete(subtopic)
    db.session.commit()
    logger.info("Deleted subtopic %s, detached %s entries", subtopic_id, detached)
    return detached
