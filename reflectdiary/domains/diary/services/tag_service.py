"""Tag catalog and read-only prompts."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func

from reflectdiary.core.errors import ConflictError, NotFoundError
from reflectdiary.domains.diary.models import EntryTag, Prompt, Tag
from reflectdiary.extensions import db


def list_tags() -> List[Tuple[Tag, int]]:
    counts = dict(db.session.query(EntryTag.tag_id, func.count(EntryTag.entry_id)).group_by(EntryTag.tag_id).all())
    tags = Tag.query.populate_existing().order_by(Tag.name.asc()).all()
    return [(tag, counts.get(tag.id, 0)) for tag in tags]


def get_tag(tag_id: int) -> Tag:
    tag = db.session.get(Tag, tag_id)
    if not tag:
        raise NotFoundError(f"Tag {tag_id} not found")
    return tag


def create_tag(*, name: str, color: Optional[str] = None) -> Tag:
    name_norm = name.strip()
    _ensure_name_free(name_norm)
    tag = Tag(name=name_norm, color=(color or "").strip() or None)
    db.session.add(tag)
    db.session.commit()
    return tag


def update_tag(tag_id: int, **fields) -> Tag:
    tag = get_tag(tag_id)
    if fields.get("name") is not None:
        name_norm = fields["name"].strip()
        if name_norm != tag.name:
            _ensure_name_free(name_norm)
        tag.name = name_norm
    if "color" in fields:
        tag.color = (fields["color"] or "").strip() or None
    db.session.commit()
    return tag


def delete_tag(tag_id: int) -> None:
    """Delete a tag together with its entry associations."""
    tag = get_tag(tag_id)
    db.session.expire(tag, ["entry_links"])
    db.session.delete(tag)
    db.session.commit()


def upsert_tag(name: str, color: Optional[str]) -> Tag:
    """Create or recolor a tag by name; the caller commits."""
    tag = Tag.query.filter_by(name=name).first()
    if tag:
        tag.color = color
    else:
        tag = Tag(name=name, color=color)
        db.session.add(tag)
    return tag


def list_prompts(active_only: bool = True) -> List[Prompt]:
    query = Prompt.query
    if active_only:
        query = query.filter_by(is_active=True)
    return query.order_by(Prompt.id.asc()).all()


def _ensure_name_free(name: str) -> None:
    if Tag.query.filter_by(name=name).first():
        raise ConflictError(f"Tag '{name}' already exists")
