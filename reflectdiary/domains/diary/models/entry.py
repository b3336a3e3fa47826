"""Journal entry and its tag association."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflectdiary.core.users.models import TimestampMixin
from reflectdiary.extensions import db

if TYPE_CHECKING:
    from reflectdiary.domains.diary.models.prompt import Answer
    from reflectdiary.domains.diary.models.section import Section, Subtopic
    from reflectdiary.domains.diary.models.tag import Tag

INTENSITY_MIN = 0
INTENSITY_MAX = 10


class Entry(db.Model, TimestampMixin):
    __tablename__ = "entry"
    __table_args__ = (
        db.Index("ix_entry_section_created_at", "section_id", "created_at"),
        db.Index("ix_entry_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str | None] = mapped_column(db.String(255))
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    # Free-form mood slug; the vocabulary lives on the client.
    mood: Mapped[str | None] = mapped_column(db.String(64), index=True)
    intensity: Mapped[int | None] = mapped_column(db.Integer)
    is_draft: Mapped[bool] = mapped_column(default=False, nullable=False)
    section_id: Mapped[int] = mapped_column(db.ForeignKey("section.id"), nullable=False)
    subtopic_id: Mapped[int | None] = mapped_column(
        db.ForeignKey("subtopic.id", ondelete="SET NULL"), index=True
    )

    section: Mapped["Section"] = relationship("Section", back_populates="entries")
    subtopic: Mapped[Optional["Subtopic"]] = relationship("Subtopic", back_populates="entries")
    tag_links: Mapped[list["EntryTag"]] = relationship(
        "EntryTag",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="EntryTag.tag_id",
    )
    answers: Mapped[list["Answer"]] = relationship(
        "Answer", back_populates="entry", cascade="all, delete-orphan", order_by="Answer.id"
    )


class EntryTag(db.Model):
    __tablename__ = "entry_tag"

    entry_id: Mapped[int] = mapped_column(db.ForeignKey("entry.id", ondelete="CASCADE"), primary_key=True)
    tag_id: Mapped[int] = mapped_column(db.ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True)

    entry: Mapped[Entry] = relationship("Entry", back_populates="tag_links")
    tag: Mapped["Tag"] = relationship("Tag", back_populates="entry_links")
