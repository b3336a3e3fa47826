"""Seeded sections and user-defined subtopics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflectdiary.core.users.models import TimestampMixin
from reflectdiary.extensions import db

if TYPE_CHECKING:
    from reflectdiary.domains.diary.models.entry import Entry


class Section(db.Model, TimestampMixin):
    __tablename__ = "section"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text)
    order: Mapped[int] = mapped_column(db.Integer, default=0, nullable=False)

    subtopics: Mapped[list["Subtopic"]] = relationship(
        "Subtopic",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="Subtopic.id",
    )
    entries: Mapped[list["Entry"]] = relationship("Entry", back_populates="section")


class Subtopic(db.Model, TimestampMixin):
    __tablename__ = "subtopic"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(db.Text)
    section_id: Mapped[int] = mapped_column(db.ForeignKey("section.id", ondelete="CASCADE"), index=True, nullable=False)

    section: Mapped[Section] = relationship("Section", back_populates="subtopics")
    # No delete cascade: removing a subtopic nulls Entry.subtopic_id instead.
    entries: Mapped[list["Entry"]] = relationship("Entry", back_populates="subtopic")
