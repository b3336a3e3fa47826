"""Reflection prompts and the answers attached to entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflectdiary.core.users.models import TimestampMixin
from reflectdiary.extensions import db

if TYPE_CHECKING:
    from reflectdiary.domains.diary.models.entry import Entry


class Prompt(db.Model, TimestampMixin):
    __tablename__ = "prompt"

    id: Mapped[int] = mapped_column(primary_key=True)
    question: Mapped[str] = mapped_column(db.Text, nullable=False)
    category: Mapped[str | None] = mapped_column(db.String(128))
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    answers: Mapped[list["Answer"]] = relationship("Answer", back_populates="prompt")


class Answer(db.Model, TimestampMixin):
    __tablename__ = "answer"

    id: Mapped[int] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    entry_id: Mapped[int] = mapped_column(db.ForeignKey("entry.id", ondelete="CASCADE"), index=True, nullable=False)
    prompt_id: Mapped[int] = mapped_column(db.ForeignKey("prompt.id"), index=True, nullable=False)

    entry: Mapped["Entry"] = relationship("Entry", back_populates="answers")
    prompt: Mapped[Prompt] = relationship("Prompt", back_populates="answers")
