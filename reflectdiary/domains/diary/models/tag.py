"""Tags attached to entries through EntryTag."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflectdiary.core.users.models import TimestampMixin
from reflectdiary.extensions import db

if TYPE_CHECKING:
    from reflectdiary.domains.diary.models.entry import EntryTag


class Tag(db.Model, TimestampMixin):
    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(128), unique=True, nullable=False)
    color: Mapped[str | None] = mapped_column(db.String(32))

    entry_links: Mapped[list["EntryTag"]] = relationship(
        "EntryTag", back_populates="tag", cascade="all, delete-orphan"
    )
