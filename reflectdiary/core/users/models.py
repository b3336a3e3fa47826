"""The diary owner: a single credential record."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Mapped, mapped_column

from reflectdiary.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)


def get_owner() -> Optional[User]:
    """Return the single diary owner, or None before bootstrap ran."""
    return User.query.order_by(User.id).first()


def ensure_owner(default_password_hash: str) -> tuple[User, bool]:
    """Return the owner, creating it with the given hash when absent."""
    owner = get_owner()
    if owner:
        return owner, False
    owner = User(password_hash=default_password_hash)
    db.session.add(owner)
    db.session.flush()
    return owner, True
