"""Authentication service layer for the single diary credential."""

from __future__ import annotations

import logging

from flask_jwt_extended import create_access_token

from reflectdiary.core.auth.password import hash_password, verify_password
from reflectdiary.core.errors import DiaryError, NotFoundError
from reflectdiary.core.users.models import User, get_owner
from reflectdiary.extensions import db

logger = logging.getLogger(__name__)


class InvalidCredentialsError(DiaryError):
    status_code = 401


def authenticate(password: str) -> User:
    """Return the owner if ``password`` matches the stored hash."""
    owner = get_owner()
    if not owner:
        raise NotFoundError("User not found")
    if not verify_password(password, owner.password_hash):
        raise InvalidCredentialsError("Invalid password")
    return owner


def issue_token(user: User) -> str:
    """Signed bearer token carrying the user id; lifetime from JWT_ACCESS_TOKEN_EXPIRES."""
    return create_access_token(identity=str(user.id))


def change_password(user_id: int, current_password: str, new_password: str) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentialsError("Invalid current password")
    user.password_hash = hash_password(new_password)
    db.session.commit()
    logger.info("Password changed for user %s", user.id)
    return user


def reset_password(new_password: str) -> User:
    """Overwrite the credential without the current password (CLI recovery)."""
    owner = get_owner()
    if not owner:
        raise NotFoundError("User not found")
    owner.password_hash = hash_password(new_password)
    db.session.commit()
    return owner
