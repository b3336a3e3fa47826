"""First-run initialization: the owner credential and the default sections."""

from __future__ import annotations

import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from reflectdiary.core.auth.password import hash_password
from reflectdiary.core.users.models import ensure_owner
from reflectdiary.domains.diary.services.catalog_service import seed_sections
from reflectdiary.extensions import db

logger = logging.getLogger(__name__)


def initialize_app() -> bool:
    """Create the owner and seed sections; must run inside an app context.

    Errors are logged and reported through the return value so the server can
    keep starting.
    """
    try:
        password = current_app.config["DIARY_DEFAULT_PASSWORD"]
        _, created = ensure_owner(hash_password(password))
        db.session.commit()
        if created:
            logger.info("Created default user; change the default password in Settings")
        seeded = seed_sections()
        if seeded:
            logger.info("Seeded %s default sections", seeded)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Initialization failed")
        return False
    return True
