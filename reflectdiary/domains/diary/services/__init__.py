"""Diary service layer."""

from reflectdiary.domains.diary.services import (  # noqa: F401
    catalog_service,
    entry_service,
    tag_service,
    transfer_service,
)
