"""Diary persistence models."""

from reflectdiary.domains.diary.models.entry import Entry, EntryTag
from reflectdiary.domains.diary.models.prompt import Answer, Prompt
from reflectdiary.domains.diary.models.section import Section, Subtopic
from reflectdiary.domains.diary.models.tag import Tag

__all__ = ["Answer", "Entry", "EntryTag", "Prompt", "Section", "Subtopic", "Tag"]
