"""
Database ENUM types for the translation workflow.
These enums are used for type safety in SQLModel classes and schemas.
"""
from enum import Enum


class ProjectPhase(str, Enum):
    """Workflow phases, declared in canonical order."""
    SUBTITLE_TRANSLATION = "subtitle_translation"
    TRANSLATION_PROOFREADING = "translation_proofreading"
    AUDIO_PRODUCTION = "audio_production"
    AUDIO_REVIEW = "audio_review"


class PhaseStatus(str, Enum):
    """Per-phase progress marker, declared in progression order."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    PhaseStatus.NOT_STARTED: 0,
    PhaseStatus.IN_PROGRESS: 1,
    PhaseStatus.COMPLETED: 2,
}


class ProjectStatus(str, Enum):
    """Aggregate project status derived from the phase map."""
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETED = "completed"


class VideoStatus(str, Enum):
    """Processing state of a single video."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
