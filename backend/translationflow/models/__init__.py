"""
SQLModel ORM models for the application.
All models are exported here for convenient imports:
    from translationflow.models import Project, Video, ProjectPhase, ...
"""

from translationflow.models.enums import (
    PhaseStatus,
    ProjectPhase,
    ProjectStatus,
    VideoStatus,
)
from translationflow.models.base import BaseUUIDModel, utc_now
from translationflow.models.project import Project, ProjectBase
from translationflow.models.video import Video, VideoBase

__all__ = [
    # Enums
    "ProjectPhase",
    "PhaseStatus",
    "ProjectStatus",
    "VideoStatus",
    # Base
    "BaseUUIDModel",
    "utc_now",
    # Project
    "Project",
    "ProjectBase",
    # Video
    "Video",
    "VideoBase",
]
