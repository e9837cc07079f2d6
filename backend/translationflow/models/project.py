"""
Project model - the aggregate record tracking one translation effort.
"""

from typing import TYPE_CHECKING, Dict, List

from sqlalchemy import JSON
from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, Field, Relationship, SQLModel

from translationflow.models.base import BaseUUIDModel
from translationflow.models.enums import PhaseStatus, ProjectPhase

if TYPE_CHECKING:
    from translationflow.models.video import Video


class ProjectBase(SQLModel):
    """Shared project properties."""

    name: str = Field(max_length=255, nullable=False)
    description: str = Field(default="", nullable=False)
    source_language: str = Field(max_length=16, nullable=False)
    target_languages: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )


class Project(ProjectBase, BaseUUIDModel, table=True):
    """
    Project database model.

    Table: projects

    ``phases`` is stored as JSON keyed by phase value, e.g.
    {"subtitle_translation": "completed", "translation_proofreading": "in_progress", ...}
    It always holds all four phases. Replace the dict rather than mutating
    it in place so the ORM sees the change.
    """

    __tablename__ = "projects"

    created_by: str = Field(max_length=255, nullable=False, index=True)

    phases: Dict[str, str] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    current_phase: ProjectPhase = Field(
        default=ProjectPhase.SUBTITLE_TRANSLATION,
        sa_column=Column(
            SAEnum(
                ProjectPhase,
                name="project_phase",
                native_enum=False,
                length=32,
                values_callable=lambda x: [e.value for e in x],
            ),
            nullable=False,
        ),
    )

    # Incremented on every persisted mutation
    version: int = Field(default=1, nullable=False)

    # Relationships; videos are removed explicitly by the repository
    videos: List["Video"] = Relationship(back_populates="project")

    @property
    def phase_map(self) -> Dict[ProjectPhase, PhaseStatus]:
        """Phase statuses keyed by enum members."""
        return {
            ProjectPhase(phase): PhaseStatus(status)
            for phase, status in self.phases.items()
        }
