"""
Video model - a translatable video belonging to a project.
"""
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Text
from sqlmodel import Column, Field, Relationship, SQLModel

from translationflow.models.base import BaseUUIDModel
from translationflow.models.enums import VideoStatus

if TYPE_CHECKING:
    from translationflow.models.project import Project


class VideoBase(SQLModel):
    """Shared video properties."""
    title: str = Field(max_length=255, nullable=False)
    description: Optional[str] = Field(default=None)
    source_file_name: str = Field(max_length=500, nullable=False)
    source_language: str = Field(max_length=16, nullable=False)
    target_language: str = Field(max_length=16, nullable=False)
    source_file_content: Optional[str] = Field(default=None, sa_type=Text)
    translated_file_name: Optional[str] = Field(default=None, max_length=500)
    translated_file_content: Optional[str] = Field(default=None, sa_type=Text)
    original_translated_content: Optional[str] = Field(default=None, sa_type=Text)
    video_url: Optional[str] = Field(default=None, max_length=1000)
    audio_url: Optional[str] = Field(default=None, max_length=1000)


class Video(VideoBase, BaseUUIDModel, table=True):
    """
    Video database model.

    Table: videos

    Media lives in external storage; only its URLs are recorded here.
    Subtitle files are stored inline as text.
    """
    __tablename__ = "videos"

    # Foreign key to project
    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)

    status: VideoStatus = Field(
        default=VideoStatus.PENDING,
        sa_column=Column(
            SAEnum(
                VideoStatus,
                name="video_status",
                native_enum=False,
                length=32,
                values_callable=lambda x: [e.value for e in x],
            ),
            nullable=False,
        ),
    )
    created_by: str = Field(max_length=255, nullable=False)

    # Relationships
    project: Optional["Project"] = Relationship(back_populates="videos")
