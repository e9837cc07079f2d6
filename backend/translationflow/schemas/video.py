"""Video-related schemas."""
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from translationflow.languages import is_supported_language
from translationflow.models import VideoStatus


def _check_language(code: str) -> str:
    code = code.strip().lower()
    if not is_supported_language(code):
        raise ValueError(f"Unsupported language code: {code}")
    return code


class VideoCreateRequest(BaseModel):
    """Request body for adding a video to a project."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    source_file_name: str = Field(..., min_length=1, max_length=500)
    source_language: str
    target_language: str
    source_file_content: Optional[str] = None
    translated_file_name: Optional[str] = Field(default=None, max_length=500)
    translated_file_content: Optional[str] = None
    video_url: Optional[str] = Field(default=None, max_length=1000)
    audio_url: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("source_language", "target_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        return _check_language(v)


class VideoUpdateRequest(BaseModel):
    """Partial update of a video; unset fields are left unchanged."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    source_file_name: Optional[str] = Field(default=None, min_length=1, max_length=500)
    source_language: Optional[str] = None
    target_language: Optional[str] = None
    source_file_content: Optional[str] = None
    translated_file_name: Optional[str] = Field(default=None, max_length=500)
    translated_file_content: Optional[str] = None
    video_url: Optional[str] = Field(default=None, max_length=1000)
    audio_url: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[VideoStatus] = None

    @field_validator(
        "title", "source_file_name", "source_language", "target_language", "status", mode="before"
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("source_language", "target_language")
    @classmethod
    def validate_language(cls, v: Optional[str]) -> Optional[str]:
        return _check_language(v) if v is not None else v

    def changes(self) -> Dict[str, object]:
        return self.model_dump(exclude_unset=True)


class VideoStatusUpdateRequest(BaseModel):
    """Request to change a video's status."""
    status: VideoStatus


class VideoResponse(BaseModel):
    """Video data response."""
    id: UUID
    project_id: UUID
    title: str
    description: Optional[str] = None
    source_file_name: str
    source_language: str
    target_language: str
    source_file_content: Optional[str] = None
    translated_file_name: Optional[str] = None
    translated_file_content: Optional[str] = None
    original_translated_content: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    status: VideoStatus
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VideoListResponse(BaseModel):
    """Videos of one project, most recently updated first."""
    items: List[VideoResponse]
    total: int
