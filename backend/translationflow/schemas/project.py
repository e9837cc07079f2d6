"""Project-related schemas."""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from translationflow.languages import is_supported_language
from translationflow.models import PhaseStatus, Project, ProjectPhase, ProjectStatus
from translationflow.workflow import (
    PHASE_DESCRIPTIONS,
    PHASE_LABELS,
    PHASE_SEQUENCE,
    STATUS_LABELS,
    compute_progress,
    derive_project_status,
    is_phase_startable,
    next_phase,
)


def _check_language(code: str) -> str:
    code = code.strip().lower()
    if not is_supported_language(code):
        raise ValueError(f"Unsupported language code: {code}")
    return code


def _dedupe(codes: List[str]) -> List[str]:
    seen = []
    for code in codes:
        if code not in seen:
            seen.append(code)
    return seen


class ProjectCreateRequest(BaseModel):
    """Request body for creating a new project."""

    name: str = Field(..., max_length=255)
    description: str = Field(..., max_length=5000)
    source_language: str = Field(default="en")
    target_languages: List[str] = Field(..., min_length=1)

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("source_language")
    @classmethod
    def validate_source_language(cls, v: str) -> str:
        return _check_language(v)

    @field_validator("target_languages")
    @classmethod
    def validate_target_languages(cls, v: List[str]) -> List[str]:
        return _dedupe([_check_language(code) for code in v])

    @model_validator(mode="after")
    def source_not_in_targets(self):
        if self.source_language in self.target_languages:
            raise ValueError("Target languages cannot include the source language")
        return self


class ProjectUpdateRequest(BaseModel):
    """
    Partial update of descriptive fields.

    Phase state is never touched by an edit. ``expected_version`` enables
    a conditional update; leave it out for last-write-wins.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    source_language: Optional[str] = None
    target_languages: Optional[List[str]] = Field(default=None, min_length=1)
    expected_version: Optional[int] = Field(default=None, ge=1)

    @field_validator("name", "description", "source_language", "target_languages", mode="before")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v.strip() if v is not None else v

    @field_validator("source_language")
    @classmethod
    def validate_source_language(cls, v: Optional[str]) -> Optional[str]:
        return _check_language(v) if v is not None else v

    @field_validator("target_languages")
    @classmethod
    def validate_target_languages(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _dedupe([_check_language(code) for code in v])

    @model_validator(mode="after")
    def source_not_in_targets(self):
        if (
            self.source_language is not None
            and self.target_languages is not None
            and self.source_language in self.target_languages
        ):
            raise ValueError("Target languages cannot include the source language")
        return self

    def changes(self) -> Dict[str, object]:
        """Fields explicitly provided by the client, minus control fields."""
        return self.model_dump(exclude_unset=True, exclude={"expected_version"})


class PhaseStatusUpdateRequest(BaseModel):
    """Request to change the status of one phase."""

    status: PhaseStatus
    force: bool = Field(
        default=False,
        description="Confirm a backward transition, e.g. completed -> in_progress",
    )
    expected_version: Optional[int] = Field(default=None, ge=1)


class PhaseView(BaseModel):
    """One phase as shown in the workflow indicator."""

    phase: ProjectPhase
    number: int
    label: str
    description: str
    status: PhaseStatus
    status_label: str
    is_current: bool
    startable: bool
    next_phase: Optional[ProjectPhase] = None


class ProjectResponse(BaseModel):
    """Basic project response."""

    id: UUID
    name: str
    description: str
    source_language: str
    target_languages: List[str]
    phases: Dict[ProjectPhase, PhaseStatus]
    current_phase: ProjectPhase
    progress: int
    status: ProjectStatus
    created_by: str
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            source_language=project.source_language,
            target_languages=list(project.target_languages),
            phases=project.phase_map,
            current_phase=project.current_phase,
            progress=compute_progress(project),
            status=derive_project_status(project),
            created_by=project.created_by,
            version=project.version,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectDetailResponse(ProjectResponse):
    """Detailed project response with the per-phase workflow view."""

    workflow: List[PhaseView] = []
    video_count: int = 0

    @classmethod
    def from_project(cls, project: Project, video_count: int = 0) -> "ProjectDetailResponse":
        base = ProjectResponse.from_project(project)
        phases = project.phase_map
        workflow = [
            PhaseView(
                phase=phase,
                number=index + 1,
                label=PHASE_LABELS[phase],
                description=PHASE_DESCRIPTIONS[phase],
                status=phases[phase],
                status_label=STATUS_LABELS[phases[phase]],
                is_current=project.current_phase == phase,
                startable=is_phase_startable(project, phase),
                next_phase=next_phase(phase),
            )
            for index, phase in enumerate(PHASE_SEQUENCE)
        ]
        return cls(**base.model_dump(), workflow=workflow, video_count=video_count)


class ProjectListResponse(BaseModel):
    """List of a user's projects, most recently updated first."""

    items: List[ProjectResponse]
    total: int


class ProjectStatsResponse(BaseModel):
    """Dashboard statistics."""

    active_projects: int
    pending_translations: int
    completed_translations: int
    total_languages: int
