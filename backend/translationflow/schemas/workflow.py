"""Workflow reference data schemas."""
from typing import List, Optional

from pydantic import BaseModel

from translationflow.models import PhaseStatus, ProjectPhase


class PhaseInfo(BaseModel):
    """Static description of one workflow phase."""
    phase: ProjectPhase
    number: int
    label: str
    description: str
    next_phase: Optional[ProjectPhase] = None


class StatusInfo(BaseModel):
    status: PhaseStatus
    label: str


class WorkflowResponse(BaseModel):
    """The whole phase model."""
    phases: List[PhaseInfo]
    statuses: List[StatusInfo]


class LanguageInfo(BaseModel):
    code: str
    name: str
    is_common: bool


class LanguageListResponse(BaseModel):
    languages: List[LanguageInfo]
