"""
Translation workflow: phase model and engine.
"""

from translationflow.workflow.engine import (
    ProjectStats,
    compute_progress,
    compute_project_stats,
    derive_project_status,
    is_phase_startable,
    normalize_phases,
    transition,
    validate_phases,
)
from translationflow.workflow.phases import (
    NEXT_PHASE,
    PHASE_DESCRIPTIONS,
    PHASE_LABELS,
    PHASE_SEQUENCE,
    STATUS_LABELS,
    default_phases,
    next_phase,
    previous_phase,
)

__all__ = [
    "ProjectStats",
    "compute_progress",
    "compute_project_stats",
    "derive_project_status",
    "is_phase_startable",
    "normalize_phases",
    "transition",
    "validate_phases",
    "NEXT_PHASE",
    "PHASE_DESCRIPTIONS",
    "PHASE_LABELS",
    "PHASE_SEQUENCE",
    "STATUS_LABELS",
    "default_phases",
    "next_phase",
    "previous_phase",
]
