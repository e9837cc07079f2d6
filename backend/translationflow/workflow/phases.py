"""
Static phase model for the translation workflow.

Phases run in a fixed linear order; nothing here is computed at runtime.
"""

from typing import Dict, Optional, Tuple

from translationflow.models.enums import PhaseStatus, ProjectPhase

PHASE_SEQUENCE: Tuple[ProjectPhase, ...] = (
    ProjectPhase.SUBTITLE_TRANSLATION,
    ProjectPhase.TRANSLATION_PROOFREADING,
    ProjectPhase.AUDIO_PRODUCTION,
    ProjectPhase.AUDIO_REVIEW,
)

FIRST_PHASE = PHASE_SEQUENCE[0]

PHASE_LABELS: Dict[ProjectPhase, str] = {
    ProjectPhase.SUBTITLE_TRANSLATION: "Subtitle Translation",
    ProjectPhase.TRANSLATION_PROOFREADING: "Translation Proofreading",
    ProjectPhase.AUDIO_PRODUCTION: "Audio Production",
    ProjectPhase.AUDIO_REVIEW: "Audio Review",
}

PHASE_DESCRIPTIONS: Dict[ProjectPhase, str] = {
    ProjectPhase.SUBTITLE_TRANSLATION: "Translate subtitles from source language to target languages",
    ProjectPhase.TRANSLATION_PROOFREADING: "Review and finalize translations",
    ProjectPhase.AUDIO_PRODUCTION: "Record audio for the translated content",
    ProjectPhase.AUDIO_REVIEW: "Review audio recordings and finalize",
}

STATUS_LABELS: Dict[PhaseStatus, str] = {
    PhaseStatus.NOT_STARTED: "Not Started",
    PhaseStatus.IN_PROGRESS: "In Progress",
    PhaseStatus.COMPLETED: "Completed",
}

NEXT_PHASE: Dict[ProjectPhase, Optional[ProjectPhase]] = {
    phase: (PHASE_SEQUENCE[i + 1] if i + 1 < len(PHASE_SEQUENCE) else None)
    for i, phase in enumerate(PHASE_SEQUENCE)
}


def phase_index(phase: ProjectPhase) -> int:
    """Zero-based position of a phase in the canonical sequence."""
    return PHASE_SEQUENCE.index(ProjectPhase(phase))


def next_phase(phase: ProjectPhase) -> Optional[ProjectPhase]:
    """Phase that follows ``phase``, or None for the terminal phase."""
    return NEXT_PHASE[ProjectPhase(phase)]


def previous_phase(phase: ProjectPhase) -> Optional[ProjectPhase]:
    """Phase that precedes ``phase``, or None for the first phase."""
    index = phase_index(phase)
    return PHASE_SEQUENCE[index - 1] if index > 0 else None


def default_phases() -> Dict[str, str]:
    """Phase map for a new project: every phase not started."""
    return {phase.value: PhaseStatus.NOT_STARTED.value for phase in PHASE_SEQUENCE}
