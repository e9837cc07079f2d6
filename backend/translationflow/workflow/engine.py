"""
Workflow engine.

Pure functions that validate and apply phase status transitions and
compute derived view state (progress, startability, aggregate status).
Nothing here performs I/O; persistence is the repository's job.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Protocol, Union

from translationflow.exceptions import PhaseTransitionError
from translationflow.models.enums import PhaseStatus, ProjectPhase, ProjectStatus
from translationflow.utils.logging import get_logger
from translationflow.workflow.phases import PHASE_SEQUENCE, previous_phase

logger = get_logger(__name__)

PhaseMapping = Mapping[Union[ProjectPhase, str], Union[PhaseStatus, str]]


class WorkflowState(Protocol):
    """Anything carrying a phase map and a current phase, e.g. a Project."""

    phases: Dict[str, str]
    current_phase: ProjectPhase


def normalize_phases(phases: PhaseMapping) -> Dict[ProjectPhase, PhaseStatus]:
    """
    Coerce a phase map to enum keys and values.

    Raises ValueError for unknown phase or status values and for maps that
    do not contain exactly the four canonical phases.
    """
    normalized = {ProjectPhase(phase): PhaseStatus(status) for phase, status in phases.items()}
    missing = [p.value for p in PHASE_SEQUENCE if p not in normalized]
    if missing or len(normalized) != len(PHASE_SEQUENCE):
        raise ValueError(f"Phase map must contain exactly the canonical phases; missing {missing}")
    return normalized


def validate_phases(phases: PhaseMapping) -> None:
    """Raise ValueError unless ``phases`` holds exactly the four canonical phases."""
    normalize_phases(phases)


def _phases_of(source: Union[WorkflowState, PhaseMapping]) -> Dict[ProjectPhase, PhaseStatus]:
    phases = source.phases if hasattr(source, "phases") else source
    return normalize_phases(phases)


def compute_progress(phases: Union[WorkflowState, PhaseMapping]) -> int:
    """
    Overall progress as a percentage of completed phases.

    In-progress phases carry no weight; the value depends only on the
    phase map, never on the current phase.
    """
    normalized = _phases_of(phases)
    completed = sum(1 for status in normalized.values() if status is PhaseStatus.COMPLETED)
    return int(round(completed / len(PHASE_SEQUENCE) * 100))


def is_phase_startable(project: Union[WorkflowState, PhaseMapping], phase: ProjectPhase) -> bool:
    """True for the first phase, otherwise iff the preceding phase is completed."""
    before = previous_phase(ProjectPhase(phase))
    if before is None:
        return True
    return _phases_of(project)[before] is PhaseStatus.COMPLETED


def is_backward(current: PhaseStatus, requested: PhaseStatus) -> bool:
    """Whether moving from ``current`` to ``requested`` undoes progress."""
    return PhaseStatus(requested).rank < PhaseStatus(current).rank


def transition(
    project: WorkflowState,
    phase: ProjectPhase,
    new_status: PhaseStatus,
    *,
    force: bool = False,
) -> WorkflowState:
    """
    Set the status of one phase and return the same project.

    Starting a phase makes it the current phase. Completing a phase does
    not start the next one. Moving a phase backwards raises
    PhaseTransitionError unless ``force`` is set. Startability is not
    checked here; see is_phase_startable. Timestamps are left to the
    repository.
    """
    phase = ProjectPhase(phase)
    new_status = PhaseStatus(new_status)
    phases = _phases_of(project)
    current = phases[phase]

    if is_backward(current, new_status) and not force:
        raise PhaseTransitionError(phase.value, current.value, new_status.value)

    phases[phase] = new_status
    # Assign a fresh dict so ORM change tracking notices the update
    project.phases = {p.value: phases[p].value for p in PHASE_SEQUENCE}
    if new_status is PhaseStatus.IN_PROGRESS:
        project.current_phase = phase

    logger.debug(
        "Phase transition applied",
        phase=phase.value,
        from_status=current.value,
        to_status=new_status.value,
        forced=force and is_backward(current, new_status),
    )
    return project


def derive_project_status(phases: Union[WorkflowState, PhaseMapping]) -> ProjectStatus:
    """Aggregate status: not started, completed, or active in between."""
    statuses = set(_phases_of(phases).values())
    if statuses == {PhaseStatus.NOT_STARTED}:
        return ProjectStatus.NOT_STARTED
    if statuses == {PhaseStatus.COMPLETED}:
        return ProjectStatus.COMPLETED
    return ProjectStatus.ACTIVE


@dataclass(frozen=True)
class ProjectStats:
    """Dashboard summary across a user's projects."""

    active_projects: int = 0
    pending_translations: int = 0
    completed_translations: int = 0
    total_languages: int = 0


_TRANSLATION_PHASES = (
    ProjectPhase.SUBTITLE_TRANSLATION,
    ProjectPhase.TRANSLATION_PROOFREADING,
)


def compute_project_stats(projects: Iterable[Any]) -> ProjectStats:
    """
    Summarize projects for the dashboard.

    A translation is pending while either translation phase is in
    progress, and completed once both are completed.
    """
    count = 0
    pending = 0
    completed = 0
    languages = set()

    for project in projects:
        count += 1
        phases = _phases_of(project)
        translation_statuses = [phases[p] for p in _TRANSLATION_PHASES]
        if PhaseStatus.IN_PROGRESS in translation_statuses:
            pending += 1
        if all(s is PhaseStatus.COMPLETED for s in translation_statuses):
            completed += 1
        languages.update(project.target_languages)
        languages.add(project.source_language)

    return ProjectStats(
        active_projects=count,
        pending_translations=pending,
        completed_translations=completed,
        total_languages=len(languages),
    )
