"""Domain exceptions raised by the workflow engine and repositories."""

from typing import Optional


class TranslationFlowError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An application error occurred"):
        self.message = message
        super().__init__(self.message)


class ProjectNotFoundError(TranslationFlowError):
    """Raised when a project does not exist or belongs to another user."""

    def __init__(self, project_id: Optional[str] = None):
        message = f"Project with ID {project_id} not found" if project_id else "Project not found"
        self.project_id = project_id
        super().__init__(message)


class VideoNotFoundError(TranslationFlowError):
    """Raised when a video does not exist within the given project."""

    def __init__(self, video_id: Optional[str] = None, project_id: Optional[str] = None):
        if video_id and project_id:
            message = f"Video with ID {video_id} not found in project {project_id}"
        elif video_id:
            message = f"Video with ID {video_id} not found"
        else:
            message = "Video not found"
        self.video_id = video_id
        self.project_id = project_id
        super().__init__(message)


class PhaseTransitionError(TranslationFlowError):
    """Raised when a phase status change moves backwards without confirmation."""

    def __init__(self, phase: str, current: str, requested: str):
        self.phase = phase
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move phase '{phase}' from '{current}' back to '{requested}' "
            "without force"
        )


class VersionConflictError(TranslationFlowError):
    """Raised when an update was based on a stale project version."""

    def __init__(self, project_id: str, expected: int, actual: int):
        self.project_id = project_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Project {project_id} is at version {actual}, expected {expected}"
        )
