"""Project CRUD operations."""

from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from translationflow.crud.video import VideoCRUD
from translationflow.exceptions import ProjectNotFoundError, VersionConflictError
from translationflow.models import (
    PhaseStatus,
    Project,
    ProjectPhase,
    ProjectStatus,
)
from translationflow.utils.logging import get_logger
from translationflow.workflow import default_phases, derive_project_status, transition
from translationflow.workflow.phases import FIRST_PHASE

logger = get_logger(__name__)

EDITABLE_FIELDS = frozenset({"name", "description", "source_language", "target_languages"})


class ProjectCRUD:
    """
    CRUD operations for projects.

    Holds the session it was constructed with; one instance per request.
    Database errors propagate unchanged to the caller.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        owner_id: str,
        name: str,
        description: str,
        source_language: str,
        target_languages: List[str],
    ) -> Project:
        """Create a new project with every phase not started."""
        project = Project(
            name=name,
            description=description,
            source_language=source_language,
            target_languages=list(target_languages),
            created_by=owner_id,
            phases=default_phases(),
            current_phase=FIRST_PHASE,
            version=1,
        )
        self.session.add(project)
        await self.session.commit()
        await self.session.refresh(project)

        logger.info("Project created", project_id=str(project.id), owner_id=owner_id)
        return project

    async def get(
        self,
        project_id: UUID,
        owner_id: Optional[str] = None,
        for_update: bool = False,
    ) -> Project:
        """
        Get project by ID.

        With ``owner_id`` set, projects of other owners are reported as
        missing too. ``for_update`` locks the row until commit so a
        version check and the write that follows cannot interleave with
        another writer.
        """
        stmt = select(Project).where(Project.id == project_id)
        if owner_id is not None:
            stmt = stmt.where(Project.created_by == owner_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        project = result.scalar_one_or_none()
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        return project

    async def list_by_owner(
        self, owner_id: str, status: Optional[ProjectStatus] = None
    ) -> List[Project]:
        """List projects for a user, most recently updated first."""
        stmt = (
            select(Project)
            .where(Project.created_by == owner_id)
            .order_by(Project.updated_at.desc(), Project.created_at.desc())
        )
        result = await self.session.execute(stmt)
        projects = list(result.scalars().all())

        if status is not None:
            projects = [p for p in projects if derive_project_status(p) == status]
        return projects

    async def update(
        self,
        project_id: UUID,
        fields: Mapping[str, Any],
        owner_id: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Project:
        """
        Merge descriptive fields into a project.

        Phase state is never changed here; use update_phase_status.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
        nulls = sorted(key for key, value in fields.items() if value is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")

        project = await self.get(
            project_id, owner_id=owner_id, for_update=expected_version is not None
        )
        self._check_version(project, expected_version)

        source = fields.get("source_language", project.source_language)
        targets = fields.get("target_languages", project.target_languages)
        if source in targets:
            raise ValueError("Target languages cannot include the source language")

        for key, value in fields.items():
            setattr(project, key, list(value) if key == "target_languages" else value)

        await self._save(project)
        logger.info(
            "Project updated",
            project_id=str(project.id),
            fields=sorted(fields),
            version=project.version,
        )
        return project

    async def update_phase_status(
        self,
        project_id: UUID,
        phase: ProjectPhase,
        status: PhaseStatus,
        owner_id: Optional[str] = None,
        force: bool = False,
        expected_version: Optional[int] = None,
    ) -> Project:
        """Apply a workflow transition to a stored project and persist it."""
        project = await self.get(
            project_id, owner_id=owner_id, for_update=expected_version is not None
        )
        self._check_version(project, expected_version)

        transition(project, phase, status, force=force)
        await self._save(project)

        logger.info(
            "Phase status updated",
            project_id=str(project.id),
            phase=ProjectPhase(phase).value,
            status=PhaseStatus(status).value,
            current_phase=project.current_phase.value,
            version=project.version,
        )
        return project

    async def delete(self, project_id: UUID, owner_id: Optional[str] = None) -> None:
        """Delete a project together with all of its videos."""
        project = await self.get(project_id, owner_id=owner_id)

        videos_deleted = await VideoCRUD(self.session).delete_for_project(
            project.id, commit=False
        )
        await self.session.execute(delete(Project).where(Project.id == project.id))
        await self.session.commit()

        logger.info(
            "Project deleted",
            project_id=str(project_id),
            videos_deleted=videos_deleted,
        )

    async def _save(self, project: Project) -> None:
        project.version += 1
        project.touch()
        self.session.add(project)
        await self.session.commit()
        await self.session.refresh(project)

    @staticmethod
    def _check_version(project: Project, expected_version: Optional[int]) -> None:
        if expected_version is not None and expected_version != project.version:
            raise VersionConflictError(str(project.id), expected_version, project.version)
