"""Project management endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from translationflow.api.dependencies import get_project_crud, get_video_crud
from translationflow.auth import AuthenticatedUser, get_current_user
from translationflow.crud.project import ProjectCRUD
from translationflow.crud.video import VideoCRUD
from translationflow.models import ProjectPhase, ProjectStatus
from translationflow.schemas.project import (
    PhaseStatusUpdateRequest,
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectStatsResponse,
    ProjectUpdateRequest,
)
from translationflow.workflow import compute_project_stats

router = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Create a new project positioned at the first phase."""
    project = await projects.create(
        owner_id=current_user.user_id,
        name=request.name,
        description=request.description,
        source_language=request.source_language,
        target_languages=request.target_languages,
    )
    return ProjectResponse.from_project(project)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    projects: ProjectCRUD = Depends(get_project_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """List the current user's projects, most recently updated first."""
    items = await projects.list_by_owner(current_user.user_id, status=status_filter)
    return ProjectListResponse(
        items=[ProjectResponse.from_project(p) for p in items],
        total=len(items),
    )


@router.get("/stats", response_model=ProjectStatsResponse)
async def project_stats(
    projects: ProjectCRUD = Depends(get_project_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Dashboard statistics across the current user's projects."""
    items = await projects.list_by_owner(current_user.user_id)
    stats = compute_project_stats(items)
    return ProjectStatsResponse(
        active_projects=stats.active_projects,
        pending_translations=stats.pending_translations,
        completed_translations=stats.completed_translations,
        total_languages=stats.total_languages,
    )


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: UUID,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Get project details with the per-phase workflow view."""
    project = await projects.get(project_id, owner_id=current_user.user_id)
    video_count = await videos.count_for_project(project.id)
    return ProjectDetailResponse.from_project(project, video_count=video_count)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    request: ProjectUpdateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Edit name, description or languages. Phase state is kept."""
    project = await projects.update(
        project_id,
        request.changes(),
        owner_id=current_user.user_id,
        expected_version=request.expected_version,
    )
    return ProjectResponse.from_project(project)


@router.put("/{project_id}/phases/{phase}", response_model=ProjectDetailResponse)
async def update_phase_status(
    project_id: UUID,
    phase: ProjectPhase,
    request: PhaseStatusUpdateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Change the status of one phase.

    Starting a phase makes it the current phase. Moving a phase backwards
    requires ``force``.
    """
    project = await projects.update_phase_status(
        project_id,
        phase,
        request.status,
        owner_id=current_user.user_id,
        force=request.force,
        expected_version=request.expected_version,
    )
    video_count = await videos.count_for_project(project.id)
    return ProjectDetailResponse.from_project(project, video_count=video_count)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    projects: ProjectCRUD = Depends(get_project_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Delete a project and all of its videos."""
    await projects.delete(project_id, owner_id=current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
