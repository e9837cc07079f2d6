"""Video endpoints, nested under a project."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from translationflow.api.dependencies import get_project_crud, get_video_crud
from translationflow.auth import AuthenticatedUser, get_current_user
from translationflow.crud.project import ProjectCRUD
from translationflow.crud.video import VideoCRUD
from translationflow.schemas.video import (
    VideoCreateRequest,
    VideoListResponse,
    VideoResponse,
    VideoStatusUpdateRequest,
    VideoUpdateRequest,
)

router = APIRouter()


@router.post(
    "/{project_id}/videos",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_video(
    project_id: UUID,
    request: VideoCreateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Add a video to a project. New videos start as pending."""
    await projects.get(project_id, owner_id=current_user.user_id)
    video = await videos.create(
        project_id, request.model_dump(), current_user.user_id
    )
    return VideoResponse.model_validate(video)


@router.get("/{project_id}/videos", response_model=VideoListResponse)
async def list_videos(
    project_id: UUID,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """List a project's videos, most recently updated first."""
    await projects.get(project_id, owner_id=current_user.user_id)
    items = await videos.list_for_project(project_id)
    return VideoListResponse(
        items=[VideoResponse.model_validate(v) for v in items],
        total=len(items),
    )


@router.get("/{project_id}/videos/{video_id}", response_model=VideoResponse)
async def get_video(
    project_id: UUID,
    video_id: UUID,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    await projects.get(project_id, owner_id=current_user.user_id)
    video = await videos.get(project_id, video_id)
    return VideoResponse.model_validate(video)


@router.patch("/{project_id}/videos/{video_id}", response_model=VideoResponse)
async def update_video(
    project_id: UUID,
    video_id: UUID,
    request: VideoUpdateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Update video fields; unset fields are left unchanged."""
    await projects.get(project_id, owner_id=current_user.user_id)
    video = await videos.update(project_id, video_id, request.changes())
    return VideoResponse.model_validate(video)


@router.put("/{project_id}/videos/{video_id}/status", response_model=VideoResponse)
async def update_video_status(
    project_id: UUID,
    video_id: UUID,
    request: VideoStatusUpdateRequest,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    await projects.get(project_id, owner_id=current_user.user_id)
    video = await videos.update_status(project_id, video_id, request.status)
    return VideoResponse.model_validate(video)


@router.delete(
    "/{project_id}/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_video(
    project_id: UUID,
    video_id: UUID,
    projects: ProjectCRUD = Depends(get_project_crud),
    videos: VideoCRUD = Depends(get_video_crud),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    await projects.get(project_id, owner_id=current_user.user_id)
    await videos.delete(project_id, video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
