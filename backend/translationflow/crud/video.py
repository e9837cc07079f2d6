"""Video CRUD operations."""

from typing import Any, List, Mapping
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from translationflow.exceptions import ProjectNotFoundError, VideoNotFoundError
from translationflow.models import Project, Video, VideoStatus
from translationflow.utils.logging import get_logger

logger = get_logger(__name__)

# Identity, ownership and timestamps are never client-editable
PROTECTED_FIELDS = frozenset(
    {"id", "project_id", "created_by", "created_at", "updated_at", "original_translated_content"}
)

# Columns declared NOT NULL on Video
REQUIRED_FIELDS = frozenset(
    {"title", "source_file_name", "source_language", "target_language", "status"}
)


class VideoCRUD:
    """CRUD operations for the videos of a project."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _ensure_project(self, project_id: UUID) -> None:
        result = await self.session.execute(
            select(Project.id).where(Project.id == project_id)
        )
        if result.scalar_one_or_none() is None:
            raise ProjectNotFoundError(str(project_id))

    async def create(
        self, project_id: UUID, form: Mapping[str, Any], user_id: str
    ) -> Video:
        """Create a pending video inside an existing project from ``form`` fields."""
        protected = set(form) & PROTECTED_FIELDS
        if protected:
            raise ValueError(f"Fields cannot be set: {', '.join(sorted(protected))}")

        await self._ensure_project(project_id)

        video = Video(
            **form,
            project_id=project_id,
            created_by=user_id,
            status=VideoStatus.PENDING,
        )
        self.session.add(video)
        await self.session.commit()
        await self.session.refresh(video)

        logger.info("Video created", project_id=str(project_id), video_id=str(video.id))
        return video

    async def get(self, project_id: UUID, video_id: UUID) -> Video:
        """Get a video by ID, scoped to its project."""
        result = await self.session.execute(
            select(Video).where(Video.id == video_id, Video.project_id == project_id)
        )
        video = result.scalar_one_or_none()
        if video is None:
            raise VideoNotFoundError(str(video_id), str(project_id))
        return video

    async def list_for_project(self, project_id: UUID) -> List[Video]:
        """List a project's videos, most recently updated first."""
        await self._ensure_project(project_id)

        result = await self.session.execute(
            select(Video)
            .where(Video.project_id == project_id)
            .order_by(Video.updated_at.desc(), Video.created_at.desc())
        )
        return list(result.scalars().all())

    async def count_for_project(self, project_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(Video.id)).where(Video.project_id == project_id)
        )
        return result.scalar() or 0

    async def update(
        self, project_id: UUID, video_id: UUID, fields: Mapping[str, Any]
    ) -> Video:
        """
        Merge fields into a video.

        The first time the translated subtitles are replaced, the previous
        text is kept in ``original_translated_content`` so proofreading
        edits can be compared against it.
        """
        protected = set(fields) & PROTECTED_FIELDS
        if protected:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(protected))}")
        nulls = sorted(key for key in REQUIRED_FIELDS & set(fields) if fields[key] is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")

        video = await self.get(project_id, video_id)

        new_translation = fields.get("translated_file_content")
        if (
            new_translation is not None
            and video.translated_file_content is not None
            and video.original_translated_content is None
            and new_translation != video.translated_file_content
        ):
            video.original_translated_content = video.translated_file_content

        for key, value in fields.items():
            setattr(video, key, value)

        video.touch()
        self.session.add(video)
        await self.session.commit()
        await self.session.refresh(video)

        logger.info(
            "Video updated",
            project_id=str(project_id),
            video_id=str(video_id),
            fields=sorted(fields),
        )
        return video

    async def update_status(
        self, project_id: UUID, video_id: UUID, status: VideoStatus
    ) -> Video:
        return await self.update(project_id, video_id, {"status": VideoStatus(status)})

    async def delete(self, project_id: UUID, video_id: UUID) -> None:
        """Delete a single video."""
        video = await self.get(project_id, video_id)
        await self.session.execute(delete(Video).where(Video.id == video.id))
        await self.session.commit()
        logger.info("Video deleted", project_id=str(project_id), video_id=str(video_id))

    async def delete_for_project(self, project_id: UUID, commit: bool = True) -> int:
        """Delete every video of a project; returns how many were removed."""
        result = await self.session.execute(
            delete(Video).where(Video.project_id == project_id)
        )
        if commit:
            await self.session.commit()
        return result.rowcount
