"""Shared FastAPI dependencies for the v1 routers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from translationflow.crud.project import ProjectCRUD
from translationflow.crud.video import VideoCRUD
from translationflow.database import get_session


def get_project_crud(session: AsyncSession = Depends(get_session)) -> ProjectCRUD:
    return ProjectCRUD(session)


def get_video_crud(session: AsyncSession = Depends(get_session)) -> VideoCRUD:
    return VideoCRUD(session)
