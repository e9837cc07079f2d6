"""Health check endpoint."""
from fastapi import APIRouter, Depends

from translationflow import __version__
from translationflow.database import Database, get_database

router = APIRouter()


@router.get("/health")
async def health_check(db: Database = Depends(get_database)):
    """
    Health check endpoint.

    Returns 200 if all systems operational.
    """
    db_ok = await db.check_connection()

    return {
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "disconnected",
        "version": __version__
    }
