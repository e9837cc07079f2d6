"""
Base model configuration for all SQLModel classes.
Provides common fields and utilities.
"""
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class BaseUUIDModel(SQLModel):
    """
    Base model with UUID primary key and timestamps.

    All database models should inherit from this.
    """
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        index=True,
        nullable=False
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True
    )

    def touch(self) -> None:
        """Bump updated_at, never moving it backwards."""
        now = utc_now()
        current = self.updated_at
        if current is not None and current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self.updated_at = now if current is None or now > current else current
