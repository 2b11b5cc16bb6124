"""Task table. Priority is derived from status on read and has no column."""

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class TaskRecord(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "tasks"

    title: str = Field(nullable=False)
    description: str = Field(nullable=False, default="", sa_type=sa.Text)
    status: str = Field(nullable=False, default="PENDING", index=True)  # PENDING | IN_PROGRESS | BLOCKED | COMPLETED
