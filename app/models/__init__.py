# SQLModel definitions: imported here to ensure metadata is populated for create_all.
from .base import UUIDMixin, TimestampMixin  # noqa: F401
from .task import TaskRecord  # noqa: F401
