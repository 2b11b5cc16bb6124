from enum import Enum
from typing import List

class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    COMPLETED = "COMPLETED"

class TaskPriority(Enum):
    """Derived urgency. Each member carries its (level, label) pair."""

    LOW = (1, "Low")
    MEDIUM = (2, "Medium")
    HIGH = (3, "High")

    def __init__(self, level: int, label: str):
        self.level = level
        self.label = label

    @classmethod
    def from_value(cls, value: int) -> "TaskPriority":
        for priority in cls:
            if priority.level == value:
                return priority
        raise ValueError(f"Invalid priority value: {value}")

# Total over TaskStatus: every status has exactly one priority
STATUS_PRIORITY: dict["TaskStatus", "TaskPriority"] = {
    TaskStatus.PENDING: TaskPriority.LOW,
    TaskStatus.IN_PROGRESS: TaskPriority.MEDIUM,
    TaskStatus.BLOCKED: TaskPriority.HIGH,
    TaskStatus.COMPLETED: TaskPriority.LOW,
}

def priority_for_status(status: TaskStatus) -> TaskPriority:
    return STATUS_PRIORITY[TaskStatus(status)]

def statuses_for_priority(priority: TaskPriority) -> List[TaskStatus]:
    return [s for s, p in STATUS_PRIORITY.items() if p is priority]

