"""
Read-only reporting over a snapshot of tasks: text report, per-status
statistics, duration classification and short descriptions.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, Iterable, Sequence

from app.domain.task import Task
from taskdesk_shared.schemas.common import TaskStatus
from taskdesk_shared.schemas.tasks import StatusBreakdown, TaskDuration, TaskStatusStatistics

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.BLOCKED: "Blocked",
    TaskStatus.COMPLETED: "Completed",
}

QUICK_TASK_LIMIT = timedelta(hours=1)
MEDIUM_TASK_LIMIT = timedelta(hours=8)


def generate_report(tasks: Sequence[Task], now: datetime) -> str:
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1

    lines = [
        "TASK MANAGEMENT REPORT",
        "----------------------",
        f"Total Tasks: {len(tasks)}",
    ]
    lines += [f"{STATUS_LABELS[s]}: {counts[s]}" for s in TaskStatus]
    lines += ["", f"Last Updated: {now.isoformat(timespec='seconds')}", ""]
    return "\n".join(lines)


def status_statistics(tasks: Sequence[Task]) -> TaskStatusStatistics:
    """Count plus oldest/newest creation time for each status that occurs."""
    by_status: dict[TaskStatus, list[Task]] = defaultdict(list)
    for task in tasks:
        by_status[task.status].append(task)

    breakdown = []
    for status in TaskStatus:
        group = by_status.get(status)
        if not group:
            continue
        created = [t.created_at for t in group]
        breakdown.append(
            StatusBreakdown(
                status=status,
                count=len(group),
                oldest_task=min(created),
                newest_task=max(created),
            )
        )
    return TaskStatusStatistics(total_tasks=len(tasks), status_breakdown=breakdown)


def classify_duration(duration: timedelta) -> str:
    if duration < QUICK_TASK_LIMIT:
        return "Quick task"
    if duration < MEDIUM_TASK_LIMIT:
        return "Medium task"
    return "Long task"


def analyze_durations(items: Iterable[TaskDuration]) -> list[str]:
    return [f"Task {item.id}: {classify_duration(item.duration)}" for item in items]


def summarize_task(task: Task) -> str:
    return f"Task: {task.title}, Status: {task.status.value}"


def describe(obj: Any) -> str:
    if isinstance(obj, Task):
        return f"Task: {obj.title} ({obj.status.value})"
    if isinstance(obj, str):
        return f"Search for: {obj}"
    return "Unknown object"
