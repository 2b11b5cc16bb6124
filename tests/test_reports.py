"""
Tests for text reports, status statistics and duration analysis.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from app.domain.task import Task
from app.services.reports import (
    analyze_durations,
    classify_duration,
    describe,
    generate_report,
    status_statistics,
    summarize_task,
)
from taskdesk_shared.schemas.common import TaskStatus
from taskdesk_shared.schemas.tasks import TaskDuration

T0 = datetime(2026, 5, 4, 8, 0, tzinfo=timezone.utc)


def _task(title, status=TaskStatus.PENDING, created=T0):
    task = Task.create(title, "", now=created)
    return task.with_status(status, now=created) if status != TaskStatus.PENDING else task


class TestReport:
    def test_lists_every_status(self):
        tasks = [
            _task("a"),
            _task("b", TaskStatus.IN_PROGRESS),
            _task("c", TaskStatus.BLOCKED),
            _task("d", TaskStatus.COMPLETED),
            _task("e", TaskStatus.COMPLETED),
        ]
        report = generate_report(tasks, T0)

        assert report.startswith("TASK MANAGEMENT REPORT")
        assert "Total Tasks: 5" in report
        assert "Pending: 1" in report
        assert "In Progress: 1" in report
        assert "Blocked: 1" in report
        assert "Completed: 2" in report
        assert "Last Updated: 2026-05-04T08:00:00+00:00" in report

    def test_empty(self):
        report = generate_report([], T0)
        assert "Total Tasks: 0" in report
        assert "Blocked: 0" in report


class TestStatusStatistics:
    def test_breakdown(self):
        tasks = [
            _task("a", created=T0),
            _task("b", created=T0 + timedelta(days=2)),
            _task("c", TaskStatus.BLOCKED, created=T0 + timedelta(days=1)),
        ]
        stats = status_statistics(tasks)

        assert stats.total_tasks == 3
        by_status = {b.status: b for b in stats.status_breakdown}
        assert set(by_status) == {TaskStatus.PENDING, TaskStatus.BLOCKED}
        assert by_status[TaskStatus.PENDING].count == 2
        assert by_status[TaskStatus.PENDING].oldest_task == T0
        assert by_status[TaskStatus.PENDING].newest_task == T0 + timedelta(days=2)
        assert sum(b.count for b in stats.status_breakdown) == stats.total_tasks

    def test_empty(self):
        stats = status_statistics([])
        assert stats.total_tasks == 0
        assert stats.status_breakdown == []


class TestDurations:
    def test_thresholds(self):
        assert classify_duration(timedelta(minutes=59)) == "Quick task"
        assert classify_duration(timedelta(hours=1)) == "Medium task"
        assert classify_duration(timedelta(hours=7, minutes=59)) == "Medium task"
        assert classify_duration(timedelta(hours=8)) == "Long task"

    def test_analyze(self):
        task_id = uuid.uuid4()
        lines = analyze_durations([TaskDuration(id=task_id, duration=timedelta(minutes=5))])
        assert lines == [f"Task {task_id}: Quick task"]


class TestDescriptions:
    def test_summary(self):
        assert summarize_task(_task("Ship it", TaskStatus.BLOCKED)) == "Task: Ship it, Status: BLOCKED"

    def test_describe(self):
        assert describe(_task("Ship it")) == "Task: Ship it (PENDING)"
        assert describe("milk") == "Search for: milk"
        assert describe(42) == "Unknown object"
