"""Flat CSV export of merged tasks and summaries."""

import csv
from pathlib import Path

from taskmatrix.core.merge import MergedTask
from taskmatrix.core.summary import Summary

TASKS_FILE = "combined_tasks.csv"
QUADRANT_FILE = "quadrant_summary.csv"
SOURCE_FILE = "source_summary.csv"

TASK_FIELDS = [
    "source",
    "title",
    "urgency",
    "importance",
    "enjoyment",
    "duration_hours",
    "due_or_end",
    "status",
    "project_context",
    "description",
    "category",
    "quadrant",
    "enjoyment_bucket",
]


def task_row(task: MergedTask) -> dict:
    """Serialize a merged task to plain values."""
    return {
        "source": task.source,
        "title": task.title,
        "urgency": task.urgency,
        "importance": task.importance,
        "enjoyment": task.enjoyment,
        "duration_hours": task.duration_hours,
        "due_or_end": task.due_or_end.isoformat() if task.due_or_end else None,
        "status": task.status,
        "project_context": task.project_context,
        "description": task.description,
        "category": task.category,
        "quadrant": task.quadrant.value,
        "enjoyment_bucket": task.enjoyment_bucket.value,
    }


def write_tasks(tasks: list[MergedTask], path: Path) -> Path:
    """Write one row per merged task."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=TASK_FIELDS)
        writer.writeheader()
        for task in tasks:
            writer.writerow(task_row(task))
    return path


def write_summary(summary: Summary, export_dir: Path) -> list[Path]:
    """Write one row per quadrant and per source group."""
    export_dir.mkdir(parents=True, exist_ok=True)

    quadrant_path = export_dir / QUADRANT_FILE
    with open(quadrant_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["quadrant", "count", "avg_duration", "total_duration", "avg_enjoyment"])
        for row in summary.by_quadrant:
            writer.writerow([row.quadrant.value, row.count, row.avg_duration, row.total_duration, row.avg_enjoyment])

    source_path = export_dir / SOURCE_FILE
    with open(source_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["source", "count", "avg_urgency", "avg_importance"])
        for row in summary.by_source:
            writer.writerow([row.source, row.count, row.avg_urgency, row.avg_importance])

    return [quadrant_path, source_path]


def export_all(tasks: list[MergedTask], summary: Summary, export_dir: Path | str) -> list[Path]:
    """Write the task table and summaries; header-only files when there are no tasks."""
    export_dir = Path(export_dir).expanduser()
    return [write_tasks(tasks, export_dir / TASKS_FILE), *write_summary(summary, export_dir)]
