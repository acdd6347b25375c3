"""
Change markers for child tasks.

Marker detection is an optional capability. The builder is handed a
detector at construction time; NullMarkerDetector is the no-op default.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable

from forumsync.core.tasks.models import ChildTask, Marker
from forumsync.utils.dates import DEFAULT_TIMEZONE, parse_due_date


@runtime_checkable
class MarkerDetector(Protocol):
    """Protocol for components that tag tasks with change markers."""

    def detect(self, project_id: str, child: ChildTask, today: date) -> list[Marker]:
        """
        Return the markers for a child task.

        Args:
            project_id: Owning project id
            child: A valid child task
            today: Current date in the configured timezone

        Returns:
            Markers in display order (may be empty)
        """
        ...


class NullMarkerDetector:
    """Detector that never attaches markers."""

    def detect(self, project_id: str, child: ChildTask, today: date) -> list[Marker]:
        return []


class DeadlineMarkerDetector:
    """
    Tag incomplete tasks that are due soon or already overdue.

    Example:
        >>> detector = DeadlineMarkerDetector(window_days=3)
        >>> task = ChildTask(task_id="T1", due_date="2025-01-03", status="着手中")
        >>> detector.detect("P1", task, date(2025, 1, 1))
        [<Marker.DEADLINE: 'deadline'>]
    """

    def __init__(self, window_days: int, timezone: str = DEFAULT_TIMEZONE) -> None:
        if window_days < 0:
            raise ValueError("window_days must be non-negative")
        self.window_days = window_days
        self.timezone = timezone

    def detect(self, project_id: str, child: ChildTask, today: date) -> list[Marker]:
        if child.is_completed:
            return []
        due = parse_due_date(child.due_date, self.timezone)
        if due is None:
            return []
        if (due - today).days <= self.window_days:
            return [Marker.DEADLINE]
        return []
