"""
Snapshot data models for forumsync.

A ProjectSnapshot is the immutable, per-cycle view of one project that drives
message formatting and the thread-sync decision. Snapshots are rebuilt from
the data source every cycle and discarded afterwards.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from forumsync.core.tasks.models import ChildTask, InvalidChild, ProgressStatus


class CompletionMetrics(BaseModel):
    """
    Completion counts for a project.

    Example:
        >>> from datetime import datetime, timezone
        >>> m = CompletionMetrics(total=4, done=1, percentage=25,
        ...                       updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        >>> m.remaining
        3
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0, description="Number of child tasks, valid or not")
    done: int = Field(ge=0, description="Number of completed child tasks")
    percentage: int = Field(ge=0, le=100, description="Rounded done/total*100, 0 when empty")
    updated_at: datetime = Field(description="When the metrics were computed")

    @model_validator(mode="after")
    def check_done_within_total(self) -> CompletionMetrics:
        if self.done > self.total:
            raise ValueError(f"done ({self.done}) cannot exceed total ({self.total})")
        return self

    @property
    def remaining(self) -> int:
        return self.total - self.done


class ProjectSnapshot(BaseModel):
    """Aggregate view of one project for a single sync cycle."""

    model_config = ConfigDict(frozen=True)

    row_index: int = Field(description="Source row locator of the project row")
    project_id: str = Field(description="Project identifier")
    title: str = Field(default="", description="Project title")
    owner: str = Field(default="", description="Project owner")
    thread_id: str | None = Field(default=None, description="Existing forum thread id")
    timestamp: datetime = Field(description="When this snapshot was built")
    completion: CompletionMetrics
    progress_status: ProgressStatus = ProgressStatus.ON_SCHEDULE
    children: tuple[ChildTask, ...] = Field(
        default=(),
        description="Valid child tasks with markers, in source order",
    )
    invalid_children: tuple[InvalidChild, ...] = Field(
        default=(),
        description="Tasks demoted by validation, in source order",
    )

    @property
    def in_progress_children(self) -> list[ChildTask]:
        return [child for child in self.children if child.is_in_progress]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thread_name(self) -> str:
        """Forum thread name: ``"{title} | {percentage}%"``."""
        return f"{self.title} | {self.completion.percentage}%"
