"""
Task data models for forumsync.

Defines Pydantic models for project (parent) rows, child task rows and the
derived status enums used by the snapshot pipeline.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Lifecycle status of a child task."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"

    @classmethod
    def from_label(cls, label: str | None) -> TaskStatus | None:
        """
        Parse a status cell into a TaskStatus.

        Accepts the enum values, hyphen/space variants ("in-progress",
        "In Progress") and the sheet's native labels.

        Returns:
            Matching TaskStatus, or None if the text is not recognized
        """
        if not label:
            return None
        text = label.strip()
        if text in _NATIVE_LABELS:
            return _NATIVE_LABELS[text]
        key = text.lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            return None


_NATIVE_LABELS: dict[str, TaskStatus] = {
    "未着手": TaskStatus.NOT_STARTED,
    "着手中": TaskStatus.IN_PROGRESS,
    "完了": TaskStatus.COMPLETED,
    "保留": TaskStatus.ON_HOLD,
}


class ProgressStatus(str, Enum):
    """Schedule status of a project, derived from its incomplete tasks."""

    ON_SCHEDULE = "on_schedule"
    DELAYED = "delayed"

    @property
    def label(self) -> str:
        """Display label used in status posts."""
        return "On schedule" if self is ProgressStatus.ON_SCHEDULE else "Delayed"


class Marker(str, Enum):
    """Presentational tag attached to a task by a change detector."""

    DEADLINE = "deadline"
    STATUS_CHANGED = "statusChanged"


class ParentRow(BaseModel):
    """
    A project row from the data source.

    Example:
        >>> ParentRow(row_index=0, project_id="P1", title="Launch", thread_id="")
        ParentRow(row_index=0, project_id='P1', title='Launch', owner='', thread_id=None)
    """

    model_config = ConfigDict(frozen=True)

    row_index: int = Field(description="0-based data row index in the source")
    project_id: str = Field(description="Project identifier, unique per sync pass")
    title: str = Field(default="", description="Project title")
    owner: str = Field(default="", description="Project owner")
    thread_id: str | None = Field(
        default=None,
        description="Forum thread id, None when no thread exists yet",
    )

    @field_validator("thread_id", mode="before")
    @classmethod
    def blank_thread_is_none(cls, v: object) -> object:
        if v is None:
            return None
        text = str(v).strip()
        return text or None


class ChildTask(BaseModel):
    """
    A task row belonging to a project.

    All fields are kept as the raw (stripped) cell text; a task with any
    required field blank is demoted to an InvalidChild by the validator.
    """

    model_config = ConfigDict(frozen=True)

    row_index: int | None = Field(default=None, description="0-based data row index")
    task_id: str = Field(default="", description="Task identifier")
    project_id: str = Field(default="", description="Owning project identifier")
    title: str = Field(default="", description="Task title")
    due_date: str = Field(default="", description="Due date as entered in the sheet")
    status: str = Field(default="", description="Status text as entered in the sheet")
    assignee: str = Field(default="", description="Assignee, optional")
    completed_at: str = Field(default="", description="Completion timestamp, optional")
    notes: str = Field(default="", description="Free-form notes, optional")
    markers: tuple[Marker, ...] = Field(
        default=(),
        description="Change markers attached by the marker detector",
    )

    @property
    def status_kind(self) -> TaskStatus | None:
        """Parsed status, None when the text is not a known status."""
        return TaskStatus.from_label(self.status)

    @property
    def is_completed(self) -> bool:
        return self.status_kind is TaskStatus.COMPLETED

    @property
    def is_in_progress(self) -> bool:
        return self.status_kind is TaskStatus.IN_PROGRESS


class InvalidChild(BaseModel):
    """A task that failed required-field validation, kept for reporting."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    title: str = ""
    reason: str
