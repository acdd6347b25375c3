"""Tests for task data models."""

import pytest
from pydantic import ValidationError

from forumsync.core.tasks.models import (
    ChildTask,
    Marker,
    ParentRow,
    ProgressStatus,
    TaskStatus,
)


class TestTaskStatus:
    """Test suite for TaskStatus parsing."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("completed", TaskStatus.COMPLETED),
            ("in-progress", TaskStatus.IN_PROGRESS),
            ("In Progress", TaskStatus.IN_PROGRESS),
            ("not_started", TaskStatus.NOT_STARTED),
            ("  on-hold  ", TaskStatus.ON_HOLD),
            ("未着手", TaskStatus.NOT_STARTED),
            ("着手中", TaskStatus.IN_PROGRESS),
            ("完了", TaskStatus.COMPLETED),
            ("保留", TaskStatus.ON_HOLD),
        ],
    )
    def test_from_label(self, label: str, expected: TaskStatus) -> None:
        """Test recognized status labels."""
        assert TaskStatus.from_label(label) is expected

    @pytest.mark.parametrize("label", [None, "", "   ", "done-ish", "completed!"])
    def test_from_label_unknown(self, label: str | None) -> None:
        """Test that unknown or blank labels yield None."""
        assert TaskStatus.from_label(label) is None


class TestProgressStatus:
    def test_labels(self) -> None:
        assert ProgressStatus.ON_SCHEDULE.label == "On schedule"
        assert ProgressStatus.DELAYED.label == "Delayed"


class TestParentRow:
    """Test suite for ParentRow."""

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_thread_id_is_none(self, raw: str | None) -> None:
        """Test that blank thread ids normalize to None."""
        row = ParentRow(row_index=0, project_id="P1", thread_id=raw)
        assert row.thread_id is None

    def test_thread_id_is_stripped(self) -> None:
        row = ParentRow(row_index=0, project_id="P1", thread_id=" 123 ")
        assert row.thread_id == "123"

    def test_frozen(self) -> None:
        """Test that parent rows are immutable."""
        row = ParentRow(row_index=0, project_id="P1")
        with pytest.raises(ValidationError):
            row.title = "changed"  # type: ignore[misc]


class TestChildTask:
    """Test suite for ChildTask."""

    def test_status_properties(self) -> None:
        """Test completed/in-progress flags derive from the status text."""
        done = ChildTask(task_id="T1", status="完了")
        active = ChildTask(task_id="T2", status="in-progress")
        other = ChildTask(task_id="T3", status="whatever")

        assert done.is_completed and not done.is_in_progress
        assert active.is_in_progress and not active.is_completed
        assert other.status_kind is None
        assert not other.is_completed and not other.is_in_progress

    def test_markers_default_empty(self) -> None:
        assert ChildTask(task_id="T1").markers == ()

    def test_model_copy_with_markers(self) -> None:
        """Test that markers are attached on a copy; the source task is unchanged."""
        child = ChildTask(task_id="T1")
        marked = child.model_copy(update={"markers": (Marker.DEADLINE,)})

        assert marked.markers == (Marker.DEADLINE,)
        assert child.markers == ()
