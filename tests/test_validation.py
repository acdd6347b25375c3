"""Tests for required-field validation."""

from factories import make_child
from forumsync.core.tasks.models import ChildTask
from forumsync.core.tasks.validation import (
    REQUIRED_TASK_FIELDS,
    describe_missing,
    has_value,
    missing_fields,
    partition,
)


class TestHasValue:
    def test_blank_values(self) -> None:
        assert not has_value(None)
        assert not has_value("")
        assert not has_value("  \t ")

    def test_present_values(self) -> None:
        assert has_value("x")
        assert has_value(0)


class TestMissingFields:
    """Test suite for missing_fields."""

    def test_model_attributes(self) -> None:
        """Test missing fields on a model, in the order requested."""
        child = ChildTask(task_id="T1", title="", due_date="", status="完了")
        assert missing_fields(child, REQUIRED_TASK_FIELDS) == ["title", "due_date"]

    def test_mapping(self) -> None:
        """Test that mappings are checked by key."""
        row = {"task_id": "T1", "title": "  "}
        assert missing_fields(row, ["task_id", "title", "status"]) == ["title", "status"]


class TestDescribeMissing:
    def test_uses_labels_when_available(self) -> None:
        """Test that display labels replace keys, falling back to the key."""
        text = describe_missing(["title", "due_date"], {"title": "Task name"})
        assert text == "Missing required fields: Task name, due_date"

    def test_without_labels(self) -> None:
        assert describe_missing(["status"]) == "Missing required fields: status"


class TestPartition:
    """Test suite for partition."""

    def test_all_valid(self) -> None:
        children = [make_child("T1"), make_child("T2")]
        valid, invalid = partition(children)

        assert valid == children
        assert invalid == []

    def test_invalid_child_reason_lists_every_missing_field(self) -> None:
        """Test that one reason names all missing fields by label."""
        child = ChildTask(task_id="T9", title="Write docs", due_date="", status="")
        labels = {"due_date": "Due", "status": "Status"}

        valid, invalid = partition([child], labels=labels)

        assert valid == []
        assert len(invalid) == 1
        assert invalid[0].task_id == "T9"
        assert invalid[0].title == "Write docs"
        assert invalid[0].reason == "Missing required fields: Due, Status"

    def test_blank_task_id_becomes_unknown(self) -> None:
        child = ChildTask(task_id="", title="Orphan", due_date="2025-01-01", status="完了")
        _, invalid = partition([child])
        assert invalid[0].task_id == "unknown"

    def test_disjoint_cover_preserves_order(self) -> None:
        """Test valid and invalid lists cover the input disjointly, in order."""
        children = [
            make_child("T1"),
            make_child("T2", title=""),
            make_child("T3"),
            make_child("T4", status=""),
        ]
        valid, invalid = partition(children)

        assert [c.task_id for c in valid] == ["T1", "T3"]
        assert [c.task_id for c in invalid] == ["T2", "T4"]
        assert len(valid) + len(invalid) == len(children)

    def test_custom_required_fields(self) -> None:
        child = make_child("T1", assignee="")
        valid, invalid = partition([child], required_fields=("task_id", "assignee"))
        assert valid == []
        assert invalid[0].reason == "Missing required fields: assignee"
