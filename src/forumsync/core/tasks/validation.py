"""
Required-field validation for child tasks.

Splits raw child rows into valid tasks and InvalidChild entries whose reason
names every missing field by its sheet header label.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from forumsync.core.tasks.models import ChildTask, InvalidChild

REQUIRED_TASK_FIELDS: tuple[str, ...] = ("task_id", "title", "due_date", "status")

UNKNOWN_TASK_ID = "unknown"


def has_value(value: Any) -> bool:
    """Return True if value is non-empty after stripping."""
    if value is None:
        return False
    return len(str(value).strip()) > 0


def missing_fields(obj: Any, fields: Iterable[str]) -> list[str]:
    """
    Return the fields of ``obj`` that are blank, in the order given.

    Works on both models (attribute access) and mappings.
    """
    if isinstance(obj, Mapping):
        return [field for field in fields if not has_value(obj.get(field))]
    return [field for field in fields if not has_value(getattr(obj, field, None))]


def describe_missing(fields: Sequence[str], labels: Mapping[str, str] | None = None) -> str:
    """
    Build the human-readable reason for an invalid task.

    Each field is shown by its display label, falling back to the field key.

    Example:
        >>> describe_missing(["title", "due_date"], {"title": "Task name"})
        'Missing required fields: Task name, due_date'
    """
    labels = labels or {}
    names = [labels.get(field) or field for field in fields]
    return f"Missing required fields: {', '.join(names)}"


def partition(
    children: Iterable[ChildTask],
    required_fields: Sequence[str] = REQUIRED_TASK_FIELDS,
    labels: Mapping[str, str] | None = None,
) -> tuple[list[ChildTask], list[InvalidChild]]:
    """
    Partition children into valid tasks and invalid entries.

    The two lists form a complete, disjoint cover of the input and each
    preserves input order.

    Args:
        children: Raw child tasks
        required_fields: Field names that must be non-blank
        labels: Optional mapping of field key to display label

    Returns:
        Tuple of (valid, invalid)
    """
    valid: list[ChildTask] = []
    invalid: list[InvalidChild] = []

    for child in children:
        missing = missing_fields(child, required_fields)
        if missing:
            invalid.append(
                InvalidChild(
                    task_id=child.task_id.strip() or UNKNOWN_TASK_ID,
                    title=child.title.strip(),
                    reason=describe_missing(missing, labels),
                )
            )
            continue
        valid.append(child)

    return valid, invalid
