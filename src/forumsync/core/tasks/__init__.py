"""
Task models, validation and aggregation.

This module provides the child-task data model together with the pure
functions that validate tasks and derive completion and schedule status.
"""

from .models import ChildTask, InvalidChild, Marker, ParentRow, ProgressStatus, TaskStatus
from .validation import REQUIRED_TASK_FIELDS, has_value, missing_fields, partition

__all__ = [
    "ChildTask",
    "InvalidChild",
    "Marker",
    "ParentRow",
    "ProgressStatus",
    "TaskStatus",
    "REQUIRED_TASK_FIELDS",
    "has_value",
    "missing_fields",
    "partition",
]
