"""
Project snapshots.

A snapshot is the immutable per-cycle aggregate of one project: its valid
and invalid tasks, completion metrics and schedule status.
"""

from .builder import SnapshotBuilder
from .markers import DeadlineMarkerDetector, MarkerDetector, NullMarkerDetector
from .models import CompletionMetrics, ProjectSnapshot

__all__ = [
    "CompletionMetrics",
    "DeadlineMarkerDetector",
    "MarkerDetector",
    "NullMarkerDetector",
    "ProjectSnapshot",
    "SnapshotBuilder",
]
