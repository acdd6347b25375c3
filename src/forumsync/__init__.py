"""
forumsync - Task hierarchy to forum thread synchronization.

Reconciles a spreadsheet of projects and their child tasks against a chat
forum, keeping one thread per project whose title, starter message and
status posts reflect the current state of the sheet.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from forumsync.core.snapshot.models import CompletionMetrics, ProjectSnapshot
from forumsync.core.sync.models import SyncResult
from forumsync.core.tasks.models import ChildTask, ProgressStatus, TaskStatus

__all__ = [
    "ChildTask",
    "CompletionMetrics",
    "ProgressStatus",
    "ProjectSnapshot",
    "SyncResult",
    "TaskStatus",
    "__version__",
]
