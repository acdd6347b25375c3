"""
Thread synchronization and sync cycles.

Example:
    >>> from forumsync.core.sync import SyncOrchestrator
    >>> result = await SyncOrchestrator(source, builder, synchronizer).run()
    >>> result.failed
    0
"""

from .models import (
    ProjectError,
    ProjectErrorType,
    SyncResult,
    ThreadAction,
    ThreadOutcome,
)
from .orchestrator import SyncOrchestrator
from .synchronizer import ThreadSynchronizer

__all__ = [
    "ProjectError",
    "ProjectErrorType",
    "SyncOrchestrator",
    "SyncResult",
    "ThreadAction",
    "ThreadOutcome",
    "ThreadSynchronizer",
]
