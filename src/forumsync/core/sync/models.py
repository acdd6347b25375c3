"""
Data models for the sync cycle.

Defines Pydantic models for per-project outcomes and the aggregate result
returned by one cycle.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ThreadAction(str, Enum):
    """What the synchronizer did for a project."""

    CREATED = "created"
    UPDATED = "updated"


class ThreadOutcome(BaseModel):
    """Outcome of syncing one project's thread."""

    project_id: str
    action: ThreadAction
    thread_id: str


class ProjectErrorType(str, Enum):
    """
    Failure categories reported per project.

    WRITE_BACK_FAILED means the thread exists remotely but its id was not
    recorded; it needs manual reconciliation, not another create.
    """

    SNAPSHOT_FAILED = "snapshot_failed"
    SYNC_FAILED = "sync_failed"
    WRITE_BACK_FAILED = "write_back_failed"


class ProjectError(BaseModel):
    """A project that failed during a cycle."""

    project_id: str = Field(serialization_alias="projectId")
    message: str
    error_type: ProjectErrorType = Field(
        default=ProjectErrorType.SYNC_FAILED,
        serialization_alias="errorType",
    )
    thread_id: str | None = Field(
        default=None,
        serialization_alias="threadId",
        description="Remote thread id when one exists (write-back failures)",
    )


class SyncResult(BaseModel):
    """
    Aggregate result of one sync cycle.

    Example:
        >>> result = SyncResult()
        >>> result.record_success()
        >>> result.summary()
        '1 succeeded, 0 failed'
    """

    success: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    errors: list[ProjectError] = Field(default_factory=list)

    def record_success(self) -> None:
        self.success += 1

    def record_failure(self, error: ProjectError) -> None:
        self.failed += 1
        self.errors.append(error)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def summary(self) -> str:
        """Human-readable one-line summary."""
        return f"{self.success} succeeded, {self.failed} failed"
