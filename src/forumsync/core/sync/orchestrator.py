"""
Sync cycle orchestration.

Runs one full pass over every project in the source:

1. Fetch project rows. Failure here aborts the cycle (nothing can start).
2. Build snapshots concurrently, bounded by ``max_concurrency``. A failed
   build marks that project failed.
3. Sync threads sequentially in sheet order, logging each project before
   it starts so partial progress is visible even if the process dies.

Per-project failures never abort the cycle; they are collected in the
returned SyncResult.
"""

from __future__ import annotations

import asyncio
import logging

from forumsync.core.errors import ThreadWriteBackError
from forumsync.core.snapshot.builder import SnapshotBuilder
from forumsync.core.snapshot.models import ProjectSnapshot
from forumsync.core.sources.backend import TaskSource
from forumsync.core.sync.models import ProjectError, ProjectErrorType, SyncResult
from forumsync.core.sync.synchronizer import ThreadSynchronizer
from forumsync.core.tasks.models import ParentRow

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """
    Runs sync cycles.

    Example:
        >>> orchestrator = SyncOrchestrator(source, builder, synchronizer)
        >>> result = await orchestrator.run()
        >>> print(result.summary())
        3 succeeded, 0 failed
    """

    def __init__(
        self,
        source: TaskSource,
        builder: SnapshotBuilder,
        synchronizer: ThreadSynchronizer,
        *,
        max_concurrency: int = 5,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.source = source
        self.builder = builder
        self.synchronizer = synchronizer
        self.max_concurrency = max_concurrency

    async def run(self, cursor: int = 0, limit: int | None = None) -> SyncResult:
        """
        Run one sync cycle.

        Args:
            cursor: Number of projects to skip
            limit: Maximum number of projects (None for all)

        Returns:
            SyncResult with success/failure counts and per-project errors

        Raises:
            Exception: If the project rows cannot be loaded
        """
        logger.info("Starting sync cycle")
        parents = await self.source.fetch_parent_rows(cursor=cursor, limit=limit)
        logger.info("Projects to process: %d", len(parents))

        result = SyncResult()
        snapshots = await self.build_snapshots(parents, result)

        for snapshot in snapshots:
            logger.info("Processing project %s", snapshot.project_id)
            try:
                await self.synchronizer.sync(snapshot)
            except ThreadWriteBackError as e:
                result.record_failure(
                    ProjectError(
                        project_id=snapshot.project_id,
                        message=str(e),
                        error_type=ProjectErrorType.WRITE_BACK_FAILED,
                        thread_id=e.thread_id,
                    )
                )
            except Exception as e:
                logger.error("Project %s failed: %s", snapshot.project_id, e, exc_info=True)
                result.record_failure(
                    ProjectError(
                        project_id=snapshot.project_id,
                        message=str(e),
                        error_type=ProjectErrorType.SYNC_FAILED,
                        thread_id=snapshot.thread_id,
                    )
                )
            else:
                result.record_success()

        logger.info("Sync cycle finished: %s", result.summary())
        return result

    async def build_snapshots(
        self,
        parents: list[ParentRow],
        result: SyncResult | None = None,
    ) -> list[ProjectSnapshot]:
        """
        Build snapshots for the given projects, preserving their order.

        Failed builds are recorded in ``result`` (when given) and omitted
        from the returned list.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def build_one(parent: ParentRow) -> ProjectSnapshot:
            async with semaphore:
                return await self.builder.build(parent)

        outcomes = await asyncio.gather(
            *(build_one(parent) for parent in parents),
            return_exceptions=True,
        )

        snapshots: list[ProjectSnapshot] = []
        for parent, outcome in zip(parents, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error("Snapshot for project %s failed: %s", parent.project_id, outcome)
                if result is not None:
                    result.record_failure(
                        ProjectError(
                            project_id=parent.project_id,
                            message=str(outcome),
                            error_type=ProjectErrorType.SNAPSHOT_FAILED,
                            thread_id=parent.thread_id,
                        )
                    )
                continue
            snapshots.append(outcome)
        return snapshots
