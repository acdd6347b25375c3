"""
Snapshot construction for a single project.

The builder fetches a project's task rows, validates them, attaches change
markers and computes completion and schedule status. Step order matters:
completion is computed over the raw rows (invalid rows still count towards
the total) while schedule status only looks at valid rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from forumsync.core.snapshot.markers import MarkerDetector, NullMarkerDetector
from forumsync.core.snapshot.models import ProjectSnapshot
from forumsync.core.sources.backend import HeaderLabelProvider, NullLabelProvider, TaskSource
from forumsync.core.tasks import completion, progress
from forumsync.core.tasks.models import ParentRow
from forumsync.core.tasks.validation import REQUIRED_TASK_FIELDS, partition
from forumsync.utils.dates import DEFAULT_TIMEZONE, today_in, utc_now

logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """
    Builds a ProjectSnapshot from a parent row.

    Optional capabilities (header labels, marker detection) are supplied at
    construction; their no-op defaults keep the builder usable without them.

    Example:
        >>> builder = SnapshotBuilder(source, label_provider=source)
        >>> snapshot = await builder.build(parent)
        >>> snapshot.completion.percentage
        50
    """

    def __init__(
        self,
        source: TaskSource,
        label_provider: HeaderLabelProvider | None = None,
        marker_detector: MarkerDetector | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        timezone: str = DEFAULT_TIMEZONE,
        required_fields: tuple[str, ...] = REQUIRED_TASK_FIELDS,
    ) -> None:
        self.source = source
        self.label_provider: HeaderLabelProvider = label_provider or NullLabelProvider()
        self.marker_detector: MarkerDetector = marker_detector or NullMarkerDetector()
        self.clock = clock
        self.timezone = timezone
        self.required_fields = required_fields

    async def build(self, parent: ParentRow) -> ProjectSnapshot:
        """
        Build the snapshot for one project.

        Raises:
            Exception: Whatever the source raises while fetching children;
                the caller marks the project failed.
        """
        raw_children = await self.source.fetch_child_rows(parent.project_id)
        labels = await self._fetch_labels()

        valid, invalid = partition(raw_children, self.required_fields, labels)

        now = self.clock()
        today = today_in(self.timezone, now)
        annotated = [
            child.model_copy(
                update={"markers": tuple(self.marker_detector.detect(parent.project_id, child, today))}
            )
            for child in valid
        ]

        metrics = completion.calculate(raw_children, clock=self.clock)
        status = progress.classify(annotated, today, self.timezone)

        if invalid:
            logger.info(
                "Project %s has %d task(s) with missing fields", parent.project_id, len(invalid)
            )

        return ProjectSnapshot(
            row_index=parent.row_index,
            project_id=parent.project_id,
            title=parent.title,
            owner=parent.owner,
            thread_id=parent.thread_id,
            timestamp=now,
            completion=metrics,
            progress_status=status,
            children=tuple(annotated),
            invalid_children=tuple(invalid),
        )

    async def _fetch_labels(self) -> dict[str, str]:
        try:
            return await self.label_provider.fetch_header_labels()
        except Exception as e:
            logger.warning("Header labels unavailable, using field keys: %s", e)
            return {}
