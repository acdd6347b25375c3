"""
Row-oriented task source.

Both the Google Sheets and CSV sources read a grid of cell values in the same
layout: one header row followed by data rows where a project row carries the
project columns and every task row repeats the project id next to its task
columns. TabularSource holds the shared extraction logic; subclasses only
load the grid and write a single cell.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from forumsync.core.config.models import ColumnMap
from forumsync.core.errors import SourceError
from forumsync.core.tasks.models import ChildTask, ParentRow
from forumsync.utils.text import string_or_empty

logger = logging.getLogger(__name__)


@dataclass
class Grid:
    """A loaded sheet: header row plus data rows."""

    header: list[str]
    rows: list[list[str]]


class RowCache:
    """
    One-shot cache for a source's grid.

    The first reader starts the load; readers arriving while it is in
    flight await the same task. After that the grid is served as-is for the
    rest of the cycle.
    """

    def __init__(self, loader: Callable[[], Awaitable[Grid]]) -> None:
        self._loader = loader
        self._task: asyncio.Task[Grid] | None = None

    async def get(self) -> Grid:
        if self._task is None:
            self._task = asyncio.ensure_future(self._loader())
        return await self._task


def _cell(row: list[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return string_or_empty(row[index])


class TabularSource(ABC):
    """
    Base class for grid-backed task sources.

    Subclasses implement ``_load_grid`` and ``_write_cell``.
    """

    def __init__(self, columns: ColumnMap | None = None) -> None:
        self.columns = columns or ColumnMap()
        self.cache = RowCache(self._load_grid)

    @abstractmethod
    async def _load_grid(self) -> Grid:
        """Read the whole sheet, header row included."""

    @abstractmethod
    async def _write_cell(self, row_index: int, column: int, value: str) -> None:
        """Write one cell; ``row_index`` is 0-based over data rows."""

    async def fetch_parent_rows(self, cursor: int = 0, limit: int | None = None) -> list[ParentRow]:
        grid = await self.cache.get()
        cols = self.columns

        parents: list[ParentRow] = []
        seen: set[str] = set()
        for index, row in enumerate(grid.rows):
            project_id = _cell(row, cols.project_id)
            if not project_id or project_id in seen:
                continue
            seen.add(project_id)
            parents.append(
                ParentRow(
                    row_index=index,
                    project_id=project_id,
                    title=_cell(row, cols.project_title),
                    owner=_cell(row, cols.owner),
                    thread_id=_cell(row, cols.thread_id),
                )
            )

        end = None if limit is None else cursor + limit
        return parents[cursor:end]

    async def fetch_child_rows(self, project_id: str) -> list[ChildTask]:
        if not project_id:
            return []
        grid = await self.cache.get()
        cols = self.columns

        children: list[ChildTask] = []
        for index, row in enumerate(grid.rows):
            if _cell(row, cols.project_id) != project_id:
                continue
            task_id = _cell(row, cols.task_id)
            if not task_id:
                continue
            children.append(
                ChildTask(
                    row_index=index,
                    task_id=task_id,
                    project_id=project_id,
                    title=_cell(row, cols.task_title),
                    due_date=_cell(row, cols.due_date),
                    status=_cell(row, cols.status),
                    assignee=_cell(row, cols.assignee),
                    completed_at=_cell(row, cols.completed_at),
                    notes=_cell(row, cols.notes),
                )
            )
        return children

    async def fetch_header_labels(self) -> dict[str, str]:
        grid = await self.cache.get()
        labels: dict[str, str] = {}
        for key, index in self.columns.label_keys().items():
            label = _cell(grid.header, index)
            if label:
                labels[key] = label
        return labels

    async def update_thread_id(self, row_index: int, thread_id: str) -> None:
        if not isinstance(row_index, int) or isinstance(row_index, bool):
            raise SourceError(f"row_index must be an integer, got {row_index!r}")
        if not thread_id:
            raise SourceError("thread_id must not be empty")

        grid = await self.cache.get()
        if not 0 <= row_index < len(grid.rows):
            raise SourceError(f"row_index {row_index} is not in the loaded data")

        await self._write_cell(row_index, self.columns.thread_id, thread_id)
        logger.debug("Recorded thread %s on row %d", thread_id, row_index)
