"""
Task source protocol and registry.

This module defines the TaskSource protocol that all data sources must
implement, enabling pluggable storage for the project/task sheet (Google
Sheets, local CSV, ...).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from forumsync.core.tasks.models import ChildTask, ParentRow

if TYPE_CHECKING:
    from forumsync.core.config.models import SourceConfig


@runtime_checkable
class TaskSource(Protocol):
    """
    Protocol for task data sources.

    Sources are responsible for:
    - Reading project rows, de-duplicated by project id in sheet order
    - Reading the child task rows for a project
    - Writing a newly created thread id back to its project row

    Rows are read once per cycle and served from a cache afterwards, so
    concurrent readers within one cycle see the same data.
    """

    async def fetch_parent_rows(self, cursor: int = 0, limit: int | None = None) -> list[ParentRow]:
        """
        List unique project rows.

        Args:
            cursor: Number of projects to skip
            limit: Maximum number of projects to return (None for all)

        Returns:
            Project rows in insertion order
        """
        ...

    async def fetch_child_rows(self, project_id: str) -> list[ChildTask]:
        """
        List the task rows of a project.

        Only rows whose project column matches and whose task id is
        non-blank are returned.
        """
        ...

    async def update_thread_id(self, row_index: int, thread_id: str) -> None:
        """
        Record a thread id on a project row.

        Raises:
            SourceError: If row_index is not an int within the loaded rows or
                thread_id is blank, or the write fails
        """
        ...


@runtime_checkable
class HeaderLabelProvider(Protocol):
    """Optional capability: display labels for canonical field keys."""

    async def fetch_header_labels(self) -> dict[str, str]:
        """Return a mapping of field key (e.g. "due_date") to header text."""
        ...


class NullLabelProvider:
    """Label provider for sources without header labels."""

    async def fetch_header_labels(self) -> dict[str, str]:
        return {}


# Source registry
_sources: dict[str, Callable[[SourceConfig], TaskSource]] = {}


def register_source(
    name: str,
) -> Callable[[Callable[[SourceConfig], TaskSource]], Callable[[SourceConfig], TaskSource]]:
    """
    Decorator to register a source factory.

    Args:
        name: Source kind as used in config (e.g. "sheets", "csv")

    Example:
        @register_source("csv")
        def _from_config(config: SourceConfig) -> TaskSource:
            return CsvTaskSource(config.csv_path)
    """

    def decorator(
        factory: Callable[[SourceConfig], TaskSource],
    ) -> Callable[[SourceConfig], TaskSource]:
        _sources[name] = factory
        return factory

    return decorator


def get_source(config: SourceConfig) -> TaskSource:
    """
    Build the task source selected by ``config.kind``.

    Raises:
        ValueError: If the kind is not registered
    """
    factory = _sources.get(config.kind)
    if factory is None:
        raise ValueError(
            f"Source '{config.kind}' is not registered. "
            f"Available sources: {', '.join(list_sources()) or 'none'}"
        )
    return factory(config)


def list_sources() -> list[str]:
    """Return registered source kinds."""
    return sorted(_sources)
