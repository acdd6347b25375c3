"""
CSV-backed task source.

Reads the sheet layout from a local CSV export (first row is the header).
Useful for local runs and for sheets kept under version control. Thread-id
write-back rewrites the file atomically.
"""

from __future__ import annotations

import asyncio
import csv
import logging
from pathlib import Path

from forumsync.core.errors import SourceError
from forumsync.core.sources.tabular import ColumnMap, Grid, TabularSource

logger = logging.getLogger(__name__)


class CsvTaskSource(TabularSource):
    """
    Task source reading a CSV file.

    Example:
        >>> source = CsvTaskSource(Path("projects.csv"))
        >>> parents = await source.fetch_parent_rows()
    """

    def __init__(self, path: Path | str, columns: ColumnMap | None = None) -> None:
        super().__init__(columns)
        self.path = Path(path)

    async def _load_grid(self) -> Grid:
        return await asyncio.to_thread(self._read)

    async def _write_cell(self, row_index: int, column: int, value: str) -> None:
        await asyncio.to_thread(self._write, row_index, column, value)

    def _read(self) -> Grid:
        if not self.path.exists():
            raise SourceError(f"CSV source not found: {self.path}", path=str(self.path))
        try:
            with self.path.open(newline="", encoding="utf-8-sig") as f:
                records = list(csv.reader(f))
        except (OSError, csv.Error) as e:
            raise SourceError(f"Failed to read {self.path}: {e}", path=str(self.path)) from e

        if not records:
            return Grid(header=[], rows=[])
        logger.debug("Loaded %d rows from %s", len(records) - 1, self.path)
        return Grid(header=records[0], rows=records[1:])

    def _write(self, row_index: int, column: int, value: str) -> None:
        # Re-read so edits made since the cycle started are not clobbered.
        grid = self._read()
        if row_index >= len(grid.rows):
            raise SourceError(f"row_index {row_index} is no longer in {self.path}")

        row = grid.rows[row_index]
        if len(row) <= column:
            row.extend([""] * (column + 1 - len(row)))
        row[column] = value

        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with temp_path.open("w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(grid.header)
                writer.writerows(grid.rows)
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise SourceError(f"Failed to write {self.path}: {e}", path=str(self.path)) from e
