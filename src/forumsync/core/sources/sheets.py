"""
Google Sheets task source.

Reads the project sheet through the Sheets API v4 ``values`` endpoint and
writes thread ids back one cell at a time. Authentication is a bearer
access token supplied by the deployment (e.g. minted from a service account
by the scheduler that triggers the sync).
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from forumsync.core.errors import SourceError
from forumsync.core.sources.tabular import ColumnMap, Grid, TabularSource

logger = logging.getLogger(__name__)

SHEETS_API_BASE_URL = "https://sheets.googleapis.com/v4"


def column_letter(index: int) -> str:
    """
    Convert a 0-based column index to its A1 letter.

    Example:
        >>> column_letter(0), column_letter(9), column_letter(27)
        ('A', 'J', 'AB')
    """
    if index < 0:
        raise ValueError("index must be non-negative")
    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_cell(sheet_name: str, row_index: int, column: int) -> str:
    """
    A1 reference for a data cell.

    Data row 0 is sheet row 2 because row 1 holds the header.
    """
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'!{column_letter(column)}{row_index + 2}"


class GoogleSheetsSource(TabularSource):
    """
    Task source backed by a Google spreadsheet.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     source = GoogleSheetsSource("1AbC...", "Sheet1", token, client=http)
        ...     parents = await source.fetch_parent_rows()
    """

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        access_token: str,
        *,
        columns: ColumnMap | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str = SHEETS_API_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(columns)
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._access_token = access_token
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self.base_url = base_url.rstrip("/")

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}"}

    def _values_url(self, range_: str) -> str:
        return f"{self.base_url}/spreadsheets/{self.spreadsheet_id}/values/{quote(range_, safe='')}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.request(method, url, headers=self._headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceError(
                f"Sheets API returned {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise SourceError(f"Sheets API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    async def _load_grid(self) -> Grid:
        data = await self._request(
            "GET",
            self._values_url(self.sheet_name),
            params={"valueRenderOption": "FORMATTED_VALUE"},
        )
        values: list[list[Any]] = data.get("values", [])
        if not values:
            return Grid(header=[], rows=[])

        header = [str(v) for v in values[0]]
        rows = [[str(v) for v in row] for row in values[1:]]
        logger.info("Loaded %d rows from sheet '%s'", len(rows), self.sheet_name)
        return Grid(header=header, rows=rows)

    async def _write_cell(self, row_index: int, column: int, value: str) -> None:
        cell = a1_cell(self.sheet_name, row_index, column)
        await self._request(
            "PUT",
            self._values_url(cell),
            params={"valueInputOption": "RAW"},
            json={"range": cell, "majorDimension": "ROWS", "values": [[value]]},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
