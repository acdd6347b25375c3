"""
Task data sources.

Sources expose the project sheet as ParentRow and ChildTask models and
accept thread-id write-back. Built-in kinds are registered on import.
"""

from forumsync.core.config.models import SourceConfig
from forumsync.core.errors import ConfigurationError

from .backend import (
    HeaderLabelProvider,
    NullLabelProvider,
    TaskSource,
    get_source,
    list_sources,
    register_source,
)
from .csv_source import CsvTaskSource
from .sheets import GoogleSheetsSource
from .tabular import ColumnMap, Grid, RowCache, TabularSource


@register_source("csv")
def _csv_from_config(config: SourceConfig) -> TaskSource:
    if not config.csv_path:
        raise ConfigurationError("FORUMSYNC_CSV_PATH")
    return CsvTaskSource(config.csv_path, columns=config.columns)


@register_source("sheets")
def _sheets_from_config(config: SourceConfig) -> TaskSource:
    if not config.spreadsheet_id:
        raise ConfigurationError("SPREADSHEET_ID")
    if not config.access_token:
        raise ConfigurationError("GOOGLE_ACCESS_TOKEN")
    return GoogleSheetsSource(
        config.spreadsheet_id,
        config.sheet_name,
        config.access_token,
        columns=config.columns,
    )


__all__ = [
    "ColumnMap",
    "CsvTaskSource",
    "GoogleSheetsSource",
    "Grid",
    "HeaderLabelProvider",
    "NullLabelProvider",
    "RowCache",
    "TabularSource",
    "TaskSource",
    "get_source",
    "list_sources",
    "register_source",
]
