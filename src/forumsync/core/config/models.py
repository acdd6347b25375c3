"""
Configuration data models for forumsync.

These models define the structure of .forumsync.json and
~/.config/forumsync/config.json files, with validation and type safety via
Pydantic. Secrets normally arrive through environment variables instead.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from forumsync.core.errors import ConfigurationError
from forumsync.utils.dates import DEFAULT_TIMEZONE


class ColumnMap(BaseModel):
    """
    0-based column indexes of the project sheet.

    Defaults match the production sheet: B=project id, C=title, D=owner,
    J=thread id, K..R=task columns.
    """

    project_id: int = Field(default=1, ge=0)
    project_title: int = Field(default=2, ge=0)
    owner: int = Field(default=3, ge=0)
    thread_id: int = Field(default=9, ge=0)
    task_id: int = Field(default=10, ge=0)
    task_title: int = Field(default=11, ge=0)
    due_date: int = Field(default=14, ge=0)
    status: int = Field(default=15, ge=0)
    completed_at: int = Field(default=16, ge=0)
    notes: int = Field(default=17, ge=0)
    assignee: int | None = Field(
        default=None,
        ge=0,
        description="Assignee column, unset when the sheet has none",
    )

    def label_keys(self) -> dict[str, int | None]:
        """Map field keys to their column index, for header-label lookup."""
        return {
            "task_id": self.task_id,
            "title": self.task_title,
            "due_date": self.due_date,
            "status": self.status,
            "completed_at": self.completed_at,
            "notes": self.notes,
            "assignee": self.assignee,
            "project_id": self.project_id,
            "owner": self.owner,
            "thread_id": self.thread_id,
        }


class DiscordConfig(BaseModel):
    """
    Chat platform connection and message settings.
    """
    bot_token: str | None = Field(default=None, description="Bot token (DISCORD_BOT_TOKEN)")
    forum_channel_id: str | None = Field(
        default=None,
        description="Forum channel where project threads live",
    )
    api_base_url: str = Field(default="https://discord.com/api/v10")
    backoff_ms: list[int] = Field(
        default_factory=lambda: [1000, 2000, 4000],
        description="Delays between retries of a rate-limited call, in milliseconds",
    )
    auto_archive_minutes: int = Field(
        default=10080,
        description="Thread auto-archive duration (60, 1440, 4320 or 10080)",
    )
    max_content_length: int = Field(
        default=1800,
        ge=1,
        le=2000,
        description="Ceiling applied separately to the header and each embed description",
    )
    delay_mention_user_id: str | None = Field(
        default=None,
        description="User mentioned in status posts when a project is delayed",
    )
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("backoff_ms")
    @classmethod
    def validate_backoff(cls, v: list[int]) -> list[int]:
        if any(delay < 0 for delay in v):
            raise ValueError("backoff_ms entries must be non-negative")
        return v


class SourceConfig(BaseModel):
    """
    Where project and task rows come from.
    """
    kind: str = Field(
        default="sheets",
        pattern="^(sheets|csv)$",
        description="Source kind: 'sheets' (Google Sheets) or 'csv'",
    )
    spreadsheet_id: str | None = Field(default=None)
    sheet_name: str = Field(default="シート1", description="Worksheet holding the projects")
    access_token: str | None = Field(default=None, description="Sheets API bearer token")
    csv_path: str | None = Field(default=None, description="Path of the CSV export")
    columns: ColumnMap = Field(default_factory=ColumnMap)


class SyncSettings(BaseModel):
    """
    Sync cycle behaviour.
    """
    timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="Timezone used for 'today' and displayed timestamps",
    )
    max_concurrency: int = Field(
        default=5,
        ge=1,
        description="Maximum snapshot builds in flight at once",
    )


class MarkerConfig(BaseModel):
    """
    Change-marker detection.
    """
    deadline_window_days: int | None = Field(
        default=None,
        ge=0,
        description="Mark incomplete tasks due within N days; unset disables markers",
    )


class ServerConfig(BaseModel):
    """
    Inbound HTTP trigger settings.
    """
    api_key: str | None = Field(default=None, description="Value expected in x-api-key")
    production: bool = Field(
        default=False,
        description="Hide stack traces from error responses",
    )


class ForumSyncConfig(BaseModel):
    """
    Main forumsync configuration.

    Example:
        >>> config = ForumSyncConfig(discord={"bot_token": "x", "forum_channel_id": "1"})
        >>> config.discord.backoff_ms
        [1000, 2000, 4000]
    """

    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    def require_discord(self) -> tuple[str, str]:
        """
        Return (bot_token, forum_channel_id).

        Raises:
            ConfigurationError: If either is missing
        """
        if not self.discord.bot_token:
            raise ConfigurationError("DISCORD_BOT_TOKEN")
        if not self.discord.forum_channel_id:
            raise ConfigurationError("DISCORD_FORUM_CHANNEL_ID")
        return self.discord.bot_token, self.discord.forum_channel_id
