"""
Exception hierarchy for forumsync.

Exception Hierarchy:
    ForumSyncError (base)
    ├── ConfigurationError (missing credential or identifier, fatal at startup)
    ├── SourceError (data source read/write failures)
    ├── DiscordAPIError (non-2xx response from the chat platform)
    │   └── DiscordRateLimitError (429 after the backoff schedule is exhausted)
    └── ThreadWriteBackError (thread created remotely, id not recorded)

Example:
    >>> from forumsync.core.errors import DiscordAPIError
    >>> try:
    ...     raise DiscordAPIError(404, {"message": "Unknown Channel"})
    ... except DiscordAPIError as e:
    ...     print(e.status_code)
    404
"""

from __future__ import annotations

from typing import Any


class ForumSyncError(Exception):
    """
    Base exception for all forumsync errors.

    Attributes:
        message: Human-readable error message
        context: Additional context as keyword arguments
    """

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ForumSyncError):
    """
    Raised when a required setting is missing or invalid.

    Configuration errors are surfaced immediately and never retried.
    """

    def __init__(self, setting: str, message: str | None = None) -> None:
        super().__init__(message or f"Required setting {setting} is not configured", setting=setting)
        self.setting = setting


class SourceError(ForumSyncError):
    """Raised when the task data source cannot be read or written."""


class DiscordAPIError(ForumSyncError):
    """
    Raised when the chat platform answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the final response
        body: Parsed JSON body, or raw text when the body is not JSON
    """

    def __init__(self, status_code: int, body: Any, message: str | None = None) -> None:
        super().__init__(
            message or f"Discord API Error: {status_code} {body}",
            status_code=status_code,
        )
        self.status_code = status_code
        self.body = body


class DiscordRateLimitError(DiscordAPIError):
    """Raised when every attempt in the backoff schedule was rate limited."""

    def __init__(self, body: Any, attempts: int) -> None:
        super().__init__(
            429,
            body,
            message=f"Discord API rate limit: gave up after {attempts} attempts",
        )
        self.attempts = attempts


class ThreadWriteBackError(ForumSyncError):
    """
    Raised when a thread was created but its id could not be written back.

    The remote thread exists without a recorded id, so the fix is manual
    reconciliation of the sheet rather than another create.
    """

    def __init__(self, project_id: str, thread_id: str, reason: str) -> None:
        super().__init__(
            f"Thread {thread_id} created for {project_id} but write-back failed: {reason}",
            project_id=project_id,
            thread_id=thread_id,
        )
        self.project_id = project_id
        self.thread_id = thread_id


__all__ = [
    "ForumSyncError",
    "ConfigurationError",
    "SourceError",
    "DiscordAPIError",
    "DiscordRateLimitError",
    "ThreadWriteBackError",
]
