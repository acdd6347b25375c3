"""
Forum channel client.

Wraps the three REST operations the synchronizer needs: creating a forum
thread (or posting into an existing one), renaming a thread together with
its starter message, and editing a message.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from forumsync.core.discord.http import DiscordHTTP
from forumsync.core.discord.models import MessagePayload, ThreadIdentity, ThreadRef
from forumsync.core.errors import DiscordAPIError

logger = logging.getLogger(__name__)

MAX_THREAD_NAME_LENGTH = 100
FALLBACK_NAME_LENGTH = 50


class DiscordForumClient:
    """
    Client for one forum channel.

    In a forum channel the starter message of a thread shares the thread's
    id, so the starter can be edited at /channels/{id}/messages/{id}.

    Example:
        >>> client = DiscordForumClient(http, forum_channel_id="987")
        >>> ref = await client.create_or_update_thread(None, payload, name="Launch | 0%")
        >>> ref.thread_id
        '112233'
    """

    def __init__(
        self,
        http: DiscordHTTP,
        forum_channel_id: str,
        *,
        auto_archive_minutes: int = 10080,
    ) -> None:
        self.http = http
        self.forum_channel_id = forum_channel_id
        self.auto_archive_minutes = auto_archive_minutes

    async def create_or_update_thread(
        self,
        thread_id: str | None,
        payload: MessagePayload,
        name: str | None = None,
    ) -> ThreadRef:
        """
        Create a thread when thread_id is None, otherwise post into it.

        Creating is not idempotent: two calls create two threads.

        Args:
            thread_id: Existing thread id, or None to create
            payload: Starter message (create) or message to post
            name: Thread name for create; falls back to the content head

        Returns:
            ThreadRef with the thread id and, when known, the message id
        """
        if not thread_id:
            thread_name = name or (payload.content[:FALLBACK_NAME_LENGTH] or "New Thread")
            body = await self.http.request(
                "POST",
                f"/channels/{self.forum_channel_id}/threads",
                json={
                    "name": thread_name[:MAX_THREAD_NAME_LENGTH],
                    "auto_archive_duration": self.auto_archive_minutes,
                    "message": payload.to_api(),
                },
            )
            message = body.get("message") or {}
            return ThreadRef(thread_id=str(body["id"]), message_id=_str_or_none(message.get("id")))

        body = await self.http.request(
            "POST",
            f"/channels/{thread_id}/messages",
            json=payload.to_api(),
        )
        return ThreadRef(thread_id=thread_id, message_id=_str_or_none(body.get("id")))

    async def update_thread_metadata(
        self,
        thread_id: str,
        name: str,
        payload: MessagePayload | None = None,
    ) -> ThreadIdentity:
        """
        Rename a thread and optionally rewrite its starter message.

        A failed starter-message edit, whether an error response or a
        transport failure, is logged and does not fail the rename; the
        returned identity reflects the rename.
        """
        body = await self.http.request(
            "PATCH",
            f"/channels/{thread_id}",
            json={"name": name[:MAX_THREAD_NAME_LENGTH]},
        )
        identity = ThreadIdentity(
            thread_id=str(body.get("id") or thread_id),
            name=str(body.get("name") or name),
        )

        if payload is not None:
            try:
                await self.edit_message(thread_id, thread_id, payload)
            except (DiscordAPIError, httpx.HTTPError) as e:
                logger.warning("Starter message update failed for thread %s: %s", thread_id, e)

        return identity

    async def edit_message(
        self,
        channel_id: str,
        message_id: str,
        payload: MessagePayload,
    ) -> dict[str, Any]:
        """Replace the content and embeds of a message."""
        return await self.http.request(
            "PATCH",
            f"/channels/{channel_id}/messages/{message_id}",
            json=payload.to_api(),
        )

    async def aclose(self) -> None:
        await self.http.aclose()


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)
