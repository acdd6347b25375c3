"""Interfaces the synchronizer consumes."""

from __future__ import annotations

from typing import Protocol

from forumsync.core.discord.models import MessagePayload, ThreadIdentity, ThreadRef


class ChatPlatform(Protocol):
    """Thread operations on the chat platform (see DiscordForumClient)."""

    async def create_or_update_thread(
        self,
        thread_id: str | None,
        payload: MessagePayload,
        name: str | None = None,
    ) -> ThreadRef: ...

    async def update_thread_metadata(
        self,
        thread_id: str,
        name: str,
        payload: MessagePayload | None = None,
    ) -> ThreadIdentity: ...


class ThreadIdWriter(Protocol):
    """Write-back side of a task source."""

    async def update_thread_id(self, row_index: int, thread_id: str) -> None: ...
