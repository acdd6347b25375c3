"""
Thread lifecycle for one project.

A project's thread is either absent (no thread id in the sheet) or created.

- Absent: render the starter message, create the thread named
  ``"{title} | {percentage}%"``, then write the new id back to the sheet.
  The id in the sheet is the only guard against duplicate threads, so a
  failed write-back is reported as ThreadWriteBackError and the create is
  not retried.
- Created: rename the thread and rewrite its starter message, then post a
  fresh status update. A post is made every cycle, whether or not anything
  changed.
"""

from __future__ import annotations

import logging

from forumsync.core.errors import ThreadWriteBackError
from forumsync.core.notify.formatter import MessageFormatter
from forumsync.core.snapshot.models import ProjectSnapshot
from forumsync.core.sync.models import ThreadAction, ThreadOutcome
from forumsync.core.sync.protocols import ChatPlatform, ThreadIdWriter

logger = logging.getLogger(__name__)


class ThreadSynchronizer:
    """
    Drives the chat API calls for a snapshot.

    Example:
        >>> synchronizer = ThreadSynchronizer(chat, source, MessageFormatter())
        >>> outcome = await synchronizer.sync(snapshot)
        >>> outcome.action
        <ThreadAction.CREATED: 'created'>
    """

    def __init__(
        self,
        chat: ChatPlatform,
        writer: ThreadIdWriter,
        formatter: MessageFormatter,
    ) -> None:
        self.chat = chat
        self.writer = writer
        self.formatter = formatter

    async def sync(self, snapshot: ProjectSnapshot) -> ThreadOutcome:
        """
        Create or update the project's thread.

        Raises:
            ThreadWriteBackError: Thread created but its id was not recorded
            DiscordAPIError: Chat platform call failed
        """
        if not snapshot.thread_id:
            return await self._create(snapshot)
        return await self._update(snapshot, snapshot.thread_id)

    async def _create(self, snapshot: ProjectSnapshot) -> ThreadOutcome:
        payload = self.formatter.render_initial(snapshot)
        ref = await self.chat.create_or_update_thread(None, payload, name=snapshot.thread_name)
        logger.info("Created thread %s for project %s", ref.thread_id, snapshot.project_id)

        try:
            await self.writer.update_thread_id(snapshot.row_index, ref.thread_id)
        except Exception as e:
            logger.error(
                "Thread %s for project %s exists but write-back to row %d failed: %s",
                ref.thread_id,
                snapshot.project_id,
                snapshot.row_index,
                e,
            )
            raise ThreadWriteBackError(snapshot.project_id, ref.thread_id, str(e)) from e

        return ThreadOutcome(
            project_id=snapshot.project_id,
            action=ThreadAction.CREATED,
            thread_id=ref.thread_id,
        )

    async def _update(self, snapshot: ProjectSnapshot, thread_id: str) -> ThreadOutcome:
        await self.chat.update_thread_metadata(
            thread_id,
            snapshot.thread_name,
            self.formatter.render_initial(snapshot),
        )
        await self.chat.create_or_update_thread(
            thread_id,
            self.formatter.render_status_update(snapshot),
        )
        logger.info("Posted status update for project %s", snapshot.project_id)

        return ThreadOutcome(
            project_id=snapshot.project_id,
            action=ThreadAction.UPDATED,
            thread_id=thread_id,
        )
