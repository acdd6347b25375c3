"""
Dependency wiring.

AppFactory lazily builds every collaborator of a sync cycle from a
ForumSyncConfig and caches each one for the lifetime of the factory. One
factory is created per trigger so each cycle reads fresh sheet rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from types import TracebackType
from typing import Any

from forumsync.core.config.models import ForumSyncConfig
from forumsync.core.discord.client import DiscordForumClient
from forumsync.core.discord.http import DiscordHTTP
from forumsync.core.notify.formatter import MessageFormatter
from forumsync.core.snapshot.builder import SnapshotBuilder
from forumsync.core.snapshot.markers import (
    DeadlineMarkerDetector,
    MarkerDetector,
    NullMarkerDetector,
)
from forumsync.core.sources import HeaderLabelProvider, NullLabelProvider, TaskSource, get_source
from forumsync.core.sync.orchestrator import SyncOrchestrator
from forumsync.core.sync.synchronizer import ThreadSynchronizer
from forumsync.utils.dates import utc_now

logger = logging.getLogger(__name__)


class AppFactory:
    """
    Builds and caches the sync cycle's collaborators.

    Configuration errors surface from the ``create_*`` call that needs the
    missing setting, before any network request is made.

    Example:
        >>> async with AppFactory(load_config()) as factory:
        ...     result = await factory.create_orchestrator().run()
    """

    def __init__(
        self,
        config: ForumSyncConfig,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config = config
        self.clock = clock
        self._cache: dict[str, Any] = {}

    def _cached(self, key: str, build: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = build()
        return self._cache[key]

    def create_source(self) -> TaskSource:
        return self._cached("source", lambda: get_source(self.config.source))

    def create_label_provider(self) -> HeaderLabelProvider:
        source = self.create_source()
        if isinstance(source, HeaderLabelProvider):
            return source
        return NullLabelProvider()

    def create_marker_detector(self) -> MarkerDetector:
        window = self.config.markers.deadline_window_days
        if window is None:
            return NullMarkerDetector()
        return DeadlineMarkerDetector(window, timezone=self.config.sync.timezone)

    def create_formatter(self) -> MessageFormatter:
        return self._cached(
            "formatter",
            lambda: MessageFormatter(
                max_content_length=self.config.discord.max_content_length,
                delay_mention_user_id=self.config.discord.delay_mention_user_id,
                timezone=self.config.sync.timezone,
            ),
        )

    def create_discord_client(self) -> DiscordForumClient:
        def build() -> DiscordForumClient:
            token, channel_id = self.config.require_discord()
            discord = self.config.discord
            http = DiscordHTTP(
                token,
                base_url=discord.api_base_url,
                backoff_ms=discord.backoff_ms,
                timeout=discord.timeout_seconds,
            )
            return DiscordForumClient(
                http,
                channel_id,
                auto_archive_minutes=discord.auto_archive_minutes,
            )

        return self._cached("discord", build)

    def create_snapshot_builder(self) -> SnapshotBuilder:
        return self._cached(
            "builder",
            lambda: SnapshotBuilder(
                self.create_source(),
                label_provider=self.create_label_provider(),
                marker_detector=self.create_marker_detector(),
                clock=self.clock,
                timezone=self.config.sync.timezone,
            ),
        )

    def create_synchronizer(self) -> ThreadSynchronizer:
        return self._cached(
            "synchronizer",
            lambda: ThreadSynchronizer(
                self.create_discord_client(),
                self.create_source(),
                self.create_formatter(),
            ),
        )

    def create_orchestrator(self) -> SyncOrchestrator:
        def build() -> SyncOrchestrator:
            # Chat settings are checked before the source so a missing token
            # fails fast without touching the sheet.
            synchronizer = self.create_synchronizer()
            return SyncOrchestrator(
                self.create_source(),
                self.create_snapshot_builder(),
                synchronizer,
                max_concurrency=self.config.sync.max_concurrency,
            )

        return self._cached("orchestrator", build)

    async def aclose(self) -> None:
        """Close HTTP clients owned by cached collaborators."""
        for key in ("discord", "source"):
            component = self._cache.get(key)
            close = getattr(component, "aclose", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> AppFactory:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
