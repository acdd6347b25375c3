"""
Message rendering for project threads.

Two modes:

- initial: the thread's starter message. Aggregate counts, percentage and
  sync time only, plus a summary embed of total/done/remaining.
- status update: the message posted every cycle. Schedule label (with a
  mention when delayed), counts, sync time, a warning line for tasks with
  missing fields, one embed listing in-progress tasks and one embed per
  invalid task.

The header and every embed description are cut independently to
``max_content_length`` characters.
"""

from __future__ import annotations

from collections.abc import Iterable

from forumsync.core.discord.models import Embed, EmbedField, MessagePayload
from forumsync.core.snapshot.models import ProjectSnapshot
from forumsync.core.tasks.models import ChildTask, InvalidChild, Marker, ProgressStatus
from forumsync.utils.dates import DEFAULT_TIMEZONE, format_timestamp
from forumsync.utils.text import truncate

DEFAULT_MAX_CONTENT_LENGTH = 1800
MAX_EMBED_TITLE_LENGTH = 256

NO_IN_PROGRESS_TEXT = "No in-progress tasks."
UNASSIGNED_TEXT = "unassigned"
UNSCHEDULED_TEXT = "unscheduled"

_MARKER_LABELS: dict[str, str] = {
    Marker.DEADLINE.value: ":warning:",
    Marker.STATUS_CHANGED.value: ":information_source:",
}


def marker_label(marker: Marker | str) -> str:
    """Glyph for a marker; unknown markers render as an empty string."""
    key = marker.value if isinstance(marker, Marker) else str(marker)
    return _MARKER_LABELS.get(key, "")


def render_markers(markers: Iterable[Marker | str]) -> str:
    """
    Render markers in input order, space separated.

    Example:
        >>> render_markers(["deadline", "statusChanged"])
        ':warning: :information_source:'
    """
    return " ".join(marker_label(marker) for marker in markers)


def format_task_line(child: ChildTask) -> str:
    """Render ``<markers> <taskId> <title> / <assignee> / <due> / <status>``."""
    markers = render_markers(child.markers)
    prefix = f"{markers} " if markers else ""
    assignee = child.assignee or UNASSIGNED_TEXT
    due = child.due_date or UNSCHEDULED_TEXT
    return f"{prefix}**{child.task_id}** {child.title} / {assignee} / {due} / {child.status}"


class MessageFormatter:
    """
    Renders ProjectSnapshots into message payloads.

    Example:
        >>> formatter = MessageFormatter(max_content_length=1800)
        >>> payload = formatter.render_initial(snapshot)
        >>> payload.embeds[0].title
        'Task summary'
    """

    def __init__(
        self,
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
        delay_mention_user_id: str | None = None,
        timezone: str = DEFAULT_TIMEZONE,
    ) -> None:
        if max_content_length < 1:
            raise ValueError("max_content_length must be positive")
        self.max_content_length = max_content_length
        self.delay_mention_user_id = delay_mention_user_id
        self.timezone = timezone

    def render_initial(self, snapshot: ProjectSnapshot) -> MessagePayload:
        """Render the starter message for a project's thread."""
        header = "\n".join(
            [
                self._progress_line(snapshot),
                self._synced_line(snapshot),
            ]
        )
        metrics = snapshot.completion
        summary = Embed(
            title="Task summary",
            fields=(
                EmbedField(name="Total", value=str(metrics.total), inline=True),
                EmbedField(name="Done", value=str(metrics.done), inline=True),
                EmbedField(name="Remaining", value=str(metrics.remaining), inline=True),
            ),
        )
        return MessagePayload(content=self._clip(header), embeds=(summary,))

    def render_status_update(self, snapshot: ProjectSnapshot) -> MessagePayload:
        """Render the per-cycle status post for a project's thread."""
        status_line = f"[{snapshot.progress_status.label}] {self._progress_line(snapshot)}"
        if snapshot.progress_status is ProgressStatus.DELAYED and self.delay_mention_user_id:
            status_line = f"<@{self.delay_mention_user_id}> {status_line}"

        lines = [status_line, self._synced_line(snapshot)]
        if snapshot.invalid_children:
            lines.append(
                f":warning: {len(snapshot.invalid_children)} task(s) have missing required fields."
            )

        task_lines = [format_task_line(child) for child in snapshot.in_progress_children]
        embeds = [
            Embed(
                title="In-progress tasks",
                description=self._clip("\n".join(task_lines) or NO_IN_PROGRESS_TEXT),
            )
        ]
        embeds.extend(self._invalid_embed(item) for item in snapshot.invalid_children)

        return MessagePayload(content=self._clip("\n".join(lines)), embeds=tuple(embeds))

    def _invalid_embed(self, item: InvalidChild) -> Embed:
        title = f"Incomplete entry: {item.task_id} {item.title}".rstrip()
        return Embed(
            title=truncate(title, MAX_EMBED_TITLE_LENGTH),
            description=self._clip(item.reason),
        )

    def _progress_line(self, snapshot: ProjectSnapshot) -> str:
        metrics = snapshot.completion
        return f"Progress: {metrics.percentage}% ({metrics.done}/{metrics.total})"

    def _synced_line(self, snapshot: ProjectSnapshot) -> str:
        return f"Last synced: {format_timestamp(snapshot.timestamp, self.timezone)}"

    def _clip(self, text: str) -> str:
        return truncate(text, self.max_content_length)
