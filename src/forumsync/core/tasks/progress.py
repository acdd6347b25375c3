"""Schedule classification for a project's tasks."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from forumsync.core.tasks.models import ChildTask, ProgressStatus
from forumsync.utils.dates import DEFAULT_TIMEZONE, parse_due_date


def is_overdue(child: ChildTask, today: date, tz_name: str = DEFAULT_TIMEZONE) -> bool:
    """
    Return True if an incomplete task's due date is strictly before today.

    Blank or unparseable due dates are never overdue.
    """
    if child.is_completed:
        return False
    due = parse_due_date(child.due_date, tz_name)
    if due is None:
        return False
    return due < today


def classify(
    children: Iterable[ChildTask], today: date, tz_name: str = DEFAULT_TIMEZONE
) -> ProgressStatus:
    """
    Classify a project as on schedule or delayed.

    Args:
        children: Valid child tasks
        today: Current date in the configured timezone
        tz_name: Timezone that due datetimes with an offset are read in

    Returns:
        DELAYED if any incomplete child is overdue, else ON_SCHEDULE
    """
    incomplete = [child for child in children if not child.is_completed]
    if not incomplete:
        return ProgressStatus.ON_SCHEDULE
    if any(is_overdue(child, today, tz_name) for child in incomplete):
        return ProgressStatus.DELAYED
    return ProgressStatus.ON_SCHEDULE
