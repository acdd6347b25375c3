"""Completion metrics over a project's child tasks."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from forumsync.core.snapshot.models import CompletionMetrics
from forumsync.core.tasks.models import ChildTask
from forumsync.utils.dates import utc_now


def calculate(
    children: Sequence[ChildTask],
    clock: Callable[[], datetime] = utc_now,
) -> CompletionMetrics:
    """
    Count completed children and compute the rounded percentage.

    Callers pass every child, including ones that failed validation, so
    incomplete rows still weigh on the denominator.

    Example:
        >>> calculate([]).percentage
        0
    """
    total = len(children)
    done = sum(1 for child in children if child.is_completed)
    percentage = 0 if total == 0 else _round_half_up(done * 100, total)
    return CompletionMetrics(total=total, done=done, percentage=percentage, updated_at=clock())


def _round_half_up(numerator: int, denominator: int) -> int:
    # Integer arithmetic so 50.5 rounds to 51 rather than banker's rounding.
    return (2 * numerator + denominator) // (2 * denominator)
