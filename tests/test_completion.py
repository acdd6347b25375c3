"""Tests for completion metrics."""

import pytest

from factories import FIXED_NOW, fixed_clock, make_child
from forumsync.core.tasks.completion import calculate


class TestCalculate:
    """Test suite for completion.calculate."""

    def test_empty(self) -> None:
        """Test that no children gives 0% rather than dividing by zero."""
        metrics = calculate([], clock=fixed_clock)
        assert (metrics.total, metrics.done, metrics.percentage) == (0, 0, 0)
        assert metrics.updated_at == FIXED_NOW

    def test_counts_completed(self) -> None:
        children = [
            make_child("T1", status="完了"),
            make_child("T2", status="in-progress"),
            make_child("T3", status="completed"),
            make_child("T4", status="未着手"),
        ]
        metrics = calculate(children, clock=fixed_clock)

        assert metrics.total == 4
        assert metrics.done == 2
        assert metrics.percentage == 50
        assert metrics.remaining == 2

    @pytest.mark.parametrize(
        "done,total,expected",
        [
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds half up
            (1, 200, 1),  # 0.5 rounds half up
            (101, 200, 51),  # 50.5 rounds half up
            (3, 3, 100),
        ],
    )
    def test_rounding(self, done: int, total: int, expected: int) -> None:
        """Test that percentages round half up."""
        children = [make_child(f"T{i}", status="完了") for i in range(done)]
        children += [make_child(f"U{i}", status="未着手") for i in range(total - done)]

        assert calculate(children, clock=fixed_clock).percentage == expected

    def test_invalid_rows_still_count(self) -> None:
        """Test that rows with blank fields weigh on the total."""
        children = [make_child("T1", status="完了"), make_child("T2", title="", status="")]
        metrics = calculate(children, clock=fixed_clock)
        assert metrics.total == 2
        assert metrics.percentage == 50
