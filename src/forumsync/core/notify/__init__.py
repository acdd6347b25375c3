"""Rendering of project snapshots into chat messages."""

from .formatter import MessageFormatter, format_task_line, marker_label, render_markers

__all__ = ["MessageFormatter", "format_task_line", "marker_label", "render_markers"]
