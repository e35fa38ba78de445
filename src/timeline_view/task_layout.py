from __future__ import annotations

import datetime as dt
import math

from .timeline_models import LayoutSettings, Task, TaskPosition

SECONDS_PER_DAY = 24 * 60 * 60


def days_between(start: dt.date, end: dt.date) -> int:
    """
    Whole days from `start` to `end`, rounded up.

    Accepts dates or datetimes; sub-day remainders never pull a bar left of its day.
    """
    delta = end - start
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def as_day(value: dt.date) -> dt.date:
    """Calendar day of a date or datetime."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def position_task(
    task: Task,
    window_start: dt.date,
    pixels_per_day: int,
    settings: LayoutSettings = LayoutSettings(),
) -> TaskPosition:
    """
    Horizontal placement of a dated task relative to the chart start.

    Width counts both boundary days, subtracts the inter-bar gap and is never
    narrower than `min_task_width`, so reversed or zero-length intervals stay visible.
    """

    if not task.is_dated:
        raise ValueError(f"Task '{task.id}' has no usable start/end dates")

    # Task boundaries are calendar days, so the window start must be one too.
    left = days_between(as_day(window_start), task.start) * pixels_per_day
    span_days = days_between(task.start, task.end) + 1
    width = span_days * pixels_per_day - settings.task_width_reduction
    return TaskPosition(left_px=left, width_px=max(width, settings.min_task_width))


def row_top(row_index: int, settings: LayoutSettings = LayoutSettings()) -> int:
    """Top of the task bars in the given owner row."""
    return row_index * settings.row_height + settings.task_top_offset
