from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Mapping

from .colors import color_for
from .date_grid import format_tick_label, generate_grid_weeks, generate_ticks
from .owner_ordering import order_owners
from .task_layout import as_day, days_between, position_task, row_top
from .timeline_models import (
    HeaderTick,
    LayoutSettings,
    OwnerRow,
    RenderFrame,
    Resolution,
    Task,
    TaskBar,
    ZoomSettings,
)
from .zoom import resolution_for

logger = logging.getLogger(__name__)


def build_frame(
    grouped_tasks: Mapping[str, list[Task]],
    chart_start: dt.date | None,
    pixels_per_day: int,
    owner_sequence: list[str],
    settings: LayoutSettings = LayoutSettings(),
    zoom: ZoomSettings = ZoomSettings(),
    today: dt.date | None = None,
) -> RenderFrame:
    """
    Lay out one timeline paint pass.

    - Owner rows follow `owner_sequence`, then remaining owners alphabetically.
    - The window runs from `chart_start` to the latest task end plus padding.
    - Tasks without usable dates are skipped rather than positioned.
    - Without a chart start the window opens on January 1 of today's year.
    - Pure: the same inputs (including `today`) always give an equal frame.
    """

    today = as_day(today) if today is not None else dt.date.today()
    chart_start = as_day(chart_start) if chart_start is not None else dt.date(today.year, 1, 1)

    owners = order_owners(grouped_tasks.keys(), owner_sequence)
    window_end = resolve_window_end(_iter_tasks(grouped_tasks), chart_start, settings.padding_days)
    resolution = resolution_for(pixels_per_day, zoom)

    header_dates = generate_ticks(chart_start, window_end, resolution)
    header_ticks = _header_ticks(header_dates, chart_start, pixels_per_day)
    grid_lines = tuple(
        days_between(chart_start, day) * pixels_per_day for day in generate_grid_weeks(chart_start, window_end)
    )
    boundary_lines: tuple[float, ...] = ()
    if resolution is Resolution.MONTH:
        boundary_lines = tuple(tick.left_px for tick in header_ticks)

    rows = tuple(
        _owner_row(owner, idx, grouped_tasks.get(owner, []), chart_start, pixels_per_day, settings)
        for idx, owner in enumerate(owners)
    )

    today_px = None
    if chart_start <= today <= window_end:
        today_px = days_between(chart_start, today) * pixels_per_day

    frame = RenderFrame(
        window_start=chart_start,
        window_end=window_end,
        pixels_per_day=pixels_per_day,
        resolution=resolution,
        width_px=days_between(chart_start, window_end) * pixels_per_day,
        height_px=len(owners) * settings.row_height,
        header_ticks=header_ticks,
        grid_lines=grid_lines,
        boundary_lines=boundary_lines,
        rows=rows,
        today_px=today_px,
    )
    logger.debug(
        "Built frame %s..%s at %spx/day (%s): %d rows, %d bars",
        chart_start,
        window_end,
        pixels_per_day,
        resolution.value,
        len(rows),
        len(frame.bars),
    )
    return frame


def resolve_window_end(tasks: Iterable[Task], chart_start: dt.date, padding_days: int = 7) -> dt.date:
    """Latest dated task end plus padding, never earlier than `chart_start` plus padding."""
    ends = [task.end for task in tasks if task.is_dated]
    latest = max(max(ends), chart_start) if ends else chart_start
    return latest + dt.timedelta(days=padding_days)


def owner_order_for(grouped_tasks: Mapping[str, list[Task]], owner_sequence: list[str]) -> list[str]:
    """Row order as `build_frame` would lay it out."""
    return order_owners(grouped_tasks.keys(), owner_sequence)


def _header_ticks(dates: list[dt.date], chart_start: dt.date, pixels_per_day: int) -> tuple[HeaderTick, ...]:
    ticks: list[HeaderTick] = []
    previous = chart_start
    for day in dates:
        ticks.append(
            HeaderTick(
                date=day,
                label=format_tick_label(day),
                left_px=days_between(chart_start, day) * pixels_per_day,
                width_px=days_between(previous, day) * pixels_per_day,
            )
        )
        previous = day
    return tuple(ticks)


def _owner_row(
    owner: str,
    index: int,
    tasks: list[Task],
    chart_start: dt.date,
    pixels_per_day: int,
    settings: LayoutSettings,
) -> OwnerRow:
    color = color_for(owner)
    top = row_top(index, settings)
    bars: list[TaskBar] = []
    for task in tasks:
        if not task.is_dated:
            logger.debug("Skipping task %s (%r): missing or invalid dates", task.id, task.name)
            continue
        position = position_task(task, chart_start, pixels_per_day, settings)
        bars.append(
            TaskBar(
                task=task,
                left_px=position.left_px,
                top_px=top,
                width_px=position.width_px,
                height_px=settings.task_height,
                color=color,
            )
        )
    return OwnerRow(owner=owner, index=index, top_px=index * settings.row_height, color=color, bars=tuple(bars))


def _iter_tasks(grouped_tasks: Mapping[str, list[Task]]) -> Iterable[Task]:
    for tasks in grouped_tasks.values():
        yield from tasks
