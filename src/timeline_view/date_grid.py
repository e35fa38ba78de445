from __future__ import annotations

import datetime as dt

from .timeline_models import Resolution

DAYS_IN_A_WEEK = 7
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def generate_ticks(window_start: dt.date, window_end: dt.date, resolution: Resolution) -> list[dt.date]:
    """
    Return header tick dates covering [window_start, window_end].

    Week ticks are Sunday-aligned and may begin before `window_start`. Month
    ticks begin on the first of the month after the one holding `window_start`.
    One tick past `window_end` is always appended so the right edge has a cell.
    """

    if resolution is Resolution.WEEK:
        ticks = generate_grid_weeks(window_start, window_end)
        current = ticks[-1] + dt.timedelta(days=DAYS_IN_A_WEEK) if ticks else week_start(window_start)
        ticks.append(current)
        return ticks

    ticks = []
    current = add_months(window_start.replace(day=1), 1)
    while current <= window_end:
        ticks.append(current)
        current = add_months(current, 1)
    ticks.append(current)
    return ticks


def generate_grid_weeks(window_start: dt.date, window_end: dt.date) -> list[dt.date]:
    """Sunday-aligned gridline dates up to and including `window_end`."""

    ticks: list[dt.date] = []
    current = week_start(window_start)
    step = dt.timedelta(days=DAYS_IN_A_WEEK)
    while current <= window_end:
        ticks.append(current)
        current += step
    return ticks


def week_start(day: dt.date) -> dt.date:
    """Sunday on or before `day`."""
    # date.weekday() is Monday=0; shift so Sunday=0.
    return day - dt.timedelta(days=(day.weekday() + 1) % DAYS_IN_A_WEEK)


def add_months(day: dt.date, months: int) -> dt.date:
    """Shift a first-of-month date by whole calendar months."""
    index = day.year * 12 + (day.month - 1) + months
    return dt.date(index // 12, index % 12 + 1, 1)


def format_tick_label(day: dt.date) -> str:
    """Header label such as 'Jan.05.24'."""
    return f"{_MONTH_ABBR[day.month - 1]}.{day.day:02d}.{day.year % 100:02d}"
