from __future__ import annotations

import datetime as dt
import math
from typing import Sequence

from .timeline_models import HitResult, LayoutSettings

_DEFAULT_ROW_HEIGHT = LayoutSettings().row_height


def map_point_to_domain(
    pixel_x: float,
    pixel_y: float,
    scroll_offset_x: float,
    window_start: dt.date,
    pixels_per_day: float,
    owner_order: Sequence[str],
    container_left: float = 0,
    container_top: float = 0,
    row_height: float = _DEFAULT_ROW_HEIGHT,
) -> HitResult:
    """
    Map a pointer position inside the scrollable rows to (date, owner).

    Points below the last row or above the first give `owner=None`; callers
    treat that as "no context action". Nothing here raises for odd input.
    """

    clicked: dt.date | None = None
    if pixels_per_day > 0:
        day_offset = (pixel_x - container_left + scroll_offset_x) / pixels_per_day
        # NaN and infinite offsets map to no day.
        if math.isfinite(day_offset):
            try:
                clicked = window_start + dt.timedelta(days=math.floor(day_offset))
            except OverflowError:
                clicked = None

    owner: str | None = None
    if row_height > 0:
        row_offset = (pixel_y - container_top) / row_height
        if math.isfinite(row_offset):
            owner_index = math.floor(row_offset)
            if 0 <= owner_index < len(owner_order):
                owner = owner_order[owner_index]

    return HitResult(date=clicked, owner=owner)
