from __future__ import annotations

from .timeline_models import Resolution, ZoomSettings

DEFAULT_ZOOM = ZoomSettings()


def zoom_in(current: int, settings: ZoomSettings = DEFAULT_ZOOM) -> int:
    return min(current + settings.step, settings.max)


def zoom_out(current: int, settings: ZoomSettings = DEFAULT_ZOOM) -> int:
    return max(current - settings.step, settings.min)


def clamp_zoom(value: int, settings: ZoomSettings = DEFAULT_ZOOM) -> int:
    """Bring an externally supplied pixels-per-day value into bounds."""
    return max(settings.min, min(value, settings.max))


def can_zoom_in(current: int, settings: ZoomSettings = DEFAULT_ZOOM) -> bool:
    return current < settings.max


def can_zoom_out(current: int, settings: ZoomSettings = DEFAULT_ZOOM) -> bool:
    return current > settings.min


def is_week_resolution(pixels_per_day: int, settings: ZoomSettings = DEFAULT_ZOOM) -> bool:
    """Week headers once a week is wide enough to label; months below that."""
    return pixels_per_day >= settings.week_threshold


def resolution_for(pixels_per_day: int, settings: ZoomSettings = DEFAULT_ZOOM) -> Resolution:
    return Resolution.WEEK if is_week_resolution(pixels_per_day, settings) else Resolution.MONTH
