from timeline_view.timeline_models import Resolution, ZoomSettings
from timeline_view.zoom import (
    can_zoom_in,
    can_zoom_out,
    clamp_zoom,
    is_week_resolution,
    resolution_for,
    zoom_in,
    zoom_out,
)


def test_zoom_steps_by_configured_step():
    assert zoom_in(20) == 21
    assert zoom_out(20) == 19
    settings = ZoomSettings(step=4)
    assert zoom_in(20, settings) == 24
    assert zoom_out(20, settings) == 16


def test_zoom_saturates_at_bounds():
    value = 20
    for _ in range(100):
        value = zoom_in(value)
    assert value == 30

    for _ in range(100):
        value = zoom_out(value)
    assert value == 5


def test_large_step_never_overshoots():
    settings = ZoomSettings(min=5, max=30, step=50)

    assert zoom_in(6, settings) == 30
    assert zoom_out(29, settings) == 5


def test_resolution_switches_at_threshold():
    assert not is_week_resolution(10)
    assert is_week_resolution(12)
    assert is_week_resolution(15)
    assert resolution_for(10) is Resolution.MONTH
    assert resolution_for(15) is Resolution.WEEK


def test_clamp_and_button_state():
    assert clamp_zoom(100) == 30
    assert clamp_zoom(1) == 5
    assert clamp_zoom(17) == 17
    assert not can_zoom_in(30)
    assert can_zoom_in(29)
    assert not can_zoom_out(5)
    assert can_zoom_out(6)
