import datetime as dt

from timeline_view.hit_test import map_point_to_domain
from timeline_view.task_layout import position_task
from timeline_view.timeline_models import Task

START = dt.date(2024, 1, 1)
OWNERS = ["Frank", "Tony"]


def test_point_maps_to_day_and_owner_row():
    hit = map_point_to_domain(41, 10, 0, START, 20, OWNERS)

    assert hit.date == dt.date(2024, 1, 3)
    assert hit.owner == "Frank"

    assert map_point_to_domain(41, 60, 0, START, 20, OWNERS).owner == "Tony"


def test_scroll_and_container_offsets_are_applied():
    assert map_point_to_domain(1, 10, 40, START, 20, OWNERS).date == dt.date(2024, 1, 3)

    hit = map_point_to_domain(191, 75, 0, START, 20, OWNERS, container_left=150, container_top=25)
    assert hit.date == dt.date(2024, 1, 3)
    assert hit.owner == "Tony"


def test_point_below_last_row_has_no_owner():
    hit = map_point_to_domain(41, 120, 0, START, 20, OWNERS)

    assert hit.owner is None
    assert hit.date == dt.date(2024, 1, 3)


def test_point_above_first_row_has_no_owner():
    assert map_point_to_domain(41, -5, 0, START, 20, OWNERS).owner is None


def test_point_left_of_start_maps_before_window():
    assert map_point_to_domain(-1, 10, 0, START, 20, OWNERS).date == dt.date(2023, 12, 31)


def test_non_positive_zoom_gives_no_date():
    hit = map_point_to_domain(41, 10, 0, START, 0, OWNERS)

    assert hit.date is None
    assert hit.owner == "Frank"


def test_hit_test_inverts_task_left_edge():
    for offset in (0, 3, 17, 45):
        task_start = START + dt.timedelta(days=offset)
        task = Task(id="t", name="t", start=task_start, end=task_start + dt.timedelta(days=2))
        for pixels_per_day in (5, 12, 30):
            left = position_task(task, START, pixels_per_day).left_px
            hit = map_point_to_domain(left + 1, 0, 0, START, pixels_per_day, OWNERS)
            assert hit.date == task_start


def test_non_finite_coordinates_give_empty_parts():
    hit = map_point_to_domain(float("inf"), 10, 0, START, 20, OWNERS)
    assert hit.date is None
    assert hit.owner == "Frank"

    hit = map_point_to_domain(10, float("nan"), 0, START, 20, OWNERS)
    assert hit.date == START
    assert hit.owner is None

    hit = map_point_to_domain(float("nan"), float("-inf"), 0, START, 20, OWNERS)
    assert (hit.date, hit.owner) == (None, None)

    assert map_point_to_domain(41, 10, float("inf"), START, 20, OWNERS).date is None
