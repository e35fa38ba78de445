import datetime as dt

from timeline_view.render_svg import render_svg
from timeline_view.timeline import build_frame
from timeline_view.timeline_models import Task


def test_renderer_produces_svg(tmp_path):
    start = dt.date(2024, 1, 1)
    grouped = {
        "Frank": [Task(id="1", name="Kyoto", owner="Frank", start=dt.date(2024, 1, 3), end=dt.date(2024, 1, 9))],
        "Ning": [Task(id="2", name="Oslo", owner="Ning", start=dt.date(2024, 1, 8), end=dt.date(2024, 1, 8))],
    }
    frame = build_frame(grouped, start, 20, ["Frank", "Tony"], today=dt.date(2024, 1, 5))

    out_file = tmp_path / "nested" / "timeline.svg"
    render_svg(frame, out_path=str(out_file), title="Trip Planning")

    assert out_file.exists()
    content = out_file.read_text(encoding="utf-8")
    assert "<svg" in content


def test_renderer_handles_empty_month_frame(tmp_path):
    frame = build_frame({}, dt.date(2024, 1, 1), 8, [], today=dt.date(2024, 1, 2))

    out_file = tmp_path / "empty.svg"
    render_svg(frame, out_path=str(out_file))

    assert out_file.stat().st_size > 0
