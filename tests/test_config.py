import datetime as dt

import pytest

from timeline_view.config import ConfigValidationError, load_config, parse_config
from timeline_view.timeline_models import ZoomSettings


def _write(tmp_path, text):
    path = tmp_path / "view.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_full_config_is_parsed(tmp_path):
    path = _write(
        tmp_path,
        """
title: Trip Planning
owner_sequence: "Frank, Tony ,, Ning"
chart_start: 2024-01-01
zoom:
  default: 15
  min: 4
  max: 40
  step: 2
  week_threshold: 10
columns:
  title: Title
  owner: AssignedTo
  start: TripStart
  end: TripEnd
""",
    )

    config = load_config(path)

    assert config.title == "Trip Planning"
    assert config.owner_sequence == ["Frank", "Tony", "Ning"]
    assert config.chart_start == dt.date(2024, 1, 1)
    assert config.zoom == ZoomSettings(default=15, min=4, max=40, step=2, week_threshold=10)
    assert config.columns.owner == "AssignedTo"
    assert config.columns.start == "TripStart"
    assert config.columns.end == "TripEnd"


def test_empty_document_gives_defaults(tmp_path):
    config = load_config(_write(tmp_path, ""))

    assert config.owner_sequence == []
    assert config.zoom == ZoomSettings()
    assert config.columns.owner is None
    assert config.chart_start is None


def test_owner_sequence_accepts_list():
    config = parse_config({"owner_sequence": ["Frank", " Tony ", ""]})

    assert config.owner_sequence == ["Frank", "Tony"]


def test_chart_start_accepts_quoted_string():
    assert parse_config({"chart_start": "2024-03-01"}).chart_start == dt.date(2024, 3, 1)


def test_default_zoom_is_clamped_into_custom_bounds():
    config = parse_config({"zoom": {"min": 2, "max": 10}})

    assert config.zoom.default == 10


def test_unknown_keys_are_rejected():
    with pytest.raises(ConfigValidationError, match="unexpected fields"):
        parse_config({"owners": "Frank"})

    with pytest.raises(ConfigValidationError, match="zoom"):
        parse_config({"zoom": {"speed": 3}})


@pytest.mark.parametrize(
    "zoom",
    [
        {"min": 10, "max": 5},
        {"step": 0},
        {"min": 0},
        {"min": "five"},
        {"max": True},
        {"default": 50},
    ],
)
def test_invalid_zoom_bounds_raise(zoom):
    with pytest.raises(ConfigValidationError):
        parse_config({"zoom": zoom})


def test_invalid_types_raise_with_path():
    with pytest.raises(ConfigValidationError, match="owner_sequence\\[1\\]"):
        parse_config({"owner_sequence": ["Frank", 3]})

    with pytest.raises(ConfigValidationError, match="chart_start"):
        parse_config({"chart_start": "next monday"})

    with pytest.raises(ConfigValidationError, match="columns.title"):
        parse_config({"columns": {"title": ""}})

    with pytest.raises(ConfigValidationError, match="top level"):
        parse_config(["not", "a", "mapping"])
