from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime


UNASSIGNED_OWNER = "Unassigned"
"""Owner used when a list item carries no owner value."""


class Resolution(str, enum.Enum):
    """Header tick granularity."""

    WEEK = "week"
    MONTH = "month"


@dataclass
class Task:
    """A dated list item that renders as a bar in its owner's row."""

    id: str
    name: str
    owner: str = UNASSIGNED_OWNER
    start: date | None = None
    end: date | None = None
    progress: float = 0.0
    custom_class: str | None = None

    def __post_init__(self) -> None:
        # Layout works in calendar days; drop any time-of-day component.
        if isinstance(self.start, datetime):
            self.start = self.start.date()
        if isinstance(self.end, datetime):
            self.end = self.end.date()

    @property
    def is_dated(self) -> bool:
        """True when both boundaries are usable calendar days."""
        return isinstance(self.start, date) and isinstance(self.end, date)


GroupedTasks = dict[str, list[Task]]
"""Owner name -> that owner's tasks, sorted by start ascending."""


@dataclass(frozen=True)
class LayoutSettings:
    """Fixed pixel geometry shared by layout, hit testing and painting."""

    row_height: int = 50
    left_column_width: int = 150
    min_task_width: int = 30
    task_height: int = 26
    task_top_offset: int = 12
    task_width_reduction: int = 8
    header_label_offset: int = 20
    today_line_width: int = 2
    padding_days: int = 7


@dataclass(frozen=True)
class ZoomSettings:
    """Pixels-per-day bounds and the week/month switch point."""

    default: int = 20
    min: int = 5
    max: int = 30
    step: int = 1
    week_threshold: int = 12


@dataclass(frozen=True)
class TaskPosition:
    left_px: float
    width_px: float


@dataclass(frozen=True)
class HeaderTick:
    """Labelled header cell ending at `date`."""

    date: date
    label: str
    left_px: float
    width_px: float


@dataclass(frozen=True)
class TaskBar:
    """Positioned rectangle for one task."""

    task: Task
    left_px: float
    top_px: float
    width_px: float
    height_px: float
    color: str


@dataclass(frozen=True)
class OwnerRow:
    owner: str
    index: int
    top_px: float
    color: str
    bars: tuple[TaskBar, ...] = ()


@dataclass(frozen=True)
class HitResult:
    """Domain position under a pointer; `owner` is None below the last row."""

    date: date | None
    owner: str | None


@dataclass(frozen=True)
class RenderFrame:
    """
    Renderer-agnostic geometry for one paint pass.

    Offsets are in pixels from the chart start date (x) and from the top of
    the first owner row (y). `today_px` is None when today is outside the window.
    """

    window_start: date
    window_end: date
    pixels_per_day: int
    resolution: Resolution
    width_px: float
    height_px: float
    header_ticks: tuple[HeaderTick, ...] = ()
    grid_lines: tuple[float, ...] = ()
    boundary_lines: tuple[float, ...] = ()
    rows: tuple[OwnerRow, ...] = ()
    today_px: float | None = None

    @property
    def owners(self) -> list[str]:
        return [row.owner for row in self.rows]

    @property
    def bars(self) -> list[TaskBar]:
        return [bar for row in self.rows for bar in row.bars]


@dataclass
class ColumnMapping:
    """List column internal names used to read task fields from exported items."""

    title: str = "Title"
    owner: str | None = None
    start: str = "StartDate"
    end: str = "EndDate"


@dataclass
class TimelineConfig:
    """View configuration normally edited through the web part property pane."""

    title: str = "Timeline"
    owner_sequence: list[str] = field(default_factory=list)
    chart_start: date | None = None
    zoom: ZoomSettings = field(default_factory=ZoomSettings)
    columns: ColumnMapping = field(default_factory=ColumnMapping)
