from __future__ import annotations

import logging
from importlib import metadata
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # ensure headless, deterministic output
import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, Rectangle

from .timeline_models import LayoutSettings, RenderFrame

logger = logging.getLogger(__name__)

DPI = 100
HEADER_PADDING_TOP = 12
HEADER_PADDING_X = 8
TASK_PADDING_X = 4
TASK_BORDER_RADIUS = 3
FONT_SCALE = 1.0
TITLE_FONT = 14 * FONT_SCALE
HEADER_FONT = 9 * FONT_SCALE
OWNER_FONT = 10 * FONT_SCALE
TASK_FONT = 8 * FONT_SCALE
FOOTER_FONT = 7 * FONT_SCALE
TITLE_HEIGHT = 40
HEADER_RULE_COLOR = "#0078d4"
WEEK_LINE_COLOR = "#e6e6e6"
MONTH_LINE_COLOR = "#d5d5d5"
TODAY_LINE_COLOR = "green"


def render_svg(
    frame: RenderFrame,
    out_path: str,
    title: str = "",
    settings: LayoutSettings = LayoutSettings(),
) -> None:
    """
    Paint a RenderFrame to a static SVG at `out_path`.

    - One figure pixel per frame pixel; the owner name column sits left of x=0.
    - Header cells, gridlines and the today marker are drawn from frame offsets only.
    - Bars are labelled with the task name, clipped to the bar.
    """

    header_height = settings.row_height
    left = -settings.left_column_width
    right = max(frame.width_px, 1)
    top = -header_height - TITLE_HEIGHT
    bottom = max(frame.height_px, settings.row_height)

    fig_width = (right - left) / DPI
    fig_height = (bottom - top) / DPI
    fig = plt.figure(figsize=(fig_width, fig_height), dpi=DPI)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(left, right)
    ax.set_ylim(bottom, top)
    ax.axis("off")

    if title:
        ax.text(0, top + TITLE_HEIGHT / 2, title, ha="left", va="center", fontsize=TITLE_FONT, fontweight="bold")

    _draw_header(ax, frame, header_height, left)
    _draw_grid(ax, frame, settings)
    _draw_rows(ax, frame, settings, left)

    footer = f"Timeline view v{_tool_version()}"
    fig.text(0.995, 0.005, footer, ha="right", va="bottom", fontsize=FOOTER_FONT, alpha=0.6)

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, format="svg")
    plt.close(fig)
    logger.info("Wrote %s (%d rows, %d bars)", out_path, len(frame.rows), len(frame.bars))


def _draw_header(ax: plt.Axes, frame: RenderFrame, header_height: int, left: float) -> None:
    y0 = -header_height
    ax.plot([left, frame.width_px], [0, 0], color=HEADER_RULE_COLOR, linewidth=1.0)
    ax.plot([0, 0], [y0, frame.height_px], color=HEADER_RULE_COLOR, linewidth=1.0)
    for tick in frame.header_ticks:
        if tick.left_px < 0 or tick.left_px > frame.width_px:
            continue
        ax.text(
            tick.left_px - HEADER_PADDING_X,
            y0 + HEADER_PADDING_TOP,
            tick.label,
            ha="left",
            va="top",
            fontsize=HEADER_FONT,
        )
        ax.plot([tick.left_px, tick.left_px], [y0 + 30, 0], color=WEEK_LINE_COLOR, linewidth=1.0)


def _draw_grid(ax: plt.Axes, frame: RenderFrame, settings: LayoutSettings) -> None:
    height = frame.height_px
    for x in frame.grid_lines:
        ax.plot([x, x], [0, height], color=WEEK_LINE_COLOR, linestyle=":", linewidth=1.0, zorder=1)
    for x in frame.boundary_lines:
        ax.plot([x, x], [0, height], color=MONTH_LINE_COLOR, linewidth=1.0, zorder=1)
    if frame.today_px is not None:
        ax.plot(
            [frame.today_px, frame.today_px],
            [0, height],
            color=TODAY_LINE_COLOR,
            linewidth=settings.today_line_width,
            zorder=2,
        )


def _draw_rows(ax: plt.Axes, frame: RenderFrame, settings: LayoutSettings, left: float) -> None:
    for row in frame.rows:
        ax.text(
            left + HEADER_PADDING_X,
            row.top_px + settings.row_height / 2,
            row.owner,
            ha="left",
            va="center",
            fontsize=OWNER_FONT,
        )
        ax.plot(
            [left, frame.width_px],
            [row.top_px + settings.row_height] * 2,
            color="#f0f0f0",
            linewidth=0.8,
            zorder=1,
        )
        for bar in row.bars:
            patch = FancyBboxPatch(
                (bar.left_px, bar.top_px),
                bar.width_px,
                bar.height_px,
                boxstyle=f"round,pad=0,rounding_size={TASK_BORDER_RADIUS}",
                facecolor=bar.color,
                edgecolor="none",
                zorder=3,
            )
            ax.add_patch(patch)
            clip = Rectangle((bar.left_px, bar.top_px), bar.width_px, bar.height_px, transform=ax.transData)
            label = ax.text(
                bar.left_px + TASK_PADDING_X,
                bar.top_px + bar.height_px / 2,
                bar.task.name,
                ha="left",
                va="center",
                fontsize=TASK_FONT,
                color="#ffffff",
                zorder=4,
            )
            label.set_clip_path(clip)


def _tool_version() -> str:
    try:
        return metadata.version("timeline-view")
    except metadata.PackageNotFoundError:
        return "0.0.0"
