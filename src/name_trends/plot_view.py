#!/usr/bin/env python

import base64
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, List, Optional, Sequence, Tuple, Union

import matplotlib
matplotlib.use("Agg")  # Use the Agg backend, the GUI only needs PNG bytes
import matplotlib.pyplot as plt
import seaborn as sns

from .data_analyzer import DECADES, RankSeries, decade_year

# --- Configuration ---
SPACE = 20  # pixels between the plot band and the top/bottom edge
PLOT_SIZE = 600
DPI = 100
RANK_SCALE = 1000
# black, red, blue, dark gray
PALETTE: Tuple[Tuple[int, int, int], ...] = ((0, 0, 0), (255, 0, 0), (0, 0, 255), (64, 64, 64))
GRID_COLOR = (0, 0, 0)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Line:
    x1: int
    y1: int
    x2: int
    y2: int
    color: RGB


@dataclass(frozen=True)
class Label:
    text: str
    x: int
    y: int
    color: RGB


Primitive = Union[Line, Label]


def color_for(index: int, palette: Sequence[RGB] = PALETTE) -> RGB:
    return palette[index % len(palette)]


def rank_to_y(rank: int, height: int, space: int = SPACE) -> int:
    """
    Vertical pixel for a rank. Rank 1 lands just under the top boundary,
    unranked (0) and ranks past the scale are pinned to the bottom boundary.
    """
    if rank == 0 or rank >= RANK_SCALE:
        return height - space
    usable = height - space * 2
    return usable * rank // RANK_SCALE - 1 + space


def series_label(series: RankSeries, index: int) -> str:
    return f"{series.name} {series.rank_at(index)}"


def build_scene(active: Sequence[RankSeries], width: int, height: int, space: int = SPACE) -> List[Primitive]:
    """Every line and label of one full redraw, in drawing order."""
    scene: List[Primitive] = [
        Line(0, space, width, space, GRID_COLOR),
        Line(0, height - space, width, height - space, GRID_COLOR),
    ]

    gap = width // DECADES
    for i in range(DECADES):
        scene.append(Line(gap * i, 0, gap * i, height, GRID_COLOR))
        scene.append(Label(str(decade_year(i)), gap * i, height, GRID_COLOR))

    for position, series in enumerate(active):
        color = color_for(position)
        # the segment loop only labels its second endpoint
        scene.append(Label(series_label(series, 0), 0, rank_to_y(series.rank_at(0), height, space), color))
        for decade in range(1, DECADES):
            x1 = (decade - 1) * gap
            y1 = rank_to_y(series.rank_at(decade - 1), height, space)
            x2 = x1 + gap
            y2 = rank_to_y(series.rank_at(decade), height, space)
            scene.append(Line(x1, y1, x2, y2, color))
            scene.append(Label(series_label(series, decade), x2, y2, color))
    return scene


@dataclass(frozen=True)
class PlotState:
    """Series on the graph, oldest first, no duplicates."""
    active: Tuple[RankSeries, ...] = ()

    def __len__(self) -> int:
        return len(self.active)

    def __contains__(self, series: RankSeries) -> bool:
        return series in self.active

    def with_series(self, series: RankSeries) -> "PlotState":
        if series in self.active:
            return self
        return PlotState(self.active + (series,))

    def without_earliest(self) -> "PlotState":
        if not self.active:
            return self
        return PlotState(self.active[1:])

    def cleared(self) -> "PlotState":
        return PlotState()


class PlotView:
    """Holds the active series and asks for a redraw whenever they change."""
    def __init__(self, on_change: Optional[Callable[["PlotView"], None]] = None):
        self.state = PlotState()
        self.on_change = on_change

    @property
    def active(self) -> Tuple[RankSeries, ...]:
        return self.state.active

    def _redraw(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def add_series(self, series: RankSeries) -> None:
        new_state = self.state.with_series(series)
        if new_state is not self.state:
            self.state = new_state
            self._redraw()

    def remove_earliest(self) -> None:
        if self.state.active:
            self.state = self.state.without_earliest()
            self._redraw()

    def remove_all(self) -> None:
        self.state = self.state.cleared()
        self._redraw()

    def scene(self, width: int = PLOT_SIZE, height: int = PLOT_SIZE) -> List[Primitive]:
        return build_scene(self.state.active, width, height)


def to_mpl_color(rgb: RGB) -> Tuple[float, float, float]:
    return tuple(channel / 255 for channel in rgb)


def render_figure(scene: Sequence[Primitive], width: int = PLOT_SIZE, height: int = PLOT_SIZE):
    """Draws a scene on a figure whose data coordinates are the scene's pixels."""
    sns.set_theme(style="white")
    fig, ax = plt.subplots(figsize=(width / DPI, height / DPI), dpi=DPI)
    ax.set_position([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # screen coordinates, y grows downward
    ax.axis("off")

    for item in scene:
        if isinstance(item, Line):
            ax.plot([item.x1, item.x2], [item.y1, item.y2], color=to_mpl_color(item.color), linewidth=1)
        else:
            ax.text(item.x, item.y, item.text, color=to_mpl_color(item.color), fontsize=8, va="baseline", clip_on=True)
    return fig


def fig_to_base64(fig) -> str:
    buf = BytesIO(); fig.savefig(buf, format="png", dpi=DPI); plt.close(fig)
    return base64.b64encode(buf.getvalue()).decode("utf-8")
