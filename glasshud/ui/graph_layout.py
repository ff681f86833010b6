"""Geometry of the performance graph, kept free of Qt so it can be tested headlessly."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from glasshud.core.metrics import round_half_up
from glasshud.core.session import PerformanceSample

GRAPH_HEIGHT = 120
MIN_WPM_SCALE = 50
GRID_DIVISIONS = 4
X_LABEL_COUNT = 5

Point = tuple[float, float]


@dataclass(frozen=True)
class Padding:
    top: int = 15
    right: int = 15
    bottom: int = 25
    left: int = 35


@dataclass(frozen=True)
class AxisLabel:
    position: float
    text: str


@dataclass(frozen=True)
class GraphLayout:
    width: float
    height: float
    enough_data: bool
    max_wpm: int = MIN_WPM_SCALE
    grid: tuple[AxisLabel, ...] = ()
    x_labels: tuple[AxisLabel, ...] = ()
    wpm_points: tuple[Point, ...] = ()
    accuracy_points: tuple[Point, ...] = ()


def layout_graph(
    samples: Sequence[PerformanceSample],
    width: float,
    height: float = GRAPH_HEIGHT,
    padding: Padding = Padding(),
) -> GraphLayout:
    """Map performance samples onto widget coordinates.

    ``grid`` holds the y position and WPM label of each horizontal grid line
    (top to bottom); ``x_labels`` the x position of each elapsed-seconds tick.
    Fewer than two samples yield ``enough_data=False`` and nothing to plot.
    """
    if len(samples) < 2 or samples[-1].second <= 0:
        return GraphLayout(width=width, height=height, enough_data=False)

    graph_width = max(0.0, width - padding.left - padding.right)
    graph_height = max(0.0, height - padding.top - padding.bottom)
    max_wpm = max(max(s.wpm for s in samples), MIN_WPM_SCALE)
    max_time = samples[-1].second

    grid = []
    for i in range(GRID_DIVISIONS + 1):
        y = padding.top + (graph_height / GRID_DIVISIONS) * i
        value = round_half_up(max_wpm - (max_wpm / GRID_DIVISIONS) * i)
        grid.append(AxisLabel(position=y, text=str(value)))

    x_labels = []
    time_step = max(1, math.ceil(max_time / X_LABEL_COUNT))
    for t in range(0, max_time + 1, time_step):
        x = padding.left + (t / max_time) * graph_width
        x_labels.append(AxisLabel(position=x, text=f"{t}s"))

    def x_of(second: int) -> float:
        return padding.left + (second / max_time) * graph_width

    wpm_points = tuple(
        (x_of(s.second), padding.top + (1 - s.wpm / max_wpm) * graph_height) for s in samples
    )
    accuracy_points = tuple(
        (x_of(s.second), padding.top + (1 - s.accuracy / 100) * graph_height) for s in samples
    )

    return GraphLayout(
        width=width,
        height=height,
        enough_data=True,
        max_wpm=max_wpm,
        grid=tuple(grid),
        x_labels=tuple(x_labels),
        wpm_points=wpm_points,
        accuracy_points=accuracy_points,
    )
