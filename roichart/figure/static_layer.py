# roichart/figure/static_layer.py
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from matplotlib.text import Text

from .base import ChartLayout
from .scales import LinearScale, Scales
from .utils import money_label

Z_STATIC = 1
TICK_FONT_PX = 10
TITLE_FONT_PX = 14
TICK_PADDING = 9  # tick size (6) + padding (3)


@dataclass
class Defs:
    """Reusable paints keyed by id (the canvas' <defs> block)."""
    paints: Dict[str, Any] = field(default_factory=dict)

    def add(self, paint) -> None:
        if paint.id in self.paints:
            raise KeyError(f"Paint '{paint.id}' is already defined")
        self.paints[paint.id] = paint

    def __getitem__(self, paint_id: str):
        return self.paints[paint_id]

    def __contains__(self, paint_id: str) -> bool:
        return paint_id in self.paints


@dataclass
class AxisTicks:
    values: List[float]
    labels: List[str]
    texts: List[Text]


@dataclass
class StaticLayer:
    bottom: AxisTicks
    left: AxisTicks
    x_title: Text
    y_title: Text
    defs: Defs


def step_ticks(scale: LinearScale, step: float) -> List[float]:
    """Every multiple of ``step`` from 0 up to the domain maximum."""
    top = scale.domain[1]
    if not math.isfinite(top) or top < 0:
        return []
    return [k * step for k in range(int(math.floor(top / step + 1e-9)) + 1)]


def draw_bottom_axis(ax, scale: LinearScale, layout: ChartLayout) -> AxisTicks:
    values = scale.ticks(layout.x_ticks)
    labels = [money_label(v) for v in values]
    y = layout.plot_bottom + TICK_PADDING
    texts = [
        ax.text(scale(v), y, lbl, ha="center", va="top", fontsize=TICK_FONT_PX,
                fontfamily=layout.font_family, zorder=Z_STATIC)
        for v, lbl in zip(values, labels)
    ]
    return AxisTicks(values=values, labels=labels, texts=texts)


def draw_left_axis(ax, scale: LinearScale, layout: ChartLayout) -> AxisTicks:
    values = step_ticks(scale, layout.y_step)
    labels = [money_label(v) for v in values]
    x = layout.plot_left - TICK_PADDING
    texts = [
        ax.text(x, scale(v), lbl, ha="right", va="center", fontsize=TICK_FONT_PX,
                fontfamily=layout.font_family, zorder=Z_STATIC)
        for v, lbl in zip(values, labels)
    ]
    return AxisTicks(values=values, labels=labels, texts=texts)


def draw_static_layer(ax, scales: Scales, layout: ChartLayout) -> StaticLayer:
    # text labels only: no axis baselines, no tick marks
    bottom = draw_bottom_axis(ax, scales.x, layout)
    left = draw_left_axis(ax, scales.y, layout)
    x_title = ax.text(layout.width / 2, layout.height - 15, "Budget (in millions)",
                      ha="center", va="baseline", fontsize=TITLE_FONT_PX,
                      fontfamily=layout.font_family, zorder=Z_STATIC)
    y_title = ax.text(20, layout.height / 2, "Revenue (in millions)",
                      ha="center", va="baseline", rotation=90, rotation_mode="anchor",
                      fontsize=TITLE_FONT_PX, fontfamily=layout.font_family, zorder=Z_STATIC)
    return StaticLayer(bottom=bottom, left=left, x_title=x_title, y_title=y_title, defs=Defs())
