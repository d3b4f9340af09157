# roichart/figure/legend.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.image import AxesImage
from matplotlib.lines import Line2D
from matplotlib.text import Text

from .base import ChartLayout
from .scales import LinearScale, Scales, SequentialScale
from .static_layer import Defs, TICK_FONT_PX
from .utils import percent_label

Z_LEGEND = 3
TICK_SIZE = 6
TICK_PADDING = 3
LABEL_FONT_PX = 12
GRADIENT_ID = "legend-gradient"


@dataclass
class GradientPaint:
    """Linear gradient with (offset, colour) stops; offsets in [0, 1].
    (x1, y1) -> (x2, y2) gives the direction in bounding-box percent."""
    id: str
    stops: List[Tuple[float, str]]
    x1: str = "0%"
    y1: str = "100%"
    x2: str = "0%"
    y2: str = "0%"

    def to_cmap(self) -> LinearSegmentedColormap:
        return LinearSegmentedColormap.from_list(self.id, self.stops)


def legend_gradient(color: SequentialScale, steps: int = 100, paint_id: str = GRADIENT_ID) -> GradientPaint:
    d0, d1 = color.domain
    stops = []
    for i in range(steps + 1):
        offset = i / steps
        stops.append((offset, color(d0 + offset * (d1 - d0))))
    return GradientPaint(id=paint_id, stops=stops)


@dataclass
class Legend:
    x: float
    y: float
    width: float
    height: float
    scale: LinearScale
    tick_values: List[float]
    tick_labels: List[str]
    swatch: AxesImage
    baseline: Line2D
    tick_lines: List[Line2D]
    tick_texts: List[Text]
    label: Text


def draw_legend(ax, scales: Scales, defs: Defs, layout: ChartLayout) -> Legend:
    height = scales.y.range[0] - scales.y.range[1]
    width = layout.legend_width
    ox = layout.width - layout.margin.right + layout.legend_gap
    oy = layout.margin.top

    paint = legend_gradient(scales.color, layout.gradient_steps)
    defs.add(paint)
    # row 0 is the top of the swatch: domain maximum on top
    ramp = np.linspace(1.0, 0.0, 256)[:, None]
    swatch = ax.imshow(ramp, cmap=defs[GRADIENT_ID].to_cmap(), vmin=0.0, vmax=1.0,
                       extent=(ox, ox + width, oy + height, oy), origin="upper",
                       aspect="auto", interpolation="bilinear", zorder=Z_LEGEND)

    scale = LinearScale(domain=scales.color.domain, range=(height, 0.0))
    values = scale.ticks(layout.legend_ticks)
    labels = [percent_label(v) for v in values]
    edge = ox + width

    baseline = Line2D([edge + TICK_SIZE, edge, edge, edge + TICK_SIZE],
                      [oy + height, oy + height, oy, oy],
                      color="black", linewidth=1.0, zorder=Z_LEGEND)
    ax.add_line(baseline)
    tick_lines, tick_texts = [], []
    for v, lbl in zip(values, labels):
        ty = oy + scale(v)
        line = Line2D([edge, edge + TICK_SIZE], [ty, ty], color="black", linewidth=1.0, zorder=Z_LEGEND)
        ax.add_line(line)
        tick_lines.append(line)
        tick_texts.append(ax.text(edge + TICK_SIZE + TICK_PADDING, ty, lbl, ha="left", va="center",
                                  fontsize=TICK_FONT_PX, fontfamily=layout.font_family, zorder=Z_LEGEND))

    label = ax.text(ox - 5, oy + height + 20, "R.O.I.", ha="left", va="baseline",
                    fontsize=LABEL_FONT_PX, fontfamily=layout.font_family, zorder=Z_LEGEND)

    return Legend(x=ox, y=oy, width=width, height=height, scale=scale, tick_values=values,
                  tick_labels=labels, swatch=swatch, baseline=baseline, tick_lines=tick_lines,
                  tick_texts=tick_texts, label=label)
