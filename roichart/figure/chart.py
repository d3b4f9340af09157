# roichart/figure/chart.py
"""
Chart builder: records -> normalized records -> scales -> drawable.

The drawable is a matplotlib Figure holding one full-size "canvas" axes whose
data coordinates are the logical canvas (width x height, origin top-left). The
figure is created at 72 dpi so one logical unit is one point and one pixel.
"""
from __future__ import annotations
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import matplotlib.pyplot as plt

from .animation import CanvasScheduler, Scheduler
from .base import ChartLayout
from .bubble_layer import BubbleLayer, draw_bubble_layer
from .interaction import PointerRouter
from .legend import Legend, draw_legend
from .scales import Scales, build_scales
from .static_layer import Defs, StaticLayer, draw_static_layer
from .tooltip import TooltipOverlay, TooltipState
from .utils import save_figure
from roichart.data.base import RecordSource
from roichart.prep.normalize import NormalizedRecord, normalize_records

CANVAS_DPI = 72
# keep labels as <text> elements in SVG output
SVG_TEXT = {"svg.fonttype": "none"}


@dataclass
class BubbleChart:
    figure: Any
    ax: Any
    layout: ChartLayout
    records: List[NormalizedRecord]
    scales: Scales
    defs: Defs
    static: StaticLayer
    bubbles: BubbleLayer
    legend: Legend
    tooltip: TooltipState
    overlay: TooltipOverlay
    router: PointerRouter
    scheduler: Scheduler

    def redraw(self) -> None:
        self.overlay.sync()
        self.figure.canvas.draw_idle()

    def save(self, path: str | Path, overwrite: bool = True, dpi: int = CANVAS_DPI) -> Path:
        self.overlay.sync()
        with plt.rc_context(SVG_TEXT):
            return save_figure(self.figure, Path(path), dpi=dpi, overwrite=overwrite)

    def to_svg(self) -> str:
        self.overlay.sync()
        buf = io.StringIO()
        with plt.rc_context(SVG_TEXT):
            self.figure.savefig(buf, format="svg", dpi=CANVAS_DPI, transparent=True)
        return buf.getvalue()

    def close(self) -> None:
        self.router.detach()
        plt.close(self.figure)


def new_canvas(layout: ChartLayout):
    fig = plt.figure(figsize=(layout.width / CANVAS_DPI, layout.height / CANVAS_DPI), dpi=CANVAS_DPI)
    fig.patch.set_alpha(0.0)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_axis_off()
    ax.set_xlim(0.0, layout.width)
    ax.set_ylim(layout.height, 0.0)
    return fig, ax


def build_chart(records: Iterable[Mapping[str, Any]], layout: Optional[ChartLayout] = None,
                scheduler: Optional[Scheduler] = None) -> BubbleChart:
    layout = (layout or ChartLayout()).validate()
    normalized = normalize_records(records)
    scales = build_scales(normalized, layout)

    fig, ax = new_canvas(layout)
    static = draw_static_layer(ax, scales, layout)

    tooltip = TooltipState()
    overlay = TooltipOverlay(ax, tooltip, layout)
    if scheduler is None:
        scheduler = CanvasScheduler(fig.canvas)

    def on_change() -> None:
        overlay.sync()
        fig.canvas.draw_idle()

    bubbles = draw_bubble_layer(ax, normalized, scales, layout, tooltip, scheduler, on_change=on_change)
    legend = draw_legend(ax, scales, static.defs, layout)
    # imshow may touch the limits; pin the canvas coordinate space again
    ax.set_xlim(0.0, layout.width)
    ax.set_ylim(layout.height, 0.0)

    router = PointerRouter(bubbles, ax).attach(fig.canvas)
    return BubbleChart(figure=fig, ax=ax, layout=layout, records=normalized, scales=scales,
                       defs=static.defs, static=static, bubbles=bubbles, legend=legend,
                       tooltip=tooltip, overlay=overlay, router=router, scheduler=scheduler)


async def build_chart_async(source: RecordSource, layout: Optional[ChartLayout] = None,
                            scheduler: Optional[Scheduler] = None) -> BubbleChart:
    records = await source.load()
    return build_chart(records, layout=layout, scheduler=scheduler)
