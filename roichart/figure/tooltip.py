# roichart/figure/tooltip.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence

from matplotlib.patches import FancyBboxPatch

from .base import ChartLayout
from roichart.prep.normalize import NormalizedRecord

Z_TOOLTIP = 10
LINE_HEIGHT = 15
TEXT_INSET_X = 10
TEXT_INSET_Y = 20
TOOLTIP_FONT_PX = 13
TOOLTIP_BG = (0.0, 0.0, 0.0, 0.85)


def tooltip_lines(rec: NormalizedRecord) -> List[str]:
    return [
        f"{rec.title}",
        f"Revenue: ${rec.revenue:.1f}M",
        f"Budget: ${rec.budget:.1f}M",
        f"Profit: ${rec.profit:.1f}M",
        f"ROI: {rec.roi:.1f}%",
    ]


@dataclass
class TooltipState:
    """The one tooltip of a chart. Hidden by default; last write wins."""
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    lines: List[str] = field(default_factory=list)

    @property
    def height(self) -> float:
        return LINE_HEIGHT * len(self.lines) + LINE_HEIGHT

    def show(self, lines: Sequence[str]) -> None:
        self.lines = list(lines)
        self.visible = True

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def hide(self) -> None:
        self.visible = False


class TooltipOverlay:
    """Draws a TooltipState on the canvas: rounded dark box plus one text artist per line."""
    def __init__(self, ax, state: TooltipState, layout: ChartLayout) -> None:
        self.ax = ax
        self.state = state
        self.layout = layout
        self.background = FancyBboxPatch(
            (0.0, 0.0), layout.tooltip_width, state.height,
            boxstyle="round,pad=0,rounding_size=4",
            facecolor=TOOLTIP_BG, edgecolor="none", zorder=Z_TOOLTIP, visible=False,
        )
        ax.add_patch(self.background)
        self.texts = []
        self._drawn_lines: List[str] = []

    def _rebuild_text(self) -> None:
        for t in self.texts:
            t.remove()
        self.texts = [
            self.ax.text(0.0, 0.0, line, color="white", fontsize=TOOLTIP_FONT_PX,
                         fontfamily=self.layout.font_family, ha="left", va="baseline",
                         zorder=Z_TOOLTIP + 1)
            for line in self.state.lines
        ]
        self._drawn_lines = list(self.state.lines)

    def sync(self) -> None:
        s = self.state
        if s.lines != self._drawn_lines:
            self._rebuild_text()
        self.background.set_bounds(s.x, s.y, self.layout.tooltip_width, s.height)
        self.background.set_visible(s.visible)
        for i, t in enumerate(self.texts):
            t.set_position((s.x + TEXT_INSET_X, s.y + TEXT_INSET_Y + LINE_HEIGHT * i))
            t.set_visible(s.visible)
