# roichart/figure/bubble_layer.py
from __future__ import annotations
import math
from typing import Callable, Iterator, List, Optional

from matplotlib.colors import to_rgba
from matplotlib.patches import Circle

from .animation import BounceAnimation, Scheduler
from .base import ChartLayout
from .scales import Scales
from .tooltip import TooltipState, tooltip_lines
from roichart.prep.normalize import NormalizedRecord

Z_BUBBLES = 2


class Bubble:
    """One record's circle. ``cy`` is presentation state and may move during a bounce."""
    def __init__(self, index: int, record: NormalizedRecord, circle: Circle, color: str) -> None:
        self.index = index
        self.record = record
        self.circle = circle
        self.color = color
        self.handlers: Optional[BubbleHandlers] = None

    @property
    def cx(self) -> float:
        return float(self.circle.center[0])

    @property
    def cy(self) -> float:
        return float(self.circle.center[1])

    @cy.setter
    def cy(self, value: float) -> None:
        self.circle.center = (self.cx, float(value))

    @property
    def r(self) -> float:
        return float(self.circle.radius)

    def contains(self, x: float, y: float) -> bool:
        if not self.circle.get_visible():
            return False
        return (x - self.cx) ** 2 + (y - self.cy) ** 2 <= self.r ** 2


class BubbleHandlers:
    """hover-enter / hover-move / hover-exit / click for one bubble, sharing one tooltip."""
    def __init__(self, bubble: Bubble, tooltip: TooltipState, bounce: BounceAnimation,
                 offset: float = 20.0, on_change: Optional[Callable[[], None]] = None) -> None:
        self.bubble = bubble
        self.tooltip = tooltip
        self.bounce = bounce
        self.offset = offset
        self.on_change = on_change

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def hover_enter(self, px: float, py: float) -> None:
        self.tooltip.show(tooltip_lines(self.bubble.record))
        self.tooltip.move_to(px + self.offset, py)
        self._changed()

    def hover_move(self, px: float, py: float) -> None:
        self.tooltip.move_to(px + self.offset, py)
        self._changed()

    def hover_exit(self) -> None:
        self.tooltip.hide()
        self._changed()

    def click(self) -> bool:
        return self.bounce.start()


class BubbleLayer:
    def __init__(self, bubbles: List[Bubble]) -> None:
        self.bubbles = bubbles

    def __len__(self) -> int:
        return len(self.bubbles)

    def __iter__(self) -> Iterator[Bubble]:
        return iter(self.bubbles)

    def __getitem__(self, i: int) -> Bubble:
        return self.bubbles[i]

    def hit_test(self, x: float, y: float) -> Optional[Bubble]:
        """Topmost bubble under (x, y); later records are drawn on top."""
        for b in reversed(self.bubbles):
            if b.contains(x, y):
                return b
        return None


def make_circle(cx: float, cy: float, r: float, color: str, layout: ChartLayout) -> Circle:
    if color == "none":
        face, edge = "none", "none"
    else:
        face, edge = to_rgba(color, layout.fill_opacity), to_rgba(color, 1.0)
    circle = Circle((cx, cy), r, facecolor=face, edgecolor=edge,
                    linewidth=layout.stroke_width, zorder=Z_BUBBLES)
    # NaN geometry is kept in the layer but never drawn or hit
    circle.set_visible(all(math.isfinite(v) for v in (cx, cy, r)))
    return circle


def draw_bubble_layer(ax, normalized: List[NormalizedRecord], scales: Scales, layout: ChartLayout,
                      tooltip: TooltipState, scheduler: Scheduler,
                      on_change: Optional[Callable[[], None]] = None) -> BubbleLayer:
    bubbles: List[Bubble] = []
    for i, rec in enumerate(normalized):
        color = scales.color(rec.roi)
        circle = make_circle(scales.x(rec.budget), scales.y(rec.revenue), scales.radius(rec.profit),
                             color, layout)
        ax.add_patch(circle)
        bubble = Bubble(i, rec, circle, color)
        bounce = BounceAnimation(bubble, scheduler, times=layout.bounce_times, lift=layout.bounce_lift,
                                 leg_ms=layout.bounce_leg_ms, frame_ms=layout.frame_ms,
                                 on_frame=on_change)
        bubble.handlers = BubbleHandlers(bubble, tooltip, bounce, offset=layout.tooltip_offset,
                                         on_change=on_change)
        bubbles.append(bubble)
    return BubbleLayer(bubbles)
