# roichart/figure/interaction.py
from __future__ import annotations
import math
from typing import List, Optional, Tuple

from matplotlib.backend_bases import MouseButton

from .bubble_layer import Bubble, BubbleLayer


class PointerRouter:
    """
    Turns canvas pointer events into per-bubble transitions.

    motion over a new bubble -> exit(previous), enter(new); motion within the
    same bubble -> move; left press on a bubble -> click; leaving the figure ->
    exit. Hit-testing uses each bubble's current position.
    """
    def __init__(self, layer: BubbleLayer, ax) -> None:
        self.layer = layer
        self.ax = ax
        self.hovered: Optional[Bubble] = None
        self._canvas = None
        self._cids: List[int] = []

    def attach(self, canvas) -> "PointerRouter":
        self.detach()
        self._canvas = canvas
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("figure_leave_event", self.on_leave),
        ]
        return self

    def detach(self) -> None:
        if self._canvas is not None:
            for cid in self._cids:
                self._canvas.mpl_disconnect(cid)
        self._canvas = None
        self._cids = []

    def _pointer(self, event) -> Optional[Tuple[float, float]]:
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return None
        x, y = float(event.xdata), float(event.ydata)
        if math.isnan(x) or math.isnan(y):
            return None
        return x, y

    def _exit_hovered(self) -> None:
        if self.hovered is not None:
            self.hovered.handlers.hover_exit()
            self.hovered = None

    def on_motion(self, event) -> None:
        p = self._pointer(event)
        if p is None:
            self._exit_hovered()
            return
        hit = self.layer.hit_test(*p)
        if hit is self.hovered:
            if hit is not None:
                hit.handlers.hover_move(*p)
            return
        self._exit_hovered()
        if hit is not None:
            self.hovered = hit
            hit.handlers.hover_enter(*p)

    def on_press(self, event) -> None:
        if event.button != MouseButton.LEFT:
            return
        p = self._pointer(event)
        if p is None:
            return
        hit = self.layer.hit_test(*p)
        if hit is not None:
            hit.handlers.click()

    def on_leave(self, event) -> None:
        self._exit_hovered()
