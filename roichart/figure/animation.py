# roichart/figure/animation.py
"""
Timed presentation effects.

A ``Scheduler`` runs a callback once after a delay. ``CanvasScheduler`` uses the
figure canvas' timers so effects play inside whatever GUI/notebook event loop
hosts the chart; ``ManualScheduler`` keeps a virtual clock that only moves when
``advance`` is called, which is how headless replays and tests drive time.
"""
from __future__ import annotations
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Set, Tuple


class Scheduler(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None: ...


class CanvasScheduler:
    def __init__(self, canvas) -> None:
        self.canvas = canvas
        self._timers: Set = set()  # keep live timers referenced until they fire

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        timer = self.canvas.new_timer(interval=max(1, int(delay_ms)))
        timer.single_shot = True

        def _fire() -> None:
            self._timers.discard(timer)
            callback()

        timer.add_callback(_fire)
        self._timers.add(timer)
        timer.start()


class ManualScheduler:
    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now + float(delay_ms), next(self._seq), callback))

    def advance(self, ms: float) -> None:
        target = self.now + float(ms)
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
        self.now = target

    def run_until_idle(self, limit_ms: float = 60_000.0) -> None:
        deadline = self.now + limit_ms
        while self._queue and self._queue[0][0] <= deadline:
            self.advance(self._queue[0][0] - self.now)


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


UP = "up"
DOWN = "down"


class BounceAnimation:
    """
    Counted bounce of one shape: ``times`` cycles of (origin - lift, then origin).

    State is {remaining cycles, phase}; every leg lasts ``leg_ms`` and is split into
    ``frame_ms`` steps. The next leg is scheduled only after the current one ends.
    ``start`` while running is ignored and returns False.
    """
    def __init__(self, target, scheduler: Scheduler, times: int = 3, lift: float = 5.0,
                 leg_ms: float = 150.0, frame_ms: float = 15.0,
                 on_frame: Optional[Callable[[], None]] = None) -> None:
        self.target = target
        self.scheduler = scheduler
        self.times = int(times)
        self.lift = float(lift)
        self.leg_ms = float(leg_ms)
        self.frame_ms = float(frame_ms)
        self.on_frame = on_frame
        self.remaining = 0
        self.phase: Optional[str] = None
        self.origin: Optional[float] = None
        self.cycles_completed = 0
        self.legs: List[str] = []
        self._from = 0.0
        self._to = 0.0
        self._elapsed = 0.0

    @property
    def running(self) -> bool:
        return self.phase is not None

    def start(self) -> bool:
        if self.running or self.times <= 0:
            return False
        self.origin = self.target.cy
        self.remaining = self.times
        self.cycles_completed = 0
        self.legs = []
        self.phase = UP
        self._begin_leg()
        return True

    def _begin_leg(self) -> None:
        self._from = self.target.cy
        self._to = self.origin - self.lift if self.phase == UP else self.origin
        self._elapsed = 0.0
        self.scheduler.call_later(self.frame_ms, self._step)

    def _step(self) -> None:
        self._elapsed += self.frame_ms
        k = min(1.0, self._elapsed / self.leg_ms)
        if k < 1.0:
            self.target.cy = self._from + (self._to - self._from) * ease_cubic_in_out(k)
            self._frame()
            self.scheduler.call_later(self.frame_ms, self._step)
            return
        self.target.cy = self._to
        self._frame()
        self._end_leg()

    def _end_leg(self) -> None:
        self.legs.append(self.phase)
        if self.phase == UP:
            self.phase = DOWN
            self._begin_leg()
            return
        self.cycles_completed += 1
        self.remaining -= 1
        if self.remaining > 0:
            self.phase = UP
            self._begin_leg()
        else:
            self.phase = None

    def _frame(self) -> None:
        if self.on_frame is not None:
            self.on_frame()
