# roichart/figure/scales.py
"""
Scale factory: pure value -> pixel / colour mappings built from normalized records.

All scales accept a scalar or an array and are immutable once built. Pixel
ranges use the canvas convention (origin top-left, y grows downward), so the
y range is given inverted: [plot_bottom, plot_top].
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple, Union

import numpy as np
from matplotlib.colors import to_hex, to_rgb

from .base import ChartLayout
from roichart.prep.normalize import NormalizedRecord, columns

ArrayLike = Union[float, np.ndarray, Sequence[float]]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = _round_half_up(start * inc); i2 = _round_half_up(stop * inc)
        if i1 / inc < start: i1 += 1
        if i2 / inc > stop: i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = _round_half_up(start / inc); i2 = _round_half_up(stop / inc)
        if i1 * inc < start: i1 += 1
        if i2 * inc > stop: i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int) -> List[float]:
    """Round tick values (1, 2 or 5 times a power of ten) covering [start, stop]."""
    if not count > 0 or not (math.isfinite(start) and math.isfinite(stop)):
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        ticks = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    ticks = [float(t) for t in ticks]
    return ticks[::-1] if reverse else ticks


def _finite_max(values: np.ndarray, fallback: float) -> float:
    values = np.asarray(values, dtype=np.float64)
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return fallback
    return float(finite.max())


def _out(result: np.ndarray, value: ArrayLike):
    return float(result) if np.ndim(value) == 0 else result


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def normalize(self, value: ArrayLike) -> np.ndarray:
        d0, d1 = self.domain
        v = np.asarray(value, dtype=np.float64)
        span = d1 - d0
        if span == 0:
            return np.full_like(v, 0.5)
        return (v - d0) / span

    def __call__(self, value: ArrayLike):
        r0, r1 = self.range
        t = self.normalize(value)
        return _out(r0 + (r1 - r0) * t, value)

    def ticks(self, count: int = 10) -> List[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class SqrtScale:
    """Square-root scale: area, not radius, is linear in the input.
    Inputs at or below the domain minimum map to the minimum of the range."""
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: ArrayLike):
        d0, d1 = self.domain
        r0, r1 = self.range
        v = np.asarray(value, dtype=np.float64)
        with np.errstate(invalid="ignore"):
            v = np.where(v < d0, d0, v)
        s0, s1 = math.sqrt(d0), math.sqrt(d1)
        span = s1 - s0
        if span == 0:
            t = np.full_like(v, 0.5)
        else:
            t = (np.sqrt(v) - s0) / span
        return _out(r0 + (r1 - r0) * t, value)


def rgb_basis(stops: Sequence[str]) -> Callable[[float], np.ndarray]:
    """Uniform B-spline through the RGB channels of ``stops``; t=0 and t=1 hit the end stops."""
    values = np.asarray([to_rgb(c) for c in stops], dtype=np.float64) * 255.0
    n = len(values) - 1

    def interpolate(t: float) -> np.ndarray:
        if t <= 0:
            t, i = 0.0, 0
        elif t >= 1:
            t, i = 1.0, n - 1
        else:
            i = int(math.floor(t * n))
        v1, v2 = values[i], values[i + 1]
        v0 = values[i - 1] if i > 0 else 2 * v1 - v2
        v3 = values[i + 2] if i < n - 1 else 2 * v2 - v1
        t1 = (t - i / n) * n
        t2 = t1 * t1; t3 = t2 * t1
        return ((1 - 3 * t1 + 3 * t2 - t3) * v0
                + (4 - 6 * t2 + 3 * t3) * v1
                + (1 + 3 * t1 + 3 * t2 - 3 * t3) * v2
                + t3 * v3) / 6

    return interpolate


@dataclass(frozen=True)
class SequentialScale:
    """Maps a domain onto a colour ramp and returns ``#rrggbb``.
    A collapsed domain yields the first stop; NaN yields ``"none"``."""
    domain: Tuple[float, float]
    stops: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_interpolate", rgb_basis(self.stops))

    def position(self, value: float) -> float:
        d0, d1 = self.domain
        value = float(value)
        if math.isnan(value):
            return math.nan
        if d1 == d0:
            return 0.0
        return min(1.0, max(0.0, (value - d0) / (d1 - d0)))

    def __call__(self, value: float) -> str:
        t = self.position(value)
        if math.isnan(t):
            return "none"
        rgb = np.clip(self._interpolate(t), 0.0, 255.0) / 255.0
        return to_hex(tuple(rgb))


@dataclass(frozen=True)
class Scales:
    x: LinearScale
    y: LinearScale
    radius: SqrtScale
    color: SequentialScale


def build_scales(normalized: List[NormalizedRecord], layout: ChartLayout) -> Scales:
    cols = columns(normalized)
    step = layout.y_step

    x = LinearScale(domain=tuple(layout.x_domain), range=(layout.plot_left, layout.plot_right))

    y_max = _finite_max(cols["revenue"], fallback=step)
    y_top = math.ceil(y_max / step) * step
    if y_top <= 0:
        y_top = step
    y = LinearScale(domain=(0.0, float(y_top)), range=(layout.plot_bottom, layout.plot_top))

    # negative profit is clamped to zero: the domain never starts below 0
    p_max = _finite_max(cols["profit"], fallback=1.0)
    radius = SqrtScale(domain=(0.0, p_max if p_max > 0 else 1.0), range=tuple(layout.radius_range))

    roi_max = _finite_max(cols["roi"], fallback=1.0)
    color = SequentialScale(domain=(0.0, roi_max), stops=tuple(layout.color_stops))

    return Scales(x=x, y=y, radius=radius, color=color)
