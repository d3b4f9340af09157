# roichart/figure/base.py
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Tuple
from pathlib import Path

# black -> purple -> cyan -> green -> yellow -> orange-red -> pink
ROI_RAMP: Tuple[str, ...] = (
    "#000000",
    "#3300cc",
    "#00ccff",
    "#00cc66",
    "#ffee00",
    "#ff4000",
    "#ff0066",
)


@dataclass(frozen=True)
class Margin:
    top: float = 20.0
    right: float = 80.0
    bottom: float = 60.0
    left: float = 80.0


@dataclass(frozen=True)
class ChartLayout:
    """Fixed geometry and styling of the chart (logical px, origin top-left)."""
    width: float = 400.0
    height: float = 600.0
    margin: Margin = field(default_factory=Margin)
    font_family: str = "sans-serif"
    # scales
    x_domain: Tuple[float, float] = (0.0, 80.0)
    x_ticks: int = 8
    y_step: float = 20.0
    radius_range: Tuple[float, float] = (3.0, 25.0)
    color_stops: Tuple[str, ...] = ROI_RAMP
    # bubbles
    fill_opacity: float = 0.2
    stroke_width: float = 1.5
    tooltip_offset: float = 20.0
    tooltip_width: float = 220.0
    bounce_times: int = 3
    bounce_lift: float = 5.0
    bounce_leg_ms: int = 150
    frame_ms: int = 15
    # legend
    legend_gap: float = 20.0
    legend_width: float = 15.0
    legend_ticks: int = 6
    gradient_steps: int = 100

    @property
    def plot_left(self) -> float:
        return self.margin.left

    @property
    def plot_right(self) -> float:
        return self.width - self.margin.right

    @property
    def plot_top(self) -> float:
        return self.margin.top

    @property
    def plot_bottom(self) -> float:
        return self.height - self.margin.bottom

    def validate(self) -> "ChartLayout":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas must have a positive size, got {self.width}x{self.height}")
        if self.plot_right <= self.plot_left or self.plot_bottom <= self.plot_top:
            raise ValueError("Margins leave no room for the plot area.")
        lo, hi = self.radius_range
        if not 0 <= lo <= hi:
            raise ValueError(f"radius_range must satisfy 0 <= min <= max, got {self.radius_range}")
        if len(self.color_stops) < 2:
            raise ValueError("color_stops needs at least two colours.")
        if self.y_step <= 0:
            raise ValueError("y_step must be positive.")
        if self.bounce_times < 0 or self.bounce_leg_ms <= 0 or self.frame_ms <= 0:
            raise ValueError("Bounce timings must be positive.")
        if self.gradient_steps < 1:
            raise ValueError("gradient_steps must be at least 1.")
        return self

    @classmethod
    def from_dict(cls, overrides: Mapping[str, Any] | None) -> "ChartLayout":
        """Build a layout from a YAML mapping; unknown keys are rejected."""
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown layout option(s): {', '.join(unknown)}")
        if "margin" in overrides:
            overrides["margin"] = replace(Margin(), **dict(overrides["margin"] or {}))
        for key in ("x_domain", "radius_range", "color_stops"):
            if key in overrides:
                overrides[key] = tuple(overrides[key])
        return replace(cls(), **overrides).validate()


@dataclass
class ChartSpec:
    key: str
    title: str
    cls_ref: str
    source: str
    params: Dict[str, Any]


@dataclass
class Context:
    root: Path
    registry: Any
    output_dir: Path
    overwrite: bool
    dpi: int
    formats: List[str]


class FigureBase:
    """Abstract base for all figure types."""
    def __init__(self, spec: ChartSpec, ctx: Context):
        self.spec = spec
        self.ctx = ctx

    def prepare(self) -> Dict[str, Any]:
        """Collect the data needed to render the figure."""
        raise NotImplementedError

    def render(self, prepared: Dict[str, Any]) -> List[Path]:
        """Render the figure and return the written paths."""
        raise NotImplementedError

    def run(self) -> List[Path]:
        prepared = self.prepare()
        return self.render(prepared)
