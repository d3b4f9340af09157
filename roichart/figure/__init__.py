from .base import FigureBase, ChartSpec, Context, ChartLayout, Margin, ROI_RAMP
from .scales import LinearScale, SqrtScale, SequentialScale, Scales, build_scales, nice_ticks
from .tooltip import TooltipState, TooltipOverlay, tooltip_lines
from .animation import Scheduler, CanvasScheduler, ManualScheduler, BounceAnimation
from .bubble_layer import Bubble, BubbleHandlers, BubbleLayer
from .interaction import PointerRouter
from .legend import GradientPaint, Legend
from .chart import BubbleChart, build_chart, build_chart_async
from .roi_bubbles import RoiBubbles

__all__ = [
    "FigureBase", "ChartSpec", "Context", "ChartLayout", "Margin", "ROI_RAMP",
    "LinearScale", "SqrtScale", "SequentialScale", "Scales", "build_scales", "nice_ticks",
    "TooltipState", "TooltipOverlay", "tooltip_lines",
    "Scheduler", "CanvasScheduler", "ManualScheduler", "BounceAnimation",
    "Bubble", "BubbleHandlers", "BubbleLayer", "PointerRouter",
    "GradientPaint", "Legend",
    "BubbleChart", "build_chart", "build_chart_async", "RoiBubbles",
]
