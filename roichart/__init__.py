from .figure.chart import BubbleChart, build_chart, build_chart_async

__all__ = ["BubbleChart", "build_chart", "build_chart_async"]
