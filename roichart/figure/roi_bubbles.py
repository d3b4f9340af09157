# roichart/figure/roi_bubbles.py
from __future__ import annotations
import asyncio
from typing import Dict, Any, List
from pathlib import Path

from .base import FigureBase, ChartLayout
from .chart import build_chart


class RoiBubbles(FigureBase):
    """
    Budget vs revenue bubble chart (radius = profit, colour = ROI). Params:
      - output: file stem, e.g. "a24_roi_bubbles"
      - layout (optional): ChartLayout overrides, e.g. {x_ticks: 8, margin: {top: 30}}
    """
    def prepare(self) -> Dict[str, Any]:
        p = self.spec.params
        records = asyncio.run(self.ctx.registry.load(self.spec.source))
        return {
            "records": records,
            "layout": ChartLayout.from_dict(p.get("layout")),
            "output": p.get("output", self.spec.key),
        }

    def render(self, prepared: Dict[str, Any]) -> List[Path]:
        chart = build_chart(prepared["records"], layout=prepared["layout"])
        written = []
        try:
            for fmt in self.ctx.formats:
                out = self.ctx.output_dir / f"{prepared['output']}.{fmt}"
                if out.exists() and not self.ctx.overwrite:
                    print(f"[SKIP] exists: {out}")
                    continue
                written.append(chart.save(out, dpi=self.ctx.dpi))
        finally:
            chart.close()
        return written
