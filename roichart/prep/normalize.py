# roichart/prep/normalize.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping
import numpy as np

from roichart.data.utils import as_float

MILLION = 1e6


@dataclass(frozen=True)
class NormalizedRecord:
    """One input record in chart units: money in millions, ROI in percent."""
    title: str
    budget: float
    revenue: float
    profit: float
    roi: float


def normalize_record(rec: Mapping[str, Any]) -> NormalizedRecord:
    title = rec.get("title")
    return NormalizedRecord(
        title="" if title is None else str(title),
        budget=as_float(rec.get("budget")) / MILLION,
        revenue=as_float(rec.get("revenue")) / MILLION,
        profit=as_float(rec.get("profit")) / MILLION,
        roi=as_float(rec.get("ROI")),
    )


def normalize_records(records: Iterable[Mapping[str, Any]]) -> List[NormalizedRecord]:
    """Same length and order as the input; order is also the drawing order."""
    return [normalize_record(r) for r in records]


def columns(normalized: List[NormalizedRecord]) -> Dict[str, np.ndarray]:
    """Column view used by the scale factory (float64, NaN preserved)."""
    return {
        name: np.asarray([getattr(r, name) for r in normalized], dtype=np.float64)
        for name in ("budget", "revenue", "profit", "roi")
    }
