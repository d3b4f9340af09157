from __future__ import annotations
import math
from typing import Any, List

from .base import Record


def as_float(value: Any) -> float:
    """Numeric coercion that never raises; anything unusable becomes NaN."""
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def ensure_record_list(payload: Any, origin: str = "payload") -> List[Record]:
    if not isinstance(payload, list):
        raise ValueError(f"{origin} must be a JSON array of records, got {type(payload).__name__}")
    return [dict(r) if isinstance(r, dict) else {} for r in payload]
