# roichart/data/base.py
from __future__ import annotations
from typing import Any, Dict, List, Protocol

Record = Dict[str, Any]

RECORD_FIELDS = ("title", "budget", "revenue", "profit", "ROI")


class RecordSource(Protocol):
    """Interface for all record sources. ``load`` is the single awaited boundary."""
    async def load(self) -> List[Record]: ...

    def add_params(self, **params: Any) -> RecordSource:
        for k, v in params.items():
            setattr(self, k, v)
        return self
