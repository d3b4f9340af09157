from __future__ import annotations
import asyncio
import json
from pathlib import Path
from typing import List

from .base import RecordSource, Record
from .utils import ensure_record_list


class JsonRecords(RecordSource):
    """Records from a JSON file holding an array of objects.
    Expected keys per object: title, budget, revenue, profit, ROI.
    The file is read in a worker thread so ``load`` never blocks the event loop.
    """
    def __init__(self, path: str, name: str = "json_records", encoding: str = "utf-8") -> None:
        self.path = path
        self.name = name
        self.encoding = encoding

    def _read(self) -> List[Record]:
        with open(self.path, "r", encoding=self.encoding) as f:
            payload = json.load(f)
        return ensure_record_list(payload, origin=str(Path(self.path).name))

    async def load(self) -> List[Record]:
        return await asyncio.to_thread(self._read)


class InMemoryRecords(RecordSource):
    """Wraps an already materialised list; copies each record on load."""
    def __init__(self, records: List[Record], name: str = "in_memory") -> None:
        self.records = records
        self.name = name

    async def load(self) -> List[Record]:
        return [dict(r) for r in self.records]
