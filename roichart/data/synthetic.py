from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from .base import RecordSource, Record


@dataclass
class SyntheticMovies(RecordSource):
    """
    Random movie financials shaped like a small indie catalogue.

    - budget: uniform in [min_budget, max_budget] (currency units)
    - revenue: budget * multiplier, multiplier log-normal around ~2x
    - profit: revenue - budget (can be negative: flops are kept)
    - ROI: profit / budget * 100
    """
    n: int
    seed: Optional[int] = None
    min_budget: float = 1e6
    max_budget: float = 75e6
    name: str = "synthetic_movies"

    def generate(self) -> List[Record]:
        rng = np.random.default_rng(self.seed)
        budget = rng.uniform(self.min_budget, self.max_budget, size=self.n)
        multiplier = rng.lognormal(mean=0.6, sigma=0.5, size=self.n)
        revenue = budget * multiplier
        profit = revenue - budget
        roi = profit / budget * 100.0
        return [
            {"title": f"Movie {i + 1:03d}", "budget": float(b), "revenue": float(r),
             "profit": float(p), "ROI": float(q)}
            for i, (b, r, p, q) in enumerate(zip(budget, revenue, profit, roi))
        ]

    async def load(self) -> List[Record]:
        return self.generate()
