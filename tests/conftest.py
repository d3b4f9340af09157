import matplotlib
matplotlib.use("Agg")

import pytest
import matplotlib.pyplot as plt
from types import SimpleNamespace

from roichart.figure import build_chart, ManualScheduler


ABC_RECORDS = [
    {"title": "A", "budget": 10e6, "revenue": 20e6, "profit": 5e6, "ROI": 50},
    {"title": "B", "budget": 40e6, "revenue": 60e6, "profit": 15e6, "ROI": 10},
    {"title": "C", "budget": 70e6, "revenue": 100e6, "profit": 25e6, "ROI": 90},
]


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def abc_records():
    return [dict(r) for r in ABC_RECORDS]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def chart(abc_records, scheduler):
    c = build_chart(abc_records, scheduler=scheduler)
    yield c
    c.close()


def pointer(ax, x, y, button=None):
    """Stand-in for a matplotlib MouseEvent in canvas coordinates."""
    return SimpleNamespace(inaxes=ax, xdata=x, ydata=y, button=button)
