import math

import numpy as np
import pytest

from roichart.data import SyntheticMovies
from roichart.figure import ChartLayout, build_scales, nice_ticks, ROI_RAMP
from roichart.figure.scales import LinearScale, SqrtScale, SequentialScale
from roichart.prep import normalize_records

LAYOUT = ChartLayout()


def scales_for(records):
    return build_scales(normalize_records(records), LAYOUT)


def test_x_domain_is_fixed_window(abc_records):
    s = scales_for(abc_records)
    assert s.x.domain == (0.0, 80.0)
    assert s.x.range == (80.0, 320.0)
    assert s.x(10) == pytest.approx(110.0)
    # outside the window is not clamped
    assert s.x(100) > 320.0


def test_y_domain_rounds_up_to_multiple_of_20(abc_records):
    s = scales_for(abc_records)
    assert s.y.domain == (0.0, 100.0)
    assert s.y.range == (540.0, 20.0)
    assert s.y(100) == pytest.approx(20.0)

    s2 = scales_for([{"title": "x", "budget": 1e6, "revenue": 101e6, "profit": 1e6, "ROI": 1}])
    assert s2.y.domain == (0.0, 120.0)


def test_radius_endpoints_and_sqrt_response(abc_records):
    s = scales_for(abc_records)
    r = s.radius
    assert r(0) == pytest.approx(3.0)
    assert r(25) == pytest.approx(25.0)
    assert r(10) < 2 * r(5)
    ks = [(r(p) - 3.0) / math.sqrt(p) for p in (1.0, 4.0, 9.0, 16.0, 25.0)]
    assert np.allclose(ks, ks[0])


def test_negative_profit_clamps_to_min_radius():
    s = scales_for([
        {"title": "flop", "budget": 5e6, "revenue": 2e6, "profit": -3e6, "ROI": -60},
        {"title": "hit", "budget": 5e6, "revenue": 20e6, "profit": 15e6, "ROI": 300},
    ])
    assert s.radius.domain == (0.0, 15.0)
    assert s.radius(-3) == pytest.approx(3.0)


def test_all_negative_profit_still_builds():
    s = scales_for([{"title": "flop", "budget": 5e6, "revenue": 2e6, "profit": -3e6, "ROI": -60}])
    assert s.radius.domain == (0.0, 1.0)
    assert s.radius(-3) == pytest.approx(3.0)


def test_color_endpoints(abc_records):
    s = scales_for(abc_records)
    assert s.color.domain == (0.0, 90.0)
    assert s.color(0) == "#000000"
    assert s.color(90) == "#ff0066"


def test_color_middle_lies_between(abc_records):
    c = scales_for(abc_records).color
    assert c.position(10) < c.position(50) < c.position(90)
    assert c(50) not in (c(10), c(90))


def test_color_clamps_outside_domain(abc_records):
    c = scales_for(abc_records).color
    assert c(-20) == "#000000"
    assert c(500) == "#ff0066"


def test_single_roi_value_is_deterministic():
    recs = [{"title": t, "budget": 1e6, "revenue": 2e6, "profit": 1e6, "ROI": 40} for t in "abc"]
    first = scales_for(recs).color(40)
    again = scales_for(recs).color(40)
    assert first == again == "#ff0066"


def test_collapsed_color_domain_returns_first_stop():
    recs = [{"title": "even", "budget": 1e6, "revenue": 1e6, "profit": 0, "ROI": 0}]
    c = scales_for(recs).color
    assert c.domain == (0.0, 0.0)
    assert c(0) == "#000000"


def test_nan_color_is_none():
    c = SequentialScale(domain=(0.0, 10.0), stops=ROI_RAMP)
    assert c(float("nan")) == "none"


def test_empty_input_falls_back():
    s = scales_for([])
    assert s.y.domain == (0.0, 20.0)
    assert s.radius.domain == (0.0, 1.0)
    assert s.color.domain == (0.0, 1.0)


def test_positions_monotone_in_budget_and_revenue():
    recs = SyntheticMovies(n=60, seed=3).generate()
    norm = normalize_records(recs)
    s = build_scales(norm, LAYOUT)
    by_budget = sorted(norm, key=lambda r: r.budget)
    xs = [s.x(r.budget) for r in by_budget]
    assert all(a <= b for a, b in zip(xs, xs[1:]))
    by_revenue = sorted(norm, key=lambda r: r.revenue)
    ys = [s.y(r.revenue) for r in by_revenue]
    # inverted range: more revenue is drawn higher (smaller y)
    assert all(a >= b for a, b in zip(ys, ys[1:]))


def test_scales_accept_arrays():
    lin = LinearScale(domain=(0.0, 10.0), range=(0.0, 100.0))
    assert lin(np.array([0.0, 5.0, 10.0])).tolist() == [0.0, 50.0, 100.0]
    sq = SqrtScale(domain=(0.0, 4.0), range=(0.0, 2.0))
    assert sq(np.array([0.0, 1.0, 4.0])).tolist() == [0.0, 1.0, 2.0]


@pytest.mark.parametrize("start,stop,count,expected", [
    (0, 80, 8, [0, 10, 20, 30, 40, 50, 60, 70, 80]),
    (0, 90, 6, [0, 20, 40, 60, 80]),
    (0, 1, 5, [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]),
    (0, 100, 6, [0, 20, 40, 60, 80, 100]),
    (3, 3, 6, [3]),
])
def test_nice_ticks(start, stop, count, expected):
    assert nice_ticks(start, stop, count) == pytest.approx(expected)


def test_nice_ticks_degenerate_count():
    assert nice_ticks(0, 10, 0) == []
