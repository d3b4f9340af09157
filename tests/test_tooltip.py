import pytest

from conftest import pointer
from roichart.figure import TooltipState, tooltip_lines
from roichart.prep import NormalizedRecord


def test_tooltip_hidden_by_default(chart):
    assert chart.tooltip.visible is False
    assert chart.overlay.background.get_visible() is False


def test_tooltip_lines_format():
    rec = NormalizedRecord("Harbor Lights", budget=3.5, revenue=23.4, profit=19.9, roi=568.56)
    assert tooltip_lines(rec) == [
        "Harbor Lights",
        "Revenue: $23.4M",
        "Budget: $3.5M",
        "Profit: $19.9M",
        "ROI: 568.6%",
    ]


def test_height_fits_line_count():
    state = TooltipState()
    state.show(["a", "b", "c", "d", "e"])
    assert state.height == 90
    state.show(["a"])
    assert state.height == 30


def test_hover_enter_populates_and_positions(chart):
    a = chart.bubbles[0]
    a.handlers.hover_enter(100.0, 200.0)
    t = chart.tooltip
    assert t.visible
    assert t.lines[0] == "A"
    assert t.lines[1] == "Revenue: $20.0M"
    assert t.lines[4] == "ROI: 50.0%"
    assert (t.x, t.y) == (120.0, 200.0)
    # overlay follows the state
    assert chart.overlay.background.get_visible()
    assert chart.overlay.background.get_height() == pytest.approx(90.0)
    assert [txt.get_text() for txt in chart.overlay.texts] == t.lines
    assert chart.overlay.texts[0].get_position() == pytest.approx((130.0, 220.0))
    assert chart.overlay.texts[1].get_position() == pytest.approx((130.0, 235.0))


def test_hover_move_and_exit(chart):
    h = chart.bubbles[1].handlers
    h.hover_enter(10.0, 10.0)
    h.hover_move(50.0, 60.0)
    assert (chart.tooltip.x, chart.tooltip.y) == (70.0, 60.0)
    h.hover_exit()
    assert chart.tooltip.visible is False
    # content is kept, only visibility toggles
    assert chart.tooltip.lines[0] == "B"
    assert all(not t.get_visible() for t in chart.overlay.texts)


def test_single_tooltip_across_bubbles(chart):
    a, b, c = (bub.handlers for bub in chart.bubbles)
    # enter B without A ever exiting: still one tooltip, last write wins
    a.hover_enter(0, 0)
    b.hover_enter(5, 5)
    assert chart.tooltip.lines[0] == "B"
    a.hover_exit()
    c.hover_enter(9, 9)
    assert chart.tooltip.lines[0] == "C"
    assert len({id(bub.handlers.tooltip) for bub in chart.bubbles}) == 1
    assert chart.overlay.background in chart.ax.patches
    assert sum(1 for p in chart.ax.patches if p is chart.overlay.background) == 1


def test_router_hover_sequence(chart):
    r = chart.router
    a, b = chart.bubbles[0], chart.bubbles[1]
    r.on_motion(pointer(chart.ax, a.cx, a.cy))
    assert r.hovered is a and chart.tooltip.lines[0] == "A"
    r.on_motion(pointer(chart.ax, a.cx + 1, a.cy))
    assert chart.tooltip.x == pytest.approx(a.cx + 21)
    r.on_motion(pointer(chart.ax, b.cx, b.cy))
    assert r.hovered is b and chart.tooltip.lines[0] == "B"
    assert chart.tooltip.visible
    r.on_motion(pointer(chart.ax, 150.0, 350.0))
    assert r.hovered is None
    assert chart.tooltip.visible is False


def test_router_figure_leave_hides(chart):
    c = chart.bubbles[2]
    chart.router.on_motion(pointer(chart.ax, c.cx, c.cy))
    assert chart.tooltip.visible
    chart.router.on_leave(pointer(None, None, None))
    assert chart.tooltip.visible is False


def test_router_ignores_events_outside_canvas(chart):
    chart.router.on_motion(pointer(None, None, None))
    assert chart.tooltip.visible is False


def test_topmost_bubble_wins():
    from roichart.figure import build_chart, ManualScheduler
    recs = [
        {"title": "under", "budget": 20e6, "revenue": 40e6, "profit": 10e6, "ROI": 5},
        {"title": "over", "budget": 20e6, "revenue": 40e6, "profit": 10e6, "ROI": 5},
    ]
    c = build_chart(recs, scheduler=ManualScheduler())
    hit = c.bubbles.hit_test(c.bubbles[0].cx, c.bubbles[0].cy)
    assert hit is c.bubbles[1]
    c.close()


def test_redraw_syncs_state_set_directly(chart):
    chart.tooltip.show(["only line"])
    chart.tooltip.move_to(40.0, 50.0)
    chart.redraw()
    assert chart.overlay.background.get_visible()
    assert chart.overlay.background.get_height() == pytest.approx(30.0)
    assert [t.get_text() for t in chart.overlay.texts] == ["only line"]
