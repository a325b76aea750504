import pytest

from perfmodel.costs import Unit
from perfmodel.flamegraph import FrameItem, Rect
from perfmodel.navigation import SelectionHistory, focus_item
from perfmodel.symbols import Symbol


@pytest.fixture
def graph():
    root = FrameItem(cost=100, unit=Unit.UNKNOWN, symbol=Symbol("root"))
    root.rect = Rect(0.0, 0.0, 800.0, 20.0)
    a = FrameItem(cost=60, unit=Unit.UNKNOWN, symbol=Symbol("a"), parent=root)
    b = FrameItem(cost=40, unit=Unit.UNKNOWN, symbol=Symbol("b"), parent=root)
    c = FrameItem(cost=30, unit=Unit.UNKNOWN, symbol=Symbol("c"), parent=a)
    d = FrameItem(cost=15, unit=Unit.UNKNOWN, symbol=Symbol("d"), parent=c)
    e = FrameItem(cost=10, unit=Unit.UNKNOWN, symbol=Symbol("e"), parent=c)
    return {"root": root, "a": a, "b": b, "c": c, "d": d, "e": e}


def test_focus_stretches_chain_to_root_width(graph):
    result = focus_item(graph["c"], 300.0)
    assert result is graph["c"]
    for name in ("root", "a", "c"):
        assert graph[name].rect.x == 0.0
        assert graph[name].rect.width == 300.0


def test_focus_hides_siblings_of_chain(graph):
    focus_item(graph["c"], 300.0)
    assert graph["a"].visible is True
    assert graph["b"].visible is False
    assert graph["c"].visible is True


def test_focus_lays_out_children(graph):
    focus_item(graph["c"], 300.0)
    c, d, e = graph["c"], graph["d"], graph["e"]
    assert d.rect.width == pytest.approx(c.rect.width * d.cost / c.cost)
    assert e.rect.width == pytest.approx(c.rect.width * e.cost / c.cost)
    assert d.rect.x == c.rect.x
    assert e.rect.x == pytest.approx(d.rect.x + d.rect.width)
    assert d.rect.y < c.rect.y
    assert d.rect.height == c.rect.height


def test_focus_keeps_vertical_position(graph):
    root = graph["root"]
    focus_item(root, 500.0)
    a_y = graph["a"].rect.y
    focus_item(graph["a"], 250.0)
    assert graph["a"].rect.y == a_y
    assert root.rect.y == 0.0
    assert root.rect.height == 20.0


def test_focus_root_shows_all_wide_children(graph):
    focus_item(graph["c"], 300.0)
    focus_item(graph["root"], 300.0)
    assert graph["a"].visible is True
    assert graph["b"].visible is True
    assert graph["b"].rect.x == pytest.approx(graph["a"].rect.width)


def test_focus_none_is_ignored():
    assert focus_item(None, 100.0) is None


def test_history_starts_at_root(graph):
    history = SelectionHistory(graph["root"])
    assert history.current is graph["root"]
    assert history.index == 0
    assert not history.can_go_back()
    assert not history.can_go_forward()


def test_empty_history():
    history = SelectionHistory()
    assert history.current is None
    assert history.index == -1
    assert not history.can_go_back()
    assert not history.can_go_forward()


def test_select_back_forward(graph):
    history = SelectionHistory(graph["root"])
    assert history.select(graph["a"]) is True
    assert history.select(graph["c"]) is True
    assert history.current is graph["c"]
    assert history.can_go_back()
    assert history.back() is graph["a"]
    assert history.can_go_forward()
    assert history.forward() is graph["c"]
    assert not history.can_go_forward()


def test_select_truncates_forward_entries(graph):
    history = SelectionHistory(graph["root"])
    history.select(graph["a"])
    history.select(graph["c"])
    history.back()
    history.back()
    assert history.current is graph["root"]
    history.select(graph["b"])
    assert len(history) == 2
    assert not history.can_go_forward()
    assert history.back() is graph["root"]


def test_select_same_or_none_does_nothing(graph):
    history = SelectionHistory(graph["root"])
    history.select(graph["a"])
    assert history.select(graph["a"]) is False
    assert history.select(None) is False
    assert len(history) == 2


def test_back_and_forward_stop_at_ends(graph):
    history = SelectionHistory(graph["root"])
    history.select(graph["a"])
    history.back()
    assert history.back() is graph["root"]
    assert history.index == 0
    history.forward()
    assert history.forward() is graph["a"]
    assert history.index == 1


def test_reset_clears_history(graph):
    history = SelectionHistory(graph["root"])
    history.select(graph["a"])
    history.select(graph["c"])
    history.reset(graph["b"])
    assert len(history) == 1
    assert history.current is graph["b"]
    assert not history.can_go_back()
    assert not history.can_go_forward()