from karm.dock import Dock
from karm.flow import Flow, Orien, Rect

INNER = Rect(7, 9, 30, 20)
OUTER = Rect(10, 10, 100, 80)


def test_flow_mapping():
    assert Dock.NONE.flow() is Flow.LEFT_TO_RIGHT
    assert Dock.FILL.flow() is Flow.LEFT_TO_RIGHT
    assert Dock.START.flow() is Flow.LEFT_TO_RIGHT
    assert Dock.TOP.flow() is Flow.TOP_TO_BOTTOM
    assert Dock.END.flow() is Flow.RIGHT_TO_LEFT
    assert Dock.BOTTOM.flow() is Flow.BOTTOM_TO_TOP


def test_orien():
    assert Dock.NONE.orien() is Orien.NONE
    assert Dock.FILL.orien() is Orien.NONE
    assert Dock.START.orien() is Orien.HORIZONTAL
    assert Dock.END.orien() is Orien.HORIZONTAL
    assert Dock.TOP.orien() is Orien.VERTICAL
    assert Dock.BOTTOM.orien() is Orien.VERTICAL


def test_none_and_fill():
    assert Dock.NONE.apply(INNER, OUTER) == (INNER, OUTER)
    assert Dock.FILL.apply(INNER, OUTER) == (OUTER, OUTER)


def test_top():
    placed, rest = Dock.TOP.apply(INNER, OUTER)
    assert (placed.x, placed.y) == (OUTER.x, OUTER.y)
    assert placed.width == OUTER.width
    assert placed.height == INNER.height
    assert rest.y == placed.y + placed.height
    assert rest.height + placed.height == OUTER.height
    assert (rest.x, rest.width) == (OUTER.x, OUTER.width)


def test_start():
    placed, rest = Dock.START.apply(INNER, OUTER)
    assert (placed.x, placed.y) == (OUTER.x, OUTER.y)
    assert placed.width == INNER.width
    assert placed.height == OUTER.height
    assert rest.x == placed.x + placed.width
    assert rest.width + placed.width == OUTER.width


def test_end():
    placed, rest = Dock.END.apply(INNER, OUTER)
    assert placed.x + placed.width == OUTER.x + OUTER.width
    assert placed.height == OUTER.height
    assert placed.width == INNER.width
    assert rest.x == OUTER.x
    assert rest.x + rest.width == placed.x


def test_bottom():
    placed, rest = Dock.BOTTOM.apply(INNER, OUTER)
    assert placed.y + placed.height == OUTER.y + OUTER.height
    assert placed.width == OUTER.width
    assert placed.height == INNER.height
    assert rest.y == OUTER.y
    assert rest.y + rest.height == placed.y