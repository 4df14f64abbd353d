"""Layout widgets: flows with growable items, alignment, sizing, docking and spacing."""

from __future__ import annotations

from typing import Any, Iterable, List, Tuple, Union

from karm.align import Align, Hint
from karm.dock import Dock
from karm.flow import Flow, Orien, Rect, Vec2
from karm.node import Group, Node, Proxy, empty
from karm.spacing import Spacing

SizeLike = Union[int, Vec2]
SpacingLike = Union[int, Tuple[int, int], Tuple[int, int, int, int], Spacing]


def _children(args: Iterable[Any]) -> List[Node]:
    children: List[Node] = []
    for arg in args:
        if isinstance(arg, Node):
            children.append(arg)
        else:
            children.extend(arg)
    return children


def _rect_of(size: Vec2) -> Rect:
    return Rect(0, 0, size.x, size.y)


def _gap_total(gaps: int, count: int) -> int:
    return gaps * (max(1, count) - 1)


# --- Flow ---------------------------------------------------------------------


class Grow(Proxy):
    """Marks a flow item that shares out the space left over by the others."""

    def __init__(self, child: Node, amount: int = 1) -> None:
        super().__init__(child)
        self._amount = amount

    @property
    def amount(self) -> int:
        return self._amount


def grow(child: Node, amount: int = 1) -> Node:
    return Grow(child, amount)


def spacer(amount: int = 1) -> Node:
    """An empty item that takes ``amount`` shares of the free space."""
    return Grow(empty(), amount)


class FlowLayout(Group):
    """Children placed one after another along a flow, separated by gaps."""

    def __init__(
        self,
        children: Iterable[Node] = (),
        direction: Flow = Flow.LEFT_TO_RIGHT,
        gaps: int = 0,
    ) -> None:
        super().__init__(children)
        self._flow = direction
        self._gaps = gaps

    @property
    def direction(self) -> Flow:
        return self._flow

    @property
    def gaps(self) -> int:
        return self._gaps

    def layout(self, rect: Rect) -> None:
        self._bound = rect
        f = self._flow
        total = 0
        grows = 0
        for child in self._children:
            if isinstance(child, Grow):
                grows += child.amount
            else:
                total += f.get_x(child.size(rect.size(), Hint.MIN))

        available = f.get_width(rect) - _gap_total(self._gaps, len(self._children))
        grow_total = max(0, available - total)
        grow_unit = grow_total // max(1, grows)
        start = f.get_start(rect)

        for child in self._children:
            inner = f.set_start(Rect(), start)
            if isinstance(child, Grow):
                inner = f.set_width(inner, grow_unit * child.amount)
            else:
                inner = f.set_width(inner, f.get_x(child.size(rect.size(), Hint.MIN)))
            inner = f.set_top(inner, f.get_top(rect))
            inner = f.set_bottom(inner, f.get_bottom(rect))
            child.layout(inner)
            start += f.get_width(inner) + self._gaps

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        f = self._flow
        w = 0
        h = f.get_y(s) if hint == Hint.MAX else 0
        has_grow = False
        for child in self._children:
            if isinstance(child, Grow):
                has_grow = True
            child_size = child.size(s, Hint.MIN)
            w += f.get_x(child_size)
            h = max(h, f.get_y(child_size))

        w += _gap_total(self._gaps, len(self._children))
        if has_grow and hint == Hint.MAX:
            w = max(f.get_x(s), w)

        if f.orien() == Orien.HORIZONTAL:
            return Vec2(w, h)
        return Vec2(h, w)


def flow(direction: Flow, *args: Any, gaps: int = 0) -> Node:
    """A flow of the given nodes; lists of nodes are accepted too."""
    return FlowLayout(_children(args), direction, gaps)


def hflow(*args: Any, gaps: int = 0) -> Node:
    return flow(Flow.LEFT_TO_RIGHT, *args, gaps=gaps)


def vflow(*args: Any, gaps: int = 0) -> Node:
    return flow(Flow.TOP_TO_BOTTOM, *args, gaps=gaps)


# --- Align and sizing ---------------------------------------------------------


def _as_align(alignment: Union[Align, int]) -> Align:
    return alignment if isinstance(alignment, Align) else Align(alignment)


class AlignNode(Proxy):
    """Places its child inside the given rectangle according to an alignment."""

    def __init__(self, alignment: Union[Align, int], child: Node) -> None:
        super().__init__(child)
        self._align = _as_align(alignment)

    @property
    def alignment(self) -> Align:
        return self._align

    def layout(self, rect: Rect) -> None:
        child_size = self._child.size(rect.size(), Hint.MIN)
        self._child.layout(
            self._align.apply(Flow.LEFT_TO_RIGHT, _rect_of(child_size), rect)
        )

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        return self._align.size(self._child.size(s, hint), s, hint)


def align(alignment: Union[Align, int], child: Node) -> Node:
    return AlignNode(alignment, child)


def center(child: Node) -> Node:
    return align(Align.CENTER, child)


def hcenter(child: Node) -> Node:
    return align(Align.HCENTER | Align.TOP, child)


def vcenter(child: Node) -> Node:
    return align(Align.VCENTER | Align.START, child)


def hcenter_fill(child: Node) -> Node:
    return align(Align.HCENTER | Align.VFILL, child)


def vcenter_fill(child: Node) -> Node:
    return align(Align.VCENTER | Align.HFILL, child)


def _as_vec(size: SizeLike) -> Vec2:
    return size if isinstance(size, Vec2) else Vec2(size, size)


class Sizing(Proxy):
    """Clamps the size its child asks for between a minimum and a maximum.

    A component equal to UNCONSTRAINED leaves that side open.
    """

    UNCONSTRAINED = -1

    def __init__(self, minimum: SizeLike, maximum: SizeLike, child: Node) -> None:
        super().__init__(child)
        self._min = _as_vec(minimum)
        self._max = _as_vec(maximum)
        self._rect = Rect()

    def bound(self) -> Rect:
        return self._rect

    def layout(self, rect: Rect) -> None:
        self._rect = rect
        self._child.layout(rect)

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        result = self._child.size(s, hint)
        x, y = result.x, result.y
        unc = self.UNCONSTRAINED
        if self._min.x != unc:
            x = max(x, self._min.x)
        if self._min.y != unc:
            y = max(y, self._min.y)
        if self._max.x != unc:
            x = min(x, self._max.x)
        if self._max.y != unc:
            y = min(y, self._max.y)
        return Vec2(x, y)


def min_size(size: SizeLike, child: Node) -> Node:
    return Sizing(_as_vec(size), Sizing.UNCONSTRAINED, child)


def max_size(size: SizeLike, child: Node) -> Node:
    return Sizing(Sizing.UNCONSTRAINED, _as_vec(size), child)


def pin_size(size: SizeLike, child: Node) -> Node:
    """Pin both bounds to ``size``; a plain integer only sets the minimum."""
    if not isinstance(size, Vec2):
        return min_size(size, child)
    return Sizing(size, size, child)


# --- Dock ---------------------------------------------------------------------


class DockItem(Proxy):
    """A child of a DockLayout attached to one side."""

    def __init__(self, dock: Dock, child: Node) -> None:
        super().__init__(child)
        self._dock = dock

    @property
    def dock(self) -> Dock:
        return self._dock


def docked(dock: Dock, child: Node) -> Node:
    return DockItem(dock, child)


def dock_top(child: Node) -> Node:
    return docked(Dock.TOP, child)


def dock_bottom(child: Node) -> Node:
    return docked(Dock.BOTTOM, child)


def dock_start(child: Node) -> Node:
    return docked(Dock.START, child)


def dock_end(child: Node) -> Node:
    return docked(Dock.END, child)


def _place_docked(dock: Dock, inner: Rect, outer: Rect) -> Tuple[Rect, Rect]:
    """Where a docked item goes, and the space left for the items after it."""
    if dock == Dock.NONE:
        return inner, outer
    if dock == Dock.FILL:
        return outer, outer
    f = dock.flow()
    inner = f.set_origin(inner, f.get_origin(outer))
    inner = f.set_height(inner, f.get_height(outer))
    outer = f.set_start(outer, f.get_end(inner))
    return inner, outer


def _accumulate(orien: Orien, current: Vec2, inner: Vec2) -> Vec2:
    x, y = current.x, current.y
    if orien == Orien.VERTICAL:
        return Vec2(max(x, inner.x), y + inner.y)
    if orien == Orien.NONE:
        x, y = max(x, inner.x), max(y, inner.y)
    return Vec2(x + inner.x, max(y, inner.y))


class DockLayout(Group):
    """Children docked one by one against the sides of the remaining space."""

    @staticmethod
    def get_dock(child: Node) -> Dock:
        return child.dock if isinstance(child, DockItem) else Dock.NONE

    def layout(self, rect: Rect) -> None:
        self._bound = rect
        outer = rect
        for child in self._children:
            inner = _rect_of(child.size(outer.size(), Hint.MIN))
            placed, outer = _place_docked(self.get_dock(child), inner, outer)
            child.layout(placed)

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        current = Vec2(0, 0)
        for child in reversed(self._children):
            current = _accumulate(
                self.get_dock(child).orien(), child.size(current, Hint.MIN), current
            )
        if hint == Hint.MAX:
            current = Vec2(max(current.x, s.x), max(current.y, s.y))
        return current


def dock(*args: Any) -> Node:
    """A dock layout of the given nodes; lists of nodes are accepted too."""
    return DockLayout(_children(args))


# --- Spacing ------------------------------------------------------------------


def _as_spacing(value: SpacingLike) -> Spacing:
    if isinstance(value, Spacing):
        return value
    if isinstance(value, tuple):
        if len(value) == 2:
            h, v = value
            return Spacing(h, v, h, v)
        if len(value) == 4:
            return Spacing(*value)
        raise ValueError("spacing takes one, two or four values")
    return Spacing(value, value, value, value)


class SpacingNode(Proxy):
    """Surrounds its child with empty space."""

    def __init__(self, value: SpacingLike, child: Node) -> None:
        super().__init__(child)
        self._spacing = _as_spacing(value)

    @property
    def spacing(self) -> Spacing:
        return self._spacing

    def update_from(self, other: Node) -> None:
        self._spacing = other._spacing
        super().update_from(other)

    def layout(self, rect: Rect) -> None:
        self._child.layout(self._spacing.shrink(Flow.LEFT_TO_RIGHT, rect))

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        extra = self._spacing.all()
        inner = self._child.size(Vec2(s.x - extra.x, s.y - extra.y), hint)
        return Vec2(inner.x + extra.x, inner.y + extra.y)

    def bound(self) -> Rect:
        return self._spacing.grow(Flow.LEFT_TO_RIGHT, self._child.bound())


def spacing(value: SpacingLike, child: Node) -> Node:
    return SpacingNode(value, child)