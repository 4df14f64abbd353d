"""Spacing around a rectangle and per-corner radii."""

from __future__ import annotations

from dataclasses import dataclass

from karm.flow import Flow, Number, Rect, Vec2


@dataclass(frozen=True, init=False)
class Spacing:
    """Insets on the four logical edges.

    Built from one value (all edges), two (horizontal, vertical) or four
    (start, top, end, bottom).
    """

    start: Number
    top: Number
    end: Number
    bottom: Number

    def __init__(self, *values: Number) -> None:
        if not values:
            values = (0,)
        if len(values) == 1:
            start = top = end = bottom = values[0]
        elif len(values) == 2:
            start = end = values[0]
            top = bottom = values[1]
        elif len(values) == 4:
            start, top, end, bottom = values
        else:
            raise TypeError("Spacing takes 0, 1, 2 or 4 values")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "top", top)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "bottom", bottom)

    def shrink(self, flow: Flow, rect: Rect) -> Rect:
        rect = flow.set_start(rect, flow.get_start(rect) + self.start)
        rect = flow.set_top(rect, flow.get_top(rect) + self.top)
        rect = flow.set_end(rect, flow.get_end(rect) - self.end)
        return flow.set_bottom(rect, flow.get_bottom(rect) - self.bottom)

    def grow(self, flow: Flow, rect: Rect) -> Rect:
        rect = flow.set_start(rect, flow.get_start(rect) - self.start)
        rect = flow.set_top(rect, flow.get_top(rect) - self.top)
        rect = flow.set_end(rect, flow.get_end(rect) + self.end)
        return flow.set_bottom(rect, flow.get_bottom(rect) + self.bottom)

    def top_start(self) -> Vec2:
        return Vec2(self.start, self.top)

    def top_end(self) -> Vec2:
        return Vec2(self.end, self.top)

    def bottom_start(self) -> Vec2:
        return Vec2(self.start, self.bottom)

    def bottom_end(self) -> Vec2:
        return Vec2(self.end, self.bottom)

    def all(self) -> Vec2:
        """Total horizontal and vertical spacing."""
        return Vec2(self.start + self.end, self.top + self.bottom)


@dataclass(frozen=True, init=False)
class Radius:
    """Corner radii.

    Built from nothing (all zero), one value (all corners), two values
    (top-start/bottom-end, top-end/bottom-start) or four values.
    """

    top_start: Number
    top_end: Number
    bottom_start: Number
    bottom_end: Number

    def __init__(self, *values: Number) -> None:
        if not values:
            values = (0,)
        if len(values) == 1:
            corners = (values[0],) * 4
        elif len(values) == 2:
            start_end, end_start = values
            corners = (start_end, end_start, end_start, start_end)
        elif len(values) == 4:
            corners = tuple(values)
        else:
            raise TypeError("Radius takes 0, 1, 2 or 4 values")
        for name, value in zip(
            ("top_start", "top_end", "bottom_start", "bottom_end"), corners
        ):
            object.__setattr__(self, name, value)

    def clamp(self, low: Number, high: Number) -> Radius:
        def c(v: Number) -> Number:
            return max(low, min(v, high))

        return Radius(
            c(self.top_start), c(self.top_end), c(self.bottom_start), c(self.bottom_end)
        )