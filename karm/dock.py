"""Docking a rectangle to one edge of the remaining space."""

from __future__ import annotations

from enum import Enum

from karm.flow import Flow, Orien, Rect


class Dock(Enum):
    NONE = 0
    FILL = 1
    START = 2
    TOP = 3
    END = 4
    BOTTOM = 5

    def flow(self) -> Flow:
        return {
            Dock.NONE: Flow.LEFT_TO_RIGHT,
            Dock.FILL: Flow.LEFT_TO_RIGHT,
            Dock.START: Flow.LEFT_TO_RIGHT,
            Dock.TOP: Flow.TOP_TO_BOTTOM,
            Dock.END: Flow.RIGHT_TO_LEFT,
            Dock.BOTTOM: Flow.BOTTOM_TO_TOP,
        }[self]

    def orien(self) -> Orien:
        if self in (Dock.NONE, Dock.FILL):
            return Orien.NONE
        return self.flow().orien()

    def apply(self, inner: Rect, outer: Rect) -> tuple[Rect, Rect]:
        """Place ``inner`` in ``outer``; return the placed rect and the space left."""
        if self is Dock.NONE:
            return inner, outer
        if self is Dock.FILL:
            return outer, outer
        flow = self.flow()
        inner = flow.set_origin(inner, flow.get_origin(outer))
        inner = flow.set_height(inner, flow.get_height(outer))
        outer = flow.set_start(outer, flow.get_end(inner))
        return inner, outer