"""Directional geometry: vectors, rectangles and layout flows."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Union

Number = Union[int, float]


def _half(value: Number) -> Number:
    """Halve a value, truncating toward zero for integers."""
    if isinstance(value, int):
        q = abs(value) // 2
        return q if value >= 0 else -q
    return value / 2


@dataclass(frozen=True)
class Vec2:
    """A two dimensional vector."""

    x: Number = 0
    y: Number = 0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def max(self, other: Vec2) -> Vec2:
        """Component-wise maximum."""
        return Vec2(max(self.x, other.x), max(self.y, other.y))

    def min(self, other: Vec2) -> Vec2:
        """Component-wise minimum."""
        return Vec2(min(self.x, other.x), min(self.y, other.y))


@dataclass(frozen=True)
class Rect:
    """An axis aligned rectangle given by its origin and size."""

    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0

    def size(self) -> Vec2:
        return Vec2(self.width, self.height)

    def _scaled(self, outer: Rect, pick: Callable[[float, float], float]) -> Rect:
        if not self.width or not self.height:
            raise ValueError("cannot scale an empty rectangle")
        scale = pick(outer.width / self.width, outer.height / self.height)
        width: Number = self.width * scale
        height: Number = self.height * scale
        if isinstance(self.width, int) and isinstance(self.height, int):
            width, height = int(width), int(height)
        return Rect(
            outer.x + _half(outer.width) - _half(width),
            outer.y + _half(outer.height) - _half(height),
            width,
            height,
        )

    def cover(self, outer: Rect) -> Rect:
        """Scale, keeping the aspect ratio, until ``outer`` is covered, centred on it."""
        return self._scaled(outer, max)

    def fit(self, outer: Rect) -> Rect:
        """Scale, keeping the aspect ratio, until it fits ``outer``, centred in it."""
        return self._scaled(outer, min)


class Orien(Enum):
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2


_RELATIVE = (
    0, 1, 2, 3,
    1, 0, 2, 3,
    2, 3, 0, 1,
    3, 2, 0, 1,
)


class Flow(Enum):
    """The direction in which content runs; maps logical edges to physical ones."""

    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1
    TOP_TO_BOTTOM = 2
    BOTTOM_TO_TOP = 3

    @property
    def _horizontal(self) -> bool:
        return self in (Flow.LEFT_TO_RIGHT, Flow.RIGHT_TO_LEFT)

    def orien(self) -> Orien:
        return Orien.HORIZONTAL if self._horizontal else Orien.VERTICAL

    def relative(self, child: Flow) -> Flow:
        return Flow(_RELATIVE[self.value * 4 + child.value])

    def vec(self) -> Vec2:
        return {
            Flow.LEFT_TO_RIGHT: Vec2(1, 0),
            Flow.RIGHT_TO_LEFT: Vec2(-1, 0),
            Flow.TOP_TO_BOTTOM: Vec2(0, 1),
            Flow.BOTTOM_TO_TOP: Vec2(0, -1),
        }[self]

    # --- Getters ---------------------------------------------------------

    def get_start(self, rect: Rect) -> Number:
        if self is Flow.LEFT_TO_RIGHT:
            return rect.x
        if self is Flow.RIGHT_TO_LEFT:
            return rect.x + rect.width
        if self is Flow.TOP_TO_BOTTOM:
            return rect.y
        return rect.y + rect.height

    def get_x(self, vec: Vec2) -> Number:
        return vec.x if self._horizontal else vec.y

    def get_end(self, rect: Rect) -> Number:
        if self is Flow.LEFT_TO_RIGHT:
            return rect.x + rect.width
        if self is Flow.RIGHT_TO_LEFT:
            return rect.x
        if self is Flow.TOP_TO_BOTTOM:
            return rect.y + rect.height
        return rect.y

    def get_top(self, rect: Rect) -> Number:
        return rect.y if self._horizontal else rect.x

    def get_y(self, vec: Vec2) -> Number:
        return vec.y if self._horizontal else vec.x

    def get_bottom(self, rect: Rect) -> Number:
        return rect.y + rect.height if self._horizontal else rect.x + rect.width

    def get_width(self, rect: Rect) -> Number:
        return rect.width if self._horizontal else rect.height

    def get_height(self, rect: Rect) -> Number:
        return rect.height if self._horizontal else rect.width

    def get_origin(self, rect: Rect) -> Vec2:
        return Vec2(self.get_start(rect), self.get_top(rect))

    def get_hcenter(self, rect: Rect) -> Number:
        return _half(self.get_start(rect) + self.get_end(rect))

    def get_vcenter(self, rect: Rect) -> Number:
        return _half(self.get_top(rect) + self.get_bottom(rect))

    # --- Setters ---------------------------------------------------------

    def set_start(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_start(rect)
        if self is Flow.LEFT_TO_RIGHT:
            return replace(rect, x=rect.x + d, width=rect.width - d)
        if self is Flow.RIGHT_TO_LEFT:
            return replace(rect, width=rect.width + d)
        if self is Flow.TOP_TO_BOTTOM:
            return replace(rect, y=rect.y + d, height=rect.height - d)
        return replace(rect, height=rect.height + d)

    def set_x(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_start(rect)
        if self._horizontal:
            return replace(rect, x=rect.x + d)
        return replace(rect, y=rect.y + d)

    def set_end(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_end(rect)
        if self is Flow.RIGHT_TO_LEFT:
            return replace(rect, x=rect.x + d, width=rect.width + d)
        if self is Flow.LEFT_TO_RIGHT:
            return replace(rect, width=rect.width + d)
        if self is Flow.BOTTOM_TO_TOP:
            return replace(rect, y=rect.y + d, height=rect.height + d)
        return replace(rect, height=rect.height + d)

    def set_top(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_top(rect)
        if self._horizontal:
            return replace(rect, y=rect.y + d, height=rect.height - d)
        return replace(rect, x=rect.x + d, width=rect.width - d)

    def set_y(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_top(rect)
        if self._horizontal:
            return replace(rect, y=rect.y + d)
        return replace(rect, x=rect.x + d)

    def set_bottom(self, rect: Rect, value: Number) -> Rect:
        d = value - self.get_bottom(rect)
        if self._horizontal:
            return replace(rect, height=rect.height + d)
        return replace(rect, width=rect.width + d)

    def set_origin(self, rect: Rect, value: Vec2) -> Rect:
        return self.set_y(self.set_x(rect, value.x), value.y)

    def set_width(self, rect: Rect, value: Number) -> Rect:
        if self._horizontal:
            return replace(rect, width=value)
        return replace(rect, height=value)

    def set_height(self, rect: Rect, value: Number) -> Rect:
        if self._horizontal:
            return replace(rect, height=value)
        return replace(rect, width=value)