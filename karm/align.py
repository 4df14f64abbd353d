"""Alignment of a rectangle inside another, and sizing hints."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, IntFlag

from karm.flow import Flow, Number, Rect, Vec2


def _half(value: Number) -> Number:
    if isinstance(value, int):
        q = abs(value) // 2
        return q if value >= 0 else -q
    return value / 2


class Hint(Enum):
    """How much space a node is asked about."""

    MIN = 0
    PREFERRED = 1
    MAX = 2


class Align(IntFlag):
    """Alignment flags, combinable with ``|``."""

    NONE = 0
    START = 1 << 0
    TOP = 1 << 1
    END = 1 << 2
    BOTTOM = 1 << 3
    VSTRETCH = 1 << 4
    HSTRETCH = 1 << 5
    VCENTER = 1 << 6
    HCENTER = 1 << 7
    COVER = 1 << 8
    FIT = 1 << 9

    STRETCH = HSTRETCH | VSTRETCH
    VFILL = VSTRETCH | TOP
    HFILL = HSTRETCH | START
    CENTER = HCENTER | VCENTER
    FILL = VFILL | HFILL

    def apply(self, flow: Flow, inner: Rect, outer: Rect) -> Rect:
        """Place ``inner`` within ``outer`` according to these flags."""
        if self == Align.NONE:
            return outer
        if self & Align.COVER:
            inner = inner.cover(outer)
        if self & Align.FIT:
            inner = inner.fit(outer)
        if self & Align.START:
            inner = flow.set_x(inner, flow.get_start(outer))
        if self & Align.TOP:
            inner = flow.set_y(inner, flow.get_top(outer))
        if self & Align.END:
            inner = flow.set_x(inner, flow.get_end(outer) - flow.get_width(inner))
        if self & Align.BOTTOM:
            inner = flow.set_y(inner, flow.get_bottom(outer) - flow.get_height(inner))
        if self & Align.HSTRETCH:
            inner = flow.set_width(inner, flow.get_width(outer))
        if self & Align.VSTRETCH:
            inner = flow.set_height(inner, flow.get_height(outer))
        if self & Align.HCENTER:
            inner = flow.set_x(
                inner, flow.get_hcenter(outer) - _half(flow.get_width(inner))
            )
        if self & Align.VCENTER:
            inner = flow.set_y(
                inner, flow.get_vcenter(outer) - _half(flow.get_height(inner))
            )
        return inner

    def size(self, inner: Vec2, outer: Vec2, hint: Hint) -> Vec2:
        """The size an aligned child asks for, given the available space."""
        if self & Align.COVER:
            inner = Vec2() if hint is Hint.MIN else outer
        if self & Align.HSTRETCH and hint is Hint.MAX:
            inner = replace(inner, x=outer.x)
        if self & Align.VSTRETCH and hint is Hint.MAX:
            inner = replace(inner, y=outer.y)
        return inner