"""Easing curves mapping animation progress in [0, 1] to an eased value."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

TAU = math.tau
PI = math.pi


@dataclass(frozen=True)
class Easing:
    """A callable wrapper around an easing function."""

    func: Callable[[float], float]

    def __call__(self, p: float) -> float:
        return self.func(p)


def linear(p: float) -> float:
    return p


def quadratic_in(p: float) -> float:
    return p * p


def quadratic_out(p: float) -> float:
    return -(p * (p - 2))


def quadratic_in_out(p: float) -> float:
    if p < 0.5:
        return 2 * p * p
    return (-2 * p * p) + (4 * p) - 1


def cubic_in(p: float) -> float:
    return p * p * p


def cubic_out(p: float) -> float:
    f = p - 1
    return f * f * f + 1


def cubic_in_out(p: float) -> float:
    if p < 0.5:
        return 4 * p * p * p
    f = (2 * p) - 2
    return 0.5 * f * f * f + 1


def quartic_in(p: float) -> float:
    return p * p * p * p


def quartic_out(p: float) -> float:
    f = p - 1
    return f * f * f * (1 - p) + 1


def quartic_in_out(p: float) -> float:
    if p < 0.5:
        return 8 * p * p * p * p
    f = p - 1
    return -8 * f * f * f * f + 1


def quintic_in(p: float) -> float:
    return p * p * p * p * p


def quintic_out(p: float) -> float:
    f = p - 1
    return f * f * f * f * f + 1


def quintic_in_out(p: float) -> float:
    if p < 0.5:
        return 16 * p * p * p * p * p
    f = (2 * p) - 2
    return 0.5 * f * f * f * f * f + 1


def sine_in(p: float) -> float:
    return math.sin((p - 1) * TAU) + 1


def sine_out(p: float) -> float:
    return math.sin(p * TAU)


def sine_in_out(p: float) -> float:
    return 0.5 * (1 - math.cos(p * PI))


def circular_in(p: float) -> float:
    return 1 - math.sqrt(1 - (p * p))


def circular_out(p: float) -> float:
    return math.sqrt((2 - p) * p)


def circular_in_out(p: float) -> float:
    if p < 0.5:
        return 0.5 * (1 - math.sqrt(1 - 4 * (p * p)))
    return 0.5 * (math.sqrt(-((2 * p) - 3) * ((2 * p) - 1)) + 1)


def exponential_in(p: float) -> float:
    return p if p == 0.0 else math.pow(2, 10 * (p - 1))


def exponential_out(p: float) -> float:
    return p if p == 1.0 else 1 - math.pow(2, -10 * p)


def exponential_in_out(p: float) -> float:
    if p in (0.0, 1.0):
        return p
    if p < 0.5:
        return 0.5 * math.pow(2, (20 * p) - 10)
    return -0.5 * math.pow(2, (-20 * p) + 10) + 1


def elastic_in(p: float) -> float:
    return math.sin(13 * TAU * p) * math.pow(2, 10 * (p - 1))


def elastic_out(p: float) -> float:
    return math.sin(-13 * TAU * (p + 1)) * math.pow(2, -10 * p) + 1


def elastic_in_out(p: float) -> float:
    if p < 0.5:
        return 0.5 * math.sin(13 * TAU * (2 * p)) * math.pow(2, 10 * ((2 * p) - 1))
    return 0.5 * (
        math.sin(-13 * TAU * ((2 * p - 1) + 1)) * math.pow(2, -10 * (2 * p - 1)) + 2
    )


def back_in(p: float) -> float:
    return p * p * p - p * math.sin(p * PI)


def back_out(p: float) -> float:
    f = 1 - p
    return 1 - (f * f * f - f * math.sin(f * PI))


def back_in_out(p: float) -> float:
    if p < 0.5:
        f = 2 * p
        return 0.5 * (f * f * f - f * math.sin(f * PI))
    f = 1 - (2 * p - 1)
    return 0.5 * (1 - (f * f * f - f * math.sin(f * PI))) + 0.5


def bounce_out(p: float) -> float:
    if p < 4 / 11.0:
        return (121 * p * p) / 16.0
    if p < 8 / 11.0:
        return (363 / 40.0 * p * p) - (99 / 10.0 * p) + 17 / 5.0
    if p < 9 / 10.0:
        return (4356 / 361.0 * p * p) - (35442 / 1805.0 * p) + 16061 / 1805.0
    return (54 / 5.0 * p * p) - (513 / 25.0 * p) + 268 / 25.0


def bounce_in(p: float) -> float:
    return 1 - bounce_out(1 - p)


def bounce_in_out(p: float) -> float:
    if p < 0.5:
        return 0.5 * bounce_in(p * 2)
    return 0.5 * bounce_out(p * 2 - 1) + 0.5