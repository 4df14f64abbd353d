"""Composable character matchers over a scanner.

A scanner is any object with ``curr()`` returning the current character,
``next()`` advancing by one, and ``skip(text)`` that advances past
``text`` and returns True when the input starts with it.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Union

Rune = Union[str, int]


class Scanner(Protocol):
    def curr(self) -> str: ...

    def next(self) -> Any: ...

    def skip(self, text: str) -> bool: ...


Matcher = Callable[[Any], bool]


def _rune(c: Rune) -> str:
    return chr(c) if isinstance(c, int) else c


def single(*args: Rune) -> Matcher:
    """Match and consume the current character if it is one of ``args``."""
    chars = frozenset(_rune(c) for c in args)

    def match(scan: Any) -> bool:
        if scan.curr() in chars:
            scan.next()
            return True
        return False

    return match


def word(text: Optional[str] = None) -> Matcher:
    """Match and consume ``text``; without it, test for a word character."""
    if text is None:
        return either(alnum(), single("_"))

    def match(scan: Any) -> bool:
        return scan.skip(text)

    return match


def char_range(start: Rune, end: Rune) -> Matcher:
    """Test whether the current character lies in [start, end], without consuming it."""
    lo, hi = _rune(start), _rune(end)

    def match(scan: Any) -> bool:
        c = scan.curr()
        return lo <= c <= hi

    return match


def either(*args: Matcher) -> Matcher:
    """Succeed on the first matcher that succeeds."""

    def match(scan: Any) -> bool:
        return any(expr(scan) for expr in args)

    return match


def chain(*args: Matcher) -> Matcher:
    """Run matchers in turn, stopping at the first failure (no backtracking)."""

    def match(scan: Any) -> bool:
        return all(expr(scan) for expr in args)

    return match


def negate(expr: Matcher) -> Matcher:
    def match(scan: Any) -> bool:
        return not expr(scan)

    return match


def opt(expr: Matcher) -> Matcher:
    """Run ``expr`` and succeed regardless."""

    def match(scan: Any) -> bool:
        expr(scan)
        return True

    return match


def zero_or_more(expr: Matcher) -> Matcher:
    def match(scan: Any) -> bool:
        while expr(scan):
            pass
        return True

    return match


def one_or_more(expr: Matcher) -> Matcher:
    def match(scan: Any) -> bool:
        if not expr(scan):
            return False
        while expr(scan):
            pass
        return True

    return match


def zero_or_one(expr: Matcher) -> Matcher:
    def match(scan: Any) -> bool:
        expr(scan)
        return True

    return match


# --- Character classes ------------------------------------------------------


def upper() -> Matcher:
    return char_range("A", "Z")


def lower() -> Matcher:
    return char_range("a", "z")


def alpha() -> Matcher:
    return either(upper(), lower())


def digit() -> Matcher:
    return char_range("0", "9")


def xdigit() -> Matcher:
    return either(digit(), char_range("a", "f"), char_range("A", "F"))


def alnum() -> Matcher:
    return either(alpha(), digit())


def punct() -> Matcher:
    return single(*"!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def space() -> Matcher:
    return single(" ", "\t", "\n", "\r")


def blank() -> Matcher:
    return single(" ", "\t")


# --- Separators -------------------------------------------------------------


def _sep_matcher(sep: Rune) -> Matcher:
    if isinstance(sep, int) or len(sep) == 1:
        return single(sep)
    return word(sep)


def separator(sep: Rune) -> Matcher:
    """Match ``sep`` surrounded by optional whitespace."""
    return chain(zero_or_more(space()), _sep_matcher(sep), zero_or_more(space()))


def opt_separator(sep: Rune) -> Matcher:
    """Match optional whitespace with an optional ``sep`` inside it."""
    return chain(zero_or_more(space()), opt(_sep_matcher(sep)), zero_or_more(space()))