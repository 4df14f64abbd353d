"""ASCII character classification and integer division helpers."""

from __future__ import annotations

from typing import NamedTuple

# The terminating NUL of the punctuation table is matched as well.
_PUNCTUATION = frozenset(map(ord, "!\"#$%&'()*+,-./:;<=>?@ [\\]^_`{|}~\0"))


def isalnum(c: int) -> bool:
    return isalpha(c) or isdigit(c)


def isalpha(c: int) -> bool:
    return ord("a") <= c <= ord("z") or ord("A") <= c <= ord("Z")


def isblank(c: int) -> bool:
    return c in (ord(" "), ord("\t"))


def iscntrl(c: int) -> bool:
    return c < 0x1F or c == 0x7F


def isdigit(c: int) -> bool:
    return ord("0") <= c <= ord("9")


def isgraph(c: int) -> bool:
    return 0x21 <= c <= 0x7F


def islower(c: int) -> bool:
    return ord("a") <= c <= ord("z")


def isprint(c: int) -> bool:
    return 0x20 <= c <= 0x7F


def ispunct(c: int) -> bool:
    return c in _PUNCTUATION


def isspace(c: int) -> bool:
    return c in (ord(" "), ord("\n"), ord("\r"), ord("\t"), ord("\v"))


def isupper(c: int) -> bool:
    return ord("A") <= c <= ord("Z")


def isxdigit(c: int) -> bool:
    return isdigit(c) or ord("A") <= c <= ord("F") or ord("a") <= c <= ord("f")


def tolower(c: int) -> int:
    return c - ord("A") + ord("a") if isupper(c) else c


def toupper(c: int) -> int:
    return c - ord("a") + ord("A") if islower(c) else c


class DivResult(NamedTuple):
    quot: int
    rem: int


def div(number: int, denom: int) -> DivResult:
    """Quotient truncated toward zero and the matching remainder."""
    if denom == 0:
        raise ZeroDivisionError("integer division by zero")
    quot = abs(number) // abs(denom)
    if (number < 0) != (denom < 0):
        quot = -quot
    return DivResult(quot, number - quot * denom)