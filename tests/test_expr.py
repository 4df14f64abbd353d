import string

import pytest

from karm import expr


class TextScan:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def curr(self):
        return self.text[self.pos] if self.pos < len(self.text) else "\0"

    def next(self):
        self.pos += 1

    def skip(self, w):
        if self.text.startswith(w, self.pos):
            self.pos += len(w)
            return True
        return False


def test_single_consumes_on_match():
    s = TextScan("abc")
    assert expr.single("x", "a")(s)
    assert s.pos == 1


def test_single_keeps_position_on_failure():
    s = TextScan("abc")
    assert not expr.single("b")(s)
    assert s.pos == 0


def test_single_accepts_code_points():
    s = TextScan("a")
    assert expr.single(ord("a"))(s)
    assert s.pos == len("a")


def test_word():
    s = TextScan("abc")
    assert expr.word("ab")(s)
    assert s.pos == len("ab")
    assert not expr.word("x")(s)


def test_range_does_not_consume():
    s = TextScan("5")
    assert expr.digit()(s)
    assert s.pos == 0


def test_chain_does_not_backtrack():
    s = TextScan("ab")
    assert not expr.chain(expr.single("a"), expr.single("x"))(s)
    assert s.pos == 1


def test_either_and_negate():
    s = TextScan("b")
    assert expr.either(expr.single("a"), expr.single("b"))(s)
    assert expr.negate(expr.single("z"))(TextScan("b"))


def test_opt_and_zero_or_one_always_succeed():
    assert expr.opt(expr.single("x"))(TextScan("a"))
    assert expr.zero_or_one(expr.single("x"))(TextScan("a"))


def test_zero_or_more():
    s = TextScan("   x")
    assert expr.zero_or_more(expr.space())(s)
    assert s.pos == len("   ")


def test_one_or_more():
    assert not expr.one_or_more(expr.single("a"))(TextScan("b"))
    s = TextScan("aab")
    assert expr.one_or_more(expr.single("a"))(s)
    assert s.pos == len("aa")


@pytest.mark.parametrize("sep, text", [(",", "  ,  x"), ("->", " -> x"), (ord(";"), ";x")])
def test_separator(sep, text):
    s = TextScan(text)
    assert expr.separator(sep)(s)
    assert s.curr() == "x"


def test_separator_requires_sep():
    assert not expr.separator(",")(TextScan("  x"))


def test_opt_separator():
    s = TextScan("  x")
    assert expr.opt_separator(",")(s)
    assert s.curr() == "x"


def test_punct_matches_ascii_punctuation():
    for c in map(chr, range(128)):
        assert expr.punct()(TextScan(c)) == (c in string.punctuation)


@pytest.mark.parametrize(
    "matcher, reference",
    [
        (expr.upper, string.ascii_uppercase),
        (expr.lower, string.ascii_lowercase),
        (expr.alpha, string.ascii_letters),
        (expr.digit, string.digits),
        (expr.xdigit, string.hexdigits),
        (expr.alnum, string.ascii_letters + string.digits),
        (expr.word, string.ascii_letters + string.digits + "_"),
        (expr.blank, " \t"),
        (expr.space, " \t\n\r"),
    ],
)
def test_classes(matcher, reference):
    for c in map(chr, range(1, 128)):
        assert matcher()(TextScan(c)) == (c in reference)