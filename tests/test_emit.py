import io

import pytest

from karm.emit import Emit


def make():
    buf = io.StringIO()
    return buf, Emit(buf)


def test_first_write_starts_with_line_break():
    buf, emit = make()
    emit("hello")
    assert buf.getvalue() == "\n" + "hello"


def test_no_break_without_request():
    buf, emit = make()
    emit("a")
    emit("b")
    assert buf.getvalue() == "\nab"


def test_indented_newline():
    buf, emit = make()
    emit("top")
    emit.indent()
    emit.newline()
    emit("inner")
    assert buf.getvalue() == "\ntop\n" + "    " + "inner"


def test_indented_context_restores_level():
    buf, emit = make()
    emit("a")
    with emit.indented():
        emit.newline()
        emit("b")
    emit.newline()
    emit("c")
    assert buf.getvalue().splitlines() == ["", "a", "    b", "c"]


def test_deindent_underflow_raises():
    _, emit = make()
    with pytest.raises(RuntimeError):
        emit.deindent()


def test_rune_skips_pending_break():
    buf, emit = make()
    emit.rune("x")
    emit.rune(ord("y"))
    assert buf.getvalue() == "xy"


def test_format_arguments():
    buf, emit = make()
    emit("{} + {}", 1, 2)
    assert buf.getvalue().strip() == "{} + {}".format(1, 2)


def test_plain_string_keeps_braces():
    buf, emit = make()
    emit("{x}")
    assert buf.getvalue().strip() == "{x}"


def test_total_counts_everything_written():
    buf, emit = make()
    emit("abc")
    with emit.indented():
        emit.insert_newline()
        emit("def")
    emit.rune("!")
    assert emit.total() == len(buf.getvalue())


def test_insert_newline_clears_pending():
    buf, emit = make()
    emit.insert_newline()
    emit("x")
    assert buf.getvalue().count("\n") == 1