"""An indenting text emitter on top of any writable text stream."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol, Union

_INDENT = "    "


class _TextWriter(Protocol):
    def write(self, text: str) -> Any: ...


class Emit:
    """Write text to ``writer``, inserting indented line breaks on request.

    A pending line break (there is one at the start) is written before the
    next string, followed by four spaces per indentation level.
    """

    def __init__(self, writer: _TextWriter) -> None:
        self._writer = writer
        self._indent = 0
        self._total = 0
        self._newline = True

    def _write(self, text: str) -> None:
        written = self._writer.write(text)
        self._total += written if isinstance(written, int) else len(text)

    def indent(self) -> None:
        self._indent += 1

    def deindent(self) -> None:
        if self._indent == 0:
            raise RuntimeError("deindent() underflow")
        self._indent -= 1

    @contextmanager
    def indented(self) -> Iterator[Emit]:
        """Indent one level for the duration of the block."""
        self.indent()
        try:
            yield self
        finally:
            self.deindent()

    def newline(self) -> None:
        """Request a line break before the next string."""
        self._newline = True

    def insert_newline(self) -> None:
        """Write a line break and the current indentation right away."""
        self._write("\n")
        for _ in range(self._indent):
            self._write(_INDENT)
        self._newline = False

    def rune(self, r: Union[str, int]) -> None:
        """Write a single character, without inserting a pending line break."""
        self._write(chr(r) if isinstance(r, int) else r)

    def __call__(self, text: str, *args: Any) -> None:
        """Write ``text``, formatted with ``args`` when any are given."""
        if self._newline:
            self.insert_newline()
        self._write(text.format(*args) if args else text)

    def total(self) -> int:
        """How much has been written so far."""
        return self._total