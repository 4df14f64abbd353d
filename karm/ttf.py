"""Reading glyph outlines and metrics from TrueType and OpenType fonts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, List, NamedTuple, Protocol, Tuple, Union

from karm.flow import Vec2

_log = logging.getLogger(__name__)

Rune = Union[str, int]


class TtfError(Exception):
    """Raised when a font cannot be loaded."""


def _rune(r: Rune) -> int:
    return ord(r) if isinstance(r, str) else r


class BScan:
    """A big-endian reader over a byte buffer.

    Reads that would run past the end yield 0 and do not move the cursor.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: Union[bytes, bytearray, memoryview] = b"", pos: int = 0) -> None:
        self._data = data if isinstance(data, bytes) else bytes(data)
        self._pos = pos

    def ended(self) -> bool:
        return self.rem() == 0

    def rem(self) -> int:
        return max(0, len(self._data) - self._pos)

    def skip(self, n: int) -> BScan:
        """Advance by ``n`` bytes, stopping at the end; returns this scanner."""
        self._pos += min(n, self.rem())
        return self

    def peek(self, n: int) -> BScan:
        """A new scanner ``n`` bytes ahead of this one."""
        return BScan(self._data, self._pos).skip(n)

    def _read(self, n: int, signed: bool, advance: bool) -> int:
        if self.rem() < n:
            return 0
        value = int.from_bytes(self._data[self._pos : self._pos + n], "big", signed=signed)
        if advance:
            self._pos += n
        return value

    def next_u8(self) -> int:
        return self._read(1, False, True)

    def next_u16(self) -> int:
        return self._read(2, False, True)

    def next_u32(self) -> int:
        return self._read(4, False, True)

    def next_i8(self) -> int:
        return self._read(1, True, True)

    def next_i16(self) -> int:
        return self._read(2, True, True)

    def next_i32(self) -> int:
        return self._read(4, True, True)

    def peek_u16(self) -> int:
        return self._read(2, False, False)

    def peek_i16(self) -> int:
        return self._read(2, True, False)

    def next_str(self, n: int) -> str:
        """Read up to ``n`` bytes as a latin-1 string."""
        n = max(0, min(n, self.rem()))
        text = self._data[self._pos : self._pos + n].decode("latin-1")
        self._pos += n
        return text


@dataclass(frozen=True)
class _Table:
    data: bytes = b""

    NAME: ClassVar[str] = ""

    def present(self) -> bool:
        return len(self.data) > 0

    def begin(self) -> BScan:
        return BScan(self.data)


class Head(_Table):
    NAME: ClassVar[str] = "head"

    def unit_per_em(self) -> int:
        return self.begin().skip(18).next_u16()

    def loca_format(self) -> int:
        return self.begin().skip(50).next_u16()


class Maxp(_Table):
    NAME: ClassVar[str] = "maxp"

    def num_glyphs(self) -> int:
        return self.begin().skip(4).next_u16()


@dataclass(frozen=True)
class CmapTable:
    """One character-to-glyph subtable of a ``cmap`` table."""

    platform_id: int
    encoding_id: int
    format: int
    data: bytes

    def begin(self) -> BScan:
        return BScan(self.data)

    def _glyph_id_for_format4(self, r: int) -> int:
        seg_count_x2 = self.begin().skip(6).next_u16()
        for i in range(seg_count_x2 // 2):
            s = self.begin().skip(14)
            end_code = s.skip(i * 2).peek_u16()
            if r >= end_code:
                continue
            # + 2 for the reserved padding word
            start_code = s.skip(seg_count_x2 + 2).peek_u16()
            if r < start_code:
                break
            id_delta = s.skip(seg_count_x2).peek_i16() & 0xFFFF
            id_range_offset = s.skip(seg_count_x2).peek_u16()
            if id_range_offset == 0:
                return (r + id_delta) & 0xFFFF
            return s.skip(id_range_offset + (r - start_code) * 2).next_u16()
        _log.warning("glyph not found for rune %x", r)
        return 0

    def _glyph_id_for_format12(self, r: int) -> int:
        s = self.begin().skip(12)
        for _ in range(s.next_u32()):
            if s.rem() < 12:
                break
            start_code = s.next_u32()
            end_code = s.next_u32()
            glyph_offset = s.next_u32()
            if r < start_code:
                break
            if r > end_code:
                continue
            return (r - start_code) + glyph_offset
        _log.warning("glyph not found for rune %x", r)
        return 0

    def glyph_id_for(self, rune: Rune) -> int:
        r = _rune(rune)
        if self.format == 4:
            return self._glyph_id_for_format4(r)
        if self.format == 12:
            return self._glyph_id_for_format12(r)
        return 0


class Cmap(_Table):
    NAME: ClassVar[str] = "cmap"

    def iter_tables(self) -> Iterator[CmapTable]:
        s = self.begin().skip(2)
        for _ in range(s.next_u16()):
            platform_id = s.next_u16()
            encoding_id = s.next_u16()
            offset = s.next_u32()
            sub = self.data[offset:]
            yield CmapTable(platform_id, encoding_id, BScan(sub).next_u16(), sub)


class Loca(_Table):
    NAME: ClassVar[str] = "loca"

    def glyf_offset(self, glyph_id: int, head: Head) -> int:
        s = self.begin()
        if head.loca_format() == 0:
            return s.skip(glyph_id * 2).next_u16()
        return s.skip(glyph_id * 4).next_u32()


@dataclass(frozen=True)
class GlyfMetrics:
    num_contours: int = 0
    x_min: int = 0
    y_min: int = 0
    x_max: int = 0
    y_max: int = 0


class _PathSink(Protocol):
    def move_to(self, point: Vec2) -> Any: ...

    def line_to(self, point: Vec2) -> Any: ...

    def quad_to(self, control: Vec2, point: Vec2) -> Any: ...

    def close(self) -> Any: ...


def _coord(scan: BScan, flags: int, short: int, same: int) -> int:
    if flags & short:
        value = scan.next_u8()
        return value if flags & same else -value
    return 0 if flags & same else scan.next_i16()


class Glyf(_Table):
    NAME: ClassVar[str] = "glyf"

    ON_CURVE_POINT: ClassVar[int] = 0x01
    X_SHORT_VECTOR: ClassVar[int] = 0x02
    Y_SHORT_VECTOR: ClassVar[int] = 0x04
    REPEAT: ClassVar[int] = 0x08
    SAME_OR_POSITIVE_X: ClassVar[int] = 0x10
    SAME_OR_POSITIVE_Y: ClassVar[int] = 0x20
    OVERLAY_SIMPLE: ClassVar[int] = 0x40

    @staticmethod
    def _read_metrics(s: BScan, glyf_offset: int) -> GlyfMetrics:
        s.skip(glyf_offset)
        num_contours = s.next_i16()
        if num_contours == 0:
            return GlyfMetrics()
        return GlyfMetrics(num_contours, s.next_i16(), s.next_i16(), s.next_i16(), s.next_i16())

    def metrics(self, glyf_offset: int) -> GlyfMetrics:
        return self._read_metrics(self.begin(), glyf_offset)

    def _next_flags(self, scan: BScan, flags: int, repeat: int) -> Tuple[int, int]:
        if not repeat:
            flags = scan.next_u8()
            if flags & self.REPEAT:
                repeat = scan.next_u8()
            return flags, repeat
        return flags, repeat - 1

    def _contour_simple(self, sink: _PathSink, m: GlyfMetrics, s: BScan) -> None:
        end_pts = s.peek(0)
        n_points = s.peek(2 * (m.num_contours - 1)).next_u16() + 1
        instruction_length = s.skip(m.num_contours * 2).next_u16()
        s.skip(instruction_length)
        flags_scan = s.peek(0)

        n_x_coords = 0
        flags = repeat = 0
        for _ in range(n_points):
            flags, repeat = self._next_flags(s, flags, repeat)
            if flags & self.X_SHORT_VECTOR:
                n_x_coords += 1
            elif not flags & self.SAME_OR_POSITIVE_X:
                n_x_coords += 2

        x_scan = s.peek(0)
        y_scan = s.peek(n_x_coords)

        start = 0
        curr = Vec2(0.0, 0.0)
        flags = repeat = 0
        for _ in range(m.num_contours):
            end = end_pts.next_u16()
            cp = Vec2(0.0, 0.0)
            start_point = Vec2(0.0, 0.0)
            was_cp = False

            for i in range(start, end + 1):
                flags, repeat = self._next_flags(flags_scan, flags, repeat)
                x = _coord(x_scan, flags, self.X_SHORT_VECTOR, self.SAME_OR_POSITIVE_X)
                y = _coord(y_scan, flags, self.Y_SHORT_VECTOR, self.SAME_OR_POSITIVE_Y)
                curr = curr + Vec2(float(x), float(-y))

                if i == start:
                    sink.move_to(curr)
                    start_point = curr
                elif flags & self.ON_CURVE_POINT:
                    if was_cp:
                        sink.quad_to(cp, curr)
                    else:
                        sink.line_to(curr)
                    was_cp = False
                else:
                    if was_cp:
                        mid = Vec2((cp.x + curr.x) / 2, (cp.y + curr.y) / 2)
                        sink.quad_to(cp, mid)
                    cp = curr
                    was_cp = True

            if was_cp:
                sink.quad_to(cp, start_point)
            sink.close()
            start = end + 1

    def contour(self, sink: _PathSink, glyf_offset: int) -> None:
        """Feed the outline of the glyph at ``glyf_offset`` into ``sink``."""
        s = self.begin()
        m = self._read_metrics(s, glyf_offset)
        if m.num_contours > 0:
            self._contour_simple(sink, m, s)
        elif m.num_contours < 0:
            _log.warning("composite glyphs are not drawn")


class Hhea(_Table):
    NAME: ClassVar[str] = "hhea"

    def ascender(self) -> int:
        return self.begin().skip(4).next_i16()

    def descender(self) -> int:
        return -self.begin().skip(6).next_i16()

    def line_gap(self) -> int:
        return self.begin().skip(8).next_i16()

    def advance_width_max(self) -> int:
        return self.begin().skip(10).next_u16()

    def number_of_h_metrics(self) -> int:
        return self.begin().skip(34).next_u16()


class _HMetrics(NamedTuple):
    advance_width: int
    lsb: int


class Hmtx(_Table):
    NAME: ClassVar[str] = "hmtx"
    LONG_RECORD_SIZE: ClassVar[int] = 4
    SHORT_RECORD_SIZE: ClassVar[int] = 2

    def metrics(self, glyph_id: int, hhea: Hhea) -> _HMetrics:
        """Advance width and left side bearing of a glyph."""
        count = hhea.number_of_h_metrics()
        if glyph_id < count:
            s = self.begin().skip(glyph_id * self.LONG_RECORD_SIZE)
            return _HMetrics(s.next_u16(), s.next_i16())
        adv_offset = (count - 1) * self.LONG_RECORD_SIZE
        lsb_offset = count * self.LONG_RECORD_SIZE + (glyph_id - count) * self.SHORT_RECORD_SIZE
        return _HMetrics(
            self.begin().skip(adv_offset).next_u16(),
            self.begin().skip(lsb_offset).next_u16(),
        )


@dataclass
class PathRecorder:
    """A path sink that keeps every drawing command it receives."""

    commands: List[tuple] = field(default_factory=list)

    def move_to(self, point: Vec2) -> None:
        self.commands.append(("move_to", point))

    def line_to(self, point: Vec2) -> None:
        self.commands.append(("line_to", point))

    def quad_to(self, control: Vec2, point: Vec2) -> None:
        self.commands.append(("quad_to", control, point))

    def close(self) -> None:
        self.commands.append(("close",))


@dataclass(frozen=True)
class GlyphMetrics:
    x: float
    y: float
    width: float
    height: float
    lsb: float
    advance: float


@dataclass(frozen=True)
class FontMetrics:
    ascend: float
    descend: float
    linegap: float
    max_width: float


class _TableRecord(NamedTuple):
    tag: str
    check_sum: int
    offset: int
    length: int


# (platform id, encoding id, format, score)
_KNOWN_CMAPS = (
    (0, 3, 4, 150),
    (3, 1, 4, 100),
    (0, 4, 12, 1050),
    (3, 10, 12, 1000),
)

_VERSIONS = (0x00010000, 0x4F54544F)


class Font:
    """A parsed font; raises TtfError when required tables are missing."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = bytes(data)
        version = self.version()
        if version not in _VERSIONS:
            raise TtfError(f"invalid version {version:x}")
        self._head = Head(self.require_table(Head.NAME))
        self._cmap = Cmap(self.require_table(Cmap.NAME))
        self._cmap_table = self._choose_cmap()
        self._glyf = Glyf(self.require_table(Glyf.NAME))
        self._loca = Loca(self.require_table(Loca.NAME))
        self._hhea = Hhea(self.require_table(Hhea.NAME))
        self._hmtx = Hmtx(self.require_table(Hmtx.NAME))
        self._name = self.lookup_table("name")
        self._kern = self.lookup_table("kern")

    @staticmethod
    def load(data: Union[bytes, bytearray, memoryview]) -> Font:
        return Font(data)

    def _choose_cmap(self) -> CmapTable:
        best = None
        best_score = 0
        for table in self._cmap.iter_tables():
            for platform_id, encoding_id, fmt, score in _KNOWN_CMAPS:
                if (
                    (platform_id, encoding_id, fmt)
                    == (table.platform_id, table.encoding_id, table.format)
                    and score > best_score
                ):
                    best, best_score = table, score
        if best is None:
            raise TtfError("no cmap table")
        return best

    def version(self) -> int:
        return BScan(self._data).next_u32()

    def iter_tables(self) -> Iterator[_TableRecord]:
        scan = BScan(self._data)
        scan.next_u32()
        count = scan.next_u16()
        scan.skip(6)  # search range, entry selector, range shift
        for _ in range(count):
            yield _TableRecord(scan.next_str(4), scan.next_u32(), scan.next_u32(), scan.next_u32())

    def _find_table(self, name: str) -> Union[bytes, None]:
        for table in self.iter_tables():
            if table.tag == name:
                return self._data[table.offset : table.offset + table.length]
        return None

    def lookup_table(self, name: str) -> bytes:
        """The bytes of table ``name``, or empty bytes when it is absent."""
        found = self._find_table(name)
        if found is None:
            _log.warning("'%s' table not found", name)
            return b""
        return found

    def require_table(self, name: str) -> bytes:
        """The bytes of table ``name``; raises TtfError when it is absent."""
        found = self._find_table(name)
        if found is None:
            raise TtfError(f"'{name}' table not found")
        return found

    def glyph_metrics(self, rune: Rune) -> GlyphMetrics:
        glyph_id = self._cmap_table.glyph_id_for(rune)
        glyf = self._glyf.metrics(self._loca.glyf_offset(glyph_id, self._head))
        hmtx = self._hmtx.metrics(glyph_id, self._hhea)
        return GlyphMetrics(
            float(glyf.x_min),
            float(-glyf.y_max),
            float(glyf.x_max - glyf.x_min),
            float(glyf.y_max - glyf.y_min),
            float(hmtx.lsb),
            float(hmtx.advance_width),
        )

    def glyph_contour(self, sink: _PathSink, rune: Rune) -> None:
        glyph_id = self._cmap_table.glyph_id_for(rune)
        offset = self._loca.glyf_offset(glyph_id, self._head)
        if offset == self._loca.glyf_offset(glyph_id + 1, self._head):
            return
        self._glyf.contour(sink, offset)

    def metrics(self) -> FontMetrics:
        return FontMetrics(
            float(self._hhea.ascender()),
            float(self._hhea.descender()),
            float(self._hhea.line_gap()),
            float(self._hhea.advance_width_max()),
        )

    def unit_per_em(self) -> float:
        return float(self._head.unit_per_em())