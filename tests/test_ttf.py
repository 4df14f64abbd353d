import struct

import pytest

from karm.flow import Vec2
from karm.ttf import (
    BScan,
    Cmap,
    CmapTable,
    Font,
    FontMetrics,
    Glyf,
    GlyfMetrics,
    GlyphMetrics,
    Head,
    Hhea,
    Hmtx,
    Loca,
    Maxp,
    PathRecorder,
    TtfError,
)


def _glyph(bbox, end_pts, flags, xs, ys):
    out = struct.pack(">hhhhh", len(end_pts), *bbox)
    out += b"".join(struct.pack(">H", e) for e in end_pts)
    out += struct.pack(">H", 0)
    return out + bytes(flags) + xs + ys


TRIANGLE = _glyph(
    (0, 0, 100, 100),
    [2],
    [0x01] * 3,
    struct.pack(">hhh", 0, 100, -50),
    struct.pack(">hhh", 0, 0, 100),
)

CURVE = _glyph((0, 0, 100, 100), [2], [0x31, 0x32, 0x35], bytes([100]), bytes([100]))


def _cmap4(segments, glyph_ids=()):
    n = len(segments)
    body = struct.pack(">HHHHHHH", 4, 0, 0, n * 2, 0, 0, 0)
    body += struct.pack(f">{n}H", *(s[1] for s in segments))
    body += struct.pack(">H", 0)
    body += struct.pack(f">{n}H", *(s[0] for s in segments))
    body += struct.pack(f">{n}h", *(s[2] for s in segments))
    body += struct.pack(f">{n}H", *(s[3] for s in segments))
    body += struct.pack(f">{len(glyph_ids)}H", *glyph_ids)
    return body


def _cmap12(groups):
    body = struct.pack(">HHIII", 12, 0, 0, 0, len(groups))
    for group in groups:
        body += struct.pack(">III", *group)
    return body


def _cmap(subtables):
    header = struct.pack(">HH", 0, len(subtables))
    offset = 4 + 8 * len(subtables)
    records = b""
    body = b""
    for platform_id, encoding_id, data in subtables:
        records += struct.pack(">HHI", platform_id, encoding_id, offset + len(body))
        body += data
    return header + records + body


CMAP4 = _cmap4([(0x41, 0x43, -0x40, 0), (0xFFFF, 0xFFFF, 1, 0)])


def _head(loca_format=1):
    head = bytearray(54)
    struct.pack_into(">H", head, 18, 1000)
    struct.pack_into(">h", head, 50, loca_format)
    return bytes(head)


def _hhea():
    hhea = bytearray(36)
    struct.pack_into(">hhhH", hhea, 4, 800, -200, 90, 600)
    struct.pack_into(">H", hhea, 34, 2)
    return bytes(hhea)


HMTX = struct.pack(">HhHhh", 500, 10, 600, 20, 30)


def _tables(cmap=None):
    return {
        "head": _head(),
        "cmap": cmap if cmap is not None else _cmap([(3, 1, CMAP4)]),
        "glyf": TRIANGLE + CURVE,
        "loca": struct.pack(">IIII", 0, 0, len(TRIANGLE), len(TRIANGLE) + len(CURVE)),
        "hhea": _hhea(),
        "hmtx": HMTX,
        "maxp": struct.pack(">IH", 0x5000, 3),
    }


def _font_bytes(tables, version=0x00010000):
    header = struct.pack(">IHHHH", version, len(tables), 0, 0, 0)
    offset = len(header) + 16 * len(tables)
    records = b""
    body = b""
    for tag, data in tables.items():
        records += struct.pack(">4sIII", tag.encode("latin-1"), 0, offset + len(body), len(data))
        body += data
    return header + records + body


@pytest.fixture
def font():
    return Font.load(_font_bytes(_tables()))


# --- BScan -------------------------------------------------------------------


def test_bscan_reads_big_endian():
    s = BScan(b"\x01\x02\x00\x01\x00\x00")
    assert s.next_u16() == 0x0102
    assert s.next_u32() == 0x00010000
    assert s.ended()


def test_bscan_signed_reads():
    assert BScan(b"\xff\xfe").next_i16() == -2
    assert BScan(b"\xff").next_i8() == -1
    assert BScan(b"\xff").next_u8() == 255


def test_bscan_short_read_yields_zero_without_advancing():
    s = BScan(b"\x01")
    assert s.next_u16() == 0
    assert s.rem() == 1


def test_bscan_skip_clamps_and_returns_self():
    s = BScan(b"abc")
    assert s.skip(10) is s
    assert s.rem() == 0


def test_bscan_peek_leaves_original():
    s = BScan(b"\x00\x01\x00\x02")
    ahead = s.peek(2)
    assert ahead.next_u16() == 2
    assert s.peek_u16() == 1
    assert s.rem() == 4


def test_bscan_next_str_clamps():
    s = BScan(b"head")
    assert s.next_str(10) == "head"
    assert s.ended()


# --- Simple tables -------------------------------------------------------------


def test_head_fields():
    head = Head(_head(0))
    assert head.unit_per_em() == 1000
    assert head.loca_format() == 0


def test_maxp_num_glyphs():
    assert Maxp(struct.pack(">IH", 0x5000, 3)).num_glyphs() == 3


def test_hhea_fields():
    hhea = Hhea(_hhea())
    assert hhea.ascender() == 800
    assert hhea.descender() == 200
    assert hhea.line_gap() == 90
    assert hhea.advance_width_max() == 600
    assert hhea.number_of_h_metrics() == 2


def test_hmtx_long_and_short_records():
    hmtx = Hmtx(HMTX)
    hhea = Hhea(_hhea())
    assert tuple(hmtx.metrics(0, hhea)) == (500, 10)
    assert tuple(hmtx.metrics(1, hhea)) == (600, 20)
    assert tuple(hmtx.metrics(2, hhea)) == (600, 30)


def test_loca_short_and_long():
    short = Loca(struct.pack(">HHH", 0, 10, 20))
    assert short.glyf_offset(1, Head(_head(0))) == 10
    long = Loca(struct.pack(">III", 0, 40, 80))
    assert long.glyf_offset(2, Head(_head(1))) == 80


def test_table_presence():
    assert Head(_head()).present()
    assert not Head().present()


# --- Cmap --------------------------------------------------------------------


def test_cmap_iter_tables():
    cmap = Cmap(_cmap([(3, 1, CMAP4), (0, 4, _cmap12([(0x41, 0x41, 5)]))]))
    found = [(t.platform_id, t.encoding_id, t.format) for t in cmap.iter_tables()]
    assert found == [(3, 1, 4), (0, 4, 12)]


def test_format4_delta():
    table = CmapTable(3, 1, 4, CMAP4)
    assert table.glyph_id_for("A") == 1
    assert table.glyph_id_for("B") == 2
    assert table.glyph_id_for("Z") == 0


def test_format4_segment_end_code_is_not_matched():
    table = CmapTable(3, 1, 4, CMAP4)
    assert table.glyph_id_for("C") == 0


def test_format4_range_offset():
    data = _cmap4([(0x61, 0x63, 0, 4), (0xFFFF, 0xFFFF, 1, 0)], glyph_ids=(7, 9))
    table = CmapTable(3, 1, 4, data)
    assert table.glyph_id_for("a") == 7
    assert table.glyph_id_for(0x62) == 9


def test_format12_groups():
    table = CmapTable(3, 10, 12, _cmap12([(0x41, 0x5A, 5)]))
    assert table.glyph_id_for("A") == 5
    assert table.glyph_id_for("C") == 7
    assert table.glyph_id_for("a") == 0


def test_unknown_format_maps_to_zero():
    assert CmapTable(1, 0, 0, b"\x00\x00" * 8).glyph_id_for("A") == 0


# --- Glyf --------------------------------------------------------------------


def _draw(data):
    sink = PathRecorder()
    Glyf(data).contour(sink, 0)
    return sink.commands


def test_glyf_metrics():
    assert Glyf(TRIANGLE).metrics(0) == GlyfMetrics(1, 0, 0, 100, 100)
    assert Glyf(b"\x00\x00" * 5).metrics(0) == GlyfMetrics()


def test_glyf_lines():
    assert _draw(TRIANGLE) == [
        ("move_to", Vec2(0.0, 0.0)),
        ("line_to", Vec2(100.0, 0.0)),
        ("line_to", Vec2(50.0, -100.0)),
        ("close",),
    ]


def test_glyf_short_vectors_and_curve():
    assert _draw(CURVE) == [
        ("move_to", Vec2(0.0, 0.0)),
        ("quad_to", Vec2(100.0, 0.0), Vec2(100.0, -100.0)),
        ("close",),
    ]


def test_glyf_negative_short_vector():
    data = _glyph((0, 0, 20, 0), [1], [0x33, 0x23], bytes([20, 5]), b"")
    assert _draw(data) == [
        ("move_to", Vec2(20.0, 0.0)),
        ("line_to", Vec2(15.0, 0.0)),
        ("close",),
    ]


def test_glyf_repeated_flags():
    data = _glyph(
        (0, 0, 10, 10),
        [3],
        [0x09, 3],
        struct.pack(">hhhh", 0, 10, 0, -10),
        struct.pack(">hhhh", 0, 0, 10, 0),
    )
    assert _draw(data) == [
        ("move_to", Vec2(0.0, 0.0)),
        ("line_to", Vec2(10.0, 0.0)),
        ("line_to", Vec2(10.0, -10.0)),
        ("line_to", Vec2(0.0, -10.0)),
        ("close",),
    ]


def test_glyf_trailing_control_point_closes_with_curve():
    data = _glyph((0, 0, 50, 50), [1], [0x01, 0x00], struct.pack(">hh", 0, 50), struct.pack(">hh", 0, 50))
    assert _draw(data) == [
        ("move_to", Vec2(0.0, 0.0)),
        ("quad_to", Vec2(50.0, -50.0), Vec2(0.0, 0.0)),
        ("close",),
    ]


def test_glyf_points_carry_across_contours():
    data = _glyph(
        (0, 0, 10, 10),
        [1, 2],
        [0x01] * 3,
        struct.pack(">hhh", 0, 10, 0),
        struct.pack(">hhh", 0, 0, 10),
    )
    assert _draw(data) == [
        ("move_to", Vec2(0.0, 0.0)),
        ("line_to", Vec2(10.0, 0.0)),
        ("close",),
        ("move_to", Vec2(10.0, -10.0)),
        ("close",),
    ]


def test_glyf_composite_draws_nothing():
    data = struct.pack(">hhhhh", -1, 0, 0, 10, 10) + b"\x00" * 8
    assert _draw(data) == []


# --- Font --------------------------------------------------------------------


def test_font_version_and_tables(font):
    assert font.version() == 0x00010000
    assert {t.tag for t in font.iter_tables()} == set(_tables())


def test_font_lookup_and_require(font):
    assert font.lookup_table("hmtx") == HMTX
    assert font.lookup_table("kern") == b""
    with pytest.raises(TtfError):
        font.require_table("kern")


def test_font_metrics(font):
    assert font.metrics() == FontMetrics(800.0, 200.0, 90.0, 600.0)
    assert font.unit_per_em() == 1000.0


def test_font_glyph_metrics(font):
    assert font.glyph_metrics("A") == GlyphMetrics(0.0, -100.0, 100.0, 100.0, 20.0, 600.0)


def test_font_glyph_contour(font):
    sink = PathRecorder()
    font.glyph_contour(sink, "B")
    assert sink.commands == _draw(CURVE)


def test_font_empty_glyph_draws_nothing(font):
    sink = PathRecorder()
    font.glyph_contour(sink, "C")
    assert sink.commands == []


def test_font_prefers_highest_scoring_cmap():
    cmap = _cmap([(3, 1, CMAP4), (3, 10, _cmap12([(0x41, 0x41, 2)]))])
    font = Font.load(_font_bytes(_tables(cmap)))
    sink = PathRecorder()
    font.glyph_contour(sink, "A")
    assert sink.commands == _draw(CURVE)


def test_font_accepts_opentype_version():
    font = Font.load(_font_bytes(_tables(), version=0x4F54544F))
    assert font.version() == 0x4F54544F


def test_font_rejects_bad_version():
    with pytest.raises(TtfError, match="invalid version"):
        Font.load(_font_bytes(_tables(), version=0x12345678))


def test_font_requires_tables():
    tables = _tables()
    del tables["hhea"]
    with pytest.raises(TtfError, match="hhea"):
        Font.load(_font_bytes(tables))


def test_font_requires_known_cmap():
    cmap = _cmap([(1, 0, CMAP4)])
    with pytest.raises(TtfError, match="no cmap table"):
        Font.load(_font_bytes(_tables(cmap)))