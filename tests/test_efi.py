import struct

import pytest

from karm.efi import (
    EFI_ERROR,
    EfiError,
    MemoryDescriptor,
    MemoryType,
    StatusCode,
    TextColor,
    Time,
    check_status,
    from_status,
    text_attr,
)


def test_status_codes_carry_the_error_bit():
    for code in StatusCode:
        err = from_status(code)
        assert err.status == code
        assert err.name == code.name
    assert from_status(EFI_ERROR | 0xE).name == "NOT_FOUND"


def test_from_status_success_and_warnings():
    assert from_status(0) is None
    assert from_status(1) is None


def test_from_status_known_error():
    err = from_status(StatusCode.NOT_FOUND)
    assert err.name == "NOT_FOUND"
    assert err.status == StatusCode.NOT_FOUND


def test_from_status_unknown_error():
    err = from_status(EFI_ERROR | 0x1D)
    assert err.name == "Unknown error"


def test_check_status_raises():
    with pytest.raises(EfiError) as info:
        check_status(StatusCode.BUFFER_TOO_SMALL)
    assert info.value.name == "BUFFER_TOO_SMALL"
    assert check_status(0) is None


def test_text_attr():
    assert text_attr(TextColor.YELLOW, TextColor.BLACK) == TextColor.YELLOW
    attr = text_attr(TextColor.WHITE, TextColor.BLUE)
    assert attr & 0x0F == TextColor.WHITE
    assert attr >> 4 == TextColor.BLUE


def test_darkgray_is_bright_black():
    assert text_attr(TextColor.DARKGRAY, TextColor.BLACK) == 0x08
    assert text_attr(TextColor.BLACK, TextColor.DARKGRAY) == 0x80


def test_time_parse():
    data = struct.pack("<HBBBBBxIhBx", 2023, 5, 17, 13, 45, 30, 500, -60, 1)
    t = Time.parse(data)
    assert (t.year, t.month, t.day) == (2023, 5, 17)
    assert (t.hour, t.minute, t.second) == (13, 45, 30)
    assert t.nanosecond == 500
    assert t.time_zone == -60
    assert t.daylight == 1
    assert Time.SIZE == len(data)


def test_time_truncated():
    with pytest.raises(ValueError):
        Time.parse(b"\x00\x01")


def test_memory_descriptor_parse():
    data = struct.pack("<I4xQQQQ", 7, 0x100000, 0, 256, 0xF)
    d = MemoryDescriptor.parse(data)
    assert d.type is MemoryType.CONVENTIONAL_MEMORY
    assert d.physical_start == 0x100000
    assert d.number_of_pages == 256
    assert d.attribute == 0xF
    assert MemoryDescriptor.SIZE == len(data)


def test_memory_descriptor_unknown_type_kept():
    data = struct.pack("<I4xQQQQ", 0x70000001, 0, 0, 1, 0)
    assert MemoryDescriptor.parse(data).type == 0x70000001