import struct

import pytest

from karm.elf import Image, ImageHeader, ProgramFlags, ProgramType

TEXT = b"hello"
STRTAB = b"\0.text\0.shstrtab\0"


def _build_elf():
    phoff = 64
    text_off = phoff + 56
    str_off = text_off + len(TEXT)
    shoff = str_off + len(STRTAB)
    header = struct.pack(
        "<16sHHIQQQIHHHHHH",
        b"\x7fELF\x02\x01\x01" + bytes(9),
        2, 0x3E, 1, 0x401000, phoff, shoff, 0, 64, 56, 1, 64, 3, 2,
    )
    program = struct.pack(
        "<IIQQQQQQ", 1, 5, text_off, 0x401000, 0x401000, len(TEXT), 0x2000, 0x1000
    )
    sections = (
        bytes(64)
        + struct.pack("<IIQQQQIIQQ", 1, 1, 6, 0x401000, text_off, len(TEXT), 0, 0, 16, 0)
        + struct.pack("<IIQQQQIIQQ", 7, 3, 0, 0, str_off, len(STRTAB), 0, 0, 1, 0)
    )
    return header + program + TEXT + STRTAB + sections


def test_valid_image():
    assert Image(_build_elf()).valid() is True


def test_invalid_magic_and_short_data():
    data = bytearray(_build_elf())
    data[1] = ord("X")
    assert Image(bytes(data)).valid() is False
    assert Image(b"\x7fELF").valid() is False


def test_header_on_invalid_image_raises():
    with pytest.raises(ValueError):
        Image(b"nope").header()


def test_header_fields():
    header = Image(_build_elf()).header()
    assert header.entry == 0x401000
    assert header.phnum == 1
    assert header.shnum == 3
    assert header.shstrndx == 2
    assert ImageHeader.SIZE == 64


def test_section_names():
    names = [s.name() for s in Image(_build_elf()).sections()]
    assert names == ["<null>", ".text", ".shstrtab"]


def test_section_by_name_data():
    section = Image(_build_elf()).section_by_name(".text")
    assert section is not None
    assert section.data() == TEXT
    assert section.size() == len(TEXT)


def test_section_by_name_missing():
    assert Image(_build_elf()).section_by_name(".data") is None


def test_string_table_section_holds_table():
    section = Image(_build_elf()).section_by_name(".shstrtab")
    assert section.data() == STRTAB


def test_string_at_zero():
    assert Image(_build_elf()).string_at(0) == "<null>"


def test_programs():
    programs = list(Image(_build_elf()).programs())
    assert len(programs) == 1
    program = programs[0]
    assert program.type is ProgramType.LOAD
    assert program.flags == ProgramFlags.READ | ProgramFlags.EXEC
    assert program.vaddr == 0x401000
    assert program.memsz == 0x2000
    assert program.filesz == len(TEXT)
    assert program.data() == TEXT


def test_truncated_section_table_raises():
    data = _build_elf()[:-10]
    with pytest.raises(ValueError):
        list(Image(data).sections())