"""Reading sections and program headers of 64-bit little-endian ELF images."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Iterator, Optional, Union

Data = Union[bytes, bytearray, memoryview]

_IMAGE_HEADER = struct.Struct("<16sHHIQQQIHHHHHH")
_SECTION_HEADER = struct.Struct("<IIQQQQIIQQ")
_PROGRAM_HEADER = struct.Struct("<IIQQQQQQ")

MAGIC = b"\x7fELF"


class ProgramType(IntEnum):
    NONE = 0
    LOAD = 1
    DYNAMIC = 2
    INTERP = 3
    NOTE = 4


class ProgramFlags(IntFlag):
    NIL = 0
    READ = 1
    WRITE = 2
    EXEC = 4
    SHARED = 32
    PHDR = 64
    TLS = 67


def _unpack(st: struct.Struct, data: bytes, offset: int) -> tuple:
    if offset < 0 or offset + st.size > len(data):
        raise ValueError("ELF structure runs past the end of the image")
    return st.unpack_from(data, offset)


@dataclass(frozen=True)
class SectionHeader:
    name: int
    type: int
    flags: int
    addr: int
    offset: int
    size: int
    link: int
    info: int
    addralign: int
    entsize: int

    @staticmethod
    def _read(data: bytes, offset: int) -> SectionHeader:
        return SectionHeader(*_unpack(_SECTION_HEADER, data, offset))


@dataclass(frozen=True)
class ProgramHeader:
    type: Union[ProgramType, int]
    flags: ProgramFlags
    offset: int
    vaddr: int
    paddr: int
    filesz: int
    memsz: int
    align: int

    @staticmethod
    def _read(data: bytes, offset: int) -> ProgramHeader:
        kind, flags, *rest = _unpack(_PROGRAM_HEADER, data, offset)
        try:
            kind = ProgramType(kind)
        except ValueError:
            pass
        return ProgramHeader(kind, ProgramFlags(flags), *rest)


@dataclass(frozen=True)
class ImageHeader:
    ident: bytes
    type: int
    machine: int
    version: int
    entry: int
    phoff: int
    shoff: int
    flags: int
    ehsize: int
    phentsize: int
    phnum: int
    shentsize: int
    shnum: int
    shstrndx: int

    SIZE = _IMAGE_HEADER.size

    @staticmethod
    def _read(data: bytes) -> ImageHeader:
        return ImageHeader(*_unpack(_IMAGE_HEADER, data, 0))


@dataclass(frozen=True)
class Section:
    """A section of an image together with its header."""

    image: Image
    header: SectionHeader

    def name(self) -> str:
        return self.image.string_at(self.header.name)

    def data(self) -> bytes:
        start = self.header.offset
        return self.image.raw[start : start + self.header.size]

    def size(self) -> int:
        return self.header.size


@dataclass(frozen=True)
class Program:
    """A segment of an image together with its program header."""

    image: Image
    header: ProgramHeader

    @property
    def type(self) -> Union[ProgramType, int]:
        return self.header.type

    @property
    def flags(self) -> ProgramFlags:
        return self.header.flags

    @property
    def filesz(self) -> int:
        return self.header.filesz

    @property
    def vaddr(self) -> int:
        return self.header.vaddr

    @property
    def memsz(self) -> int:
        return self.header.memsz

    def data(self) -> bytes:
        start = self.header.offset
        return self.image.raw[start : start + self.header.filesz]


class Image:
    """An ELF image held in memory."""

    def __init__(self, data: Data) -> None:
        self.raw = bytes(data)

    def valid(self) -> bool:
        return len(self.raw) >= ImageHeader.SIZE and self.raw[:4] == MAGIC

    def header(self) -> ImageHeader:
        if not self.valid():
            raise ValueError("not a valid ELF image")
        return ImageHeader._read(self.raw)

    def _section_header(self, header: ImageHeader, index: int) -> SectionHeader:
        return SectionHeader._read(self.raw, header.shoff + index * header.shentsize)

    def sections(self) -> Iterator[Section]:
        header = self.header()
        for index in range(header.shnum):
            yield Section(self, self._section_header(header, index))

    def section_by_name(self, name: str) -> Optional[Section]:
        return next((s for s in self.sections() if s.name() == name), None)

    def programs(self) -> Iterator[Program]:
        header = self.header()
        for index in range(header.phnum):
            offset = header.phoff + index * header.phentsize
            yield Program(self, ProgramHeader._read(self.raw, offset))

    def string_at(self, offset: int) -> str:
        """A name from the section-name string table; offset 0 is ``"<null>"``."""
        if offset == 0:
            return "<null>"
        header = self.header()
        table = self._section_header(header, header.shstrndx)
        start = table.offset + offset
        if start >= len(self.raw):
            raise ValueError(f"string offset {offset} is outside the image")
        end = self.raw.find(b"\0", start)
        if end < 0:
            end = len(self.raw)
        return self.raw[start:end].decode("utf-8", errors="replace")