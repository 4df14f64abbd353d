"""The handover boot protocol: payload records, requests and a payload builder."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, NamedTuple, Optional, Tuple, Union

KERNEL_BASE = 0xFFFFFFFF80000000
UPPER_HALF = 0xFFFF800000000000

COOLBOOT = 0xC001B001

REQUEST_SECTION = ".handover"

_HEADER = struct.Struct("<IIII")
_RECORD = struct.Struct("<IIQQQ")

HEADER_SIZE = _HEADER.size
RECORD_SIZE = _RECORD.size


class Tag(IntEnum):
    FREE = 0
    MAGIC = COOLBOOT
    SELF = 0xA24F988D
    STACK = 0xF65B391B
    KERNEL = 0xBFC71B20
    LOADER = 0xF1F80C26
    FILE = 0xCBC36D3B
    RSDP = 0x8D3BBB
    FDT = 0xB628BBC1
    FB = 0xE2D55685
    END = 0xFFFFFFFF


def tag_name(tag: int) -> str:
    """The name of a tag, or ``"UNKNOWN"``."""
    try:
        return Tag(tag).name
    except ValueError:
        return "UNKNOWN"


def _as_tag(value: int) -> int:
    try:
        return Tag(value)
    except ValueError:
        return value


class PixelFormat(IntEnum):
    RGBX32 = 0x7451
    BGRX32 = 0xD040


class _Framebuffer(NamedTuple):
    width: int
    height: int
    pitch: int
    format: int


class _File(NamedTuple):
    name: int
    meta: int


@dataclass(frozen=True)
class Record:
    """One entry of a handover payload.

    ``more`` is shared storage; ``fb`` and ``file`` read it as framebuffer
    or file information.
    """

    tag: int
    flags: int = 0
    start: int = 0
    size: int = 0
    more: int = 0

    def name(self) -> str:
        return tag_name(self.tag)

    def end(self) -> int:
        return self.start + self.size

    @property
    def fb(self) -> _Framebuffer:
        m = self.more
        fmt = (m >> 48) & 0xFFFF
        try:
            fmt = PixelFormat(fmt)
        except ValueError:
            pass
        return _Framebuffer(m & 0xFFFF, (m >> 16) & 0xFFFF, (m >> 32) & 0xFFFF, fmt)

    @property
    def file(self) -> _File:
        return _File(self.more & 0xFFFFFFFF, (self.more >> 32) & 0xFFFFFFFF)

    def _pack(self) -> bytes:
        return _RECORD.pack(self.tag, self.flags, self.start, self.size, self.more)

    @staticmethod
    def _unpack(data: bytes, offset: int) -> Record:
        tag, flags, start, size, more = _RECORD.unpack_from(data, offset)
        return Record(_as_tag(tag), flags, start, size, more)


@dataclass(frozen=True)
class Payload:
    """A parsed handover payload; iterating yields its records."""

    magic: int
    agent: int
    size: int
    records: Tuple[Record, ...]
    data: bytes = field(default=b"", repr=False)

    @staticmethod
    def parse(data: Union[bytes, bytearray, memoryview]) -> Payload:
        raw = bytes(data)
        if len(raw) < HEADER_SIZE:
            raise ValueError("payload is shorter than its header")
        magic, agent, size, count = _HEADER.unpack_from(raw, 0)
        if HEADER_SIZE + count * RECORD_SIZE > len(raw):
            raise ValueError("payload records run past the end of the data")
        records = tuple(
            Record._unpack(raw, HEADER_SIZE + i * RECORD_SIZE) for i in range(count)
        )
        return Payload(magic, agent, size, records, raw)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def string_at(self, offset: int) -> str:
        """The NUL-terminated string at ``offset``; offset 0 is the empty string."""
        if offset == 0:
            return ""
        if offset >= len(self.data):
            raise ValueError(f"string offset {offset} is outside the payload")
        end = self.data.find(b"\0", offset)
        if end < 0:
            end = len(self.data)
        return self.data[offset:end].decode("utf-8", errors="replace")

    def agent_name(self) -> str:
        return self.string_at(self.agent)

    def find_tag(self, tag: int) -> Optional[Record]:
        return next((r for r in self.records if r.tag == tag), None)

    def file_by_name(self, name: str) -> Optional[Record]:
        return next(
            (
                r
                for r in self.records
                if r.tag == Tag.FILE and self.string_at(r.file.name) == name
            ),
            None,
        )


@dataclass(frozen=True)
class Request:
    """What a kernel asks the loader to hand over."""

    tag: int
    flags: int = 0
    more: int = 0

    def name(self) -> str:
        return tag_name(self.tag)


def request_self() -> Request:
    return Request(Tag.SELF, 0, 0)


def request_stack(prefered_size: int = 64 * 1024) -> Request:
    return Request(Tag.STACK, 0, prefered_size)


def request_kernel() -> Request:
    return Request(Tag.KERNEL, 0, 0)


def request_files() -> Request:
    return Request(Tag.FILE, 0, 0)


def request_rsdp() -> Request:
    return Request(Tag.RSDP, 0, 0)


def request_fdt() -> Request:
    return Request(Tag.FDT, 0, 0)


def request_fb(prefered_format: int = PixelFormat.RGBX32) -> Request:
    return Request(Tag.FB, 0, int(prefered_format))


def valid(magic: int, payload: Payload) -> bool:
    """Whether both the entry magic and the payload magic are correct."""
    return magic == COOLBOOT and payload.magic == COOLBOOT


class Builder:
    """Write a payload into ``buffer``.

    Records grow from the start of the buffer, strings from its end.
    """

    def __init__(self, buffer: Union[bytearray, memoryview]) -> None:
        if len(buffer) < HEADER_SIZE:
            raise ValueError("buffer is too small for a payload header")
        self._buf = buffer
        self._string = len(buffer)
        self._agent = 0
        self._len = 0
        self._write_header()

    def _write_header(self) -> None:
        self._buf[:HEADER_SIZE] = _HEADER.pack(
            COOLBOOT, self._agent, len(self._buf), self._len
        )

    def _records_end(self) -> int:
        return HEADER_SIZE + self._len * RECORD_SIZE

    def add_record(self, record: Record) -> None:
        if len(self._buf) < RECORD_SIZE:
            return
        offset = self._records_end()
        if offset + RECORD_SIZE > self._string:
            raise ValueError("no room left for another record")
        self._buf[offset : offset + RECORD_SIZE] = record._pack()
        self._len += 1
        self._write_header()

    def add(
        self, tag: int, flags: int = 0, start: int = 0, size: int = 0, more: int = 0
    ) -> None:
        self.add_record(Record(tag, flags, start, size, more))

    def add_string(self, text: str) -> int:
        """Store ``text`` with a NUL terminator; return its offset in the payload."""
        raw = text.encode("utf-8") + b"\0"
        offset = self._string - len(raw)
        if offset < self._records_end():
            raise ValueError("no room left for the string")
        self._buf[offset : offset + len(raw)] = raw
        self._string = offset
        return offset

    def agent(self, text: str) -> None:
        self._agent = self.add_string(text)
        self._write_header()

    def finalize(self) -> Payload:
        return Payload.parse(bytes(self._buf))