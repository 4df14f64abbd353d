"""UEFI status codes, enumerations, GUIDs and firmware data structures."""

from __future__ import annotations

import struct
import uuid
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Sequence, Union

Data = Union[bytes, bytearray, memoryview]

EFI_SUCCESS = 0
EFI_ERROR = 1 << 63


class EfiError(Exception):
    """An error reported by the firmware, carrying its status code."""

    def __init__(self, name: str, status: Optional[int] = None) -> None:
        super().__init__(name)
        self.name = name
        self.status = status


class StatusCode(IntEnum):
    LOAD_ERROR = EFI_ERROR | 0x1
    INVALID_PARAMETER = EFI_ERROR | 0x2
    UNSUPPORTED = EFI_ERROR | 0x3
    BAD_BUFFER_SIZE = EFI_ERROR | 0x4
    BUFFER_TOO_SMALL = EFI_ERROR | 0x5
    NOT_READY = EFI_ERROR | 0x6
    DEVICE_ERROR = EFI_ERROR | 0x7
    WRITE_PROTECTED = EFI_ERROR | 0x8
    OUT_OF_RESOURCES = EFI_ERROR | 0x9
    VOLUME_CORRUPTED = EFI_ERROR | 0xA
    VOLUME_FULL = EFI_ERROR | 0xB
    NO_MEDIA = EFI_ERROR | 0xC
    MEDIA_CHANGED = EFI_ERROR | 0xD
    NOT_FOUND = EFI_ERROR | 0xE
    ACCESS_DENIED = EFI_ERROR | 0xF
    NO_RESPONSE = EFI_ERROR | 0x10
    NO_MAPPING = EFI_ERROR | 0x11
    TIMEOUT = EFI_ERROR | 0x12
    NOT_STARTED = EFI_ERROR | 0x13
    ALREADY_STARTED = EFI_ERROR | 0x14
    ABORTED = EFI_ERROR | 0x15
    ICMP_ERROR = EFI_ERROR | 0x16
    TFTP_ERROR = EFI_ERROR | 0x17
    PROTOCOL_ERROR = EFI_ERROR | 0x18
    INCOMPATIBLE_VERSION = EFI_ERROR | 0x19
    SECURITY_VIOLATION = EFI_ERROR | 0x1A
    CRC_ERROR = EFI_ERROR | 0x1B
    END_OF_MEDIA = EFI_ERROR | 0x1C
    END_OF_FILE = EFI_ERROR | 0x1F
    INVALID_LANGUAGE = EFI_ERROR | 0x20
    COMPROMISED_DATA = EFI_ERROR | 0x21
    IP_ADDRESS_CONFLICT = EFI_ERROR | 0x22
    HTTP_ERROR = EFI_ERROR | 0x23


def from_status(status: int) -> Optional[EfiError]:
    """The error a status stands for, or None when its error bit is clear."""
    if status & EFI_ERROR == 0:
        return None
    try:
        return EfiError(StatusCode(status).name, status)
    except ValueError:
        return EfiError("Unknown error", status)


def check_status(status: int) -> None:
    """Raise the EfiError a status stands for, if any."""
    error = from_status(status)
    if error is not None:
        raise error


class AllocateType(IntEnum):
    ANY_PAGES = 0
    MAX_ADDRESS = 1
    ADDRESS = 2


class MemoryType(IntEnum):
    RESERVED_MEMORY_TYPE = 0
    LOADER_CODE = 1
    LOADER_DATA = 2
    BOOT_SERVICES_CODE = 3
    BOOT_SERVICES_DATA = 4
    RUNTIME_SERVICES_CODE = 5
    RUNTIME_SERVICES_DATA = 6
    CONVENTIONAL_MEMORY = 7
    UNUSABLE_MEMORY = 8
    ACPI_RECLAIM_MEMORY = 9
    ACPI_MEMORY_NVS = 10
    MEMORY_MAPPED_IO = 11
    MEMORY_MAPPED_IO_PORT_SPACE = 12
    PAL_CODE = 13
    PERSISTENT_MEMORY = 14
    MAX_MEMORY_TYPE = 15


class ResetType(IntEnum):
    RESET_COLD = 0
    RESET_WARM = 1
    RESET_SHUTDOWN = 2
    RESET_PLATFORM_SPECIFIC = 3


class PixelFormat(IntEnum):
    RED_GREEN_BLUE_RESERVED8_BIT_PER_COLOR = 0
    BLUE_GREEN_RED_RESERVED8_BIT_PER_COLOR = 1
    BIT_MASK = 2
    BLT_ONLY = 3
    FORMAT_MAX = 4


class TextColor(IntEnum):
    BLACK = 0x00
    BLUE = 0x01
    GREEN = 0x02
    CYAN = 0x03
    RED = 0x04
    MAGENTA = 0x05
    BROWN = 0x06
    LIGHTGRAY = 0x07
    BRIGHT = 0x08
    DARKGRAY = 0x08
    LIGHTBLUE = 0x09
    LIGHTGREEN = 0x0A
    LIGHTCYAN = 0x0B
    LIGHTRED = 0x0C
    LIGHTMAGENTA = 0x0D
    YELLOW = 0x0E
    WHITE = 0x0F


def text_attr(foreground: int, background: int) -> int:
    """Combine colours into a text attribute."""
    return foreground | (background << 4)


OPEN_PROTOCOL_BY_HANDLE_PROTOCOL = 0x00000001
OPEN_PROTOCOL_GET_PROTOCOL = 0x00000002
OPEN_PROTOCOL_TEST_PROTOCOL = 0x00000004
OPEN_PROTOCOL_BY_CHILD_CONTROLLER = 0x00000008
OPEN_PROTOCOL_BY_DRIVER = 0x00000010
OPEN_PROTOCOL_EXCLUSIVE = 0x00000020

FILE_MODE_READ = 0x0000000000000001
FILE_MODE_WRITE = 0x0000000000000002
FILE_MODE_CREATE = 0x8000000000000000

FILE_READ_ONLY = 0x0000000000000001
FILE_HIDDEN = 0x0000000000000002
FILE_SYSTEM = 0x0000000000000004
FILE_RESERVED = 0x0000000000000008
FILE_DIRECTORY = 0x0000000000000010
FILE_ARCHIVE = 0x0000000000000020
FILE_VALID_ATTR = 0x0000000000000037


def _guid(a: int, b: int, c: int, d: Sequence[int]) -> uuid.UUID:
    return uuid.UUID(fields=(a, b, c, d[0], d[1], int.from_bytes(bytes(d[2:]), "big")))


LOADED_IMAGE_PROTOCOL_GUID = _guid(
    0x5B1B31A1, 0x9562, 0x11D2, (0x8E, 0x3F, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)
DEVICE_PATH_PROTOCOL_GUID = _guid(
    0x09576E91, 0x6D3F, 0x11D2, (0x8E, 0x39, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)
SIMPLE_TEXT_INPUT_PROTOCOL_GUID = _guid(
    0x387477C1, 0x69C7, 0x11D2, (0x8E, 0x39, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)
SIMPLE_TEXT_OUTPUT_PROTOCOL_GUID = _guid(
    0x387477C2, 0x69C7, 0x11D2, (0x8E, 0x39, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)
SIMPLE_FILE_SYSTEM_PROTOCOL_GUID = _guid(
    0x0964E5B22, 0x6459, 0x11D2, (0x8E, 0x39, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)
FILE_INFO_GUID = _guid(
    0x09576E92, 0x6D3F, 0x11D2, (0x8E, 0x39, 0x00, 0xA0, 0xC9, 0x69, 0x72, 0x3B)
)


def _unpack(st: struct.Struct, data: Data) -> tuple:
    raw = bytes(data)
    if len(raw) < st.size:
        raise ValueError(f"need {st.size} bytes, got {len(raw)}")
    return st.unpack_from(raw, 0)


_TIME = struct.Struct("<HBBBBBxIhBx")
_MEMORY_DESCRIPTOR = struct.Struct("<I4xQQQQ")


@dataclass(frozen=True)
class Time:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    nanosecond: int
    time_zone: int
    daylight: int

    SIZE: ClassVar[int] = _TIME.size

    @staticmethod
    def parse(data: Data) -> Time:
        return Time(*_unpack(_TIME, data))


@dataclass(frozen=True)
class MemoryDescriptor:
    """One entry of the firmware memory map; ``type`` stays an int when unknown."""

    type: Union[MemoryType, int]
    physical_start: int
    virtual_start: int
    number_of_pages: int
    attribute: int

    SIZE: ClassVar[int] = _MEMORY_DESCRIPTOR.size

    @staticmethod
    def parse(data: Data) -> MemoryDescriptor:
        kind, physical, virtual, pages, attribute = _unpack(_MEMORY_DESCRIPTOR, data)
        try:
            kind = MemoryType(kind)
        except ValueError:
            pass
        return MemoryDescriptor(kind, physical, virtual, pages, attribute)