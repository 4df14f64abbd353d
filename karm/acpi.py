"""Parsing of ACPI tables: RSDP, table headers, MADT, MCFG and HPET."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union

Data = Union[bytes, bytearray, memoryview]

_RSDP = struct.Struct("<8sB6sBI")
_SDTH = struct.Struct("<4sIBB6s8sIII")
_MADT = struct.Struct("<II")
_RECORD_HEADER = struct.Struct("<BB")
_LAPIC = struct.Struct("<BBI")
_IOAPIC = struct.Struct("<BBII")
_ISO = struct.Struct("<BBIH")
_MCFG_RESERVED = struct.Struct("<Q")
_MCFG_RECORD = struct.Struct("<QHBBI")
_HPET = struct.Struct("<BBHBBBBQBHB")


class AcpiError(Exception):
    """Raised when a table is truncated or malformed."""


def _unpack(st: struct.Struct, data: bytes, offset: int = 0) -> tuple:
    if offset + st.size > len(data):
        raise AcpiError("table data is truncated")
    return st.unpack_from(data, offset)


def _text(raw: bytes) -> str:
    return raw.decode("latin-1")


@dataclass(frozen=True)
class Rsdp:
    signature: str
    checksum: int
    oem_id: str
    revision: int
    rsdt: int

    @staticmethod
    def parse(data: Data) -> Rsdp:
        sig, checksum, oem, revision, rsdt = _unpack(_RSDP, bytes(data))
        return Rsdp(_text(sig), checksum, _text(oem), revision, rsdt)


@dataclass(frozen=True)
class Sdth:
    """The header shared by all system description tables."""

    signature: str
    length: int
    revision: int
    checksum: int
    oem_id: str
    oem_table_id: str
    oem_revision: int
    creator_id: int
    creator_revision: int

    SIZE = _SDTH.size

    @staticmethod
    def parse(data: Data) -> Sdth:
        (sig, length, revision, checksum, oem, oem_table, oem_rev, creator, creator_rev) = (
            _unpack(_SDTH, bytes(data))
        )
        return Sdth(
            _text(sig), length, revision, checksum, _text(oem), _text(oem_table),
            oem_rev, creator, creator_rev,
        )


def _table_end(header: Sdth, data: bytes) -> int:
    return min(header.length, len(data))


class MadtType(IntEnum):
    LAPIC = 0
    IOAPIC = 1
    ISO = 2
    NMI = 4
    LAPIC_OVERRIDE = 5


@dataclass(frozen=True)
class LapicRecord:
    processor_id: int
    id: int
    flags: int


@dataclass(frozen=True)
class IoapicRecord:
    id: int
    reserved: int
    address: int
    interrupt_base: int


@dataclass(frozen=True)
class IsoRecord:
    bus: int
    irq: int
    gsi: int
    flags: int


@dataclass(frozen=True)
class RawRecord:
    """A MADT record of a type that is not decoded."""

    type: int
    data: bytes


MadtRecord = Union[LapicRecord, IoapicRecord, IsoRecord, RawRecord]


def _madt_record(kind: int, body: bytes) -> MadtRecord:
    if kind == MadtType.LAPIC:
        return LapicRecord(*_unpack(_LAPIC, body))
    if kind == MadtType.IOAPIC:
        return IoapicRecord(*_unpack(_IOAPIC, body))
    if kind == MadtType.ISO:
        return IsoRecord(*_unpack(_ISO, body))
    try:
        kind = MadtType(kind)
    except ValueError:
        pass
    return RawRecord(kind, body)


@dataclass(frozen=True)
class Madt:
    header: Sdth
    lapic: int
    flags: int
    records: Tuple[MadtRecord, ...]

    @staticmethod
    def parse(data: Data) -> Madt:
        raw = bytes(data)
        header = Sdth.parse(raw)
        lapic, flags = _unpack(_MADT, raw, Sdth.SIZE)
        end = _table_end(header, raw)
        offset = Sdth.SIZE + _MADT.size
        records = []
        while offset + _RECORD_HEADER.size <= end:
            kind, length = _RECORD_HEADER.unpack_from(raw, offset)
            if length < _RECORD_HEADER.size or offset + length > end:
                raise AcpiError("malformed MADT record")
            records.append(_madt_record(kind, raw[offset + _RECORD_HEADER.size : offset + length]))
            offset += length
        return Madt(header, lapic, flags, tuple(records))


@dataclass(frozen=True)
class McfgRecord:
    address: int
    segment_group: int
    bus_start: int
    bus_end: int
    reserved: int


@dataclass(frozen=True)
class Mcfg:
    header: Sdth
    reserved: int
    records: Tuple[McfgRecord, ...]

    @staticmethod
    def parse(data: Data) -> Mcfg:
        raw = bytes(data)
        header = Sdth.parse(raw)
        (reserved,) = _unpack(_MCFG_RESERVED, raw, Sdth.SIZE)
        start = Sdth.SIZE + _MCFG_RESERVED.size
        count = max(0, _table_end(header, raw) - start) // _MCFG_RECORD.size
        records = tuple(
            McfgRecord(*_MCFG_RECORD.unpack_from(raw, start + i * _MCFG_RECORD.size))
            for i in range(count)
        )
        return Mcfg(header, reserved, records)


@dataclass(frozen=True)
class Hpet:
    header: Sdth
    hardware_rev_id: int
    info: int
    pci_vendor_id: int
    address_space_id: int
    register_bit_width: int
    register_bit_offset: int
    reserved1: int
    address: int
    hpet_number: int
    minimum_tick: int
    page_protection: int

    @staticmethod
    def parse(data: Data) -> Hpet:
        raw = bytes(data)
        header = Sdth.parse(raw)
        return Hpet(header, *_unpack(_HPET, raw, Sdth.SIZE))