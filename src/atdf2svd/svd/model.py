from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SvdAccess(Enum):
    READ_ONLY = "read-only"
    WRITE_ONLY = "write-only"
    READ_WRITE = "read-write"


@dataclass(frozen=True)
class BitRange:
    offset: int
    width: int


@dataclass(frozen=True)
class SvdEnumeratedValue:
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class SvdEnumeratedValues:
    name: Optional[str] = None
    values: tuple[SvdEnumeratedValue, ...] = ()


@dataclass(frozen=True)
class SvdField:
    name: str
    bit_range: BitRange
    description: Optional[str] = None
    enumerated_values: tuple[SvdEnumeratedValues, ...] = ()


@dataclass(frozen=True)
class SvdRegister:
    name: str
    offset: int
    size_bits: int = 8
    description: Optional[str] = None
    access: Optional[SvdAccess] = None
    reset_value: Optional[int] = None
    fields: tuple[SvdField, ...] = ()


@dataclass(frozen=True)
class SvdInterrupt:
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class SvdPeripheral:
    name: str
    base_address: int
    description: Optional[str] = None
    group_name: Optional[str] = None
    registers: tuple[SvdRegister, ...] = ()
    interrupts: tuple[SvdInterrupt, ...] = ()


@dataclass(frozen=True)
class SvdDevice:
    name: str
    peripherals: tuple[SvdPeripheral, ...] = ()
