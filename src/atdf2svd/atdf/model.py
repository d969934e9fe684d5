from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class ByteRange:
    offset: int
    size: int  # bytes


class Endianness(Enum):
    BIG = "big"
    LITTLE = "little"


class Access(Enum):
    """Read/write permissions of a memory segment."""

    READ_ONLY = "r"
    WRITE_ONLY = "w"
    READ_WRITE = "rw"


class KnownSegmentKind(Enum):
    FLASH = "flash"
    SIGNATURES = "signatures"
    FUSES = "fuses"
    LOCKBITS = "lockbits"
    IO = "io"
    RAM = "ram"
    SYSREG = "sysreg"


@dataclass(frozen=True)
class OtherSegmentKind:
    name: str  # type string as written in the document


SegmentKind = Union[KnownSegmentKind, OtherSegmentKind]


@dataclass(frozen=True)
class Segment:
    name: str
    range: ByteRange
    kind: SegmentKind
    access: Access
    exec: bool = False


@dataclass(frozen=True)
class AddressSpace:
    name: str
    endianness: Endianness
    range: ByteRange
    segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class Interrupt:
    name: str
    index: int
    description: Optional[str] = None
    module_instance: Optional[str] = None


class RegisterAccess(Enum):
    # reads and writes have different meaning (e.g. a USART data register)
    BIDIRECTIONAL = ""
    READ_ONLY = "R"
    WRITE_ONLY = "W"
    READ_WRITE = "RW"


@dataclass(frozen=True)
class EnumerationValue:
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class Bitfield:
    name: str
    mask: int
    description: Optional[str] = None
    values_name: Optional[str] = None
    values: Optional[tuple[EnumerationValue, ...]] = None


@dataclass(frozen=True)
class Register:
    name: str
    range: ByteRange
    description: Optional[str] = None
    initial: int = 0
    access: Optional[RegisterAccess] = None
    bitfields: tuple[Bitfield, ...] = ()


@dataclass(frozen=True)
class RegisterGroupLink:
    """The register-group stub an instance carries."""

    name: str
    name_in_module: str
    address_space: Optional[str]
    offset: int


@dataclass(frozen=True)
class Signal:
    group: str
    pad: Optional[str] = None
    index: Optional[int] = None


@dataclass(frozen=True)
class Instance:
    name: str
    register_group: RegisterGroupLink
    description: Optional[str] = None
    registers: tuple[Register, ...] = ()
    signals: tuple[Signal, ...] = ()


@dataclass(frozen=True)
class PeripheralFamily:
    name: str
    description: Optional[str] = None
    instances: tuple[Instance, ...] = ()


@dataclass(frozen=True)
class Device:
    name: str
    architecture: Optional[str] = None
    family: Optional[str] = None
    address_spaces: tuple[AddressSpace, ...] = ()
    peripherals: tuple[PeripheralFamily, ...] = ()
    interrupts: tuple[Interrupt, ...] = ()


# ---- the <modules> section, kept for lookups after parsing

@dataclass(frozen=True)
class RegisterGroup:
    name: str
    description: Optional[str] = None
    registers: tuple[Register, ...] = ()


@dataclass(frozen=True)
class ValueGroup:
    name: str
    description: Optional[str] = None
    values: tuple[EnumerationValue, ...] = ()


@dataclass(frozen=True)
class Module:
    name: str
    description: Optional[str] = None
    register_groups: tuple[RegisterGroup, ...] = ()
    value_groups: tuple[ValueGroup, ...] = ()


@dataclass(frozen=True)
class AtdfDocument:
    devices: tuple[Device, ...] = ()
    modules: tuple[Module, ...] = ()

    def module(self, name: str) -> Optional[Module]:
        return next((m for m in self.modules if m.name == name), None)

    def device(self, name: str) -> Optional[Device]:
        return next((d for d in self.devices if d.name == name), None)
