from __future__ import annotations

from typing import Iterable, Optional

from atdf2svd.atdf.model import (
    Bitfield,
    Device,
    EnumerationValue,
    Instance,
    Interrupt,
    Module,
    Register,
    RegisterAccess,
)
from atdf2svd.svd.model import (
    BitRange,
    SvdAccess,
    SvdDevice,
    SvdEnumeratedValue,
    SvdEnumeratedValues,
    SvdField,
    SvdInterrupt,
    SvdPeripheral,
    SvdRegister,
)
from atdf2svd.utils import bits
from atdf2svd.utils.logger import get_logger

log = get_logger(__name__)

# register-groups living anywhere else (e.g. fuses) are not memory mapped
DATA_ADDRESS_SPACE = "data"

_ACCESS = {
    RegisterAccess.READ_ONLY: SvdAccess.READ_ONLY,
    RegisterAccess.WRITE_ONLY: SvdAccess.WRITE_ONLY,
    RegisterAccess.READ_WRITE: SvdAccess.READ_WRITE,
    # SVD has no separate read/write semantics
    RegisterAccess.BIDIRECTIONAL: SvdAccess.READ_WRITE,
}


def convert_access(access: Optional[RegisterAccess]) -> Optional[SvdAccess]:
    if access is None:
        return None
    return _ACCESS[access]


def bit_range(mask: int) -> Optional[BitRange]:
    r = bits.bit_range(mask)
    if r is None:
        return None
    offset, width = r
    return BitRange(offset=offset, width=width)


def enumerated_values(name: Optional[str], values: Iterable[EnumerationValue]) -> SvdEnumeratedValues:
    return SvdEnumeratedValues(
        name=name,
        values=tuple(
            SvdEnumeratedValue(name=v.name, value=v.value, description=v.description)
            for v in values
        ),
    )


def field(f: Bitfield) -> Optional[SvdField]:
    if f.mask == 0:
        raise ValueError(f"bitfield {f.name} has a zero mask")
    rng = bit_range(f.mask)
    if rng is None:
        return None

    evs = () if f.values is None else (enumerated_values(f.values_name, f.values),)
    return SvdField(
        name=f.name,
        bit_range=rng,
        description=f.description,
        enumerated_values=evs,
    )


def register(r: Register) -> SvdRegister:
    fields: list[SvdField] = []
    for f in r.bitfields:
        svd_field = field(f)
        if svd_field is None:
            log.debug("Dropping non-contiguous field %s.%s mask=0x%X", r.name, f.name, f.mask)
            continue
        fields.append(svd_field)

    return SvdRegister(
        name=r.name,
        offset=r.range.offset,
        size_bits=r.range.size * 8,
        description=r.description,
        access=convert_access(r.access),
        reset_value=r.initial,
        fields=tuple(fields),
    )


def peripheral(
    p: Instance,
    group_name: str,
    module: Optional[Module] = None,
    interrupts: Iterable[Interrupt] = (),
) -> SvdPeripheral:
    description = p.description
    if description is None and module is not None:
        description = module.description

    return SvdPeripheral(
        name=p.name,
        base_address=p.register_group.offset,
        description=description,
        group_name=group_name,
        registers=tuple(register(r) for r in p.registers),
        interrupts=tuple(
            SvdInterrupt(name=i.name, value=i.index, description=i.description)
            for i in interrupts
            if i.module_instance == p.name
        ),
    )


def translate(device: Device, modules: Iterable[Module] = ()) -> SvdDevice:
    """Project a resolved ATDF device onto the SVD model.

    Instances whose register-group is declared in an address space other than
    ``data`` are skipped. Fields whose mask is not one contiguous run of bits are left
    out.
    """
    by_name: dict[str, Module] = {}
    for m in modules:
        by_name.setdefault(m.name, m)

    peripherals: list[SvdPeripheral] = []
    for family in device.peripherals:
        module = by_name.get(family.name)
        for inst in family.instances:
            space = inst.register_group.address_space
            if space is not None and space != DATA_ADDRESS_SPACE:
                log.debug("Skipping %s: register-group in address space %s", inst.name, space)
                continue
            peripherals.append(peripheral(inst, family.name, module, device.interrupts))

    log.info("Translated device=%s peripherals=%d", device.name, len(peripherals))
    return SvdDevice(name=device.name, peripherals=tuple(peripherals))
