from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, TextIO, Union

from atdf2svd.svd.model import (
    SvdDevice,
    SvdEnumeratedValues,
    SvdField,
    SvdPeripheral,
    SvdRegister,
)
from atdf2svd.utils.logger import get_logger

log = get_logger(__name__)

SCHEMA_VERSION = "1.1"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
# AVR data space is byte addressed, 8-bit wide
ADDRESS_UNIT_BITS = 8
DATA_WIDTH = 8


def _hex(v: int) -> str:
    return f"0x{v:X}"


def _t(node: ET.Element, tag: str, text: Optional[str]) -> None:
    if text is None:
        return
    ET.SubElement(node, tag).text = text


def _enumerated_values(parent: ET.Element, evs: SvdEnumeratedValues) -> None:
    node = ET.SubElement(parent, "enumeratedValues")
    _t(node, "name", evs.name)
    for v in evs.values:
        e = ET.SubElement(node, "enumeratedValue")
        _t(e, "name", v.name)
        _t(e, "description", v.description)
        _t(e, "value", _hex(v.value))


def _field(parent: ET.Element, f: SvdField) -> None:
    node = ET.SubElement(parent, "field")
    _t(node, "name", f.name)
    _t(node, "description", f.description)
    _t(node, "bitOffset", str(f.bit_range.offset))
    _t(node, "bitWidth", str(f.bit_range.width))
    for evs in f.enumerated_values:
        _enumerated_values(node, evs)


def _register(parent: ET.Element, r: SvdRegister) -> None:
    node = ET.SubElement(parent, "register")
    _t(node, "name", r.name)
    _t(node, "description", r.description)
    _t(node, "addressOffset", _hex(r.offset))
    _t(node, "size", str(r.size_bits))
    _t(node, "access", r.access.value if r.access is not None else None)
    _t(node, "resetValue", _hex(r.reset_value) if r.reset_value is not None else None)
    if r.fields:
        fields = ET.SubElement(node, "fields")
        for f in r.fields:
            _field(fields, f)


def _peripheral(parent: ET.Element, p: SvdPeripheral) -> None:
    node = ET.SubElement(parent, "peripheral")
    _t(node, "name", p.name)
    _t(node, "description", p.description)
    _t(node, "groupName", p.group_name)
    _t(node, "baseAddress", _hex(p.base_address))
    for i in p.interrupts:
        irq = ET.SubElement(node, "interrupt")
        _t(irq, "name", i.name)
        _t(irq, "description", i.description)
        _t(irq, "value", str(i.value))
    if p.registers:
        regs = ET.SubElement(node, "registers")
        for r in p.registers:
            _register(regs, r)


def to_element(device: SvdDevice) -> ET.Element:
    root = ET.Element("device", {"schemaVersion": SCHEMA_VERSION})
    _t(root, "name", device.name)
    _t(root, "addressUnitBits", str(ADDRESS_UNIT_BITS))
    _t(root, "width", str(DATA_WIDTH))
    peripherals = ET.SubElement(root, "peripherals")
    for p in device.peripherals:
        _peripheral(peripherals, p)
    return root


def to_string(device: SvdDevice) -> str:
    root = to_element(device)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def write_svd(device: SvdDevice, dest: Union[str, Path, TextIO]) -> None:
    text = to_string(device)
    if hasattr(dest, "write"):
        dest.write(text)
        return
    path = Path(dest)
    path.write_text(text, encoding="utf-8")
    log.info("Wrote SVD device=%s to %s", device.name, path)
