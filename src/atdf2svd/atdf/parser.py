from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterator, Optional

from atdf2svd.atdf.errors import (
    InvalidDocument,
    InvalidValue,
    MissingChild,
    MissingNamedChild,
    SchemaError,
)
from atdf2svd.atdf.model import (
    Access,
    AddressSpace,
    AtdfDocument,
    Bitfield,
    ByteRange,
    Device,
    Endianness,
    EnumerationValue,
    Instance,
    Interrupt,
    KnownSegmentKind,
    Module,
    OtherSegmentKind,
    PeripheralFamily,
    Register,
    RegisterAccess,
    RegisterGroup,
    RegisterGroupLink,
    Segment,
    SegmentKind,
    Signal,
    ValueGroup,
)
from atdf2svd.atdf.util import (
    attr,
    attr_bool,
    child,
    children,
    named_child,
    parse_index,
    parse_uint,
    uint_attr,
)
from atdf2svd.utils.logger import get_logger

log = get_logger(__name__)

ROOT_TAG = "avr-tools-device-file"


def _caption(el: ET.Element) -> Optional[str]:
    return el.get("caption")


def _items(el: ET.Element, section: str, tag: str) -> Iterator[ET.Element]:
    """Yield ``<tag>`` elements under an optional ``<section>`` container."""
    for s in children(el, section):
        yield from children(s, tag)


# ---- memory layout

def parse_byte_range(el: ET.Element, start: str) -> ByteRange:
    return ByteRange(offset=uint_attr(el, start), size=uint_attr(el, "size"))


def parse_endianness(el: ET.Element) -> Endianness:
    value = attr(el, "endianness")
    try:
        return Endianness(value.lower())
    except ValueError:
        raise InvalidValue(el.tag, "endianness", value) from None


def parse_access(el: ET.Element) -> Access:
    value = el.get("rw")
    if value is None:
        return Access.READ_ONLY
    try:
        return Access(value.lower())
    except ValueError:
        log.debug("<%s name=%s> has unknown rw=%r, assuming read-only", el.tag, el.get("name"), value)
        return Access.READ_ONLY


def parse_segment_kind(el: ET.Element) -> SegmentKind:
    kind = attr(el, "type")
    try:
        return KnownSegmentKind(kind.lower())
    except ValueError:
        return OtherSegmentKind(kind)


def parse_segment(el: ET.Element) -> Segment:
    return Segment(
        name=attr(el, "name"),
        range=parse_byte_range(el, "start"),
        kind=parse_segment_kind(el),
        access=parse_access(el),
        exec=attr_bool(el, "exec"),
    )


def parse_address_space(el: ET.Element) -> AddressSpace:
    return AddressSpace(
        name=attr(el, "name"),
        endianness=parse_endianness(el),
        range=parse_byte_range(el, "start"),
        segments=tuple(parse_segment(s) for s in children(el, "memory-segment")),
    )


def parse_interrupt(el: ET.Element) -> Interrupt:
    return Interrupt(
        name=attr(el, "name"),
        index=parse_index(attr(el, "index")),
        description=_caption(el),
        module_instance=el.get("module-instance"),
    )


# ---- registers and values, resolved against a <module> element

def parse_value(el: ET.Element) -> EnumerationValue:
    return EnumerationValue(
        name=attr(el, "name"),
        value=uint_attr(el, "value"),
        description=_caption(el),
    )


def parse_value_group(el: ET.Element) -> ValueGroup:
    return ValueGroup(
        name=attr(el, "name"),
        description=_caption(el),
        values=tuple(parse_value(v) for v in children(el, "value")),
    )


def parse_bitfield(el: ET.Element, module: Optional[ET.Element]) -> Bitfield:
    values_name = el.get("values")
    values = None
    # without a module the reference is kept by name only
    if values_name is not None and module is not None:
        group = named_child(module, "value-group", values_name)
        values = tuple(parse_value(v) for v in children(group, "value"))

    return Bitfield(
        name=attr(el, "name"),
        mask=uint_attr(el, "mask"),
        description=_caption(el),
        values_name=values_name,
        values=values,
    )


def parse_register_access(el: ET.Element) -> Optional[RegisterAccess]:
    value = el.get("ocd-rw")
    if value is None:
        return None
    try:
        return RegisterAccess(value.upper())
    except ValueError:
        raise InvalidValue(el.tag, "ocd-rw", value) from None


def parse_register(el: ET.Element, module: Optional[ET.Element]) -> Register:
    initval = el.get("initval")
    return Register(
        name=attr(el, "name"),
        range=parse_byte_range(el, "offset"),
        description=_caption(el),
        initial=parse_uint(initval) if initval is not None else 0,
        access=parse_register_access(el),
        bitfields=tuple(parse_bitfield(b, module) for b in children(el, "bitfield")),
    )


def parse_registers(group: ET.Element, module: Optional[ET.Element]) -> tuple[Register, ...]:
    return tuple(parse_register(r, module) for r in children(group, "register"))


# ---- peripherals

def parse_signal(el: ET.Element) -> Signal:
    index = el.get("index")
    return Signal(
        group=attr(el, "group"),
        pad=el.get("pad"),
        index=parse_index(index) if index is not None else None,
    )


def resolve_register_group(group: ET.Element, module: ET.Element) -> tuple[RegisterGroupLink, ET.Element]:
    """Resolve an instance's <register-group> stub.

    A stub that already holds registers is used as-is. An empty one names a
    register-group of the module, via ``name-in-module`` or else ``name``.
    """
    ref = group.get("name-in-module")
    if ref is None:
        ref = attr(group, "name")

    link = RegisterGroupLink(
        name=group.get("name", ref),
        name_in_module=ref,
        address_space=group.get("address-space"),
        offset=uint_attr(group, "offset"),
    )

    if next(children(group, "register"), None) is not None:
        return link, group
    return link, named_child(module, "register-group", ref)


def parse_instance(el: ET.Element, module: ET.Element) -> Instance:
    name = attr(el, "name")
    # TODO: instances with several register-groups (e.g. XMEGA) only keep the first
    stub = child(el, "register-group")
    link, group = resolve_register_group(stub, module)

    return Instance(
        name=name,
        register_group=link,
        description=_caption(el),
        registers=parse_registers(group, module),
        signals=tuple(parse_signal(s) for s in _items(el, "signals", "signal")),
    )


def _is_missing_register_group(err: SchemaError) -> bool:
    if isinstance(err, MissingChild):
        return err.parent == "instance" and err.child == "register-group"
    if isinstance(err, MissingNamedChild):
        return err.parent == "module" and err.child == "register-group"
    return False


def parse_family(el: ET.Element, modules: ET.Element) -> PeripheralFamily:
    name = attr(el, "name")
    module = named_child(modules, "module", name)

    instances: list[Instance] = []
    for i in children(el, "instance"):
        try:
            instances.append(parse_instance(i, module))
        except (MissingChild, MissingNamedChild) as err:
            # an instance without registers is valid, it just has nothing to translate
            if not _is_missing_register_group(err):
                raise
            log.debug("Skipping instance %s.%s: %s", name, i.get("name"), err)

    return PeripheralFamily(name=name, description=_caption(el), instances=tuple(instances))


def parse_device(el: ET.Element, modules: ET.Element) -> Device:
    name = attr(el, "name")
    device = Device(
        name=name,
        architecture=el.get("architecture"),
        family=el.get("family"),
        address_spaces=tuple(parse_address_space(a) for a in _items(el, "address-spaces", "address-space")),
        peripherals=tuple(parse_family(p, modules) for p in _items(el, "peripherals", "module")),
        interrupts=tuple(parse_interrupt(i) for i in _items(el, "interrupts", "interrupt")),
    )
    log.info(
        "Parsed device=%s address_spaces=%d families=%d interrupts=%d",
        name, len(device.address_spaces), len(device.peripherals), len(device.interrupts),
    )
    return device


# ---- the <modules> section

def parse_module(el: ET.Element) -> Module:
    return Module(
        name=attr(el, "name"),
        description=_caption(el),
        register_groups=tuple(
            RegisterGroup(name=attr(g, "name"), description=_caption(g), registers=parse_registers(g, None))
            for g in children(el, "register-group")
        ),
        value_groups=tuple(parse_value_group(v) for v in children(el, "value-group")),
    )


# ---- document entry points

def _sections(root: ET.Element) -> tuple[ET.Element, ET.Element]:
    if root.tag != ROOT_TAG:
        raise InvalidDocument(root.tag)
    return child(root, "devices"), child(root, "modules")


def parse(root: ET.Element) -> list[Device]:
    """Parse every <device> of an ATDF document into a resolved Device.

    The first device that fails to parse aborts the whole call.
    """
    devices, modules = _sections(root)
    return [parse_device(d, modules) for d in children(devices, "device")]


def parse_modules(root: ET.Element) -> list[Module]:
    _, modules = _sections(root)
    return [parse_module(m) for m in children(modules, "module")]


def parse_document(root: ET.Element) -> AtdfDocument:
    doc = AtdfDocument(devices=tuple(parse(root)), modules=tuple(parse_modules(root)))
    log.info("Loaded ATDF devices=%d modules=%d", len(doc.devices), len(doc.modules))
    return doc
