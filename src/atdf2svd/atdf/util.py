from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterator

from atdf2svd.atdf.errors import (
    InvalidValue,
    LiteralError,
    MissingAttribute,
    MissingChild,
    MissingNamedChild,
)
from atdf2svd.utils.bits import MASK32

_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}
_DIGITS = {
    16: frozenset("0123456789abcdefABCDEF"),
    10: frozenset("0123456789"),
    8: frozenset("01234567"),
    2: frozenset("01"),
}


# ---- element accessors

def attr(el: ET.Element, name: str) -> str:
    value = el.get(name)
    if value is None:
        raise MissingAttribute(el.tag, name)
    return value


def children(el: ET.Element, tag: str) -> Iterator[ET.Element]:
    return (c for c in el if c.tag == tag)


def child(el: ET.Element, tag: str) -> ET.Element:
    for c in children(el, tag):
        return c
    raise MissingChild(el.tag, tag)


def named_child(el: ET.Element, tag: str, name: str) -> ET.Element:
    # first match wins; duplicate names are not detected
    for c in children(el, tag):
        if c.get("name") == name:
            return c
    raise MissingNamedChild(el.tag, tag, name)


def attr_bool(el: ET.Element, name: str) -> bool:
    value = el.get(name)
    if value is None:
        return False
    v = value.strip().lower()
    if v in ("", "true", "1"):
        return True
    if v in ("false", "0"):
        return False
    raise InvalidValue(el.tag, name, value)


# ---- integer literals

def _decode(literal: str, digits: str, base: int) -> int:
    allowed = _DIGITS[base]
    if not digits or any(ch not in allowed for ch in digits):
        raise LiteralError(literal, f"invalid base-{base} literal")
    value = int(digits, base)
    if value > MASK32:
        raise LiteralError(literal, "literal does not fit in 32 bits")
    return value


def _radix(literal: str, leading_zero_octal: bool) -> tuple[int, str]:
    base = _PREFIXES.get(literal[:2].lower())
    if base is not None:
        return base, literal[2:]
    if leading_zero_octal and len(literal) > 1 and literal[0] == "0":
        return 8, literal[1:]
    return 10, literal


def parse_uint(literal: str) -> int:
    """Decode an address/size/mask/value literal.

    Accepts ``0x``, ``0o`` and ``0b`` prefixes, and treats a bare leading zero
    as octal. Anything else is decimal.
    """
    if literal == "0":
        return 0
    base, digits = _radix(literal, leading_zero_octal=True)
    return _decode(literal, digits, base)


def parse_index(literal: str) -> int:
    """Decode an index literal (signal pins, interrupt vectors).

    Same as :func:`parse_uint` except a leading zero stays decimal, so
    ``"010"`` is ten.
    """
    if literal == "0":
        return 0
    base, digits = _radix(literal, leading_zero_octal=False)
    return _decode(literal, digits, base)


def uint_attr(el: ET.Element, name: str) -> int:
    return parse_uint(attr(el, name))
