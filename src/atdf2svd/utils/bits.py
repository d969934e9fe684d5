from __future__ import annotations

from typing import Optional

MASK32 = 0xFFFFFFFF


def trailing_zeros(value: int) -> int:
    """Number of zero bits below the lowest set bit of a nonzero value."""
    return (value & -value).bit_length() - 1


def is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def bit_range(mask: int) -> Optional[tuple[int, int]]:
    """Return ``(offset, width)`` for a mask made of one run of set bits.

    Masks with gaps (e.g. ``0b1011``) have no such range and give ``None``.
    A zero mask is a caller bug.
    """
    if not 0 < mask <= MASK32:
        raise ValueError(f"bit_range() needs a nonzero 32-bit mask, got {mask:#x}")

    offset = trailing_zeros(mask)
    shifted = (mask >> offset) + 1
    if not is_power_of_two(shifted):
        return None

    return offset, trailing_zeros(shifted)
