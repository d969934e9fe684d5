import pytest

from atdf2svd.utils.bits import bit_range, trailing_zeros


def _contiguous_masks():
    for offset in range(32):
        for width in range(1, 33 - offset):
            yield ((1 << width) - 1) << offset


def test_trailing_zeros():
    assert trailing_zeros(1) == 0
    assert trailing_zeros(0x30) == 4
    assert trailing_zeros(0x80000000) == 31


def test_contiguous_masks_give_their_range():
    for mask in _contiguous_masks():
        offset, width = bit_range(mask)
        assert ((1 << width) - 1) << offset == mask


@pytest.mark.parametrize(
    "mask, expected",
    [
        (0x01, (0, 1)),
        (0x30, (4, 2)),
        (0xC0, (6, 2)),
        (0x0FFF, (0, 12)),
        (0xFFFFFFFF, (0, 32)),
        (0x80000000, (31, 1)),
    ],
)
def test_bit_range_examples(mask, expected):
    assert bit_range(mask) == expected


@pytest.mark.parametrize("mask", [0b1011, 0b101, 0x81, 0x80000001, 0xF0F0, 0xFFFFFFFE ^ 0x100])
def test_non_contiguous_masks(mask):
    assert bit_range(mask) is None


def test_only_single_run_byte_masks_have_a_range():
    contiguous = set(m for m in _contiguous_masks() if m <= 0xFF)
    for mask in range(1, 0x100):
        assert (bit_range(mask) is None) == (mask not in contiguous)


@pytest.mark.parametrize("mask", [0, 1 << 32, -1])
def test_bit_range_rejects_masks_outside_32_bits(mask):
    with pytest.raises(ValueError):
        bit_range(mask)
