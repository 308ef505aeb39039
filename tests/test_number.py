import pytest

from measave.number import swap_endian, to_hex

FBCHUNKS_BE = 0x46424348554E4B53


def test_swap_endian_matches_byte_reversal_of_signature():
    swapped = swap_endian(FBCHUNKS_BE, 8)
    assert swapped.to_bytes(8, "big") == b"FBCHUNKS"[::-1]


def test_swap_endian_round_trip():
    for value, size in [(FBCHUNKS_BE, 8), (0x1234, 2), (0xDEADBEEF, 4), (0, 4)]:
        assert swap_endian(swap_endian(value, size), size) == value


def test_swap_endian_small_value_pinned():
    assert swap_endian(0x0102, 2) == 0x0201


def test_swap_endian_single_byte_is_identity():
    assert swap_endian(0xAB, 1) == 0xAB


@pytest.mark.parametrize(
    "value,size",
    [(-1, 2), (0x10000, 2), (1, 0), (1, -4)],
)
def test_swap_endian_rejects_invalid_input(value, size):
    with pytest.raises(ValueError):
        swap_endian(value, size)


def test_to_hex_pads_to_eight_digits_by_default():
    assert to_hex(255) == "0x000000ff"


def test_to_hex_longer_values_are_not_truncated():
    assert to_hex(FBCHUNKS_BE) == "0x46424348554e4b53"


def test_to_hex_custom_length():
    text = to_hex(0xAB, 4)
    assert text.startswith("0x")
    assert len(text) == 6
    assert int(text, 16) == 0xAB


def test_to_hex_negative_keeps_sign_before_zeros():
    text = to_hex(-1)
    assert text.startswith("0x-")
    assert len(text) == 10
    assert int(text[3:], 16) == 1


def test_to_hex_float_zero():
    assert to_hex(0.0, 16) == "0x0000000000000000"


def test_to_hex_float_has_sixteen_digits():
    text = to_hex(1.5)
    assert len(text) == 2 + 16
    assert text != to_hex(2.5)