"""Byte-order swapping and hexadecimal formatting of numbers."""

from __future__ import annotations

import struct

__all__ = ["swap_endian", "to_hex"]


def swap_endian(value: int, size: int) -> int:
    """Reverse the byte order of an unsigned integer that is ``size`` bytes wide."""
    if size <= 0:
        raise ValueError(f"size must be positive, not {size}")
    if value < 0:
        raise ValueError("only unsigned values can be swapped")
    if value >= 1 << (8 * size):
        raise ValueError(f"{value:#x} does not fit in {size} bytes")
    return int.from_bytes(value.to_bytes(size, "little"), "big")


def _pad(digits: str, length: int) -> str:
    if length < 0:
        return digits.ljust(-length, "0")
    if digits.startswith("-"):
        return "-" + digits[1:].rjust(length - 1, "0")
    return digits.rjust(length, "0")


def to_hex(value: int | float, length: int = 8) -> str:
    """Format ``value`` as ``0x`` followed by at least ``length`` hex digits.

    Integers are written as their lower-case hexadecimal value; floats as the
    hexadecimal dump of their in-memory IEEE 754 double representation.
    """
    if isinstance(value, float):
        digits = struct.pack("=d", value).hex()
    else:
        digits = format(value, "x")
    return "0x" + _pad(digits, length)