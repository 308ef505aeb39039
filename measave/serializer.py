"""Reading fixed-width integers, raw bytes and strings from a binary stream."""

from __future__ import annotations

import io
from enum import Enum
from typing import BinaryIO

from measave.number import to_hex

__all__ = ["ByteOrder", "SerializerError", "Serializer", "CRC_SEED"]

CRC_SEED = 0x12345678
"""Initial value of the CRC-32 that guards a save-file header."""


class ByteOrder(Enum):
    """Byte order used for multi-byte integers."""

    BIG_ENDIAN = "big"
    LITTLE_ENDIAN = "little"


class SerializerError(ValueError):
    """Raised when the stream does not hold the data asked for."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class Serializer:
    """Reads values from bytes or from a binary file object.

    Integers are read in :attr:`byte_order`, little-endian by default.
    """

    def __init__(self, source: bytes | bytearray | memoryview | BinaryIO) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._device: BinaryIO = io.BytesIO(bytes(source))
        else:
            self._device = source
        self.byte_order = ByteOrder.LITTLE_ENDIAN

    @property
    def position(self) -> int:
        """Current offset in the stream."""
        return self._device.tell()

    def size(self) -> int:
        """Total size of the underlying stream in bytes."""
        current = self._device.tell()
        end = self._device.seek(0, io.SEEK_END)
        self._device.seek(current)
        return end

    @staticmethod
    def _failure(length: int, offset: int, reason: str) -> SerializerError:
        unit = "byte" if length == 1 else "bytes"
        return SerializerError(
            f"Failed to read {length} {unit} at {to_hex(offset)}: {reason}.", offset
        )

    def read_bytes(self, length: int) -> bytes:
        """Read exactly ``length`` bytes."""
        offset = self.position
        if length < 0:
            raise self._failure(length, offset, "Invalid length")
        chunks = []
        remaining = length
        try:
            while remaining > 0:
                chunk = self._device.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except OSError as exc:
            raise self._failure(length, offset, str(exc) or "Not enough data") from exc
        if remaining:
            raise self._failure(length, offset, "Not enough data")
        return b"".join(chunks)

    def read_string(self, length: int) -> str:
        """Read ``length`` bytes and decode them as UTF-8."""
        return self.read_bytes(length).decode("utf-8", errors="replace")

    def read_uint(self, size: int) -> int:
        """Read an unsigned integer that is ``size`` bytes wide."""
        if size <= 0:
            raise ValueError(f"size must be positive, not {size}")
        return int.from_bytes(self.read_bytes(size), self.byte_order.value)

    def read_u16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return self.read_uint(2)

    def read_u32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return self.read_uint(4)

    def read_u64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return self.read_uint(8)