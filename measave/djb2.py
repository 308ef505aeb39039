"""The djb2 string hash and the xor variant used for save-file keys."""

from __future__ import annotations

__all__ = ["djb_hash", "modified_djb_hash"]

_SEED = 5381
_MASK = 0xFFFFFFFF


def _c_string(text: str | bytes) -> bytes:
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    end = raw.find(b"\0")
    return raw if end < 0 else raw[:end]


def djb_hash(text: str | bytes) -> int:
    """Classic djb2 (``hash * 33 + c``) over signed chars, truncated to 32 bits."""
    value = _SEED
    for byte in _c_string(text):
        char = byte - 256 if byte >= 0x80 else byte
        value = (value * 33 + char) & _MASK
    return value


def modified_djb_hash(text: str | bytes) -> int:
    """The xor variant of djb2 (``hash * 33 ^ c``) over unsigned bytes, 32 bits."""
    value = _SEED
    for byte in _c_string(text):
        value = ((value * 33) & _MASK) ^ byte
    return value