"""The save-file container: signature, version, header block and payload."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from measave.gamesaveheader import GameSaveHeader, GameSaveHeaderObject, Signal, read_header
from measave.number import swap_endian
from measave.serializer import ByteOrder, Serializer, SerializerError

__all__ = [
    "GameSave",
    "GameSaveObject",
    "read_game_save",
    "load_game_save",
    "SAVE_SIGNATURE_BE",
    "SAVE_SIGNATURE_LE",
    "MINIMUM_SAVE_SIZE",
]

SAVE_SIGNATURE_BE = int.from_bytes(b"FBCHUNKS", "big")
"""The save magic, ``FBCHUNKS``, read as a big-endian integer."""

SAVE_SIGNATURE_LE = swap_endian(SAVE_SIGNATURE_BE, 8)
"""The save magic read as a little-endian integer."""

MINIMUM_SAVE_SIZE = 18
"""Smallest number of bytes a save file can have."""


@dataclass
class GameSave:
    """A decoded save file."""

    is_big_endian: bool = False
    file_path: Path | None = None
    version: int = 0
    header: GameSaveHeader = field(default_factory=GameSaveHeader)
    data: bytes = b""


class _Observed:
    """A save attribute read and written under the object's lock."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: GameSaveObject | None, owner: type) -> Any:
        if obj is None:
            return self
        with obj._lock:
            return getattr(obj._data, self.name)

    def __set__(self, obj: GameSaveObject, value: Any) -> None:
        with obj._lock:
            if getattr(obj._data, self.name) == value:
                return
            setattr(obj._data, self.name, value)
        getattr(obj, f"{self.name}_changed").emit(value)


class GameSaveObject:
    """Observable, lock-guarded access to a :class:`GameSave`.

    ``is_big_endian``, ``file_path`` and ``version`` each have a matching
    ``<name>_changed`` :class:`Signal`, emitted only on a real change.
    """

    is_big_endian = _Observed()
    file_path = _Observed()
    version = _Observed()

    def __init__(self, data: GameSave) -> None:
        self._data = data
        self._lock = threading.RLock()
        self.is_big_endian_changed = Signal()
        self.file_path_changed = Signal()
        self.version_changed = Signal()
        self._header = GameSaveHeaderObject(data.header, self._lock)

    @property
    def header(self) -> GameSaveHeaderObject:
        """The observable header, sharing this object's lock."""
        return self._header

    @property
    def data(self) -> bytes:
        """The raw payload that follows the header."""
        with self._lock:
            return self._data.data


def read_game_save(serializer: Serializer) -> GameSave:
    """Read a whole save file from ``serializer``.

    Raises :class:`SerializerError` when the file is too small, has a wrong
    signature or version, or ends early.
    """
    if serializer.size() < MINIMUM_SAVE_SIZE:
        raise SerializerError("File is too small.")

    save = GameSave()
    serializer.byte_order = ByteOrder.LITTLE_ENDIAN

    magic = serializer.read_u64()
    if magic == SAVE_SIGNATURE_LE:
        save.is_big_endian = False
        serializer.byte_order = ByteOrder.LITTLE_ENDIAN
    elif magic == SAVE_SIGNATURE_BE:
        save.is_big_endian = True
        serializer.byte_order = ByteOrder.BIG_ENDIAN
    else:
        raise SerializerError("Invalid save file signature.")

    save.version = serializer.read_u16()
    if save.version != 1:
        raise SerializerError("Unsupported save file version.")

    header_size = serializer.read_u32()
    data_size = serializer.read_u32()

    save.header = read_header(serializer, header_size)
    save.data = serializer.read_bytes(data_size)
    return save


def load_game_save(path: str | os.PathLike[str]) -> GameSave:
    """Open and read the save file at ``path``; OSError if it cannot be opened."""
    file_path = Path(path)
    with file_path.open("rb") as stream:
        save = read_game_save(Serializer(stream))
    save.file_path = file_path
    return save