"""The metadata header of a save file and an observable view over it."""

from __future__ import annotations

import math
import re
import threading
import zlib
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from measave.djb2 import modified_djb_hash
from measave.number import swap_endian
from measave.serializer import CRC_SEED, ByteOrder, Serializer, SerializerError

__all__ = [
    "Signal",
    "HeaderKey",
    "GameSaveHeader",
    "GameSaveHeaderObject",
    "read_header",
    "HEADER_SIGNATURE_BE",
    "HEADER_SIGNATURE_LE",
    "INVALID_FLOAT_NUMBER",
    "INVALID_INTEGRAL_NUMBER",
]

HEADER_SIGNATURE_BE = int.from_bytes(b"FBHEADER", "big")
"""The header magic, ``FBHEADER``, read as a big-endian integer."""

HEADER_SIGNATURE_LE = swap_endian(HEADER_SIGNATURE_BE, 8)
"""The header magic read as a little-endian integer."""

INVALID_FLOAT_NUMBER = "Invalid floating point number"
INVALID_INTEGRAL_NUMBER = "Invalid integral number"

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_UINT_RE = re.compile(r"\+?\d+")
_UINT64_LIMIT = 1 << 64


class Signal:
    """A list of callbacks invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        """Call ``callback`` on every later emission."""
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        """Stop calling ``callback``; raises ValueError if it was not connected."""
        self._callbacks.remove(callback)

    def emit(self, *args: Any) -> None:
        """Call every connected callback with ``args``."""
        for callback in list(self._callbacks):
            callback(*args)


class HeaderKey(IntEnum):
    """Known header keys, identified by the modified djb2 hash of their name."""

    AREA_NAME_STRING_ID = modified_djb_hash("AreaNameStringId")
    AREA_THUMBNAIL_TEXTURE_ID = modified_djb_hash("AreaThumbnailTextureId")
    GAME_VERSION = modified_djb_hash("GameVersion")
    REQUIRED_DLC = modified_djb_hash("RequiredDLC")
    REQUIRED_INSTALL_GROUP = modified_djb_hash("RequiredInstallGroup")
    PROFILE_NAME = modified_djb_hash("ProfileName")
    PROFILE_UNIQUE_NAME = modified_djb_hash("ProfileUniqueName")
    PROFILE_ID = modified_djb_hash("ProfileId")
    LEVEL_ID = modified_djb_hash("LevelID")
    PLAYER_LEVEL = modified_djb_hash("PlayerLevel")
    GAME_COMPLETED = modified_djb_hash("GameCompleted")
    TRIAL_MODE = modified_djb_hash("TrialMode")
    COMPLETION_PERCENTAGE = modified_djb_hash("CompletionPercentage")
    DATE_TIME = modified_djb_hash("DateTime")
    LEVEL_TITLE_ID = modified_djb_hash("LevelTitleID")
    LEVEL_FLOOR_ID = modified_djb_hash("LevelFloorID")
    LEVEL_REGION_ID = modified_djb_hash("LevelRegionID")
    TOTAL_PLAYTIME = modified_djb_hash("TotalPlaytime")
    NAME_OVERRIDE_STRING_ID = modified_djb_hash("NameOverrideStringId")


@dataclass
class GameSaveHeader:
    """The decoded key/value metadata of a save file."""

    version: int = 0
    area_name_string_id: str = ""
    area_thumbnail_texture_id: str = ""
    game_version: str = ""
    required_dlc: str = ""
    required_install_group: str = ""
    profile_name: str = ""
    profile_unique_name: str = ""
    profile_id: str = ""
    level_id: str = ""
    player_level: str = ""
    game_completed: bool = False
    trial_mode: bool = False
    completion_percentage: float = 0.0
    date_time: int = 0
    level_title_id: str = ""
    level_floor_id: str = ""
    level_region_id: str = ""
    total_playtime: int = 0
    """Total playtime in milliseconds."""
    name_override_string_id: str = ""
    unknown_values: dict[int, str] = field(default_factory=dict)


_STRING_FIELDS: dict[HeaderKey, str] = {
    HeaderKey.AREA_NAME_STRING_ID: "area_name_string_id",
    HeaderKey.AREA_THUMBNAIL_TEXTURE_ID: "area_thumbnail_texture_id",
    HeaderKey.GAME_VERSION: "game_version",
    HeaderKey.REQUIRED_DLC: "required_dlc",
    HeaderKey.REQUIRED_INSTALL_GROUP: "required_install_group",
    HeaderKey.PROFILE_NAME: "profile_name",
    HeaderKey.PROFILE_UNIQUE_NAME: "profile_unique_name",
    HeaderKey.PROFILE_ID: "profile_id",
    HeaderKey.LEVEL_ID: "level_id",
    HeaderKey.PLAYER_LEVEL: "player_level",
    HeaderKey.LEVEL_TITLE_ID: "level_title_id",
    HeaderKey.LEVEL_FLOOR_ID: "level_floor_id",
    HeaderKey.LEVEL_REGION_ID: "level_region_id",
    HeaderKey.NAME_OVERRIDE_STRING_ID: "name_override_string_id",
}

_EDITABLE_FIELDS = (
    "area_name_string_id",
    "area_thumbnail_texture_id",
    "game_version",
    "required_dlc",
    "required_install_group",
    "profile_name",
    "profile_unique_name",
    "profile_id",
    "level_id",
    "player_level",
    "game_completed",
    "trial_mode",
    "completion_percentage",
    "date_time",
    "level_title_id",
    "level_floor_id",
    "level_region_id",
    "total_playtime",
    "name_override_string_id",
)


class _Field:
    """A header attribute read and written under the shared lock."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: GameSaveHeaderObject | None, owner: type) -> Any:
        if obj is None:
            return self
        with obj._lock:
            return getattr(obj._data, self.name)

    def __set__(self, obj: GameSaveHeaderObject, value: Any) -> None:
        with obj._lock:
            if getattr(obj._data, self.name) == value:
                return
            setattr(obj._data, self.name, value)
        getattr(obj, f"{self.name}_changed").emit(value)


class GameSaveHeaderObject:
    """Observable, lock-guarded access to a :class:`GameSaveHeader`.

    Each editable attribute ``name`` has a :class:`Signal` ``name_changed``
    emitted with the new value whenever the value actually changes.
    """

    area_name_string_id = _Field()
    area_thumbnail_texture_id = _Field()
    game_version = _Field()
    required_dlc = _Field()
    required_install_group = _Field()
    profile_name = _Field()
    profile_unique_name = _Field()
    profile_id = _Field()
    level_id = _Field()
    player_level = _Field()
    game_completed = _Field()
    trial_mode = _Field()
    completion_percentage = _Field()
    date_time = _Field()
    level_title_id = _Field()
    level_floor_id = _Field()
    level_region_id = _Field()
    total_playtime = _Field()
    name_override_string_id = _Field()

    def __init__(self, data: GameSaveHeader, lock: Any = None) -> None:
        self._data = data
        self._lock = lock if lock is not None else threading.RLock()
        for name in _EDITABLE_FIELDS:
            setattr(self, f"{name}_changed", Signal())
        self.unknown_values_changed = Signal()

    @property
    def version(self) -> int:
        """The header format version; fixed once read."""
        with self._lock:
            return self._data.version

    @property
    def unknown_values(self) -> dict[int, str]:
        """A copy of the values stored under unrecognised keys."""
        with self._lock:
            return dict(self._data.unknown_values)

    @unknown_values.setter
    def unknown_values(self, values: dict[int, str]) -> None:
        with self._lock:
            if self._data.unknown_values == values:
                return
            self._data.unknown_values = dict(values)
        self.unknown_values_changed.emit(dict(values))

    def has_unknown_value(self, key: int) -> bool:
        """Whether an unrecognised key ``key`` is present."""
        with self._lock:
            return key in self._data.unknown_values

    def get_unknown_value(self, key: int) -> str:
        """The value under ``key``, or an empty string if absent."""
        with self._lock:
            return self._data.unknown_values.get(key, "")

    def set_unknown_value(self, key: int, value: str) -> None:
        """Store ``value`` under ``key``."""
        values = self.unknown_values
        if key in values and values[key] == value:
            return
        values[key] = value
        self.unknown_values = values

    def clear_unknown_value(self, key: int) -> None:
        """Remove ``key`` if present."""
        values = self.unknown_values
        if key not in values:
            return
        del values[key]
        self.unknown_values = values


def _parse_float(text: str) -> float | None:
    stripped = text.strip()
    if not _FLOAT_RE.fullmatch(stripped):
        return None
    return float(stripped)


def _parse_uint64(text: str) -> int | None:
    stripped = text.strip()
    if not _UINT_RE.fullmatch(stripped):
        return None
    number = int(stripped)
    return number if number < _UINT64_LIMIT else None


def read_header(serializer: Serializer, length: int) -> GameSaveHeader:
    """Read a checksummed header block of ``length`` bytes from ``serializer``.

    Raises :class:`SerializerError` on a bad checksum, signature, version,
    number, or when the data runs out.
    """
    checksum = serializer.read_u32()
    data = serializer.read_bytes(length - 4)
    if checksum != zlib.crc32(data, CRC_SEED):
        raise SerializerError("Mismatched header checksum.")

    inner = Serializer(data)
    inner.byte_order = serializer.byte_order

    magic = inner.read_u64()
    expected = (
        HEADER_SIGNATURE_BE
        if inner.byte_order is ByteOrder.BIG_ENDIAN
        else HEADER_SIGNATURE_LE
    )
    if magic != expected:
        raise SerializerError("Invalid metadata signature.")

    header = GameSaveHeader(version=inner.read_u16())
    if header.version != 1:
        raise SerializerError("Unsupported metadata version.")

    for _ in range(inner.read_u32()):
        raw_key = inner.read_u32()
        size = inner.read_u16()
        value = inner.read_string(size)

        try:
            key = HeaderKey(raw_key)
        except ValueError:
            header.unknown_values[raw_key] = value
            continue

        if key in _STRING_FIELDS:
            setattr(header, _STRING_FIELDS[key], value)
        elif key is HeaderKey.GAME_COMPLETED:
            header.game_completed = value == "true"
        elif key is HeaderKey.TRIAL_MODE:
            header.trial_mode = value == "true"
        elif key is HeaderKey.COMPLETION_PERCENTAGE:
            number = _parse_float(value)
            if number is None:
                raise SerializerError(
                    f"Failed to read completion percentage: {INVALID_FLOAT_NUMBER}."
                )
            header.completion_percentage = number
        elif key is HeaderKey.DATE_TIME:
            stamp = _parse_uint64(value)
            if stamp is None:
                raise SerializerError(
                    f"Failed to read date time: {INVALID_INTEGRAL_NUMBER}."
                )
            header.date_time = stamp
        elif key is HeaderKey.TOTAL_PLAYTIME:
            seconds = _parse_float(value)
            if seconds is None or not math.isfinite(seconds):
                raise SerializerError(
                    f"Failed to read total playtime: {INVALID_FLOAT_NUMBER}."
                )
            header.total_playtime = int(seconds * 1000)

    return header