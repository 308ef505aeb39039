import zlib

import pytest

from measave.djb2 import modified_djb_hash
from measave.gamesaveheader import (
    HEADER_SIGNATURE_BE,
    HEADER_SIGNATURE_LE,
    GameSaveHeader,
    GameSaveHeaderObject,
    HeaderKey,
    Signal,
    read_header,
)
from measave.serializer import CRC_SEED, ByteOrder, Serializer, SerializerError


def _entry(key, value, order):
    raw = value.encode("utf-8")
    return int(key).to_bytes(4, order) + len(raw).to_bytes(2, order) + raw


def _blob(entries, order="little", version=1, magic=b"FBHEADER", corrupt=False):
    payload = (
        magic
        + version.to_bytes(2, order)
        + len(entries).to_bytes(4, order)
        + b"".join(_entry(k, v, order) for k, v in entries)
    )
    crc = zlib.crc32(payload, CRC_SEED)
    if corrupt:
        crc ^= 1
    return crc.to_bytes(4, order) + payload


def _read(blob, order=ByteOrder.LITTLE_ENDIAN):
    serializer = Serializer(blob)
    serializer.byte_order = order
    return read_header(serializer, len(blob)), serializer


def test_signature_constants_spell_fbheader():
    assert HEADER_SIGNATURE_BE.to_bytes(8, "big") == b"FBHEADER"
    assert HEADER_SIGNATURE_LE.to_bytes(8, "little") == b"FBHEADER"


def test_header_keys_are_hashes_of_names():
    assert HeaderKey.GAME_VERSION == modified_djb_hash("GameVersion")
    assert HeaderKey.LEVEL_ID == modified_djb_hash("LevelID")


def test_reads_all_fields_little_endian():
    entries = [
        (HeaderKey.PROFILE_NAME, "Ryder"),
        (HeaderKey.GAME_VERSION, "1.10"),
        (HeaderKey.LEVEL_ID, "levels/eos"),
        (HeaderKey.GAME_COMPLETED, "true"),
        (HeaderKey.TRIAL_MODE, "false"),
        (HeaderKey.COMPLETION_PERCENTAGE, "42.5"),
        (HeaderKey.DATE_TIME, "212000000000"),
        (HeaderKey.TOTAL_PLAYTIME, "12.5"),
        (HeaderKey.REQUIRED_DLC, "dlc_a"),
    ]
    blob = _blob(entries)
    header, serializer = _read(blob)
    assert header.version == 1
    assert header.profile_name == "Ryder"
    assert header.game_version == "1.10"
    assert header.level_id == "levels/eos"
    assert header.game_completed is True
    assert header.trial_mode is False
    assert header.completion_percentage == 42.5
    assert header.date_time == 212000000000
    assert header.total_playtime == 12500
    assert header.required_dlc == "dlc_a"
    assert header.unknown_values == {}
    assert serializer.position == len(blob)


def test_reads_big_endian():
    entries = [(HeaderKey.PROFILE_ID, "abc"), (HeaderKey.PLAYER_LEVEL, "20")]
    header, _ = _read(_blob(entries, order="big"), ByteOrder.BIG_ENDIAN)
    assert header.profile_id == "abc"
    assert header.player_level == "20"


def test_unknown_key_is_kept():
    header, _ = _read(_blob([(7, "seven"), (HeaderKey.PROFILE_NAME, "x")]))
    assert header.unknown_values == {7: "seven"}
    assert header.profile_name == "x"


def test_completed_is_case_sensitive():
    header, _ = _read(_blob([(HeaderKey.GAME_COMPLETED, "True")]))
    assert header.game_completed is False


def test_checksum_mismatch():
    with pytest.raises(SerializerError, match="Mismatched header checksum"):
        _read(_blob([], corrupt=True))


def test_invalid_signature():
    with pytest.raises(SerializerError, match="Invalid metadata signature"):
        _read(_blob([], magic=b"FBCHUNKS"))


def test_unsupported_version():
    with pytest.raises(SerializerError, match="Unsupported metadata version"):
        _read(_blob([], version=2))


def test_invalid_completion_percentage():
    with pytest.raises(SerializerError, match="completion percentage"):
        _read(_blob([(HeaderKey.COMPLETION_PERCENTAGE, "lots")]))


def test_invalid_date_time():
    with pytest.raises(SerializerError, match="date time: Invalid integral number"):
        _read(_blob([(HeaderKey.DATE_TIME, "-5")]))


def test_invalid_total_playtime():
    with pytest.raises(SerializerError, match="total playtime"):
        _read(_blob([(HeaderKey.TOTAL_PLAYTIME, "1_0")]))


def test_truncated_data_raises():
    blob = _blob([(HeaderKey.PROFILE_NAME, "Ryder")])
    serializer = Serializer(blob[:-3])
    with pytest.raises(SerializerError):
        read_header(serializer, len(blob))


def test_signal_connect_emit_disconnect():
    received = []
    signal = Signal()
    signal.connect(received.append)
    signal.emit("a")
    signal.disconnect(received.append)
    signal.emit("b")
    assert received == ["a"]
    with pytest.raises(ValueError):
        signal.disconnect(received.append)


def test_object_setter_emits_only_on_change():
    data = GameSaveHeader(version=1, profile_name="old")
    obj = GameSaveHeaderObject(data)
    received = []
    obj.profile_name_changed.connect(received.append)
    obj.profile_name = "new"
    obj.profile_name = "new"
    assert received == ["new"]
    assert data.profile_name == "new"
    assert obj.profile_name == "new"


def test_object_version_is_read_only():
    obj = GameSaveHeaderObject(GameSaveHeader(version=1))
    assert obj.version == 1
    with pytest.raises(AttributeError):
        obj.version = 2


def test_object_unknown_values():
    data = GameSaveHeader(unknown_values={1: "one"})
    obj = GameSaveHeaderObject(data)
    changes = []
    obj.unknown_values_changed.connect(changes.append)

    assert obj.has_unknown_value(1)
    assert obj.get_unknown_value(1) == "one"
    assert obj.get_unknown_value(2) == ""

    obj.set_unknown_value(2, "two")
    assert data.unknown_values == {1: "one", 2: "two"}
    obj.set_unknown_value(2, "two")
    assert len(changes) == 1

    obj.clear_unknown_value(1)
    obj.clear_unknown_value(1)
    assert data.unknown_values == {2: "two"}
    assert not obj.has_unknown_value(1)
    assert len(changes) == 2


def test_object_returned_unknown_values_is_a_copy():
    data = GameSaveHeader(unknown_values={1: "one"})
    obj = GameSaveHeaderObject(data)
    values = obj.unknown_values
    values[5] = "five"
    assert data.unknown_values == {1: "one"}