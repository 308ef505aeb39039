import pytest

from measave.number import swap_endian
from measave.serializer import ByteOrder, Serializer, SerializerError

FBCHUNKS_BE = 0x46424348554E4B53


def test_default_byte_order_is_little_endian():
    assert Serializer(b"").byte_order is ByteOrder.LITTLE_ENDIAN


def test_signature_big_endian():
    serializer = Serializer(b"FBCHUNKS")
    serializer.byte_order = ByteOrder.BIG_ENDIAN
    assert serializer.read_u64() == FBCHUNKS_BE


def test_signature_little_endian():
    assert Serializer(b"FBCHUNKS").read_u64() == swap_endian(FBCHUNKS_BE, 8)


@pytest.mark.parametrize("order", list(ByteOrder))
@pytest.mark.parametrize(
    "method,size,value",
    [("read_u16", 2, 0xBEEF), ("read_u32", 4, 0x12345678), ("read_u64", 8, 0x0102030405060708)],
)
def test_integer_round_trip(order, method, size, value):
    serializer = Serializer(value.to_bytes(size, order.value))
    serializer.byte_order = order
    assert getattr(serializer, method)() == value
    assert serializer.position == size


def test_sequential_reads_advance():
    serializer = Serializer(b"\x01\x00abc\xff")
    assert serializer.read_u16() == 1
    assert serializer.read_bytes(3) == b"abc"
    assert serializer.read_uint(1) == 0xFF
    assert serializer.position == serializer.size()


def test_read_zero_bytes():
    serializer = Serializer(b"xyz")
    assert serializer.read_bytes(0) == b""
    assert serializer.position == 0


def test_read_string_utf8():
    text = "Ryder – Pathfinder"
    raw = text.encode("utf-8")
    assert Serializer(raw).read_string(len(raw)) == text


def test_read_string_replaces_invalid_utf8():
    assert Serializer(b"a\xffb").read_string(3) == "a\ufffdb"


def test_short_read_message_plural():
    with pytest.raises(SerializerError) as info:
        Serializer(b"\x01\x02").read_u32()
    assert str(info.value) == "Failed to read 4 bytes at 0x00000000: Not enough data."
    assert info.value.offset == 0


def test_short_read_message_singular_and_offset():
    serializer = Serializer(b"\x01\x02")
    serializer.read_u16()
    with pytest.raises(SerializerError) as info:
        serializer.read_bytes(1)
    assert str(info.value) == "Failed to read 1 byte at 0x00000002: Not enough data."
    assert info.value.offset == 2


def test_negative_length_fails():
    with pytest.raises(SerializerError):
        Serializer(b"abcd").read_bytes(-4)


def test_error_is_value_error():
    with pytest.raises(ValueError):
        Serializer(b"").read_u16()


def test_invalid_integer_size():
    with pytest.raises(ValueError):
        Serializer(b"abcd").read_uint(0)


def test_size_of_bytes_source():
    data = bytes(range(18))
    serializer = Serializer(data)
    serializer.read_u32()
    assert serializer.size() == len(data)
    assert serializer.position == 4


def test_reads_from_file(tmp_path):
    path = tmp_path / "save.bin"
    path.write_bytes(b"FBCHUNKS" + (1).to_bytes(2, "little"))
    with path.open("rb") as handle:
        serializer = Serializer(handle)
        assert serializer.size() == 10
        assert serializer.read_bytes(8) == b"FBCHUNKS"
        assert serializer.read_u16() == 1
        with pytest.raises(SerializerError):
            serializer.read_u16()