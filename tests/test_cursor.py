import pytest

from airwatch.decoder.cursor import ByteCursor, CursorOverrun


def test_little_endian_and_signed_reads():
    cursor = ByteCursor(bytes([0x00, 0x00, 0x12, 0x00, 0xCE]), offset=2)
    assert cursor.read_u16_le() == 0x0012
    assert cursor.read_i8() == -50
    assert cursor.remaining == 0


def test_overrun_leaves_position_unchanged():
    cursor = ByteCursor(b"\x01\x02\x03")
    cursor.read_u8()
    with pytest.raises(CursorOverrun):
        cursor.read_bytes(5)
    assert cursor.offset == 1
    assert cursor.read_u16_le() == 0x0302


def test_read_bytes_returns_view_without_copy():
    data = b"abcdef"
    view = ByteCursor(data, offset=2).read_bytes(3)
    assert isinstance(view, memoryview)
    assert view.obj is data
    assert bytes(view) == b"cde"


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        ByteCursor(b"abc", offset=-1)


def test_offset_past_end_is_clamped():
    cursor = ByteCursor(b"abc", offset=10)
    assert cursor.offset == 3
    assert cursor.remaining == 0
    assert cursor.read_element() is None


def test_read_element():
    cursor = ByteCursor(bytes([0x00, 0x02]) + b"hi" + bytes([0x03, 0x01, 0x06]))
    first = cursor.read_element()
    second = cursor.read_element()
    assert (first.id, first.length, bytes(first.payload)) == (0, 2, b"hi")
    assert (second.id, second.length, bytes(second.payload)) == (3, 1, b"\x06")
    assert cursor.read_element() is None


def test_truncated_element_does_not_advance():
    cursor = ByteCursor(bytes([0x00, 0x05]) + b"abc")
    assert cursor.read_element() is None
    assert cursor.offset == 0


def test_single_trailing_byte_ends_walk():
    cursor = ByteCursor(bytes([0x30]))
    assert cursor.read_element() is None
