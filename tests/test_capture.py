import pytest

from airwatch.core.errors import MalformedCapture
from airwatch.decoder.capture import split_capture

from builders import build_capture, build_frame


@pytest.mark.parametrize("length", range(0, 9))
def test_short_capture_is_malformed(length):
    with pytest.raises(MalformedCapture) as info:
        split_capture(bytes(length))
    assert info.value.length == length


def test_declared_length_beyond_buffer_is_malformed():
    raw = bytearray(10)
    raw[2:4] = (11).to_bytes(2, "little")
    with pytest.raises(MalformedCapture):
        split_capture(bytes(raw))


def test_split_reads_length_signal_and_frame():
    frame = build_frame()
    raw = build_capture(frame, signal=0xCE, metadata_length=18)

    split = split_capture(raw)

    assert split.metadata_length == 18
    assert split.signal_dbm == -50
    assert bytes(split.frame) == frame


def test_frame_is_a_view_of_the_capture():
    raw = build_capture(build_frame())
    split = split_capture(raw)
    assert isinstance(split.frame, memoryview)
    assert split.frame.obj is raw


def test_positive_signal_byte():
    split = split_capture(build_capture(b"", signal=0x05))
    assert split.signal_dbm == 5


def test_header_consuming_whole_buffer_leaves_empty_frame():
    raw = build_capture(b"", metadata_length=12)
    assert len(split_capture(raw).frame) == 0


def test_accepts_bytearray_and_memoryview():
    raw = build_capture(build_frame())
    assert split_capture(bytearray(raw)).signal_dbm == -50
    assert split_capture(memoryview(raw)).signal_dbm == -50
