import pytest

from airwatch.core.errors import MalformedCapture
from airwatch.core.models import FrameKind
from airwatch.decoder.frame import (
    classify_frame,
    extract_hardware_address,
    format_hardware_address,
)

from builders import build_frame


def test_beacon_frame_control():
    assert classify_frame(build_frame()) is FrameKind.BEACON


@pytest.mark.parametrize("frame_control", [0x40, 0x50, 0xC0, 0x08, 0x88])
def test_other_frame_types(frame_control):
    frame = build_frame(frame_control=frame_control)
    assert classify_frame(frame) is FrameKind.NOT_A_BEACON


def test_frame_too_short_for_address_is_malformed():
    with pytest.raises(MalformedCapture):
        classify_frame(build_frame()[:21])


def test_short_non_beacon_is_still_malformed():
    with pytest.raises(MalformedCapture):
        classify_frame(bytes([0x40]) + bytes(10))


def test_minimal_frame_is_classified():
    assert classify_frame(build_frame()[:22]) is FrameKind.BEACON


def test_format_hardware_address():
    raw = bytes([0xAA, 0xBB, 0xCC, 0x00, 0x11, 0x22])
    assert format_hardware_address(raw) == "AA:BB:CC:00:11:22"


def test_extract_hardware_address_reads_bssid_field():
    frame = build_frame(bssid=bytes.fromhex("a0b1c2d3e4f5"))
    assert extract_hardware_address(frame) == "A0:B1:C2:D3:E4:F5"
