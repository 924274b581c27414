import pytest
from pydantic import ValidationError

from airwatch.core.errors import MalformedCapture
from airwatch.core.models import NAME_HIDDEN, EncryptionLevel
from airwatch.decoder import decode_capture

from builders import (
    beacon_capture,
    build_capture,
    build_frame,
    ds_channel,
    rsn,
    ssid,
)


def test_end_to_end_beacon():
    record = decode_capture(beacon_capture(b"test", 6, signal=0xCE))

    assert record.hardware_address == "11:22:33:44:55:66"
    assert record.name == "test"
    assert record.channel == 6
    assert record.frequency_mhz == 2437
    assert record.encryption is EncryptionLevel.OPEN
    assert record.signal_dbm == -50


def test_protected_5ghz_beacon():
    record = decode_capture(beacon_capture(b"office", 40, extra=rsn(), signal=0xB5))
    assert record.frequency_mhz == 5200
    assert record.encryption is EncryptionLevel.WPA2_WPA3
    assert record.signal_dbm == -75


def test_unmapped_channel_has_no_frequency():
    record = decode_capture(beacon_capture(b"odd", 200))
    assert record.channel == 200
    assert record.frequency_mhz is None


def test_hidden_network():
    record = decode_capture(beacon_capture(b"\x00" * 6, 1))
    assert record.name == NAME_HIDDEN
    assert record.hidden


def test_non_beacon_returns_none():
    raw = build_capture(build_frame(ssid(b"probe"), frame_control=0x40))
    assert decode_capture(raw) is None


def test_malformed_capture_raises():
    with pytest.raises(MalformedCapture):
        decode_capture(b"\x00\x00\x0c")


def test_short_frame_raises():
    with pytest.raises(MalformedCapture):
        decode_capture(build_capture(build_frame()[:10]))


def test_beacon_without_body_decodes_with_defaults():
    record = decode_capture(build_capture(build_frame()[:22]))
    assert record.name == "Unknown"
    assert record.channel is None
    assert record.encryption is EncryptionLevel.OPEN


def test_truncated_tail_keeps_earlier_attributes():
    body = ssid(b"test") + ds_channel(6) + bytes([48, 30]) + b"\x01"
    record = decode_capture(build_capture(build_frame(body)))
    assert (record.name, record.channel) == ("test", 6)
    assert record.encryption is EncryptionLevel.OPEN


def test_record_is_frozen():
    record = decode_capture(beacon_capture())
    with pytest.raises(ValidationError):
        record.name = "changed"


def test_decoder_is_stateless_between_calls():
    first = decode_capture(beacon_capture(b"a", 1, extra=rsn()))
    second = decode_capture(beacon_capture(b"b", 11))
    assert first.encryption is EncryptionLevel.WPA2_WPA3
    assert second.encryption is EncryptionLevel.OPEN
    assert second.name == "b"
