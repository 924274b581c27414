from airwatch.decoder.elements import walk_elements

from builders import build_frame, ds_channel, element, rsn, ssid


def _ids(frame):
    return [e.id for e in walk_elements(frame)]


def test_walks_every_element_in_order():
    frame = build_frame(ssid(b"net") + ds_channel(11) + rsn())
    assert _ids(frame) == [0, 3, 48]


def test_frame_without_body_yields_nothing():
    assert _ids(build_frame()) == []
    assert _ids(build_frame()[:30]) == []


def test_truncated_tail_is_dropped():
    frame = build_frame(ssid(b"net") + bytes([48, 20]) + b"\x01\x00")
    assert _ids(frame) == [0]


def test_lone_trailing_byte_is_ignored():
    frame = build_frame(ds_channel(1) + b"\xdd")
    assert _ids(frame) == [3]


def test_zero_length_element():
    elements = list(walk_elements(build_frame(ssid(b"") + ds_channel(3))))
    assert elements[0].length == 0
    assert bytes(elements[0].payload) == b""
    assert elements[1].id == 3


def test_walk_continues_after_name_and_channel():
    frame = build_frame(
        ssid(b"net") + ds_channel(6) + element(50, b"\x0c\x12") + rsn()
    )
    assert _ids(frame)[-1] == 48


def test_element_ending_exactly_at_frame_end():
    frame = build_frame(element(221, b"\x00" * 8))
    elements = list(walk_elements(frame))
    assert len(elements) == 1
    assert elements[0].length == 8
