import asyncio
import threading
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
import scapy.sendrecv
from scapy.packet import Raw
from scapy.utils import wrpcap

from airwatch.collectors import interfaces
from airwatch.collectors.interfaces import find_interface, match_interface
from airwatch.collectors.live_capture import LiveCapture, packet_bytes, packet_timestamp
from airwatch.collectors.pcap_replay import PcapReplay
from airwatch.core.errors import AdapterNotFound, CaptureChannelError

from builders import beacon_capture

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
EPOCH_T0 = 1714564800.0


# ---------------------------------------------------------------------------
# Interface lookup
# ---------------------------------------------------------------------------

_IFACES = [
    SimpleNamespace(name="lo", description="Loopback", network_name="lo"),
    SimpleNamespace(
        name="Wi-Fi 2",
        description="Qualcomm Atheros AR956x Wireless Network Adapter",
        network_name="\\Device\\NPF_{1234}",
    ),
    SimpleNamespace(name="wlan0mon", description="wlan0mon", network_name="wlan0mon"),
]


def test_match_by_description_keyword():
    assert match_interface(_IFACES, "ar956x") == "\\Device\\NPF_{1234}"


def test_match_by_name():
    assert match_interface(_IFACES, "wlan0mon") == "wlan0mon"


def test_no_match():
    assert match_interface(_IFACES, "Intel") is None


def test_find_interface_raises_when_missing(monkeypatch):
    monkeypatch.setattr(interfaces, "list_interfaces", lambda: _IFACES)
    with pytest.raises(AdapterNotFound) as info:
        find_interface("Broadcom")
    assert info.value.keyword == "Broadcom"


# ---------------------------------------------------------------------------
# Packet helpers
# ---------------------------------------------------------------------------


def test_packet_bytes_prefers_original():
    packet = SimpleNamespace(original=b"\x01\x02", time=EPOCH_T0)
    assert packet_bytes(packet) == b"\x01\x02"


def test_packet_timestamp_is_utc():
    assert packet_timestamp(SimpleNamespace(time=EPOCH_T0)) == T0


# ---------------------------------------------------------------------------
# Live capture
# ---------------------------------------------------------------------------


class _FakeSniffer:
    packets = []
    error = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.running = False
        self.thread = None
        self.exception = None

    def start(self):
        self.running = True

        def work():
            if self.error is not None:
                # scapy keeps the sniffer marked as running after a thread failure
                self.exception = self.error
                return
            for packet in self.packets:
                self.kwargs["prn"](packet)
                if self.kwargs["stop_filter"](packet):
                    break
            self.running = False

        self.thread = threading.Thread(target=work)
        self.thread.start()

    def stop(self):
        if not self.running:
            raise RuntimeError("Not running !")
        self.running = False
        self.thread.join()
        if self.exception is not None:
            raise self.exception


def _live_packets(count):
    return [SimpleNamespace(original=beacon_capture(), time=EPOCH_T0 + i) for i in range(count)]


def test_live_capture_delivers_raw_frames(monkeypatch):
    monkeypatch.setattr(scapy.sendrecv, "AsyncSniffer", _FakeSniffer)
    monkeypatch.setattr(_FakeSniffer, "packets", _live_packets(3))
    received = []

    capture = LiveCapture("wlan0mon", bpf_filter="type mgt subtype beacon")
    count = asyncio.run(capture.run(lambda raw, ts: received.append((raw, ts))))

    assert count == 3
    assert received[0] == (beacon_capture(), T0)


def test_live_capture_frame_limit(monkeypatch):
    monkeypatch.setattr(scapy.sendrecv, "AsyncSniffer", _FakeSniffer)
    monkeypatch.setattr(_FakeSniffer, "packets", _live_packets(10))
    received = []

    capture = LiveCapture("wlan0mon", max_frames=4)
    assert asyncio.run(capture.run(lambda raw, ts: received.append(raw))) == 4
    assert len(received) == 4


def _failing_sniffer(failure):
    return type("_FailingSniffer", (_FakeSniffer,), {"error": failure})


def test_live_capture_permission_error(monkeypatch):
    monkeypatch.setattr(
        scapy.sendrecv,
        "AsyncSniffer",
        _failing_sniffer(PermissionError("Operation not permitted")),
    )
    with pytest.raises(CaptureChannelError, match="wlan0mon.*not permitted") as info:
        asyncio.run(LiveCapture("wlan0mon").run(lambda raw, ts: None, duration=1))
    assert isinstance(info.value.__cause__, PermissionError)


def test_live_capture_unknown_interface(monkeypatch):
    monkeypatch.setattr(
        scapy.sendrecv,
        "AsyncSniffer",
        _failing_sniffer(ValueError("Interface 'wlan9' not found !")),
    )
    with pytest.raises(CaptureChannelError, match="not found"):
        asyncio.run(LiveCapture("wlan9").run(lambda raw, ts: None))


def test_live_capture_missing_interface_with_scapy_sniffer():
    capture = LiveCapture("nosuchif0", monitor=False)
    with pytest.raises(CaptureChannelError, match="nosuchif0"):
        asyncio.run(capture.run(lambda raw, ts: None, duration=2))


# ---------------------------------------------------------------------------
# PCAP replay
# ---------------------------------------------------------------------------


def _write_pcap(path, payloads):
    packets = []
    for index, payload in enumerate(payloads):
        packet = Raw(load=payload)
        packet.time = EPOCH_T0 + index
        packets.append(packet)
    wrpcap(str(path), packets, linktype=127)


def test_replay_yields_raw_frames_with_timestamps(tmp_path):
    path = tmp_path / "beacons.pcap"
    first = beacon_capture(b"one", 1)
    second = beacon_capture(b"two", 11)
    _write_pcap(path, [first, second])

    frames = list(PcapReplay(path))

    assert [raw for raw, _ in frames] == [first, second]
    assert frames[0][1] == T0


def test_replay_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(PcapReplay(tmp_path / "missing.pcap"))


def test_replay_unreadable_file(tmp_path):
    path = tmp_path / "garbage.pcap"
    path.write_bytes(b"definitely not a capture file")
    with pytest.raises(CaptureChannelError):
        list(PcapReplay(path))
