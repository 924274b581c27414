"""
PCAP Replay Source
===================

Streams the frames of a stored PCAP/PCAPNG capture as ``(raw, timestamp)``
pairs so they can be fed through the same loop as a live capture.

Frames must carry a capture-metadata header, i.e. the file should use the
radiotap link type (DLT 127). Other link types are read anyway and will
mostly be rejected as malformed by the decoder.

References:
    - Wireshark Foundation. (2024). Libpcap File Format.
      https://wiki.wireshark.org/Development/LibpcapFileFormat
    - tcpdump.org. Link-layer header types: LINKTYPE_IEEE802_11_RADIOTAP.
    - Biondi, P. (2024). Scapy Documentation.
      https://scapy.readthedocs.io/
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterator, Union

from shared.logger import AirLogger

from airwatch.collectors.live_capture import packet_bytes, packet_timestamp
from airwatch.core.errors import CaptureChannelError

logger = AirLogger("collectors.pcap")

DLT_IEEE802_11_RADIO = 127


class PcapReplay:
    """Iterable over the frames of a capture file.

    Usage::

        for raw, timestamp in PcapReplay("capture.pcap"):
            engine.process_capture(raw, timestamp)

    Raises:
        FileNotFoundError: When iterated and *path* does not exist.
        CaptureChannelError: When the file is not a readable capture.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def __iter__(self) -> Iterator[tuple[bytes, datetime]]:
        if not self.path.is_file():
            raise FileNotFoundError(f"Capture file not found: {self.path}")

        from scapy.error import Scapy_Exception  # type: ignore[import-untyped]
        from scapy.utils import PcapReader  # type: ignore[import-untyped]

        try:
            reader = PcapReader(str(self.path))
        except Scapy_Exception as exc:
            raise CaptureChannelError(
                f"Cannot read capture file {self.path}: {exc}"
            ) from exc

        with reader:
            linktype = getattr(reader, "linktype", None)
            if linktype is not None and linktype != DLT_IEEE802_11_RADIO:
                logger.warning(
                    "%s uses link type %s, expected radiotap (%d)",
                    self.path.name,
                    linktype,
                    DLT_IEEE802_11_RADIO,
                )
            for packet in reader:
                yield packet_bytes(packet), packet_timestamp(packet)
