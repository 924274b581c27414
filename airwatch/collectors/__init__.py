"""Airwatch capture sources: interface lookup, live sniffing and PCAP replay."""

from airwatch.collectors.interfaces import find_interface, list_interfaces, match_interface
from airwatch.collectors.live_capture import LiveCapture, packet_bytes, packet_timestamp
from airwatch.collectors.pcap_replay import PcapReplay

__all__ = [
    "LiveCapture",
    "PcapReplay",
    "find_interface",
    "list_interfaces",
    "match_interface",
    "packet_bytes",
    "packet_timestamp",
]
