"""
Frame Classifier and Fixed Field Extractor
===========================================

An 802.11 management frame starts with a 24-byte MAC header::

    0      2         4       10      16        22       24
    +------+---------+-------+-------+---------+--------+
    |  FC  | duration| addr1 | addr2 | addr3   | seq    |
    +------+---------+-------+-------+---------+--------+
                                       BSSID

A Beacon has type 0 / subtype 8, which puts ``0x80`` in the first byte
of the frame-control field.

Reference:
    - IEEE. (2020). IEEE Std 802.11-2020. Section 9.3.3: Management frames.
"""

from __future__ import annotations

from airwatch.core.errors import MalformedCapture
from airwatch.core.models import (
    BEACON_FRAME_CONTROL,
    HARDWARE_ADDRESS_LENGTH,
    HARDWARE_ADDRESS_OFFSET,
    MIN_FRAME_LENGTH,
    Buffer,
    FrameKind,
)
from airwatch.decoder.cursor import ByteCursor


def classify_frame(frame: Buffer) -> FrameKind:
    """Classify a radio frame as Beacon or something else.

    Raises:
        MalformedCapture: If the frame is too short to hold the BSSID
            (fewer than 22 bytes), whatever its type.
    """
    if len(frame) < MIN_FRAME_LENGTH:
        raise MalformedCapture(
            f"Frame too short for hardware address: {len(frame)} bytes",
            length=len(frame),
        )
    if frame[0] != BEACON_FRAME_CONTROL:
        return FrameKind.NOT_A_BEACON
    return FrameKind.BEACON


def format_hardware_address(raw: Buffer) -> str:
    """Render address bytes as colon-separated uppercase hex octets.

    >>> format_hardware_address(bytes.fromhex("aabbcc001122"))
    'AA:BB:CC:00:11:22'
    """
    return ":".join(f"{b:02X}" for b in bytes(raw))


def extract_hardware_address(frame: Buffer) -> str:
    """Read the BSSID at bytes [16, 22) of *frame* in canonical text form."""
    cursor = ByteCursor(frame, HARDWARE_ADDRESS_OFFSET)
    return format_hardware_address(cursor.read_bytes(HARDWARE_ADDRESS_LENGTH))
