"""
Capture Splitter
=================

Separates the capture-metadata (radiotap) header from the raw 802.11
frame and pulls out the signal sample.

Header fields read (all offsets from the start of the capture)::

    0       1       2       4                8
    +-------+-------+-------+----- ... ------+--------+
    | ver   | pad   | len   |  present, ...  | signal |
    +-------+-------+-------+----- ... ------+--------+
                     u16 LE                    i8 dBm

The signal byte is read at the fixed offset 8 whatever the header's
present-flags announce.

Reference:
    - Radiotap header definition. https://www.radiotap.org/
"""

from __future__ import annotations

from airwatch.core.errors import MalformedCapture
from airwatch.core.models import (
    METADATA_LENGTH_OFFSET,
    MIN_CAPTURE_LENGTH,
    SIGNAL_OFFSET,
    Buffer,
    CaptureSplit,
)
from airwatch.decoder.cursor import ByteCursor


def split_capture(raw: Buffer) -> CaptureSplit:
    """Split a raw capture into header length, signal sample and frame view.

    Args:
        raw: Capture buffer as delivered by the capture layer.

    Returns:
        :class:`CaptureSplit` whose ``frame`` is a view starting at the
        declared metadata length.

    Raises:
        MalformedCapture: If the buffer is shorter than 9 bytes (length
            field or signal byte unreadable) or the declared metadata
            length exceeds the buffer length.
    """
    view = memoryview(raw)
    length = len(view)

    if length < MIN_CAPTURE_LENGTH:
        raise MalformedCapture(
            f"Capture too short for metadata header: {length} bytes",
            length=length,
        )

    cursor = ByteCursor(view, METADATA_LENGTH_OFFSET)
    metadata_length = cursor.read_u16_le()
    cursor.skip(SIGNAL_OFFSET - cursor.offset)
    signal_dbm = cursor.read_i8()

    if metadata_length > length:
        raise MalformedCapture(
            f"Declared metadata length {metadata_length} exceeds "
            f"capture length {length}",
            length=length,
        )

    return CaptureSplit(
        metadata_length=metadata_length,
        signal_dbm=signal_dbm,
        frame=view[metadata_length:],
    )
