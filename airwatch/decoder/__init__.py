"""
Airwatch Beacon Decoder
========================

Pure, synchronous decoding of a single capture into a
:class:`~airwatch.core.models.BeaconRecord`::

    raw capture
      -> split_capture        (metadata length, signal, frame view)
      -> classify_frame       (beacon or not)
      -> extract_hardware_address + walk_elements
      -> aggregate_elements   (name, channel, encryption)
      -> channel_to_frequency
      -> BeaconRecord

The decoder holds no state between calls and performs no I/O, so it can
be called from any thread on independent buffers.

Modules:
    - ``cursor``     -- bounds-checked byte cursor
    - ``capture``    -- capture-metadata header splitter
    - ``frame``      -- frame classifier and BSSID extractor
    - ``elements``   -- information element walker
    - ``aggregator`` -- element folding and precedence rules
    - ``frequency``  -- channel to frequency mapping
"""

from __future__ import annotations

from typing import Optional

from airwatch.core.models import Buffer, BeaconRecord, FrameKind
from airwatch.decoder.aggregator import (
    AttributeAggregator,
    aggregate_elements,
    force_encryption,
    merge_encryption,
)
from airwatch.decoder.capture import split_capture
from airwatch.decoder.cursor import ByteCursor, CursorOverrun
from airwatch.decoder.elements import walk_elements
from airwatch.decoder.frame import (
    classify_frame,
    extract_hardware_address,
    format_hardware_address,
)
from airwatch.decoder.frequency import channel_to_frequency


def decode_capture(raw: Buffer) -> Optional[BeaconRecord]:
    """Decode one capture into a beacon record.

    Args:
        raw: Capture-metadata header followed by a raw 802.11 frame.

    Returns:
        The decoded :class:`BeaconRecord`, or ``None`` when the capture
        is valid but holds a frame other than a Beacon.

    Raises:
        MalformedCapture: If the header or frame is too short, or the
            declared header length exceeds the buffer.
    """
    split = split_capture(raw)
    frame = split.frame

    if classify_frame(frame) is FrameKind.NOT_A_BEACON:
        return None

    hardware_address = extract_hardware_address(frame)
    attributes = aggregate_elements(walk_elements(frame))

    return BeaconRecord(
        hardware_address=hardware_address,
        name=attributes.name,
        channel=attributes.channel,
        frequency_mhz=channel_to_frequency(attributes.channel),
        encryption=attributes.encryption,
        signal_dbm=split.signal_dbm,
    )


__all__ = [
    "AttributeAggregator",
    "ByteCursor",
    "CursorOverrun",
    "aggregate_elements",
    "channel_to_frequency",
    "classify_frame",
    "decode_capture",
    "extract_hardware_address",
    "force_encryption",
    "format_hardware_address",
    "merge_encryption",
    "split_capture",
    "walk_elements",
]
