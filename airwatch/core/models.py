"""
Airwatch Core Data Models
==========================

Domain types for the beacon decoder and its persistence collaborator.

Decoder-internal views (:class:`CaptureSplit`, :class:`InformationElement`)
are slotted frozen dataclasses holding ``memoryview`` slices of the
capture buffer, so nothing is copied while a frame is walked. Records
that leave the decoder (:class:`BeaconRecord`) and rows read back from
storage are pydantic models.

References:
    - IEEE. (2020). IEEE Std 802.11-2020: Wireless LAN Medium Access Control
      (MAC) and Physical Layer (PHY) Specifications. Section 9.3.3.2
      (Beacon frame format) and 9.4.2 (Elements).
    - Radiotap. https://www.radiotap.org/
    - Pydantic v2 Documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: First byte of a management frame of subtype Beacon (type 0, subtype 8)
BEACON_FRAME_CONTROL = 0x80

#: Offset of the BSSID (address 3) inside the 802.11 header
HARDWARE_ADDRESS_OFFSET = 16
HARDWARE_ADDRESS_LENGTH = 6
MIN_FRAME_LENGTH = HARDWARE_ADDRESS_OFFSET + HARDWARE_ADDRESS_LENGTH

#: 24-byte MAC header + timestamp(8) + beacon interval(2) + capability(2)
ELEMENTS_OFFSET = 36

#: Capture-metadata (radiotap) header field offsets
METADATA_LENGTH_OFFSET = 2
SIGNAL_OFFSET = 8
MIN_CAPTURE_LENGTH = SIGNAL_OFFSET + 1

#: Microsoft OUI 00:50:F2 followed by vendor type 1 (WPA)
WPA_OUI_TYPE = b"\x00\x50\xf2\x01"

NAME_UNKNOWN = "Unknown"
NAME_HIDDEN = "<Hidden>"

Buffer = Union[bytes, bytearray, memoryview]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ElementId(enum.IntEnum):
    """Information element identifiers the aggregator acts upon.

    Reference:
        IEEE. (2020). IEEE Std 802.11-2020. Table 9-92: Element IDs.
    """

    SSID = 0
    DS_PARAMETER_SET = 3
    RSN = 48
    VENDOR_SPECIFIC = 221


class EncryptionLevel(str, enum.Enum):
    """Inferred protection level of a network, ordered weakest first.

    Members compare by protection strength (``OPEN < WPA < WPA2_WPA3``),
    not by their text value. The value is the text persisted to storage.
    """

    OPEN = "Open"
    WPA = "WPA"
    WPA2_WPA3 = "WPA2/WPA3"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EncryptionLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, EncryptionLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, EncryptionLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, EncryptionLevel):
            return NotImplemented
        return self.rank >= other.rank


class FrameKind(str, enum.Enum):
    """Outcome of frame classification."""

    BEACON = "beacon"
    NOT_A_BEACON = "not_a_beacon"


# ---------------------------------------------------------------------------
# Decoder views
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CaptureSplit:
    """A capture separated into its metadata header and the radio frame.

    Attributes:
        metadata_length: Declared length of the capture-metadata header.
        signal_dbm: Signal byte at offset 8 read as signed 8-bit.
        frame: View of the 802.11 frame following the header.
    """

    metadata_length: int
    signal_dbm: int
    frame: memoryview


@dataclass(frozen=True, slots=True)
class InformationElement:
    """One tag-length-value element from a management frame body."""

    id: int
    length: int
    payload: memoryview

    def startswith(self, prefix: bytes) -> bool:
        return bytes(self.payload[: len(prefix)]) == prefix


@dataclass(frozen=True, slots=True)
class BeaconAttributes:
    """Attributes folded from a frame's element sequence."""

    name: str
    channel: Optional[int]
    encryption: EncryptionLevel


# ---------------------------------------------------------------------------
# Decoder output
# ---------------------------------------------------------------------------


class BeaconRecord(BaseModel):
    """Identity, radio attributes and signal sample of one beacon frame.

    Created once per valid frame and handed straight to the persistence
    collaborator.

    Attributes:
        hardware_address: BSSID as ``"AA:BB:CC:00:11:22"``.
        name: SSID, ``"<Hidden>"`` when suppressed, ``"Unknown"`` when absent.
        channel: Channel from the DS Parameter Set element, if present.
        frequency_mhz: Centre frequency for the channel, if mapped.
        encryption: Inferred encryption level.
        signal_dbm: Signal strength sample in dBm.
    """

    model_config = ConfigDict(frozen=True)

    hardware_address: str = Field(pattern=r"^([0-9A-F]{2}:){5}[0-9A-F]{2}$")
    name: str = NAME_UNKNOWN
    channel: Optional[int] = Field(default=None, ge=0, le=255)
    frequency_mhz: Optional[int] = None
    encryption: EncryptionLevel = EncryptionLevel.OPEN
    signal_dbm: int = Field(ge=-128, le=127)

    @property
    def hidden(self) -> bool:
        return self.name == NAME_HIDDEN


# ---------------------------------------------------------------------------
# Persistence rows
# ---------------------------------------------------------------------------


class AccessPointRow(BaseModel):
    """An access point as stored by :class:`~airwatch.storage.AccessPointStore`."""

    id: int
    hardware_address: str
    name: Optional[str] = None
    channel: Optional[int] = None
    frequency_mhz: Optional[int] = None
    encryption: Optional[EncryptionLevel] = None
    vendor: Optional[str] = None
    first_seen: datetime


class SignalSample(BaseModel):
    """One stored signal measurement."""

    id: int
    access_point_id: int
    timestamp: datetime
    signal_dbm: int


# ---------------------------------------------------------------------------
# Monitoring statistics
# ---------------------------------------------------------------------------


class MonitorStats(BaseModel):
    """Per-run counters kept by :class:`~airwatch.core.engine.MonitorEngine`.

    Attributes:
        frames_seen: Raw captures handed to the decoder.
        beacons: Beacon records decoded.
        stored: Records persisted successfully.
        not_beacons: Valid captures of another frame type.
        malformed: Captures rejected as malformed.
        storage_errors: Records the store failed to persist.
        access_points: Distinct hardware addresses seen this run.
    """

    frames_seen: int = 0
    beacons: int = 0
    stored: int = 0
    not_beacons: int = 0
    malformed: int = 0
    storage_errors: int = 0
    access_points: set[str] = Field(default_factory=set)
