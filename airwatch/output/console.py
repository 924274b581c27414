"""
Airwatch Console Output
========================

Rich rendering of decoded beacons, stored access points, signal samples
and end-of-run statistics.

References:
    - Rich library: https://github.com/Textualize/rich
    - Cisco. (2024). Wireless LAN Design Guide. Signal Strength
      Recommendations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from rich.markup import escape

from shared.console import AirConsole

from airwatch.core.models import (
    AccessPointRow,
    BeaconRecord,
    EncryptionLevel,
    MonitorStats,
    SignalSample,
)


# ---------------------------------------------------------------------------
# Colour mappings
# ---------------------------------------------------------------------------

_ENCRYPTION_STYLES: dict[EncryptionLevel, str] = {
    EncryptionLevel.OPEN: "air.open",
    EncryptionLevel.WPA: "air.wpa",
    EncryptionLevel.WPA2_WPA3: "air.wpa2",
}

# Lower bound (exclusive) of each bucket, strongest first
_SIGNAL_STYLES: tuple[tuple[int, str], ...] = (
    (-50, "bold bright_green"),
    (-60, "bold green"),
    (-70, "bold yellow"),
    (-80, "bold bright_red"),
)


def _encryption_cell(level: Optional[EncryptionLevel]) -> str:
    if level is None:
        return "[air.dim]-[/air.dim]"
    style = _ENCRYPTION_STYLES[level]
    return f"[{style}]{level.value}[/{style}]"


def _signal_cell(signal_dbm: Optional[int]) -> str:
    if signal_dbm is None:
        return "[air.dim]-[/air.dim]"
    style = "bold red"
    for threshold, candidate in _SIGNAL_STYLES:
        if signal_dbm > threshold:
            style = candidate
            break
    return f"[{style}]{signal_dbm} dBm[/{style}]"


def _optional(value: object) -> str:
    return "-" if value is None else str(value)


def _escape(text: Optional[str]) -> str:
    # SSIDs may contain Rich markup
    if text is None:
        return "-"
    return escape(text)


# ---------------------------------------------------------------------------
# Console Output
# ---------------------------------------------------------------------------


class MonitorConsoleOutput:
    """Console rendering for the monitor, replay and query commands.

    Usage::

        output = MonitorConsoleOutput(AirConsole())
        output.display_record(record)
        output.display_access_points(rows, latest)
    """

    def __init__(self, console: Optional[AirConsole] = None) -> None:
        self._console = console or AirConsole()

    @property
    def console(self) -> AirConsole:
        return self._console

    def display_record(
        self,
        record: BeaconRecord,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Print one decoded beacon as a single line."""
        when = f"[air.dim]{timestamp:%H:%M:%S}[/air.dim] " if timestamp else ""
        channel = _optional(record.channel)
        frequency = (
            f"{record.frequency_mhz} MHz" if record.frequency_mhz is not None else "-"
        )
        self._console.print(
            f"{when}[air.highlight]{record.hardware_address}[/air.highlight] "
            f"{_escape(record.name):<32} ch {channel:>3} {frequency:>8}  "
            f"{_encryption_cell(record.encryption)}  {_signal_cell(record.signal_dbm)}"
        )

    def display_record_detail(self, record: BeaconRecord) -> None:
        """Print every field of a decoded beacon as a two-column table."""
        self._console.table(
            "Beacon",
            ["Field", "Value"],
            [
                ("Hardware address", record.hardware_address),
                ("Name", _escape(record.name)),
                ("Channel", _optional(record.channel)),
                ("Frequency (MHz)", _optional(record.frequency_mhz)),
                ("Encryption", _encryption_cell(record.encryption)),
                ("Signal", _signal_cell(record.signal_dbm)),
            ],
            styles=["air.info", ""],
        )

    def display_access_points(
        self,
        rows: Sequence[AccessPointRow],
        latest: Optional[dict[int, Optional[int]]] = None,
    ) -> None:
        """Table of stored access points with their most recent signal."""
        if not rows:
            self._console.info("No access points stored yet")
            return

        latest = latest or {}
        self._console.table(
            f"Access Points ({len(rows)})",
            ["BSSID", "SSID", "Ch", "MHz", "Encryption", "Vendor", "Signal", "First seen"],
            [
                (
                    row.hardware_address,
                    _escape(row.name),
                    _optional(row.channel),
                    _optional(row.frequency_mhz),
                    _encryption_cell(row.encryption),
                    _optional(row.vendor),
                    _signal_cell(latest.get(row.id)),
                    row.first_seen.strftime("%Y-%m-%d"),
                )
                for row in rows
            ],
            styles=["air.highlight", "", "", "", "", "air.dim", "", "air.dim"],
            no_wrap=["BSSID", "First seen"],
        )

    def display_samples(
        self,
        access_point: AccessPointRow,
        samples: Sequence[SignalSample],
    ) -> None:
        """Table of signal measurements for one access point."""
        title = f"{access_point.hardware_address} ({_escape(access_point.name)})"
        if not samples:
            self._console.info(f"No measurements for {title}")
            return

        self._console.table(
            f"Signal samples: {title}",
            ["Timestamp", "Signal"],
            [
                (sample.timestamp.isoformat(timespec="seconds"), _signal_cell(sample.signal_dbm))
                for sample in samples
            ],
            caption="newest first",
        )

    def display_stats(self, stats: MonitorStats) -> None:
        """Summary table printed at the end of a monitor or replay run."""
        self._console.table(
            "Run Summary",
            ["Metric", "Count"],
            [
                ("Frames seen", stats.frames_seen),
                ("Beacons decoded", stats.beacons),
                ("Records stored", stats.stored),
                ("Other frame types", stats.not_beacons),
                ("Malformed captures", stats.malformed),
                ("Storage failures", stats.storage_errors),
                ("Distinct access points", len(stats.access_points)),
            ],
            styles=["air.info", "air.highlight"],
        )
