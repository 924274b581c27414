"""
Airwatch Monitor Engine
========================

Outer read loop around the beacon decoder. Captures arrive from a live
sniffer or a PCAP replay; each one is decoded, persisted, optionally
printed, and counted, before the next one is handled.

Failures are isolated per frame:
    - ``MalformedCapture``: logged at debug level, counted, skipped.
    - Non-beacon frames: counted and silently discarded.
    - ``StorageError``: logged as an error, counted, the loop continues.

Setup failures (``AdapterNotFound``, ``CaptureChannelError``, a missing
capture file) propagate to the caller.

References:
    - IEEE. (2020). IEEE Std 802.11-2020: Wireless LAN MAC and PHY
      Specifications.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Union

from shared.config import AirConfig
from shared.logger import AirLogger

from airwatch.core.errors import MalformedCapture, StorageError
from airwatch.core.models import BeaconRecord, Buffer, MonitorStats
from airwatch.collectors.interfaces import find_interface
from airwatch.collectors.live_capture import LiveCapture
from airwatch.collectors.pcap_replay import PcapReplay
from airwatch.decoder import decode_capture
from airwatch.output.console import MonitorConsoleOutput
from airwatch.storage.database import AccessPointStore

logger = AirLogger("engine")


class MonitorEngine:
    """Decode-and-persist loop shared by live monitoring and replay.

    Usage::

        store = AccessPointStore("wifi_data.db")
        store.create_tables()
        engine = MonitorEngine(store)
        stats = engine.replay("capture.pcap")
        stats = await engine.monitor(adapter="AR956x", duration=60)
    """

    def __init__(
        self,
        store: AccessPointStore,
        *,
        config: Optional[AirConfig] = None,
        output: Optional[MonitorConsoleOutput] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            store: Persistence collaborator receiving every beacon.
            config: Airwatch configuration. Uses defaults if None.
            output: Console renderer for decoded records. Nothing is
                printed if None.
        """
        self._store = store
        self._config = config or AirConfig()
        self._output = output
        self._stats = MonitorStats()

    @property
    def stats(self) -> MonitorStats:
        return self._stats

    # ------------------------------------------------------------------ #
    #  Per-frame processing
    # ------------------------------------------------------------------ #

    def process_capture(
        self,
        raw: Buffer,
        timestamp: Optional[datetime] = None,
    ) -> Optional[BeaconRecord]:
        """Decode one capture and hand the record to the store.

        Args:
            raw: Capture-metadata header followed by the 802.11 frame.
            timestamp: Capture time; defaults to now (UTC).

        Returns:
            The decoded record, or ``None`` if the capture was malformed
            or not a beacon.
        """
        self._stats.frames_seen += 1

        try:
            record = decode_capture(raw)
        except MalformedCapture as exc:
            self._stats.malformed += 1
            logger.debug("Skipping malformed capture: %s", exc, length=len(raw))
            return None

        if record is None:
            self._stats.not_beacons += 1
            return None

        self._stats.beacons += 1
        self._stats.access_points.add(record.hardware_address)
        when = timestamp or datetime.now(timezone.utc)

        try:
            self.persist(record, when)
        except StorageError as exc:
            self._stats.storage_errors += 1
            logger.error(
                "Failed to store beacon from %s: %s",
                record.hardware_address,
                exc,
            )
        else:
            self._stats.stored += 1

        if self._output is not None and self._config.output.print_records:
            self._output.display_record(record, when)

        return record

    def persist(self, record: BeaconRecord, timestamp: datetime) -> int:
        """Upsert the access point and append its signal sample.

        Returns:
            The access point id.
        """
        ap_id = self._store.resolve_access_point(
            record.hardware_address,
            record.name,
            record.channel,
            record.frequency_mhz,
            record.encryption,
            first_seen=timestamp,
        )
        self._store.record_sample(ap_id, timestamp, record.signal_dbm)
        return ap_id

    # ------------------------------------------------------------------ #
    #  Sources
    # ------------------------------------------------------------------ #

    def run(self, captures: Iterable[tuple[Buffer, Optional[datetime]]]) -> MonitorStats:
        """Process ``(raw, timestamp)`` pairs in order until exhausted.

        Stops early once ``capture.max_frames`` frames have been seen
        (0 = no limit).
        """
        limit = self._config.capture.max_frames
        for raw, timestamp in captures:
            self.process_capture(raw, timestamp)
            if limit and self._stats.frames_seen >= limit:
                logger.info("Frame limit reached (%d)", limit)
                break
        return self._stats

    def replay(self, path: Union[str, Path]) -> MonitorStats:
        """Feed a stored capture file through the loop.

        Raises:
            FileNotFoundError: If *path* does not exist.
        """
        with logger.operation("replay"), logger.timed(f"replay {path}"):
            self.run(PcapReplay(path))
        logger.info(
            "Replay finished: %d frames, %d beacons stored",
            self._stats.frames_seen,
            self._stats.stored,
        )
        return self._stats

    def resolve_interface(
        self,
        interface: Optional[str] = None,
        adapter: Optional[str] = None,
    ) -> str:
        """Pick the capture interface.

        An explicit interface name wins, then the configured one; failing
        both, the adapter keyword (argument or configured default) is
        looked up among the host's interfaces.

        Raises:
            AdapterNotFound: If the keyword matches no interface.
        """
        capture = self._config.capture
        if interface:
            return interface
        if capture.interface and not adapter:
            return capture.interface
        return find_interface(adapter or capture.adapter_keyword)

    async def monitor(
        self,
        interface: Optional[str] = None,
        adapter: Optional[str] = None,
        duration: Optional[float] = None,
    ) -> MonitorStats:
        """Capture live beacons until *duration* elapses or the task is cancelled.

        Args:
            interface: Interface name; overrides adapter lookup.
            adapter: Adapter description keyword.
            duration: Seconds to capture; 0 runs until cancelled. Defaults
                to ``capture.duration`` from the configuration.

        Raises:
            AdapterNotFound: If the adapter cannot be resolved.
            CaptureChannelError: If the sniffer cannot be opened.
        """
        capture = self._config.capture
        name = self.resolve_interface(interface, adapter)
        live = LiveCapture(
            name,
            bpf_filter=capture.bpf_filter,
            monitor=capture.monitor_mode,
            max_frames=capture.max_frames,
        )
        with logger.operation("monitor"):
            await live.run(
                self.process_capture,
                duration=capture.duration if duration is None else duration,
            )
        return self._stats
