"""
Live Capture Channel
=====================

Opens a Scapy :class:`AsyncSniffer` on a monitor-mode interface and
delivers every captured frame, still carrying its capture-metadata
(radiotap) header, to a handler as raw bytes plus a UTC timestamp.

The handler runs on the sniffer thread, one frame at a time. The
coroutine :meth:`LiveCapture.run` only waits for the capture to end
(duration elapsed, frame limit reached or the task cancelled) and then
stops the sniffer.

References:
    - Biondi, P. (2024). Scapy Documentation: Sniffing.
      https://scapy.readthedocs.io/en/latest/usage.html#sniffing
    - Radiotap. https://www.radiotap.org/
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from shared.logger import AirLogger

from airwatch.core.errors import CaptureChannelError

logger = AirLogger("collectors.live")

CaptureHandler = Callable[[bytes, datetime], None]


def packet_bytes(packet: Any) -> bytes:
    """Raw bytes of a captured packet as received from the wire."""
    original = getattr(packet, "original", None)
    return bytes(original) if original else bytes(packet)


def packet_timestamp(packet: Any) -> datetime:
    return datetime.fromtimestamp(float(packet.time), tz=timezone.utc)


class LiveCapture:
    """Capture channel bound to one interface.

    Usage::

        capture = LiveCapture("wlan0mon")
        await capture.run(handler, duration=60)

    Args:
        interface:   Interface to sniff on.
        bpf_filter:  Optional BPF filter expression.
        monitor:     Request monitor mode from Scapy.
        max_frames:  Stop after this many frames (0 = unlimited).
    """

    poll_interval = 0.25

    def __init__(
        self,
        interface: str,
        *,
        bpf_filter: str = "",
        monitor: bool = True,
        max_frames: int = 0,
    ) -> None:
        self.interface = interface
        self.bpf_filter = bpf_filter
        self.monitor = monitor
        self.max_frames = max_frames
        self.frames = 0

    def _deliver(self, handler: CaptureHandler) -> Callable[[Any], None]:
        def prn(packet: Any) -> None:
            self.frames += 1
            handler(packet_bytes(packet), packet_timestamp(packet))

        return prn

    def _limit_reached(self, packet: Any) -> bool:
        return self.max_frames > 0 and self.frames >= self.max_frames

    def _open(self, handler: CaptureHandler) -> Any:
        from scapy.sendrecv import AsyncSniffer  # type: ignore[import-untyped]

        kwargs: dict[str, Any] = {
            "iface": self.interface,
            "prn": self._deliver(handler),
            "store": False,
            "stop_filter": self._limit_reached,
        }
        if self.bpf_filter:
            kwargs["filter"] = self.bpf_filter
        if self.monitor:
            kwargs["monitor"] = True

        sniffer = AsyncSniffer(**kwargs)
        sniffer.start()
        return sniffer

    @staticmethod
    def _alive(sniffer: Any) -> bool:
        thread = getattr(sniffer, "thread", None)
        return thread is not None and thread.is_alive()

    @staticmethod
    def _stop(sniffer: Any) -> Optional[BaseException]:
        """Stop the sniffer and return the error its thread died with, if any.

        Scapy stores a failure raised on the sniffer thread (unknown
        interface, missing privileges) and re-raises it from ``stop()``.
        """
        if sniffer.running:
            try:
                sniffer.stop()
            except Exception as exc:
                return exc
        return getattr(sniffer, "exception", None)

    async def run(self, handler: CaptureHandler, duration: float = 0) -> int:
        """Capture until *duration* seconds pass (0 = until cancelled).

        Returns:
            Number of frames delivered to *handler*.

        Raises:
            CaptureChannelError: If the sniffer cannot be opened or dies.
        """
        self.frames = 0
        sniffer = self._open(handler)
        logger.info(
            "Capture started on %s%s",
            self.interface,
            f" for {duration}s" if duration else "",
        )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + duration if duration > 0 else None
        error: Optional[BaseException] = None
        try:
            while self._alive(sniffer):
                if deadline is not None and loop.time() >= deadline:
                    break
                await asyncio.sleep(self.poll_interval)
        finally:
            error = self._stop(sniffer)
            if error is not None:
                logger.debug("Sniffer on %s reported: %r", self.interface, error)

        if error is not None:
            raise CaptureChannelError(
                f"Capture on {self.interface} failed: {error}"
            ) from error

        logger.info("Capture stopped on %s after %d frames", self.interface, self.frames)
        return self.frames
