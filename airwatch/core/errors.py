"""
Airwatch Error Taxonomy
========================

Frame-scoped errors (:class:`MalformedCapture`) are caught by the
monitoring loop and the frame is skipped. Setup errors
(:class:`AdapterNotFound`, :class:`CaptureChannelError`) end the command.
:class:`StorageError` is reported per frame and the loop continues.

A frame that is not a beacon is *not* an error: the classifier returns
:attr:`~airwatch.core.models.FrameKind.NOT_A_BEACON` and the decoder
returns ``None``.
"""

from __future__ import annotations

from shared.config import ConfigError


class AirwatchError(Exception):
    """Base class for all Airwatch errors."""


class MalformedCapture(AirwatchError, ValueError):
    """Capture buffer too short for its header fields or internally inconsistent.

    Attributes:
        length: Length of the offending buffer in bytes.
    """

    def __init__(self, message: str, length: int | None = None) -> None:
        super().__init__(message)
        self.length = length


class StorageError(AirwatchError):
    """Persistence collaborator failed to store or read a record."""


class AdapterNotFound(AirwatchError):
    """No network interface description matches the configured keyword."""

    def __init__(self, keyword: str) -> None:
        super().__init__(f"Network adapter not found: {keyword}")
        self.keyword = keyword


class CaptureChannelError(AirwatchError):
    """The capture channel on an interface could not be opened."""


__all__ = [
    "AirwatchError",
    "MalformedCapture",
    "StorageError",
    "AdapterNotFound",
    "CaptureChannelError",
    "ConfigError",
]
