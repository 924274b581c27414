"""Airwatch core: domain models and error taxonomy."""

from airwatch.core.errors import (
    AdapterNotFound,
    AirwatchError,
    CaptureChannelError,
    ConfigError,
    MalformedCapture,
    StorageError,
)
from airwatch.core.models import (
    AccessPointRow,
    BeaconRecord,
    ElementId,
    EncryptionLevel,
    FrameKind,
    MonitorStats,
    SignalSample,
)

__all__ = [
    "AccessPointRow",
    "AdapterNotFound",
    "AirwatchError",
    "BeaconRecord",
    "CaptureChannelError",
    "ConfigError",
    "ElementId",
    "EncryptionLevel",
    "FrameKind",
    "MalformedCapture",
    "MonitorStats",
    "SignalSample",
    "StorageError",
]
