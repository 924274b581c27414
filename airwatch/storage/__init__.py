"""Airwatch persistence."""

from airwatch.storage.database import AccessPointStore

__all__ = ["AccessPointStore"]
