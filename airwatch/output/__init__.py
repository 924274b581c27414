"""Airwatch console output."""

from airwatch.output.console import MonitorConsoleOutput

__all__ = ["MonitorConsoleOutput"]
