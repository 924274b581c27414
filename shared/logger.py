"""
Airwatch Structured Logger
===========================

Provides :class:`AirLogger`, the logging facade used by every Airwatch
component. Records go to a Rich console handler on stderr and, when a log
file is configured, to a rotating file in either plain text or JSON lines.

Each logger lives under the ``airwatch.`` namespace of the stdlib
:mod:`logging` tree and carries two context fields in every record:
``component`` (fixed per logger) and ``operation`` (scoped with
:meth:`AirLogger.operation`).

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_NAMESPACE = "airwatch"

# Every AirLogger ever created, so configure_logging() can re-apply settings
_REGISTRY: dict[str, "AirLogger"] = {}

# Process-wide defaults applied to loggers created after configure_logging()
_DEFAULTS: dict[str, Any] = {
    "log_level": "INFO",
    "log_file": None,
    "json_logs": False,
    "console_output": True,
}


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Output fields::

        {
          "timestamp": "2026-01-01T00:00:00+00:00",
          "level": "INFO",
          "logger": "airwatch.engine",
          "message": "...",
          "component": "engine",
          "operation": "replay",
          "extra": {"bssid": "11:22:33:44:55:66"}
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("component", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "air_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class _ConsoleHandler(RichHandler):
    """RichHandler bound to a themed stderr console."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            console=Console(theme=_LOG_THEME, stderr=True),
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


# ========================== AirLogger ======================================


class AirLogger:
    """Context-aware logger bound to one Airwatch component.

    Usage::

        log = AirLogger("engine")
        log.info("Capture started on %s", iface)
        with log.operation("replay"):
            log.debug("Frame skipped", reason="malformed")

    Keyword arguments that are not standard :mod:`logging` arguments are
    collected into the record's ``extra`` payload (visible in JSON logs).

    Args:
        component:      Component name, appended to the ``airwatch.`` namespace.
        log_level:      Minimum severity. Defaults to the process-wide level.
        log_file:       Rotating log file path; ``None`` disables file logging.
        json_logs:      Emit JSON lines to the file handler.
        max_bytes:      Rotation threshold (default 10 MiB).
        backup_count:   Rotated files kept.
        console_output: Attach the Rich console handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str | None = None,
        log_file: str | Path | None = None,
        json_logs: bool | None = None,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool | None = None,
    ) -> None:
        self._component = component
        self._operation: str | None = None
        self._max_bytes = max_bytes
        self._backup_count = backup_count

        self._logger = logging.getLogger(f"{_NAMESPACE}.{component}")
        self._logger.propagate = False

        self.configure(
            log_level=log_level or _DEFAULTS["log_level"],
            log_file=log_file if log_file is not None else _DEFAULTS["log_file"],
            json_logs=_DEFAULTS["json_logs"] if json_logs is None else json_logs,
            console_output=(
                _DEFAULTS["console_output"]
                if console_output is None
                else console_output
            ),
        )
        _REGISTRY[component] = self

    def configure(
        self,
        *,
        log_level: str,
        log_file: str | Path | None,
        json_logs: bool,
        console_output: bool,
    ) -> None:
        """Replace this logger's handlers with freshly configured ones."""
        level = _level(log_level)
        self._logger.setLevel(level)

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_output:
            self._logger.addHandler(_ConsoleHandler(level=level))

        if log_file:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=self._max_bytes,
                backupCount=self._backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    # ------------------------------------------------------------------ #
    #  Operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        def __init__(self, parent: AirLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> AirLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Bind ``operation=<name>`` to every record logged inside the block."""
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        extra = kwargs.pop("extra", {}) or {}

        payload: dict[str, Any] = {}
        for key in list(kwargs):
            if key not in ("exc_info", "stack_info", "stacklevel"):
                payload[key] = kwargs.pop(key)

        extra["component"] = self._component
        extra["operation"] = self._operation
        if payload:
            extra["air_extra"] = payload

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **self._enrich(kwargs))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **self._enrich(kwargs))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **self._enrich(kwargs))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **self._enrich(kwargs))

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        def __init__(self, parent: AirLogger, label: str) -> None:
            self._parent = parent
            self._label = label
            self._start = 0.0

        def __enter__(self) -> AirLogger._TimingContext:
            self._start = time.perf_counter()
            self._parent.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._parent.info(
                "Completed: %s (%.3f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Log start and completion of a block along with its duration."""
        return self._TimingContext(self, label)


def configure_logging(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    json_logs: bool = False,
    console_output: bool = True,
) -> None:
    """Apply process-wide logging settings.

    Updates the defaults used by loggers created later and reconfigures
    every logger created so far (module-level loggers are instantiated at
    import time, before the CLI has read its configuration).
    """
    _DEFAULTS.update(
        log_level=log_level,
        log_file=log_file or None,
        json_logs=json_logs,
        console_output=console_output,
    )
    for air_logger in _REGISTRY.values():
        air_logger.configure(
            log_level=log_level,
            log_file=log_file or None,
            json_logs=json_logs,
            console_output=console_output,
        )
