"""
Airwatch Console Interface
===========================

Rich-powered console abstraction giving every Airwatch command the same
look: a banner, status-prefixed messages, tables and a spinner.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_AIR_THEME = Theme(
    {
        "air.banner": "bold bright_cyan",
        "air.success": "bold green",
        "air.warning": "bold yellow",
        "air.error": "bold red",
        "air.info": "bold bright_blue",
        "air.dim": "dim white",
        "air.highlight": "bold bright_white",
        "air.open": "bold red",
        "air.wpa": "bold yellow",
        "air.wpa2": "bold green",
    }
)

_BANNER_ART = r"""[bright_cyan]
    _    _                    _       _
   / \  (_)_ ____      ____ _| |_ ___| |__
  / _ \ | | '__\ \ /\ / / _` | __/ __| '_ \
 / ___ \| | |   \ V  V / (_| | || (__| | | |
/_/   \_\_|_|    \_/\_/ \__,_|\__\___|_| |_|
[/bright_cyan]"""

_TAGLINE = "Passive 802.11 Beacon Monitor"


class AirConsole:
    """Unified console interface for Airwatch commands.

    Usage::

        con = AirConsole()
        con.banner()
        con.success("Replay complete")
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        width: int | None = None,
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library and test use).
            record: Keep a record of output for later export.
            width:  Fixed console width; detected from the terminal if None.
        """
        self._console = Console(
            theme=_AIR_THEME,
            quiet=quiet,
            record=record,
            width=width,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """The underlying :class:`rich.console.Console`."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[air.highlight]{_TAGLINE}[/air.highlight]\n"
            f"[air.dim]Version: {version}  |  {now}[/air.dim]"
        )
        self._console.print(
            Panel(
                Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
                border_style="bright_cyan",
                padding=(1, 2),
            )
        )

    # ------------------------------------------------------------------ #
    #  Status-prefixed messages
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[air.success][✔] SUCCESS:[/air.success] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[air.warning][⚠] WARNING:[/air.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[air.error][✘] ERROR:[/air.error] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[air.info][ℹ] INFO:[/air.info] {message}")

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
        no_wrap: Sequence[str] = (),
    ) -> None:
        """Render a styled table.

        Args:
            title:   Table title.
            columns: Column header labels.
            rows:    Row tuples; cells are stringified, Rich markup allowed.
            caption: Optional footer caption.
            styles:  Optional per-column Rich styles.
            no_wrap: Column names whose cells are never wrapped or
                     shortened; other columns give up width first.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style, no_wrap=col_name in no_wrap)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Show a spinner with *message* while the block runs."""
        with self._console.status(
            f"[air.info]{message}[/air.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)
