"""
Airwatch CLI
=============

Click-based command-line interface for the Airwatch beacon monitor.

Commands:
    airwatch monitor [--interface IFACE | --adapter KEYWORD]   Live capture
    airwatch replay PCAP_FILE                                  Replay a capture file
    airwatch decode HEX                                        Decode one capture
    airwatch aps                                               Stored access points
    airwatch samples BSSID                                     Signal history

Global options:
    --config PATH       TOML configuration file
    --quiet             Suppress console output
    --verbose           Debug logging

References:
    - Click Documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import string
import sys
from typing import NoReturn, Optional

import click

from shared.config import AirConfig, ConfigError
from shared.console import AirConsole
from shared.logger import configure_logging

from airwatch import __version__


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run a coroutine to completion from a synchronous Click command."""
    return asyncio.run(coro)


def _parse_hex(text: str) -> bytes:
    """Parse hex text, ignoring whitespace, colons and dashes."""
    cleaned = "".join(ch for ch in text if ch not in string.whitespace + ":-")
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise click.BadParameter(f"not valid hex: {exc}", param_hint="HEX") from exc


def _open_store(ctx: click.Context, db_path: Optional[str]):
    from airwatch.storage.database import AccessPointStore

    config: AirConfig = ctx.obj["config"]
    store = AccessPointStore(db_path or config.storage.db_path)
    store.create_tables()
    return store


def _fail(console: AirConsole, message: str, code: int = 1) -> NoReturn:
    console.error(message)
    sys.exit(code)


_db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="SQLite database path (overrides storage.db_path).",
)


# ---------------------------------------------------------------------------
# CLI Group
# ---------------------------------------------------------------------------


@click.group(
    name="airwatch",
    help=(
        "AIRWATCH - Passive 802.11 Beacon Monitor\n\n"
        "Decodes beacon frames from a monitor-mode interface or a capture "
        "file and records every access point with its signal history."
    ),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to Airwatch configuration file (TOML).",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress console output.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.version_option(__version__, prog_name="airwatch")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """Airwatch beacon monitor - main CLI entry point."""
    ctx.ensure_object(dict)

    try:
        config = AirConfig.load(config_path)
    except (FileNotFoundError, ConfigError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    settings = config.global_settings
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
        console_output=not quiet,
    )

    ctx.obj["config"] = config
    ctx.obj["console"] = AirConsole(quiet=quiet)
    ctx.obj["quiet"] = quiet


# ---------------------------------------------------------------------------
# Monitor Command
# ---------------------------------------------------------------------------


@cli.command(
    name="monitor",
    help=(
        "Capture beacons live.\n\n"
        "Sniffs on a monitor-mode interface, decodes every beacon and "
        "stores the access point and its signal sample. Without "
        "--interface the adapter is looked up by description keyword. "
        "Runs until --duration elapses or Ctrl-C."
    ),
)
@click.option(
    "--interface", "-i",
    type=str,
    default=None,
    help="Interface name (e.g. wlan0mon).",
)
@click.option(
    "--adapter", "-a",
    type=str,
    default=None,
    help="Adapter description keyword (default from config).",
)
@click.option(
    "--duration", "-d",
    type=click.FloatRange(min=0),
    default=None,
    help="Capture duration in seconds; 0 runs until interrupted.",
)
@_db_option
@click.pass_context
def monitor(
    ctx: click.Context,
    interface: Optional[str],
    adapter: Optional[str],
    duration: Optional[float],
    db_path: Optional[str],
) -> None:
    """Run the live decode-and-store loop."""
    from airwatch.core.engine import MonitorEngine
    from airwatch.core.errors import AirwatchError
    from airwatch.output.console import MonitorConsoleOutput

    config: AirConfig = ctx.obj["config"]
    console: AirConsole = ctx.obj["console"]
    output = MonitorConsoleOutput(console)

    console.banner(__version__)
    try:
        store = _open_store(ctx, db_path)
    except AirwatchError as exc:
        _fail(console, str(exc))

    engine = MonitorEngine(store, config=config, output=output)
    try:
        _run_async(engine.monitor(interface=interface, adapter=adapter, duration=duration))
    except KeyboardInterrupt:
        console.warning("Capture interrupted")
    except AirwatchError as exc:
        _fail(console, str(exc))
    finally:
        store.close()

    output.display_stats(engine.stats)


# ---------------------------------------------------------------------------
# Replay Command
# ---------------------------------------------------------------------------


@cli.command(
    name="replay",
    help=(
        "Replay a capture file.\n\n"
        "Feeds every frame of a PCAP/PCAPNG file with radiotap headers "
        "through the same decode-and-store loop as live monitoring, "
        "using the timestamps recorded in the file."
    ),
)
@click.argument(
    "pcap_file",
    type=click.Path(exists=True, dir_okay=False),
)
@_db_option
@click.pass_context
def replay(ctx: click.Context, pcap_file: str, db_path: Optional[str]) -> None:
    """Replay a stored capture into the database."""
    from airwatch.core.engine import MonitorEngine
    from airwatch.core.errors import AirwatchError
    from airwatch.output.console import MonitorConsoleOutput

    config: AirConfig = ctx.obj["config"]
    console: AirConsole = ctx.obj["console"]
    output = MonitorConsoleOutput(console)

    try:
        store = _open_store(ctx, db_path)
    except AirwatchError as exc:
        _fail(console, str(exc))

    engine = MonitorEngine(store, config=config, output=output)
    try:
        with console.status(f"Replaying {pcap_file}..."):
            engine.replay(pcap_file)
    except (AirwatchError, OSError) as exc:
        _fail(console, str(exc))
    finally:
        store.close()

    output.display_stats(engine.stats)
    console.success(f"Replay of {pcap_file} complete")


# ---------------------------------------------------------------------------
# Decode Command
# ---------------------------------------------------------------------------


@cli.command(
    name="decode",
    help=(
        "Decode a single capture given as hex.\n\n"
        "HEX is the capture-metadata header followed by the 802.11 frame. "
        "Whitespace, colons and dashes are ignored. Exits 1 when the "
        "capture is malformed."
    ),
)
@click.argument("hex_data", metavar="HEX")
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Print the record as JSON.",
)
@click.pass_context
def decode(ctx: click.Context, hex_data: str, as_json: bool) -> None:
    """Decode one capture and print the resulting record."""
    from airwatch.core.errors import MalformedCapture
    from airwatch.decoder import decode_capture
    from airwatch.output.console import MonitorConsoleOutput

    console: AirConsole = ctx.obj["console"]
    raw = _parse_hex(hex_data)

    try:
        record = decode_capture(raw)
    except MalformedCapture as exc:
        _fail(console, f"Malformed capture: {exc}")

    if record is None:
        console.info("Not a beacon frame")
        return

    if as_json:
        click.echo(record.model_dump_json())
    else:
        MonitorConsoleOutput(console).display_record_detail(record)


# ---------------------------------------------------------------------------
# Query Commands
# ---------------------------------------------------------------------------


@cli.command(
    name="aps",
    help="List stored access points with their latest signal.",
)
@click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Maximum number of access points.",
)
@_db_option
@click.pass_context
def list_aps(ctx: click.Context, limit: int, db_path: Optional[str]) -> None:
    """Show the access point table."""
    from airwatch.core.errors import AirwatchError
    from airwatch.output.console import MonitorConsoleOutput

    console: AirConsole = ctx.obj["console"]
    try:
        store = _open_store(ctx, db_path)
        try:
            rows = store.list_access_points(limit=limit)
            latest = {row.id: store.latest_signal(row.id) for row in rows}
        finally:
            store.close()
    except AirwatchError as exc:
        _fail(console, str(exc))

    MonitorConsoleOutput(console).display_access_points(rows, latest)


@cli.command(
    name="samples",
    help="Show recent signal measurements for one access point.",
)
@click.argument("bssid")
@click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=50,
    show_default=True,
    help="Maximum number of samples.",
)
@_db_option
@click.pass_context
def list_samples(
    ctx: click.Context,
    bssid: str,
    limit: int,
    db_path: Optional[str],
) -> None:
    """Show the signal history of BSSID."""
    from airwatch.core.errors import AirwatchError
    from airwatch.output.console import MonitorConsoleOutput

    console: AirConsole = ctx.obj["console"]
    try:
        store = _open_store(ctx, db_path)
        try:
            access_point = store.get_access_point(bssid)
            samples = (
                store.get_samples(access_point.id, limit=limit)
                if access_point is not None
                else []
            )
        finally:
            store.close()
    except AirwatchError as exc:
        _fail(console, str(exc))

    if access_point is None:
        _fail(console, f"Unknown access point: {bssid}")

    MonitorConsoleOutput(console).display_samples(access_point, samples)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the Airwatch CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
