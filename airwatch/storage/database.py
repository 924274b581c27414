"""
Airwatch Access Point Store
============================

SQLite3-backed persistence for decoded beacons. Access points are keyed
by their unique hardware address; each decoded beacon appends one signal
measurement referencing its access point.

Schema::

    access_points(id, bssid UNIQUE, ssid, channel, frequency_mhz,
                  encryption, vendor, first_seen)
    measurements(id, ap_id -> access_points.id, timestamp, rssi_dbm)

Timestamps are stored as ISO-8601 UTC text.

References:
    - SQLite Documentation. https://www.sqlite.org/docs.html
    - Python sqlite3 module. https://docs.python.org/3/library/sqlite3.html
"""

from __future__ import annotations

import sqlite3
from contextlib import suppress
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from shared.logger import AirLogger

from airwatch.core.errors import StorageError
from airwatch.core.models import AccessPointRow, EncryptionLevel, SignalSample
from airwatch.core.vendors import lookup_vendor

logger = AirLogger("storage")

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS access_points (
        id            INTEGER PRIMARY KEY,
        bssid         TEXT NOT NULL UNIQUE,
        ssid          TEXT,
        channel       INTEGER,
        frequency_mhz INTEGER,
        encryption    TEXT,
        vendor        TEXT,
        first_seen    DATETIME NOT NULL
    );

    CREATE TABLE IF NOT EXISTS measurements (
        id        INTEGER PRIMARY KEY,
        ap_id     INTEGER NOT NULL,
        timestamp DATETIME NOT NULL,
        rssi_dbm  INTEGER NOT NULL,
        FOREIGN KEY (ap_id) REFERENCES access_points (id)
    );

    CREATE INDEX IF NOT EXISTS idx_measurement_time ON measurements (timestamp);
    CREATE INDEX IF NOT EXISTS idx_measurement_ap ON measurements (ap_id);
"""


def _utc_iso(value: Optional[datetime]) -> str:
    if value is None:
        value = datetime.now(timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class AccessPointStore:
    """SQLite store for access points and their signal measurements.

    Usage::

        store = AccessPointStore("wifi_data.db")
        store.create_tables()
        ap_id = store.resolve_access_point(
            "11:22:33:44:55:66", "home", 6, 2437, EncryptionLevel.WPA2_WPA3
        )
        store.record_sample(ap_id, datetime.now(timezone.utc), -50)

    Every public method raises :class:`~airwatch.core.errors.StorageError`
    when SQLite fails, with the original error chained.
    """

    def __init__(self, db_path: Union[str, Path] = "wifi_data.db") -> None:
        self.db_path = Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    # ------------------------------------------------------------------ #
    #  Connection management
    # ------------------------------------------------------------------ #

    def _get_connection(self) -> sqlite3.Connection:
        """Get or open the connection.

        ``check_same_thread`` is off because the live sniffer delivers
        frames on its own thread; frames are still written one at a time.
        """
        if self._connection is None:
            try:
                if self.db_path.parent and not self.db_path.parent.exists():
                    self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._connection = sqlite3.connect(
                    str(self.db_path),
                    check_same_thread=False,
                )
                self._connection.row_factory = sqlite3.Row
                self._connection.execute("PRAGMA journal_mode=WAL")
                self._connection.execute("PRAGMA foreign_keys=ON")
            except sqlite3.Error as exc:
                raise StorageError(
                    f"Cannot open database {self.db_path}: {exc}"
                ) from exc
        return self._connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def create_tables(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        conn = self._get_connection()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Schema creation failed: {exc}") from exc
        logger.info("Database initialised: %s", self.db_path)

    # ------------------------------------------------------------------ #
    #  Write side
    # ------------------------------------------------------------------ #

    def resolve_access_point(
        self,
        hardware_address: str,
        name: str,
        channel: Optional[int],
        frequency_mhz: Optional[int],
        encryption: Union[EncryptionLevel, str],
        first_seen: Optional[datetime] = None,
    ) -> int:
        """Return the id of the access point, creating it on first sight.

        The first call for a hardware address inserts the row with a
        creation timestamp (*first_seen*, default now) and the vendor from
        the OUI table. Later calls update name, channel, frequency and
        encryption in place and leave ``first_seen`` untouched.

        Args:
            hardware_address: Canonical BSSID text.
            name: Network name or one of its sentinels.
            channel: Channel number, if known.
            frequency_mhz: Centre frequency, if mapped.
            encryption: Inferred encryption level.
            first_seen: Creation timestamp for a new row.

        Returns:
            Row id of the access point.
        """
        conn = self._get_connection()
        encryption_text = EncryptionLevel(encryption).value
        try:
            row = conn.execute(
                "SELECT id FROM access_points WHERE bssid = ?",
                (hardware_address,),
            ).fetchone()

            if row is not None:
                ap_id = int(row["id"])
                conn.execute(
                    """
                    UPDATE access_points
                       SET ssid = ?, channel = ?, frequency_mhz = ?, encryption = ?
                     WHERE id = ?
                    """,
                    (name, channel, frequency_mhz, encryption_text, ap_id),
                )
                conn.commit()
                return ap_id

            cursor = conn.execute(
                """
                INSERT INTO access_points
                    (bssid, ssid, channel, frequency_mhz, encryption, vendor, first_seen)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    hardware_address,
                    name,
                    channel,
                    frequency_mhz,
                    encryption_text,
                    lookup_vendor(hardware_address),
                    _utc_iso(first_seen),
                ),
            )
            conn.commit()
        except sqlite3.Error as exc:
            with suppress(sqlite3.Error):
                conn.rollback()
            raise StorageError(
                f"Cannot resolve access point {hardware_address}: {exc}"
            ) from exc

        logger.debug("New access point %s (%s)", hardware_address, name)
        return int(cursor.lastrowid)

    def record_sample(
        self,
        access_point_id: int,
        timestamp: Optional[datetime],
        signal_dbm: int,
    ) -> None:
        """Append one signal measurement for an access point."""
        conn = self._get_connection()
        try:
            conn.execute(
                "INSERT INTO measurements (ap_id, timestamp, rssi_dbm) VALUES (?, ?, ?)",
                (access_point_id, _utc_iso(timestamp), signal_dbm),
            )
            conn.commit()
        except sqlite3.Error as exc:
            with suppress(sqlite3.Error):
                conn.rollback()
            raise StorageError(
                f"Cannot record sample for access point {access_point_id}: {exc}"
            ) from exc

    # ------------------------------------------------------------------ #
    #  Read side
    # ------------------------------------------------------------------ #

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        conn = self._get_connection()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Query failed: {exc}") from exc

    @staticmethod
    def _row_to_access_point(row: sqlite3.Row) -> AccessPointRow:
        return AccessPointRow(
            id=row["id"],
            hardware_address=row["bssid"],
            name=row["ssid"],
            channel=row["channel"],
            frequency_mhz=row["frequency_mhz"],
            encryption=row["encryption"],
            vendor=row["vendor"],
            first_seen=row["first_seen"],
        )

    def get_access_point(self, hardware_address: str) -> Optional[AccessPointRow]:
        rows = self._query(
            "SELECT * FROM access_points WHERE bssid = ?",
            (hardware_address.upper(),),
        )
        return self._row_to_access_point(rows[0]) if rows else None

    def list_access_points(self, limit: int = 100) -> list[AccessPointRow]:
        """Stored access points, oldest first."""
        rows = self._query(
            "SELECT * FROM access_points ORDER BY first_seen ASC, id ASC LIMIT ?",
            (limit,),
        )
        return [self._row_to_access_point(row) for row in rows]

    def get_samples(self, access_point_id: int, limit: int = 50) -> list[SignalSample]:
        """Most recent measurements for an access point, newest first."""
        rows = self._query(
            """
            SELECT id, ap_id, timestamp, rssi_dbm FROM measurements
             WHERE ap_id = ?
             ORDER BY timestamp DESC, id DESC
             LIMIT ?
            """,
            (access_point_id, limit),
        )
        return [
            SignalSample(
                id=row["id"],
                access_point_id=row["ap_id"],
                timestamp=row["timestamp"],
                signal_dbm=row["rssi_dbm"],
            )
            for row in rows
        ]

    def latest_signal(self, access_point_id: int) -> Optional[int]:
        samples = self.get_samples(access_point_id, limit=1)
        return samples[0].signal_dbm if samples else None

    def counts(self) -> dict[str, int]:
        """Row counts of both tables."""
        rows = self._query(
            """
            SELECT (SELECT COUNT(*) FROM access_points) AS access_points,
                   (SELECT COUNT(*) FROM measurements)  AS measurements
            """
        )
        return {
            "access_points": int(rows[0]["access_points"]),
            "measurements": int(rows[0]["measurements"]),
        }
