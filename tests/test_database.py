from datetime import datetime, timedelta, timezone

import pytest

from airwatch.core.errors import StorageError
from airwatch.core.models import EncryptionLevel
from airwatch.storage.database import AccessPointStore

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _resolve(store, **overrides):
    values = {
        "hardware_address": "F0:9F:C2:00:00:01",
        "name": "home",
        "channel": 6,
        "frequency_mhz": 2437,
        "encryption": EncryptionLevel.WPA2_WPA3,
        "first_seen": T0,
    }
    values.update(overrides)
    return store.resolve_access_point(**values)


def test_insert_stores_all_attributes(store):
    ap_id = _resolve(store)
    row = store.get_access_point("F0:9F:C2:00:00:01")

    assert row.id == ap_id
    assert row.name == "home"
    assert row.channel == 6
    assert row.frequency_mhz == 2437
    assert row.encryption is EncryptionLevel.WPA2_WPA3
    assert row.vendor == "Ubiquiti"
    assert row.first_seen == T0


def test_upsert_is_idempotent_and_updates_in_place(store):
    first = _resolve(store)
    second = _resolve(
        store,
        name="renamed",
        channel=40,
        frequency_mhz=5200,
        encryption=EncryptionLevel.WPA,
        first_seen=T0 + timedelta(hours=1),
    )

    assert second == first
    row = store.get_access_point("F0:9F:C2:00:00:01")
    assert (row.name, row.channel, row.frequency_mhz) == ("renamed", 40, 5200)
    assert row.encryption is EncryptionLevel.WPA
    assert row.first_seen == T0
    assert store.counts()["access_points"] == 1


def test_distinct_addresses_get_distinct_ids(store):
    a = _resolve(store)
    b = _resolve(store, hardware_address="11:22:33:44:55:66")
    assert a != b
    assert store.get_access_point("11:22:33:44:55:66").vendor == "Unknown"


def test_encryption_accepts_text(store):
    _resolve(store, encryption="Open")
    assert store.get_access_point("F0:9F:C2:00:00:01").encryption is EncryptionLevel.OPEN


def test_samples_are_appended(store):
    ap_id = _resolve(store)
    for offset, signal in enumerate([-50, -55, -61]):
        store.record_sample(ap_id, T0 + timedelta(seconds=offset), signal)

    samples = store.get_samples(ap_id)
    assert [s.signal_dbm for s in samples] == [-61, -55, -50]
    assert samples[0].timestamp == T0 + timedelta(seconds=2)
    assert store.latest_signal(ap_id) == -61
    assert store.counts() == {"access_points": 1, "measurements": 3}


def test_sample_limit(store):
    ap_id = _resolve(store)
    for offset in range(5):
        store.record_sample(ap_id, T0 + timedelta(seconds=offset), -40 - offset)
    assert len(store.get_samples(ap_id, limit=2)) == 2


def test_naive_timestamps_are_treated_as_utc(store):
    ap_id = _resolve(store)
    store.record_sample(ap_id, datetime(2024, 5, 1, 12, 0, 0), -70)
    assert store.get_samples(ap_id)[0].timestamp == T0


def test_latest_signal_without_samples(store):
    assert store.latest_signal(_resolve(store)) is None


def test_unknown_access_point(store):
    assert store.get_access_point("00:00:00:00:00:00") is None


def test_lookup_is_case_insensitive(store):
    _resolve(store)
    assert store.get_access_point("f0:9f:c2:00:00:01") is not None


def test_list_access_points_oldest_first(store):
    _resolve(store, hardware_address="AA:AA:AA:00:00:02", first_seen=T0 + timedelta(minutes=5))
    _resolve(store, hardware_address="AA:AA:AA:00:00:01", first_seen=T0)
    rows = store.list_access_points()
    assert [r.hardware_address for r in rows] == ["AA:AA:AA:00:00:01", "AA:AA:AA:00:00:02"]
    assert len(store.list_access_points(limit=1)) == 1


def test_sample_for_missing_access_point_raises_storage_error(store):
    with pytest.raises(StorageError):
        store.record_sample(999, T0, -50)


def test_writes_on_a_dead_connection_raise_storage_error(store):
    ap_id = _resolve(store)
    store._get_connection().close()

    with pytest.raises(StorageError):
        _resolve(store, hardware_address="22:22:22:22:22:22")
    with pytest.raises(StorageError):
        store.record_sample(ap_id, T0, -50)


def test_schema_is_persistent(db_path):
    first = AccessPointStore(db_path)
    first.create_tables()
    ap_id = _resolve(first)
    first.record_sample(ap_id, T0, -50)
    first.close()

    second = AccessPointStore(db_path)
    second.create_tables()
    try:
        assert second.counts() == {"access_points": 1, "measurements": 1}
    finally:
        second.close()
