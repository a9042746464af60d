"""Tests for the SQLite-backed alert store."""

import pytest

from src.common.database import get_connection
from src.view_state.alert_store import AlertStore


class TestAlertStore:
    def test_absent_key_means_no_alert(self, alert_store):
        assert alert_store.get_threshold("samsung_galaxy_a55_5g") is None

    def test_set_and_get(self, alert_store):
        alert_store.set_threshold("samsung_galaxy_a55_5g", 20_000_000)
        assert alert_store.get_threshold("samsung_galaxy_a55_5g") == 20_000_000

    def test_set_replaces_existing(self, alert_store):
        alert_store.set_threshold("samsung_galaxy_a55_5g", 20_000_000)
        alert_store.set_threshold("samsung_galaxy_a55_5g", 19_000_000)
        assert alert_store.get_threshold("samsung_galaxy_a55_5g") == 19_000_000

    def test_delete(self, alert_store):
        alert_store.set_threshold("samsung_galaxy_a55_5g", 20_000_000)
        alert_store.delete_threshold("samsung_galaxy_a55_5g")
        assert alert_store.get_threshold("samsung_galaxy_a55_5g") is None

    def test_delete_missing_is_noop(self, alert_store):
        alert_store.delete_threshold("google_pixel_8_pro")
        assert alert_store.get_threshold("google_pixel_8_pro") is None

    def test_products_are_independent(self, alert_store):
        alert_store.set_threshold("samsung_galaxy_a55_5g", 20_000_000)
        alert_store.set_threshold("xiaomi_poco_x6_pro", 16_000_000)
        alert_store.delete_threshold("samsung_galaxy_a55_5g")
        assert alert_store.get_threshold("xiaomi_poco_x6_pro") == 16_000_000

    def test_keys_are_namespaced(self, alert_store):
        alert_store.set_threshold("samsung_galaxy_a55_5g", 20_000_000)

        conn = get_connection(alert_store.db_path)
        try:
            keys = [row["key"] for row in conn.execute("SELECT key FROM kv_store")]
        finally:
            conn.close()

        assert keys == ["fairlens:alert:samsung_galaxy_a55_5g"]

    def test_unrelated_raw_key_is_ignored(self, alert_store):
        conn = get_connection(alert_store.db_path)
        try:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?)",
                ("samsung_galaxy_a55_5g", "123"),
            )
            conn.commit()
        finally:
            conn.close()

        assert alert_store.get_threshold("samsung_galaxy_a55_5g") is None

    def test_custom_prefix(self, tmp_path):
        store = AlertStore(db_path=tmp_path / "alerts.db", key_prefix="demo:")
        store.set_threshold("x", 5)
        assert store.get_threshold("x") == 5
        assert AlertStore(db_path=tmp_path / "alerts.db").get_threshold("x") is None

    def test_persists_across_instances(self, tmp_path):
        AlertStore(db_path=tmp_path / "alerts.db").set_threshold("x", 42)
        assert AlertStore(db_path=tmp_path / "alerts.db").get_threshold("x") == 42

    @pytest.mark.parametrize("bad", [0, -5, True, 1.5, "100"])
    def test_rejects_invalid_threshold(self, alert_store, bad):
        with pytest.raises(ValueError):
            alert_store.set_threshold("x", bad)
        assert alert_store.get_threshold("x") is None


class TestCorruptValues:
    @pytest.mark.parametrize("raw", ["not-json", "{\"a\": 1}", "-3", "0", "true", "12.5", "\"100\""])
    def test_corrupt_value_reads_as_absent(self, alert_store, raw):
        conn = get_connection(alert_store.db_path)
        try:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?)",
                ("fairlens:alert:x", raw),
            )
            conn.commit()
        finally:
            conn.close()

        assert alert_store.get_threshold("x") is None
