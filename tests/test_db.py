"""Tests for src.data.db — SQLiteKeyValueStore."""

import sqlite3

from src.data.db import SQLiteKeyValueStore


class TestGetSet:
    def test_missing_key_is_none(self, store):
        assert store.get("daily_tasks") is None

    def test_roundtrip_json_values(self, store):
        store.set("tasks_date", "2025-02-14")
        store.set("daily_earnings", {"date": "2025-02-14", "amount": 130})
        store.set("stats", [{"date": "2025-02-14", "earnings": 167}])
        assert store.get("tasks_date") == "2025-02-14"
        assert store.get("daily_earnings") == {"date": "2025-02-14", "amount": 130}
        assert store.get("stats")[0]["earnings"] == 167

    def test_set_overwrites(self, store):
        store.set("admin_mode", "false")
        store.set("admin_mode", "true")
        assert store.get("admin_mode") == "true"

    def test_delete(self, store):
        store.set("bank_details", {"ifsc": "SBIN0001234"})
        store.delete("bank_details")
        assert store.get("bank_details") is None

    def test_delete_missing_key_is_fine(self, store):
        store.delete("nothing_here")


class TestDurability:
    def test_values_survive_reopen(self, tmp_path):
        path = str(tmp_path / "kv.db")
        SQLiteKeyValueStore(db_path=path).set("monthly_earnings", {"month": "2025-02", "amount": 297})
        reopened = SQLiteKeyValueStore(db_path=path)
        assert reopened.get("monthly_earnings") == {"month": "2025-02", "amount": 297}

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "kv.db"
        SQLiteKeyValueStore(db_path=str(path)).set("k", 1)
        assert path.exists()

    def test_in_memory_store_keeps_values(self):
        mem = SQLiteKeyValueStore(db_path=":memory:")
        mem.set("k", [1, 2, 3])
        assert mem.get("k") == [1, 2, 3]


class TestCorruption:
    def test_corrupt_json_is_treated_as_absent(self, tmp_path):
        path = str(tmp_path / "kv.db")
        store = SQLiteKeyValueStore(db_path=path)
        with sqlite3.connect(path) as conn:
            conn.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                ("daily_tasks", "{not json", "2025-02-14T00:00:00"),
            )
        assert store.get("daily_tasks") is None
