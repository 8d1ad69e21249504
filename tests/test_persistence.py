"""
Tests for snapshot persistence.
"""

import json
from datetime import datetime

from moodcat.models import MoodEntry
from moodcat.persistence import JsonFileRepository, dump_snapshot, load_snapshot
from moodcat.store import EntryStore


def _entries() -> list[MoodEntry]:
    return [
        MoodEntry(
            id="b", mood_index=None, text="", timestamp=datetime(2026, 3, 2, 20, 15)
        ),
        MoodEntry(
            id="a", mood_index=2, text="tea", timestamp=datetime(2026, 3, 1, 9, 0)
        ),
    ]


class TestJsonFileRepository:
    def test_round_trip(self, tmp_path):
        """Test that saving and reloading reproduces the collection."""
        path = tmp_path / "journal.json"
        JsonFileRepository(path).save_all(_entries())

        loaded = JsonFileRepository(path).load_all()
        assert loaded == _entries()

        # saveAll(loadAll()) followed by a fresh loadAll is stable
        JsonFileRepository(path).save_all(loaded)
        assert JsonFileRepository(path).load_all() == _entries()

    def test_record_shape(self, tmp_path):
        """Test the interchange shape of persisted records."""
        path = tmp_path / "journal.json"
        JsonFileRepository(path).save_all(_entries())

        records = json.loads(path.read_text(encoding="utf-8"))
        assert records == [
            {"id": "b", "moodIndex": None, "text": "", "date": "2026-03-02T20:15:00"},
            {"id": "a", "moodIndex": 2, "text": "tea", "date": "2026-03-01T09:00:00"},
        ]

    def test_saved_newest_first(self, tmp_path):
        path = tmp_path / "journal.json"
        JsonFileRepository(path).save_all(list(reversed(_entries())))

        ids = [record["id"] for record in json.loads(path.read_text())]
        assert ids == ["b", "a"]

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileRepository(tmp_path / "absent.json").load_all() == []

    def test_corrupt_file_is_empty(self, tmp_path):
        """Test that unreadable snapshots load as an empty store."""
        path = tmp_path / "journal.json"

        path.write_text("{not json", encoding="utf-8")
        assert JsonFileRepository(path).load_all() == []

        path.write_text('{"moments": []}', encoding="utf-8")
        assert JsonFileRepository(path).load_all() == []

        path.write_text(
            '[{"id": "x", "moodIndex": -3, "text": "", "date": "2026-03-01T09:00:00"}]',
            encoding="utf-8",
        )
        assert JsonFileRepository(path).load_all() == []

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "journal.json"
        JsonFileRepository(path).save_all(_entries())

        assert path.exists()
        assert not path.with_name("journal.json.tmp").exists()

    def test_store_reloads_from_file(self, tmp_path):
        """Test that a store sees what an earlier store wrote."""
        path = tmp_path / "journal.json"
        first = EntryStore(JsonFileRepository(path))
        entry = first.upsert(datetime(2026, 3, 5, 12, 0), 3, "picnic")

        second = EntryStore(JsonFileRepository(path))
        assert second.all() == [entry]


def test_snapshot_helpers():
    data = dump_snapshot(_entries())
    assert load_snapshot(data) == _entries()
    assert load_snapshot(data.decode("utf-8")) == _entries()
