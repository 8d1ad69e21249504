"""
Tests for the EntryStore implementation.

These tests verify the core functionality of the entry store, including the
one-entry-per-day upsert, explicit edits, deletion, range listing and
write-through persistence.
"""

from datetime import date, datetime

import pytest

from moodcat.errors import EntryNotFoundError, InvalidMoodError, PersistenceError
from moodcat.models import MoodCount, MoodEntry
from moodcat.persistence import JsonFileRepository, MemoryRepository
from moodcat.stats import StatisticsEngine
from moodcat.store import EntryStore


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FlakyRepository(MemoryRepository):
    """Fails the first ``failures`` saves."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    def save_all(self, entries):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise OSError("disk full")
        super().save_all(entries)


class TestEntryStore:
    """Test suite for EntryStore functionality."""

    def setup_method(self):
        """Set up a fresh store with a fixed clock for each test."""
        self.clock = FakeClock(datetime(2026, 3, 10, 9, 0))
        self.repository = MemoryRepository()
        self.store = EntryStore(self.repository, clock=self.clock)

    def test_initial_state(self):
        """Test that a new store starts empty."""
        assert len(self.store) == 0
        assert self.store.today() is None
        assert self.store.all() == []

    def test_upsert_creates_entry(self):
        """Test that the first upsert of the day creates an entry."""
        entry = self.store.upsert(mood_index=2, text="long walk")

        assert entry.mood_index == 2
        assert entry.text == "long walk"
        assert entry.timestamp == self.clock.now
        assert self.store.today() == entry
        assert len(self.store) == 1
        assert self.repository.save_count == 1

    def test_upsert_same_day_updates(self):
        """Test that a second upsert on the same day updates the entry."""
        first = self.store.upsert(mood_index=2, text="morning")

        self.clock.now = datetime(2026, 3, 10, 21, 30)
        second = self.store.upsert(mood_index=4, text="evening")

        assert second.id == first.id
        assert second.mood_index == 4
        assert second.text == "evening"
        assert second.timestamp == datetime(2026, 3, 10, 21, 30)
        assert len(self.store) == 1

    def test_upsert_keeps_unspecified_values(self):
        """Test that a missing mood or blank note leaves the stored value."""
        self.store.upsert(mood_index=1, text="rainy")

        mood_only = self.store.upsert(mood_index=3)
        assert mood_only.mood_index == 3
        assert mood_only.text == "rainy"

        note_only = self.store.upsert(text="  sun came out  ")
        assert note_only.mood_index == 3
        assert note_only.text == "sun came out"

    def test_upsert_past_day_stays_on_its_day(self):
        """Test that editing an earlier day does not move the entry to today."""
        created = self.store.upsert(date(2026, 3, 5), 3, "cinema")
        assert created.timestamp == datetime(2026, 3, 5, 0, 0)

        updated = self.store.upsert(date(2026, 3, 5), None, "cinema and dinner")
        assert updated.id == created.id
        assert updated.day == date(2026, 3, 5)
        assert self.store.find(date(2026, 3, 5)) == updated
        assert self.store.today() is None

    def test_day_boundary_buckets_by_calendar_day(self):
        """Test that 23:59:59 and 00:00:00 land on different days."""
        late = self.store.upsert(datetime(2026, 3, 9, 23, 59, 59), 1)
        early = self.store.upsert(datetime(2026, 3, 10, 0, 0, 0), 2)

        assert late.id != early.id
        assert len(self.store) == 2
        assert self.store.find(datetime(2026, 3, 9, 12, 0)) == late
        assert self.store.find(date(2026, 3, 10)) == early

    def test_no_two_entries_share_a_day(self):
        """Test day exclusivity across a burst of upserts."""
        moments = [
            datetime(2026, 3, 1, 8, 0),
            datetime(2026, 3, 1, 22, 0),
            datetime(2026, 3, 2, 0, 0),
            datetime(2026, 3, 2, 23, 59, 59),
            datetime(2026, 3, 4, 12, 0),
            datetime(2026, 3, 1, 12, 0),
        ]
        for index, moment in enumerate(moments):
            self.store.upsert(moment, index % 5, f"note {index}")

        days = [entry.day for entry in self.store.all()]
        assert len(days) == len(set(days)) == 3

    def test_invalid_mood_rejected_before_mutation(self):
        """Test that out-of-range moods are rejected without side effects."""
        with pytest.raises(InvalidMoodError):
            self.store.upsert(mood_index=5, text="ignored")
        with pytest.raises(InvalidMoodError):
            self.store.upsert(mood_index=-1)

        assert len(self.store) == 0
        assert self.repository.save_count == 0

        entry = self.store.upsert(mood_index=0, text="kept")
        with pytest.raises(InvalidMoodError):
            self.store.update(entry.id, 7, "ignored")
        assert self.store.get(entry.id) == entry

    def test_empty_text_is_valid(self):
        """Test that a mood-only entry can be created."""
        entry = self.store.upsert(mood_index=4)
        assert entry.text == ""

    def test_update_replaces_values(self):
        """Test explicit edits replace both mood and note."""
        original = self.store.upsert(mood_index=2, text="first draft")

        edited = self.store.update(original.id, None, "rewritten")

        assert edited.id == original.id
        assert edited.mood_index is None
        assert edited.text == "rewritten"
        assert edited.timestamp == original.timestamp
        # the caller's copy is never changed behind its back
        assert original.text == "first draft"
        assert original.mood_index == 2

    def test_update_unknown_entry(self):
        """Test that editing a missing entry raises."""
        with pytest.raises(EntryNotFoundError):
            self.store.update("missing", 1, "text")

    def test_delete(self):
        """Test that deletion removes the entry and clears the day."""
        entry = self.store.upsert(mood_index=1, text="bad day")

        assert self.store.delete(entry.id) is True
        assert self.store.today() is None
        assert self.store.get(entry.id) is None
        assert len(self.store) == 0
        assert self.repository.save_count == 2

        # Deleting again is a no-op
        assert self.store.delete(entry.id) is False
        assert self.repository.save_count == 2

        # The day is free for a new entry
        fresh = self.store.upsert(mood_index=3)
        assert fresh.id != entry.id

    def test_list_range_newest_first(self):
        """Test listing entries within a half-open range."""
        march_1 = self.store.upsert(datetime(2026, 3, 1, 0, 0), 2)
        march_15 = self.store.upsert(datetime(2026, 3, 15, 18, 0), 3)
        self.store.upsert(datetime(2026, 4, 1, 0, 0), 1)

        listed = self.store.list(date(2026, 3, 1), date(2026, 4, 1))
        assert listed == [march_15, march_1]

    def test_write_through_snapshot(self):
        """Test that every mutation hands the full snapshot to the repository."""
        self.store.upsert(datetime(2026, 3, 1, 10, 0), 2)
        self.store.upsert(datetime(2026, 3, 2, 10, 0), 3)

        assert self.repository.load_all() == self.store.all()


class TestEntryStoreLoading:
    def test_seeded_from_repository(self):
        entries = [
            MoodEntry(mood_index=2, text="a", timestamp=datetime(2026, 3, 1, 9, 0)),
            MoodEntry(mood_index=3, text="b", timestamp=datetime(2026, 3, 2, 9, 0)),
        ]
        store = EntryStore(MemoryRepository(entries))

        assert len(store) == 2
        assert store.find(date(2026, 3, 2)).text == "b"

    def test_duplicate_days_keep_latest(self):
        """Test that a snapshot with two entries on one day is collapsed."""
        entries = [
            MoodEntry(mood_index=1, text="early", timestamp=datetime(2026, 3, 1, 9, 0)),
            MoodEntry(mood_index=3, text="late", timestamp=datetime(2026, 3, 1, 18, 0)),
        ]
        store = EntryStore(MemoryRepository(entries))

        assert len(store) == 1
        assert store.find(date(2026, 3, 1)).text == "late"

    def test_out_of_range_moods_dropped(self):
        """Test that snapshot entries with an unknown mood index are not loaded."""
        kept = MoodEntry(mood_index=4, text="ok", timestamp=datetime(2026, 3, 1, 9, 0))
        entries = [
            kept,
            MoodEntry(mood_index=9, text="bad", timestamp=datetime(2026, 3, 2, 9, 0)),
        ]
        store = EntryStore(MemoryRepository(entries))

        assert store.all() == [kept]
        assert store.find(date(2026, 3, 2)) is None

    def test_out_of_range_mood_does_not_shadow_valid_entry(self):
        """Test that a newer entry with a bad mood leaves the day's valid entry."""
        entries = [
            MoodEntry(mood_index=2, text="ok", timestamp=datetime(2026, 3, 1, 9, 0)),
            MoodEntry(mood_index=7, text="bad", timestamp=datetime(2026, 3, 1, 18, 0)),
        ]
        store = EntryStore(MemoryRepository(entries))

        assert store.find(date(2026, 3, 1)).text == "ok"

    def test_loaded_moods_are_counted(self, tmp_path):
        """Test that statistics over a loaded file only see catalogue moods."""
        path = tmp_path / "journal.json"
        path.write_text(
            '[{"id": "x", "moodIndex": 9, "text": "", "date": "2026-03-01T09:00:00"},'
            ' {"id": "y", "moodIndex": 3, "text": "", "date": "2026-03-02T09:00:00"}]',
            encoding="utf-8",
        )
        store = EntryStore(JsonFileRepository(path))

        statistics = StatisticsEngine().compute(store.all(), [])
        assert statistics.frequencies == {3: 1}
        assert statistics.most_common == MoodCount(mood_index=3, count=1)


class TestEntryStorePersistenceFailures:
    def test_failed_save_leaves_store_unchanged(self):
        """Test that a save failing on every attempt raises and rolls back."""
        repository = FlakyRepository(failures=10)
        store = EntryStore(repository, save_attempts=3)

        with pytest.raises(PersistenceError):
            store.upsert(mood_index=2, text="lost")

        assert repository.attempts == 3
        assert len(store) == 0

    def test_save_retried(self):
        """Test that a transient failure is retried with the whole snapshot."""
        repository = FlakyRepository(failures=1)
        store = EntryStore(repository, save_attempts=2)

        entry = store.upsert(mood_index=2, text="saved")

        assert repository.attempts == 2
        assert repository.load_all() == [entry]
