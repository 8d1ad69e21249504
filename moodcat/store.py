"""
Entry storage for the moodcat journal.

This module provides the entry store, which owns every mood entry and keeps a
day index enforcing the one-entry-per-calendar-day rule. Every mutation is
written through to an ``EntryRepository`` before it becomes visible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time

from .days import day_of, same_day, to_local
from .errors import EntryNotFoundError, InvalidMoodError, PersistenceError
from .models import MoodEntry
from .moods import MOOD_COUNT
from .persistence import EntryRepository, MemoryRepository

logger = logging.getLogger(__name__)


def _as_datetime(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        return to_local(value)
    return datetime.combine(value, time.min)


def _newest_first(entries: dict[str, MoodEntry]) -> list[MoodEntry]:
    return sorted(
        entries.values(), key=lambda entry: to_local(entry.timestamp), reverse=True
    )


class EntryStore:
    """
    Owns all mood entries and indexes them by calendar day.

    The store is single-writer and synchronous. Mutations build the next
    snapshot, hand it to the repository, and only replace the in-memory state
    once the save went through, so a rejected or failed operation leaves the
    store exactly as it was.
    """

    def __init__(
        self,
        repository: EntryRepository | None = None,
        *,
        mood_count: int = MOOD_COUNT,
        save_attempts: int = 2,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repository = repository if repository is not None else MemoryRepository()
        self._mood_count = mood_count
        self._save_attempts = max(1, save_attempts)
        self._clock = clock
        self._entries: dict[str, MoodEntry] = {}
        self._day_index: dict[date, str] = {}
        self._load()

    def __len__(self) -> int:
        return len(self._entries)

    # MARK: - Queries

    def get(self, entry_id: str) -> MoodEntry | None:
        return self._entries.get(entry_id)

    def find(self, when: datetime | date) -> MoodEntry | None:
        """
        Find the entry recorded on the same calendar day as ``when``.

        Args:
            when: Any moment (or date) within the day of interest

        Returns:
            The day's entry, or None if nothing was recorded that day
        """
        entry_id = self._day_index.get(day_of(when))
        if entry_id is None:
            return None
        return self._entries[entry_id]

    def today(self) -> MoodEntry | None:
        return self.find(self._clock())

    def all(self) -> list[MoodEntry]:
        """All entries, newest first."""
        return _newest_first(self._entries)

    def list(self, start: datetime | date, end: datetime | date) -> list[MoodEntry]:
        """
        List entries whose timestamp falls within ``[start, end)``.

        Args:
            start: Inclusive lower bound; a date means its local midnight
            end: Exclusive upper bound; a date means its local midnight

        Returns:
            Matching entries ordered newest first
        """
        lower, upper = _as_datetime(start), _as_datetime(end)
        return [
            entry
            for entry in self.all()
            if lower <= to_local(entry.timestamp) < upper
        ]

    # MARK: - Mutations

    def upsert(
        self,
        when: datetime | date | None = None,
        mood_index: int | None = None,
        text: str = "",
    ) -> MoodEntry:
        """
        Record a mood and/or note for the calendar day of ``when``.

        If the day already has an entry it is updated: the mood is replaced
        when one is given, the note when it is non-empty. Otherwise a new
        entry is created.

        Args:
            when: Moment identifying the day; defaults to now
            mood_index: Mood to record, or None to leave the mood untouched
            text: Note to record; blank leaves an existing note untouched

        Returns:
            The entry as stored after the operation

        Raises:
            InvalidMoodError: If mood_index is outside the mood catalogue
            PersistenceError: If the snapshot could not be saved
        """
        self._validate_mood(mood_index)
        now = self._clock()
        if when is None:
            moment = to_local(now)
        elif isinstance(when, datetime):
            moment = to_local(when)
        else:
            moment = to_local(now) if same_day(when, now) else _as_datetime(when)
        text = text.strip()

        existing = self.find(moment)
        if existing is None:
            entry = MoodEntry(mood_index=mood_index, text=text, timestamp=moment)
            action = "Created"
        else:
            changes: dict[str, object] = {
                "timestamp": to_local(now) if same_day(moment, now) else moment
            }
            if mood_index is not None:
                changes["mood_index"] = mood_index
            if text:
                changes["text"] = text
            entry = existing.model_copy(update=changes)
            action = "Updated"

        self._commit({**self._entries, entry.id: entry})
        logger.info("%s entry %s for %s", action, entry.id, entry.day.isoformat())
        return entry

    def update(self, entry_id: str, mood_index: int | None, text: str) -> MoodEntry:
        """
        Replace the mood and note of an existing entry.

        The entry keeps its id and timestamp, so it stays on its day.

        Raises:
            InvalidMoodError: If mood_index is outside the mood catalogue
            EntryNotFoundError: If no entry has the given id
            PersistenceError: If the snapshot could not be saved
        """
        self._validate_mood(mood_index)
        existing = self._entries.get(entry_id)
        if existing is None:
            raise EntryNotFoundError(entry_id)

        entry = existing.model_copy(
            update={"mood_index": mood_index, "text": text.strip()}
        )
        self._commit({**self._entries, entry.id: entry})
        logger.info("Edited entry %s", entry.id)
        return entry

    def delete(self, entry_id: str) -> bool:
        """
        Delete an entry. Deleting an unknown id is a no-op.

        Returns:
            True if an entry was removed
        """
        if entry_id not in self._entries:
            return False

        remaining = {k: v for k, v in self._entries.items() if k != entry_id}
        self._commit(remaining)
        logger.info("Deleted entry %s", entry_id)
        return True

    # MARK: - Private Helpers

    def _validate_mood(self, mood_index: int | None) -> None:
        if mood_index is None:
            return
        if not 0 <= mood_index < self._mood_count:
            raise InvalidMoodError(mood_index, self._mood_count)

    def _load(self) -> None:
        """Seed the store from the repository, keeping one entry per day."""
        loaded: dict[str, MoodEntry] = {}
        by_day: dict[date, str] = {}
        oldest_first = sorted(
            self._repository.load_all(), key=lambda entry: to_local(entry.timestamp)
        )
        for entry in oldest_first:
            if entry.mood_index is not None and entry.mood_index >= self._mood_count:
                logger.warning(
                    "Dropping entry %s: mood index %d is outside 0..%d",
                    entry.id,
                    entry.mood_index,
                    self._mood_count - 1,
                )
                continue
            previous_id = by_day.get(entry.day)
            if previous_id is not None and previous_id != entry.id:
                logger.warning(
                    "Dropping entry %s: %s already has newer entry %s",
                    previous_id,
                    entry.day.isoformat(),
                    entry.id,
                )
                del loaded[previous_id]
            if entry.id in loaded:
                # same id seen twice, the newer copy wins
                by_day.pop(loaded[entry.id].day, None)
            loaded[entry.id] = entry
            by_day[entry.day] = entry.id

        self._entries = loaded
        self._day_index = by_day

    def _commit(self, entries: dict[str, MoodEntry]) -> None:
        snapshot = _newest_first(entries)
        self._save(snapshot)
        self._entries = entries
        self._day_index = {entry.day: entry.id for entry in snapshot}

    def _save(self, snapshot: list[MoodEntry]) -> None:
        last_error: Exception | None = None
        for attempt in range(1, self._save_attempts + 1):
            try:
                self._repository.save_all(snapshot)
                return
            except Exception as e:
                logger.exception(
                    "Saving snapshot failed (attempt %d/%d)",
                    attempt,
                    self._save_attempts,
                )
                last_error = e
        raise PersistenceError("Could not save journal snapshot") from last_error
