"""
Snapshot persistence for the entry store.

The store only needs whole-collection reads and writes: ``load_all`` once at
startup and ``save_all`` after every mutation. Any backend that provides
those two calls can sit behind the store.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from .days import to_local
from .models import MoodEntry

logger = logging.getLogger(__name__)

_SNAPSHOT = TypeAdapter(list[MoodEntry])


def _newest_first(entries: Sequence[MoodEntry]) -> list[MoodEntry]:
    return sorted(entries, key=lambda entry: to_local(entry.timestamp), reverse=True)


def dump_snapshot(entries: Sequence[MoodEntry]) -> bytes:
    """Serialize entries as a JSON array of ``{id, moodIndex, text, date}``."""
    return _SNAPSHOT.dump_json(list(entries), by_alias=True, indent=2)


def load_snapshot(data: bytes | str) -> list[MoodEntry]:
    return _newest_first(_SNAPSHOT.validate_json(data))


class EntryRepository(Protocol):
    def load_all(self) -> list[MoodEntry]: ...

    def save_all(self, entries: Sequence[MoodEntry]) -> None: ...


class JsonFileRepository:
    """
    Stores the whole snapshot in a single JSON file.

    A missing, unreadable or corrupt file loads as an empty collection.
    Writes go to a sibling temporary file which then replaces the target, so
    a failed write never leaves a half-written snapshot behind.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load_all(self) -> list[MoodEntry]:
        if not self.path.exists():
            logger.info("No snapshot at %s, starting empty", self.path)
            return []

        try:
            data = self.path.read_bytes()
            entries = load_snapshot(data)
        except OSError:
            logger.warning("Could not read snapshot %s, starting empty", self.path)
            return []
        except ValidationError as e:
            logger.warning(
                "Ignoring corrupt snapshot %s (%d errors), starting empty",
                self.path,
                e.error_count(),
            )
            return []

        logger.info("Loaded %d entries from %s", len(entries), self.path)
        return entries

    def save_all(self, entries: Sequence[MoodEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_bytes(dump_snapshot(_newest_first(entries)))
        os.replace(tmp_path, self.path)
        logger.debug("Saved %d entries to %s", len(entries), self.path)


class MemoryRepository:
    """Keeps the snapshot in memory; used for tests and ephemeral sessions."""

    def __init__(self, entries: Sequence[MoodEntry] = ()) -> None:
        self._entries = _newest_first(entries)
        self.save_count = 0

    def load_all(self) -> list[MoodEntry]:
        return list(self._entries)

    def save_all(self, entries: Sequence[MoodEntry]) -> None:
        self._entries = _newest_first(entries)
        self.save_count += 1
