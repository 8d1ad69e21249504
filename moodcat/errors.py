"""Exceptions raised by the moodcat core."""


class MoodcatError(Exception):
    """Base class for all moodcat errors."""


class InvalidMoodError(MoodcatError, ValueError):
    """A mood index outside the configured catalogue was supplied."""

    def __init__(self, mood_index: int, mood_count: int) -> None:
        super().__init__(
            f"Mood index {mood_index} is outside the range 0..{mood_count - 1}"
        )
        self.mood_index = mood_index
        self.mood_count = mood_count


class EntryNotFoundError(MoodcatError, LookupError):
    """No entry exists with the requested id."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"No entry with id {entry_id!r}")
        self.entry_id = entry_id


class PersistenceError(MoodcatError):
    """The entry snapshot could not be written to storage."""
