"""
Shared data models for the moodcat journal.

This module defines the core domain models used across multiple layers
of the application (entry store, calendar, statistics, CLI, API).
"""

import datetime as dt
from enum import Enum
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .days import day_of


def _new_entry_id() -> str:
    return str(uuid4())


class MoodEntry(BaseModel):
    """A single journal entry: one mood and note for one calendar day.

    Entries are immutable values; the entry store replaces them rather than
    editing them in place. The serialized form uses the interchange keys
    ``id``, ``moodIndex``, ``text`` and ``date``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_new_entry_id, description="Opaque entry id")
    mood_index: int | None = Field(
        None, alias="moodIndex", ge=0, description="Index into the mood catalogue"
    )
    text: str = Field("", description="Free-form note, may be empty")
    timestamp: dt.datetime = Field(
        ..., alias="date", description="Effective date-time of the entry"
    )

    @property
    def day(self) -> dt.date:
        """Calendar day the entry is bucketed under."""
        return day_of(self.timestamp)


# MARK: - Calendar


class EmptySlot(BaseModel):
    """Padding cell before day 1 or after the last day of a month."""

    kind: Literal["empty"] = "empty"


class DaySlot(BaseModel):
    """A calendar cell for one day of the month."""

    kind: Literal["day"] = "day"
    day: int = Field(..., ge=1, le=31, description="Day of month, 1-based")
    date: dt.date
    entry: MoodEntry | None = None


CalendarSlot = Annotated[EmptySlot | DaySlot, Field(discriminator="kind")]


class CalendarMonth(BaseModel):
    """A month laid out as rows of seven slots."""

    year: int
    month: int
    first_weekday: int = Field(..., description="Python calendar weekday of column 0")
    leading_blanks: int
    slots: list[CalendarSlot] = Field(default_factory=list)


# MARK: - Statistics


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class MonthComparison(BaseModel):
    """Month-over-month change in the number of entries."""

    percentage: int
    trend: Trend


class MoodCount(BaseModel):
    mood_index: int
    count: int


class MoodShare(BaseModel):
    """One row of the mood distribution chart."""

    mood_index: int
    count: int
    share: float = Field(..., ge=0.0, le=1.0)


class MonthlyStatistics(BaseModel):
    """Everything the statistics dashboard shows for one month."""

    entry_count: int
    previous_entry_count: int
    frequencies: dict[int, int] = Field(default_factory=dict)
    distribution: list[MoodShare] = Field(default_factory=list)
    comparison: MonthComparison | None = Field(
        None, description="None when the previous month has no entries"
    )
    positive_streak: int = 0
    most_common: MoodCount | None = None
