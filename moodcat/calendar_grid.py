"""
Month calendar layout for the history view.

The builder only reads entries through a lookup function, so it works the
same against the live entry store or a plain dict of test data.
"""

import calendar
from collections.abc import Callable
from datetime import date, datetime

from .days import days_in_month, month_start
from .models import CalendarMonth, CalendarSlot, DaySlot, EmptySlot, MoodEntry

DayLookup = Callable[[date], MoodEntry | None]


class CalendarGridBuilder:
    """
    Lays a month out in seven columns starting at ``first_weekday``.

    Weekdays use the numbering of the ``calendar`` module (Monday is 0,
    Sunday is 6). The default puts Sunday in the first column.
    """

    def __init__(self, first_weekday: int = calendar.SUNDAY) -> None:
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be in 0..6, got {first_weekday}")
        self.first_weekday = first_weekday

    def leading_blanks(self, month: date | datetime) -> int:
        """Number of empty cells before day 1 of the month."""
        return (month_start(month).weekday() - self.first_weekday) % 7

    def build(
        self, month: date | datetime, lookup: DayLookup, pad_trailing: bool = False
    ) -> list[CalendarSlot]:
        """
        Build the slot sequence for the month containing ``month``.

        Args:
            month: Any date within the month to lay out
            lookup: Returns the entry recorded on a given day, if any
            pad_trailing: Fill the last week with empty slots up to 7 columns

        Returns:
            Leading empty slots followed by one day slot per day of the month
        """
        first = month_start(month)
        slots: list[CalendarSlot] = [
            EmptySlot() for _ in range(self.leading_blanks(first))
        ]
        for day_number in range(1, days_in_month(first) + 1):
            day = first.replace(day=day_number)
            slots.append(DaySlot(day=day_number, date=day, entry=lookup(day)))

        if pad_trailing:
            slots.extend(EmptySlot() for _ in range(-len(slots) % 7))
        return slots

    def build_month(
        self, month: date | datetime, lookup: DayLookup, pad_trailing: bool = False
    ) -> CalendarMonth:
        first = month_start(month)
        return CalendarMonth(
            year=first.year,
            month=first.month,
            first_weekday=self.first_weekday,
            leading_blanks=self.leading_blanks(first),
            slots=self.build(first, lookup, pad_trailing=pad_trailing),
        )
