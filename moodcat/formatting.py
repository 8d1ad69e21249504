"""
Locale-dependent labels for months, weekdays and day counts.

The calendar and statistics code never touches these; only the outer
surfaces (CLI, API) turn numbers into words.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date


def _english_plural(count: int, one: str, many: str) -> str:
    return one if count == 1 else many


def _ukrainian_form(count: int) -> int:
    """0 for 1 (21, 31...), 1 for 2-4 (22-24...), 2 for the rest."""
    last_two = count % 100
    last = count % 10
    if 11 <= last_two <= 14:
        return 2
    if last == 1:
        return 0
    if 2 <= last <= 4:
        return 1
    return 2


@dataclass(frozen=True)
class DateFormatter:
    month_names: tuple[str, ...]
    # Monday first, as in datetime.weekday()
    weekday_abbreviations: tuple[str, ...]
    days_word: Callable[[int], str]
    streak_word: Callable[[int], str]

    def month_year(self, month: date) -> str:
        return f"{self.month_names[month.month - 1]} {month.year}"

    def weekday_headers(self, first_weekday: int) -> list[str]:
        return [
            self.weekday_abbreviations[(first_weekday + offset) % 7]
            for offset in range(7)
        ]

    def days(self, count: int) -> str:
        return f"{count} {self.days_word(count)}"

    def streak(self, count: int) -> str:
        return f"{count} {self.streak_word(count)}"


ENGLISH = DateFormatter(
    month_names=(
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    weekday_abbreviations=("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
    days_word=lambda count: _english_plural(count, "day", "days"),
    streak_word=lambda count: _english_plural(count, "day in a row", "days in a row"),
)

UKRAINIAN = DateFormatter(
    month_names=(
        "Січень",
        "Лютий",
        "Березень",
        "Квітень",
        "Травень",
        "Червень",
        "Липень",
        "Серпень",
        "Вересень",
        "Жовтень",
        "Листопад",
        "Грудень",
    ),
    weekday_abbreviations=("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Нд"),
    days_word=lambda count: ("день", "дні", "днів")[_ukrainian_form(count)],
    streak_word=lambda count: ("день поспіль", "дні поспіль", "днів поспіль")[
        _ukrainian_form(count)
    ],
)

FORMATTERS: dict[str, DateFormatter] = {"en": ENGLISH, "uk": UKRAINIAN}


def get_formatter(locale: str) -> DateFormatter:
    """Formatter for a language code such as ``uk`` or ``en_US``; English fallback."""
    language = locale.replace("-", "_").split("_")[0].lower()
    return FORMATTERS.get(language, ENGLISH)
