"""
Tests for locale-specific date formatting.
"""

from datetime import date

import pytest

from moodcat.formatting import ENGLISH, UKRAINIAN, get_formatter


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (1, "1 день"),
        (2, "2 дні"),
        (4, "4 дні"),
        (5, "5 днів"),
        (11, "11 днів"),
        (14, "14 днів"),
        (21, "21 день"),
        (22, "22 дні"),
        (112, "112 днів"),
    ],
)
def test_ukrainian_days(count, expected):
    assert UKRAINIAN.days(count) == expected


def test_ukrainian_streak():
    assert UKRAINIAN.streak(3) == "3 дні поспіль"
    assert UKRAINIAN.streak(12) == "12 днів поспіль"


def test_english_plurals():
    assert ENGLISH.days(1) == "1 day"
    assert ENGLISH.days(0) == "0 days"
    assert ENGLISH.streak(3) == "3 days in a row"


def test_month_year():
    assert UKRAINIAN.month_year(date(2026, 10, 1)) == "Жовтень 2026"
    assert ENGLISH.month_year(date(2024, 2, 29)) == "February 2024"


def test_weekday_headers_follow_week_start():
    assert UKRAINIAN.weekday_headers(6) == ["Нд", "Пн", "Вт", "Ср", "Чт", "Пт", "Сб"]
    assert ENGLISH.weekday_headers(0) == ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


def test_get_formatter():
    assert get_formatter("uk") is UKRAINIAN
    assert get_formatter("uk_UA") is UKRAINIAN
    assert get_formatter("en-GB") is ENGLISH
    assert get_formatter("de") is ENGLISH
