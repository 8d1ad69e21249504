"""
Command-line client for the moodcat server.
"""

import asyncio
import json
from collections.abc import Coroutine
from datetime import date, datetime
from typing import Any

import httpx
import typer

from .config import get_settings
from .days import shift_month
from .formatting import get_formatter
from .models import CalendarMonth, DaySlot, MonthlyStatistics, MoodEntry, Trend
from .moods import MOOD_NAMES, mood_name, parse_mood

DEFAULT_BASE_URL = "http://localhost:8000"

app = typer.Typer(help="moodcat journal CLI")

_URL_OPTION = typer.Option(
    DEFAULT_BASE_URL,
    "--url",
    "-u",
    envvar="MOODCAT_URL",
    help="Base URL of the moodcat server",
)

_TREND_ARROWS = {Trend.UP: "▲", Trend.DOWN: "▼", Trend.NEUTRAL: "="}


def main() -> None:
    """Entry point for the moodcat command."""
    app()


def _client(base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url)


# MARK: - Entry Commands


@app.command()
def log(
    mood: str = typer.Argument(..., help="Mood name or index, or 'none'"),
    text: str = typer.Argument("", help="Optional note"),
    day: str = typer.Option(
        None, "--date", "-d", help="Day to record (YYYY-MM-DD), defaults to today"
    ),
    base_url: str = _URL_OPTION,
) -> None:
    """Record the mood and note for a day, updating the day's entry if any."""
    mood_index = _parse_mood_option(mood)
    path = "/entries/today" if day is None else f"/entries/day/{_parse_day(day)}"

    async def _log() -> None:
        async with _client(base_url) as client:
            response = await client.put(
                path, json={"moodIndex": mood_index, "text": text}
            )
            response.raise_for_status()
            entry = MoodEntry.model_validate(response.json()["entry"])
            print(f"Saved {_format_entry(entry)}")

    _run_with_error_handling(_log(), base_url)


@app.command()
def today(
    base_url: str = _URL_OPTION,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show today's entry."""

    async def _today() -> None:
        async with _client(base_url) as client:
            response = await client.get("/entries/today")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            if result["entry"] is None:
                print("Nothing recorded today")
            else:
                print(_format_entry(MoodEntry.model_validate(result["entry"])))

    _run_with_error_handling(_today(), base_url)


@app.command()
def edit(
    entry_id: str = typer.Argument(..., help="Id of the entry to edit"),
    mood: str = typer.Option(None, "--mood", "-m", help="New mood, or 'none'"),
    text: str = typer.Option(None, "--text", "-t", help="New note"),
    base_url: str = _URL_OPTION,
) -> None:
    """Change the mood and/or note of an existing entry."""
    new_mood = None if mood is None else _parse_mood_option(mood)

    async def _edit() -> None:
        async with _client(base_url) as client:
            response = await client.get(f"/entries/{entry_id}")
            response.raise_for_status()
            current = MoodEntry.model_validate(response.json()["entry"])

            payload = {
                "moodIndex": current.mood_index if mood is None else new_mood,
                "text": current.text if text is None else text,
            }
            response = await client.patch(f"/entries/{entry_id}", json=payload)
            response.raise_for_status()
            entry = MoodEntry.model_validate(response.json()["entry"])
            print(f"Updated {_format_entry(entry)}")

    _run_with_error_handling(_edit(), base_url)


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Id of the entry to delete"),
    base_url: str = _URL_OPTION,
) -> None:
    """Delete an entry."""

    async def _delete() -> None:
        async with _client(base_url) as client:
            response = await client.delete(f"/entries/{entry_id}")
            response.raise_for_status()
            print(f"Deleted {entry_id}")

    _run_with_error_handling(_delete(), base_url)


# MARK: - View Commands


@app.command()
def history(
    month: str = typer.Argument(None, help="Month to show (YYYY-MM), defaults to now"),
    shift: int = typer.Option(0, "--shift", "-s", help="Months to move from MONTH"),
    base_url: str = _URL_OPTION,
) -> None:
    """Show a month as a calendar with one mood per day."""
    first = _resolve_month(month, shift)

    async def _history() -> None:
        async with _client(base_url) as client:
            response = await client.get(
                f"/calendar/{first.year}/{first.month}", params={"pad": "true"}
            )
            response.raise_for_status()
            result = response.json()
            grid = CalendarMonth.model_validate(result["calendar"])
            print(result["label"])
            print(_render_grid(grid, result["weekday_headers"]))

    _run_with_error_handling(_history(), base_url)


@app.command()
def stats(
    month: str = typer.Argument(None, help="Month to show (YYYY-MM), defaults to now"),
    shift: int = typer.Option(0, "--shift", "-s", help="Months to move from MONTH"),
    base_url: str = _URL_OPTION,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Show the monthly statistics."""
    first = _resolve_month(month, shift)

    async def _stats() -> None:
        async with _client(base_url) as client:
            response = await client.get(f"/statistics/{first.year}/{first.month}")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            print(result["label"])
            statistics = MonthlyStatistics.model_validate(result["statistics"])
            print(_format_statistics(statistics))

    _run_with_error_handling(_stats(), base_url)


@app.command()
def quote(
    day: str = typer.Option(None, "--date", "-d", help="Day (YYYY-MM-DD)"),
    base_url: str = _URL_OPTION,
) -> None:
    """Show the quote of the day."""
    params = {} if day is None else {"date": _parse_day(day).isoformat()}

    async def _quote() -> None:
        async with _client(base_url) as client:
            response = await client.get("/quote", params=params)
            response.raise_for_status()
            print(response.json()["quote"])

    _run_with_error_handling(_quote(), base_url)


@app.command()
def serve() -> None:
    """Run the moodcat server."""
    from .server import main as serve_main

    serve_main()


# MARK: - Private Helpers


def _parse_mood_option(value: str) -> int | None:
    if value.strip().lower() in ("none", "-"):
        return None
    try:
        return parse_mood(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Expected a date as YYYY-MM-DD, got {value!r}")


def _resolve_month(value: str | None, shift: int) -> date:
    """Month to show; shifting forward never goes past the current month."""
    today = date.today()
    if value is None:
        base = today
    else:
        try:
            base = datetime.strptime(value, "%Y-%m").date()
        except ValueError:
            raise typer.BadParameter(f"Expected a month as YYYY-MM, got {value!r}")
    return shift_month(base, shift, latest=today)


def _format_entry(entry: MoodEntry) -> str:
    stamp = entry.timestamp.strftime("%Y-%m-%d %H:%M")
    line = f"{stamp} [{mood_name(entry.mood_index)}]"
    if entry.text:
        line += f" {entry.text}"
    return f"{line} ({entry.id})"


def _render_grid(grid: CalendarMonth, headers: list[str]) -> str:
    cells = []
    for slot in grid.slots:
        if isinstance(slot, DaySlot):
            marker = " "
            if slot.entry is not None and slot.entry.mood_index is not None:
                marker = mood_name(slot.entry.mood_index)[0]
            cells.append(f"{slot.day:>2}{marker}")
        else:
            cells.append("   ")

    lines = [" ".join(f"{header:>3}" for header in headers)]
    for row in range(0, len(cells), 7):
        lines.append(" ".join(cells[row : row + 7]))
    return "\n".join(lines)


def _format_statistics(statistics: MonthlyStatistics) -> str:
    formatter = get_formatter(get_settings().locale)
    if statistics.entry_count == 0:
        return "No entries this month"

    lines = [f"Entries: {statistics.entry_count}"]

    comparison = statistics.comparison
    if comparison is None:
        lines.append("Compared to last month: no data to compare")
    else:
        sign = "+" if comparison.percentage > 0 else ""
        arrow = _TREND_ARROWS[comparison.trend]
        lines.append(f"Compared to last month: {arrow} {sign}{comparison.percentage}%")

    if statistics.positive_streak > 0:
        lines.append(f"Positive streak: {formatter.streak(statistics.positive_streak)}")
    else:
        lines.append("Positive streak: start a new one!")

    if statistics.most_common is not None:
        common = statistics.most_common
        lines.append(
            f"Most common mood: {mood_name(common.mood_index)} "
            f"({formatter.days(common.count)})"
        )

    width = max(len(name) for name in MOOD_NAMES)
    for share in statistics.distribution:
        bar = "#" * round(share.share * 20)
        lines.append(f"  {mood_name(share.mood_index):<{width}} {bar:<20} {share.count}")
    return "\n".join(lines)


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}: {_error_detail(e.response)}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


def _error_detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        return response.reason_phrase
    return detail if isinstance(detail, str) else response.reason_phrase


if __name__ == "__main__":
    main()
