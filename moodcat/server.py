"""
FastAPI server for the moodcat journal.

This module exposes the entry store, the calendar grid, the monthly
statistics and the quote of the day over HTTP, so that any presentation
client (the bundled CLI, a mobile app, a web page) can render them.
"""

import datetime as dt
import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Path, Query, Response
from pydantic import BaseModel, ConfigDict, Field

from .calendar_grid import CalendarGridBuilder
from .config import MoodcatSettings, get_settings
from .days import month_bounds, shift_month
from .errors import EntryNotFoundError, InvalidMoodError, PersistenceError
from .formatting import get_formatter
from .models import CalendarMonth, MonthlyStatistics, MoodEntry
from .moods import MOOD_COUNT, MOOD_NAMES
from .persistence import JsonFileRepository
from .quotes import quote_for_day
from .stats import StatisticsEngine
from .store import EntryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


# API Request/Response Schemas
class EntryWrite(BaseModel):
    """Payload for creating, updating or editing an entry."""

    model_config = ConfigDict(populate_by_name=True)

    mood_index: int | None = Field(
        None, alias="moodIndex", description="Mood to record, null for none"
    )
    text: str = Field("", description="Note text, may be empty")


class EntryResponse(BaseModel):
    entry: MoodEntry | None = Field(..., description="The entry, or null if none")


class EntriesResponse(BaseModel):
    entries: list[MoodEntry]


class CalendarResponse(BaseModel):
    label: str
    weekday_headers: list[str]
    calendar: CalendarMonth


class StatisticsResponse(BaseModel):
    label: str
    mood_names: list[str]
    statistics: MonthlyStatistics


class QuoteResponse(BaseModel):
    date: dt.date
    quote: str


def create_app(store: EntryStore, settings: MoodcatSettings | None = None) -> FastAPI:
    """
    Create a FastAPI application around the given entry store.

    Args:
        store: The EntryStore instance backing the application
        settings: Calendar, statistics and locale options; defaults to the
            environment-derived settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    grid_builder = CalendarGridBuilder(first_weekday=settings.first_weekday)
    engine = StatisticsEngine(
        positive_moods=settings.positive_moods, mood_count=MOOD_COUNT
    )
    formatter = get_formatter(settings.locale)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Serving journal with %d entries", len(store))
        yield

    app = FastAPI(
        title="moodcat",
        description="Mood journal with calendar history and monthly statistics",
        version="0.1.0",
        lifespan=lifespan,
    )

    def _write(operation: Callable[..., T], *args: object) -> T:
        try:
            return operation(*args)
        except InvalidMoodError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except EntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PersistenceError as e:
            raise HTTPException(status_code=503, detail=f"Failed to save: {e}")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "moodcat"}

    # MARK: - Entries

    @app.get("/entries")
    async def list_entries(
        start: dt.datetime | None = Query(None, description="Inclusive lower bound"),
        end: dt.datetime | None = Query(None, description="Exclusive upper bound"),
    ) -> EntriesResponse:
        """List entries newest first, optionally within ``[start, end)``."""
        if start is None and end is None:
            return EntriesResponse(entries=store.all())
        lower = start or dt.datetime.min
        upper = end or dt.datetime.max
        return EntriesResponse(entries=store.list(lower, upper))

    @app.get("/entries/today")
    async def get_today() -> EntryResponse:
        return EntryResponse(entry=store.today())

    @app.put("/entries/today")
    async def upsert_today(payload: EntryWrite) -> EntryResponse:
        """Record today's mood and note, updating today's entry if it exists."""
        entry = _write(store.upsert, None, payload.mood_index, payload.text)
        return EntryResponse(entry=entry)

    @app.get("/entries/day/{day}")
    async def get_day(day: dt.date) -> EntryResponse:
        return EntryResponse(entry=store.find(day))

    @app.put("/entries/day/{day}")
    async def upsert_day(day: dt.date, payload: EntryWrite) -> EntryResponse:
        entry = _write(store.upsert, day, payload.mood_index, payload.text)
        return EntryResponse(entry=entry)

    @app.get("/entries/{entry_id}")
    async def get_entry(entry_id: str) -> EntryResponse:
        entry = store.get(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"No entry with id {entry_id!r}")
        return EntryResponse(entry=entry)

    @app.patch("/entries/{entry_id}")
    async def edit_entry(entry_id: str, payload: EntryWrite) -> EntryResponse:
        """Replace the mood and note of an existing entry."""
        entry = _write(store.update, entry_id, payload.mood_index, payload.text)
        return EntryResponse(entry=entry)

    @app.delete("/entries/{entry_id}", status_code=204)
    async def delete_entry(entry_id: str) -> Response:
        """Delete an entry; deleting an unknown id also succeeds."""
        _write(store.delete, entry_id)
        return Response(status_code=204)

    # MARK: - Views

    @app.get("/calendar/{year}/{month}")
    async def get_calendar(
        year: int = Path(..., ge=1900, le=9999),
        month: int = Path(..., ge=1, le=12),
        pad: bool = Query(False, description="Pad the last week to 7 slots"),
    ) -> CalendarResponse:
        first = dt.date(year, month, 1)
        return CalendarResponse(
            label=formatter.month_year(first),
            weekday_headers=formatter.weekday_headers(settings.first_weekday),
            calendar=grid_builder.build_month(first, store.find, pad_trailing=pad),
        )

    @app.get("/statistics/{year}/{month}")
    async def get_statistics(
        year: int = Path(..., ge=1900, le=9999),
        month: int = Path(..., ge=1, le=12),
    ) -> StatisticsResponse:
        first = dt.date(year, month, 1)
        current = store.list(*month_bounds(first))
        previous = store.list(*month_bounds(shift_month(first, -1)))
        return StatisticsResponse(
            label=formatter.month_year(first),
            mood_names=list(MOOD_NAMES),
            statistics=engine.compute(current, previous),
        )

    @app.get("/quote")
    async def get_quote(
        day: dt.date | None = Query(None, alias="date", description="Defaults to today")
    ) -> QuoteResponse:
        day = day or dt.date.today()
        return QuoteResponse(date=day, quote=quote_for_day(day))

    return app


def build_app() -> FastAPI:
    """Application factory reading the store location from settings."""
    settings = get_settings()
    store = EntryStore(
        JsonFileRepository(settings.store_path),
        save_attempts=settings.save_attempts,
    )
    return create_app(store, settings)


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "moodcat.server:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
