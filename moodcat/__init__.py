"""
moodcat - A mood journal with calendar history and monthly statistics.

This package keeps one mood entry per calendar day and derives the history
calendar, monthly statistics and quote of the day from those entries. A small
HTTP API and CLI expose the core to presentation clients.
"""

__version__ = "0.1.0"
