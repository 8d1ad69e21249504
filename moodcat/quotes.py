"""Quote of the day."""

from collections.abc import Sequence
from datetime import date, datetime

from .days import day_of_year

QUOTES: tuple[str, ...] = (
    "Believe you can and you're halfway there.",
    "Everything comes to those who know how to wait.",
    "Every day is a new opportunity.",
    "You are stronger than you think.",
    "Smile and the world smiles with you.",
    "Today is the best day to start something new.",
    "Small steps lead to big changes.",
    "Sometimes the best thing you can do is keep going.",
    "Even a small ray of light drives away the dark.",
    "You deserve peace, love and care.",
    "Bad days pass. Your strength stays.",
    "Look after yourself the way you look after others.",
    "Nobody is perfect, and that's okay.",
    "What feels hard today will be your victory tomorrow.",
    "Even the smallest kitten roars like a lion sometimes. So can you.",
    "Cats don't give up. They nap and come back stronger.",
    "The perfect moment doesn't always come, but the energy to act does.",
    "Step by step, day by day, and you're a whole new person.",
    "Don't forget to purr about your wins, even the small ones.",
    "Sometimes the best plan is to stop, breathe deeply and carry on.",
    "Your story doesn't end here. There is plenty of light ahead.",
    "When life hisses, remember you are a tiger, not a mouse.",
    "You don't have to be perfect to be worthy.",
    "Be gentle with yourself. You're doing what you can, and that's enough.",
    "Dark days don't last forever. The light is on its way.",
    "Stop, stretch, breathe out. Sometimes that is the way forward.",
    "Inner calm is a success too.",
    "Low on energy today? That's fine. Rest is part of the journey.",
)


def quote_for_day(when: date | datetime, quotes: Sequence[str] = QUOTES) -> str:
    """Pick the quote for a day; January 1st always gets the first quote."""
    if not quotes:
        raise ValueError("quotes must not be empty")
    return quotes[(day_of_year(when) - 1) % len(quotes)]
