"""The fixed, ordered catalogue of mood categories."""

MOOD_NAMES: tuple[str, ...] = ("sad", "angry", "calm", "happy", "tired")
MOOD_COUNT = len(MOOD_NAMES)

# calm, happy
DEFAULT_POSITIVE_MOODS: frozenset[int] = frozenset({2, 3})


def mood_name(index: int | None) -> str:
    if index is None or not 0 <= index < MOOD_COUNT:
        return "unset"
    return MOOD_NAMES[index]


def parse_mood(value: str) -> int:
    """Resolve a mood given by name or by index.

    Raises:
        ValueError: If the value names no mood in the catalogue
    """
    cleaned = value.strip().lower()
    if cleaned in MOOD_NAMES:
        return MOOD_NAMES.index(cleaned)
    try:
        index = int(cleaned)
    except ValueError:
        raise ValueError(
            f"Unknown mood {value!r}; expected one of {', '.join(MOOD_NAMES)}"
        ) from None
    if not 0 <= index < MOOD_COUNT:
        raise ValueError(f"Mood index {index} is outside 0..{MOOD_COUNT - 1}")
    return index
