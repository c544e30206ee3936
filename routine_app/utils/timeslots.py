import re
from typing import Optional

HHMM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: str) -> int:
    """
    Strict "HH:MM" (24h) -> minutes since midnight.
    "09:05" -> 545, "9:05" -> 545, "24:00" / "bad" -> ValueError
    """
    m = HHMM_PATTERN.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid time '{value}', expected HH:MM (24h)")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM (24h)")
    return hours * 60 + minutes


def to_minutes(value: Optional[str]) -> int:
    """
    Lenient version used on stored data: anything unparsable counts as 0.
    """
    if not value:
        return 0
    try:
        return parse_hhmm(value)
    except ValueError:
        return 0


def ordinal(n: int) -> str:
    # 1 -> 1st, 2 -> 2nd, 11 -> 11th, 23 -> 23rd
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
