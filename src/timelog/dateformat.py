"""Moment-style date pattern formatting and strict parsing."""

from __future__ import annotations

import re
from datetime import datetime
from functools import lru_cache
from typing import Optional

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

# Longest tokens first so "YYYY" wins over "YY" and "MMMM" over "MM".
_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|d|HH|H|hh|h|mm|m|ss|s|SSS|A|a|.",
    re.DOTALL,
)

_TOKEN_REGEX = {
    "YYYY": r"\d{4}",
    "YY": r"\d{2}",
    "MMMM": "|".join(MONTH_NAMES),
    "MMM": "|".join(name[:3] for name in MONTH_NAMES),
    "MM": r"\d{2}",
    "M": r"\d{1,2}",
    "Do": r"\d{1,2}(?:st|nd|rd|th)",
    "DD": r"\d{2}",
    "D": r"\d{1,2}",
    "dddd": "|".join(WEEKDAY_NAMES),
    "ddd": "|".join(name[:3] for name in WEEKDAY_NAMES),
    "d": r"[0-6]",
    "HH": r"\d{2}",
    "H": r"\d{1,2}",
    "hh": r"\d{2}",
    "h": r"\d{1,2}",
    "mm": r"\d{2}",
    "m": r"\d{1,2}",
    "ss": r"\d{2}",
    "s": r"\d{1,2}",
    "SSS": r"\d{3}",
    "A": r"AM|PM",
    "a": r"am|pm",
}


class DateFormatError(ValueError):
    """Raised when a date pattern cannot be compiled."""


def _ordinal(day: int) -> str:
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


@lru_cache(maxsize=64)
def tokenize(pattern: str) -> tuple[tuple[bool, str], ...]:
    """Split a pattern into (is_token, text) pairs.

    Bracketed sections are returned as literals without their brackets.
    """
    if not isinstance(pattern, str) or not pattern:
        raise DateFormatError(f"Invalid date pattern: {pattern!r}")

    parts: list[tuple[bool, str]] = []
    for match in _TOKEN_RE.finditer(pattern):
        text = match.group(0)
        if text.startswith("[") and text.endswith("]") and len(text) >= 2:
            parts.append((False, text[1:-1]))
        elif text in _TOKEN_REGEX:
            parts.append((True, text))
        else:
            parts.append((False, text))
    return tuple(parts)


@lru_cache(maxsize=64)
def _compile(pattern: str) -> tuple[re.Pattern, tuple[str, ...]]:
    regex_parts = []
    tokens = []
    for is_token, text in tokenize(pattern):
        if is_token:
            regex_parts.append(f"({_TOKEN_REGEX[text]})")
            tokens.append(text)
        else:
            regex_parts.append(re.escape(text))
    return re.compile("".join(regex_parts)), tuple(tokens)


def _format_token(token: str, instant: datetime) -> str:
    hour12 = instant.hour % 12 or 12
    if token == "YYYY":
        return f"{instant.year:04d}"
    if token == "YY":
        return f"{instant.year % 100:02d}"
    if token == "MMMM":
        return MONTH_NAMES[instant.month - 1]
    if token == "MMM":
        return MONTH_NAMES[instant.month - 1][:3]
    if token == "MM":
        return f"{instant.month:02d}"
    if token == "M":
        return str(instant.month)
    if token == "Do":
        return _ordinal(instant.day)
    if token == "DD":
        return f"{instant.day:02d}"
    if token == "D":
        return str(instant.day)
    if token == "dddd":
        return WEEKDAY_NAMES[instant.weekday()]
    if token == "ddd":
        return WEEKDAY_NAMES[instant.weekday()][:3]
    if token == "d":
        # Sunday is 0, matching moment.
        return str((instant.weekday() + 1) % 7)
    if token == "HH":
        return f"{instant.hour:02d}"
    if token == "H":
        return str(instant.hour)
    if token == "hh":
        return f"{hour12:02d}"
    if token == "h":
        return str(hour12)
    if token == "mm":
        return f"{instant.minute:02d}"
    if token == "m":
        return str(instant.minute)
    if token == "ss":
        return f"{instant.second:02d}"
    if token == "s":
        return str(instant.second)
    if token == "SSS":
        return f"{instant.microsecond // 1000:03d}"
    if token == "A":
        return "AM" if instant.hour < 12 else "PM"
    if token == "a":
        return "am" if instant.hour < 12 else "pm"
    raise DateFormatError(f"Unknown token: {token}")


def format_datetime(pattern: str, instant: datetime) -> str:
    """Format an instant against a moment-style pattern.

    Raises:
        DateFormatError: If the pattern cannot be compiled
    """
    return "".join(
        _format_token(text, instant) if is_token else text
        for is_token, text in tokenize(pattern)
    )


def parse_strict(text: str, pattern: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Parse text that must match the pattern exactly.

    Returns None when the text does not match or names an impossible date.
    When the pattern has no date tokens the date of ``now`` (default: today)
    is used; missing month or day default to the start of the period.

    Raises:
        DateFormatError: If the pattern cannot be compiled
    """
    regex, tokens = _compile(pattern)
    match = regex.fullmatch(text)
    if not match:
        return None

    values: dict[str, str] = {}
    for token, value in zip(tokens, match.groups()):
        # Repeated tokens must agree with each other.
        if token in values and values[token] != value:
            return None
        values[token] = value

    year = month = day = None
    if "YYYY" in values:
        year = int(values["YYYY"])
    elif "YY" in values:
        short = int(values["YY"])
        year = short + (1900 if short > 68 else 2000)

    if "MMMM" in values:
        month = MONTH_NAMES.index(values["MMMM"]) + 1
    elif "MMM" in values:
        month = [name[:3] for name in MONTH_NAMES].index(values["MMM"]) + 1
    elif "MM" in values:
        month = int(values["MM"])
    elif "M" in values:
        month = int(values["M"])

    if "Do" in values:
        day = int(values["Do"][:-2])
        if _ordinal(day) != values["Do"]:
            return None
    elif "DD" in values:
        day = int(values["DD"])
    elif "D" in values:
        day = int(values["D"])

    base = now or datetime.now()
    if year is None and month is None and day is None:
        year, month, day = base.year, base.month, base.day
    else:
        if year is None:
            year = base.year
        if month is None:
            month = base.month if day is not None and "YYYY" not in values and "YY" not in values else 1
        if day is None:
            day = 1

    meridiem = values.get("A", values.get("a", "")).upper()
    hour = 0
    for token in ("HH", "H"):
        if token in values:
            hour = int(values[token])
    for token in ("hh", "h"):
        if token in values:
            hour = int(values[token])
            if not 1 <= hour <= 12:
                return None
            hour = hour % 12
            if meridiem == "PM":
                hour += 12
    if meridiem and not any(token in values for token in ("hh", "h")):
        if hour > 12:
            return None
        if meridiem == "PM" and hour < 12:
            hour += 12

    minute = int(values.get("mm", values.get("m", "0")))
    second = int(values.get("ss", values.get("s", "0")))
    microsecond = int(values.get("SSS", "0")) * 1000

    try:
        parsed = datetime(year, month, day, hour, minute, second, microsecond)
    except ValueError:
        return None

    for token in ("dddd", "ddd"):
        if token in values and _format_token(token, parsed) != values[token]:
            return None
    if "d" in values and _format_token("d", parsed) != values["d"]:
        return None

    return parsed


def is_after(a: datetime, b: datetime) -> bool:
    return a > b
