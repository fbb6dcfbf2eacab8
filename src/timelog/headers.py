"""Heading classification for dated log sections."""

import re
from datetime import datetime
from typing import Iterable, Optional

from .dateformat import DateFormatError, parse_strict

_HEADING_PREFIX = re.compile(r"^#+\s*")
_WIKILINK = re.compile(r"\[\[(.+?)\]\]")


def header_date_text(line: str) -> Optional[str]:
    """Return the text of a heading that should hold a date.

    Heading markers are stripped, a wikilink is unwrapped and a display
    alias after ``|`` is dropped. Returns None for non-heading lines.
    """
    trimmed = line.strip()
    if not trimmed.startswith("#"):
        return None

    content = _HEADING_PREFIX.sub("", trimmed).strip()
    link_match = _WIKILINK.search(content)
    link_content = link_match.group(1) if link_match else content
    return link_content.split("|")[0]


def extract_header_date(line: str, header_format: str) -> Optional[datetime]:
    """Parse the date of a dated section header.

    Args:
        line: Raw document line
        header_format: Daily-note date pattern, e.g. YYYY-MM-DD

    Returns:
        Parsed date, or None if the line is not a dated header. A pattern
        that cannot be compiled never matches.
    """
    date_text = header_date_text(line)
    if date_text is None:
        return None

    try:
        return parse_strict(date_text, header_format)
    except DateFormatError:
        return None


def is_dated_header(line: str, header_format: str) -> bool:
    return extract_header_date(line, header_format) is not None


def is_normal_header(line: str) -> bool:
    """True for any heading line, dated or not."""
    return line.lstrip().startswith("#")


def has_dated_header(lines: Iterable[str], header_format: str) -> bool:
    return any(is_dated_header(line, header_format) for line in lines)
