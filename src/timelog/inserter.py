"""Timestamp prefix computation and application."""

import logging
from datetime import datetime

from .buffer import LineBuffer, to_utf16_column, utf16_length
from .config import DEFAULT_LOG_FORMAT
from .dateformat import DateFormatError, format_datetime
from .models.editor import Insertion, Position

logger = logging.getLogger(__name__)


def format_log_prefix(log_format: str, now: datetime) -> str:
    """Format the entry timestamp, falling back to HH:mm.

    Never raises; the fallback is not written back to the settings.
    """
    try:
        return format_datetime(log_format, now)
    except DateFormatError as e:
        logger.warning(f"Falling back to {DEFAULT_LOG_FORMAT!r}: {e}")
        return format_datetime(DEFAULT_LOG_FORMAT, now)


def build_log_header(timestamp_text: str) -> str:
    return f"**{timestamp_text}**: "


def compute_insertion(line_text: str, cursor_column: int, timestamp_text: str) -> Insertion:
    """Compute where the prefix goes and where the cursor lands.

    The prefix goes two characters past the first ``*`` (after an emphasis
    opener the editor already typed), or at the start of the line when there
    is none. The cursor keeps its position relative to the typed text.

    Args:
        line_text: Current line
        cursor_column: Cursor column in UTF-16 units
        timestamp_text: Formatted timestamp

    Returns:
        Insertion with UTF-16 offsets
    """
    text = build_log_header(timestamp_text)
    marker = line_text.find("*")
    if marker == -1:
        insert_at = 0
    else:
        insert_at = min(to_utf16_column(line_text, marker) + 2, utf16_length(line_text))

    return Insertion(
        insert_at=insert_at,
        new_cursor_column=cursor_column + utf16_length(text),
        text=text,
    )


def apply_insertion(buffer: LineBuffer, line: int, insertion: Insertion) -> Position:
    """Write the prefix into the buffer and move the cursor after it."""
    buffer.replace_range(insertion.text, Position(line=line, column=insertion.insert_at))
    cursor = Position(line=line, column=insertion.new_cursor_column)
    buffer.set_cursor(cursor)
    return cursor
