"""Decides whether the line under the cursor should get a timestamp prefix."""

import logging
from datetime import datetime
from typing import Optional, Sequence

from .config import TimelogConfig
from .headers import is_dated_header, is_normal_header
from .line_state import is_logged_line

logger = logging.getLogger(__name__)

LIST_MARKERS = ("*", "-")


def is_within_interval(
    last_insertion: Optional[datetime],
    now: datetime,
    min_interval_seconds: int,
) -> bool:
    """True when enough time has passed since the last insertion.

    Named after the setting it enforces: insertions are allowed only
    outside the rate-limit window.
    """
    if last_insertion is None:
        return True
    return (now - last_insertion).total_seconds() >= min_interval_seconds


def passes_list_mode(line: str) -> bool:
    """List-mode gate for the current line.

    Only top-level list items qualify. Nested items are skipped so that
    quickly added sibling bullets do not collide, and a line the editor has
    just opened with ``**`` is left alone until the next evaluation.
    """
    if not line.strip().startswith(LIST_MARKERS):
        return False
    if line.startswith((" ", "\t")):
        return False
    if line.startswith("**"):
        return False
    return True


def find_section_header(cursor_line: int, lines: Sequence[str], header_format: str) -> Optional[int]:
    """Walk upward from the line above the cursor to the nearest header.

    Returns the index of the enclosing dated header, or None when a generic
    header comes first or no header exists above the cursor.
    """
    for index in range(cursor_line - 1, -1, -1):
        line = lines[index]
        if is_dated_header(line, header_format):
            return index
        if is_normal_header(line):
            return None
    return None


def should_insert_prefix(
    cursor_line: int,
    lines: Sequence[str],
    config: TimelogConfig,
    header_format: str,
    last_insertion: Optional[datetime],
    now: datetime,
) -> bool:
    """Run the ordered insertion policy for one document snapshot.

    1. Rate limit against the previous insertion.
    2. Skip lines that already carry a timestamp.
    3. In list mode, require an unnested list item.
    4. Require a dated header above the cursor with no generic header between.
    """
    if not is_within_interval(last_insertion, now, config.replacement_interval):
        logger.debug(f"Rate limited: last insertion at {last_insertion}")
        return False

    line = lines[cursor_line]
    if is_logged_line(line, config.log_format):
        logger.debug(f"Line {cursor_line} already logged")
        return False

    if config.use_list and not passes_list_mode(line):
        logger.debug(f"Line {cursor_line} rejected by list mode")
        return False

    header_index = find_section_header(cursor_line, lines, header_format)
    if header_index is None:
        logger.debug(f"Line {cursor_line} is not inside a dated section")
        return False

    logger.debug(f"Line {cursor_line} is inside dated section at line {header_index}")
    return True
