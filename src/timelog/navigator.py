"""Navigation to the most recent dated section."""

from typing import Iterable, Iterator, Optional

from .dateformat import is_after
from .headers import extract_header_date
from .models.editor import DatedHeader


def iter_dated_headers(lines: Iterable[str], header_format: str) -> Iterator[DatedHeader]:
    """Yield every dated header in document order."""
    for line_index, line in enumerate(lines):
        parsed = extract_header_date(line, header_format)
        if parsed is not None:
            yield DatedHeader(line_index=line_index, date=parsed)


def find_latest_dated_header(lines: Iterable[str], header_format: str) -> Optional[int]:
    """Return the line index of the chronologically latest dated header.

    Only a strictly later date replaces the current best, so ties keep the
    earliest line. Returns None when the document has no dated header.
    """
    latest: Optional[DatedHeader] = None
    for header in iter_dated_headers(lines, header_format):
        if latest is None or is_after(header.date, latest.date):
            latest = header
    return latest.line_index if latest else None
