"""Detection of lines that already carry a timestamp prefix."""

import re

from .dateformat import DateFormatError, parse_strict

_LEADING_LIST_REMNANT = re.compile(r"^[-\s]+")


def is_logged_line(line: str, log_format: str) -> bool:
    """Check whether a line already starts with a timestamp.

    Emphasis markers and one leading run of hyphens/whitespace are removed,
    which is where an earlier insertion would have put its timestamp. The
    next ``len(log_format)`` characters are then parsed strictly.

    The slice length comes from the pattern string, not from formatted
    output, so patterns whose output width differs from their own length
    (``H:mm``, ``[at] HH:mm``) can misclassify lines.
    """
    stripped = _LEADING_LIST_REMNANT.sub("", line.replace("*", ""), count=1)
    candidate = stripped[: len(log_format)]

    try:
        return parse_strict(candidate, log_format) is not None
    except DateFormatError:
        return False
