"""Wires editor notifications and commands to the detection core."""

import logging
from datetime import datetime
from typing import Callable, Optional

from .buffer import LineBuffer, utf16_length
from .config import DEFAULT_HEADER_FORMAT, TimelogConfig
from .dateformat import DateFormatError, format_datetime
from .debounce import Debouncer
from .detector import should_insert_prefix
from .headers import has_dated_header
from .inserter import apply_insertion, compute_insertion, format_log_prefix
from .ledger import LedgerWriter
from .models.editor import Insertion, Position, StatusState
from .navigator import find_latest_dated_header

logger = logging.getLogger(__name__)

NO_HEADERS_NOTICE = "No dated headers found"


def buffer_lines(buffer: LineBuffer) -> list[str]:
    """Snapshot every line of a buffer."""
    return [buffer.get_line(index) for index in range(buffer.line_count())]


class TimelogController:
    """Holds the session state the detection core needs.

    The settings snapshot, the daily-note header pattern and the instant of
    the last automatic insertion live here and are passed explicitly into
    the pure detection functions on every call.
    """

    def __init__(
        self,
        config: Optional[TimelogConfig] = None,
        header_format: str = DEFAULT_HEADER_FORMAT,
        ledger_writer: Optional[LedgerWriter] = None,
        notify: Optional[Callable[[str], None]] = None,
        document: Optional[str] = None,
    ):
        """Initialize controller.

        Args:
            config: Settings snapshot (defaults if None)
            header_format: Daily-note date pattern, read once per session
            ledger_writer: Optional ledger for recording automatic edits
            notify: Callable that shows a transient notice to the user
            document: Optional document name recorded in ledger events
        """
        self.config = config or TimelogConfig()
        self.header_format = header_format
        self.ledger_writer = ledger_writer
        self.notify = notify or (lambda message: logger.info(message))
        self.document = document
        self.last_insertion: Optional[datetime] = None
        self.status = StatusState()

    def update_config(self, config: TimelogConfig, buffer: Optional[LineBuffer] = None) -> StatusState:
        """Swap in a new settings snapshot from the settings boundary."""
        self.config = config
        self._record(
            "SETTINGS_UPDATED",
            config.model_dump(by_alias=True),
        )
        return self.refresh_status(buffer)

    def editor_change_handler(self) -> Debouncer:
        """Return a debounced on_editor_change for the host to subscribe.

        The debounced call runs on a timer thread and edits the buffer there.
        Hosts that own a UI thread should call flush() on the returned
        Debouncer from that thread instead of letting the timer fire.
        """
        return Debouncer(self.on_editor_change, self.config.debounce_ms)

    def on_editor_change(self, buffer: LineBuffer, now: Optional[datetime] = None) -> bool:
        """Handle one edit notification; returns True if a prefix was inserted."""
        now = now or datetime.now()
        self.refresh_status(buffer)

        cursor = buffer.get_cursor()
        lines = buffer_lines(buffer)
        if not should_insert_prefix(
            cursor.line,
            lines,
            self.config,
            self.header_format,
            self.last_insertion,
            now,
        ):
            return False

        self.insert_log_line(buffer, now)
        return True

    def insert_log_line(self, buffer: LineBuffer, now: Optional[datetime] = None) -> Insertion:
        """Insert the timestamp prefix on the cursor line."""
        now = now or datetime.now()
        cursor = buffer.get_cursor()
        line_text = buffer.get_line(cursor.line)

        timestamp = format_log_prefix(self.config.log_format, now)
        insertion = compute_insertion(line_text, cursor.column, timestamp)
        apply_insertion(buffer, cursor.line, insertion)
        self.last_insertion = now

        logger.info(f"Inserted {insertion.text!r} on line {cursor.line} at column {insertion.insert_at}")
        self._record(
            "PREFIX_INSERTED",
            {
                "line": cursor.line,
                "insert_at": insertion.insert_at,
                "text": insertion.text,
            },
        )
        return insertion

    def start_log_entry(self, buffer: LineBuffer, now: Optional[datetime] = None) -> str:
        """Insert a dated section header for today at the cursor."""
        now = now or datetime.now()
        try:
            date_text = format_datetime(self.header_format, now)
        except DateFormatError as e:
            logger.warning(f"Falling back to {DEFAULT_HEADER_FORMAT!r}: {e}")
            date_text = format_datetime(DEFAULT_HEADER_FORMAT, now)

        header = f"## [[{date_text}]]\n\n"
        cursor = buffer.get_cursor()
        buffer.replace_range(header, cursor)
        # Cursor lands on the blank line below the new header.
        buffer.set_cursor(Position(line=cursor.line + 2, column=0))
        self.refresh_status(buffer)

        self._record("LOG_ENTRY_STARTED", {"line": cursor.line, "date": date_text})
        return header

    def jump_to_latest_header(self, buffer: LineBuffer) -> Optional[Position]:
        """Move the cursor below the most recent dated header.

        Returns the new cursor position, or None after notifying the user
        when the document has no dated header.
        """
        target_line = find_latest_dated_header(buffer_lines(buffer), self.header_format)
        if target_line is None:
            self.notify(NO_HEADERS_NOTICE)
            self._record("HEADER_NOT_FOUND", {})
            return None

        if target_line + 1 >= buffer.line_count():
            header_text = buffer.get_line(target_line)
            buffer.replace_range("\n", Position(line=target_line, column=utf16_length(header_text)))

        cursor = Position(line=min(target_line + 1, buffer.line_count() - 1), column=0)
        buffer.set_cursor(cursor)
        buffer.scroll_into_view(cursor, cursor, True)

        logger.info(f"Jumped to dated header on line {target_line}")
        self._record("HEADER_JUMPED", {"header_line": target_line, "cursor_line": cursor.line})
        return cursor

    def refresh_status(self, buffer: Optional[LineBuffer] = None) -> StatusState:
        """Recompute the status surface for the active document."""
        if buffer is None or not has_dated_header(buffer_lines(buffer), self.header_format):
            self.status = StatusState(visible=False, label="")
        else:
            self.status = StatusState(
                visible=True,
                label=f"Logging active {self.config.replacement_interval}s",
            )
        return self.status

    def _record(self, event_type, payload: dict) -> None:
        if self.ledger_writer is not None:
            self.ledger_writer.append_event(
                event_type=event_type,
                payload=payload,
                document=self.document,
            )
