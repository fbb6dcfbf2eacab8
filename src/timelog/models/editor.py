"""Pydantic models for editor positions, insertions and status."""

from datetime import datetime

from pydantic import BaseModel, Field


class Position(BaseModel):
    """A cursor position inside a line buffer.

    Columns count UTF-16 code units, the unit editors report cursors in.
    """

    line: int = Field(ge=0, description="Zero-based line index")
    column: int = Field(default=0, ge=0, description="UTF-16 code unit offset into the line")

    model_config = {"frozen": True}


class Insertion(BaseModel):
    """Where and what to insert for a timestamp prefix."""

    insert_at: int = Field(ge=0, description="UTF-16 offset the prefix is inserted at")
    new_cursor_column: int = Field(ge=0, description="Cursor column after insertion")
    text: str = Field(description="Prefix text, e.g. '**09:30**: '")

    model_config = {"frozen": True}


class DatedHeader(BaseModel):
    """A heading line whose content parses as a date.

    Recomputed from text on every query; never cached across edits.
    """

    line_index: int = Field(ge=0, description="Zero-based index of the header line")
    date: datetime = Field(description="Parsed header date")

    model_config = {"frozen": True}


class StatusState(BaseModel):
    """Status surface shown by the host."""

    visible: bool = Field(default=False, description="Whether the status item is shown")
    label: str = Field(default="", description="Status text")

    model_config = {"frozen": True}
