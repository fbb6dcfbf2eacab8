"""Pydantic models for ledger events."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

LedgerEventType = Literal[
    "LOG_ENTRY_STARTED",
    "PREFIX_INSERTED",
    "HEADER_JUMPED",
    "HEADER_NOT_FOUND",
    "SETTINGS_UPDATED",
]


class LedgerEvent(BaseModel):
    """Append-only ledger event record.
    
    Written as JSONL to <vault>/.timelog/ledger.jsonl.
    Never mutate or delete; only append.
    """

    event_id: str = Field(description="Unique event identifier (uuid4)")
    run_id: str = Field(description="Run/session identifier (uuid4)")
    ts: datetime = Field(description="Event timestamp (ISO8601 UTC)")
    event_type: LedgerEventType = Field(description="Event type")
    document: str | None = Field(default=None, description="Document the event applies to")
    payload: dict = Field(default_factory=dict, description="Event-specific data")

    model_config = {"frozen": True}
