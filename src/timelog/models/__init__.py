"""Pydantic models for Timelog."""

from .editor import DatedHeader, Insertion, Position, StatusState
from .ledger import LedgerEvent, LedgerEventType

__all__ = [
    # Editor
    "Position",
    "Insertion",
    "DatedHeader",
    "StatusState",
    # Ledger
    "LedgerEvent",
    "LedgerEventType",
]
