"""Timelog - automatic timestamp prefixes for dated log sections in Markdown notes."""

__version__ = "0.1.0"
