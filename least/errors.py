"""Exception taxonomy for pager failures.

Every fatal condition derives from ``PagerError`` so the CLI can report it as a
single human-readable message. Decoding and scrolling never raise.
"""

from __future__ import annotations

from pathlib import Path


class PagerError(Exception):
    """Base class for failures that terminate the pager."""


class SourceOpenError(PagerError):
    """Input path is missing or cannot be opened for reading."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"'{path}': {reason}")
        self.path = path
        self.reason = reason


class SourceIsDirectory(PagerError):
    """Input path names a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"'{path}' is a directory.")
        self.path = path


class IOReadError(PagerError):
    """Reading from an already opened source failed mid-stream."""


class ReaderCrashed(PagerError):
    """Reader thread stopped on an unexpected exception."""


class ChannelDisconnected(PagerError):
    """Every event producer closed while the consumer was still waiting."""


class TerminalUnavailable(PagerError):
    """No terminal is available to read key presses from."""


class TerminalInputError(PagerError):
    """Reading key presses from the terminal failed mid-session."""
