"""Exception hierarchy for termline.

Only the terminal boundary raises these. Buffer and history operations are
total and never raise.
"""

from __future__ import annotations


class TermlineError(Exception):
    """Base class for all termline errors."""


class EndOfInput(TermlineError):
    """The input source reached a clean end of stream."""


class InputFailure(TermlineError):
    """The underlying input or output source is broken."""

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ReaderBusyError(TermlineError):
    """Another read_line call already owns the terminal."""
