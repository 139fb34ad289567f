"""Terminal abstraction for raw-mode byte input and output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that
reads single bytes from a file descriptor, writes to an output stream, and
switches the input into raw mode via :mod:`tty` and :mod:`termios`.

Raw mode is a process-wide resource: ``raw_mode()`` acquires it under a
lock and always releases it, whichever way the guarded block exits.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import threading
import tty
from contextlib import contextmanager
from typing import Any, Iterator, Protocol, TextIO

from termline.errors import EndOfInput, InputFailure, ReaderBusyError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

CLEAR_LINE = "\r\x1b[K"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
CURSOR_LEFT_FMT = "\x1b[{}D"
CURSOR_LEFT = "\x1b[D"
BELL = "\a"
NEWLINE = "\r\n"

_RAW_MODE_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal I/O primitives the editor consumes."""

    def enter_raw_mode(self) -> Any: ...

    def exit_raw_mode(self, handle: Any) -> None: ...

    def read_byte(self) -> int: ...

    def write(self, data: str) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by a file descriptor and a text output stream.

    Defaults to ``sys.stdin`` and ``sys.stdout``. When the input is not a
    TTY, raw mode is skipped and bytes are read as they arrive.
    """

    def __init__(
        self,
        input_fd: int | None = None,
        output: TextIO | None = None,
    ) -> None:
        self._fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._output = sys.stdout if output is None else output

    def enter_raw_mode(self) -> list | None:
        """Switch the input to raw mode, returning the previous attributes."""
        if not os.isatty(self._fd):
            logger.debug("Input fd %d is not a TTY, reading without raw mode", self._fd)
            return None
        try:
            original = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
        except termios.error as exc:
            raise InputFailure(f"cannot enter raw mode: {exc}") from exc
        logger.debug("Entered raw mode on fd %d", self._fd)
        return original

    def exit_raw_mode(self, handle: list | None) -> None:
        """Restore the attributes saved by ``enter_raw_mode``."""
        if handle is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, handle)
        except termios.error as exc:
            logger.error("Failed to restore terminal mode on fd %d: %s", self._fd, exc)
            return
        logger.debug("Restored terminal mode on fd %d", self._fd)

    def read_byte(self) -> int:
        """Block until one byte arrives."""
        try:
            data = os.read(self._fd, 1)
        except OSError as exc:
            raise InputFailure(f"read failed: {exc}", exc) from exc
        if not data:
            raise EndOfInput("input closed")
        return data[0]

    def write(self, data: str) -> None:
        """Write directly to the output stream, bypassing buffering."""
        try:
            self._output.write(data)
            self._output.flush()
        except OSError as exc:
            raise InputFailure(f"write failed: {exc}", exc) from exc


# ---------------------------------------------------------------------------
# Scoped raw-mode acquisition
# ---------------------------------------------------------------------------


@contextmanager
def raw_mode(terminal: Terminal, *, blocking: bool = True) -> Iterator[Terminal]:
    """Hold the process-wide raw-mode resource for the duration of a block.

    A second caller waits for the first to finish, or gets
    ``ReaderBusyError`` when *blocking* is false. The terminal mode is
    restored on every exit path.
    """
    if not _RAW_MODE_LOCK.acquire(blocking=blocking):
        raise ReaderBusyError("raw mode is held by another read_line call")
    try:
        handle = terminal.enter_raw_mode()
        try:
            yield terminal
        finally:
            terminal.exit_raw_mode(handle)
    finally:
        _RAW_MODE_LOCK.release()
