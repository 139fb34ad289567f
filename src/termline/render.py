"""Line renderer: turns buffer state into terminal writes."""

from __future__ import annotations

from typing import Sequence

from termline.buffer import EditBuffer
from termline.terminal import (
    BELL,
    CLEAR_LINE,
    CLEAR_SCREEN,
    CURSOR_LEFT,
    CURSOR_LEFT_FMT,
    NEWLINE,
    Terminal,
)
from termline.utils import visible_width


def cursor_left(columns: int) -> str:
    """Escape sequence moving the cursor *columns* to the left."""
    if columns <= 0:
        return ""
    if columns == 1:
        return CURSOR_LEFT
    return CURSOR_LEFT_FMT.format(columns)


class TerminalRenderer:
    """Redraws the prompt line on every change.

    Each redraw rewrites the whole line: return to column 0, clear to end
    of line, write prompt and text, then step back over the text after the
    cursor. Widths are measured in terminal columns.
    """

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal

    def render_line(self, prompt: str, buffer: EditBuffer) -> str:
        """Return the bytes a redraw of *buffer* writes."""
        out = CLEAR_LINE + prompt + buffer.text
        return out + cursor_left(visible_width(buffer.after_cursor))

    def redraw(self, prompt: str, buffer: EditBuffer) -> None:
        self._terminal.write(self.render_line(prompt, buffer))

    def write_prompt(self, prompt: str) -> None:
        self._terminal.write(prompt)

    def clear_screen(self) -> None:
        self._terminal.write(CLEAR_SCREEN)

    def bell(self) -> None:
        self._terminal.write(BELL)

    def newline(self, marker: str = "") -> None:
        """Finish the input line, optionally echoing *marker* first (``^C``)."""
        self._terminal.write(marker + NEWLINE)

    def show_candidates(self, candidates: Sequence[str], prefix: str = "") -> None:
        """Print completion candidates one per line below the input line."""
        lines = "".join(f"  {prefix}{candidate}{NEWLINE}" for candidate in candidates)
        self._terminal.write(NEWLINE + lines)
