"""Command history: in-session navigation and on-disk persistence.

History lists are kept newest first in memory. The history file stores one
entry per line, oldest first, with a trailing newline.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Sequence

from termline.buffer import EditBuffer

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY_SIZE = 1_000


# ---------------------------------------------------------------------------
# List operations
# ---------------------------------------------------------------------------


def add_entry(
    line: str,
    history: Sequence[str],
    max_size: int = DEFAULT_MAX_HISTORY_SIZE,
) -> list[str]:
    """Return *history* with *line* prepended.

    Empty lines and exact repeats of the newest entry are not added.
    Duplicates further back are allowed. The result is capped at
    *max_size* entries, dropping the oldest.
    """
    if not line or (history and history[0] == line):
        return list(history)
    return [line, *history][:max_size]


def search_history(
    history: Sequence[str],
    pattern: str | re.Pattern[str],
) -> list[tuple[int, str]]:
    """Return ``(index, entry)`` pairs whose entry matches *pattern*.

    A string pattern matches as a substring; a compiled pattern matches
    anywhere in the entry.
    """
    if isinstance(pattern, str):
        return [(i, line) for i, line in enumerate(history) if pattern in line]
    return [(i, line) for i, line in enumerate(history) if pattern.search(line)]


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def load_history(
    path: str | os.PathLike[str],
    max_size: int = DEFAULT_MAX_HISTORY_SIZE,
) -> list[str]:
    """Load a history file, newest entry first.

    A missing or unreadable file loads as an empty history.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Failed to read history file %s: %s", path, exc)
        return []

    lines = [line for line in content.split("\n") if line]
    lines.reverse()
    return lines[:max_size]


def save_history(history: Sequence[str], path: str | os.PathLike[str]) -> bool:
    """Write *history* (newest first) to *path*, oldest entry first.

    Parent directories are created as needed. Returns ``False`` and logs a
    warning when the file cannot be written.
    """
    target = Path(path)
    content = "".join(f"{line}\n" for line in reversed(history))
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to save history to %s: %s", target, exc)
        return False
    return True


# ---------------------------------------------------------------------------
# Navigator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistoryNavigator:
    """Browses a fixed history list from within one edit session.

    ``history`` is newest first. ``history_index`` ranges over
    ``[0, len(history)]`` and addresses entries in chronological order:
    index ``len(history)`` is the live draft, ``len(history) - 1`` the newest
    entry and ``0`` the oldest, so it is not an index into ``history``; use
    ``entry()``. ``saved_line`` holds the draft captured when navigation first
    leaves the live position.
    """

    history: tuple[str, ...] = ()
    history_index: int = 0
    saved_line: str | None = None

    @classmethod
    def start(cls, history: Sequence[str]) -> HistoryNavigator:
        """Create a navigator positioned at the live draft."""
        entries = tuple(history)
        return cls(history=entries, history_index=len(entries))

    @property
    def at_live(self) -> bool:
        return self.history_index == len(self.history)

    def entry(self, index: int) -> str:
        """The entry at chronological *index*."""
        return self.history[len(self.history) - 1 - index]

    def prev(self, buffer: EditBuffer) -> tuple[HistoryNavigator, EditBuffer]:
        """Step to the next older entry and load it into *buffer*."""
        if self.history_index == 0:
            return self, buffer

        saved_line = buffer.text if self.at_live else self.saved_line
        index = self.history_index - 1
        nav = replace(self, history_index=index, saved_line=saved_line)
        return nav, buffer.replace_text(self.entry(index))

    def next(self, buffer: EditBuffer) -> tuple[HistoryNavigator, EditBuffer]:
        """Step to the next newer entry, or back to the saved draft."""
        if self.at_live:
            return self, buffer

        index = self.history_index + 1
        nav = replace(self, history_index=index)
        if nav.at_live:
            return nav, buffer.replace_text(self.saved_line or "")
        return nav, buffer.replace_text(self.entry(index))
