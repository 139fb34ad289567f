"""Configuration for line readers."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

from termline.dispatcher import DEFAULT_COMPLETION_SENTINEL
from termline.history import DEFAULT_MAX_HISTORY_SIZE
from termline.keybindings import EditorKeybindingsConfig

HISTORY_ENV_VAR = "TERMLINE_HISTORY"


class Engine(enum.Enum):
    """Which reader implementation ``open_reader`` builds."""

    SIMPLE = "simple"
    ADVANCED = "advanced"


def default_history_file() -> str:
    """History path from ``TERMLINE_HISTORY``, else ``~/.config/termline/history``."""
    override = os.environ.get(HISTORY_ENV_VAR, "")
    if override:
        return str(Path(override).expanduser())
    return str(Path.home() / ".config" / "termline" / "history")


@dataclass
class ReaderConfig:
    """Reader configuration.

    ``engine`` defaults to ``Engine.ADVANCED``, the raw-mode editor; choose
    ``Engine.SIMPLE`` for hosts without a usable terminal. Set
    ``history_file`` to ``None`` to keep history in memory only.
    """

    engine: Engine = Engine.ADVANCED
    history_file: str | None = field(default_factory=default_history_file)
    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE
    completion_sentinel: str = DEFAULT_COMPLETION_SENTINEL
    keybindings: EditorKeybindingsConfig = field(default_factory=dict)
