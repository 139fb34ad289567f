"""Line reader handles.

``open_reader`` builds one of two reader variants from a ``ReaderConfig``:

* ``LineEditor``: the raw-mode engine with keybindings, history navigation
  and tab completion.
* ``SimpleReader``: hands line editing to the host through ``input()``;
  keeps history but has no completion.

Both own their history list and persist it to the configured file. A
reader is an explicit handle: callers keep it and call its methods.
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Protocol

from termline.config import Engine, ReaderConfig
from termline.dispatcher import CompletionProvider, Dispatcher
from termline.errors import ReaderBusyError
from termline.history import add_entry, load_history, save_history
from termline.keybindings import EditorKeybindingsManager
from termline.render import TerminalRenderer
from termline.session import run_session
from termline.state import Accepted, Outcome
from termline.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)


class ReadSignal(enum.Enum):
    """Non-text results of ``read_line``."""

    EOF = "eof"
    CANCELLED = "cancelled"


ReadResult = str | ReadSignal


class LineReader(Protocol):
    """Interface shared by the reader variants."""

    def read_line(self, prompt: str = "> ", *, record_history: bool = True) -> ReadResult: ...

    def add_to_history(self, line: str) -> None: ...

    def set_completion_provider(self, provider: CompletionProvider | None) -> None: ...


class _HistoryOwner:
    """History list shared with other threads through a lock."""

    def __init__(self, config: ReaderConfig) -> None:
        self._config = config
        self._state_lock = threading.Lock()
        if config.history_file:
            self._history = load_history(config.history_file, config.max_history_size)
        else:
            self._history = []

    @property
    def history(self) -> list[str]:
        """Snapshot of the history, newest first."""
        with self._state_lock:
            return list(self._history)

    def add_to_history(self, line: str) -> None:
        with self._state_lock:
            updated = add_entry(line, self._history, self._config.max_history_size)
            if updated == self._history:
                return
            self._history = updated
            if self._config.history_file:
                save_history(updated, self._config.history_file)


class LineEditor(_HistoryOwner):
    """Raw-mode line editor.

    One ``read_line`` runs at a time per editor; a concurrent caller waits,
    or gets ``ReaderBusyError`` when it passes ``blocking=False``.
    ``add_to_history`` and ``set_completion_provider`` may be called from
    other threads while a read is in progress; they take effect from the
    next read.
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        terminal: Terminal | None = None,
    ) -> None:
        super().__init__(config or ReaderConfig())
        self._terminal = terminal
        self._keybindings = EditorKeybindingsManager(self._config.keybindings)
        self._session_lock = threading.Lock()
        self._completion_provider: CompletionProvider | None = None

    @property
    def terminal(self) -> Terminal:
        if self._terminal is None:
            self._terminal = ProcessTerminal()
        return self._terminal

    def read_line(
        self,
        prompt: str = "> ",
        *,
        record_history: bool = True,
        blocking: bool = True,
    ) -> ReadResult:
        """Read one line with full editing.

        Returns the accepted text, ``ReadSignal.CANCELLED`` for Ctrl-C, or
        ``ReadSignal.EOF`` for Ctrl-D on an empty line, end of input or a
        broken terminal. Accepted lines are added to history unless
        *record_history* is false.
        """
        if not self._session_lock.acquire(blocking=blocking):
            raise ReaderBusyError("read_line is already in progress")
        try:
            with self._state_lock:
                history = tuple(self._history)
                provider = self._completion_provider
            terminal = self.terminal
            dispatcher = Dispatcher(
                TerminalRenderer(terminal),
                self._keybindings,
                provider,
                self._config.completion_sentinel,
            )
            outcome = run_session(terminal, dispatcher, prompt, history, blocking=blocking)
        finally:
            self._session_lock.release()

        return self._finish(outcome, record_history)

    def set_completion_provider(self, provider: CompletionProvider | None) -> None:
        with self._state_lock:
            self._completion_provider = provider

    def _finish(self, outcome: Outcome, record_history: bool) -> ReadResult:
        if isinstance(outcome, Accepted):
            if record_history:
                self.add_to_history(outcome.text)
            return outcome.text
        if outcome.reason == "interrupt":
            return ReadSignal.CANCELLED
        return ReadSignal.EOF


class SimpleReader(_HistoryOwner):
    """Reader that lets the host do the line editing."""

    def __init__(
        self,
        config: ReaderConfig | None = None,
        input_fn: Callable[[str], str] = input,
    ) -> None:
        super().__init__(config or ReaderConfig())
        self._input_fn = input_fn

    def read_line(self, prompt: str = "> ", *, record_history: bool = True) -> ReadResult:
        try:
            line = self._input_fn(prompt)
        except EOFError:
            return ReadSignal.EOF
        except KeyboardInterrupt:
            return ReadSignal.CANCELLED

        line = line.rstrip("\n")
        if record_history:
            self.add_to_history(line)
        return line

    def set_completion_provider(self, provider: CompletionProvider | None) -> None:
        logger.debug("SimpleReader does not support completion; provider ignored")


def open_reader(
    config: ReaderConfig | None = None,
    terminal: Terminal | None = None,
) -> LineReader:
    """Build the reader variant selected by ``config.engine``."""
    config = config or ReaderConfig()
    if config.engine is Engine.SIMPLE:
        return SimpleReader(config)
    return LineEditor(config, terminal)
