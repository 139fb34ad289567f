"""Key dispatcher: maps one key to the next session state.

Each dispatch applies the bound editing operation, issues the matching
render calls, and returns either ``Editing`` with the new line state or
``Done`` with the outcome of the read.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from termline.buffer import EditBuffer
from termline.history import HistoryNavigator
from termline.keybindings import EditorAction, EditorKeybindingsManager
from termline.keys import Key
from termline.render import TerminalRenderer
from termline.state import Accepted, Cancelled, Done, Editing, LineState, SessionState
from termline.utils import is_whitespace_char

logger = logging.getLogger(__name__)

CompletionProvider = Callable[[str], Sequence[str]]

DEFAULT_COMPLETION_SENTINEL = "/"

# Actions that are pure buffer transformations
_BUFFER_ACTIONS: dict[EditorAction, Callable[[EditBuffer], EditBuffer]] = {
    "cursorLeft": EditBuffer.move_left,
    "cursorRight": EditBuffer.move_right,
    "cursorWordLeft": EditBuffer.move_word_backward,
    "cursorWordRight": EditBuffer.move_word_forward,
    "cursorLineStart": EditBuffer.move_to_start,
    "cursorLineEnd": EditBuffer.move_to_end,
    "deleteCharBackward": EditBuffer.backward_delete,
    "deleteCharForward": EditBuffer.forward_delete,
    "deleteWordBackward": EditBuffer.kill_word_backward,
    "deleteWordForward": EditBuffer.delete_word_forward,
    "deleteToLineStart": EditBuffer.kill_to_start,
    "deleteToLineEnd": EditBuffer.kill_to_end,
}


class Dispatcher:
    """Ties decoded keys to buffer, history and terminal operations."""

    def __init__(
        self,
        renderer: TerminalRenderer,
        keybindings: EditorKeybindingsManager | None = None,
        completion_provider: CompletionProvider | None = None,
        completion_sentinel: str = DEFAULT_COMPLETION_SENTINEL,
    ) -> None:
        self._renderer = renderer
        self._keybindings = keybindings or EditorKeybindingsManager()
        self._completion_provider = completion_provider
        self._sentinel = completion_sentinel

    def dispatch(self, key: Key, line: LineState) -> SessionState:
        action = self._keybindings.action_for(key)

        if action is None:
            if key.kind == "char":
                return self._update(line, line.buffer.insert(key.text))
            # Unbound and unknown keys are ignored
            return Editing(line)

        if action == "submit":
            self._renderer.newline()
            return Done(Accepted(line.buffer.text))

        if action == "cancel":
            self._renderer.newline("^C")
            return Done(Cancelled("interrupt"))

        if action == "deleteCharOrEof":
            if line.buffer.is_empty:
                self._renderer.newline()
                return Done(Cancelled("eof"))
            return self._update(line, line.buffer.forward_delete())

        if action == "historyPrevious":
            return self._navigate(line, *line.navigator.prev(line.buffer))

        if action == "historyNext":
            return self._navigate(line, *line.navigator.next(line.buffer))

        if action == "clearScreen":
            self._renderer.clear_screen()
            return self._redraw(line)

        if action == "complete":
            return Editing(self._complete(line))

        return self._update(line, _BUFFER_ACTIONS[action](line.buffer))

    # -- completion ---------------------------------------------------------

    def _complete(self, line: LineState) -> LineState:
        """Run the completion provider on the token after the sentinel.

        Only the single-match case changes the buffer: the whole line becomes
        the completed command and anything after the token is dropped.
        """
        text = line.buffer.text
        if self._completion_provider is None or not text.startswith(self._sentinel):
            return line

        body = text[len(self._sentinel) :]
        end = next(
            (i for i, ch in enumerate(body) if is_whitespace_char(ch)), len(body)
        )
        partial = body[:end]

        matches = list(self._completion_provider(partial))
        logger.debug("Completion for %r returned %d candidates", partial, len(matches))

        if not matches:
            self._renderer.bell()
            return line

        if len(matches) == 1:
            completed = self._sentinel + matches[0] + " "
            updated = line.with_buffer(line.buffer.replace_text(completed))
            self._renderer.redraw(updated.prompt, updated.buffer)
            return updated

        self._renderer.show_candidates(matches, self._sentinel)
        self._renderer.redraw(line.prompt, line.buffer)
        return line

    # -- rendering helpers ----------------------------------------------------

    def _update(self, line: LineState, buffer: EditBuffer) -> SessionState:
        if buffer == line.buffer:
            return Editing(line)
        return self._redraw(line.with_buffer(buffer))

    def _navigate(
        self, line: LineState, navigator: HistoryNavigator, buffer: EditBuffer
    ) -> SessionState:
        if navigator == line.navigator:
            return Editing(line)
        return self._redraw(LineState(line.prompt, buffer, navigator))

    def _redraw(self, line: LineState) -> SessionState:
        self._renderer.redraw(line.prompt, line.buffer)
        return Editing(line)
