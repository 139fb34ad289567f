"""Read loop: decode, dispatch and render until the line is done."""

from __future__ import annotations

import logging
from typing import Sequence

from termline.dispatcher import Dispatcher
from termline.errors import EndOfInput, InputFailure
from termline.keys import KeyDecoder
from termline.render import TerminalRenderer
from termline.state import Cancelled, Done, Editing, LineState, Outcome
from termline.terminal import Terminal, raw_mode

logger = logging.getLogger(__name__)


def edit_line(
    terminal: Terminal,
    dispatcher: Dispatcher,
    line: LineState,
) -> Outcome:
    """Drive one edit session on a terminal that is already in raw mode.

    End of input and I/O failures end the session as ``Cancelled``.
    """
    decoder = KeyDecoder(terminal.read_byte)
    state: Editing | Done = Editing(line)

    try:
        TerminalRenderer(terminal).write_prompt(line.prompt)
        while isinstance(state, Editing):
            key = decoder.next_key()
            state = dispatcher.dispatch(key, state.line)
    except EndOfInput:
        logger.debug("Input ended during read_line")
        return Cancelled("eof")
    except InputFailure as exc:
        logger.error("Terminal I/O failed during read_line: %s", exc)
        return Cancelled("io-error")

    return state.outcome


def run_session(
    terminal: Terminal,
    dispatcher: Dispatcher,
    prompt: str,
    history: Sequence[str] = (),
    *,
    blocking: bool = True,
) -> Outcome:
    """Acquire raw mode, run one edit session, and release raw mode."""
    line = LineState.new(prompt, history)
    try:
        with raw_mode(terminal, blocking=blocking):
            return edit_line(terminal, dispatcher, line)
    except InputFailure as exc:
        logger.error("Could not set up the terminal: %s", exc)
        return Cancelled("io-error")
