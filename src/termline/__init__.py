"""termline: interactive line editing for text terminals."""

# Edit buffer
from termline.buffer import EditBuffer

# Configuration
from termline.config import Engine, ReaderConfig

# Dispatching
from termline.dispatcher import CompletionProvider, Dispatcher

# Errors
from termline.errors import EndOfInput, InputFailure, ReaderBusyError, TermlineError

# History
from termline.history import (
    HistoryNavigator,
    add_entry,
    load_history,
    save_history,
    search_history,
)

# Keybindings
from termline.keybindings import (
    DEFAULT_EDITOR_KEYBINDINGS,
    EditorAction,
    EditorKeybindingsManager,
)

# Keyboard input decoding
from termline.keys import Key, KeyDecoder, KeyId, decode_keys

# Kill ring
from termline.kill_ring import KillRing

# Readers
from termline.reader import LineEditor, LineReader, ReadSignal, SimpleReader, open_reader

# Rendering
from termline.render import TerminalRenderer

# Session
from termline.session import edit_line, run_session
from termline.state import Accepted, Cancelled, Done, Editing, LineState

# Terminal
from termline.terminal import ProcessTerminal, Terminal, raw_mode

__all__ = [
    # Edit buffer
    "EditBuffer",
    "KillRing",
    # Configuration
    "Engine",
    "ReaderConfig",
    # Dispatching
    "CompletionProvider",
    "Dispatcher",
    # Errors
    "EndOfInput",
    "InputFailure",
    "ReaderBusyError",
    "TermlineError",
    # History
    "HistoryNavigator",
    "add_entry",
    "load_history",
    "save_history",
    "search_history",
    # Keybindings
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditorAction",
    "EditorKeybindingsManager",
    # Keys
    "Key",
    "KeyDecoder",
    "KeyId",
    "decode_keys",
    # Readers
    "LineEditor",
    "LineReader",
    "ReadSignal",
    "SimpleReader",
    "open_reader",
    # Rendering
    "TerminalRenderer",
    # Session
    "Accepted",
    "Cancelled",
    "Done",
    "Editing",
    "LineState",
    "edit_line",
    "run_session",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "raw_mode",
]
