"""Line editor keybindings manager."""

from __future__ import annotations

from typing import Literal

from termline.keys import Key, KeyId

EditorAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteCharOrEof",
    "deleteWordBackward",
    "deleteWordForward",
    "deleteToLineStart",
    "deleteToLineEnd",
    # History
    "historyPrevious",
    "historyNext",
    # Screen
    "clearScreen",
    # Completion
    "complete",
    # Line
    "submit",
    "cancel",
]

EditorKeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_EDITOR_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorWordLeft": "alt+b",
    "cursorWordRight": "alt+f",
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "deleteCharOrEof": "ctrl+d",
    "deleteWordBackward": "ctrl+w",
    "deleteWordForward": "alt+d",
    "deleteToLineStart": "ctrl+u",
    "deleteToLineEnd": "ctrl+k",
    # History
    "historyPrevious": ["up", "ctrl+p"],
    "historyNext": ["down", "ctrl+n"],
    # Screen
    "clearScreen": "ctrl+l",
    # Completion
    "complete": "tab",
    # Line
    "submit": "enter",
    "cancel": "ctrl+c",
}


class EditorKeybindingsManager:
    """Maps key identifiers to editor actions.

    Starts from ``DEFAULT_EDITOR_KEYBINDINGS``; entries in *config* replace
    the default keys of the actions they name.
    """

    def __init__(
        self, config: EditorKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, EditorAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditorKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, key_array in self._action_to_keys.items():
            for key_id in key_array:
                self._key_to_action[key_id] = action

    def action_for(self, key: Key) -> EditorAction | None:
        """Return the action bound to *key*, or ``None`` if unbound."""
        key_id = key.id
        if key_id is None:
            return None
        return self._key_to_action.get(key_id)
