"""Keyboard input decoding for terminal applications.

Converts a raw byte stream into logical ``Key`` values. Plain bytes are
classified directly; an ESC byte starts a multi-byte sequence that is
resolved by reading forward. Decoding never pushes bytes back: whatever was
consumed while resolving a sequence is gone, and an unresolvable sequence
decodes to ``Key.unknown()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from termline.errors import EndOfInput

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

KeyId = str

KeyKind = Literal["char", "control", "named", "alt", "unknown"]

NamedKey = Literal[
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "delete",
    "enter",
    "backspace",
    "tab",
]

ByteSource = Callable[[], int]

# ---------------------------------------------------------------------------
# Byte constants
# ---------------------------------------------------------------------------

ESC = 0x1B
TAB = 0x09
LF = 0x0A
CR = 0x0D
BACKSPACE = 0x08
DEL = 0x7F

CTRL_A = 0x01
CTRL_B = 0x02
CTRL_C = 0x03
CTRL_D = 0x04
CTRL_E = 0x05
CTRL_F = 0x06
CTRL_K = 0x0B
CTRL_L = 0x0C
CTRL_N = 0x0E
CTRL_P = 0x10
CTRL_U = 0x15
CTRL_W = 0x17

# Final bytes of ``ESC [ x`` sequences
CSI_FINAL_KEYS: dict[int, NamedKey] = {
    ord("A"): "up",
    ord("B"): "down",
    ord("C"): "right",
    ord("D"): "left",
    ord("H"): "home",
    ord("F"): "end",
}

# Parameter bytes of ``ESC [ n ~`` sequences
CSI_TILDE_KEYS: dict[int, NamedKey] = {
    ord("1"): "home",
    ord("3"): "delete",
    ord("4"): "end",
}


# ---------------------------------------------------------------------------
# Key value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """A logical key.

    ``code`` holds the codepoint for ``char`` keys, the raw byte for
    ``control`` and ``alt`` keys, and is unused for ``named`` and ``unknown``
    keys. ``name`` is only set for ``named`` keys.
    """

    kind: KeyKind
    code: int = 0
    name: NamedKey | None = None

    @staticmethod
    def char(codepoint: int) -> Key:
        return Key("char", codepoint)

    @staticmethod
    def control(code: int) -> Key:
        return Key("control", code)

    @staticmethod
    def named(name: NamedKey) -> Key:
        return Key("named", name=name)

    @staticmethod
    def alt(byte: int) -> Key:
        return Key("alt", byte)

    @staticmethod
    def unknown() -> Key:
        return Key("unknown")

    @property
    def text(self) -> str:
        """The character a ``char`` key inserts, or ``""`` for other keys."""
        return chr(self.code) if self.kind == "char" else ""

    @property
    def id(self) -> KeyId | None:
        """Identifier used by the keybinding table, e.g. ``"ctrl+a"``."""
        if self.kind == "char":
            return chr(self.code)
        if self.kind == "named":
            return self.name
        if self.kind == "control":
            return _control_id(self.code)
        if self.kind == "alt":
            ch = chr(self.code)
            if self.code == ESC:
                return "alt+escape"
            if self.code < 0x20:
                return "ctrl+alt+" + chr(self.code + ord("a") - 1)
            if ch.isupper():
                return "shift+alt+" + ch.lower()
            return "alt+" + ch
        return None

    def __str__(self) -> str:
        return self.id or "unknown"


def _control_id(code: int) -> KeyId:
    if 1 <= code <= 26:
        return "ctrl+" + chr(code + ord("a") - 1)
    if code == 0:
        return "ctrl+space"
    if code == ESC:
        return "escape"
    return f"ctrl+{chr(code + 0x40)}"


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


def _utf8_length(lead: int) -> int:
    """Number of continuation bytes announced by a UTF-8 lead byte, or -1."""
    if 0xC2 <= lead <= 0xDF:
        return 1
    if 0xE0 <= lead <= 0xEF:
        return 2
    if 0xF0 <= lead <= 0xF4:
        return 3
    return -1


class KeyDecoder:
    """Reads bytes from *read_byte* and yields logical keys.

    *read_byte* blocks until a byte is available and raises ``EndOfInput``
    at the end of the stream or ``InputFailure`` when the source breaks.
    Only the first byte of a key may end the stream; running out of input
    in the middle of a sequence decodes to ``Key.unknown()``.
    """

    def __init__(self, read_byte: ByteSource) -> None:
        self._read_byte = read_byte

    def next_key(self) -> Key:
        byte = self._read_byte()

        if byte == ESC:
            try:
                return self._decode_escape()
            except EndOfInput:
                return Key.unknown()

        if byte >= 0x80:
            try:
                return self._decode_utf8(byte)
            except EndOfInput:
                return Key.unknown()

        return classify_byte(byte)

    # -- private ------------------------------------------------------------

    def _decode_escape(self) -> Key:
        byte = self._read_byte()
        if byte != ord("["):
            # Meta key: ESC followed by a single byte
            return Key.alt(byte)
        return self._decode_csi()

    def _decode_csi(self) -> Key:
        byte = self._read_byte()

        name = CSI_FINAL_KEYS.get(byte)
        if name is not None:
            return Key.named(name)

        name = CSI_TILDE_KEYS.get(byte)
        if name is not None:
            if self._read_byte() == ord("~"):
                return Key.named(name)
            return Key.unknown()

        return Key.unknown()

    def _decode_utf8(self, lead: int) -> Key:
        remaining = _utf8_length(lead)
        if remaining < 0:
            return Key.unknown()

        data = bytearray([lead])
        for _ in range(remaining):
            byte = self._read_byte()
            if byte & 0xC0 != 0x80:
                return Key.unknown()
            data.append(byte)

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return Key.unknown()

        if not text.isprintable():
            return Key.unknown()
        return Key.char(ord(text))


def classify_byte(byte: int) -> Key:
    """Classify a single non-escape ASCII byte."""
    if byte in (CR, LF):
        return Key.named("enter")
    if byte in (DEL, BACKSPACE):
        return Key.named("backspace")
    if byte == TAB:
        return Key.named("tab")
    if byte < 0x20:
        return Key.control(byte)
    if byte < 0x7F:
        return Key.char(byte)
    return Key.unknown()


def decode_keys(data: bytes) -> list[Key]:
    """Decode every key in *data*. Convenient for scripted input."""
    it = iter(data)

    def _read() -> int:
        try:
            return next(it)
        except StopIteration:
            raise EndOfInput("no more bytes") from None

    decoder = KeyDecoder(_read)
    keys: list[Key] = []
    while True:
        try:
            keys.append(decoder.next_key())
        except EndOfInput:
            return keys
