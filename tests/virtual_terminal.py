"""Scripted terminal for testing -- implements the Terminal protocol in-memory.

``ScriptedTerminal`` feeds a fixed byte script to ``read_byte`` and records
every write, so whole edit sessions can run without a TTY.
"""

from __future__ import annotations

from termline.errors import EndOfInput, InputFailure


class ScriptedTerminal:
    """In-memory terminal that replays input bytes and records output.

    Parameters
    ----------
    script:
        Bytes returned one at a time by ``read_byte``.
    fail_at_end:
        Raise ``InputFailure`` instead of ``EndOfInput`` once the script is
        exhausted.
    """

    def __init__(self, script: bytes = b"", *, fail_at_end: bool = False) -> None:
        self._script = bytearray(script)
        self._pos = 0
        self._fail_at_end = fail_at_end
        self._buffer: list[str] = []
        self.raw = False
        self.enter_count = 0
        self.exit_count = 0

    # -- Terminal protocol --------------------------------------------------

    def enter_raw_mode(self) -> str:
        self.raw = True
        self.enter_count += 1
        return "handle"

    def exit_raw_mode(self, handle: object) -> None:
        assert handle == "handle"
        self.raw = False
        self.exit_count += 1

    def read_byte(self) -> int:
        if self._pos >= len(self._script):
            if self._fail_at_end:
                raise InputFailure("scripted failure")
            raise EndOfInput("script exhausted")
        byte = self._script[self._pos]
        self._pos += 1
        return byte

    def write(self, data: str) -> None:
        """Append *data* to the internal buffer."""
        self._buffer.append(data)

    # -- Test helpers -------------------------------------------------------

    def feed(self, data: bytes) -> None:
        """Append more bytes to the input script."""
        self._script.extend(data)

    @property
    def consumed(self) -> int:
        """Number of script bytes read so far."""
        return self._pos

    @property
    def output(self) -> str:
        """Return everything written to the terminal as a single string."""
        return "".join(self._buffer)

    @property
    def writes(self) -> list[str]:
        return list(self._buffer)

    def clear_buffer(self) -> None:
        """Discard all recorded output."""
        self._buffer.clear()
