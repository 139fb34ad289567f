"""Tests for termline.reader -- LineEditor, SimpleReader, open_reader."""

from __future__ import annotations

import threading

import pytest

from termline.config import HISTORY_ENV_VAR, Engine, ReaderConfig, default_history_file
from termline.errors import ReaderBusyError
from termline.history import load_history
from termline.reader import LineEditor, ReadSignal, SimpleReader, open_reader

from .virtual_terminal import ScriptedTerminal


def memory_config(**kwargs) -> ReaderConfig:
    return ReaderConfig(history_file=None, **kwargs)


# ---------------------------------------------------------------------------
# LineEditor
# ---------------------------------------------------------------------------


class TestLineEditorReadLine:
    def test_returns_accepted_text(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"hello\r"))
        assert editor.read_line("> ") == "hello"

    def test_ctrl_c_returns_cancelled(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"abc\x03"))
        assert editor.read_line() is ReadSignal.CANCELLED

    def test_ctrl_d_returns_eof(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"\x04"))
        assert editor.read_line() is ReadSignal.EOF

    def test_end_of_input_returns_eof(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b""))
        assert editor.read_line() is ReadSignal.EOF

    def test_io_failure_returns_eof(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"", fail_at_end=True))
        assert editor.read_line() is ReadSignal.EOF

    def test_busy_editor_rejects_non_blocking_call(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"x\r"))
        editor._session_lock.acquire()
        try:
            with pytest.raises(ReaderBusyError):
                editor.read_line(blocking=False)
        finally:
            editor._session_lock.release()


class TestLineEditorHistory:
    def test_accepted_lines_are_recorded(self) -> None:
        term = ScriptedTerminal(b"one\rtwo\r")
        editor = LineEditor(memory_config(), term)
        editor.read_line()
        editor.read_line()
        assert editor.history == ["two", "one"]

    def test_record_history_false(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"secret\r"))
        assert editor.read_line(record_history=False) == "secret"
        assert editor.history == []

    def test_empty_and_repeated_lines_are_not_recorded(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"\rls\rls\r"))
        for _ in range(3):
            editor.read_line()
        assert editor.history == ["ls"]

    def test_cancelled_lines_are_not_recorded(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"oops\x03"))
        editor.read_line()
        assert editor.history == []

    def test_previous_line_is_reachable_with_up_arrow(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"first\r\x1b[A\r"))
        editor.read_line()
        assert editor.read_line() == "first"

    def test_add_to_history(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"\x10\r"))
        editor.add_to_history("cmd")
        assert editor.read_line() == "cmd"

    def test_max_history_size(self) -> None:
        editor = LineEditor(memory_config(max_history_size=2), ScriptedTerminal())
        for line in ("a", "b", "c"):
            editor.add_to_history(line)
        assert editor.history == ["c", "b"]

    def test_history_persisted(self, tmp_path) -> None:
        path = tmp_path / "hist"
        editor = LineEditor(ReaderConfig(history_file=str(path)), ScriptedTerminal(b"one\rtwo\r"))
        editor.read_line()
        editor.read_line()
        assert path.read_text() == "one\ntwo\n"

    def test_history_loaded_on_start(self, tmp_path) -> None:
        path = tmp_path / "hist"
        path.write_text("old\nnew\n")
        editor = LineEditor(ReaderConfig(history_file=str(path)), ScriptedTerminal(b"\x10\x10\r"))
        assert editor.history == ["new", "old"]
        assert editor.read_line() == "old"

    def test_concurrent_add_to_history(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal())
        threads = [
            threading.Thread(target=editor.add_to_history, args=(f"cmd{i}",))
            for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(editor.history) == sorted(f"cmd{i}" for i in range(20))


class TestLineEditorCompletion:
    def test_provider_used_for_tab(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"/he\t\r"))
        editor.set_completion_provider(lambda partial: ["help"])
        assert editor.read_line() == "/help "

    def test_provider_can_be_cleared(self) -> None:
        editor = LineEditor(memory_config(), ScriptedTerminal(b"/he\t\r"))
        editor.set_completion_provider(lambda partial: ["help"])
        editor.set_completion_provider(None)
        assert editor.read_line() == "/he"

    def test_custom_keybindings(self) -> None:
        config = memory_config(keybindings={"cursorLineStart": "ctrl+t"})
        editor = LineEditor(config, ScriptedTerminal(b"bc\x14a\r"))
        assert editor.read_line() == "abc"


# ---------------------------------------------------------------------------
# SimpleReader
# ---------------------------------------------------------------------------


class TestSimpleReader:
    def test_returns_input(self) -> None:
        reader = SimpleReader(memory_config(), input_fn=lambda prompt: "hello\n")
        assert reader.read_line("> ") == "hello"
        assert reader.history == ["hello"]

    def test_passes_prompt(self) -> None:
        prompts = []

        def fake_input(prompt: str) -> str:
            prompts.append(prompt)
            return "x"

        SimpleReader(memory_config(), input_fn=fake_input).read_line("$ ")
        assert prompts == ["$ "]

    def test_eof(self) -> None:
        def fake_input(prompt: str) -> str:
            raise EOFError

        assert SimpleReader(memory_config(), input_fn=fake_input).read_line() is ReadSignal.EOF

    def test_interrupt(self) -> None:
        def fake_input(prompt: str) -> str:
            raise KeyboardInterrupt

        reader = SimpleReader(memory_config(), input_fn=fake_input)
        assert reader.read_line() is ReadSignal.CANCELLED

    def test_completion_provider_is_ignored(self) -> None:
        reader = SimpleReader(memory_config(), input_fn=lambda prompt: "/he")
        reader.set_completion_provider(lambda partial: ["help"])
        assert reader.read_line() == "/he"


# ---------------------------------------------------------------------------
# open_reader / config
# ---------------------------------------------------------------------------


class TestOpenReader:
    def test_default_is_line_editor(self) -> None:
        reader = open_reader(memory_config(), ScriptedTerminal())
        assert isinstance(reader, LineEditor)

    def test_simple_engine(self) -> None:
        reader = open_reader(memory_config(engine=Engine.SIMPLE))
        assert isinstance(reader, SimpleReader)

    def test_readers_are_independent(self) -> None:
        first = open_reader(memory_config(), ScriptedTerminal())
        second = open_reader(memory_config(), ScriptedTerminal())
        first.add_to_history("only-first")
        assert second.history == []


class TestConfig:
    def test_default_history_file(self, monkeypatch) -> None:
        monkeypatch.delenv(HISTORY_ENV_VAR, raising=False)
        assert default_history_file().endswith("/.config/termline/history")

    def test_history_file_env_override(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv(HISTORY_ENV_VAR, str(tmp_path / "h"))
        assert ReaderConfig().history_file == str(tmp_path / "h")

    def test_defaults(self) -> None:
        config = memory_config()
        assert config.engine is Engine.ADVANCED
        assert config.max_history_size == 1000
        assert config.completion_sentinel == "/"

    def test_missing_history_file_loads_empty(self, tmp_path) -> None:
        path = tmp_path / "none"
        editor = LineEditor(ReaderConfig(history_file=str(path)), ScriptedTerminal())
        assert editor.history == []
        assert load_history(path) == []
