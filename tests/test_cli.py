import json
import os
import signal

import pytest
from typer.testing import CliRunner

from pinch import __version__
from pinch.cli import Runtime, app
from pinch.clipboard import SystemClipboard
from pinch.errors import ClipboardError, StorageError

from .conftest import FakeClipboard


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, pinch_home):
    def _invoke(args, clipboard=None):
        return runner.invoke(app, args, obj=Runtime(clipboard=clipboard or FakeClipboard()))

    return _invoke


@pytest.fixture
def add_clips(invoke):
    """Add each given text through `pinch add`, oldest first."""

    def _pinch(*texts):
        for text in texts:
            result = invoke(["add"], FakeClipboard([text]))
            assert result.exit_code == 0, result.output

    return _pinch


def stored(pinch_home) -> dict:
    return json.loads((pinch_home / "history.json").read_text(encoding="utf-8"))


# region list


def test_no_command_lists_empty_history(invoke):
    result = invoke([])
    assert result.exit_code == 0
    assert "No clips yet. Copy something!" in result.output


def test_list_shows_newest_first(invoke, add_clips):
    add_clips("first", "second\tline")
    result = invoke(["list"])
    assert result.exit_code == 0
    assert "Showing 2 of 2 clips" in result.output
    assert "[0] (just now) second→line" in result.output
    assert "[1] (just now) first" in result.output


def test_list_limits(invoke, add_clips):
    add_clips(*[f"clip {i}" for i in range(12)])

    default = invoke([])
    assert "Showing 10 of 12 clips" in default.output

    short = invoke(["ls", "-n", "2"])
    assert "Showing 2 of 12 clips" in short.output
    assert "clip 11" in short.output
    assert "clip 9" not in short.output

    everything = invoke(["list", "--all"])
    assert "Showing 12 of 12 clips" in everything.output


def test_list_limit_from_environment(invoke, add_clips, monkeypatch):
    monkeypatch.setenv("PINCH_LIST_LIMIT", "1")
    add_clips("a", "b")
    result = invoke(["list"])
    assert "Showing 1 of 2 clips" in result.output


# endregion
# region add


def test_add_pinches_clipboard(invoke, pinch_home):
    result = invoke(["add"], FakeClipboard(["hello"]))
    assert result.exit_code == 0
    assert "Pinched: hello" in result.output
    assert stored(pinch_home)["clips"][0]["content"] == "hello"


def test_add_empty_clipboard(invoke, pinch_home):
    result = invoke(["a"], FakeClipboard(["   "]))
    assert result.exit_code == 0
    assert "Clipboard is empty" in result.output
    assert not (pinch_home / "history.json").exists()


def test_add_duplicate(invoke, add_clips):
    add_clips("same")
    result = invoke(["add"], FakeClipboard(["same"]))
    assert result.exit_code == 0
    assert "Already have this clip" in result.output


def test_add_non_utf8_clipboard(invoke, pinch_home, monkeypatch):
    monkeypatch.setattr(
        "pinch.clipboard.pyperclip.paste", lambda: b"caf\xe9".decode("utf-8")
    )
    result = invoke(["add"], SystemClipboard())
    assert result.exit_code == 0
    assert "Failed to read clipboard" in result.output
    assert not (pinch_home / "history.json").exists()


def test_add_read_failure(invoke, pinch_home):
    result = invoke(["add"], FakeClipboard([ClipboardError("no backend")]))
    assert result.exit_code == 0
    assert "Failed to read clipboard" in result.output
    assert "no backend" not in result.output
    assert not (pinch_home / "history.json").exists()


# endregion
# region copy / show / delete


def test_copy_writes_clip_to_clipboard(invoke, add_clips):
    add_clips("older", "newer")
    clipboard = FakeClipboard()
    result = invoke(["copy", "1"], clipboard)
    assert result.exit_code == 0
    assert "Copied: older" in result.output
    assert clipboard.written == ["older"]


def test_copy_write_failure(invoke, add_clips):
    add_clips("text")
    clipboard = FakeClipboard()
    clipboard.fail_writes = True
    result = invoke(["cp", "0"], clipboard)
    assert result.exit_code == 0
    assert "Failed to write to clipboard" in result.output
    assert "clipboard locked" not in result.output


def test_show_prints_full_content(invoke, add_clips):
    long_text = "line one\n" + "y" * 120
    add_clips(long_text)
    result = invoke(["show", "0"])
    assert result.exit_code == 0
    assert "--- Clip 0 (just now) ---" in result.output
    assert "y" * 120 in result.output
    assert "--- End ---" in result.output


def test_delete_by_position(invoke, add_clips, pinch_home):
    add_clips("a", "b", "c")
    result = invoke(["rm", "1"])
    assert result.exit_code == 0
    assert "Deleted: b" in result.output
    data = stored(pinch_home)
    assert [c["content"] for c in data["clips"]] == ["c", "a"]
    assert data["nextId"] == 4


@pytest.mark.parametrize("command", ["copy", "show", "delete"])
def test_missing_index_prints_message_and_exits_zero(invoke, add_clips, command):
    add_clips("only")
    result = invoke([command, "5"])
    assert result.exit_code == 0
    assert "No clip at index 5" in result.output


@pytest.mark.parametrize("command", ["cp", "s", "rm"])
def test_non_numeric_index_prints_message_and_exits_zero(invoke, add_clips, command):
    add_clips("only")
    result = invoke([command, "abc"])
    assert result.exit_code == 0
    assert "Invalid index: abc" in result.output


# endregion
# region search


def test_search_reports_list_positions(invoke, add_clips):
    add_clips("Alpha one", "beta", "ALPHA two", "gamma")
    result = invoke(["search", "alpha"])
    assert result.exit_code == 0
    assert 'Found 2 clip(s) matching "alpha"' in result.output
    assert "[1] (just now) ALPHA two" in result.output
    assert "[3] (just now) Alpha one" in result.output
    assert "beta" not in result.output


def test_search_without_matches(invoke, add_clips):
    add_clips("something")
    result = invoke(["find", "nothing"])
    assert result.exit_code == 0
    assert 'No clips matching "nothing"' in result.output


# endregion
# region clear


def test_clear_requires_force(invoke, add_clips, pinch_home):
    add_clips("a", "b")
    result = invoke(["clear"])
    assert result.exit_code == 0
    assert "This will delete 2 clip(s)." in result.output
    assert "--force" in result.output
    assert len(stored(pinch_home)["clips"]) == 2


def test_clear_with_force_keeps_id_counter(invoke, add_clips, pinch_home):
    add_clips("a", "b")
    result = invoke(["clear", "--force"])
    assert result.exit_code == 0
    assert "Cleared 2 clip(s)" in result.output
    add_clips("c")
    data = stored(pinch_home)
    assert data["clips"][0]["id"] == 3
    assert data["nextId"] == 4


def test_clear_empty_history(invoke):
    result = invoke(["clear", "-f"])
    assert result.exit_code == 0
    assert "History is already empty" in result.output


# endregion
# region config


def test_config_shows_settings(invoke, add_clips):
    add_clips("a")
    result = invoke(["config"])
    assert result.exit_code == 0
    assert "Max history size: 100" in result.output
    assert "Current clips: 1" in result.output


def test_config_max_truncates(invoke, add_clips, pinch_home):
    add_clips("a", "b", "c")
    result = invoke(["config", "--max", "2"])
    assert result.exit_code == 0
    assert "Max history size: 2" in result.output
    data = stored(pinch_home)
    assert data["maxItems"] == 2
    assert [c["content"] for c in data["clips"]] == ["c", "b"]


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_config_max_rejects_invalid(invoke, add_clips, pinch_home, value):
    add_clips("a")
    result = invoke(["config", f"--max={value}"])
    assert result.exit_code == 0
    assert "Max must be a positive number" in result.output
    assert stored(pinch_home)["maxItems"] == 100


# endregion
# region watch


def test_watch_records_changes_until_interrupted(invoke, pinch_home, monkeypatch):
    monkeypatch.setenv("PINCH_POLL_INTERVAL", "0.01")
    clipboard = FakeClipboard(
        ["baseline", "one", ClipboardError("busy"), "one", "two"],
        on_exhausted=lambda: os.kill(os.getpid(), signal.SIGINT),
    )
    result = invoke(["watch"], clipboard)
    assert result.exit_code == 0
    assert "Watching clipboard..." in result.output
    assert "one" in result.output
    assert "Stopped watching." in result.output
    assert [c["content"] for c in stored(pinch_home)["clips"]] == ["two", "one"]


def test_watch_reports_write_failure_and_stops(invoke, pinch_home, monkeypatch):
    def refuse(self, previous):
        raise StorageError("disk full")

    monkeypatch.setenv("PINCH_POLL_INTERVAL", "0.01")
    monkeypatch.setattr("pinch.store.HistoryStore._persist", refuse)
    handler = signal.getsignal(signal.SIGINT)
    result = invoke(["watch"], FakeClipboard(["base", "one"]))
    assert result.exit_code == 0
    assert result.output.count("disk full") == 1
    assert "Stopped watching." in result.output
    assert not (pinch_home / "history.json").exists()
    assert signal.getsignal(signal.SIGINT) is handler


# endregion
# region misc


def test_version(invoke):
    result = invoke(["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_corrupt_history_is_reported(invoke, pinch_home):
    pinch_home.mkdir(parents=True)
    (pinch_home / "history.json").write_text("not json", encoding="utf-8")
    result = invoke(["list"])
    assert result.exit_code == 0
    assert result.output.count("is corrupt") == 1
    assert (pinch_home / "history.json").read_text(encoding="utf-8") == "not json"


# endregion
