from itertools import count
from pathlib import Path
from typing import Callable, Optional

import pytest

from pinch.config import get_settings
from pinch.errors import ClipboardError
from pinch.store import HistoryStore

PINCH_ENV_VARS = (
    "PINCH_HOME",
    "PINCH_HISTORY_FILE",
    "PINCH_MAX_ITEMS",
    "PINCH_POLL_INTERVAL",
    "PINCH_LIST_LIMIT",
    "PINCH_LOG_LEVEL",
)


class FakeClipboard:
    """
    In-memory clipboard.

    Each read pops the next scripted value (an exception instance is raised
    instead of returned). Once the script is exhausted the last value keeps
    being returned and `on_exhausted` is called, if set.
    """

    def __init__(self, values=None, on_exhausted: Optional[Callable[[], None]] = None):
        self.values = list(values or [])
        self.on_exhausted = on_exhausted
        self.content = ""
        self.written: list[str] = []
        self.reads = 0
        self.fail_writes = False

    def read(self) -> str:
        self.reads += 1
        if self.values:
            value = self.values.pop(0)
            if isinstance(value, Exception):
                raise value
            self.content = value
        elif self.on_exhausted is not None:
            self.on_exhausted()
        return self.content

    def write(self, text: str) -> None:
        if self.fail_writes:
            raise ClipboardError("clipboard locked")
        self.written.append(text)
        self.content = text


@pytest.fixture
def pinch_home(tmp_path, monkeypatch) -> Path:
    """Point pinch at a temporary config directory with a clean environment."""
    for name in PINCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "pinch-home"
    monkeypatch.setenv("PINCH_HOME", str(home))
    get_settings.cache_clear()
    yield home
    get_settings.cache_clear()


@pytest.fixture
def clock() -> Callable[[], int]:
    """Deterministic millisecond clock advancing one second per call."""
    ticks = count(start=1_700_000_000_000, step=1000)
    return lambda: next(ticks)


@pytest.fixture
def history_path(tmp_path) -> Path:
    return tmp_path / "history.json"


@pytest.fixture
def store(history_path, clock) -> HistoryStore:
    return HistoryStore(history_path, clock=clock)


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()
