# region Docstring
"""
pinch.watcher
Polling bridge from the system clipboard into the history store.
Overview:
- ClipboardWatcher reads the clipboard once for a baseline, then reads it again
    every `interval` seconds and inserts content that changed and is not blank.
- Read failures are expected (another process may hold the clipboard) and only
    skip the current tick.
- stop() sets a threading.Event; the loop waits on that event between ticks, so it
    ends at the next wait without aborting a read that is in progress.
Contents:
- WatcherState: idle / polling / stopped.
- ClipboardWatcher: run(), tick(), stop().
"""
# endregion
# region Imports
import enum
import logging
import threading
from logging import Logger as T_Logger
from typing import Callable, Optional

from pinch.clipboard import Clipboard
from pinch.errors import ClipboardError
from pinch.models import ClipRecord
from pinch.store import HistoryStore

# endregion
logger: T_Logger = logging.getLogger("pinch").getChild("watcher")


class WatcherState(str, enum.Enum):
    IDLE = "idle"
    POLLING = "polling"
    STOPPED = "stopped"


class ClipboardWatcher:
    """
    Sequential clipboard poller.

    Attributes:
        store (HistoryStore): Receives every new clip.
        clipboard (Clipboard): The clipboard being watched.
        interval (float): Seconds between two reads.
        on_insert (Optional[Callable]): Called with each record the store accepted.
        last_content (str): Content seen by the last successful read that changed it.
        state (WatcherState): Current loop state.
    """

    def __init__(
        self,
        store: HistoryStore,
        clipboard: Clipboard,
        interval: float = 0.5,
        on_insert: Optional[Callable[[ClipRecord], None]] = None,
    ) -> None:
        self.store = store
        self.clipboard = clipboard
        self.interval = interval
        self.on_insert = on_insert
        self.last_content = ""
        self.state = WatcherState.IDLE
        self._stop = threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Request the loop to end before the next tick."""
        self._stop.set()

    def baseline(self) -> None:
        """Record the current clipboard so pre-existing content is not captured."""
        try:
            self.last_content = self.clipboard.read()
        except ClipboardError:
            logger.debug("Initial clipboard read failed, using empty baseline.")
            self.last_content = ""

    def tick(self) -> Optional[ClipRecord]:
        """Poll the clipboard once and insert changed content."""
        self.state = WatcherState.POLLING
        try:
            try:
                content = self.clipboard.read()
            except ClipboardError:
                logger.debug("Clipboard read failed, skipping tick.")
                return None
            if content == self.last_content or not content.strip():
                return None
            self.last_content = content
            record = self.store.insert(content)
            if record is not None and self.on_insert is not None:
                self.on_insert(record)
            return record
        finally:
            self.state = WatcherState.IDLE

    def run(self) -> None:
        """Poll until stop() is called."""
        logger.info(f"Watching clipboard every {self.interval}s")
        self.baseline()
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self.interval)
        self.state = WatcherState.STOPPED
        logger.info("Stopped watching clipboard.")


__all__ = ["ClipboardWatcher", "WatcherState"]
