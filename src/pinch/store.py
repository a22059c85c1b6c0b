# region Docstring
"""
pinch.store
Bounded, newest-first clipboard history persisted to a JSON file.
Overview:
- HistoryStore loads the history once when constructed and writes it back after
    every mutating operation, so there is no separate save step.
- Insertion suppresses blank content and exact duplicates of the current head,
    evicts the oldest clip when the capacity is exceeded, and never reuses ids.
Contents:
- Classes:
    - HistoryStore:
        list_all, insert, get_by_index, get_by_id, index_of, delete_by_id, clear,
        search, get_max_items, set_max_items.
Design notes:
- Only the head is compared for duplicates. Copying X, then Y, then X again gives
    three entries; seeing the same clipboard content on repeated polls gives one.
- clear() keeps next_id, so ids keep growing across clears.
- Writes go to a temporary file in the same directory which then replaces the
    history file. Concurrent pinch processes are last-writer-wins.
"""
# endregion
# region Imports
import logging
import os
import tempfile
from logging import Logger as T_Logger
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from pinch.errors import InvalidInputError, StorageError
from pinch.models import ClipRecord, HistoryState, now_ms

# endregion
logger: T_Logger = logging.getLogger("pinch").getChild("store")


# region HistoryStore
class HistoryStore:
    """
    Clipboard history backed by a single JSON file.

    Attributes:
        path (Path): Location of the persisted history.
        state (HistoryState): The in-memory history, mutated in place.
    """

    def __init__(
        self,
        path: Path,
        default_max_items: int = 100,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.path = Path(path)
        self._clock = clock or now_ms
        self.state = self._load(default_max_items)

    # region Persistence
    def _load(self, default_max_items: int) -> HistoryState:
        if not self.path.exists():
            logger.debug(f"No history at {self.path}, starting fresh.")
            return HistoryState(max_items=default_max_items)
        try:
            raw = self.path.read_text(encoding="utf-8")
            state = HistoryState.model_validate_json(raw)
        except OSError as e:
            raise StorageError(f"Could not read history file {self.path}: {e}") from e
        except ValidationError as e:
            raise StorageError(
                f"History file {self.path} is corrupt: {e.error_count()} error(s)"
            ) from e
        logger.debug(f"Loaded {len(state.clips)} clip(s) from {self.path}")
        return state

    def _snapshot(self) -> HistoryState:
        return self.state.model_copy(deep=True)

    def _persist(self, previous: HistoryState) -> None:
        """
        Write the current state to disk.

        On failure the temporary file is removed, the in-memory state is put back
        to `previous` and StorageError is raised, so memory never runs ahead of disk.
        """
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(self.state.to_json())
            os.replace(tmp_name, self.path)
        except OSError as e:
            self.state = previous
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write history file {self.path}: {e}") from e

    # endregion
    # region Queries
    def list_all(self) -> List[ClipRecord]:
        """Return every stored clip, newest first."""
        return list(self.state.clips)

    def get_by_index(self, index: int) -> Optional[ClipRecord]:
        """Return the clip at list position `index`, or None when out of range."""
        if index < 0 or index >= len(self.state.clips):
            return None
        return self.state.clips[index]

    def get_by_id(self, clip_id: int) -> Optional[ClipRecord]:
        for clip in self.state.clips:
            if clip.id == clip_id:
                return clip
        return None

    def index_of(self, clip_id: int) -> int:
        """List position of the clip with `clip_id`, -1 if it is not stored."""
        for position, clip in enumerate(self.state.clips):
            if clip.id == clip_id:
                return position
        return -1

    def search(self, query: str) -> List[ClipRecord]:
        """Case-insensitive substring search over clip content, newest first."""
        needle = query.lower()
        return [c for c in self.state.clips if needle in c.content.lower()]

    def get_max_items(self) -> int:
        return self.state.max_items

    # endregion
    # region Mutations
    def insert(self, content: str) -> Optional[ClipRecord]:
        """
        Add `content` as the new head of the history.

        Args:
            content (str): Captured clipboard text.

        Returns:
            Optional[ClipRecord]: The stored record, or None when the content is
                blank or identical to the current head (nothing is changed).
        """
        clips = self.state.clips
        if clips and clips[0].content == content:
            logger.debug("Skipping duplicate of the most recent clip.")
            return None
        if not content or not content.strip():
            logger.debug("Skipping empty clipboard content.")
            return None

        previous = self._snapshot()
        record = ClipRecord.capture(
            id=self.state.next_id,
            content=content,
            timestamp=self._clock(),
        )
        clips.insert(0, record)
        self.state.next_id += 1
        if len(clips) > self.state.max_items:
            evicted = clips.pop()
            logger.debug(f"Evicted clip {evicted.id} (capacity {self.state.max_items})")
        self._persist(previous)
        logger.info(f"Stored clip {record.id} ({len(content)} chars)")
        return record

    def delete_by_id(self, clip_id: int) -> bool:
        """Remove the clip with `clip_id`. Returns False if there was none."""
        position = self.index_of(clip_id)
        if position == -1:
            return False
        previous = self._snapshot()
        del self.state.clips[position]
        self._persist(previous)
        logger.info(f"Deleted clip {clip_id}")
        return True

    def clear(self) -> None:
        """Remove every clip. The id counter is left as is."""
        count = len(self.state.clips)
        previous = self._snapshot()
        self.state.clips = []
        self._persist(previous)
        logger.info(f"Cleared {count} clip(s), next id stays {self.state.next_id}")

    def set_max_items(self, max_items: int) -> None:
        """Change the capacity, dropping the oldest clips if it shrinks below the size."""
        if max_items < 1:
            raise InvalidInputError("Max must be a positive number")
        previous = self._snapshot()
        self.state.max_items = max_items
        if len(self.state.clips) > max_items:
            dropped = len(self.state.clips) - max_items
            self.state.clips = self.state.clips[:max_items]
            logger.info(f"Dropped {dropped} clip(s) to fit new capacity {max_items}")
        self._persist(previous)

    # endregion


# endregion

__all__ = ["HistoryStore"]
