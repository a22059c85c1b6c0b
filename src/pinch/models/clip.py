# region Docstring
"""
pinch.models.clip
Domain models for the persisted clipboard history.
Overview:
- Provides Pydantic models for a single captured clip and for the whole persisted
    history aggregate, both serializable to the JSON file kept in the config directory.
Contents:
- Constants:
    - PREVIEW_LIMIT, PREVIEW_CUT, ELLIPSIS: preview truncation parameters.
    - NEWLINE_GLYPH, TAB_GLYPH: visible stand-ins for whitespace in previews.
- Functions:
    - make_preview(content) -> str: derive the one-line preview of a clip.
    - now_ms() -> int: current time in milliseconds since the epoch.
- Pydantic models:
    - ClipRecord:
        One clipboard capture: id, full content, creation timestamp (ms) and the
        preview computed at insert time.
    - HistoryState:
        Newest-first list of ClipRecord, the next id to assign and the capacity.
        Serialized with camelCase keys (nextId, maxItems).
Design notes:
- The preview is stored, never recomputed on read.
- nextId only ever grows; deleting or clearing clips leaves it untouched.
"""
# endregion
# region Imports
import time
from typing import List

from pydantic import BaseModel, ConfigDict, Field

# endregion
# region Preview Helpers
PREVIEW_LIMIT = 80
PREVIEW_CUT = 77
ELLIPSIS = "..."
NEWLINE_GLYPH = "↵"
TAB_GLYPH = "→"


def make_preview(content: str) -> str:
    """
    Build the display form of a clip.

    Content longer than 80 characters is cut to 77 characters plus "...",
    then newlines and tabs are replaced with visible glyphs.

    Example:
        >>> make_preview("a\\tb\\nc")
        'a→b↵c'
        >>> len(make_preview("x" * 81))
        80
    """
    if len(content) > PREVIEW_LIMIT:
        preview = content[:PREVIEW_CUT] + ELLIPSIS
    else:
        preview = content
    return preview.replace("\n", NEWLINE_GLYPH).replace("\t", TAB_GLYPH)


def now_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


# endregion
# region Pydantic Models
class ClipRecord(BaseModel):
    id: int = Field(..., ge=1, description="The unique, never reused ID of the clip")
    content: str = Field(..., description="The full captured clipboard text")
    timestamp: int = Field(
        ..., description="Creation time in milliseconds since the epoch"
    )
    preview: str = Field(..., description="Truncated single-line display form")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "content": "Sample clipboard text",
                    "timestamp": 1700000000000,
                    "preview": "Sample clipboard text",
                }
            ]
        },
    )

    @classmethod
    def capture(cls, id: int, content: str, timestamp: int) -> "ClipRecord":
        """Create a record for freshly captured content, deriving its preview."""
        return cls(
            id=id,
            content=content,
            timestamp=timestamp,
            preview=make_preview(content),
        )


class HistoryState(BaseModel):
    clips: List[ClipRecord] = Field(
        default_factory=list, description="Stored clips, newest first"
    )
    next_id: int = Field(
        1, ge=1, alias="nextId", description="The next id to assign"
    )
    max_items: int = Field(
        100, ge=1, alias="maxItems", description="Maximum number of clips retained"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "clips": [],
                    "nextId": 1,
                    "maxItems": 100,
                }
            ]
        },
    )

    def to_json(self) -> str:
        """Serialize with the camelCase keys used on disk."""
        return self.model_dump_json(by_alias=True, indent=2)


# endregion

__all__ = [
    "ClipRecord",
    "HistoryState",
    "make_preview",
    "now_ms",
]
