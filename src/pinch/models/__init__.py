"""
pinch.models
Package initialization for clipboard history domain models.
Overview:
- Provides Pydantic models for clips and the persisted history aggregate.
Contents:
- Domain Models:
    - ClipRecord: a single captured clip with its stored preview.
    - HistoryState: the ordered clip list, id counter and capacity.
- Helpers:
    - make_preview: derive the preview of a piece of content.
    - now_ms: current time in milliseconds.
"""

from .clip import ClipRecord, HistoryState, make_preview, now_ms  # noqa: F401


__models__ = ["ClipRecord", "HistoryState"]
__all__ = [*__models__, "make_preview", "now_ms"]
