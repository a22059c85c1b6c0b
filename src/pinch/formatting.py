"""
pinch.formatting
Terminal rendering helpers for the CLI: relative ages, clip rows and the banner.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text

from pinch.models import ClipRecord, now_ms

ACCENT = "#FF6B4A"

MINUTE_MS = 60_000
HOUR_MS = 3_600_000
DAY_MS = 86_400_000


def format_timestamp(timestamp: int, now: Optional[int] = None) -> str:
    """
    Humanize a millisecond timestamp relative to `now`.

    Example:
        >>> format_timestamp(0, now=30_000)
        'just now'
        >>> format_timestamp(0, now=5 * 60_000)
        '5m ago'
    """
    diff = (now if now is not None else now_ms()) - timestamp
    if diff < MINUTE_MS:
        return "just now"
    if diff < HOUR_MS:
        return f"{diff // MINUTE_MS}m ago"
    if diff < DAY_MS:
        return f"{diff // HOUR_MS}h ago"
    return f"{diff // DAY_MS}d ago"


def clip_row(clip: ClipRecord, index: int, now: Optional[int] = None) -> Text:
    """`[index] (age) preview` for list and search output."""
    row = Text()
    row.append(f"[{index}]", style=ACCENT)
    row.append(f" ({format_timestamp(clip.timestamp, now)}) ", style="dim")
    row.append(clip.preview, style="white")
    return row


def print_banner(console: Console) -> None:
    console.print()
    console.print(Text("   🦞 pinch", style=ACCENT))
    console.print(Text("   Clipboard history manager", style="dim"))
    console.print()


def ok(console: Console, message: str, detail: str = "") -> None:
    line = Text("✓ ", style="green")
    line.append(message)
    if detail:
        line.append(detail, style="dim")
    console.print(line, soft_wrap=True)


def fail(console: Console, message: str) -> None:
    line = Text("✗ ", style="red")
    line.append(message)
    console.print(line, soft_wrap=True)


def warn(console: Console, message: str) -> None:
    line = Text("⚠ ", style="yellow")
    line.append(message)
    console.print(line, soft_wrap=True)


def dim(console: Console, message: str) -> None:
    console.print(Text(message, style="dim"), soft_wrap=True)
