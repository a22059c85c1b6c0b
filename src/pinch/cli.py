# region Docstring
"""
pinch.cli
Typer application exposing the clipboard history.

Every command is a thin wrapper over a HistoryStore or Clipboard operation. User
facing failures (no clip at an index, invalid input, clipboard errors, an unreadable
history file) are printed and the process still exits with status 0.
Running `pinch` with no command lists the history.
"""
# endregion
# region Imports
import signal
from typing import Optional

import typer
from rich.console import Console
from rich.text import Text

from pinch import __version__
from pinch.clipboard import Clipboard, SystemClipboard
from pinch.config import PinchSettings, get_settings
from pinch.errors import (
    ClipboardError,
    InvalidInputError,
    NotFoundError,
    StorageError,
    parse_index,
    parse_positive,
)
from pinch.formatting import (
    ACCENT,
    clip_row,
    dim,
    fail,
    format_timestamp,
    ok,
    print_banner,
    warn,
)
from pinch.logger import configure_logging, logger
from pinch.models import ClipRecord
from pinch.store import HistoryStore
from pinch.watcher import ClipboardWatcher

# endregion
console = Console(highlight=False, emoji=False)

app = typer.Typer(
    name="pinch",
    help="🦞 Clipboard history manager: grab and hold onto your clips",
    add_completion=False,
)


# region Runtime
class Runtime:
    """Objects shared by all commands of one invocation."""

    def __init__(self, clipboard: Optional[Clipboard] = None) -> None:
        self.clipboard: Clipboard = clipboard or SystemClipboard()
        self.settings: Optional[PinchSettings] = None
        self.store: Optional[HistoryStore] = None


def _runtime(ctx: typer.Context) -> Runtime:
    return ctx.ensure_object(Runtime)


def _clip_at(store: HistoryStore, raw_index: str) -> tuple[int, ClipRecord]:
    index = parse_index(raw_index)
    clip = store.get_by_index(index)
    if clip is None:
        raise NotFoundError(f"No clip at index {index}")
    return index, clip


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


# endregion
# region Entry Callback
@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    runtime = _runtime(ctx)
    runtime.settings = get_settings(PinchSettings)
    configure_logging(runtime.settings)
    try:
        runtime.store = HistoryStore(
            runtime.settings.history_path,
            default_max_items=runtime.settings.default_max_items,
        )
    except StorageError as e:
        logger.info(f"History unavailable: {e}")
        fail(console, str(e))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        list_clips(ctx, number=None, show_all=False)


# endregion
# region Commands
@app.command("list", help="Show clipboard history")
@app.command("ls", hidden=True)
def list_clips(
    ctx: typer.Context,
    number: Optional[int] = typer.Option(
        None, "--number", "-n", help="Number of items to show [default: 10]"
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show all items"),
):
    runtime = _runtime(ctx)
    clips = runtime.store.list_all()

    if not clips:
        print_banner(console)
        dim(console, "   No clips yet. Copy something!")
        dim(console, "   Run pinch add to capture your clipboard.")
        console.print()
        return

    if show_all:
        limit = len(clips)
    else:
        limit = number if number is not None else runtime.settings.list_limit
    shown = clips[: max(limit, 0)]

    print_banner(console)
    dim(console, f"   Showing {len(shown)} of {len(clips)} clips")
    console.print()
    for index, clip in enumerate(shown):
        console.print(clip_row(clip, index), soft_wrap=True)
    console.print()
    dim(console, "   Use pinch copy <index> to copy an item.")
    console.print()


@app.command("add", help="Add current clipboard content to history")
@app.command("a", hidden=True)
def add(ctx: typer.Context):
    runtime = _runtime(ctx)
    try:
        content = runtime.clipboard.read()
    except ClipboardError as e:
        logger.info(f"Failed to read clipboard: {e}")
        fail(console, "Failed to read clipboard")
        return

    try:
        clip = runtime.store.insert(content)
    except StorageError as e:
        fail(console, str(e))
        return
    if clip is not None:
        ok(console, "Pinched: ", clip.preview)
    elif not content or not content.strip():
        warn(console, "Clipboard is empty")
    else:
        dim(console, "Already have this clip")


@app.command("copy", help="Copy item from history to clipboard")
@app.command("cp", hidden=True)
def copy(
    ctx: typer.Context,
    index: str = typer.Argument(..., help="Position in the history (0 = newest)"),
):
    runtime = _runtime(ctx)
    try:
        _, clip = _clip_at(runtime.store, index)
    except (InvalidInputError, NotFoundError) as e:
        fail(console, str(e))
        return

    try:
        runtime.clipboard.write(clip.content)
    except ClipboardError as e:
        logger.info(f"Failed to write clipboard: {e}")
        fail(console, "Failed to write to clipboard")
        return
    ok(console, "Copied: ", clip.preview)


@app.command("show", help="Show full content of a clip")
@app.command("s", hidden=True)
def show(
    ctx: typer.Context,
    index: str = typer.Argument(..., help="Position in the history (0 = newest)"),
):
    runtime = _runtime(ctx)
    try:
        position, clip = _clip_at(runtime.store, index)
    except (InvalidInputError, NotFoundError) as e:
        fail(console, str(e))
        return

    console.print()
    dim(console, f"--- Clip {position} ({format_timestamp(clip.timestamp)}) ---")
    console.print()
    console.print(Text(clip.content), soft_wrap=True)
    console.print()
    dim(console, "--- End ---")
    console.print()


@app.command("search", help="Search clipboard history")
@app.command("find", hidden=True)
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for (case-insensitive)"),
):
    runtime = _runtime(ctx)
    results = runtime.store.search(query)

    if not results:
        dim(console, f'No clips matching "{query}"')
        return

    print_banner(console)
    dim(console, f'   Found {len(results)} clip(s) matching "{query}"')
    console.print()
    for clip in results:
        console.print(clip_row(clip, runtime.store.index_of(clip.id)), soft_wrap=True)
    console.print()


@app.command("delete", help="Delete a clip from history")
@app.command("rm", hidden=True)
def delete(
    ctx: typer.Context,
    index: str = typer.Argument(..., help="Position in the history (0 = newest)"),
):
    runtime = _runtime(ctx)
    try:
        _, clip = _clip_at(runtime.store, index)
    except (InvalidInputError, NotFoundError) as e:
        fail(console, str(e))
        return

    try:
        runtime.store.delete_by_id(clip.id)
    except StorageError as e:
        fail(console, str(e))
        return
    ok(console, "Deleted: ", clip.preview)


@app.command("clear", help="Clear all clipboard history")
def clear(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    runtime = _runtime(ctx)
    count = len(runtime.store.list_all())

    if count == 0:
        dim(console, "History is already empty")
        return

    if not force:
        warn(console, f"This will delete {count} clip(s).")
        dim(console, "  Run with --force to confirm.")
        return

    try:
        runtime.store.clear()
    except StorageError as e:
        fail(console, str(e))
        return
    ok(console, f"Cleared {count} clip(s)")


@app.command("watch", help="Watch clipboard for changes")
@app.command("w", hidden=True)
def watch(ctx: typer.Context):
    runtime = _runtime(ctx)

    def _announce(clip: ClipRecord) -> None:
        line = Text("📌 ", style="green")
        line.append(format_timestamp(clip.timestamp), style="dim")
        line.append(f" {clip.preview}")
        console.print(line, soft_wrap=True)

    watcher = ClipboardWatcher(
        runtime.store,
        runtime.clipboard,
        interval=runtime.settings.poll_interval,
        on_insert=_announce,
    )

    def _handler(signum, frame):
        watcher.stop()

    previous = {sig: signal.signal(sig, _handler) for sig in (signal.SIGINT, signal.SIGTERM)}

    print_banner(console)
    dim(console, "   Watching clipboard... (Ctrl+C to stop)")
    console.print()
    try:
        watcher.run()
    except StorageError as e:
        fail(console, str(e))
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    console.print()
    dim(console, "   Stopped watching.")
    console.print()


@app.command("config", help="Show or update configuration")
def config(
    ctx: typer.Context,
    max_items: Optional[str] = typer.Option(
        None, "--max", help="Set max history size", metavar="COUNT"
    ),
):
    runtime = _runtime(ctx)
    if max_items is not None:
        try:
            value = parse_positive(max_items)
        except InvalidInputError as e:
            fail(console, str(e))
            return
        try:
            runtime.store.set_max_items(value)
        except StorageError as e:
            fail(console, str(e))
            return
        ok(console, f"Max history size: {value}")
        return

    print_banner(console)
    dim(console, "   Configuration:")
    console.print()
    line = Text("   Max history size: ")
    line.append(str(runtime.store.get_max_items()), style="white")
    console.print(line)
    line = Text("   Current clips: ")
    line.append(str(len(runtime.store.list_all())), style="white")
    console.print(line)
    line = Text("   History file: ")
    line.append(str(runtime.store.path), style=ACCENT)
    console.print(line, soft_wrap=True)
    console.print()


# endregion


def entry():
    """Entry point for the `pinch` console script."""
    app()


if __name__ == "__main__":
    entry()
