# region Docstring
"""
pinch.clipboard
Access to the system clipboard.
Overview:
- Clipboard is the small read/write protocol the CLI and the watcher depend on.
- SystemClipboard implements it with pyperclip and turns every backend failure,
    including clipboard bytes that are not valid UTF-8, into ClipboardError.
"""
# endregion
# region Imports
import logging
from logging import Logger as T_Logger
from typing import Protocol

import pyperclip

from pinch.errors import ClipboardError

# endregion
logger: T_Logger = logging.getLogger("pinch").getChild("clipboard")


class Clipboard(Protocol):
    def read(self) -> str: ...

    def write(self, text: str) -> None: ...


class SystemClipboard:
    """Clipboard backed by pyperclip (xclip/xsel/wl-clipboard, pbcopy, win32)."""

    def read(self) -> str:
        try:
            content = pyperclip.paste()
        except (pyperclip.PyperclipException, UnicodeDecodeError) as e:
            logger.debug(f"Clipboard read failed: {e}")
            raise ClipboardError(str(e)) from e
        return content or ""

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except (pyperclip.PyperclipException, UnicodeEncodeError) as e:
            logger.debug(f"Clipboard write failed: {e}")
            raise ClipboardError(str(e)) from e


__all__ = ["Clipboard", "SystemClipboard"]
