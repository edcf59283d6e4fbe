from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ClipboardFailure(RuntimeError):
    pass


class Clipboard(Protocol):
    def set_text(self, text: str) -> None:
        ...


class TkClipboard:
    """
    System clipboard through a hidden Tk root.

    On X11 the selection is owned by the process: the text stays available
    while the app (Streamlit server, CLI with --copy) keeps running.
    """

    def set_text(self, text: str) -> None:
        try:
            import tkinter
        except ImportError as exc:
            raise ClipboardFailure(f"tkinter is not available: {exc}") from exc

        try:
            root = tkinter.Tk()
        except tkinter.TclError as exc:
            raise ClipboardFailure(f"no display for clipboard: {exc}") from exc
        try:
            root.withdraw()
            root.clipboard_clear()
            root.clipboard_append(text)
            root.update()
        except tkinter.TclError as exc:
            raise ClipboardFailure(str(exc)) from exc
        finally:
            root.destroy()


class RecordingClipboard:
    def __init__(self) -> None:
        self.texts: list[str] = []

    @property
    def last_text(self) -> str | None:
        return self.texts[-1] if self.texts else None

    def set_text(self, text: str) -> None:
        self.texts.append(text)


def export(text: str, clipboard: Clipboard) -> None:
    """Put text on the clipboard as is. ClipboardFailure propagates."""
    try:
        clipboard.set_text(text)
    except ClipboardFailure as exc:
        logger.warning("Clipboard export failed: %s", exc)
        raise
    logger.debug("Copied %d chars to clipboard", len(text))
