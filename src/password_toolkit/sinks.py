"""
sinks.py

External collaborators the session writes to but never reads from.

- ClipboardSink: `write(text)`; raises ClipboardUnavailable on failure.
- Notifier: fire-and-forget `success(msg)` / `error(msg)`.

`SystemClipboard` shells out to the platform's clipboard tool (pbcopy,
clip, xclip or xsel). `LoggingNotifier` routes notifications to the
package logger, which is all a headless caller needs.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence
import logging
import platform
import shutil
import subprocess

from .errors import ClipboardUnavailable

logger = logging.getLogger(__name__)


class ClipboardSink(Protocol):
    def write(self, text: str) -> None: ...


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def _clipboard_command(system: str) -> Optional[List[str]]:
    if system == "Darwin":
        return ["pbcopy"]
    if system == "Windows":
        return ["clip"]
    if system == "Linux":
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard"]
        if shutil.which("xsel"):
            return ["xsel", "--clipboard", "--input"]
    return None


class SystemClipboard:
    """Clipboard writes through the OS command-line tool."""

    def __init__(self, command: Optional[Sequence[str]] = None, timeout: float = 5.0) -> None:
        self.command = list(command) if command else _clipboard_command(platform.system())
        self.timeout = timeout

    def write(self, text: str) -> None:
        if not self.command:
            raise ClipboardUnavailable(f"no clipboard tool found on {platform.system()}")
        try:
            subprocess.run(
                self.command,
                input=text,
                universal_newlines=True,
                check=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardUnavailable(f"clipboard write via {self.command[0]} failed") from exc


class LoggingNotifier:
    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


__all__ = [
    "ClipboardSink",
    "Notifier",
    "SystemClipboard",
    "LoggingNotifier",
]
