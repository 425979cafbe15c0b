from __future__ import annotations

import threading
from typing import Optional

from rich.console import Console
from rich.text import Text

LEVEL_STYLES = {
    "DEBUG": "bold blue",
    "INFO": "bold green",
    "SKIP": "yellow",
    "WARN": "bold yellow",
    "ERROR": "bold red",
    "DONE": "bold cyan",
}

# Levels still shown with --quiet.
QUIET_LEVELS = {"SKIP", "WARN", "ERROR"}


def stderr_console() -> Console:
    return Console(stderr=True)


class RichLogger:
    """Thread-safe stderr logger shared by the scan workers.

    The report itself is printed to stdout by the CLI, so nothing logged here
    can end up in it.
    """

    def __init__(self, console: Optional[Console] = None, verbose: bool = False, quiet: bool = False):
        self.console = console or stderr_console()
        self.verbose = verbose
        self.quiet = quiet
        self._lock = threading.Lock()

    def enabled(self, level: str) -> bool:
        if level == "DEBUG":
            return self.verbose
        return not self.quiet or level in QUIET_LEVELS

    def log(self, level: str, msg: str) -> None:
        if not self.enabled(level):
            return
        with self._lock:
            self.console.log(Text(level.ljust(5), style=LEVEL_STYLES[level]), Text(msg))

    def skipped(self, source: str, reason: str) -> None:
        self.log("SKIP", f"{source}: {reason}")

    def debug(self, msg: str) -> None:
        self.log("DEBUG", msg)

    def info(self, msg: str) -> None:
        self.log("INFO", msg)

    def warn(self, msg: str) -> None:
        self.log("WARN", msg)

    def error(self, msg: str) -> None:
        self.log("ERROR", msg)

    def done(self, msg: str) -> None:
        self.log("DONE", msg)
