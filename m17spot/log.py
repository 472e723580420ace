"""Timestamped logging to the console and to optionally daily-rotated files."""

from __future__ import annotations

import enum
import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import TextIO

_LEVEL_CHARS = " DDMIWEF"
_MAX_MESSAGE = 499


class Level(enum.IntEnum):
    DEBUG = 1
    MESSAGE = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6


class Logger:
    """Writes lines at or above a level threshold; a threshold of 0 disables a sink."""

    def __init__(self) -> None:
        self._display_level = 0
        self._file_level = 0
        self._file_path = ""
        self._file_root = ""
        self._daemon = False
        self._rotate = False
        self._fp: TextIO | None = None
        self._date: date | None = None

    def _attach(self, name: Path) -> bool:
        try:
            self._fp = open(name, "a", encoding="utf-8")
        except OSError:
            self._fp = None
            return False
        if self._daemon:
            os.dup2(self._fp.fileno(), sys.stderr.fileno())
        return True

    def _open_rotate(self) -> bool:
        if self._file_level == 0:
            return True
        today = datetime.now(timezone.utc).date()
        if today == self._date:
            if self._fp is not None:
                return True
        elif self._fp is not None:
            self._fp.close()
            self._fp = None
        name = Path(self._file_path) / f"{self._file_root}-{today:%Y-%m-%d}.log"
        status = self._attach(name)
        self._date = today
        return status

    def _open_no_rotate(self) -> bool:
        if self._file_level == 0 or self._fp is not None:
            return True
        return self._attach(Path(self._file_path) / f"{self._file_root}.log")

    def _open(self) -> bool:
        return self._open_rotate() if self._rotate else self._open_no_rotate()

    def open(
        self,
        daemon: bool,
        path: str | os.PathLike,
        root: str,
        file_level: int,
        display_level: int,
        rotate: bool,
    ) -> None:
        """Configure the sinks and open the log file; raises OSError if it cannot be opened."""
        self._file_path = os.fspath(path)
        self._file_root = root
        self._file_level = int(file_level)
        self._display_level = 0 if daemon else int(display_level)
        self._daemon = daemon
        self._rotate = rotate
        if not self._open():
            raise OSError(f"unable to open the log file in {self._file_path}")

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
        self._fp = None

    def log(self, level: int, message: str) -> None:
        """Write one line; a FATAL message closes the log and exits with status 1."""
        level = int(level)
        now = datetime.now()
        line = (
            f"{_LEVEL_CHARS[level]}: {now:%m/%d %H:%M:%S}.{now.microsecond // 1000:03d} "
            f"{message[:_MAX_MESSAGE]}"
        )

        if self._file_level != 0 and level >= self._file_level:
            if not self._open():
                return
            self._fp.write(line + "\n")
            self._fp.flush()

        if self._display_level != 0 and level >= self._display_level:
            sys.stdout.write(line + "\n")
            sys.stdout.flush()

        if level == Level.FATAL:
            self.close()
            raise SystemExit(1)