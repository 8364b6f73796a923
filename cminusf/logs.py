"""Levelled diagnostic messages tagged with a source location."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


def level2string(level: int) -> str:
    """Return the level's name, or an empty string for an unknown level."""
    try:
        return LogLevel(level).name
    except ValueError:
        return ""


def get_short_name(file_path: str) -> str:
    """Return the part of a path after its last slash."""
    return file_path.rsplit("/", 1)[-1]


@dataclass
class LogWriter:
    """Writes messages of one level, located at a file, line and function."""

    level: LogLevel = LogLevel.DEBUG
    file: str = ""
    line: int = 0
    func: str = ""
    threshold: LogLevel = LogLevel.DEBUG
    stream: TextIO | None = None

    def format(self, message: str) -> str:
        """Return the message as a single log line without a newline."""
        return (
            f"[{level2string(self.level)}] "
            f"({self.file}:{self.line}L  {self.func})"
            f"{message}"
        )

    def write(self, message: str) -> None:
        """Emit the message if its level reaches the threshold."""
        if self.level >= self.threshold:
            out = self.stream if self.stream is not None else sys.stdout
            out.write(self.format(message) + "\n")