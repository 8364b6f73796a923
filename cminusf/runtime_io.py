"""Input and output routines available to compiled programs."""

from __future__ import annotations

import struct
import sys
from typing import TextIO


class NegativeIndexError(IndexError):
    """Raised when a program indexes an array with a negative value."""


def _peek_char(stream: TextIO) -> str:
    """Read one character, putting it back when the stream allows it."""
    if stream.seekable():
        pos = stream.tell()
        ch = stream.read(1)
        stream.seek(pos)
        return ch
    return stream.read(1)


def read_int(stream: TextIO | None = None) -> int:
    """Read one decimal integer, skipping leading whitespace."""
    source = stream if stream is not None else sys.stdin
    ch = source.read(1)
    while ch and ch.isspace():
        ch = source.read(1)
    if not ch:
        raise EOFError("no integer to read")
    text = ""
    if ch in "+-":
        text = ch
        ch = _peek_char(source)
        if ch.isdigit():
            source.read(1) if source.seekable() else None
        else:
            raise ValueError("expected digits after sign")
    if not ch.isdigit():
        raise ValueError(f"expected an integer, found {ch!r}")
    text += ch
    while True:
        ch = _peek_char(source)
        if not (ch and ch.isdigit()):
            break
        if source.seekable():
            source.read(1)
        text += ch
    return int(text)


def output(value: int, stream: TextIO | None = None) -> None:
    """Write an integer on its own line."""
    (stream if stream is not None else sys.stdout).write("%d\n" % value)


def output_float(value: float, stream: TextIO | None = None) -> None:
    """Write a single-precision float with six decimals on its own line."""
    single = struct.unpack("f", struct.pack("f", value))[0]
    (stream if stream is not None else sys.stdout).write("%f\n" % single)


def neg_idx_except(stream: TextIO | None = None) -> None:
    """Report a negative array index and stop the program."""
    (stream if stream is not None else sys.stdout).write("negative index exception\n")
    raise NegativeIndexError("negative index exception")