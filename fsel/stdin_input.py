"""Reading menu entries from standard input."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


def is_stdin_piped(stream: Optional[TextIO] = None) -> bool:
    """Whether input comes from a pipe or file rather than a terminal."""
    source = stream if stream is not None else sys.stdin
    return not source.isatty()


def read_lines(stream: Optional[TextIO] = None) -> list[str]:
    """Read every line, without ``\\n`` or ``\\r\\n`` terminators."""
    source = stream if stream is not None else sys.stdin
    text = source.read()
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_null_separated(stream: Optional[TextIO] = None) -> list[str]:
    """Read entries separated by NUL characters, dropping empty ones."""
    source = stream if stream is not None else sys.stdin
    return [entry for entry in source.read().split("\0") if entry]