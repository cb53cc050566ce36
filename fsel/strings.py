"""String helpers for working with launcher commands."""

from __future__ import annotations


def extract_exec_name(command: str) -> str:
    """Return the first word of ``command`` with any directory part removed.

    ``"/usr/bin/firefox"`` gives ``"firefox"``; ``"env FOO=bar firefox"``
    gives ``"env"``; an empty or blank command gives ``""``.
    """
    words = command.split()
    if not words:
        return ""
    return words[0].rsplit("/", 1)[-1]