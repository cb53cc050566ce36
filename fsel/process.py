"""Process helpers."""

from __future__ import annotations

import os
import signal


def get_current_pid() -> int:
    """Return the id of the running process."""
    return os.getpid()


def kill_sigterm(pid: int) -> None:
    """Send SIGTERM to ``pid``, raising :class:`OSError` if that fails."""
    os.kill(pid, signal.SIGTERM)


def kill_sigterm_quietly(pid: int) -> None:
    """Send SIGTERM to ``pid`` and ignore any failure."""
    try:
        kill_sigterm(pid)
    except OSError:
        pass