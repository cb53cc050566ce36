import os
import signal
import subprocess
import sys

import pytest

from fsel.process import get_current_pid, kill_sigterm, kill_sigterm_quietly


def _sleeper():
    return subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])


def test_get_current_pid_matches_os():
    assert get_current_pid() == os.getpid()


def test_kill_sigterm_terminates_child():
    child = _sleeper()
    try:
        kill_sigterm(child.pid)
        assert child.wait(timeout=10) == -signal.SIGTERM
    finally:
        if child.poll() is None:
            child.kill()
            child.wait()


def test_kill_sigterm_quietly_terminates_child():
    child = _sleeper()
    try:
        kill_sigterm_quietly(child.pid)
        assert child.wait(timeout=10) == -signal.SIGTERM
    finally:
        if child.poll() is None:
            child.kill()
            child.wait()


def test_kill_sigterm_reaped_process_raises():
    child = _sleeper()
    child.kill()
    child.wait()
    with pytest.raises(ProcessLookupError):
        kill_sigterm(child.pid)


def test_kill_sigterm_quietly_reaped_process_returns_none():
    child = _sleeper()
    child.kill()
    child.wait()
    assert kill_sigterm_quietly(child.pid) is None
    assert child.returncode == -signal.SIGKILL