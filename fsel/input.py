"""Background keyboard reading with a periodic tick."""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .keybinds import KeyCode, Modifiers, SpecialKey

_POLL_INTERVAL = 0.1

_NAMED_SEQUENCES: dict[str, SpecialKey] = {
    "KEY_UP": SpecialKey.UP,
    "KEY_DOWN": SpecialKey.DOWN,
    "KEY_LEFT": SpecialKey.LEFT,
    "KEY_RIGHT": SpecialKey.RIGHT,
    "KEY_ENTER": SpecialKey.ENTER,
    "KEY_ESCAPE": SpecialKey.ESC,
    "KEY_BACKSPACE": SpecialKey.BACKSPACE,
}

_CONTROL_CHARS: dict[str, SpecialKey] = {
    "\r": SpecialKey.ENTER,
    "\n": SpecialKey.ENTER,
    "\x1b": SpecialKey.ESC,
    "\x7f": SpecialKey.BACKSPACE,
    "\x08": SpecialKey.BACKSPACE,
}


@dataclass(frozen=True)
class InputConfig:
    """Settings for :class:`Input`.

    ``exit_key`` stops the reading thread once it has been delivered;
    ``tick_rate`` is the number of seconds between :class:`Tick` events.
    """

    exit_key: KeyCode = SpecialKey.ESC
    tick_rate: float = 0.25


@dataclass(frozen=True)
class KeyEvent:
    """A key press with the modifiers held."""

    code: KeyCode
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class Tick:
    """Periodic event sent while no keys arrive."""


Event = Union[KeyEvent, Tick]


def translate_keystroke(keystroke: Optional[str]) -> Optional[KeyEvent]:
    """Turn a keystroke read from the terminal into a :class:`KeyEvent`.

    Accepts plain strings and terminal keystrokes carrying a ``name``
    attribute. Returns ``None`` for empty input and keys that have no
    meaning here.
    """
    if keystroke is None:
        return None
    name = getattr(keystroke, "name", None)
    if name in _NAMED_SEQUENCES:
        return KeyEvent(_NAMED_SEQUENCES[name])
    text = str(keystroke)
    if not text:
        return None
    if len(text) == 2 and text[0] == "\x1b":
        inner = translate_keystroke(text[1])
        if inner is None:
            return None
        return KeyEvent(inner.code, inner.modifiers | Modifiers.ALT)
    if len(text) != 1:
        return None
    if text in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[text])
    if text == "\t":
        return None
    if text == "\x00":
        return KeyEvent(" ", Modifiers.CONTROL)
    code = ord(text)
    if 1 <= code <= 26:
        return KeyEvent(chr(code + ord("a") - 1), Modifiers.CONTROL)
    if code < 32:
        return None
    if text.isupper():
        return KeyEvent(text, Modifiers.SHIFT)
    return KeyEvent(text)


def _terminal_reader() -> Callable[[], str]:
    import blessed

    term = blessed.Terminal()
    return lambda: term.inkey(timeout=_POLL_INTERVAL)


class Input:
    """Reads keys and emits ticks on background threads.

    ``read_key`` returns the next keystroke, or an empty value when none
    arrived within a short wait; by default it reads the terminal.
    """

    def __init__(
        self,
        config: Optional[InputConfig] = None,
        read_key: Optional[Callable[[], Optional[str]]] = None,
    ) -> None:
        self.config = config if config is not None else InputConfig()
        self._read_key = read_key if read_key is not None else _terminal_reader()
        self._events: "queue.Queue[Event]" = queue.Queue()
        self._stop = threading.Event()
        self._input_thread = threading.Thread(target=self._read_loop, daemon=True)
        self._tick_thread = threading.Thread(target=self._tick_loop, daemon=True)
        self._input_thread.start()
        self._tick_thread.start()

    def _read_loop(self) -> None:
        while not self._stop.is_set():
            event = translate_keystroke(self._read_key())
            if event is None:
                continue
            self._events.put(event)
            if event.code == self.config.exit_key:
                return

    def _tick_loop(self) -> None:
        while not self._stop.is_set():
            self._events.put(Tick())
            if self._stop.wait(self.config.tick_rate):
                return

    def next(self, timeout: Optional[float] = None) -> Event:
        """Return the next event.

        Raises :class:`TimeoutError` when ``timeout`` seconds pass without
        one, and :class:`EOFError` once closed and drained.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if deadline is None:
                wait = _POLL_INTERVAL
            else:
                wait = max(0.0, min(_POLL_INTERVAL, deadline - time.monotonic()))
            try:
                return self._events.get(timeout=wait)
            except queue.Empty:
                pass
            if self._stop.is_set() and self._events.empty():
                raise EOFError("input handler is closed")
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError("no input event arrived in time")

    def close(self) -> None:
        """Stop both background threads."""
        self._stop.set()
        self._tick_thread.join(timeout=1.0)
        self._input_thread.join(timeout=1.0)

    def __enter__(self) -> "Input":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()