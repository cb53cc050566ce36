"""Drawing clipboard images straight to the terminal, outside the TUI layer."""

from __future__ import annotations

import enum
import os
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import BinaryIO, Callable, Mapping, TypeVar

T = TypeVar("T")

HIDE_CURSOR = b"\x1b[?25l"
SAVE_POSITION = b"\x1b7"
RESTORE_POSITION = b"\x1b8"
KITTY_DELETE_ALL = b"\x1b_Ga=d,d=A\x1b\\"


@dataclass(frozen=True)
class Rect:
    """A terminal area in cells, with a zero-based origin."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class DisplayState:
    """What is drawn on screen: nothing, or an image in ``area`` for ``rowid``."""

    area: Rect | None = None
    rowid: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.area is None


EMPTY = DisplayState()


class _Tracker:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.state = EMPTY


_tracker = _Tracker()


def current_display_state() -> DisplayState:
    """Return what is currently drawn."""
    with _tracker.lock:
        return _tracker.state


def _move_to(col: int, row: int) -> bytes:
    return f"\x1b[{row + 1};{col + 1}H".encode()


def write_at_position(
    pos: tuple[int, int],
    writer: Callable[[BinaryIO], T],
    stream: BinaryIO | None = None,
) -> T:
    """Hide the cursor, move to ``pos``, run ``writer`` and restore the cursor.

    The cursor is restored and the stream flushed even when ``writer`` raises.
    """
    out = stream if stream is not None else sys.stderr.buffer
    col, row = pos
    out.write(HIDE_CURSOR + SAVE_POSITION + _move_to(col, row))
    try:
        return writer(out)
    finally:
        out.write(RESTORE_POSITION)
        out.flush()


class GraphicsAdapter(enum.Enum):
    """Image protocol the terminal understands."""

    KITTY = "kitty"
    SIXEL = "sixel"
    NONE = "none"

    @classmethod
    def detect(cls, env: Mapping[str, str] | None = None) -> "GraphicsAdapter":
        env = os.environ if env is None else env
        term = env.get("TERM", "")
        term_program = env.get("TERM_PROGRAM", "")
        if term_program == "kitty" or "kitty" in term:
            return cls.KITTY
        if term.startswith("foot") or "xterm" in term or term_program == "WezTerm":
            return cls.SIXEL
        return cls.NONE

    def show_cclip_image(self, rowid: str, area: Rect) -> None:
        """Render clipboard entry ``rowid`` into ``area`` and remember it."""
        if self is GraphicsAdapter.NONE:
            return
        self._render(rowid, area, "kitty" if self is GraphicsAdapter.KITTY else "sixels")
        with _tracker.lock:
            _tracker.state = DisplayState(area, rowid)

    def show_cclip_image_if_different(self, rowid: str, area: Rect) -> None:
        """Render the image unless the same one is already shown in the same area."""
        if current_display_state() == DisplayState(area, rowid):
            return
        # Sixel output is not cleared here: that would wipe freshly drawn text.
        if self is GraphicsAdapter.KITTY:
            self.image_hide()
        self.show_cclip_image(rowid, area)

    def image_hide(self) -> None:
        """Erase the image currently shown, if any."""
        with _tracker.lock:
            area = _tracker.state.area
            if area is not None:
                self.image_erase(area)
                _tracker.state = EMPTY

    def image_erase(self, area: Rect) -> None:
        """Remove image output from ``area``."""
        if self is GraphicsAdapter.KITTY:
            write_at_position((area.x, area.y), _write_kitty_delete)
        elif self is GraphicsAdapter.SIXEL:
            # Overwriting with spaces is what makes sixel terminals drop the image.
            spaces = b" " * area.width

            def blank(out: BinaryIO) -> None:
                for row in range(area.height):
                    out.write(_move_to(area.x, area.y + row) + spaces)
                out.flush()

            write_at_position((area.x, area.y), blank)

    def _render(self, rowid: str, area: Rect, fmt: str) -> None:
        cclip = subprocess.Popen(
            ["cclip", "get", rowid],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
        try:
            result = subprocess.run(
                [
                    "chafa",
                    "-f",
                    fmt,
                    "--size",
                    f"{area.width}x{area.height}",
                    "--animate=off",
                    "--polite=on",
                    "-",
                ],
                stdin=cclip.stdout,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        finally:
            if cclip.stdout is not None:
                cclip.stdout.close()
            cclip.wait()

        if result.returncode != 0:
            return
        data = result.stdout

        def draw(out: BinaryIO) -> None:
            out.write(_move_to(area.x, area.y))
            out.write(data)
            out.flush()

        write_at_position((area.x, area.y), draw)


def _write_kitty_delete(out: BinaryIO) -> None:
    out.write(KITTY_DELETE_ALL)
    out.flush()