"""Image previews for clipboard-history entries."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Mapping, Optional

from .graphics import GraphicsAdapter
from .preview import is_cclip_image_line

CLEAR_SCREEN = b"\x1b[2J"
FALLBACK_TERMINAL_SIZE = (80, 24)


def image_info(line: str) -> str:
    """Describe an image row by its MIME type and preview text."""
    parts = line.split("\t", 2)
    if len(parts) >= 3:
        return f"Type: {parts[1].strip()}\nInfo: {parts[2].strip()}"
    return "Image information unavailable"


def image_placeholder_lines(line: str, hide_message: bool = False) -> list[str]:
    """Lines shown in the content panel while an inline image is drawn over it."""
    if hide_message:
        return [""]
    return [
        "  [INLINE IMAGE PREVIEW]",
        image_info(line),
        "",
        "󱇛 Press 'i' for fullscreen view",
        " Press 'Enter' to copy to clipboard",
        "",
        "Loading image preview...",
    ]


def _env(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if env is None else env


def fullscreen_formats(env: Optional[Mapping[str, str]] = None) -> list[str]:
    """Image formats to try, in order, for the terminal described by ``env``."""
    env = _env(env)
    term = env.get("TERM", "")
    term_program = env.get("TERM_PROGRAM", "")
    if term_program == "kitty" or "kitty" in term:
        return ["kitty", "sixels"]
    if term.startswith("foot"):
        return ["sixels"]
    return ["sixels", "iterm2"]


def fullscreen_geometry(
    term_width: int, term_height: int, is_foot: bool
) -> tuple[int, int, int, int]:
    """Return ``(width, height, x, y)`` of a fullscreen image.

    Foot gets the whole screen from the top-left corner; other terminals get
    90% by 85% (at least 40 by 20 cells), centred.
    """
    if is_foot:
        return term_width, term_height, 0, 0
    width = max(term_width * 90 // 100, 40)
    height = max(term_height * 85 // 100, 20)
    x = max(term_width - width, 0) // 2
    y = max(term_height - height, 0) // 2
    return width, height, x, y


def _terminal_size() -> tuple[int, int]:
    try:
        size = os.get_terminal_size(sys.stderr.fileno())
    except (OSError, ValueError, AttributeError):
        return FALLBACK_TERMINAL_SIZE
    return size.columns, size.lines


def _write_stderr(data: bytes) -> None:
    out = getattr(sys.stderr, "buffer", None)
    if out is None:
        return
    try:
        out.write(data)
        out.flush()
    except (OSError, ValueError):
        pass


def _move_to(col: int, row: int) -> bytes:
    return f"\x1b[{row + 1};{col + 1}H".encode()


def _render(rowid: str, fmt: str, size_arg: str, x: int, y: int) -> bool:
    try:
        cclip = subprocess.Popen(
            ["cclip", "get", rowid],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    _write_stderr(_move_to(x, y))
    try:
        chafa = subprocess.Popen(
            ["chafa", "--size", size_arg, "--align", "center", "-f", fmt, "-"],
            stdin=cclip.stdout,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        if cclip.stdout is not None:
            cclip.stdout.close()
        cclip.wait()
        return False
    if cclip.stdout is not None:
        cclip.stdout.close()
    cclip.wait()
    return chafa.wait() == 0


def show_fullscreen_image(line: str, env: Optional[Mapping[str, str]] = None) -> bool:
    """Draw the image of a clipboard-history row over the whole terminal.

    Each suitable format is tried until one renders; returns whether any did.
    Lines that are not image rows return ``False`` without drawing.
    """
    if not is_cclip_image_line(line):
        return False
    env = _env(env)
    rowid = line.split("\t", 2)[0].strip()
    is_foot = env.get("TERM", "").startswith("foot")
    term_width, term_height = _terminal_size()
    width, height, x, y = fullscreen_geometry(term_width, term_height, is_foot)
    size_arg = f"{width}x{height}"

    adapter = GraphicsAdapter.detect(env)
    if adapter is GraphicsAdapter.KITTY:
        try:
            adapter.image_hide()
        except OSError:
            pass
    elif adapter is GraphicsAdapter.SIXEL:
        _write_stderr(CLEAR_SCREEN)

    for fmt in fullscreen_formats(env):
        _write_stderr(CLEAR_SCREEN + _move_to(0, 0))
        if _render(rowid, fmt, size_arg, x, y):
            return True
    return False