"""Content preview for the selected menu entry."""

from __future__ import annotations

import re
import subprocess
from typing import Callable, Optional

from wcwidth import wcwidth

CONTENT_LIMIT = 5000
MIN_WRAP_WIDTH = 20
EMPTY_CONTENT = "[Empty content]"
NO_CONTENT = "[No content]"

_ANSI_SGR = re.compile(r"\x1b\[[0-9;]*m")
_U64_MAX = 2**64 - 1

Fetcher = Callable[[str], Optional[str]]


def _parses_as_u64(text: str) -> bool:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        return False
    return int(digits) <= _U64_MAX


def is_cclip_line(line: str) -> bool:
    """Whether ``line`` is a clipboard-history row: a numeric rowid, a tab, then more fields."""
    if not line.strip():
        return False
    parts = line.split("\t", 2)
    return len(parts) >= 2 and _parses_as_u64(parts[0].strip())


def is_cclip_image_line(line: str) -> bool:
    """Whether ``line`` is a clipboard-history row whose MIME type is an image."""
    if not line.strip():
        return False
    parts = line.split("\t", 3)
    if len(parts) < 2:
        return False
    return parts[1].strip().startswith("image/")


def cclip_rowid(line: str) -> Optional[str]:
    """Rowid of a clipboard-history row, or ``None`` for other lines."""
    if not is_cclip_line(line):
        return None
    return line.split("\t", 2)[0].strip()


def truncate_content(content: str, limit: int = CONTENT_LIMIT) -> str:
    """Cut ``content`` to at most ``limit`` UTF-8 bytes, marking the cut with ``...``.

    Empty content is shown as a placeholder. The cut never splits a character.
    """
    if not content:
        return EMPTY_CONTENT
    encoded = content.encode("utf-8")
    if len(encoded) <= limit:
        return content
    return encoded[: max(limit, 0)].decode("utf-8", errors="ignore") + "..."


def sanitize_display(text: str) -> str:
    """Flatten text onto one line and drop characters that upset terminal rendering."""
    cleaned = (
        text.replace("\n", " ")
        .replace("\t", "    ")
        .replace("\r", "")
        .replace("\0", "")
    )
    if "\x1b" in cleaned:
        cleaned = _ANSI_SGR.sub("", cleaned)
    return cleaned


def _cell_width(ch: str) -> int:
    return max(wcwidth(ch), 0)


def wrap_to_width(text: str, max_width: int) -> list[str]:
    """Split ``text`` into chunks each narrower than ``max_width`` terminal cells.

    A character too wide to fit on its own still gets a chunk of its own.
    """
    chunks: list[str] = []
    current: list[str] = []
    width = 0
    for ch in text:
        ch_width = _cell_width(ch)
        if current and width + ch_width >= max_width:
            chunks.append("".join(current))
            current, width = [], 0
        current.append(ch)
        width += ch_width
        if width >= max_width:
            # A lone character that already fills the line.
            chunks.append("".join(current))
            current, width = [], 0
    if current:
        chunks.append("".join(current))
    return chunks


def content_lines(
    content: str,
    line_number: int = 0,
    show_line_numbers: bool = False,
    wrap: bool = False,
    panel_width: int = 0,
    panel_height: int = 0,
) -> list[str]:
    """Lines to show in the content panel for one entry.

    ``panel_width`` is the outer width including borders. The result is padded
    with blank full-width lines up to ``panel_height`` so old output is overwritten.
    """
    safe = truncate_content(content)
    display = f"{line_number}  {safe}" if show_line_numbers else safe
    display = sanitize_display(display)

    inner_width = max(panel_width - 2, 0)
    if wrap:
        lines = wrap_to_width(display, max(inner_width, MIN_WRAP_WIDTH))
    else:
        lines = [display]
    if not lines:
        lines = [NO_CONTENT]

    blank = " " * inner_width
    lines.extend(blank for _ in range(panel_height - len(lines)))
    return lines


def _fetch_from_cclip(rowid: str) -> Optional[str]:
    try:
        result = subprocess.run(
            ["cclip", "get", rowid],
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return None


class CclipContent:
    """Full clipboard content for history rows, cached by rowid.

    ``fetch`` returns the content for a rowid or ``None`` on failure; by
    default it asks the ``cclip`` program.
    """

    def __init__(self, fetch: Optional[Fetcher] = None) -> None:
        self._fetch = fetch if fetch is not None else _fetch_from_cclip
        self._cache: dict[str, str] = {}

    def get(self, line: str) -> str:
        """Text to display for a clipboard-history row."""
        parts = line.split("\t", 3)
        if len(parts) >= 3:
            rowid = parts[0].strip()
            preview = parts[2].strip()
            cached = self._cache.get(rowid)
            if cached is not None:
                return cached
            content = self._fetch(rowid)
            if content is not None and content.strip():
                self._cache[rowid] = content
                return content
            if preview:
                return preview
            return f"[Failed to get content for rowid {rowid}]"
        if len(parts) == 2:
            return f"[{parts[1].strip()} content]"
        return line

    def clear(self) -> None:
        """Forget every cached entry."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)