"""State and prompt text for tagging clipboard entries."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Optional, Union

_TEMP_MESSAGE_LIFETIME = 2.0

# A prompt line is a tuple of (text, style) spans. Styles: "plain", "bold",
# "highlight", "input" and "warning".
Span = tuple[str, str]
Line = tuple[Span, ...]


@dataclass(frozen=True)
class Normal:
    """Not tagging."""


@dataclass(frozen=True)
class PromptingTagName:
    """Asking for the name of the tag to apply."""

    input: str = ""
    selected_item: Optional[str] = None
    available_tags: tuple[str, ...] = ()
    selected_tag: Optional[int] = None


@dataclass(frozen=True)
class PromptingTagEmoji:
    """Asking for an emoji to show before the tag."""

    tag_name: str
    input: str = ""
    selected_item: Optional[str] = None


@dataclass(frozen=True)
class PromptingTagColor:
    """Asking for the tag's colour."""

    tag_name: str
    emoji: Optional[str] = None
    input: str = ""
    selected_item: Optional[str] = None


@dataclass(frozen=True)
class RemovingTag:
    """Asking which tag to remove; a blank answer removes all of them."""

    input: str = ""
    tags: tuple[str, ...] = ()
    selected: Optional[int] = None
    selected_item: Optional[str] = None


TagMode = Union[Normal, PromptingTagName, PromptingTagEmoji, PromptingTagColor, RemovingTag]


@dataclass(frozen=True)
class TempMessage:
    """A short notice that disappears two seconds after it was created."""

    text: str
    created: float = field(default_factory=time.monotonic)

    def expired(self, now: Optional[float] = None) -> bool:
        current = time.monotonic() if now is None else now
        return current - self.created > _TEMP_MESSAGE_LIFETIME


def clean_tag_name(tag: str) -> str:
    """Strip a displayed tag down to its name, dropping ``(colour)`` and emoji prefixes."""
    name = tag.split("(", 1)[0].strip()
    start = 0
    while start < len(name) and not (name[start].isalnum() or name[start] in "_-"):
        start += 1
    return name[start:]


def cycle_removal_selection(mode: TagMode, direction: int) -> TagMode:
    """Move the removal cursor by ``direction``, wrapping, and copy the tag into the input."""
    if not isinstance(mode, RemovingTag):
        return mode
    if not mode.tags:
        return replace(mode, selected=None)
    current = mode.selected if mode.selected is not None else 0
    chosen = (current + direction) % len(mode.tags)
    return replace(mode, selected=chosen, input=mode.tags[chosen])


def cycle_tag_creation_selection(mode: TagMode, direction: int) -> TagMode:
    """Move through existing tags while naming a tag, filling in the clean name."""
    if not isinstance(mode, PromptingTagName):
        return mode
    if not mode.available_tags:
        return replace(mode, selected_tag=None)
    current = mode.selected_tag if mode.selected_tag is not None else -1
    chosen = (current + direction) % len(mode.available_tags)
    return replace(
        mode,
        selected_tag=chosen,
        input=clean_tag_name(mode.available_tags[chosen]),
    )


def _plain(text: str) -> Line:
    return ((text, "plain"),)


def _title(text: str) -> Line:
    return ((text, "bold"),)


def _field(label: str, value: str) -> Line:
    return ((label, "highlight"), (value, "input"), ("▌", "highlight"))


def _choice(tag: str, chosen: bool) -> Line:
    return (("▶" if chosen else " ", "highlight"), (" ", "plain"), (tag, "plain"))


def _notice(message: Optional[TempMessage]) -> list[Line]:
    if message is None:
        return []
    return [((message.text, "warning"),), _plain("")]


def prompt_lines(mode: TagMode, temp_message: Optional[TempMessage] = None) -> Optional[list[Line]]:
    """Lines of the tagging prompt for ``mode``, or ``None`` when not tagging."""
    if isinstance(mode, PromptingTagName):
        lines = [
            _title("Tagging Mode"),
            _plain(""),
            _plain("Enter a tag name for this clipboard item."),
            _plain("Use Up/Down to browse existing tags."),
            _plain(""),
        ]
        if mode.available_tags:
            lines.append(_plain("Existing tags:"))
            lines.extend(
                _choice(tag, idx == mode.selected_tag)
                for idx, tag in enumerate(mode.available_tags)
            )
        else:
            lines.append(_plain("Examples: prompt, code, important, todo"))
        lines.append(_plain(""))
        lines += [_field("Tag: ", mode.input), _plain("")]
        lines += _notice(temp_message)
        lines.append(_plain("Press Enter to continue, Esc to cancel."))
        return lines

    if isinstance(mode, PromptingTagEmoji):
        lines = [_title("Tag Emoji"), _plain("")]
        lines += _notice(temp_message)
        lines += [
            _plain(f"Tag: {mode.tag_name}"),
            _plain(""),
            _plain("Enter an emoji to prefix the tag (optional):"),
            _plain("  Examples: 📌 🔥 ⭐ 💡 📝"),
            _plain("  Leave blank to keep existing emoji"),
            _field("Emoji: ", mode.input),
            _plain(""),
            _plain("Press Enter to continue, Esc to cancel."),
        ]
        return lines

    if isinstance(mode, PromptingTagColor):
        lines = [_title("Tag Color"), _plain("")]
        lines += _notice(temp_message)
        lines += [
            _plain(f"Tag: {mode.tag_name}"),
            _plain(f"Emoji: {mode.emoji if mode.emoji is not None else '(none)'}"),
            _plain(""),
            _plain("Enter a color (optional):"),
            _plain("  - Hex: #ff0000 or #f00"),
            _plain("  - RGB: rgb(255,0,0)"),
            _plain("  - Named: red, blue, green, etc."),
            _plain("  - Leave blank to keep existing color"),
            _plain(""),
            _field("Color: ", mode.input),
            _plain(""),
            _plain("Press Enter to finish, Esc to cancel."),
        ]
        return lines

    if isinstance(mode, RemovingTag):
        lines = [_title("Remove Tag"), _plain("")]
        if not mode.tags:
            lines += [_plain("No tags assigned to this entry."), _plain("")]
        else:
            lines += [
                _plain("Use Up/Down to choose a tag, Enter to confirm."),
                _plain("Leave blank and press Enter to remove all tags."),
                _plain(""),
            ]
            lines.extend(_choice(tag, idx == mode.selected) for idx, tag in enumerate(mode.tags))
            lines.append(_plain(""))
        lines += [
            _plain("Type to filter or add a tag name manually."),
            _plain(""),
            _field("Tag: ", mode.input),
            _plain(""),
            _plain("Press Enter to confirm, Esc to cancel."),
        ]
        return lines

    return None