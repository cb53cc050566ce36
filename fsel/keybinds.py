"""Configurable key bindings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Mapping, Union


class SpecialKey(enum.Enum):
    """Non-character keys a binding can name."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    NULL = "null"


KeyCode = Union[SpecialKey, str]


class Modifiers(enum.Flag):
    """Modifier keys held with a key press."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


_NAMED_KEYS: dict[str, KeyCode] = {
    "up": SpecialKey.UP,
    "down": SpecialKey.DOWN,
    "left": SpecialKey.LEFT,
    "right": SpecialKey.RIGHT,
    "enter": SpecialKey.ENTER,
    "esc": SpecialKey.ESC,
    "escape": SpecialKey.ESC,
    "backspace": SpecialKey.BACKSPACE,
    "space": " ",
}

_NAMED_MODIFIERS = {
    "ctrl": Modifiers.CONTROL,
    "control": Modifiers.CONTROL,
    "shift": Modifiers.SHIFT,
    "alt": Modifiers.ALT,
}


def parse_key(name: str) -> KeyCode:
    """Turn a key name into a key code; unknown names give ``SpecialKey.NULL``."""
    lowered = name.lower()
    if lowered in _NAMED_KEYS:
        return _NAMED_KEYS[lowered]
    if len(lowered.encode("utf-8")) == 1:
        return lowered
    return SpecialKey.NULL


def parse_modifiers(text: str) -> Modifiers:
    """Parse a ``+``-separated list such as ``"ctrl+shift"``; unknown parts are ignored."""
    result = Modifiers.NONE
    for part in text.split("+"):
        result |= _NAMED_MODIFIERS.get(part.strip().lower(), Modifiers.NONE)
    return result


@dataclass(frozen=True)
class KeyBind:
    """A key, optionally with the exact modifiers that must be held."""

    key: str
    modifiers: str | None = None

    def matches(self, code: KeyCode, mods: Modifiers) -> bool:
        wanted = Modifiers.NONE if self.modifiers is None else parse_modifiers(self.modifiers)
        return parse_key(self.key) == code and mods == wanted

    @classmethod
    def from_config(cls, value: Any) -> "KeyBind":
        """Build a binding from a plain string or a ``{key, modifiers}`` table."""
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, Mapping):
            key = value.get("key")
            modifiers = value.get("modifiers")
            if isinstance(key, str) and isinstance(modifiers, str):
                return cls(key, modifiers)
        raise ValueError(f"invalid key binding: {value!r}")


def _binds(*specs: str | tuple[str, str]) -> list[KeyBind]:
    return [KeyBind(*spec) if isinstance(spec, tuple) else KeyBind(spec) for spec in specs]


@dataclass
class Keybinds:
    """Bindings for each action; missing actions use the defaults."""

    up: list[KeyBind] = field(default_factory=lambda: _binds("up", ("p", "ctrl")))
    down: list[KeyBind] = field(default_factory=lambda: _binds("down", ("n", "ctrl")))
    left: list[KeyBind] = field(default_factory=lambda: _binds("left"))
    right: list[KeyBind] = field(default_factory=lambda: _binds("right"))
    select: list[KeyBind] = field(default_factory=lambda: _binds("enter", ("y", "ctrl")))
    exit: list[KeyBind] = field(
        default_factory=lambda: _binds("esc", ("q", "ctrl"), ("c", "ctrl"))
    )
    pin: list[KeyBind] = field(default_factory=lambda: _binds(("space", "ctrl")))
    backspace: list[KeyBind] = field(default_factory=lambda: _binds("backspace"))
    # Ctrl+I is indistinguishable from Tab in terminals, hence Alt+I.
    image_preview: list[KeyBind] = field(default_factory=lambda: _binds(("i", "alt")))
    tag: list[KeyBind] = field(default_factory=lambda: _binds(("t", "ctrl")))

    @classmethod
    def actions(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Keybinds":
        """Build bindings from a configuration table; unknown keys are ignored."""
        overrides: dict[str, list[KeyBind]] = {}
        for action in cls.actions():
            if action not in data:
                continue
            value = data[action]
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                raise ValueError(f"bindings for {action!r} must be a list")
            overrides[action] = [KeyBind.from_config(item) for item in value]
        return cls(**overrides)

    def matches(self, action: str, code: KeyCode, mods: Modifiers) -> bool:
        """Whether the key press triggers ``action``."""
        if action not in self.actions():
            raise ValueError(f"unknown action: {action!r}")
        return any(bind.matches(code, mods) for bind in getattr(self, action))