import pytest

from fsel.keybinds import (
    KeyBind,
    Keybinds,
    Modifiers,
    SpecialKey,
    parse_key,
    parse_modifiers,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("up", SpecialKey.UP),
        ("Down", SpecialKey.DOWN),
        ("esc", SpecialKey.ESC),
        ("escape", SpecialKey.ESC),
        ("ENTER", SpecialKey.ENTER),
        ("backspace", SpecialKey.BACKSPACE),
        ("space", " "),
        ("Q", "q"),
        ("f1", SpecialKey.NULL),
        ("", SpecialKey.NULL),
    ],
)
def test_parse_key(name, expected):
    assert parse_key(name) == expected


def test_parse_modifiers_combines_parts():
    assert parse_modifiers("ctrl+shift") == Modifiers.CONTROL | Modifiers.SHIFT
    assert parse_modifiers(" Control + Alt ") == Modifiers.CONTROL | Modifiers.ALT


def test_parse_modifiers_ignores_unknown():
    assert parse_modifiers("super") == Modifiers.NONE
    assert parse_modifiers("") == Modifiers.NONE


def test_simple_bind_requires_no_modifiers():
    bind = KeyBind("esc")
    assert bind.matches(SpecialKey.ESC, Modifiers.NONE)
    assert not bind.matches(SpecialKey.ESC, Modifiers.SHIFT)


def test_bind_with_modifiers_requires_exact_modifiers():
    bind = KeyBind("p", "ctrl")
    assert bind.matches("p", Modifiers.CONTROL)
    assert not bind.matches("p", Modifiers.NONE)
    assert not bind.matches("p", Modifiers.CONTROL | Modifiers.SHIFT)


def test_default_bindings():
    kb = Keybinds()
    assert kb.matches("up", SpecialKey.UP, Modifiers.NONE)
    assert kb.matches("up", "p", Modifiers.CONTROL)
    assert kb.matches("down", "n", Modifiers.CONTROL)
    assert kb.matches("select", SpecialKey.ENTER, Modifiers.NONE)
    assert kb.matches("select", "y", Modifiers.CONTROL)
    assert kb.matches("exit", "q", Modifiers.CONTROL)
    assert kb.matches("exit", "c", Modifiers.CONTROL)
    assert kb.matches("pin", " ", Modifiers.CONTROL)
    assert kb.matches("image_preview", "i", Modifiers.ALT)
    assert kb.matches("tag", "t", Modifiers.CONTROL)
    assert not kb.matches("image_preview", "i", Modifiers.CONTROL)
    assert not kb.matches("left", SpecialKey.RIGHT, Modifiers.NONE)


def test_from_config_forms():
    assert KeyBind.from_config("enter") == KeyBind("enter")
    assert KeyBind.from_config({"key": "x", "modifiers": "alt"}) == KeyBind("x", "alt")


def test_from_config_rejects_incomplete_table():
    with pytest.raises(ValueError):
        KeyBind.from_config({"key": "x"})
    with pytest.raises(ValueError):
        KeyBind.from_config(5)


def test_from_mapping_overrides_only_given_actions():
    kb = Keybinds.from_mapping(
        {"up": ["k", {"key": "up", "modifiers": "shift"}], "unrelated": 1}
    )
    assert kb.matches("up", "k", Modifiers.NONE)
    assert kb.matches("up", SpecialKey.UP, Modifiers.SHIFT)
    assert not kb.matches("up", SpecialKey.UP, Modifiers.NONE)
    assert kb.down == Keybinds().down


def test_from_mapping_rejects_non_list():
    with pytest.raises(ValueError):
        Keybinds.from_mapping({"exit": "esc"})


def test_matches_unknown_action():
    with pytest.raises(ValueError):
        Keybinds().matches("jump", SpecialKey.UP, Modifiers.NONE)