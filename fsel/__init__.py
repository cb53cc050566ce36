"""Keybinds, input events, stdin lists, clipboard previews, tag prompts and terminal images."""

__version__ = "2.3.0"