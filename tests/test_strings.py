import pytest

from fsel.strings import extract_exec_name


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("/usr/bin/firefox", "firefox"),
        ("firefox --new-window", "firefox"),
        ("env FOO=bar firefox", "env"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_extract_exec_name(command, expected):
    assert extract_exec_name(command) == expected


def test_leading_whitespace_and_tabs_are_skipped():
    assert extract_exec_name("\t  /opt/app/bin/editor\tfile.txt") == "editor"


def test_trailing_slash_gives_empty_name():
    assert extract_exec_name("/usr/bin/ --flag") == ""