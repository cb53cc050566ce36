import io
import sys

from fsel.stdin_input import is_stdin_piped, read_lines, read_null_separated


class _Tty(io.StringIO):
    def isatty(self):
        return True


def test_pipe_is_piped():
    assert is_stdin_piped(io.StringIO("x")) is True


def test_terminal_is_not_piped():
    assert is_stdin_piped(_Tty()) is False


def test_default_stream_is_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", _Tty())
    assert is_stdin_piped() is False


def test_read_lines_strips_terminators():
    assert read_lines(io.StringIO("one\ntwo\r\nthree")) == ["one", "two", "three"]


def test_read_lines_trailing_newline():
    assert read_lines(io.StringIO("one\n")) == ["one"]


def test_read_lines_keeps_blank_lines():
    assert read_lines(io.StringIO("one\n\ntwo\n")) == ["one", "", "two"]


def test_read_lines_empty():
    assert read_lines(io.StringIO("")) == []


def test_read_lines_default_stream(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("alpha\nbeta\n"))
    assert read_lines() == ["alpha", "beta"]


def test_null_separated_drops_empty():
    assert read_null_separated(io.StringIO("a b\0\0c\nd\0")) == ["a b", "c\nd"]


def test_null_separated_round_trip():
    entries = ["first", "second line", "third\twith tab"]
    assert read_null_separated(io.StringIO("\0".join(entries))) == entries