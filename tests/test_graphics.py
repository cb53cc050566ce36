import io
import subprocess
from unittest import mock

import pytest

from fsel.graphics import (
    DisplayState,
    GraphicsAdapter,
    Rect,
    current_display_state,
    write_at_position,
)


@pytest.fixture(autouse=True)
def _reset_state():
    GraphicsAdapter.NONE.image_hide()
    yield
    GraphicsAdapter.NONE.image_hide()


def _chafa_ok(data=b"IMGDATA"):
    return subprocess.CompletedProcess(["chafa"], 0, stdout=data)


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({"TERM_PROGRAM": "kitty"}, GraphicsAdapter.KITTY),
        ({"TERM": "xterm-kitty"}, GraphicsAdapter.KITTY),
        ({"TERM": "foot-extra"}, GraphicsAdapter.SIXEL),
        ({"TERM": "xterm-256color"}, GraphicsAdapter.SIXEL),
        ({"TERM_PROGRAM": "WezTerm", "TERM": "wezterm"}, GraphicsAdapter.SIXEL),
        ({"TERM": "linux"}, GraphicsAdapter.NONE),
        ({}, GraphicsAdapter.NONE),
    ],
)
def test_detect(env, expected):
    assert GraphicsAdapter.detect(env) is expected


def test_write_at_position_wraps_writer_output():
    buf = io.BytesIO()
    result = write_at_position((1, 2), lambda out: out.write(b"payload") and "done", buf)
    assert result == "done"
    assert buf.getvalue() == b"\x1b[?25l\x1b7\x1b[3;2Hpayload\x1b8"


def test_write_at_position_restores_cursor_on_error():
    buf = io.BytesIO()

    def failing(out):
        raise OSError("broken")

    with pytest.raises(OSError):
        write_at_position((0, 0), failing, buf)
    assert buf.getvalue().endswith(b"\x1b8")


def test_sixel_erase_writes_one_blank_row_per_line(capsysbinary):
    area = Rect(x=3, y=4, width=7, height=5)
    GraphicsAdapter.SIXEL.image_erase(area)
    err = capsysbinary.readouterr().err
    assert err.count(b" " * area.width) == area.height


def test_kitty_erase_sends_delete_command(capsysbinary):
    GraphicsAdapter.KITTY.image_erase(Rect(0, 0, 10, 10))
    assert b"\x1b_Ga=d,d=A\x1b\\" in capsysbinary.readouterr().err


def test_none_erase_writes_nothing(capsysbinary):
    GraphicsAdapter.NONE.image_erase(Rect(0, 0, 10, 10))
    assert capsysbinary.readouterr().err == b""


def test_none_adapter_show_keeps_state_empty():
    GraphicsAdapter.NONE.show_cclip_image("7", Rect(0, 0, 4, 4))
    assert current_display_state().is_empty


def test_kitty_show_renders_and_records_state(capsysbinary):
    area = Rect(2, 1, 30, 12)
    with mock.patch("subprocess.Popen") as popen, mock.patch(
        "subprocess.run", return_value=_chafa_ok()
    ) as run:
        GraphicsAdapter.KITTY.show_cclip_image("42", area)
    assert popen.call_args[0][0] == ["cclip", "get", "42"]
    chafa_args = run.call_args[0][0]
    assert chafa_args[:3] == ["chafa", "-f", "kitty"]
    assert f"{area.width}x{area.height}" in chafa_args
    assert b"IMGDATA" in capsysbinary.readouterr().err
    assert current_display_state() == DisplayState(area, "42")


def test_sixel_show_uses_sixels_format(capsysbinary):
    area = Rect(0, 0, 5, 5)
    with mock.patch("subprocess.Popen"), mock.patch(
        "subprocess.run", return_value=_chafa_ok(b"SIXELDATA")
    ) as run:
        GraphicsAdapter.SIXEL.show_cclip_image("9", area)
    assert run.call_args[0][0][2] == "sixels"
    assert b"SIXELDATA" in capsysbinary.readouterr().err
    assert current_display_state() == DisplayState(area, "9")


def test_failed_chafa_writes_nothing(capsysbinary):
    failed = subprocess.CompletedProcess(["chafa"], 1, stdout=b"IMGDATA")
    with mock.patch("subprocess.Popen"), mock.patch("subprocess.run", return_value=failed):
        GraphicsAdapter.KITTY.show_cclip_image("9", Rect(0, 0, 5, 5))
    assert b"IMGDATA" not in capsysbinary.readouterr().err


def test_missing_cclip_raises_and_keeps_state():
    with mock.patch("subprocess.Popen", side_effect=FileNotFoundError("cclip")):
        with pytest.raises(FileNotFoundError):
            GraphicsAdapter.KITTY.show_cclip_image("1", Rect(0, 0, 5, 5))
    assert current_display_state().is_empty


def test_if_different_skips_same_image(capsysbinary):
    area = Rect(0, 0, 8, 8)
    with mock.patch("subprocess.Popen"), mock.patch("subprocess.run", return_value=_chafa_ok()):
        GraphicsAdapter.KITTY.show_cclip_image("5", area)
    capsysbinary.readouterr()
    with mock.patch("subprocess.Popen") as popen, mock.patch("subprocess.run") as run:
        GraphicsAdapter.KITTY.show_cclip_image_if_different("5", area)
    assert popen.call_count == 0
    assert run.call_count == 0
    assert capsysbinary.readouterr().err == b""
    assert current_display_state() == DisplayState(area, "5")


def test_if_different_hides_then_shows_new_image(capsysbinary):
    area = Rect(0, 0, 8, 8)
    with mock.patch("subprocess.Popen"), mock.patch("subprocess.run", return_value=_chafa_ok()):
        GraphicsAdapter.KITTY.show_cclip_image("5", area)
    capsysbinary.readouterr()
    with mock.patch("subprocess.Popen") as popen, mock.patch(
        "subprocess.run", return_value=_chafa_ok()
    ):
        GraphicsAdapter.KITTY.show_cclip_image_if_different("6", area)
    assert popen.call_count == 1
    assert b"\x1b_Ga=d,d=A\x1b\\" in capsysbinary.readouterr().err
    assert current_display_state() == DisplayState(area, "6")


def test_image_hide_clears_state(capsysbinary):
    area = Rect(1, 1, 3, 3)
    with mock.patch("subprocess.Popen"), mock.patch("subprocess.run", return_value=_chafa_ok()):
        GraphicsAdapter.SIXEL.show_cclip_image("3", area)
    assert current_display_state() == DisplayState(area, "3")
    GraphicsAdapter.SIXEL.image_hide()
    assert current_display_state().is_empty