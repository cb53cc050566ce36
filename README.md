# fsel

A library of pieces for a terminal app launcher and dmenu-style picker:
keybind parsing and matching, a threaded keyboard input loop with ticks,
reading piped lists from standard input, previews for `cclip`
clipboard-history rows, the tag-editing prompts, and image display through
`chafa` using the Kitty or Sixel graphics protocols.

## Requirements

- Python 3.10 or later
- `blessed` and `wcwidth` (installed with the package)
- Optional, at run time: the `cclip` program for clipboard content and
  `chafa` for images. If `cclip get` fails, `CclipContent.get` falls back to
  the preview field of the row; if no image can be rendered,
  `show_fullscreen_image` returns `False`.

## Modules

| Module | Contents |
| --- | --- |
| `fsel.strings` | `extract_exec_name` |
| `fsel.process` | `get_current_pid`, `kill_sigterm`, `kill_sigterm_quietly` |
| `fsel.keybinds` | `SpecialKey`, `Modifiers`, `KeyBind`, `Keybinds`, `parse_key`, `parse_modifiers` |
| `fsel.input` | `InputConfig`, `Input`, `KeyEvent`, `Tick`, `translate_keystroke` |
| `fsel.stdin_input` | `is_stdin_piped`, `read_lines`, `read_null_separated` |
| `fsel.tagging` | tag prompt states (`Normal`, `PromptingTagName`, `PromptingTagEmoji`, `PromptingTagColor`, `RemovingTag`), `TempMessage`, `clean_tag_name`, `cycle_removal_selection`, `cycle_tag_creation_selection`, `prompt_lines` |
| `fsel.preview` | `is_cclip_line`, `is_cclip_image_line`, `cclip_rowid`, `truncate_content`, `sanitize_display`, `wrap_to_width`, `content_lines`, `CclipContent` |
| `fsel.graphics` | `Rect`, `DisplayState`, `GraphicsAdapter`, `write_at_position`, `current_display_state` |
| `fsel.cclip_image` | `image_info`, `image_placeholder_lines`, `fullscreen_formats`, `fullscreen_geometry`, `show_fullscreen_image` |

## Examples

Finding the program behind a command line:

```python
from fsel.strings import extract_exec_name

extract_exec_name("/usr/bin/firefox")       # "firefox"
extract_exec_name("firefox --new-window")   # "firefox"
extract_exec_name("env FOO=bar firefox")    # "env"
```

### Keybinds

`Keybinds` starts with defaults for each action: `up` (Up, Ctrl+P), `down`
(Down, Ctrl+N), `left`, `right`, `select` (Enter, Ctrl+Y), `exit` (Esc,
Ctrl+Q, Ctrl+C), `pin` (Ctrl+Space), `backspace`, `image_preview` (Alt+I)
and `tag` (Ctrl+T). `Keybinds.from_mapping` overrides actions from a parsed
configuration table; actions left out keep their defaults, unknown keys are
ignored, and a value that is not a list raises `ValueError`.

```python
from fsel.keybinds import Keybinds, Modifiers, SpecialKey

binds = Keybinds.from_mapping({
    "up": ["up", {"key": "k", "modifiers": "ctrl"}],
})
binds.matches("up", "k", Modifiers.CONTROL)     # True
binds.matches("up", SpecialKey.UP, Modifiers.NONE)  # True
```

A binding is either a plain key name (`"up"`, `"enter"`, `"esc"`,
`"escape"`, `"backspace"`, `"space"` or a single ASCII character), which
matches only when no modifiers are held, or a table with `key` and
`modifiers`, where modifiers are joined with `+` (`"ctrl+shift"`) and must
match exactly. Unknown key names never match a real key.

### Input

`Input` reads keys on one background thread and puts a `Tick` on the queue
every `InputConfig.tick_rate` seconds on another. By default it reads the
terminal through `blessed`; a `read_key` callable can be passed instead.
`Input.next(timeout)` returns the next `KeyEvent` or `Tick`, raises
`TimeoutError` when the timeout passes and `EOFError` once closed and
drained. The reading thread stops after delivering `InputConfig.exit_key`.
`Input` is a context manager that calls `close()` on exit.

### Piped lists

```python
import sys
from fsel.stdin_input import is_stdin_piped, read_lines, read_null_separated

if is_stdin_piped(sys.stdin):
    entries = read_lines(sys.stdin)
```

`read_lines` strips `\n` and `\r\n` terminators; `read_null_separated`
splits on NUL characters and drops empty entries.

### Previews

```python
from fsel.preview import sanitize_display, wrap_to_width, content_lines

text = sanitize_display("line one\nline\ttwo")   # "line one line    two"
rows = wrap_to_width(text, 20)
panel = content_lines("some text", wrap=True, panel_width=40, panel_height=5)
```

`sanitize_display` turns newlines into spaces, tabs into four spaces, drops
carriage returns and NULs, and removes ANSI colour codes. `wrap_to_width`
measures terminal cells, so wide characters take two columns, and every row
stays strictly narrower than the given width. `content_lines` cuts content to
5000 UTF-8 bytes, optionally prefixes the line number, wraps to the panel's
inner width (at least 20 cells) and pads to the panel height with blank lines.

`CclipContent` fetches the full content of a clipboard-history row
(`rowid<TAB>mime<TAB>preview...`) with `cclip get` and caches non-blank
results by rowid.

### Tag prompts

The tag states are frozen dataclasses; the cycling functions return a new
state. `prompt_lines` returns the prompt as lines of `(text, style)` spans,
or `None` for `Normal`.

```python
from fsel.tagging import clean_tag_name

clean_tag_name("📌 todo (red)")   # "todo"
```

## Terminal graphics

`GraphicsAdapter.detect()` picks `KITTY` when `TERM_PROGRAM` is `kitty` or
`TERM` mentions kitty, `SIXEL` for `foot*`, xterm-like terminals and
WezTerm, and `NONE` otherwise. Images are fetched with `cclip get <rowid>`
and rendered by `chafa`; the adapter records what is shown where
(`current_display_state()`), so `show_cclip_image_if_different` skips
redrawing the same image in the same area. `show_fullscreen_image` draws an
image row over the whole terminal, trying the formats from
`fullscreen_formats` in turn.

## What this package does not do

It provides no command to run and no full-screen picker or launcher screen:
there is no layout or drawing of the list, content and filter panels, no
scanning of desktop entries, no fuzzy or exact filtering of entries, and no
storage of history or pins. Those have to be built on top of these pieces.