[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fsel"
version = "2.3.0"
description = "Building blocks for a terminal launcher and dmenu-style picker: keybinds, input events, stdin lists, clipboard previews, tag prompts and inline image display."
requires-python = ">=3.10"
dependencies = [
    "blessed",
    "wcwidth",
]
keywords = ["tui", "launcher", "dmenu", "clipboard", "keybinds", "terminal", "sixel", "kitty"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Operating System :: POSIX :: BSD",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fsel"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
