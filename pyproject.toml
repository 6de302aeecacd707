[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ttodo"
version = "0.1.0"
description = "A keyboard-driven terminal to-do list with task statuses and tags"
requires-python = ">=3.10"
keywords = ["todo", "tasks", "terminal", "tui", "tags", "urwid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]
dependencies = [
    "urwid",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ttodo = "ttodo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ttodo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
