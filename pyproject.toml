[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keyui"
version = "0.1.0"
description = "Key user interface: terminal escape sequence decoding and user key mappings"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "keyboard", "key mapping", "escape sequences", "macros"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
keyui-driver = "keyui.driver:main"

[tool.hatch.build.targets.wheel]
packages = ["keyui"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
