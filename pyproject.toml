[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tiles2048"
version = "1.1.0"
description = "The 2048 sliding-tile puzzle on 4x4 to 8x8 boards, with themes, merge effects and an alpha-beta auto-player"
requires-python = ">=3.10"
keywords = ["2048", "puzzle", "game", "pygame", "minimax", "alpha-beta"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Environment :: MacOS X",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tiles2048 = "tiles2048.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tiles2048"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
