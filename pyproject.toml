[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "babalong"
version = "0.1.0"
description = "A small tile-based puzzle game with pushable rule blocks, played on rectangular .ber maps"
requires-python = ">=3.10"
keywords = ["game", "puzzle", "tiles", "pygame", "sokoban"]
classifiers = [
    "Development Status :: 4 - Beta",
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
babalong = "babalong.app:main"

[tool.hatch.build.targets.wheel]
packages = ["babalong"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
