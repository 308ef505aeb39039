[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "measave"
version = "0.0.1"
description = "Reader and raw-data inspector for Mass Effect: Andromeda save files"
requires-python = ">=3.10"
dependencies = []
keywords = ["mass effect", "andromeda", "savegame", "save file", "frostbite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
measave = "measave.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["measave"]

[tool.pytest.ini_options]
addopts = "-ra"
