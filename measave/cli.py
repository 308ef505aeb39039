"""Command-line entry point: open a save file and show its raw data."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Iterator, Sequence
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

from measave.gamesave import GameSave, GameSaveObject, load_game_save
from measave.messageservice import message_service
from measave.rawdata import GameSaveRawDataModel
from measave.treeitem import ItemRole
from measave.treemodel import AbstractTreeModel, ModelIndex, Orientation

__all__ = ["open_save_file", "render_raw_data", "main", "VERSION"]

VERSION = "0.0.1"

_PROGRAM = "measave"
_DESCRIPTION = "Save editor for Mass Effect: Andromeda"
_LANDING_TEXT = "Open a save file to continue..."
_OPEN_FAILED = "Failed to open save file"


def _local_path(location: str | os.PathLike[str]) -> Path:
    if not isinstance(location, str):
        return Path(location)
    parts = urlsplit(location)
    # A one-letter scheme is a Windows drive letter, not a URL scheme.
    if not parts.scheme or len(parts.scheme) == 1:
        return Path(location)
    if parts.scheme == "file":
        return Path(url2pathname(unquote(parts.path)))
    raise ValueError(f"Unsupported file path: {location}")


def open_save_file(path: str | os.PathLike[str]) -> GameSave:
    """Read the save at ``path``, a local path or a ``file:`` URL.

    Raises ValueError for other URLs or malformed saves, OSError when the
    file cannot be opened.
    """
    return load_game_save(_local_path(path))


def _cell(model: AbstractTreeModel, row: int, column: int, parent: ModelIndex | None) -> str:
    value = model.data(model.index(row, column, parent), ItemRole.DISPLAY)
    return "" if value is None else str(value)


def _rows(
    model: AbstractTreeModel, parent: ModelIndex | None, depth: int
) -> Iterator[list[str]]:
    columns = model.column_count()
    for row in range(model.row_count(parent)):
        cells = [_cell(model, row, column, parent) for column in range(columns)]
        if cells:
            cells[0] = "  " * depth + cells[0]
        yield cells
        yield from _rows(model, model.index(row, 0, parent), depth + 1)


def render_raw_data(model: AbstractTreeModel) -> str:
    """Render ``model`` as an aligned text table, children indented under parents."""
    columns = model.column_count()
    heading = []
    for section in range(columns):
        value = model.header_data(section, Orientation.HORIZONTAL, ItemRole.DISPLAY)
        heading.append("" if value is None else str(value))
    table = [heading, *_rows(model, None, 0)]
    widths = [max(len(line[column]) for line in table) for column in range(columns)]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
        for line in table
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=_PROGRAM, description=_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("file", nargs="?", help="save file to open")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Open the save named on the command line and print its raw data."""
    args = _parser().parse_args(argv)
    if args.file is None:
        print(_LANDING_TEXT)
        return 0

    try:
        save = open_save_file(args.file)
    except (OSError, ValueError) as exc:
        message_service().push_error(_OPEN_FAILED, str(exc))
        return 1

    model = GameSaveRawDataModel()
    model.set_game_save(GameSaveObject(save))
    if save.file_path is not None:
        print(save.file_path.name)
    print(render_raw_data(model))
    return 0


if __name__ == "__main__":
    sys.exit(main())