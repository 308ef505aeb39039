"""The raw-data tree: every header field of a save as an editable row."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Callable

from measave.gamesave import GameSaveObject
from measave.gamesaveheader import Signal
from measave.treeitem import AbstractTreeItem, ItemFlag, ItemRole, TreeItem
from measave.treemodel import AbstractTreeModel

__all__ = [
    "DelegateOption",
    "Column",
    "COLUMN_COUNT",
    "GameSaveRawDataItem",
    "GameSaveRawDataModel",
    "default_format",
]


class DelegateOption(Enum):
    """Hints for an editor of a value."""

    MIN = "min"
    MAX = "max"
    DECIMAL = "decimal"


class Column(IntEnum):
    """Columns of the raw-data model."""

    KEY = 0
    READ_ONLY = 1
    RAW_DATA = 2


COLUMN_COUNT = len(Column)

_HEADER_PROPERTIES = (
    "area_name_string_id",
    "area_thumbnail_texture_id",
    "game_version",
    "required_dlc",
    "required_install_group",
    "profile_name",
    "profile_unique_name",
    "profile_id",
    "level_id",
    "player_level",
    "game_completed",
    "trial_mode",
    "completion_percentage",
    "date_time",
    "level_title_id",
    "level_floor_id",
    "level_region_id",
    "total_playtime",
    "name_override_string_id",
)


def default_format(value: Any) -> str:
    """Display text of a value: empty for None, True/False for booleans."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return str(value)


class GameSaveRawDataItem(AbstractTreeItem):
    """A row showing one attribute of ``target`` under the name ``key``."""

    def __init__(
        self,
        key: str,
        target: Any,
        property_name: str,
        parent: AbstractTreeItem | None = None,
    ) -> None:
        if not hasattr(target, property_name):
            raise AttributeError(f"{type(target).__name__} has no property {property_name!r}")
        super().__init__(parent)
        self._key = key
        self._target = target
        self._property = property_name
        self._display_func: Callable[[Any], str] | None = default_format
        self._delegate_options: dict[DelegateOption, Any] = {}
        self._read_only = False

    @property
    def key(self) -> str:
        """The label shown in the key column."""
        return self._key

    @property
    def display_format(self) -> Callable[[Any], str] | None:
        """Function turning the value into display text, if any."""
        return self._display_func

    def set_display_format(self, display_func: Callable[[Any], str] | None) -> GameSaveRawDataItem:
        """Replace the display function; returns this item."""
        self._display_func = display_func
        return self

    @property
    def delegate_options(self) -> dict[DelegateOption, Any]:
        """A copy of the editor hints."""
        return dict(self._delegate_options)

    def set_delegate_options(self, options: dict[DelegateOption, Any]) -> GameSaveRawDataItem:
        """Replace all editor hints; returns this item."""
        self._delegate_options = dict(options)
        return self

    def delegate_option(self, option: DelegateOption, default: Any = None) -> Any:
        """The hint ``option``, or ``default`` if unset."""
        return self._delegate_options.get(option, default)

    def set_delegate_option(self, option: DelegateOption, value: Any) -> GameSaveRawDataItem:
        """Set one editor hint; returns this item."""
        self._delegate_options[option] = value
        return self

    @property
    def read_only(self) -> bool:
        """Whether the value may not be edited."""
        return self._read_only

    def set_read_only(self, value: bool) -> GameSaveRawDataItem:
        """Mark the value as read-only or not; returns this item."""
        self._read_only = value
        return self

    def column_count(self) -> int:
        return COLUMN_COUNT

    def data(self, column: int, role: int) -> Any:
        if column == Column.KEY:
            if role == ItemRole.DISPLAY:
                return self._key
        elif column == Column.READ_ONLY:
            if role == ItemRole.DISPLAY and self._read_only:
                return "Yes"
        elif column == Column.RAW_DATA:
            if role == ItemRole.DISPLAY:
                value = getattr(self._target, self._property)
                return self._display_func(value) if self._display_func else value
            if role == ItemRole.EDIT:
                return getattr(self._target, self._property)
        return None

    def set_data(self, column: int, role: int, value: Any) -> bool:
        if column != Column.RAW_DATA or role != ItemRole.EDIT:
            return False
        try:
            setattr(self._target, self._property, value)
        except AttributeError:
            return False
        return True

    def flags(self, column: int) -> ItemFlag:
        flags = super().flags(column)
        if column == Column.RAW_DATA and not self._read_only:
            flags |= ItemFlag.EDITABLE
        return flags

    def insert_children(self, position: int, count: int = 1, columns: int = 1) -> bool:
        return False

    def remove_children(self, position: int, count: int) -> bool:
        return False

    def insert_columns(self, position: int, columns: int = 1) -> bool:
        return False

    def remove_columns(self, position: int, columns: int = 1) -> bool:
        return False


class GameSaveRawDataModel(AbstractTreeModel):
    """A model listing the header fields of a :class:`GameSaveObject`."""

    def __init__(self) -> None:
        super().__init__(TreeItem(["Key", "Read Only", "Raw Data"]))
        self._game_save: GameSaveObject | None = None
        self.game_save_changed = Signal()

    @property
    def game_save(self) -> GameSaveObject | None:
        """The save shown, if any."""
        return self._game_save

    def set_game_save(self, game_save: GameSaveObject | None) -> None:
        """Show ``game_save``, rebuilding the rows; ``None`` clears the model."""
        if game_save is self._game_save:
            return
        self._game_save = game_save
        if game_save is None:
            self._clear()
        else:
            self._setup(game_save)
        self.game_save_changed.emit(game_save)

    def _clear(self) -> None:
        root = self.root_item
        with self._reset_model():
            root.remove_children(0, root.child_count())

    def _setup(self, game_save: GameSaveObject) -> None:
        root = self.root_item
        with self._reset_model():
            root.remove_children(0, root.child_count())
            section = TreeItem(["header", None, None])
            root.add_child(section)
            header = game_save.header
            section.add_child(GameSaveRawDataItem("version", header, "version").set_read_only(True))
            for name in _HEADER_PROPERTIES:
                section.add_child(GameSaveRawDataItem(name, header, name))