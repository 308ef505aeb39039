"""A hierarchical item model addressed by (row, column, parent) indexes."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from measave.gamesaveheader import Signal
from measave.treeitem import AbstractTreeItem, ItemFlag, ItemRole

__all__ = ["Orientation", "ModelIndex", "AbstractTreeModel"]


class Orientation(Enum):
    """Direction of a header."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class ModelIndex:
    """Locates one cell of a model; the default index is invalid and means the root."""

    row: int = -1
    column: int = -1
    item: AbstractTreeItem | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the index points at an actual cell."""
        return self.row >= 0 and self.column >= 0 and self.item is not None


_INVALID = ModelIndex()


class AbstractTreeModel:
    """An item model over a tree of :class:`AbstractTreeItem` objects.

    The root item supplies the column count and the horizontal header.
    Structural changes are announced through the model's signals.
    """

    def __init__(self, root_item: AbstractTreeItem) -> None:
        self._root_item = root_item
        self.data_changed = Signal()
        self.header_data_changed = Signal()
        self.rows_inserted = Signal()
        self.rows_removed = Signal()
        self.columns_inserted = Signal()
        self.columns_removed = Signal()
        self.model_about_to_be_reset = Signal()
        self.model_reset = Signal()

    @property
    def root_item(self) -> AbstractTreeItem:
        """The invisible item at the top of the tree."""
        return self._root_item

    @contextmanager
    def _reset_model(self) -> Iterator[None]:
        self.model_about_to_be_reset.emit()
        try:
            yield
        finally:
            self.model_reset.emit()

    def _item(self, index: ModelIndex | None) -> AbstractTreeItem:
        if index is not None and index.is_valid and index.item is not None:
            return index.item
        return self._root_item

    def header_data(
        self, section: int, orientation: Orientation, role: int = ItemRole.DISPLAY
    ) -> Any:
        """Header value of ``section``; only horizontal headers carry data."""
        if orientation is Orientation.HORIZONTAL:
            return self._root_item.data(section, role)
        return None

    def flags(self, index: ModelIndex | None) -> ItemFlag:
        """Flags of the cell at ``index``; none for an invalid index."""
        if index is None or not index.is_valid:
            return ItemFlag.NONE
        return self._item(index).flags(index.column)

    def row_count(self, parent: ModelIndex | None = None) -> int:
        """Number of rows under ``parent`` (the root by default)."""
        if parent is not None and parent.is_valid and parent.column > 0:
            return 0
        return self._item(parent).child_count()

    def column_count(self, parent: ModelIndex | None = None) -> int:
        """Number of columns, the same for every parent."""
        return self._root_item.column_count()

    def index(self, row: int, column: int, parent: ModelIndex | None = None) -> ModelIndex:
        """Index of the cell at ``row``/``column`` under ``parent``; invalid if absent."""
        if parent is not None and parent.is_valid and parent.column != 0:
            return _INVALID
        child = self._item(parent).child(row)
        if child is None:
            return _INVALID
        return ModelIndex(row, column, child)

    def parent(self, index: ModelIndex | None) -> ModelIndex:
        """Index of the parent of ``index``; invalid for top-level items."""
        if index is None or not index.is_valid:
            return _INVALID
        parent_item = self._item(index).parent
        if parent_item is None or parent_item is self._root_item:
            return _INVALID
        return ModelIndex(parent_item.row(), 0, parent_item)

    def data(self, index: ModelIndex | None, role: int = ItemRole.DISPLAY) -> Any:
        """Value of the cell at ``index`` for ``role``."""
        if index is None or not index.is_valid:
            return None
        return self._item(index).data(index.column, role)

    def set_data(self, index: ModelIndex | None, value: Any, role: int = ItemRole.EDIT) -> bool:
        """Store ``value`` in the cell; emits ``data_changed`` on success."""
        target = index if index is not None else _INVALID
        result = self._item(target).set_data(target.column, role, value)
        if result:
            self.data_changed.emit(target, target, [ItemRole.DISPLAY, role])
        return result

    def set_header_data(
        self, section: int, orientation: Orientation, value: Any, role: int = ItemRole.EDIT
    ) -> bool:
        """Store a header value; emits ``header_data_changed`` on success."""
        result = self._root_item.set_data(section, role, value)
        if result:
            self.header_data_changed.emit(orientation, section, section)
        return result

    def insert_columns(self, position: int, columns: int, parent: ModelIndex | None = None) -> bool:
        """Insert ``columns`` columns at ``position`` throughout the tree."""
        success = self._root_item.insert_columns(position, columns)
        self.columns_inserted.emit(parent or _INVALID, position, position + columns - 1)
        return success

    def remove_columns(self, position: int, columns: int, parent: ModelIndex | None = None) -> bool:
        """Remove columns; when none are left, every row goes too."""
        success = self._root_item.remove_columns(position, columns)
        self.columns_removed.emit(parent or _INVALID, position, position + columns - 1)
        if self._root_item.column_count() == 0:
            self.remove_rows(0, self.row_count())
        return success

    def insert_rows(self, position: int, rows: int, parent: ModelIndex | None = None) -> bool:
        """Insert ``rows`` empty rows under ``parent`` at ``position``."""
        parent_item = self._item(parent)
        success = parent_item.insert_children(position, rows, self._root_item.column_count())
        self.rows_inserted.emit(parent or _INVALID, position, position + rows - 1)
        return success

    def remove_rows(self, position: int, rows: int, parent: ModelIndex | None = None) -> bool:
        """Remove ``rows`` rows under ``parent`` starting at ``position``."""
        parent_item = self._item(parent)
        success = parent_item.remove_children(position, rows)
        self.rows_removed.emit(parent or _INVALID, position, position + rows - 1)
        return success