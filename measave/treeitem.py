"""Tree items holding per-column data for hierarchical item models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any, Iterable

__all__ = ["ItemRole", "ItemFlag", "AbstractTreeItem", "TreeItemData", "TreeItem"]

_INT_MAX = 2**31 - 1


class ItemRole(IntEnum):
    """The kind of data requested from an item."""

    DISPLAY = 0
    EDIT = 2


class ItemFlag(IntFlag):
    """Properties of an item column."""

    NONE = 0
    SELECTABLE = 1
    EDITABLE = 2
    ENABLED = 32


DEFAULT_FLAGS = ItemFlag.SELECTABLE | ItemFlag.ENABLED


class AbstractTreeItem(ABC):
    """A node in a tree that owns its children."""

    def __init__(self, parent: AbstractTreeItem | None = None) -> None:
        self._parent = parent
        self._children: list[AbstractTreeItem] = []

    @property
    def parent(self) -> AbstractTreeItem | None:
        """The item this one belongs to, or ``None`` for a root."""
        return self._parent

    @property
    def children(self) -> tuple[AbstractTreeItem, ...]:
        """The child items in order."""
        return tuple(self._children)

    def child(self, row: int) -> AbstractTreeItem | None:
        """The child at ``row``, or ``None`` when out of range."""
        return self._children[row] if 0 <= row < len(self._children) else None

    def child_count(self) -> int:
        """Number of children."""
        return len(self._children)

    def row(self) -> int:
        """Position of this item among its parent's children; 0 for a root."""
        if self._parent is None:
            return 0
        for position, item in enumerate(self._parent._children):
            if item is self:
                return position
        raise LookupError("item is not among its parent's children")

    @abstractmethod
    def column_count(self) -> int:
        """Number of columns."""

    @abstractmethod
    def data(self, column: int, role: int) -> Any:
        """The value of ``column`` for ``role``."""

    @abstractmethod
    def set_data(self, column: int, role: int, value: Any) -> bool:
        """Store ``value``; return whether it was accepted."""

    def flags(self, column: int) -> ItemFlag:
        """Flags of ``column``."""
        return DEFAULT_FLAGS

    def set_flags(self, column: int, flags: ItemFlag) -> bool:
        """Change the flags of ``column``; unsupported by default."""
        return False

    @abstractmethod
    def insert_children(self, position: int, count: int = 1, columns: int = 1) -> bool:
        """Insert ``count`` empty children at ``position``."""

    @abstractmethod
    def remove_children(self, position: int, count: int) -> bool:
        """Remove ``count`` children starting at ``position``."""

    @abstractmethod
    def insert_columns(self, position: int, columns: int = 1) -> bool:
        """Insert ``columns`` empty columns at ``position``."""

    @abstractmethod
    def remove_columns(self, position: int, columns: int = 1) -> bool:
        """Remove ``columns`` columns starting at ``position``."""

    def add_child(self, child: AbstractTreeItem) -> bool:
        """Append ``child`` and make this item its parent."""
        if len(self._children) >= _INT_MAX:
            return False
        child._parent = self
        self._children.append(child)
        return True

    def insert_child(self, position: int, child: AbstractTreeItem) -> bool:
        """Insert ``child`` at ``position``; False if out of range."""
        if not 0 <= position <= len(self._children):
            return False
        child._parent = self
        self._children.insert(position, child)
        return True

    def remove_child(self, child: AbstractTreeItem | int | None = -1) -> bool:
        """Remove a child given as an item or a position; a negative position means the last."""
        if child is None:
            return False
        if isinstance(child, AbstractTreeItem):
            for position, item in enumerate(self._children):
                if item is child:
                    del self._children[position]
                    item._parent = None
                    return True
            return False
        if child < 0:
            if not self._children:
                return False
            self._children.pop()._parent = None
            return True
        if child >= len(self._children):
            return False
        self._children.pop(child)._parent = None
        return True


@dataclass
class TreeItemData:
    """The values of one column, by role, with the column's flags."""

    data: dict[int, Any] = field(default_factory=dict)
    flags: ItemFlag = DEFAULT_FLAGS


class TreeItem(AbstractTreeItem):
    """A general tree item storing a list of columns.

    ``data`` may hold :class:`TreeItemData` entries, which are kept as they
    are, or plain values, which become the display value of a column.
    """

    def __init__(
        self,
        data: Iterable[Any] | None = None,
        parent: AbstractTreeItem | None = None,
    ) -> None:
        super().__init__(parent)
        self._columns: list[TreeItemData] = [
            TreeItemData(dict(datum.data), datum.flags)
            if isinstance(datum, TreeItemData)
            else TreeItemData({ItemRole.DISPLAY: datum})
            for datum in (data or ())
        ]

    def _valid(self, column: int) -> bool:
        return 0 <= column < len(self._columns)

    def column_count(self) -> int:
        return len(self._columns)

    def data(self, column: int, role: int) -> Any:
        if not self._valid(column):
            return None
        return self._columns[column].data.get(role)

    def set_data(self, column: int, role: int, value: Any) -> bool:
        if not self._valid(column):
            return False
        entry = self._columns[column]
        if not entry.flags & ItemFlag.EDITABLE:
            return False
        entry.data[role] = value
        return True

    def flags(self, column: int) -> ItemFlag:
        if not self._valid(column):
            return ItemFlag.NONE
        return self._columns[column].flags

    def set_flags(self, column: int, flags: ItemFlag) -> bool:
        if not self._valid(column):
            return False
        self._columns[column].flags = flags
        return True

    def insert_children(self, position: int, count: int = 1, columns: int = 1) -> bool:
        if not 0 <= position <= len(self._children) or len(self._children) + count >= _INT_MAX:
            return False
        for _ in range(count):
            item = TreeItem([TreeItemData() for _ in range(columns)], self)
            self._children.insert(position, item)
        return True

    def remove_children(self, position: int, count: int) -> bool:
        if position < 0 or position + count > len(self._children):
            return False
        if count > 0:
            removed = self._children[position:position + count]
            del self._children[position:position + count]
            for item in removed:
                item._parent = None
        return True

    def insert_columns(self, position: int, columns: int = 1) -> bool:
        if not 0 <= position <= len(self._columns):
            return False
        for _ in range(columns):
            self._columns.insert(position, TreeItemData())
        for child in self._children:
            child.insert_columns(position, columns)
        return True

    def remove_columns(self, position: int, columns: int = 1) -> bool:
        if position < 0 or position + columns > len(self._columns):
            return False
        if columns > 0:
            del self._columns[position:position + columns]
        for child in self._children:
            child.remove_columns(position, columns)
        return True