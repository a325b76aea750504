"""Focusing a flame graph frame and the history of focused frames."""

from __future__ import annotations

from perfmodel.flamegraph import FrameItem, Rect, layout_items


def focus_item(item: FrameItem | None, root_width: float) -> FrameItem | None:
    """Stretch ``item`` and its ancestors to ``root_width`` and lay out below it.

    Each ancestor keeps its vertical position but starts at x = 0 and spans
    the full width. Among the children of each ancestor, only the one on the
    path to ``item`` stays visible. The children of ``item`` are then laid
    out again. Returns the focused item; None is ignored and returned as is.
    """
    if item is None:
        return None

    node: FrameItem | None = item
    while node is not None:
        node.rect = Rect(0.0, node.rect.y, root_width, node.rect.height)
        if node.parent is not None:
            for sibling in node.parent.children:
                sibling.visible = sibling is node
        node = node.parent

    layout_items(item)
    return item


class SelectionHistory:
    """Browser-like history of the frames that were focused."""

    def __init__(self, root: FrameItem | None = None) -> None:
        self._items: list[FrameItem | None] = []
        self._index = -1
        if root is not None:
            self.reset(root)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def index(self) -> int:
        """Position of the current entry; -1 while the history is empty."""
        return self._index

    @property
    def current(self) -> FrameItem | None:
        """The currently selected frame, or None."""
        if self._index < 0:
            return None
        return self._items[self._index]

    def reset(self, root: FrameItem | None) -> None:
        """Start a new history holding only ``root``."""
        self._items = [root]
        self._index = 0

    def select(self, item: FrameItem | None) -> bool:
        """Make ``item`` the current entry, dropping any forward entries.

        Returns whether the history changed; selecting None or the current
        item again changes nothing.
        """
        if item is None or item is self.current:
            return False
        del self._items[self._index + 1 :]
        self._items.append(item)
        self._index = len(self._items) - 1
        return True

    def back(self) -> FrameItem | None:
        """Step back one entry if possible and return the current frame."""
        if self.can_go_back():
            self._index -= 1
        return self.current

    def forward(self) -> FrameItem | None:
        """Step forward one entry if possible and return the current frame."""
        if self.can_go_forward():
            self._index += 1
        return self.current

    def can_go_back(self) -> bool:
        """Whether there is an earlier entry."""
        return self._index > 0

    def can_go_forward(self) -> bool:
        """Whether there is a later entry."""
        return self._index + 1 < len(self._items)