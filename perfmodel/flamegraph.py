"""Flame graph construction, layout and search over a call tree."""

from __future__ import annotations

import enum
import random
import zlib
from collections.abc import Sequence
from dataclasses import dataclass, field

from perfmodel.costs import Costs, Unit
from perfmodel.symbols import Symbol
from perfmodel.trees import SymbolNode

_Y_MARGIN = 2.0
_PALETTE_SIZE = 100
_HOT_ALPHA = 125


class SearchMatch(enum.Enum):
    """How a frame relates to the current search."""

    NO_SEARCH = enum.auto()
    NO_MATCH = enum.auto()
    DIRECT_MATCH = enum.auto()
    CHILD_MATCH = enum.auto()


@dataclass
class Rect:
    """An axis-aligned rectangle; ``y`` grows downwards."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


def _hot_palette() -> tuple[tuple[int, int, int, int], ...]:
    rng = random.Random(1)
    return tuple(
        (
            int(205 + 50 * rng.random()),
            int(230 * rng.random()),
            int(55 * rng.random()),
            _HOT_ALPHA,
        )
        for _ in range(_PALETTE_SIZE)
    )


_HOT_PALETTE = _hot_palette()


def _hot_color(symbol: Symbol) -> tuple[int, int, int, int]:
    """A colour from the "hot" palette, stable for a given symbol."""
    key = "\0".join((symbol.symbol, symbol.binary, symbol.path)).encode()
    return _HOT_PALETTE[zlib.crc32(key) % len(_HOT_PALETTE)]


@dataclass(eq=False)
class FrameItem:
    """One frame box of the flame graph."""

    cost: int
    unit: Unit
    symbol: Symbol
    parent: FrameItem | None = field(default=None, repr=False)
    children: list[FrameItem] = field(default_factory=list, repr=False)
    rect: Rect = field(default_factory=Rect)
    visible: bool = True
    search_match: SearchMatch = SearchMatch.NO_SEARCH
    color: tuple[int, int, int, int] | None = None

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.parent.children.append(self)

    def root(self) -> FrameItem:
        """The topmost item of the graph this item belongs to."""
        item = self
        while item.parent is not None:
            item = item.parent
        return item

    def find_child(self, symbol: Symbol) -> FrameItem | None:
        """The direct child for ``symbol``, or None."""
        return next((child for child in self.children if child.symbol == symbol), None)


@dataclass
class SearchResult:
    """Outcome of a search below one item."""

    match_type: SearchMatch = SearchMatch.NO_MATCH
    direct_cost: int = 0


def _add_items(
    costs: Costs,
    type: int,
    rows: Sequence[SymbolNode],
    parent: FrameItem,
    threshold: float,
    collapse_recursion: bool,
) -> None:
    for row in rows:
        row_cost = costs.cost(type, row.id)
        if collapse_recursion and row.symbol.symbol and row.symbol == parent.symbol:
            if row_cost > threshold:
                _add_items(costs, type, row.children, parent, threshold, collapse_recursion)
            continue
        item = parent.find_child(row.symbol)
        if item is None:
            item = FrameItem(
                cost=row_cost,
                unit=costs.unit(type),
                symbol=row.symbol,
                parent=parent,
                color=_hot_color(row.symbol),
            )
        else:
            item.cost += row_cost
        if item.cost > threshold:
            _add_items(costs, type, row.children, item, threshold, collapse_recursion)


def build_flame_graph(
    costs: Costs,
    type: int,
    tree: Sequence[SymbolNode],
    cost_threshold: float = 0.1,
    collapse_recursion: bool = False,
    label: str | None = None,
) -> FrameItem:
    """Turn the top-level rows of a call tree into a tree of frame items.

    ``cost_threshold`` is a percentage of the total cost; items at or below
    it are kept but not expanded further. With ``collapse_recursion`` a
    function calling itself is merged into a single frame.
    """
    total_cost = costs.total_cost(type)
    if label is None:
        label = f"{total_cost} aggregated {costs.type_name(type)} cost in total"
    root = FrameItem(cost=total_cost, unit=costs.unit(type), symbol=Symbol(label))
    threshold = total_cost * cost_threshold / 100.0
    _add_items(costs, type, tree, root, threshold, collapse_recursion)
    return root


def layout_items(parent: FrameItem) -> None:
    """Place the children of ``parent`` above it, hiding those under a pixel wide."""
    parent_rect = parent.rect
    height = parent_rect.height
    y = parent_rect.y - height - _Y_MARGIN
    x = parent_rect.x

    for child in sorted(parent.children, key=lambda item: item.symbol):
        if parent.cost == 0:
            child.visible = False
            continue
        width = parent_rect.width * child.cost / parent.cost
        child.visible = width > 1
        if child.visible:
            child.rect = Rect(x, y, width, height)
            layout_items(child)
            x += width


def _matches(symbol: Symbol, value: str) -> bool:
    needle = value.casefold()
    return (
        needle in symbol.symbol.casefold()
        or (value == "??" and not symbol.symbol)
        or needle in symbol.binary.casefold()
    )


def apply_search(item: FrameItem, value: str) -> SearchResult:
    """Mark every item below ``item`` with how it matches ``value``.

    Matching is case-insensitive against the symbol and the binary; ``??``
    matches frames without a symbol name. The returned direct cost sums the
    costs of the outermost matching frames.
    """
    result = SearchResult()
    if not value:
        result.match_type = SearchMatch.NO_SEARCH
    elif _matches(item.symbol, value):
        result.direct_cost += item.cost
        result.match_type = SearchMatch.DIRECT_MATCH

    for child in item.children:
        child_match = apply_search(child, value)
        if result.match_type != SearchMatch.DIRECT_MATCH and child_match.match_type in (
            SearchMatch.DIRECT_MATCH,
            SearchMatch.CHILD_MATCH,
        ):
            result.match_type = SearchMatch.CHILD_MATCH
            result.direct_cost += child_match.direct_cost

    item.search_match = result.match_type
    return result