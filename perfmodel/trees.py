"""Bottom-up and top-down call trees and the caller/callee aggregation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from perfmodel.costs import Costs, add_costs, subtract_costs
from perfmodel.symbols import FrameLocation, Location, Symbol

_T = TypeVar("_T")
_Node = TypeVar("_Node", bound="SymbolNode")

FrameCallback = Callable[[Symbol, Location], object]


def _value(items: Sequence[_T], index: int, default: _T) -> _T:
    """Return ``items[index]``, or ``default`` when the index is out of range."""
    return items[index] if 0 <= index < len(items) else default


@dataclass(eq=False)
class SymbolNode:
    """A node of a call tree, identified among its siblings by its symbol."""

    symbol: Symbol = field(default_factory=Symbol)
    id: int = 0
    children: list = field(default_factory=list)
    parent: SymbolNode | None = field(default=None, repr=False)

    def find(self: _Node, symbol: Symbol) -> _Node | None:
        """Return the child for ``symbol``, or None."""
        return next((child for child in self.children if child.symbol == symbol), None)

    def entry_for_symbol(self: _Node, symbol: Symbol, allocate_id: Callable[[], int]) -> _Node:
        """Return the child for ``symbol``, creating it with a fresh id if missing."""
        child = self.find(symbol)
        if child is None:
            child = type(self)(symbol=symbol, id=allocate_id())
            self.children.append(child)
        return child

    def initialize_parents(self) -> None:
        """Link every node below this root to its parent.

        The top-level children get no parent: they belong to this root.
        """
        stack: list[tuple[SymbolNode, SymbolNode | None]] = [
            (child, None) for child in self.children
        ]
        while stack:
            node, parent = stack.pop()
            node.parent = parent
            stack.extend((child, node) for child in node.children)

    def walk(self):
        """Yield every node below this one, depth first."""
        for child in self.children:
            yield child
            yield from child.walk()


class BottomUp(SymbolNode):
    """Node of a tree whose top level holds the leaf frames of the stacks."""


class TopDown(SymbolNode):
    """Node of a tree whose top level holds the outermost callers."""


@dataclass(eq=False)
class BottomUpResults:
    """Sampled stacks aggregated into a bottom-up tree with its costs."""

    root: BottomUp = field(default_factory=BottomUp)
    costs: Costs = field(default_factory=Costs)
    symbols: list[Symbol] = field(default_factory=list)
    locations: list[FrameLocation] = field(default_factory=list)
    _next_id: int = field(default=0, init=False, repr=False)

    def _allocate_id(self) -> int:
        allocated = self._next_id
        self._next_id += 1
        return allocated

    def foreach_frame(
        self, frames: Sequence[int], callback: Callable[[Symbol, Location], bool]
    ) -> None:
        """Call ``callback(symbol, location)`` for every frame until it returns false."""
        for location_id in frames:
            if not self._handle_frame(location_id, callback):
                break

    def add_event(
        self,
        type: int,
        cost: int,
        frames: Sequence[int],
        callback: FrameCallback | None = None,
    ) -> BottomUp:
        """Add a sample of ``cost`` for ``type`` along ``frames``; return the deepest node."""
        self.costs.add_total_cost(type, cost)
        parent: BottomUp = self.root

        def visit(symbol: Symbol, location: Location) -> bool:
            nonlocal parent
            parent = parent.entry_for_symbol(symbol, self._allocate_id)
            self.costs.add(type, parent.id, cost)
            if callback is not None:
                callback(symbol, location)
            return True

        self.foreach_frame(frames, visit)
        return parent

    def _handle_frame(
        self, location_id: int, callback: Callable[[Symbol, Location], bool]
    ) -> bool:
        skip_next_frame = False
        while location_id != -1:
            location = _value(self.locations, location_id, FrameLocation())
            if skip_next_frame:
                location_id = location.parent_location_id
                skip_next_frame = False
                continue

            symbol = _value(self.symbols, location_id, Symbol())
            if not symbol.is_valid():
                # function entry points carry no symbol; use the caller's instead
                symbol = _value(self.symbols, location.parent_location_id, Symbol())
                skip_next_frame = True

            if not callback(symbol, location.location):
                return False

            location_id = location.parent_location_id
        return True


@dataclass(eq=False)
class TopDownResults:
    """A top-down call tree with its self and inclusive costs."""

    root: TopDown = field(default_factory=TopDown)
    self_costs: Costs = field(default_factory=Costs)
    inclusive_costs: Costs = field(default_factory=Costs)

    @classmethod
    def from_bottom_up(cls, bottom_up: BottomUpResults) -> TopDownResults:
        """Invert a bottom-up tree into a top-down one."""
        results = cls()
        results.self_costs.initialize_costs_from(bottom_up.costs)
        results.inclusive_costs.initialize_costs_from(bottom_up.costs)
        bottom_up.root.initialize_parents()

        next_id = 0

        def allocate_id() -> int:
            nonlocal next_id
            allocated = next_id
            next_id += 1
            return allocated

        def build(data: BottomUp) -> list[int]:
            total = [0] * bottom_up.costs.num_types()
            for row in data.children:
                child_cost = build(row)
                row_cost = bottom_up.costs.item_cost(row.id)
                diff = subtract_costs(row_cost, child_cost)
                if sum(diff) != 0:
                    # a (partial) leaf: propagate its own cost along the chain
                    node: SymbolNode | None = row
                    stack: TopDown = results.root
                    while node is not None:
                        frame = stack.entry_for_symbol(node.symbol, allocate_id)
                        results.inclusive_costs.add_item_cost(frame.id, diff)
                        if node.parent is None:
                            results.self_costs.add_item_cost(frame.id, diff)
                        stack = frame
                        node = node.parent
                total = add_costs(total, row_cost)
            return total

        build(bottom_up.root)
        results.root.initialize_parents()
        return results


@dataclass
class LocationCost:
    """Self and inclusive costs of one source location."""

    self_cost: list[int] = field(default_factory=list)
    inclusive_cost: list[int] = field(default_factory=list)

    @classmethod
    def zeros(cls, num_types: int) -> LocationCost:
        """A cost of zero for ``num_types`` types."""
        return cls([0] * num_types, [0] * num_types)


@dataclass
class CallerCalleeEntry:
    """Callers, callees and source locations of one symbol."""

    id: int = 0
    callers: dict[Symbol, list[int]] = field(default_factory=dict)
    callees: dict[Symbol, list[int]] = field(default_factory=dict)
    source_map: dict[str, LocationCost] = field(default_factory=dict)

    def source(self, location: str, num_types: int) -> LocationCost:
        """Return the cost for ``location``, creating or widening it as needed."""
        cost = self.source_map.get(location)
        if cost is None:
            cost = self.source_map[location] = LocationCost.zeros(num_types)
        elif len(cost.inclusive_cost) < num_types:
            # widening discards the previous values
            cost.inclusive_cost = [0] * num_types
            cost.self_cost = [0] * num_types
        return cost

    def callee(self, symbol: Symbol, num_types: int) -> list[int]:
        """Return the cost of calls to ``symbol``, creating a zero cost if missing."""
        return self.callees.setdefault(symbol, [0] * num_types)

    def caller(self, symbol: Symbol, num_types: int) -> list[int]:
        """Return the cost of calls from ``symbol``, creating a zero cost if missing."""
        return self.callers.setdefault(symbol, [0] * num_types)


@dataclass(eq=False)
class CallerCalleeResults:
    """Caller/callee entries for every symbol, with self and inclusive costs."""

    entries: dict[Symbol, CallerCalleeEntry] = field(default_factory=dict)
    self_costs: Costs = field(default_factory=Costs)
    inclusive_costs: Costs = field(default_factory=Costs)

    def entry(self, symbol: Symbol) -> CallerCalleeEntry:
        """Return the entry for ``symbol``, creating it with the next id if missing."""
        found = self.entries.get(symbol)
        if found is None:
            found = self.entries[symbol] = CallerCalleeEntry(id=len(self.entries))
        return found


def caller_callees_from_bottom_up(data: BottomUpResults) -> CallerCalleeResults:
    """Aggregate a bottom-up tree into caller/callee results."""
    results = CallerCalleeResults()
    results.inclusive_costs.initialize_costs_from(data.costs)
    results.self_costs.initialize_costs_from(data.costs)
    data.root.initialize_parents()
    num_types = data.costs.num_types()

    def build(node_data: BottomUp) -> list[int]:
        total = [0] * num_types
        for row in node_data.children:
            child_cost = build(row)
            row_cost = data.costs.item_cost(row.id)
            diff = subtract_costs(row_cost, child_cost)
            if sum(diff) != 0:
                seen_symbols: set[Symbol] = set()
                seen_pairs: set[tuple[Symbol, Symbol]] = set()
                last_symbol = Symbol()
                last_entry: CallerCalleeEntry | None = None
                node: SymbolNode | None = row
                while node is not None:
                    symbol = node.symbol
                    entry = results.entry(symbol)
                    if symbol not in seen_symbols:
                        # count the inclusive cost only once per stack
                        results.inclusive_costs.add_item_cost(entry.id, diff)
                        seen_symbols.add(symbol)
                    if node.parent is None:
                        results.self_costs.add_item_cost(entry.id, diff)
                    if last_entry is not None:
                        pair = (symbol, last_symbol)
                        if pair not in seen_pairs:
                            last_entry.callees[symbol] = add_costs(
                                last_entry.callee(symbol, num_types), diff
                            )
                            entry.callers[last_symbol] = add_costs(
                                entry.caller(last_symbol, num_types), diff
                            )
                            seen_pairs.add(pair)
                    node = node.parent
                    last_symbol = symbol
                    last_entry = entry
            total = add_costs(total, row_cost)
        return total

    build(data.root)
    return results