"""Per-type cost tables indexed by item id."""

from __future__ import annotations

import enum
from collections.abc import Sequence


class Unit(enum.Enum):
    """What the values of a cost type measure."""

    UNKNOWN = enum.auto()
    TIME = enum.auto()


def add_costs(lhs: Sequence[int], rhs: Sequence[int]) -> list[int]:
    """Element-wise sum; an empty ``lhs`` takes the value of ``rhs``."""
    if not lhs:
        return list(rhs)
    if len(lhs) != len(rhs):
        raise ValueError(f"cost size mismatch: {len(lhs)} != {len(rhs)}")
    return [a + b for a, b in zip(lhs, rhs)]


def subtract_costs(lhs: Sequence[int], rhs: Sequence[int]) -> list[int]:
    """Element-wise difference of two item costs of the same size."""
    if len(lhs) != len(rhs):
        raise ValueError(f"cost size mismatch: {len(lhs)} != {len(rhs)}")
    return [a - b for a, b in zip(lhs, rhs)]


def _check_id(item_id: int) -> None:
    if item_id < 0:
        raise ValueError(f"item id must not be negative: {item_id}")


class Costs:
    """Costs of several types, each a growable list indexed by item id."""

    def __init__(self) -> None:
        self._type_names: list[str] = []
        self._units: list[Unit] = []
        self._costs: list[list[int]] = []
        self._total_costs: list[int] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Costs):
            return NotImplemented
        return (
            self._type_names == other._type_names
            and self._units == other._units
            and self._costs == other._costs
            and self._total_costs == other._total_costs
        )

    def __repr__(self) -> str:
        return f"Costs(types={self._type_names!r}, totals={self._total_costs!r})"

    def copy(self) -> Costs:
        """Return an independent copy."""
        duplicate = Costs()
        duplicate._type_names = list(self._type_names)
        duplicate._units = list(self._units)
        duplicate._costs = [list(column) for column in self._costs]
        duplicate._total_costs = list(self._total_costs)
        return duplicate

    def _ensure_space(self, type: int, id: int) -> None:
        _check_id(id)
        column = self._costs[type]
        if len(column) <= id:
            column.extend([0] * (id + 1 - len(column)))

    def increment(self, type: int, id: int) -> None:
        """Add one to the cost of ``id`` for ``type``."""
        self.add(type, id, 1)

    def add(self, type: int, id: int, delta: int) -> None:
        """Add ``delta`` to the cost of ``id`` for ``type``."""
        self._ensure_space(type, id)
        self._costs[type][id] += delta

    def increment_total(self, type: int) -> None:
        """Add one to the total cost of ``type``."""
        self.add_total_cost(type, 1)

    def add_total_cost(self, type: int, delta: int) -> None:
        """Add ``delta`` to the total cost of ``type``."""
        self._total_costs[type] += delta

    def clear_total_cost(self) -> None:
        """Reset every total cost to zero."""
        self._total_costs = [0] * len(self._total_costs)

    def num_types(self) -> int:
        """Number of registered cost types."""
        return len(self._type_names)

    def add_type(self, type: int, name: str, unit: Unit) -> None:
        """Register or rename cost type ``type``, growing the table as needed."""
        if type < 0:
            raise ValueError(f"cost type must not be negative: {type}")
        missing = type + 1 - len(self._costs)
        if missing > 0:
            self._costs.extend([] for _ in range(missing))
            self._type_names.extend([""] * missing)
            self._total_costs.extend([0] * missing)
            self._units.extend([Unit.UNKNOWN] * missing)
        self._type_names[type] = name
        self._units[type] = unit

    def type_name(self, type: int) -> str:
        """Name of cost type ``type``."""
        return self._type_names[type]

    def cost(self, type: int, id: int) -> int:
        """Cost of ``id`` for ``type``; zero for ids never touched."""
        _check_id(id)
        column = self._costs[type]
        return column[id] if id < len(column) else 0

    def total_cost(self, type: int) -> int:
        """Total cost of ``type``."""
        return self._total_costs[type]

    @property
    def total_costs(self) -> list[int]:
        """The total cost of every type."""
        return list(self._total_costs)

    @total_costs.setter
    def total_costs(self, values: Sequence[int]) -> None:
        self._total_costs = list(values)

    def item_cost(self, id: int) -> list[int]:
        """Cost of ``id`` for every type."""
        _check_id(id)
        return [column[id] if id < len(column) else 0 for column in self._costs]

    def add_item_cost(self, id: int, cost: Sequence[int]) -> None:
        """Add a cost for every type to item ``id``."""
        if len(cost) != len(self._costs):
            raise ValueError(f"cost size mismatch: {len(cost)} != {len(self._costs)}")
        for type, delta in enumerate(cost[: self.num_types()]):
            self.add(type, id, delta)

    def initialize_costs_from(self, other: Costs) -> None:
        """Take over types, units and totals of ``other`` with empty item costs."""
        self._type_names = list(other._type_names)
        self._units = list(other._units)
        self._costs = [[] for _ in other._costs]
        self._total_costs = list(other._total_costs)

    def unit(self, type: int) -> Unit:
        """Unit of cost type ``type``."""
        return self._units[type]