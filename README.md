# perfmodel

A pure-Python data model for sampled performance profiles. It turns stack
samples into the views a profiler shows: bottom-up and top-down call trees,
caller/callee tables and flame graphs. It has no dependencies outside the
standard library.

## Modules

- `perfmodel.symbols`: the frozen, ordered dataclasses `Symbol` (with
  `symbol`, `binary` and `path`, plus a derived `pretty_symbol`), `Location`
  and `FrameLocation`. It also provides `prettify_symbol`, which shortens
  expanded C++ standard-library names. For example,
  `std::basic_string<char, ...>` becomes `std::string`, container templates
  lose their allocator and comparator arguments, and `std::allocator<T>`
  becomes `std::allocator<...>`.
- `perfmodel.costs`: `Costs`, a table of costs per cost type and item id,
  with a total for each type and a `Unit` (`UNKNOWN` or `TIME`) for each type.
  Ids that were never touched cost zero. Two helpers work on cost vectors:
  `add_costs`, where an empty left-hand side takes the right-hand value, and
  `subtract_costs`. Both raise `ValueError` when the sizes differ.
- `perfmodel.trees`: call trees.
  - `SymbolNode` and its subclasses `BottomUp` and `TopDown`.
  - `BottomUpResults`. Its `add_event(type, cost, frames, callback=None)`
    walks each frame's chain of location ids through `locations` and
    `symbols` and adds the cost along the path. Frames that carry no symbol
    are replaced by their caller.
  - `TopDownResults.from_bottom_up`, which inverts a bottom-up tree and fills
    self and inclusive costs.
  - `caller_callees_from_bottom_up`, which returns `CallerCalleeResults`:
    one `CallerCalleeEntry` per symbol, with `callers`, `callees` and a
    `source_map` of `LocationCost`.
- `perfmodel.events`: the timeline records `Event`, `TimeRange`,
  `ThreadState`, `ThreadEvents`, `CpuEvents`, `CostSummary`, `Summary` and
  `EventResults`. `EventResults.find_thread` returns the most recently added
  match. The module also defines `FilterAction` and `ZoomAction`, and the
  constants `INVALID_CPU_ID`, `INVALID_PID`, `INVALID_TID`, `MAX_TIME` and
  `MAX_TIME_RANGE`.
- `perfmodel.flamegraph`:
  - `build_flame_graph(costs, type, tree, cost_threshold=0.1,
    collapse_recursion=False, label=None)` builds a tree of `FrameItem`s. The
    threshold is a percentage of the total cost. Items at or below it are kept
    but not expanded. Each frame gets a colour from a fixed "hot" palette that
    stays the same for a given symbol.
  - `layout_items` gives every child a `Rect` above its parent, ordered by
    symbol, and hides children narrower than one unit.
  - `apply_search` sets each item's `SearchMatch` with a case-insensitive
    match on symbol and binary. The value `??` matches frames without a
    symbol name. It returns a `SearchResult` with the matched direct cost.
- `perfmodel.navigation`:
  - `focus_item(item, root_width)` stretches an item and its ancestors to the
    full width, hides their siblings and lays out the children again.
  - `SelectionHistory` keeps browser-like history with `select`, `back`,
    `forward`, `reset`, `can_go_back` and `can_go_forward`.
- `perfmodel.costbar`: for drawing a relative-cost bar in a table cell.
  - `cost_fraction` gives the bar's share. It raises `ValueError` for a
    non-zero cost over a zero total.
  - `bar_width` gives the bar's width in whole pixels.
  - `bar_color` gives `(hue, saturation, value, alpha)`: green at zero, red at
    the full cost, and more opaque as the fraction grows.
- `perfmodel.ide`:
  - `IDE_SETTINGS` lists known editors as `IdeSettings`, each with an
    argument template using `%f`, `%l` and `%c`.
  - `first_available_ide(which=shutil.which)` returns the index of the first
    editor found, or -1.
  - `navigation_command(ide_index, file_path, line_number, column_number,
    custom_command="")` returns the filled-in command line, or `None` when
    there is none. An index of -1 selects the custom command. Line and column
    are clamped to at least 1.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from perfmodel.costs import Unit
from perfmodel.symbols import FrameLocation, Location, Symbol, prettify_symbol
from perfmodel.trees import BottomUpResults, TopDownResults, caller_callees_from_bottom_up

print(prettify_symbol("std::vector<int, std::allocator<int> >::push_back"))
# std::vector<int>::push_back

results = BottomUpResults()
results.costs.add_type(0, "cycles", Unit.UNKNOWN)
# Location id 0 is `main`. Location id 1 is `compute`, called from main.
results.symbols = [Symbol("main", "app"), Symbol("compute", "app")]
results.locations = [
    FrameLocation(-1, Location(0x10, "main.cpp:5")),
    FrameLocation(0, Location(0x20, "main.cpp:1")),
]
results.add_event(0, 10, [1])

top_down = TopDownResults.from_bottom_up(results)
print(top_down.root.children[0].symbol.symbol)  # main

caller_callee = caller_callees_from_bottom_up(results)
compute = caller_callee.entries[Symbol("compute", "app")]
print(compute.callers[Symbol("main", "app")])  # [10]
```

## What it does not do

`perfmodel` is only a data model:

- It does not read `perf.data` or any other recording format. Symbols,
  locations and samples must be supplied by the caller.
- It has no graphical interface and no command-line program. Flame graph items
  and cost bars carry geometry and colours but are not drawn.
- `navigation_command` only returns a command line and does not start an
  editor.