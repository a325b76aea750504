"""Symbols, code locations and C++ symbol prettification."""

from __future__ import annotations

from dataclasses import dataclass, field

_ONE_PARAMETER_TEMPLATES = (
    "vector<",
    "set<",
    "deque<",
    "list<",
    "forward_list<",
    "multiset<",
    "unordered_set<",
    "unordered_multiset<",
)
_TWO_PARAMETER_TEMPLATES = ("map<", "multimap<", "unordered_map<", "unordered_multimap<")
_INTERNAL_NAMESPACES = ("__cxx11::", "__1::")
_STRING_CTOR_DTOR = ("::basic_string(", "::~basic_string(")
_STD_PREFIX = "std::"


def _find_same_depth(text: str, offset: int, char: str, return_next: bool = False) -> int:
    """Return the index of ``char`` at bracket depth zero, starting at ``offset``, or -1."""
    depth = 0
    for index in range(max(offset, 0), len(text)):
        current = text[index]
        if current in "<(":
            depth += 1
        elif current in ">)":
            depth -= 1
        if depth == 0 and current == char:
            return index + 1 if return_next else index
    return -1


def _prefix_length(text: str, prefixes: tuple[str, ...]) -> int:
    """Return the length of the first prefix that ``text`` starts with, or -1."""
    for prefix in prefixes:
        if text.startswith(prefix):
            return len(prefix)
    return -1


def _tail(text: str, start: int) -> str:
    """Return ``text`` from ``start`` on; a negative start yields the whole text."""
    return text if start < 0 else text[start:]


def _find_std_namespace(text: str) -> int:
    """Return the index just past a standalone ``std::``, or -1 if there is none."""
    pos = 0
    while True:
        pos = text.find(_STD_PREFIX, pos)
        if pos == -1:
            return -1
        pos += len(_STD_PREFIX)
        if pos == len(_STD_PREFIX) or text[pos - len(_STD_PREFIX) - 1] in "< (":
            return pos


def prettify_symbol(name: str) -> str:
    """Shorten expanded standard library type names to their common spelling.

    ``std::basic_string<char, ...>`` becomes ``std::string``, container
    templates lose their allocator and comparator arguments, and
    ``std::allocator<T>`` becomes ``std::allocator<...>``.
    """
    pos = _find_std_namespace(name)
    if pos == -1:
        return name

    result = name[:pos]
    symbol = name[pos:]

    end = _prefix_length(symbol, _INTERNAL_NAMESPACES)
    if end != -1:
        symbol = symbol[end:]

    if (end := _prefix_length(symbol, ("basic_string<",))) != -1:
        comma = _find_same_depth(symbol, end, ",")
        if comma != -1:
            char_type = symbol[end:comma]
            if char_type == "char":
                result += "string"
            elif char_type == "wchar_t":
                result += "wstring"
            else:
                result += symbol[:end] + char_type + ">"
            symbol = _tail(symbol, _find_same_depth(symbol, 0, ">", True))

            end = _prefix_length(symbol, _STRING_CTOR_DTOR)
            if end != -1:
                result += "::"
                if symbol[2] == "~":
                    result += "~"
                if char_type == "wchar_t":
                    result += "w"
                elif char_type != "char":
                    result += "basic_"
                result += "string("
                symbol = symbol[end:]
    elif (end := _prefix_length(symbol, _ONE_PARAMETER_TEMPLATES)) != -1:
        comma = _find_same_depth(symbol, end, ",")
        if comma != -1:
            result += symbol[:end] + prettify_symbol(symbol[end:comma]) + ">"
            symbol = _tail(symbol, _find_same_depth(symbol, 0, ">", True))
    elif (end := _prefix_length(symbol, _TWO_PARAMETER_TEMPLATES)) != -1:
        comma1 = _find_same_depth(symbol, end, ",")
        comma2 = _find_same_depth(symbol, comma1 + 1, ",")
        if comma1 != -1 and comma2 != -1:
            result += symbol[:end]
            result += prettify_symbol(symbol[end:comma1])
            result += prettify_symbol(symbol[comma1:comma2])
            result += ">"
            symbol = _tail(symbol, _find_same_depth(symbol, 0, ">", True))
    elif (end := _prefix_length(symbol, ("allocator<",))) != -1:
        closing = _find_same_depth(symbol, 0, ">", True)
        if closing != -1:
            result += symbol[:end] + "...>"
            symbol = symbol[closing:]

    if symbol:
        result += prettify_symbol(symbol)
    return result


@dataclass(frozen=True, order=True)
class Symbol:
    """A function in a binary; compared and hashed by symbol, binary and path."""

    symbol: str = ""
    pretty_symbol: str = field(init=False, compare=False, repr=False)
    binary: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pretty_symbol", prettify_symbol(self.symbol))

    def is_valid(self) -> bool:
        """Whether any of symbol, binary or path is set."""
        return bool(self.symbol or self.binary or self.path)

    def __str__(self) -> str:
        return f"Symbol{{symbol={self.symbol}, binary={self.binary}}}"


@dataclass(frozen=True, order=True)
class Location:
    """An instruction address together with its ``file:line`` description."""

    address: int = 0
    location: str = ""

    def __str__(self) -> str:
        return f"Location{{address={self.address}, location={self.location}}}"


@dataclass(frozen=True)
class FrameLocation:
    """A location in a call chain, linked to the location of its caller."""

    parent_location_id: int = -1
    location: Location = field(default_factory=Location)