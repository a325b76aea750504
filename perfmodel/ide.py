"""Editors known for jumping to a source location, and their command lines."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

CUSTOM_IDE = -1
NO_IDE = -1


@dataclass(frozen=True)
class IdeSettings:
    """An editor executable, its argument template and its display name.

    In ``args``, ``%f`` stands for the file name, ``%l`` for the line and
    ``%c`` for the column.
    """

    app: str
    args: str
    name: str

    def command(self) -> str:
        """The command line template: executable followed by its arguments."""
        return f"{self.app} {self.args}"


IDE_SETTINGS: tuple[IdeSettings, ...] = (
    IdeSettings("kdevelop", "%f:%l:%c", "KDevelop"),
    IdeSettings("kate", "%f --line %l --column %c", "Kate"),
    IdeSettings("kwrite", "%f --line %l --column %c", "KWrite"),
    IdeSettings("gedit", "%f +%l:%c", "gedit"),
    IdeSettings("gvim", "%f +%l", "gvim"),
    IdeSettings("qtcreator", "-client %f:%l", "Qt Creator"),
)


def first_available_ide(which: Callable[[str], str | None] = shutil.which) -> int:
    """Index of the first known editor that ``which`` can find, or -1."""
    return next(
        (index for index, ide in enumerate(IDE_SETTINGS) if which(ide.app)),
        NO_IDE,
    )


def navigation_command(
    ide_index: int,
    file_path: str,
    line_number: int,
    column_number: int,
    custom_command: str | None = "",
) -> str | None:
    """Command line that opens ``file_path`` at the given line and column.

    ``ide_index`` selects one of :data:`IDE_SETTINGS`; -1 selects
    ``custom_command``. Line and column are at least 1. Returns None when
    there is no command, in which case the file should simply be opened.
    """
    if 0 <= ide_index < len(IDE_SETTINGS):
        command = IDE_SETTINGS[ide_index].command()
    elif ide_index == CUSTOM_IDE:
        command = custom_command or ""
    else:
        command = ""

    if not command:
        return None

    command = command.replace("%f", file_path)
    command = command.replace("%l", str(max(1, line_number)))
    command = command.replace("%c", str(max(1, column_number)))
    return command