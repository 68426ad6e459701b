"""Tables of coloured entries and their rendering as text."""

from __future__ import annotations

import re
import sys
import unicodedata
from dataclasses import dataclass, field
from typing import TextIO

YELLOW = "yellow"
GREEN = "green"
RED = "red"

COLOR_MAPPING = {
    GREEN: 32,
    YELLOW: 33,
    RED: 31,
}

SIMPLE_STYLE = "Simple"

_NUMBER = re.compile(r"^-?(?:\d{1,3}(?:,\d{3})*|\d+)(?:\.\d+)?$")
_ANSI = re.compile(r"\x1b\[[0-9;]*m")


@dataclass
class TableEntry:
    """A single cell of a table."""

    value: str
    color: str = ""


@dataclass
class Table:
    """Headers and rows passed to ``UI.table``."""

    headers: list[str] = field(default_factory=list)
    rows: list[list[TableEntry]] = field(default_factory=list)

    def rich(self, cols: list[str], colors: list[str]) -> None:
        """Add a row; columns beyond ``colors`` get no colour."""
        row = [
            TableEntry(value=col, color=colors[i] if i < len(colors) else "")
            for i, col in enumerate(cols)
        ]
        self.rows.append(row)


def _is_num_or_space(ch: str) -> bool:
    return ch.isdigit() or ch == " "


def _title(name: str) -> str:
    chars = list(name)
    last = len(chars) - 1
    for i, ch in enumerate(chars):
        if ch == "_":
            chars[i] = " "
        elif ch == ".":
            if (i != 0 and not _is_num_or_space(chars[i - 1])) or (
                i != last and not _is_num_or_space(chars[i + 1])
            ):
                chars[i] = " "
    result = "".join(chars).strip()
    if not result and name:
        result = " "
    return result.upper()


def _width(text: str) -> int:
    return sum(
        2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
        for ch in _ANSI.sub("", text)
    )


def _left(text: str, width: int) -> str:
    return text + " " * max(width - _width(text), 0)


def _right(text: str, width: int) -> str:
    return " " * max(width - _width(text), 0) + text


def _center(text: str, width: int) -> str:
    gap = max(width - _width(text), 0)
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _colorize(text: str, color: str) -> str:
    code = COLOR_MAPPING.get(color)
    return f"\x1b[{code}m{text}\x1b[0m" if code is not None else text


def render_table(tbl: Table, writer: TextIO | None = None, style: str = "") -> None:
    """Write ``tbl`` to ``writer``; ``style`` "Simple" drops separators and pads with tabs."""
    out = writer if writer is not None else sys.stdout
    simple = style == SIMPLE_STYLE

    headers = [_title(h) for h in tbl.headers]
    ncols = max([len(headers), *(len(row) for row in tbl.rows)])
    if ncols == 0:
        return

    headers += [""] * (ncols - len(headers))
    rows = [row + [TableEntry("")] * (ncols - len(row)) for row in tbl.rows]

    widths = [
        max([_width(headers[col]) if tbl.headers else 0, *(_width(row[col].value) for row in rows)])
        for col in range(ncols)
    ]

    def line(cells: list[str]) -> str:
        if simple:
            return "\t".join(cells)
        return " " + "|".join(f" {cell} " for cell in cells) + " "

    lines = []
    if tbl.headers:
        align = _left if simple else _center
        lines.append(line([align(h, w) for h, w in zip(headers, widths)]))
        if not simple:
            lines.append("-" + "+".join("-" * (w + 2) for w in widths))

    for row in rows:
        cells = []
        for entry, w in zip(row, widths):
            if simple or not _NUMBER.match(entry.value):
                padded = _left(entry.value, w)
            else:
                padded = _right(entry.value, w)
            cells.append(_colorize(padded, entry.color))
        lines.append(line(cells))

    out.write("".join(f"{text}\n" for text in lines))