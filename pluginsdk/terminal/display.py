"""A multi-line live display of status entries redrawn in place with ANSI codes."""

from __future__ import annotations

import codecs
import io
import os
import re
import sys
import threading
from typing import Any, TextIO

from .status import COLOR_STATUS, SPINNER_FRAMES, STATUS_ICONS

DEFAULT_WIDTH = 80

_ESC = "\x1b["
_ERASE_ALL = _ESC + "2K"
_RESET = _ESC + "0m"
_LIGHT_BLUE = _ESC + "94m"

_ESCAPE = re.compile(
    r"\x1b(?:\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(?:\x07|\x1b\\)|[@-Z\\-_])|\x9b[0-?]*[ -/]*[@-~]"
)


def _up(n: int) -> str:
    return f"{_ESC}{n}A" if n > 0 else ""


def _down(n: int) -> str:
    return f"{_ESC}{n}B" if n > 0 else ""


def _column(col: int) -> str:
    return f"{_ESC}{col}G"


def _terminal_width(writer: TextIO) -> int:
    try:
        if not writer.isatty():
            return DEFAULT_WIDTH
        columns = os.get_terminal_size(writer.fileno()).columns
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return DEFAULT_WIDTH
    return columns - 1 if columns >= 10 else DEFAULT_WIDTH


class DisplayEntry:
    """One line of a display, optionally followed by body lines."""

    def __init__(self, display: Display, indent: int = 0, body_lines: int = 0):
        self._display = display
        self.indent = indent
        self.line = 0
        self.spinner = False
        self.text = ""
        self.status = ""
        self.body: list[str] = [""] * body_lines

    def start_spinner(self) -> None:
        """Show an animated spinner in front of the entry."""
        with self._display._lock:
            self.spinner = True
            self._display._spinning += 1
            self._display._render(self)

    def stop_spinner(self) -> None:
        """Remove the spinner and redraw the entry."""
        with self._display._lock:
            self.spinner = False
            self._display._spinning -= 1
            self._display._render(self)

    def set_status(self, status: str) -> None:
        """Set the status shown at the next redraw."""
        with self._display._lock:
            self.status = status

    def update(self, msg: str, *args: Any) -> None:
        """Replace the entry text and redraw it."""
        text = msg % args if args else msg
        with self._display._lock:
            self.text = text
            self._display._render(self)

    def set_body(self, line: int, data: str) -> None:
        """Set one body line, growing the body (and the display) when needed."""
        with self._display._lock:
            grew = line >= len(self.body)
            if grew:
                self.body.extend([""] * (line + 1 - len(self.body)))
            self.body[line] = data
            if grew:
                self._display._resize()
            self._display._render(self)


class Display:
    """Renders entries to a writer and animates spinners on a background thread."""

    def __init__(self, writer: TextIO | None = None, *, interval: float = 1 / 6):
        self._writer = writer if writer is not None else sys.stdout
        self._lock = threading.RLock()
        self.entries: list[DisplayEntry] = []
        self.line = 0
        self.width = _terminal_width(self._writer)
        self._spinning = 0
        self._spin = 0
        self._interval = interval
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._stop.is_set() and not self._thread.is_alive()

    def new_status(self, indent: int) -> DisplayEntry:
        """Append a new single-line entry."""
        return self._add(DisplayEntry(self, indent))

    def new_status_with_body(self, indent: int, lines: int) -> DisplayEntry:
        """Append a new entry with ``lines`` empty body lines."""
        return self._add(DisplayEntry(self, indent, lines))

    def close(self) -> None:
        """Stop the spinner animation and wait for it to finish."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _write(self, text: str) -> None:
        self._writer.write(text)
        flush = getattr(self._writer, "flush", None)
        if flush is not None:
            flush()

    def _add(self, entry: DisplayEntry) -> DisplayEntry:
        with self._lock:
            entry.line = self.line
            self.entries.append(entry)
            self.line += 1 + len(entry.body)
            self._write("\n" * (1 + len(entry.body)))
        return entry

    def _resize(self) -> None:
        new_line = sum(1 + len(entry.body) for entry in self.entries)
        diff = new_line - self.line
        if diff <= 0:
            return
        self._write("\n" * diff)
        self.line = new_line
        count = 0
        for entry in self.entries:
            entry.line = count
            count += 1 + len(entry.body)
            self._render(entry)

    def _render(self, entry: DisplayEntry) -> None:
        diff = self.line - entry.line

        text = entry.text.rstrip(" \t\n")
        if len(text) >= self.width:
            text = text[: self.width - 1]

        prefix = SPINNER_FRAMES[self._spin] + " " if entry.spinner else ""

        color = ""
        if entry.status:
            icon = STATUS_ICONS.get(entry.status, entry.status)
            prefix = f"{prefix} {icon} " if prefix else f"{icon} "
            codes = COLOR_STATUS.get(entry.status)
            if codes:
                color = f"{_ESC}{';'.join(codes)}m"

        line = f"{_up(diff)}{_column(0)}{_ERASE_ALL}{prefix}{text}"
        if color:
            line = f"{color}{line}{_RESET}"

        parts = [line]
        for body in entry.body:
            parts.append(f"{_down(1)}{_column(0)}{body}")
            diff -= 1
        parts.append(f"{_down(diff)}{_column(0)}")
        self._write("".join(parts))

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            with self._lock:
                self._spin = (self._spin + 1) % len(SPINNER_FRAMES)
                if self._spinning <= 0:
                    continue
                for entry in self.entries:
                    if entry.spinner:
                        self._render(entry)


class _Term:
    """A small screen emulator whose rows become the body lines of an entry."""

    def __init__(self, entry: DisplayEntry, height: int, width: int):
        self._entry = entry
        self._height = height
        self._width = width
        self._rows = [[" "] * width for _ in range(height)]
        self._row = 0
        self._col = 0
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._lock = threading.Lock()
        self.closed = False

    def writable(self) -> bool:
        return not self.closed

    def write(self, data: str | bytes) -> int:
        if self.closed:
            raise ValueError("write to closed terminal")
        text = self._decoder.decode(bytes(data)) if isinstance(data, (bytes, bytearray)) else data
        self._feed(text)
        return len(data)

    def flush(self) -> None:
        """Push out any incomplete UTF-8 sequence left over from earlier writes."""
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._feed(tail)

    def close(self) -> None:
        self.closed = True

    def _feed(self, text: str) -> None:
        with self._lock:
            before = ["".join(row) for row in self._rows]
            for ch in _ESCAPE.sub("", text):
                self._put(ch)
            after = ["".join(row) for row in self._rows]
            for index, (old, new) in enumerate(zip(before, after)):
                if old != new:
                    self._entry.set_body(index, f" │ {_LIGHT_BLUE}{new}{_RESET}")

    def _scroll(self) -> None:
        while self._row >= self._height:
            self._rows.pop(0)
            self._rows.append([" "] * self._width)
            self._row -= 1

    def _put(self, ch: str) -> None:
        if ch == "\n":
            self._row += 1
            self._col = 0
            self._scroll()
        elif ch == "\r":
            self._col = 0
        elif ch == "\b":
            self._col = max(0, self._col - 1)
        elif ch == "\t":
            self._col = min(self._width - 1, (self._col // 8 + 1) * 8)
        elif ch < " " or ch == "\x7f":
            return
        else:
            if self._col >= self._width:
                self._col = 0
                self._row += 1
                self._scroll()
            self._rows[self._row][self._col] = ch
            self._col += 1