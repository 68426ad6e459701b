"""A coloured UI for interactive terminals, with spinners and live step groups."""

from __future__ import annotations

import getpass
import io
import sys
import threading
from typing import Any, Iterable, TextIO

from .status import SpinnerStatus, Status
from .step import FancyStepGroup
from .table import Table, render_table
from .ui import (
    COLOR_ERROR,
    COLOR_ERROR_BOLD,
    COLOR_HEADER,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_SUCCESS_BOLD,
    COLOR_WARNING,
    COLOR_WARNING_BOLD,
    ERROR_BOLD_STYLE,
    ERROR_STYLE,
    HEADER_STYLE,
    INFO_STYLE,
    SUCCESS_BOLD_STYLE,
    SUCCESS_STYLE,
    UI,
    WARNING_BOLD_STYLE,
    WARNING_STYLE,
    Input,
    NamedValue,
    Option,
    StepGroup,
    format_named_values,
    interpret,
    with_style,
    with_writer,
)

_STYLE_COLORS = {
    ERROR_STYLE: COLOR_ERROR,
    ERROR_BOLD_STYLE: COLOR_ERROR_BOLD,
    WARNING_STYLE: COLOR_WARNING,
    WARNING_BOLD_STYLE: COLOR_WARNING_BOLD,
    SUCCESS_STYLE: COLOR_SUCCESS,
    SUCCESS_BOLD_STYLE: COLOR_SUCCESS_BOLD,
}


def _options(args: Iterable[Any]) -> tuple[str, TextIO | None]:
    style = ""
    writer: TextIO | None = None
    for arg in args:
        if isinstance(arg, Option):
            if arg.style is not None:
                style = arg.style
            if arg.writer is not None:
                writer = arg.writer
    return style, writer


def _isatty(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class BasicUI(UI):
    """Writes coloured output to a terminal and reads input from standard input."""

    def __init__(self, writer: TextIO | None = None, stdin: TextIO | None = None):
        self._writer = writer
        self._stdin = stdin
        self._status: SpinnerStatus | None = None
        self._lock = threading.Lock()

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    def _interpret(self, msg: str, args: tuple[Any, ...]) -> tuple[str, str, TextIO]:
        if self._writer is not None:
            return interpret(msg, with_writer(self._writer), *args)
        return interpret(msg, *args)

    def input(self, input: Input) -> str:
        buf = io.StringIO()
        self.output(input.prompt, with_style(input.style), with_writer(buf))
        writer = self.writer
        writer.write(buf.getvalue().rstrip("\r\n"))
        writer.write(" ")
        flush = getattr(writer, "flush", None)
        if flush is not None:
            flush()

        stdin = self.stdin
        if input.secret and _isatty(stdin):
            line = getpass.getpass("")
        else:
            line = stdin.readline()
            if not line.endswith("\n"):
                raise EOFError("end of input reached before a full line was read")
        return line.rstrip("\r\n")

    def interactive(self) -> bool:
        return _isatty(self.stdin)

    def output(self, msg: str, *args: Any) -> None:
        msg, style, writer = self._interpret(msg, args)

        if style == HEADER_STYLE:
            msg = COLOR_HEADER.sprint(f"\n==> {msg}")
        elif style in _STYLE_COLORS:
            msg = _STYLE_COLORS[style].sprint(msg)
        elif style == INFO_STYLE:
            msg = "\n".join(COLOR_INFO.sprint(f"    {line}") for line in msg.split("\n"))

        status = self._status
        resume = status is not None and status.pause()
        try:
            writer.write(msg + "\n")
        finally:
            if resume and status is not None:
                status.start()

    def named_values(self, rows: list[NamedValue], *args: Option) -> None:
        _, writer = _options(args)
        out = writer if writer is not None else self.writer
        out.write(COLOR_INFO.sprint(format_named_values(rows)) + "\n")

    def output_writers(self) -> tuple[TextIO, TextIO]:
        return sys.stdout, sys.stderr

    def status(self) -> Status:
        with self._lock:
            if self._status is None:
                self._status = SpinnerStatus(self._writer)
            return self._status

    def table(self, tbl: Table, *args: Option) -> None:
        style, writer = _options(args)
        render_table(tbl, writer if writer is not None else self.writer, style)

    def step_group(self) -> StepGroup:
        return FancyStepGroup(self.writer)