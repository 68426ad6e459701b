"""A UI for environments without a terminal: plain, line-oriented output."""

from __future__ import annotations

import re
import sys
import threading
from typing import Any, Iterable, TextIO

from .status import TEXT_STATUS, Status
from .table import Table, render_table
from .ui import (
    COLOR_INFO,
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
    NonInteractiveError,
    Option,
    Step,
    StepGroup,
    format_named_values,
    interpret,
    with_writer,
)

_RE_ANSI = re.compile(
    r"[\x1b\x9b][\[\]()#;?]*"
    r"(?:(?:(?:[a-zA-Z\d]*(?:;[a-zA-Z\d]*)*)?\x07)"
    r"|(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PRZcf-ntqry=><~]))"
)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _RE_ANSI.sub("", text)


class StripAnsiWriter:
    """A writer that drops ANSI escape sequences before passing data on."""

    def __init__(self, next_writer: TextIO):
        self.next = next_writer

    def write(self, data: str | bytes) -> int:
        """Write ``data`` without escape sequences; return the length given."""
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
        self.next.write(strip_ansi(text))
        return len(data)

    def flush(self) -> None:
        flush = getattr(self.next, "flush", None)
        if flush is not None:
            flush()


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


class _WaitGroup:
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._count = 0

    def add(self) -> None:
        with self._cond:
            self._count += 1

    def done(self) -> None:
        with self._cond:
            self._count -= 1
            if self._count < 0:
                raise ValueError("negative wait group counter")
            self._cond.notify_all()

    def wait(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._count <= 0)


class NonInteractiveUI(UI):
    """Writes plain output and refuses input."""

    def __init__(self, writer: TextIO | None = None):
        self._writer = writer
        self._lock = threading.Lock()

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def _interpret(self, msg: str, args: tuple[Any, ...]) -> tuple[str, str, TextIO]:
        if self._writer is not None:
            return interpret(msg, with_writer(self._writer), *args)
        return interpret(msg, *args)

    def input(self, input: Input) -> str:
        raise NonInteractiveError()

    def interactive(self) -> bool:
        return False

    def output(self, msg: str, *args: Any) -> None:
        with self._lock:
            msg, style, writer = self._interpret(msg, args)

            if style == HEADER_STYLE:
                msg = "\n» " + msg
            elif style in (ERROR_STYLE, ERROR_BOLD_STYLE):
                first, *rest = msg.split("\n")
                writer.write("! " + first + "\n")
                for line in rest:
                    writer.write("  " + line + "\n")
                return
            elif style in (WARNING_STYLE, WARNING_BOLD_STYLE):
                msg = "warning: " + msg
            elif style in (SUCCESS_STYLE, SUCCESS_BOLD_STYLE):
                pass
            elif style == INFO_STYLE:
                msg = "\n".join(COLOR_INFO.sprint(f"  {line}") for line in msg.split("\n"))

            writer.write(msg + "\n")

    def named_values(self, rows: list[NamedValue], *args: Option) -> None:
        with self._lock:
            _, writer = _options(args)
            out = writer if writer is not None else self.writer
            out.write(format_named_values(rows) + "\n")

    def output_writers(self) -> tuple[TextIO, TextIO]:
        return sys.stdout, sys.stderr

    def status(self) -> Status:
        return _NonInteractiveStatus(self)

    def table(self, tbl: Table, *args: Option) -> None:
        with self._lock:
            style, writer = _options(args)
            render_table(tbl, writer if writer is not None else self.writer, style)

    def step_group(self) -> StepGroup:
        return _NonInteractiveStepGroup(self)


class _NonInteractiveStatus(Status):
    def __init__(self, ui: NonInteractiveUI):
        self._ui = ui

    def update(self, msg: str) -> None:
        with self._ui._lock:
            self._ui.writer.write(msg + "\n")

    def step(self, status: str, msg: str) -> None:
        with self._ui._lock:
            self._ui.writer.write(f"{TEXT_STATUS.get(status, '')}: {msg}\n")

    def close(self) -> None:
        pass


class _NonInteractiveStepGroup(StepGroup):
    def __init__(self, ui: NonInteractiveUI):
        self._ui = ui
        self._wg = _WaitGroup()
        self._closed = False

    def add(self, msg: str, *args: Any) -> Step:
        step = _NonInteractiveStep(self._ui)
        step.update(msg, *args)

        with self._ui._lock:
            # A closed group still hands out a step so callers need no checks.
            if not self._closed:
                step._wg = self._wg
                self._wg.add()
        return step

    def wait(self) -> None:
        with self._ui._lock:
            self._closed = True
        self._wg.wait()


class _NonInteractiveStep(Step):
    def __init__(self, ui: NonInteractiveUI):
        self._ui = ui
        self._wg: _WaitGroup | None = None
        self._done = False

    def term_output(self) -> StripAnsiWriter:
        return StripAnsiWriter(self._ui.writer)

    def update(self, msg: str, *args: Any) -> None:
        text = msg % args if args else msg
        with self._ui._lock:
            self._ui.writer.write("-> " + text + "\n")

    def status(self, status: str) -> None:
        pass

    def done(self) -> None:
        with self._ui._lock:
            if self._done:
                return
            self._done = True
            if self._wg is not None:
                self._wg.done()

    def abort(self) -> None:
        self.done()