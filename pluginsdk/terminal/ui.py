"""Terminal UI interfaces, output options and shared formatting helpers."""

from __future__ import annotations

import abc
import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, TextIO

if TYPE_CHECKING:
    from .status import Status
    from .table import Table

HEADER_STYLE = "header"
ERROR_STYLE = "error"
ERROR_BOLD_STYLE = "error-bold"
WARNING_STYLE = "warning"
WARNING_BOLD_STYLE = "warning-bold"
INFO_STYLE = "info"
SUCCESS_STYLE = "success"
SUCCESS_BOLD_STYLE = "success-bold"


class NonInteractiveError(Exception):
    """Raised when input is requested from a UI that is not interactive."""

    def __init__(self, message: str = "noninteractive UI doesn't support this operation"):
        super().__init__(message)


@dataclass
class NamedValue:
    """A name and value shown as one aligned ``name: value`` line."""

    name: str
    value: Any


@dataclass
class Input:
    """Configuration for a single prompt to the user."""

    prompt: str = ""
    style: str = ""
    secret: bool = False


@dataclass(frozen=True)
class Option:
    """Controls output styling; passed among the arguments of output calls."""

    style: str | None = None
    writer: TextIO | None = None


def with_header_style() -> Option:
    """Style output as a header starting a new section."""
    return Option(style=HEADER_STYLE)


def with_info_style() -> Option:
    """Style output as formatted information."""
    return Option(style=INFO_STYLE)


def with_error_style() -> Option:
    """Style output as an error message."""
    return Option(style=ERROR_STYLE)


def with_warning_style() -> Option:
    """Style output as a warning message."""
    return Option(style=WARNING_STYLE)


def with_success_style() -> Option:
    """Style output as a success message."""
    return Option(style=SUCCESS_STYLE)


def with_style(style: str) -> Option:
    """Use an arbitrary named style."""
    return Option(style=style)


def with_writer(writer: TextIO) -> Option:
    """Send the output to ``writer`` instead of standard output."""
    return Option(writer=writer)


def interpret(msg: str, *args: Any) -> tuple[str, str, TextIO]:
    """Split ``args`` into format values and options; return message, style and writer."""
    values = [arg for arg in args if not isinstance(arg, Option)]
    style = ""
    writer: TextIO | None = None
    for arg in args:
        if isinstance(arg, Option):
            if arg.style is not None:
                style = arg.style
            if arg.writer is not None:
                writer = arg.writer

    if values:
        msg = msg % tuple(values)

    return msg, style, writer if writer is not None else sys.stdout


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}"
    return str(value)


def format_named_values(rows: Iterable[NamedValue]) -> str:
    """Render rows as right-aligned ``name: value`` lines; empty strings are skipped."""
    cells = [
        (f"  {row.name}: ", _format_value(row.value))
        for row in rows
        if not (isinstance(row.value, str) and row.value == "")
    ]
    width = max((len(label) for label, _ in cells), default=0)
    return "".join(f"{label.rjust(width)}{value}\n" for label, value in cells)


def _color_enabled() -> bool:
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


@dataclass(frozen=True)
class Color:
    """A set of SGR attributes applied to text."""

    codes: tuple[int, ...] = ()

    def wrap(self, text: str) -> str:
        """Always surround ``text`` with the escape codes."""
        if not self.codes:
            return text
        return f"\x1b[{';'.join(map(str, self.codes))}m{text}\x1b[0m"

    def sprint(self, text: str) -> str:
        """Colour ``text`` only when standard output is a colour terminal."""
        return self.wrap(text) if _color_enabled() else text


_BOLD, _RED, _GREEN, _YELLOW = 1, 31, 32, 33

COLOR_HEADER = Color((_BOLD,))
COLOR_INFO = Color()
COLOR_ERROR = Color((_RED,))
COLOR_ERROR_BOLD = Color((_RED, _BOLD))
COLOR_SUCCESS = Color((_GREEN,))
COLOR_SUCCESS_BOLD = Color((_GREEN, _BOLD))
COLOR_WARNING = Color((_YELLOW,))
COLOR_WARNING_BOLD = Color((_YELLOW, _BOLD))


class Step(abc.ABC):
    """A unit of work within a step group; safe to drive from several threads."""

    @abc.abstractmethod
    def term_output(self) -> TextIO:
        """Return a writer whose data appears as body text under the step."""

    @abc.abstractmethod
    def update(self, msg: str, *args: Any) -> None:
        """Change the displayed message."""

    @abc.abstractmethod
    def status(self, status: str) -> None:
        """Set the status indicator of the step."""

    @abc.abstractmethod
    def done(self) -> None:
        """Mark the step as finished."""

    @abc.abstractmethod
    def abort(self) -> None:
        """Mark the step as failed and finish it, unless already done."""


class StepGroup(abc.ABC):
    """A group of possibly concurrent steps."""

    @abc.abstractmethod
    def add(self, msg: str, *args: Any) -> Step:
        """Start a new step with the given initial message."""

    @abc.abstractmethod
    def wait(self) -> None:
        """Block until every step is done and clean up the group."""

    def __enter__(self) -> StepGroup:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.wait()


class UI(abc.ABC):
    """The primary interface for interacting with a user on the terminal."""

    @abc.abstractmethod
    def input(self, input: Input) -> str:
        """Ask the user for input; raises if the UI is not interactive."""

    @abc.abstractmethod
    def interactive(self) -> bool:
        """Whether this UI supports user interaction."""

    @abc.abstractmethod
    def output(self, msg: str, *args: Any) -> None:
        """Write a message; ``args`` are format values followed by options."""

    @abc.abstractmethod
    def named_values(self, rows: list[NamedValue], *args: Option) -> None:
        """Write aligned ``name: value`` rows."""

    @abc.abstractmethod
    def output_writers(self) -> tuple[TextIO, TextIO]:
        """Return writers for standard output and standard error."""

    @abc.abstractmethod
    def status(self) -> Status:
        """Return a live-updating single-line status."""

    @abc.abstractmethod
    def table(self, tbl: Table, *args: Option) -> None:
        """Write a table."""

    @abc.abstractmethod
    def step_group(self) -> StepGroup:
        """Return a group for reporting individual steps."""