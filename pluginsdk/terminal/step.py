"""A step group that shows each step as a live entry of a display."""

from __future__ import annotations

import threading
from typing import Any, TextIO

from .display import Display, DisplayEntry, _Term
from .status import STATUS_ERROR, STATUS_OK
from .ui import Step, StepGroup

TERM_ROWS = 10
TERM_COLUMNS = 100


class FancyStepGroup(StepGroup):
    """Step group with live updates and a window for terminal output of each step."""

    def __init__(self, writer: TextIO | None = None, *, display: Display | None = None):
        self.display = display if display is not None else Display(writer)
        self._cond = threading.Condition()
        self._steps = 0
        self._finished = 0
        self._cancelled = False

    def add(self, msg: str, *args: Any) -> FancyStep:
        """Start a step showing ``msg`` with a spinner."""
        with self._cond:
            self._steps += 1
        entry = self.display.new_status(0)
        entry.start_spinner()
        entry.update(msg, *args)
        return FancyStep(self, entry)

    def wait(self) -> None:
        """Block until every added step is done, then close the display."""
        with self._cond:
            self._cond.wait_for(lambda: self._cancelled or self._finished >= self._steps)
            self._cancelled = True
            self._cond.notify_all()
        self.display.close()

    def _signal_done(self) -> None:
        with self._cond:
            if self._cancelled:
                return
            self._finished += 1
            self._cond.notify_all()


class FancyStep(Step):
    """A single step drawn as one display entry."""

    def __init__(self, group: FancyStepGroup, entry: DisplayEntry):
        self._group = group
        self.entry = entry
        self._lock = threading.Lock()
        self._done = False
        self._status = ""
        self._term: _Term | None = None

    @property
    def is_done(self) -> bool:
        return self._done

    def term_output(self) -> _Term:
        """Return a terminal writer whose screen is shown under the step."""
        with self._lock:
            if self._term is None:
                self._term = _Term(self.entry, TERM_ROWS, TERM_COLUMNS)
            return self._term

    def update(self, msg: str, *args: Any) -> None:
        self.entry.update(msg, *args)

    def status(self, status: str) -> None:
        self._status = status
        self.entry.set_status(status)

    def done(self) -> None:
        with self._lock:
            if self._done:
                return
            if not self._status:
                self.status(STATUS_OK)
            self._signal_done()

    def abort(self) -> None:
        with self._lock:
            if self._done:
                return
            self.status(STATUS_ERROR)
            self._signal_done()

    def _signal_done(self) -> None:
        self._done = True
        self.entry.stop_spinner()
        self._group._signal_done()