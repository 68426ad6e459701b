"""Live single-line status reporting with a spinner."""

from __future__ import annotations

import abc
import os
import sys
import threading
from typing import Any, Mapping, TextIO

STATUS_OK = "ok"
STATUS_ERROR = "error"
STATUS_WARN = "warn"
STATUS_TIMEOUT = "timeout"
STATUS_ABORT = "abort"

EMOJI_STATUS = {
    STATUS_OK: "\u2713",
    STATUS_ERROR: "❌",
    STATUS_WARN: "⚠️",
    STATUS_TIMEOUT: "⌛",
}

TEXT_STATUS = {
    STATUS_OK: " +",
    STATUS_ERROR: " !",
    STATUS_WARN: " *",
    STATUS_TIMEOUT: "<>",
}

# SGR codes used to colour a status line.
COLOR_STATUS = {
    STATUS_OK: ("32",),
    STATUS_ERROR: ("31",),
    STATUS_WARN: ("33",),
}

ENV_FORCE_EMOJI = "WAYPOINT_FORCE_EMOJI"

SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

_ERASE_LINE = "\r\x1b[K"


def status_icons(environ: Mapping[str, str]) -> dict[str, str]:
    """Choose emoji icons on UTF-8 terminals (or when forced), text icons otherwise."""
    if environ.get(ENV_FORCE_EMOJI, "") != "" or "UTF-8" in environ.get("LANG", ""):
        return dict(EMOJI_STATUS)
    return dict(TEXT_STATUS)


STATUS_ICONS = status_icons(os.environ)


class Status(abc.ABC):
    """An updating status line, usually with an animated element."""

    @abc.abstractmethod
    def update(self, msg: str) -> None:
        """Show a new single-line status message."""

    @abc.abstractmethod
    def step(self, status: str, msg: str) -> None:
        """Finish a step with an ok, error, warn or custom status."""

    @abc.abstractmethod
    def close(self) -> None:
        """End live updating and clear the status line."""

    def __enter__(self) -> Status:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _isatty(writer: TextIO) -> bool:
    isatty = getattr(writer, "isatty", None)
    return bool(isatty and isatty())


class _Spinner:
    """Redraws a spinner frame and suffix on a background thread."""

    def __init__(self, writer: TextIO | None, frames: tuple[str, ...], interval: float):
        self._writer = writer
        self._frames = frames
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.suffix = ""

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        writer = self.writer
        if _isatty(writer):
            writer.write(_ERASE_LINE)
            writer.flush()

    def _run(self) -> None:
        index = 0
        while not self._stop.is_set():
            writer = self.writer
            if _isatty(writer):
                frame = self._frames[index % len(self._frames)]
                writer.write(f"{_ERASE_LINE}\x1b[1m{frame}\x1b[0m{self.suffix}")
                writer.flush()
            index += 1
            self._stop.wait(self._interval)


class SpinnerStatus(Status):
    """A status that shows a spinner next to the latest message."""

    def __init__(self, writer: TextIO | None = None, interval: float = 1 / 6):
        self._lock = threading.Lock()
        self._writer = writer
        self._spinner = _Spinner(writer, SPINNER_FRAMES, interval)
        self._running = False

    def update(self, msg: str) -> None:
        with self._lock:
            self._spinner.suffix = " " + msg
            if not self._running:
                self._spinner.start()
                self._running = True

    def step(self, status: str, msg: str) -> None:
        with self._lock:
            self._spinner.stop()
            self._running = False

            pad = ""
            icon = EMOJI_STATUS.get(status, "")
            if not icon:
                icon = status
            elif status == STATUS_WARN:
                pad = " "

            writer = self._writer if self._writer is not None else sys.stdout
            writer.write(f"{icon}{pad} {msg}\n")

    def close(self) -> None:
        with self._lock:
            if self._running:
                self._running = False
                self._spinner.suffix = ""
            self._spinner.stop()

    def pause(self) -> bool:
        """Stop the spinner; return whether it was running."""
        with self._lock:
            was_running = self._running
            if self._running:
                self._running = False
                self._spinner.stop()
            return was_running

    def start(self) -> None:
        """Restart the spinner if it is not running."""
        with self._lock:
            if not self._running:
                self._running = True
                self._spinner.start()