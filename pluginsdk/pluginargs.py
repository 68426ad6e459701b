"""Values made available to mappers while a plugin call runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


class Cleanup:
    """Collects functions to run when a plugin call is complete.

    Functions run in reverse order of registration; every one runs even
    when a later-registered one raises.
    """

    def __init__(self) -> None:
        self._fns: list[Callable[[], Any]] = []

    def do(self, fn: Callable[[], Any]) -> None:
        """Register ``fn`` to run on close."""
        self._fns.append(fn)

    def close(self) -> None:
        """Run every registered function, newest first."""
        pending: BaseException | None = None
        for fn in reversed(self._fns):
            try:
                fn()
            except BaseException as exc:
                if pending is not None and exc.__context__ is None:
                    exc.__context__ = pending
                pending = exc
        if pending is not None:
            raise pending

    def __enter__(self) -> Cleanup:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


@dataclass
class Internal:
    """Internal-only values handed to mappers during a call."""

    broker: Any = None
    mappers: list[Any] = field(default_factory=list)
    cleanup: Cleanup = field(default_factory=Cleanup)